"""Static game data: items, recipes, facilities, fixtures, regions and templates."""

from .facilities import FACILITIES, FacilityDefinition, FacilityID, get_facility_definition
from .fixtures import PATH_FIXTURES, PathFixtureID, PathTypeID
from .items import ITEMS, ItemID, is_fluid
from .recipes import RECIPES, Recipe, recipes_for_facility
from .regions import REGION_FIELDS, FieldTemplateID, RegionID
from .templates import FIELD_TEMPLATES, FieldTemplate, resolve_field_template

__all__ = [
    "FACILITIES",
    "FacilityDefinition",
    "FacilityID",
    "get_facility_definition",
    "PATH_FIXTURES",
    "PathFixtureID",
    "PathTypeID",
    "ITEMS",
    "ItemID",
    "is_fluid",
    "RECIPES",
    "Recipe",
    "recipes_for_facility",
    "REGION_FIELDS",
    "FieldTemplateID",
    "RegionID",
    "FIELD_TEMPLATES",
    "FieldTemplate",
    "resolve_field_template",
]
