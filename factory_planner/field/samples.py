"""Starting change lists: a template's initial facility and a demo field."""

from ..catalog.facilities import FACILITIES, FacilityID
from ..catalog.fixtures import PathTypeID
from ..catalog.items import ItemID
from ..catalog.templates import FieldTemplateID, TemplateRef, resolve_field_template
from ..changes.types import AddFacilityChange, AddPathChange, SetPortItemChange
from ..core.models import FieldState
from .pipeline import recalculate

SAMPLE_TEMPLATE = FieldTemplateID.WULING_MAIN


def create_initial_template_changes(template: TemplateRef) -> list:
    """Place the template's core facility, if it has one, in the middle of the field."""
    resolved = resolve_field_template(template)
    if resolved.initial_facility_type is None:
        return []
    definition = FACILITIES[resolved.initial_facility_type]
    x = max(0, (resolved.width - definition.width) // 2)
    y = max(0, (resolved.height - definition.height) // 2)
    return [AddFacilityChange(facility_type=resolved.initial_facility_type, position=(x, y))]


def _belt(*points):
    return AddPathChange(path_type=PathTypeID.BELT, points=list(points))


def get_sample_field_changes() -> list:
    """A small refining and packaging line fed from the PAC."""
    return [
        AddFacilityChange(facility_type=FacilityID.PROTOCOL_AUTOMATION_CORE_PAC, position=(30, 30)),
        SetPortItemChange(facility_id="facility_1", port_index=14, item_id=ItemID.AMETHYST_ORE),
        SetPortItemChange(facility_id="facility_1", port_index=15, item_id=ItemID.ORIGINIUM_ORE),
        AddFacilityChange(facility_type=FacilityID.ELECTRIC_PYLON, position=(10, 25)),
        AddFacilityChange(facility_type=FacilityID.ELECTRIC_PYLON, position=(10, 5)),
        AddFacilityChange(facility_type=FacilityID.REFINING_UNIT, position=(13, 26)),
        AddFacilityChange(facility_type=FacilityID.FITTING_UNIT, position=(13, 19)),
        AddFacilityChange(facility_type=FacilityID.SHREDDING_UNIT, position=(6, 30)),
        AddFacilityChange(facility_type=FacilityID.PACKAGING_UNIT, position=(10, 10)),
        _belt((32, 30), (32, 8), (10, 8), (10, 10)),
        _belt((30, 34), (8, 34), (8, 32)),
        _belt((8, 30), (8, 15), (10, 15), (10, 13)),
        _belt((30, 31), (14, 31), (14, 28)),
        _belt((14, 26), (14, 21)),
        _belt((14, 19), (14, 13)),
    ]


def create_sample_field_state() -> FieldState:
    return recalculate(SAMPLE_TEMPLATE, get_sample_field_changes())
