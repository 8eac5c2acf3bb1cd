"""User changes: the edit operations a field is built from.

Changes are the only persisted state of a field. They use camelCase keys on
the wire (``facilityID``, ``newPosition``) and snake_case attributes in
Python. Entity targets are parsed into ``EntityRef`` values, so a batch can
point at entities it creates itself.
"""

from typing import Annotated, Any, Iterable, List, Literal, Optional, Tuple, Union

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    InstanceOf,
    PlainSerializer,
    TypeAdapter,
    ValidationError,
    field_validator,
)

from ..catalog.facilities import FacilityID
from ..catalog.fixtures import PathFixtureID, PathTypeID
from ..catalog.items import ItemID
from ..catalog.recipes import RECIPES
from ..core.models import FieldState
from .errors import ChangeError, MalformedChangeError, UnknownChangeError
from .refs import EntityRef, parse_entity_ref

Position = Tuple[int, int]
Rotation = Literal[0, 90, 180, 270]
Endpoint = Literal["start", "end"]

TargetRef = Annotated[
    EntityRef,
    BeforeValidator(parse_entity_ref),
    PlainSerializer(str, return_type=str),
]


class ChangeModel(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True, frozen=True)


class LoadStateChange(ChangeModel):
    """Replace the whole field with an already computed state. In-process only."""
    type: Literal["loadState"] = "loadState"
    field_state: InstanceOf[FieldState] = Field(alias="fieldState")


class MultiChange(ChangeModel):
    """A batch applied as one change; may reference entities it creates."""
    type: Literal["multi"] = "multi"
    changes: List["UserChange"]


class AddFacilityChange(ChangeModel):
    type: Literal["add-facility"] = "add-facility"
    facility_type: FacilityID = Field(alias="facilityType")
    position: Position
    rotation: Rotation = 0


class MoveFacilityChange(ChangeModel):
    type: Literal["move-facility"] = "move-facility"
    facility_id: TargetRef = Field(alias="facilityID")
    new_position: Position = Field(alias="newPosition")


class RotateFacilityChange(ChangeModel):
    type: Literal["rotate-facility"] = "rotate-facility"
    facility_id: TargetRef = Field(alias="facilityID")
    new_rotation: Rotation = Field(alias="newRotation")


class RemoveFacilityChange(ChangeModel):
    type: Literal["remove-facility"] = "remove-facility"
    facility_id: TargetRef = Field(alias="facilityID")


class AddPathChange(ChangeModel):
    type: Literal["add-path"] = "add-path"
    path_type: PathTypeID = Field(alias="pathType")
    points: List[Position] = Field(min_length=2)


class UpdatePathPointsChange(ChangeModel):
    type: Literal["update-path-points"] = "update-path-points"
    path_id: str = Field(alias="pathID")
    points: List[Position] = Field(min_length=2)


class MovePathPointChange(ChangeModel):
    type: Literal["move-path-point"] = "move-path-point"
    path_id: str = Field(alias="pathID")
    point_index: int = Field(alias="pointIndex")
    new_position: Position = Field(alias="newPosition")


class AddPathSegmentChange(ChangeModel):
    type: Literal["add-path-segment"] = "add-path-segment"
    path_id: str = Field(alias="pathID")
    endpoint: Endpoint
    new_point: Position = Field(alias="newPoint")


class RemovePathSegmentChange(ChangeModel):
    type: Literal["remove-path-segment"] = "remove-path-segment"
    path_id: str = Field(alias="pathID")
    endpoint: Endpoint


class RemovePathChange(ChangeModel):
    type: Literal["remove-path"] = "remove-path"
    path_id: str = Field(alias="pathID")


class AddPathFixtureChange(ChangeModel):
    type: Literal["add-path-fixture"] = "add-path-fixture"
    fixture_type: PathFixtureID = Field(alias="fixtureType")
    position: Position
    rotation: Rotation = 0


class MovePathFixtureChange(ChangeModel):
    type: Literal["move-path-fixture"] = "move-path-fixture"
    fixture_id: TargetRef = Field(alias="fixtureID")
    new_position: Position = Field(alias="newPosition")


class RotatePathFixtureChange(ChangeModel):
    type: Literal["rotate-path-fixture"] = "rotate-path-fixture"
    fixture_id: TargetRef = Field(alias="fixtureID")
    new_rotation: Rotation = Field(alias="newRotation")


class RemovePathFixtureChange(ChangeModel):
    type: Literal["remove-path-fixture"] = "remove-path-fixture"
    fixture_id: TargetRef = Field(alias="fixtureID")


class SetPortItemChange(ChangeModel):
    type: Literal["set-port-item"] = "set-port-item"
    facility_id: TargetRef = Field(alias="facilityID")
    port_index: int = Field(alias="portIndex", ge=0)
    item_id: Optional[ItemID] = Field(alias="itemID")


class SetFixtureItemChange(ChangeModel):
    type: Literal["set-fixture-item"] = "set-fixture-item"
    fixture_id: TargetRef = Field(alias="fixtureID")
    item_id: Optional[ItemID] = Field(alias="itemID")


class SetFacilityRecipeChange(ChangeModel):
    type: Literal["set-facility-recipe"] = "set-facility-recipe"
    facility_id: TargetRef = Field(alias="facilityID")
    recipe_id: Optional[str] = Field(alias="recipeID")
    jump_start: bool = Field(default=False, alias="jumpStart")

    @field_validator("recipe_id")
    @classmethod
    def check_recipe(cls, value):
        if value is not None and value not in RECIPES:
            raise ValueError(f"Unknown recipe: {value}")
        return value


_CHANGE_MODELS = (
    LoadStateChange,
    MultiChange,
    AddFacilityChange,
    MoveFacilityChange,
    RotateFacilityChange,
    RemoveFacilityChange,
    AddPathChange,
    UpdatePathPointsChange,
    MovePathPointChange,
    AddPathSegmentChange,
    RemovePathSegmentChange,
    RemovePathChange,
    AddPathFixtureChange,
    MovePathFixtureChange,
    RotatePathFixtureChange,
    RemovePathFixtureChange,
    SetPortItemChange,
    SetFixtureItemChange,
    SetFacilityRecipeChange,
)

UserChange = Annotated[Union[_CHANGE_MODELS], Field(discriminator="type")]

MultiChange.model_rebuild()

CHANGE_TYPES = frozenset(
    model.model_fields["type"].default for model in _CHANGE_MODELS
)

# Change types that can be written to a change list on disk
PERSISTED_CHANGE_TYPES = CHANGE_TYPES - {"loadState"}

_change_adapter = TypeAdapter(UserChange)


def _check_change_types(payload: Any, allowed=CHANGE_TYPES):
    if not isinstance(payload, dict):
        raise MalformedChangeError(f"Change must be an object, got {type(payload).__name__}")
    change_type = payload.get("type")
    if not isinstance(change_type, str) or change_type not in allowed:
        raise UnknownChangeError(change_type)
    if change_type == "multi" and isinstance(payload.get("changes"), list):
        for sub_change in payload["changes"]:
            _check_change_types(sub_change, allowed)


def parse_change(payload: Any, allowed=CHANGE_TYPES):
    """Validate one wire change.

    Raises:
        UnknownChangeError: if the change or a nested one has an unknown type
        MalformedChangeError: if a field is missing or has the wrong type
    """
    _check_change_types(payload, allowed)
    try:
        return _change_adapter.validate_python(payload)
    except ValidationError as exc:
        for error in exc.errors():
            cause = error.get("ctx", {}).get("error")
            if isinstance(cause, ChangeError):
                raise cause from exc
        raise MalformedChangeError(str(exc)) from exc


def parse_changes(payloads: Iterable[Any], allowed=CHANGE_TYPES) -> list:
    return [parse_change(payload, allowed) for payload in payloads]


def dump_change(change) -> dict:
    """Wire form of a change, with camelCase keys."""
    return change.model_dump(mode="json", by_alias=True)
