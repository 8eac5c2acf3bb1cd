"""JSON-ready dumps of computed field states, with camelCase keys."""

from dataclasses import fields, is_dataclass
from enum import Enum
from typing import Any

from ..catalog.templates import FieldTemplate
from ..core.models import FieldState
from .envelopes import FieldTemplateModel

_KEY_OVERRIDES = {
    "connected_path_id": "connectedPathID",
    "facility_id": "facilityID",
    "fixture_id": "fixtureID",
}


def to_camel(name: str) -> str:
    if name in _KEY_OVERRIDES:
        return _KEY_OVERRIDES[name]
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def to_jsonable(value: Any) -> Any:
    """Recursively convert dataclasses, enums and tuples into plain JSON values."""
    if isinstance(value, FieldTemplate):
        return FieldTemplateModel.from_template(value).model_dump(
            mode="json", by_alias=True, exclude_none=True)
    if isinstance(value, Enum):
        return value.value
    if is_dataclass(value) and not isinstance(value, type):
        return {to_camel(f.name): to_jsonable(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, dict):
        return {str(k): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    return value


def field_state_to_dict(state: FieldState) -> dict:
    return to_jsonable(state)
