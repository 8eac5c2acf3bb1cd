"""Versioned JSON documents and a directory-backed project store."""

from .envelopes import (
    EnvelopeError,
    deserialize_changes,
    deserialize_copy_data,
    deserialize_project,
    serialize_changes,
    serialize_project,
)
from .export import field_state_to_dict
from .store import ProjectStore

__all__ = [
    "EnvelopeError",
    "deserialize_changes",
    "deserialize_copy_data",
    "deserialize_project",
    "serialize_changes",
    "serialize_project",
    "field_state_to_dict",
    "ProjectStore",
]
