"""Recalculation pipeline, template rules and undo history."""

from .history import ChangeLog
from .pipeline import create_empty_state, recalculate, recalculate_state
from .samples import create_sample_field_state, get_sample_field_changes

__all__ = [
    "ChangeLog",
    "create_empty_state",
    "recalculate",
    "recalculate_state",
    "create_sample_field_state",
    "get_sample_field_changes",
]
