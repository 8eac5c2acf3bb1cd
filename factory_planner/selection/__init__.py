"""Box selection and bulk edits on selected entities."""

from .operations import (
    create_copy_changes,
    create_delete_changes,
    create_fixture_move_changes,
    create_nudge_changes,
    get_selection_from_box,
)
from .rotation import rotate_selection

__all__ = [
    "create_copy_changes",
    "create_delete_changes",
    "create_fixture_move_changes",
    "create_nudge_changes",
    "get_selection_from_box",
    "rotate_selection",
]
