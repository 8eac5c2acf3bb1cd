"""Field state model, grid directions and placement geometry."""

from .directions import Direction, opposite_direction, rotate_direction
from .models import (
    DebugInfo,
    Facility,
    FieldState,
    FixtureSide,
    ItemFlow,
    Path,
    PathFixture,
    Port,
)

__all__ = [
    "Direction",
    "opposite_direction",
    "rotate_direction",
    "DebugInfo",
    "Facility",
    "FieldState",
    "FixtureSide",
    "ItemFlow",
    "Path",
    "PathFixture",
    "Port",
]
