"""Cardinal direction helpers on the y-down grid."""

from enum import Enum
from typing import Optional, Sequence, Tuple

Point = Tuple[int, int]


class Direction(str, Enum):
    UP = "up"
    RIGHT = "right"
    DOWN = "down"
    LEFT = "left"


# Clockwise order
_CLOCKWISE = [Direction.UP, Direction.RIGHT, Direction.DOWN, Direction.LEFT]

OPPOSITE = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


def opposite_direction(direction: str) -> Direction:
    return OPPOSITE[Direction(direction)]


def rotate_direction(direction: str, steps: int) -> Direction:
    """Rotate a direction clockwise by 90 degree steps (negative is counter-clockwise)."""
    index = _CLOCKWISE.index(Direction(direction))
    return _CLOCKWISE[(index + steps) % 4]


def direction_between(from_point: Point, to_point: Point) -> Optional[Direction]:
    """Cardinal direction from one point to another.

    Returns None for identical or diagonal point pairs.
    """
    fx, fy = from_point
    tx, ty = to_point
    if fx == tx and fy == ty:
        return None
    if fx == tx:
        return Direction.DOWN if ty > fy else Direction.UP
    if fy == ty:
        return Direction.RIGHT if tx > fx else Direction.LEFT
    return None


def endpoint_direction(points: Sequence[Point], endpoint: str) -> Optional[Direction]:
    """Direction a path faces when leaving through one of its endpoints.

    The start faces from the second point toward the first; the end faces
    from the second-to-last point toward the last.
    """
    if len(points) < 2:
        return None
    if endpoint == "start":
        return direction_between(tuple(points[1]), tuple(points[0]))
    return direction_between(tuple(points[-2]), tuple(points[-1]))
