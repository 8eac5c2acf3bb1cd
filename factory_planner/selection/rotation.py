"""Rotating a selection as one rigid block.

All selected entities turn 90 degrees around the floored centre of their
joint bounding box. Every step is integer arithmetic, so rotating four
times in the same direction restores the original layout.
"""

from typing import Iterable, List, NamedTuple, Optional

from ..changes.types import (
    MoveFacilityChange,
    MovePathFixtureChange,
    RotateFacilityChange,
    RotatePathFixtureChange,
    UpdatePathPointsChange,
)
from ..core.models import Facility, FieldState, Path, PathFixture, Point


class Bounds(NamedTuple):
    """Cell bounds with exclusive maximums."""
    min_x: int
    min_y: int
    max_x: int
    max_y: int


def _entity_bounds(state: FieldState, entity_id: str) -> Optional[Bounds]:
    facility = state.find_facility(entity_id)
    if facility is not None:
        return Bounds(facility.x, facility.y, facility.x + facility.width, facility.y + facility.height)
    fixture = state.find_fixture(entity_id)
    if fixture is not None:
        return Bounds(fixture.x, fixture.y, fixture.x + 1, fixture.y + 1)
    path = state.find_path(entity_id)
    if path is not None and path.points:
        xs = [x for x, _ in path.points]
        ys = [y for _, y in path.points]
        return Bounds(min(xs), min(ys), max(xs) + 1, max(ys) + 1)
    return None


def calculate_selection_bounds(state: FieldState, selected_ids: Iterable[str]) -> Optional[Bounds]:
    """Joint bounding box of the selected entities, or None if none exist."""
    boxes = [b for b in (_entity_bounds(state, i) for i in selected_ids) if b is not None]
    if not boxes:
        return None
    return Bounds(
        min(b.min_x for b in boxes),
        min(b.min_y for b in boxes),
        max(b.max_x for b in boxes),
        max(b.max_y for b in boxes),
    )


def calculate_rotation_center(bounds: Bounds) -> Point:
    return ((bounds.min_x + bounds.max_x) // 2, (bounds.min_y + bounds.max_y) // 2)


def rotate_point_clockwise(point: Point, center: Point) -> Point:
    x, y = point
    cx, cy = center
    return (cx + (y - cy), cy - (x - cx))


def rotate_point_counter_clockwise(point: Point, center: Point) -> Point:
    x, y = point
    cx, cy = center
    return (cx - (y - cy), cy + (x - cx))


def _rotate(point: Point, center: Point, clockwise: bool) -> Point:
    if clockwise:
        return rotate_point_clockwise(point, center)
    return rotate_point_counter_clockwise(point, center)


def _next_rotation(rotation: int, clockwise: bool) -> int:
    return (rotation + (90 if clockwise else 270)) % 360


def rotate_facility(facility: Facility, center: Point, clockwise: bool) -> list:
    """Move and rotate changes that turn a facility around ``center``.

    The new top-left is the smallest x and y among the rotated corners, so
    the footprint stays on the grid and ports keep meeting their paths.
    """
    right = facility.x + facility.width - 1
    bottom = facility.y + facility.height - 1
    corners = [(facility.x, facility.y), (right, facility.y),
               (facility.x, bottom), (right, bottom)]
    rotated = [_rotate(corner, center, clockwise) for corner in corners]
    new_x = min(x for x, _ in rotated)
    new_y = min(y for _, y in rotated)

    changes = []
    if (new_x, new_y) != (facility.x, facility.y):
        changes.append(MoveFacilityChange(facility_id=facility.id, new_position=(new_x, new_y)))
    new_rotation = _next_rotation(facility.rotation, clockwise)
    if new_rotation != facility.rotation:
        changes.append(RotateFacilityChange(facility_id=facility.id, new_rotation=new_rotation))
    return changes


def rotate_path_fixture(fixture: PathFixture, center: Point, clockwise: bool) -> list:
    changes = []
    new_position = _rotate((fixture.x, fixture.y), center, clockwise)
    if new_position != (fixture.x, fixture.y):
        changes.append(MovePathFixtureChange(fixture_id=fixture.id, new_position=new_position))
    new_rotation = _next_rotation(fixture.rotation, clockwise)
    if new_rotation != fixture.rotation:
        changes.append(RotatePathFixtureChange(fixture_id=fixture.id, new_rotation=new_rotation))
    return changes


def rotate_path(path: Path, center: Point, clockwise: bool) -> list:
    points = [_rotate(point, center, clockwise) for point in path.points]
    if points == [tuple(p) for p in path.points]:
        return []
    return [UpdatePathPointsChange(path_id=path.id, points=points)]


def rotate_selection(state: FieldState, selected_ids: Iterable[str], clockwise: bool = True) -> List:
    """Changes that rotate every selected entity around the selection's centre.

    Args:
        state: Field the selection belongs to
        selected_ids: Ids of facilities, fixtures and paths; unknown ids are ignored
        clockwise: Direction of the quarter turn

    Returns:
        Changes in selection order, empty if nothing was selected
    """
    selected_ids = list(dict.fromkeys(selected_ids))
    bounds = calculate_selection_bounds(state, selected_ids)
    if bounds is None:
        return []
    center = calculate_rotation_center(bounds)

    changes = []
    for entity_id in selected_ids:
        facility = state.find_facility(entity_id)
        if facility is not None:
            changes.extend(rotate_facility(facility, center, clockwise))
            continue
        fixture = state.find_fixture(entity_id)
        if fixture is not None:
            changes.extend(rotate_path_fixture(fixture, center, clockwise))
            continue
        path = state.find_path(entity_id)
        if path is not None:
            changes.extend(rotate_path(path, center, clockwise))
    return changes
