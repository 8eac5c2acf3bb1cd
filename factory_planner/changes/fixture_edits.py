"""Path edits caused by placing, removing and moving fixtures.

A fixture dropped onto the middle of a path splits it into two paths that
meet at the fixture cell. Removing a fixture merges the paths that met there
back together. Both are expressed as ordinary change lists.
"""

from typing import List, NamedTuple, Optional, Sequence

from ..catalog.fixtures import PATH_FIXTURES, PathTypeID, get_fixture_type_for_path
from ..core.directions import opposite_direction
from ..core.geometry import find_segment_containing_point
from ..core.models import FieldState, Path, PathFixture, Point
from ..simulation.connections import update_fixture_connections
from .types import (
    AddPathChange,
    AddPathFixtureChange,
    MovePathFixtureChange,
    RemovePathChange,
)

NOT_ON_PATH = "not_on_path"
TYPE_MISMATCH = "type_mismatch"
INCOMPATIBLE_SIDES = "incompatible_sides"


class PlacementCheck(NamedTuple):
    is_valid: bool
    segment_index: Optional[int] = None
    error: Optional[str] = None


class ConnectedPath(NamedTuple):
    path: Path
    side_index: int
    side_direction: str


def validate_fixture_placement_on_path(fixture_type: str, position: Point,
                                       path: Path) -> PlacementCheck:
    """Check whether a fixture can be inserted into the interior of a path."""
    definition = PATH_FIXTURES.get(fixture_type)
    if definition is None:
        return PlacementCheck(False, error=INCOMPATIBLE_SIDES)

    segment_index = find_segment_containing_point(position, path.points)
    if segment_index is None:
        return PlacementCheck(False, error=NOT_ON_PATH)

    side_type = definition.sides[0].type if definition.sides else None
    if side_type == "belt" and path.type != PathTypeID.BELT:
        return PlacementCheck(False, error=TYPE_MISMATCH)
    if side_type == "pipe" and path.type != PathTypeID.PIPE:
        return PlacementCheck(False, error=TYPE_MISMATCH)
    if len(definition.sides) < 2:
        return PlacementCheck(False, error=INCOMPATIBLE_SIDES)
    return PlacementCheck(True, segment_index=segment_index)


def split_points(points: Sequence[Point], position: Point,
                 segment_index: int) -> tuple:
    """Points of the two halves of a path cut at ``position``."""
    position = tuple(position)
    before = [tuple(p) for p in points[:segment_index + 1]] + [position]
    after = [position] + [tuple(p) for p in points[segment_index + 1:]]
    return before, after


def split_path_at_fixture(path: Path, fixture_type: str, position: Point,
                          rotation: int, segment_index: int) -> list:
    """Changes that replace a path by two halves around a new fixture."""
    before, after = split_points(path.points, position, segment_index)
    changes = [
        RemovePathChange(path_id=path.id),
        AddPathFixtureChange(fixture_type=fixture_type, position=tuple(position),
                             rotation=rotation),
    ]
    for points in (before, after):
        if len(points) >= 2:
            changes.append(AddPathChange(path_type=path.type, points=points))
    return changes


def find_paths_connected_to_fixture(fixture: PathFixture,
                                    state: FieldState) -> List[ConnectedPath]:
    connected = []
    for index, side in enumerate(fixture.sides):
        if not side.connected_path_id:
            continue
        path = state.find_path(side.connected_path_id)
        if path is not None:
            connected.append(ConnectedPath(path, index, side.direction))
    return connected


def create_path_merge_changes(first: Path, second: Path, fixture: PathFixture) -> list:
    """Join two paths that meet at a fixture cell into one.

    Paths of different types, or that do not both end on the fixture, are
    left alone.
    """
    if first.type != second.type:
        return []
    cell = (fixture.x, fixture.y)
    first_points = [tuple(p) for p in first.points]
    second_points = [tuple(p) for p in second.points]

    merged: List[Point] = []
    if first.end == cell and second.start == cell:
        merged = first_points[:-1] + second_points[1:]
    elif first.start == cell and second.end == cell:
        merged = second_points[:-1] + first_points[1:]
    elif first.end == cell and second.end == cell:
        merged = first_points[:-1] + second_points[::-1][1:]
    elif first.start == cell and second.start == cell:
        merged = first_points[::-1][:-1] + second_points[1:]

    if len(merged) < 2:
        return []
    return [
        RemovePathChange(path_id=first.id),
        RemovePathChange(path_id=second.id),
        AddPathChange(path_type=first.type, points=merged),
    ]


def reconnect_paths_after_fixture_removal(fixture: PathFixture, state: FieldState) -> list:
    """Merge the paths left dangling by removing a fixture.

    Two paths merge directly. With three, the pair sharing an axis merges.
    With four, each opposite pair merges.
    """
    connected = find_paths_connected_to_fixture(fixture, state)
    pairs = []
    if len(connected) == 2:
        pairs.append((connected[0], connected[1]))
    elif len(connected) == 3:
        horizontal = [c for c in connected if c.side_direction in ("left", "right")]
        vertical = [c for c in connected if c.side_direction in ("up", "down")]
        if len(horizontal) == 2:
            pairs.append((horizontal[0], horizontal[1]))
        elif len(vertical) == 2:
            pairs.append((vertical[0], vertical[1]))
    elif len(connected) == 4:
        for first in connected:
            opposite = opposite_direction(first.side_direction)
            second = next((c for c in connected if c.side_direction == opposite), None)
            if second is None:
                continue
            ids = {first.path.id, second.path.id}
            if any({a.path.id, b.path.id} == ids for a, b in pairs):
                continue
            pairs.append((first, second))

    changes = []
    for first, second in pairs:
        if first.path.id == second.path.id:
            continue
        changes.extend(create_path_merge_changes(first.path, second.path, fixture))
    return changes


def generate_fixture_relocation_changes(fixture: PathFixture, new_position: Point,
                                        original_state: FieldState,
                                        intermediate_state: FieldState) -> list:
    """Changes that move a fixture, healing its old paths and splitting a new one.

    Args:
        fixture: Fixture being moved
        new_position: Target cell
        original_state: State before the move
        intermediate_state: State with the old position's paths already merged

    Returns:
        Merge changes, split changes for the path under the new cell, and
        the move itself, in that order
    """
    with_connections = update_fixture_connections(fixture, original_state)
    changes = reconnect_paths_after_fixture_removal(with_connections, original_state)

    behavior = PATH_FIXTURES[fixture.type].behavior_type
    for path in intermediate_state.paths:
        if get_fixture_type_for_path(behavior, path.type) != fixture.type:
            continue
        check = validate_fixture_placement_on_path(fixture.type, new_position, path)
        if check.is_valid:
            split = split_path_at_fixture(path, fixture.type, new_position,
                                          fixture.rotation, check.segment_index)
            changes.extend(c for c in split if not isinstance(c, AddPathFixtureChange))
            break

    changes.append(MovePathFixtureChange(fixture_id=fixture.id, new_position=tuple(new_position)))
    return changes
