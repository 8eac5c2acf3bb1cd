"""Selection and bulk edit operations.

Each operation turns a set of selected ids into plain user changes, so
deleting, nudging and copying go through the same reducer and undo log as
any other edit.
"""

from typing import Iterable, List, Optional, Set, Tuple

from ..changes.fixture_edits import (
    generate_fixture_relocation_changes,
    reconnect_paths_after_fixture_removal,
    validate_fixture_placement_on_path,
)
from ..changes.refs import PendingRef
from ..changes.types import (
    AddFacilityChange,
    AddPathChange,
    AddPathFixtureChange,
    MoveFacilityChange,
    MovePathFixtureChange,
    RemoveFacilityChange,
    RemovePathChange,
    RemovePathFixtureChange,
    SetFacilityRecipeChange,
    SetFixtureItemChange,
    SetPortItemChange,
    UpdatePathPointsChange,
)
from ..core.models import FieldState, Point
from ..field.pipeline import recalculate_state
from .rotation import Bounds


def get_box_bounds(start: Point, end: Point) -> Bounds:
    """Normalize a drag box given by two opposite corners."""
    return Bounds(min(start[0], end[0]), min(start[1], end[1]),
                  max(start[0], end[0]), max(start[1], end[1]))


def boxes_overlap(a: Bounds, b: Bounds) -> bool:
    """Strict overlap; boxes that only share an edge do not overlap."""
    return a.min_x < b.max_x and a.max_x > b.min_x and a.min_y < b.max_y and a.max_y > b.min_y


def get_selection_from_box(start: Point, end: Point, state: FieldState) -> Set[str]:
    """Ids of every facility, fixture and path the drag box touches."""
    box = get_box_bounds(start, end)
    selection = set()

    for facility in state.facilities:
        footprint = Bounds(facility.x, facility.y,
                           facility.x + facility.width, facility.y + facility.height)
        if boxes_overlap(box, footprint):
            selection.add(facility.id)

    for fixture in state.path_fixtures:
        if boxes_overlap(box, Bounds(fixture.x, fixture.y, fixture.x + 1, fixture.y + 1)):
            selection.add(fixture.id)

    for path in state.paths:
        for (x1, y1), (x2, y2) in zip(path.points, path.points[1:]):
            segment = Bounds(min(x1, x2), min(y1, y2), max(x1, x2) + 1, max(y1, y2) + 1)
            if boxes_overlap(box, segment):
                selection.add(path.id)
                break

    return selection


def _ordered(selected_ids: Iterable[str]) -> List[str]:
    return list(dict.fromkeys(selected_ids))


def create_delete_changes(selected_ids: Iterable[str], state: FieldState) -> list:
    changes = []
    for entity_id in _ordered(selected_ids):
        if state.find_facility(entity_id) is not None:
            changes.append(RemoveFacilityChange(facility_id=entity_id))
        elif state.find_path(entity_id) is not None:
            changes.append(RemovePathChange(path_id=entity_id))
        elif state.find_fixture(entity_id) is not None:
            changes.append(RemovePathFixtureChange(fixture_id=entity_id))
    return changes


def create_nudge_changes(selected_ids: Iterable[str], state: FieldState, dx: int, dy: int) -> list:
    """Changes that shift every selected entity by (dx, dy) cells."""
    changes = []
    for entity_id in _ordered(selected_ids):
        facility = state.find_facility(entity_id)
        if facility is not None:
            changes.append(MoveFacilityChange(facility_id=entity_id,
                                              new_position=(facility.x + dx, facility.y + dy)))
            continue
        fixture = state.find_fixture(entity_id)
        if fixture is not None:
            changes.append(MovePathFixtureChange(fixture_id=entity_id,
                                                 new_position=(fixture.x + dx, fixture.y + dy)))
            continue
        path = state.find_path(entity_id)
        if path is not None:
            changes.append(UpdatePathPointsChange(
                path_id=entity_id, points=[(x + dx, y + dy) for x, y in path.points]))
    return changes


def create_copy_changes(selected_ids: Iterable[str], state: FieldState,
                        offset: Tuple[int, int] = (0, 0)) -> list:
    """Changes that recreate the selection, shifted by ``offset``.

    Facilities are added first, then paths, then fixtures, so fixtures land
    on the copied paths. Settings are applied last and point at the new
    entities with pending references (``@ref:facility:0`` is the first
    facility the batch adds), which keeps the result independent of which
    ids the target field hands out. Wrap the result in a ``multi`` change
    before applying it.

    Args:
        selected_ids: Ids of the entities to copy
        state: Field holding the originals
        offset: Cell offset (dx, dy) applied to every copy

    Returns:
        List of changes, empty if nothing in the selection exists
    """
    dx, dy = offset
    selected_ids = _ordered(selected_ids)
    facilities = [f for f in (state.find_facility(i) for i in selected_ids) if f is not None]
    paths = [p for p in (state.find_path(i) for i in selected_ids) if p is not None]
    fixtures = [f for f in (state.find_fixture(i) for i in selected_ids) if f is not None]

    changes = []
    for facility in facilities:
        changes.append(AddFacilityChange(facility_type=facility.type,
                                         position=(facility.x + dx, facility.y + dy),
                                         rotation=facility.rotation))
    for path in paths:
        changes.append(AddPathChange(path_type=path.type,
                                     points=[(x + dx, y + dy) for x, y in path.points]))
    for fixture in fixtures:
        changes.append(AddPathFixtureChange(fixture_type=fixture.type,
                                            position=(fixture.x + dx, fixture.y + dy),
                                            rotation=fixture.rotation))

    for index, facility in enumerate(facilities):
        ref = PendingRef("facility", index)
        for port_index, port in enumerate(facility.ports):
            if port.set_item is not None:
                changes.append(SetPortItemChange(facility_id=ref, port_index=port_index,
                                                 item_id=port.set_item))
        if facility.set_recipe is not None:
            changes.append(SetFacilityRecipeChange(facility_id=ref, recipe_id=facility.set_recipe,
                                                   jump_start=facility.jump_start_recipe))
    for index, fixture in enumerate(fixtures):
        if fixture.set_item is not None:
            changes.append(SetFixtureItemChange(fixture_id=PendingRef("fixture", index),
                                                item_id=fixture.set_item))
    return changes


def _follow_fixture(points: List[Point], old: Point, new: Point) -> Optional[List[Point]]:
    """Path points with the end on ``old`` moved to ``new``, if it stays axis aligned."""
    points = [tuple(p) for p in points]
    if points[0] == old:
        neighbour, index = points[1], 0
    elif points[-1] == old:
        neighbour, index = points[-2], len(points) - 1
    else:
        return None
    if neighbour[0] != new[0] and neighbour[1] != new[1]:
        return None
    points[index] = new
    return points


def create_fixture_move_changes(fixture_id: str, new_position: Point, state: FieldState) -> list:
    """Changes that drag a fixture to another cell.

    Dropped onto a path it is not attached to, the fixture leaves its old
    paths merged behind it and splits the new one. Otherwise it slides along
    its own paths, whose ends follow it where they stay axis aligned.
    """
    fixture = state.find_fixture(fixture_id)
    if fixture is None:
        return []
    new_position = tuple(new_position)
    connected_ids = [side.connected_path_id for side in fixture.sides if side.connected_path_id]

    target = next((
        path for path in state.paths
        if path.id not in connected_ids
        and validate_fixture_placement_on_path(fixture.type, new_position, path).is_valid
    ), None)
    if target is not None:
        merged = recalculate_state(state, reconnect_paths_after_fixture_removal(fixture, state))
        return generate_fixture_relocation_changes(fixture, new_position, state, merged)

    old_position = (fixture.x, fixture.y)
    updates = []
    for path_id in connected_ids:
        path = state.find_path(path_id)
        points = _follow_fixture(path.points, old_position, new_position) if path else None
        if points is None:
            updates = []
            break
        updates.append(UpdatePathPointsChange(path_id=path_id, points=points))
    return [MovePathFixtureChange(fixture_id=fixture_id, new_position=new_position)] + updates
