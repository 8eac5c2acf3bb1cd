"""Change Reducer

Applies a single user change to a field state and returns the new state.
Entities get sequential ids (``facility_1``, ``path_3``) picked by scanning
the existing ones, so replaying the same change list always produces the
same ids.

Invalid changes raise a ``ChangeError``. Changes that are well formed but do nothing
(pinning an item on an input port, trimming a two-point path) return the
state unchanged without raising.
"""

import logging
from dataclasses import replace
from typing import Callable, Dict, Iterable

from ..catalog.facilities import FACILITIES
from ..core.models import (
    FLOW_NONE,
    Facility,
    FieldState,
    Path,
    PathFixture,
    replace_facility,
    replace_fixture,
    replace_path,
)
from ..simulation.connections import (
    initialize_facility_ports,
    initialize_fixture_sides,
    preserve_port_properties,
    update_fixture_connections,
)
from ..catalog.recipes import RECIPES
from .errors import MalformedChangeError, UnknownChangeError, UnknownEntityError
from .fixture_edits import (
    reconnect_paths_after_fixture_removal,
    split_points,
    validate_fixture_placement_on_path,
)
from .refs import RefTable, require_literal, resolve_change
from .types import (
    AddFacilityChange,
    AddPathChange,
    AddPathFixtureChange,
    AddPathSegmentChange,
    LoadStateChange,
    MovePathFixtureChange,
    MoveFacilityChange,
    MovePathPointChange,
    MultiChange,
    RemoveFacilityChange,
    RemovePathChange,
    RemovePathFixtureChange,
    RemovePathSegmentChange,
    RotateFacilityChange,
    RotatePathFixtureChange,
    SetFacilityRecipeChange,
    SetFixtureItemChange,
    SetPortItemChange,
    UpdatePathPointsChange,
)

logger = logging.getLogger(__name__)


def generate_unique_id(prefix: str, existing_ids: Iterable[str]) -> str:
    """Smallest ``<prefix><n>`` (n >= 1) not already taken."""
    taken = set(existing_ids)
    counter = 1
    while f"{prefix}{counter}" in taken:
        counter += 1
    return f"{prefix}{counter}"


def _rotated_size(definition, rotation: int):
    if rotation in (90, 270):
        return definition.height, definition.width
    return definition.width, definition.height


def _get_facility(state: FieldState, ref) -> Facility:
    facility_id = require_literal(ref)
    facility = state.find_facility(facility_id)
    if facility is None:
        raise UnknownEntityError("facility", facility_id)
    return facility


def _get_path(state: FieldState, path_id: str) -> Path:
    path = state.find_path(path_id)
    if path is None:
        raise UnknownEntityError("path", path_id)
    return path


def _get_fixture(state: FieldState, ref) -> PathFixture:
    fixture_id = require_literal(ref)
    fixture = state.find_fixture(fixture_id)
    if fixture is None:
        raise UnknownEntityError("fixture", fixture_id)
    return fixture


def _reset_path(path: Path, points) -> Path:
    return replace(path, points=[tuple(p) for p in points], flows=[], flow_direction=FLOW_NONE)


def _check_points(points):
    if len(points) < 2:
        raise MalformedChangeError(f"A path needs at least 2 points, got {len(points)}")


def _new_path(state: FieldState, path_type: str, points, taken=None) -> Path:
    path_id = generate_unique_id("path_", taken if taken is not None else
                                 (p.id for p in state.paths))
    return Path(path_id, path_type, [tuple(p) for p in points])


def apply_load_state(state: FieldState, change: LoadStateChange) -> FieldState:
    return change.field_state


def apply_add_facility(state: FieldState, change: AddFacilityChange) -> FieldState:
    definition = FACILITIES[change.facility_type]
    width, height = _rotated_size(definition, change.rotation)
    facility = Facility(
        id=generate_unique_id("facility_", (f.id for f in state.facilities)),
        type=change.facility_type,
        x=change.position[0],
        y=change.position[1],
        rotation=change.rotation,
        width=width,
        height=height,
    )
    facility = replace(facility, ports=initialize_facility_ports(facility))
    return replace(state, facilities=state.facilities + [facility])


def apply_move_facility(state: FieldState, change: MoveFacilityChange) -> FieldState:
    facility = _get_facility(state, change.facility_id)
    moved = replace(
        facility,
        x=change.new_position[0],
        y=change.new_position[1],
        ports=[replace(port, connected_path_id=None, flows=[]) for port in facility.ports],
        is_powered=False,
        input_flows=[],
        output_flows=[],
        actual_recipe=None,
    )
    return replace_facility(state, moved)


def apply_rotate_facility(state: FieldState, change: RotateFacilityChange) -> FieldState:
    facility = _get_facility(state, change.facility_id)
    width, height = _rotated_size(FACILITIES[facility.type], change.new_rotation)
    rotated = replace(
        facility,
        rotation=change.new_rotation,
        width=width,
        height=height,
        is_powered=False,
        input_flows=[],
        output_flows=[],
        actual_recipe=None,
    )
    ports = preserve_port_properties(facility.ports, initialize_facility_ports(rotated))
    return replace_facility(state, replace(rotated, ports=ports))


def apply_remove_facility(state: FieldState, change: RemoveFacilityChange) -> FieldState:
    facility = _get_facility(state, change.facility_id)
    return replace(state, facilities=[f for f in state.facilities if f.id != facility.id])


def apply_add_path(state: FieldState, change: AddPathChange) -> FieldState:
    _check_points(change.points)
    return replace(state, paths=state.paths + [_new_path(state, change.path_type, change.points)])


def apply_update_path_points(state: FieldState, change: UpdatePathPointsChange) -> FieldState:
    _check_points(change.points)
    path = _get_path(state, change.path_id)
    return replace_path(state, _reset_path(path, change.points))


def apply_move_path_point(state: FieldState, change: MovePathPointChange) -> FieldState:
    path = _get_path(state, change.path_id)
    points = list(path.points)
    if 0 <= change.point_index < len(points):
        points[change.point_index] = change.new_position
    return replace_path(state, _reset_path(path, points))


def apply_add_path_segment(state: FieldState, change: AddPathSegmentChange) -> FieldState:
    path = _get_path(state, change.path_id)
    if change.endpoint == "start":
        points = [change.new_point] + list(path.points)
    else:
        points = list(path.points) + [change.new_point]
    return replace_path(state, _reset_path(path, points))


def apply_remove_path_segment(state: FieldState, change: RemovePathSegmentChange) -> FieldState:
    path = _get_path(state, change.path_id)
    points = list(path.points)
    if len(points) > 2:
        points = points[1:] if change.endpoint == "start" else points[:-1]
    return replace_path(state, _reset_path(path, points))


def apply_remove_path(state: FieldState, change: RemovePathChange) -> FieldState:
    path = _get_path(state, change.path_id)
    return replace(state, paths=[p for p in state.paths if p.id != path.id])


def apply_add_path_fixture(state: FieldState, change: AddPathFixtureChange) -> FieldState:
    """Add a fixture, splitting the first path it lands inside.

    Only paths that existed before the change are considered, and at most
    one is split.
    """
    fixture = PathFixture(
        id=generate_unique_id("fixture_", (f.id for f in state.path_fixtures)),
        type=change.fixture_type,
        x=change.position[0],
        y=change.position[1],
        rotation=change.rotation,
    )
    fixture = replace(fixture, sides=initialize_fixture_sides(fixture))
    updated = replace(state, path_fixtures=state.path_fixtures + [fixture])

    for path in state.paths:
        check = validate_fixture_placement_on_path(change.fixture_type, change.position, path)
        if not check.is_valid:
            continue
        before, after = split_points(path.points, change.position, check.segment_index)
        paths = [p for p in updated.paths if p.id != path.id]
        taken = [p.id for p in paths]
        for points in (before, after):
            if len(points) >= 2:
                half = _new_path(updated, path.type, points, taken)
                taken.append(half.id)
                paths.append(half)
        updated = replace(updated, paths=paths)
        break
    return updated


def apply_move_path_fixture(state: FieldState, change: MovePathFixtureChange) -> FieldState:
    fixture = _get_fixture(state, change.fixture_id)
    moved = replace(
        fixture,
        x=change.new_position[0],
        y=change.new_position[1],
        sides=[replace(side, connected_path_id=None, flows=[]) for side in fixture.sides],
    )
    return replace_fixture(state, moved)


def apply_rotate_path_fixture(state: FieldState, change: RotatePathFixtureChange) -> FieldState:
    fixture = replace(_get_fixture(state, change.fixture_id), rotation=change.new_rotation)
    return replace_fixture(state, replace(fixture, sides=initialize_fixture_sides(fixture)))


def apply_remove_path_fixture(state: FieldState, change: RemovePathFixtureChange) -> FieldState:
    """Remove a fixture and merge the paths that met at it.

    Connections are resolved here because removal runs before the pipeline
    computes them.
    """
    fixture = _get_fixture(state, change.fixture_id)
    with_connections = update_fixture_connections(fixture, state)
    updated = replace(state, path_fixtures=[f for f in state.path_fixtures if f.id != fixture.id])
    for reconnect in reconnect_paths_after_fixture_removal(with_connections, state):
        updated = apply_change(updated, reconnect)
    return updated


def apply_set_port_item(state: FieldState, change: SetPortItemChange) -> FieldState:
    facility = _get_facility(state, change.facility_id)
    if change.port_index >= len(facility.ports):
        raise MalformedChangeError(
            f"{facility.id} has no port {change.port_index} ({len(facility.ports)} ports)")
    ports = [
        replace(port, set_item=change.item_id)
        if index == change.port_index and port.sub_type == "output" else port
        for index, port in enumerate(facility.ports)
    ]
    return replace_facility(state, replace(facility, ports=ports))


def apply_set_fixture_item(state: FieldState, change: SetFixtureItemChange) -> FieldState:
    fixture = _get_fixture(state, change.fixture_id)
    return replace_fixture(state, replace(fixture, set_item=change.item_id))


def apply_set_facility_recipe(state: FieldState, change: SetFacilityRecipeChange) -> FieldState:
    facility = _get_facility(state, change.facility_id)
    recipe = RECIPES.get(change.recipe_id) if change.recipe_id is not None else None
    if recipe is not None and recipe.facility_id != facility.type:
        raise MalformedChangeError(
            f"Recipe {change.recipe_id} does not run on {facility.id}")
    return replace_facility(state, replace(facility, set_recipe=change.recipe_id,
                                           jump_start_recipe=change.jump_start))


def apply_multi(state: FieldState, change: MultiChange) -> FieldState:
    """Apply a batch in order, resolving ``@ref`` targets as entities appear."""
    table = RefTable()
    for sub_change in change.changes:
        facility_count = len(state.facilities)
        fixture_count = len(state.path_fixtures)
        state = apply_change(state, resolve_change(sub_change, table))
        for facility in state.facilities[facility_count:]:
            table.register("facility", facility.id)
        for fixture in state.path_fixtures[fixture_count:]:
            table.register("fixture", fixture.id)
    return state


_APPLIERS: Dict[type, Callable] = {
    LoadStateChange: apply_load_state,
    MultiChange: apply_multi,
    AddFacilityChange: apply_add_facility,
    MoveFacilityChange: apply_move_facility,
    RotateFacilityChange: apply_rotate_facility,
    RemoveFacilityChange: apply_remove_facility,
    AddPathChange: apply_add_path,
    UpdatePathPointsChange: apply_update_path_points,
    MovePathPointChange: apply_move_path_point,
    AddPathSegmentChange: apply_add_path_segment,
    RemovePathSegmentChange: apply_remove_path_segment,
    RemovePathChange: apply_remove_path,
    AddPathFixtureChange: apply_add_path_fixture,
    MovePathFixtureChange: apply_move_path_fixture,
    RotatePathFixtureChange: apply_rotate_path_fixture,
    RemovePathFixtureChange: apply_remove_path_fixture,
    SetPortItemChange: apply_set_port_item,
    SetFixtureItemChange: apply_set_fixture_item,
    SetFacilityRecipeChange: apply_set_facility_recipe,
}


def apply_change(state: FieldState, change) -> FieldState:
    """Apply one parsed change.

    Raises:
        UnknownChangeError: if ``change`` is not a known change model
        ChangeError: if the change targets a missing entity or an
            unresolved reference
    """
    applier = _APPLIERS.get(type(change))
    if applier is None:
        raise UnknownChangeError(getattr(change, "type", type(change).__name__))
    logger.debug("Applying %s", change.type)
    return applier(state, change)
