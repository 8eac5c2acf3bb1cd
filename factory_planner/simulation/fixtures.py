"""Per-side flow behavior of path fixtures.

Splitters, convergers and control ports have fixed input and output sides.
Bridges do not: each axis of a bridge works out its direction from what the
paths on that axis ultimately connect to.
"""

from dataclasses import replace
from typing import Dict, List, NamedTuple, Optional, Set

from ..catalog.fixtures import PATH_FIXTURES, FixtureBehaviorType, PathTypeID
from ..catalog.items import is_fluid
from ..core.directions import opposite_direction
from ..core.models import (
    END_TO_START,
    START_TO_END,
    FieldState,
    FixtureConnectionRef,
    FixtureSide,
    ItemFlow,
    Path,
    PathFixture,
)
from .connections import get_connected_entity
from .flows import merge_item_flows


class FixtureFlows(NamedTuple):
    inputs: List[ItemFlow]
    outputs: List[ItemFlow]


def _path_for_side(side: Optional[FixtureSide], state: FieldState) -> Optional[Path]:
    if side is None or not side.connected_path_id:
        return None
    return state.find_path(side.connected_path_id)


def propagate_across_bridges(path: Path, from_endpoint: str, state: FieldState,
                             visited: Optional[Set[str]] = None) -> Optional[str]:
    """Follow a chain of bridges to find the sub-type at the far end.

    Returns:
        'input', 'output', or None if the chain dead-ends or loops
    """
    visited = set() if visited is None else visited
    if path.id in visited:
        return None
    visited.add(path.id)

    connected = get_connected_entity(path, from_endpoint, state)
    if connected is None:
        return None
    entity, connector, _ = connected
    if not isinstance(entity, PathFixture):
        return connector.sub_type

    if PATH_FIXTURES[entity.type].behavior_type != FixtureBehaviorType.BRIDGE:
        return connector.sub_type

    far_direction = opposite_direction(connector.direction)
    far_side = next((s for s in entity.sides if s.direction == far_direction), None)
    far_path = _path_for_side(far_side, state)
    if far_path is None:
        return None

    cell = (entity.x, entity.y)
    starts_here = far_path.start == cell
    ends_here = far_path.end == cell
    if starts_here and not ends_here:
        return propagate_across_bridges(far_path, "end", state, visited)
    if ends_here and not starts_here:
        return propagate_across_bridges(far_path, "start", state, visited)
    return None


def get_path_other_end_connection_type(path: Path, cell, state: FieldState) -> Optional[str]:
    """Sub-type of whatever the path's end away from ``cell`` connects to."""
    starts_here = path.start == tuple(cell)
    ends_here = path.end == tuple(cell)
    if starts_here and not ends_here:
        return propagate_across_bridges(path, "end", state)
    if ends_here and not starts_here:
        return propagate_across_bridges(path, "start", state)
    return None


def _bridge_axis_side(side: FixtureSide, fixture: PathFixture,
                      sides: Dict[str, FixtureSide], state: FieldState) -> FixtureSide:
    """Role and flows of one bridge side, decided by its own axis only."""
    far_direction = opposite_direction(side.direction)
    near_path = _path_for_side(sides.get(side.direction), state)
    far_path = _path_for_side(sides.get(far_direction), state)
    sub_type = "output"
    flows: List[ItemFlow] = []

    if near_path is not None and far_path is not None:
        cell = (fixture.x, fixture.y)
        near_is_input = get_path_other_end_connection_type(near_path, cell, state) == "output"
        far_is_input = get_path_other_end_connection_type(far_path, cell, state) == "output"
        if far_is_input:
            flows = list(far_path.flows)
        elif near_is_input:
            sub_type = "input"

    return replace(side, sub_type=sub_type, flows=flows)


def calculate_bridge_flows(fixture: PathFixture, state: FieldState) -> FixtureFlows:
    """Pass-through totals for both bridge axes combined."""
    sides = {side.direction: side for side in fixture.sides}
    cell = (fixture.x, fixture.y)
    feeds = []
    for first, second in (("left", "right"), ("up", "down")):
        first_path = _path_for_side(sides.get(first), state)
        second_path = _path_for_side(sides.get(second), state)
        if first_path is None or second_path is None:
            continue
        first_type = get_path_other_end_connection_type(first_path, cell, state)
        second_type = get_path_other_end_connection_type(second_path, cell, state)
        if first_type == "output" and second_type == "input":
            feeds.append(first_path.flows)
        elif first_type == "input" and second_type == "output":
            feeds.append(second_path.flows)
    inputs = merge_item_flows(feeds)
    return FixtureFlows(inputs, list(inputs))


def calculate_splitter_flows(fixture: PathFixture, state: FieldState) -> FixtureFlows:
    """Split the input evenly across every connected output side."""
    inputs: List[ItemFlow] = []
    for side in fixture.sides:
        if side.sub_type == "input":
            path = _path_for_side(side, state)
            if path is not None:
                inputs.extend(path.flows)

    outputs_connected = [s for s in fixture.sides
                         if s.sub_type == "output" and s.connected_path_id]
    if not outputs_connected:
        return FixtureFlows(inputs, [])
    share = len(outputs_connected)
    outputs = [ItemFlow(f.item, f.sink_rate / share, f.sink_rate / share) for f in inputs]
    return FixtureFlows(inputs, outputs)


def calculate_converger_flows(fixture: PathFixture, state: FieldState) -> FixtureFlows:
    feeds = []
    for side in fixture.sides:
        if side.sub_type == "input":
            path = _path_for_side(side, state)
            if path is not None:
                feeds.append(path.flows)
    inputs = merge_item_flows(feeds)
    return FixtureFlows(inputs, list(inputs))


def calculate_control_port_flows(fixture: PathFixture, state: FieldState) -> FixtureFlows:
    """Pass through only the pinned item, and only if the path type can carry it."""
    feeds = []
    for path in state.paths:
        arrives_at_end = (isinstance(path.end_connected_to, FixtureConnectionRef)
                          and path.end_connected_to.fixture_id == fixture.id
                          and path.flow_direction == START_TO_END)
        arrives_at_start = (isinstance(path.start_connected_to, FixtureConnectionRef)
                            and path.start_connected_to.fixture_id == fixture.id
                            and path.flow_direction == END_TO_START)
        if arrives_at_end or arrives_at_start:
            feeds.append(path.flows)
    inputs = merge_item_flows(feeds)

    outputs: List[ItemFlow] = []
    if fixture.set_item:
        pipe_fixture = PATH_FIXTURES[fixture.type].path_type == PathTypeID.PIPE
        if pipe_fixture == is_fluid(fixture.set_item):
            outputs = [flow for flow in inputs if flow.item == fixture.set_item]
    return FixtureFlows(inputs, outputs)


_BEHAVIORS = {
    FixtureBehaviorType.BRIDGE: calculate_bridge_flows,
    FixtureBehaviorType.SPLITTER: calculate_splitter_flows,
    FixtureBehaviorType.CONVERGER: calculate_converger_flows,
    FixtureBehaviorType.CONTROL_PORT: calculate_control_port_flows,
}


def calculate_fixture_flows(fixture: PathFixture, state: FieldState) -> PathFixture:
    """Recompute the flows leaving each side of a fixture."""
    definition = PATH_FIXTURES[fixture.type]
    if definition.behavior_type == FixtureBehaviorType.BRIDGE:
        sides = {side.direction: side for side in fixture.sides}
        return replace(fixture, sides=[
            _bridge_axis_side(side, fixture, sides, state) for side in fixture.sides
        ])

    result = _BEHAVIORS[definition.behavior_type](fixture, state)
    updated = []
    for side in fixture.sides:
        if side.sub_type == "input":
            updated.append(replace(side, flows=[]))
        else:
            updated.append(replace(side, flows=list(result.outputs) if side.connected_path_id else []))
    return replace(fixture, sides=updated)
