"""Connection Resolver

Works out which path endpoints touch which facility ports and fixture sides,
and classifies each path's static flow direction from the roles of whatever
sits at its two ends.
"""

from dataclasses import replace
from typing import List, Optional, Tuple, Union

from ..catalog.facilities import FACILITIES, define_side_ports
from ..catalog.fixtures import PATH_FIXTURES, FixtureBehaviorType
from ..core.directions import endpoint_direction, opposite_direction, rotate_direction
from ..core.models import (
    END_TO_START,
    FLOW_NONE,
    START_TO_END,
    Facility,
    FacilityConnectionRef,
    FieldState,
    FixtureConnectionRef,
    FixtureSide,
    Path,
    PathFixture,
    Port,
    set_flags,
)

PortMatch = Tuple[int, Port]
ConnectedEntity = Union[Tuple[Facility, Port, int], Tuple[PathFixture, FixtureSide, int]]


def find_port_at_position(facility: Facility, x: int, y: int,
                          direction: str) -> Optional[PortMatch]:
    """First port of the facility at absolute cell (x, y) facing ``direction``."""
    for index, port in enumerate(facility.ports):
        if facility.port_position(port) == (x, y) and port.direction == direction:
            return index, port
    return None


def find_fixture_side_at_position(fixture: PathFixture, x: int, y: int,
                                  direction: str) -> Optional[Tuple[int, FixtureSide]]:
    if (fixture.x, fixture.y) != (x, y):
        return None
    for index, side in enumerate(fixture.sides):
        if side.direction == direction:
            return index, side
    return None


def get_connected_entity(path: Path, endpoint: str,
                         state: FieldState) -> Optional[ConnectedEntity]:
    """Resolve a path endpoint reference to (entity, port or side, index)."""
    ref = path.start_connected_to if endpoint == "start" else path.end_connected_to
    if ref is None:
        return None
    if isinstance(ref, FacilityConnectionRef):
        facility = state.find_facility(ref.facility_id)
        if facility is None or ref.port_index >= len(facility.ports):
            return None
        return facility, facility.ports[ref.port_index], ref.port_index
    fixture = state.find_fixture(ref.fixture_id)
    if fixture is None or ref.side_index >= len(fixture.sides):
        return None
    return fixture, fixture.sides[ref.side_index], ref.side_index


def preserve_port_properties(old_ports: List[Port], new_ports: List[Port]) -> List[Port]:
    """Carry user-pinned items over to freshly built ports, matched by index."""
    if not old_ports:
        return new_ports
    result = []
    for index, port in enumerate(new_ports):
        if index < len(old_ports) and old_ports[index].set_item is not None:
            port = replace(port, set_item=old_ports[index].set_item)
        result.append(port)
    return result


def _rotate_offset(x: int, y: int, direction: str, rotation: int,
                   width: int, height: int) -> Tuple[int, int, str]:
    """Rotate a port offset clockwise in 90 degree steps within the footprint.

    Args:
        x, y: Offset within the unrotated footprint
        direction: Port direction before rotation
        rotation: Facility rotation in degrees
        width, height: Unrotated footprint size
    """
    current_width, current_height = width, height
    for _ in range((rotation // 90) % 4):
        x, y = current_height - 1 - y, x
        direction = rotate_direction(direction, 1)
        current_width, current_height = current_height, current_width
    return x, y, direction


def initialize_facility_ports(facility: Facility) -> List[Port]:
    """Build the port list for a facility from its catalog entry and rotation.

    Port order is fixed: belt inputs, belt outputs, pipe inputs, pipe outputs,
    depot inputs, depot outputs, then explicitly typed ports.
    """
    definition = FACILITIES.get(facility.type)
    if definition is None:
        return []

    steps = facility.rotation // 90
    ports: List[Port] = []

    def add(layout, port_type: str, sub_type: str, external: Optional[str] = None):
        if not layout:
            return
        if isinstance(layout, str):
            side = rotate_direction(layout, steps)
            for x, y, direction in define_side_ports(facility.width, facility.height, side):
                ports.append(Port(port_type, sub_type, x, y, direction, external=external))
            return
        for x, y, direction in layout:
            x, y, direction = _rotate_offset(x, y, direction, facility.rotation,
                                             definition.width, definition.height)
            ports.append(Port(port_type, sub_type, x, y, direction, external=external))

    add(definition.belt_inputs, "belt", "input")
    add(definition.belt_outputs, "belt", "output")
    add(definition.pipe_inputs, "pipe", "input")
    add(definition.pipe_outputs, "pipe", "output")
    add(definition.depot_inputs, "belt", "input", "depot")
    add(definition.depot_outputs, "belt", "output", "depot")
    for x, y, direction, port_type, sub_type, external in definition.ports or []:
        x, y, direction = _rotate_offset(x, y, direction, facility.rotation,
                                         definition.width, definition.height)
        ports.append(Port(port_type, sub_type, x, y, direction, external=external))
    return ports


def initialize_fixture_sides(fixture: PathFixture) -> List[FixtureSide]:
    definition = PATH_FIXTURES[fixture.type]
    steps = fixture.rotation // 90
    return [
        FixtureSide(side.type, side.sub_type, rotate_direction(side.direction, steps))
        for side in definition.sides
    ]


def calculate_path_flow_direction(path: Path, state: FieldState) -> Tuple[str, dict]:
    """Static flow direction of a path from the ports and sides at its ends.

    Fixture sides whose role is only known once flows arrive (bridges) never
    raise ``bothInputs``/``bothOutputs``; those paths get ``none`` and are
    resolved while the solver propagates flows.

    Returns:
        (flow_direction, error flags to merge onto the path)
    """
    flags = {}
    if len(path.points) < 2:
        flags["nothingConnected"] = True
        return FLOW_NONE, flags

    start_dir = endpoint_direction(path.points, "start")
    end_dir = endpoint_direction(path.points, "end")
    if start_dir is None or end_dir is None:
        flags["nothingConnected"] = True
        return FLOW_NONE, flags

    (sx, sy), (ex, ey) = path.start, path.end
    start_opposite = opposite_direction(start_dir)
    end_opposite = opposite_direction(end_dir)

    start_in = start_out = end_in = end_out = False
    start_bridge = end_bridge = False

    for facility in state.facilities:
        for direction in (start_dir, start_opposite):
            match = find_port_at_position(facility, sx, sy, direction)
            if match is not None:
                start_out = start_out or match[1].sub_type == "output"
                start_in = start_in or match[1].sub_type == "input"
        for direction in (end_dir, end_opposite):
            match = find_port_at_position(facility, ex, ey, direction)
            if match is not None:
                end_out = end_out or match[1].sub_type == "output"
                end_in = end_in or match[1].sub_type == "input"

    for fixture in state.path_fixtures:
        is_bridge = PATH_FIXTURES[fixture.type].behavior_type == FixtureBehaviorType.BRIDGE

        match = find_fixture_side_at_position(fixture, sx, sy, start_dir)
        if match is not None and match[1].sub_type == "output":
            start_out = True
            start_bridge = start_bridge or is_bridge
        match = find_fixture_side_at_position(fixture, sx, sy, start_opposite)
        if match is not None and match[1].sub_type == "input":
            start_in = True
            start_bridge = start_bridge or is_bridge
        match = find_fixture_side_at_position(fixture, ex, ey, end_opposite)
        if match is not None and match[1].sub_type == "input":
            end_in = True
            end_bridge = end_bridge or is_bridge
        match = find_fixture_side_at_position(fixture, ex, ey, end_dir)
        if match is not None and match[1].sub_type == "output":
            end_out = True
            end_bridge = end_bridge or is_bridge

    if not (start_in or start_out) and not (end_in or end_out):
        flags["nothingConnected"] = True
        return FLOW_NONE, flags

    if start_out and end_in:
        return START_TO_END, flags
    if end_out and start_in:
        return END_TO_START, flags
    bridged = start_bridge or end_bridge
    if start_in and end_in:
        if not bridged:
            flags["bothInputs"] = True
    elif start_out and end_out:
        if not bridged:
            flags["bothOutputs"] = True
    return FLOW_NONE, flags


def update_all_path_connections(state: FieldState) -> FieldState:
    paths = []
    for path in state.paths:
        flow_direction, flags = calculate_path_flow_direction(path, state)
        paths.append(replace(path, flow_direction=flow_direction,
                             error_flags=set_flags(path.error_flags, **flags)))
    return replace(state, paths=paths)


def update_path_connection_refs(path: Path, state: FieldState) -> Path:
    """Point each path endpoint at the port or side that claimed the path.

    Must run after facility and fixture connections are up to date.
    """
    if len(path.points) < 2:
        return replace(path, start_connected_to=None, end_connected_to=None)

    start_ref = end_ref = None
    for facility in state.facilities:
        for index, port in enumerate(facility.ports):
            if port.connected_path_id != path.id:
                continue
            position = facility.port_position(port)
            if position == path.start:
                start_ref = FacilityConnectionRef(facility.id, index)
            elif position == path.end:
                end_ref = FacilityConnectionRef(facility.id, index)

    for fixture in state.path_fixtures:
        for index, side in enumerate(fixture.sides):
            if side.connected_path_id != path.id:
                continue
            position = (fixture.x, fixture.y)
            if position == path.start:
                start_ref = FixtureConnectionRef(fixture.id, index)
            elif position == path.end:
                end_ref = FixtureConnectionRef(fixture.id, index)

    return replace(path, start_connected_to=start_ref, end_connected_to=end_ref)


def _path_meets(path: Path, cell: Tuple[int, int], facing: str) -> bool:
    """True if an endpoint of the path sits on ``cell`` and leaves it toward ``facing``."""
    if len(path.points) < 2:
        return False
    start_dir = endpoint_direction(path.points, "start")
    end_dir = endpoint_direction(path.points, "end")
    if start_dir is None or end_dir is None:
        return False
    return ((path.start == cell and opposite_direction(start_dir) == facing)
            or (path.end == cell and opposite_direction(end_dir) == facing))


def update_facility_connections(facility: Facility, state: FieldState) -> Facility:
    ports = []
    for port in facility.ports:
        cell = facility.port_position(port)
        connected = next((p for p in state.paths if _path_meets(p, cell, port.direction)), None)
        ports.append(replace(port, connected_path_id=connected.id if connected else None,
                             flows=[]))
    return replace(facility, ports=ports)


def update_fixture_connections(fixture: PathFixture, state: FieldState) -> PathFixture:
    cell = (fixture.x, fixture.y)
    sides = []
    for side in fixture.sides:
        connected = next((p for p in state.paths if _path_meets(p, cell, side.direction)), None)
        sides.append(replace(side, connected_path_id=connected.id if connected else None,
                             flows=[]))
    return replace(fixture, sides=sides)
