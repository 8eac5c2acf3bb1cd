"""Template rules: region restrictions and the depot bus.

Each field template belongs to a region, which limits the facilities,
fixtures and path types that can be built, and may carry a fixed depot bus
along its bottom and right edges. Depot loaders and unloaders have to touch
that bus, directly or through placed bus sections and ports.
"""

from dataclasses import replace
from typing import List, NamedTuple, Optional

from ..catalog.facilities import FACILITIES, FacilityID, has_pipe_ports
from ..catalog.fixtures import PATH_FIXTURES, PATH_TYPE_ALLOWED_REGIONS
from ..catalog.templates import FieldTemplate, resolve_field_template
from ..core.directions import rotate_direction
from ..core.models import Facility, FieldState, set_flags

DEPOT_BUS_PORT_SIZE = 4
DEPOT_BUS_SECTION_BOTTOM_WIDTH = 8
DEPOT_BUS_SECTION_BOTTOM_HEIGHT = 4
DEPOT_BUS_SECTION_RIGHT_WIDTH = 4
DEPOT_BUS_SECTION_RIGHT_HEIGHT = 8


class Span(NamedTuple):
    min: int
    max: int


class BusRect(NamedTuple):
    x: int
    y: int
    width: int
    height: int


class DepotBusCells(NamedTuple):
    ports: List[BusRect]
    sections: List[BusRect]


def clamp_range(value: int, maximum: int) -> int:
    if value <= 0:
        return 0
    return min(value, maximum)


def _bus_spans(template: FieldTemplate, width: int, height: int):
    """Edge cell ranges along the bottom and right edges that the bus touches."""
    layout = template.depot_bus_layout
    if layout is None:
        return None, None

    port = DEPOT_BUS_PORT_SIZE if layout.has_port else 0
    bottom_count = clamp_range(layout.bottom_sections, width // DEPOT_BUS_SECTION_BOTTOM_WIDTH)
    right_count = clamp_range(layout.right_sections, height // DEPOT_BUS_SECTION_RIGHT_HEIGHT)
    bottom_span = bottom_count * DEPOT_BUS_SECTION_BOTTOM_WIDTH + port
    right_span = right_count * DEPOT_BUS_SECTION_RIGHT_HEIGHT + port

    bottom = Span(max(0, width - bottom_span), width - 1) if bottom_span > 0 else None
    right = Span(max(0, height - right_span), height - 1) if right_span > 0 else None
    return bottom, right


def get_template_depot_bus_cells(template: FieldTemplate, width: int, height: int) -> DepotBusCells:
    """Rectangles of the fixed bus, which sits just outside the field."""
    layout = template.depot_bus_layout
    if layout is None:
        return DepotBusCells([], [])

    bottom_count = clamp_range(layout.bottom_sections, -(-width // DEPOT_BUS_SECTION_BOTTOM_WIDTH))
    right_count = clamp_range(layout.right_sections, -(-height // DEPOT_BUS_SECTION_RIGHT_HEIGHT))

    ports = []
    if layout.has_port:
        ports.append(BusRect(width, height, DEPOT_BUS_PORT_SIZE, DEPOT_BUS_PORT_SIZE))
    sections = [
        BusRect(width - (i + 1) * DEPOT_BUS_SECTION_BOTTOM_WIDTH, height,
                DEPOT_BUS_SECTION_BOTTOM_WIDTH, DEPOT_BUS_SECTION_BOTTOM_HEIGHT)
        for i in range(bottom_count)
    ]
    sections += [
        BusRect(width, height - (i + 1) * DEPOT_BUS_SECTION_RIGHT_HEIGHT,
                DEPOT_BUS_SECTION_RIGHT_WIDTH, DEPOT_BUS_SECTION_RIGHT_HEIGHT)
        for i in range(right_count)
    ]
    return DepotBusCells(ports, sections)


def _overlaps(min_a: int, max_a: int, min_b: int, max_b: int) -> bool:
    return min_a <= max_b and max_a >= min_b


def _touches_template_bus(facility: Facility, template: FieldTemplate,
                          state: FieldState, side: str) -> bool:
    bottom, right = _bus_spans(template, state.width, state.height)
    if side == "down" and bottom is not None and facility.y + facility.height == state.height:
        return _overlaps(facility.x, facility.x + facility.width - 1, bottom.min, bottom.max)
    if side == "right" and right is not None and facility.x + facility.width == state.width:
        return _overlaps(facility.y, facility.y + facility.height - 1, right.min, right.max)
    return False


def _touches_bus_facility(facility: Facility, buses: List[Facility], side: str) -> bool:
    min_x, max_x = facility.x, facility.x + facility.width - 1
    min_y, max_y = facility.y, facility.y + facility.height - 1
    for bus in buses:
        bus_max_x = bus.x + bus.width - 1
        bus_max_y = bus.y + bus.height - 1
        if side == "up" and bus.y + bus.height == facility.y:
            if _overlaps(bus.x, bus_max_x, min_x, max_x):
                return True
        if side == "down" and bus.y == facility.y + facility.height:
            if _overlaps(bus.x, bus_max_x, min_x, max_x):
                return True
        if side == "left" and bus.x + bus.width == facility.x:
            if _overlaps(bus.y, bus_max_y, min_y, max_y):
                return True
        if side == "right" and bus.x == facility.x + facility.width:
            if _overlaps(bus.y, bus_max_y, min_y, max_y):
                return True
    return False


def is_facility_adjacent_to_depot_bus(facility: Facility, state: FieldState,
                                      template: FieldTemplate,
                                      buses: List[Facility]) -> bool:
    definition = FACILITIES.get(facility.type)
    if definition is None or not definition.depot_bus_connection_side:
        return True
    side = rotate_direction(definition.depot_bus_connection_side, facility.rotation // 90)
    return (_touches_template_bus(facility, template, state, side)
            or _touches_bus_facility(facility, buses, side))


def _region_allowed(allowed_regions: Optional[list], region) -> bool:
    return not allowed_regions or region in allowed_regions


def apply_template_validation(state: FieldState) -> FieldState:
    """Flag entities that the field's template does not allow.

    Sets ``invalidTemplate`` on facilities, fixtures and paths, and
    ``invalidDepotBusConnection`` on depot access facilities that do not
    reach the bus. Only the first N bus ports and sections count, where N
    is the template's limit.
    """
    template = resolve_field_template(state.template)
    region = template.region

    bus_ports = [f for f in state.facilities if f.type == FacilityID.DEPOT_BUS_PORT]
    bus_sections = [f for f in state.facilities if f.type == FacilityID.DEPOT_BUS_SECTION]
    allowed_bus_ids = ({f.id for f in bus_ports[:template.depot_bus_port_limit]}
                       | {f.id for f in bus_sections[:template.depot_bus_section_limit]})
    bus_types = (FacilityID.DEPOT_BUS_PORT, FacilityID.DEPOT_BUS_SECTION)

    valid_buses = [
        f for f in state.facilities
        if f.type in bus_types
        and f.id in allowed_bus_ids
        and not any(f.error_flags.get(flag)
                    for flag in ("invalidPlacement", "outOfBounds", "invalidTemplate"))
        and _region_allowed(FACILITIES[f.type].allowed_regions, region)
    ]

    facilities = []
    for facility in state.facilities:
        definition = FACILITIES.get(facility.type)
        region_ok = definition is None or _region_allowed(definition.allowed_regions, region)
        pipe_ports_ok = definition is None or _region_allowed(
            definition.pipe_ports_allowed_regions, region)
        within_limit = facility.type not in bus_types or facility.id in allowed_bus_ids
        pipes = definition is not None and has_pipe_ports(definition)

        invalid_template = not region_ok or not within_limit or (pipes and not pipe_ports_ok)
        invalid_bus = bool(definition and definition.depot_bus_connection_side) and not \
            is_facility_adjacent_to_depot_bus(facility, state, template, valid_buses)
        facilities.append(replace(facility, error_flags=set_flags(
            facility.error_flags,
            invalidTemplate=invalid_template,
            invalidDepotBusConnection=invalid_bus,
        )))

    fixtures = [
        replace(fixture, error_flags=set_flags(
            fixture.error_flags,
            invalidTemplate=not _region_allowed(PATH_FIXTURES[fixture.type].allowed_regions, region),
        ))
        for fixture in state.path_fixtures
    ]
    paths = [
        replace(path, error_flags=set_flags(
            path.error_flags,
            invalidTemplate=not _region_allowed(PATH_TYPE_ALLOWED_REGIONS.get(path.type), region),
        ))
        for path in state.paths
    ]
    return replace(state, facilities=facilities, path_fixtures=fixtures, paths=paths)
