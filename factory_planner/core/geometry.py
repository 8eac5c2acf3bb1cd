"""Grid geometry and placement validation.

All coordinates are integer grid cells. Facility and fixture rectangles are
half-open (``x .. x + width``); path segments include both end cells.
"""

from typing import Dict, List, NamedTuple, Optional, Sequence

from ..catalog.facilities import FacilityID
from ..catalog.fixtures import PATH_FIXTURES, PathTypeID
from .directions import Direction, Point, direction_between
from .models import (
    FacilityConnectionRef,
    FieldState,
    FixtureConnectionRef,
    Path,
)

MAX_OUT_OF_BOUNDS_RANGE = 10

# Fluid facilities may sit partly outside the field to reach water
OUT_OF_BOUNDS_ALLOWED_FACILITIES = frozenset({
    FacilityID.FLUID_PUMP,
    FacilityID.FLUID_SUPPLY_UNIT,
    FacilityID.SPRINKLER,
})


class Segment(NamedTuple):
    start: Point
    end: Point
    direction: Direction


def is_in_bounds(x: int, y: int, width: int, height: int, state: FieldState) -> bool:
    return x >= 0 and y >= 0 and x + width <= state.width and y + height <= state.height


def is_within_extended_bounds(x: int, y: int, width: int, height: int,
                              state: FieldState) -> bool:
    reach = MAX_OUT_OF_BOUNDS_RANGE
    return (x >= -reach and y >= -reach
            and x + width <= state.width + reach
            and y + height <= state.height + reach)


def entities_overlap(a, b) -> bool:
    """True if two rectangles share any area; touching edges do not count."""
    return not (a.x + a.width <= b.x or b.x + b.width <= a.x
                or a.y + a.height <= b.y or b.y + b.height <= a.y)


def segment_overlaps_entity(start: Point, end: Point, entity) -> bool:
    min_x, max_x = min(start[0], end[0]), max(start[0], end[0])
    min_y, max_y = min(start[1], end[1]), max(start[1], end[1])
    entity_max_x = entity.x + entity.width - 1
    entity_max_y = entity.y + entity.height - 1
    return (min_x <= entity_max_x and max_x >= entity.x
            and min_y <= entity_max_y and max_y >= entity.y)


def get_path_segments(points: Sequence[Point]) -> List[Segment]:
    """Split a polyline into cardinal segments, skipping degenerate ones."""
    segments = []
    for start, end in zip(points, points[1:]):
        direction = direction_between(start, end)
        if direction is not None:
            segments.append(Segment(tuple(start), tuple(end), direction))
    return segments


def is_valid_path_geometry(points: Sequence[Point]) -> bool:
    """At least two points, with every consecutive pair on a shared row or column."""
    if len(points) < 2:
        return False
    return all(direction_between(a, b) is not None for a, b in zip(points, points[1:]))


def segments_overlap(a_start: Point, a_end: Point, b_start: Point, b_end: Point) -> bool:
    """True if two axis-aligned segments share any cell."""
    ax0, ax1 = sorted((a_start[0], a_end[0]))
    ay0, ay1 = sorted((a_start[1], a_end[1]))
    bx0, bx1 = sorted((b_start[0], b_end[0]))
    by0, by1 = sorted((b_start[1], b_end[1]))
    a_horizontal = ay0 == ay1
    b_horizontal = by0 == by1

    if a_horizontal and b_horizontal:
        return ay0 == by0 and ax1 >= bx0 and bx1 >= ax0
    if not a_horizontal and not b_horizontal:
        return ax0 == bx0 and ay1 >= by0 and by1 >= ay0
    if a_horizontal:
        return ax0 <= bx0 <= ax1 and by0 <= ay0 <= by1
    return bx0 <= ax0 <= bx1 and ay0 <= by0 <= ay1


def find_shared_endpoint(a_start: Point, a_end: Point,
                         b_start: Point, b_end: Point) -> Optional[Point]:
    for candidate in (a_start, a_end):
        if candidate == b_start or candidate == b_end:
            return candidate
    return None


def is_point_on_segment(point: Point, start: Point, end: Point) -> bool:
    """True if the point lies strictly inside the segment (not on either end)."""
    px, py = point
    x1, y1 = start
    x2, y2 = end
    if y1 == y2:
        return py == y1 and min(x1, x2) < px < max(x1, x2)
    if x1 == x2:
        return px == x1 and min(y1, y2) < py < max(y1, y2)
    return False


def find_segment_containing_point(point: Point, points: Sequence[Point]) -> Optional[int]:
    """Index of the segment holding ``point`` in its interior.

    A point on an interior corner belongs to the segment before that corner.
    """
    point = tuple(point)
    for i in range(1, len(points) - 1):
        if tuple(points[i]) == point:
            return i - 1
    for i, segment in enumerate(get_path_segments(points)):
        if is_point_on_segment(point, segment.start, segment.end):
            return i
    return None


def find_perpendicular_crossing(a_start: Point, a_end: Point,
                                b_start: Point, b_end: Point) -> Optional[Point]:
    """Cell where a horizontal and a vertical segment cross, excluding all endpoints."""
    ax0, ax1 = sorted((a_start[0], a_end[0]))
    ay0, ay1 = sorted((a_start[1], a_end[1]))
    bx0, bx1 = sorted((b_start[0], b_end[0]))
    by0, by1 = sorted((b_start[1], b_end[1]))
    a_horizontal = ay0 == ay1
    if a_horizontal == (by0 == by1):
        return None
    if a_horizontal:
        cross = (bx0, ay0)
        inside = ax0 < cross[0] < ax1 and by0 < cross[1] < by1
    else:
        cross = (ax0, by0)
        inside = bx0 < cross[0] < bx1 and ay0 < cross[1] < ay1
    return cross if inside else None


def _contains_point(entity, point: Point) -> bool:
    return (entity.x <= point[0] < entity.x + entity.width
            and entity.y <= point[1] < entity.y + entity.height)


def validate_facility_placement(facility, state: FieldState) -> Dict[str, bool]:
    """Bounds and overlap checks for a facility.

    Returns:
        Dict with ``outOfBounds`` and ``invalidPlacement`` booleans
    """
    out_of_bounds = False
    if not is_in_bounds(facility.x, facility.y, facility.width, facility.height, state):
        allowed = facility.type in OUT_OF_BOUNDS_ALLOWED_FACILITIES
        if not allowed or not is_within_extended_bounds(
                facility.x, facility.y, facility.width, facility.height, state):
            out_of_bounds = True

    invalid = any(other.id != facility.id and entities_overlap(facility, other)
                  for other in state.facilities)
    if not invalid:
        invalid = any(entities_overlap(facility, fixture) for fixture in state.path_fixtures)

    return {"outOfBounds": out_of_bounds, "invalidPlacement": invalid}


def validate_fixture_placement(fixture, state: FieldState) -> Dict[str, bool]:
    out_of_bounds = not is_in_bounds(fixture.x, fixture.y, 1, 1, state)

    invalid = any(entities_overlap(fixture, facility) for facility in state.facilities)
    if not invalid:
        invalid = any(other.id != fixture.id and entities_overlap(fixture, other)
                      for other in state.path_fixtures)

    definition = PATH_FIXTURES.get(fixture.type)
    if not invalid and definition is not None and definition.path_type == PathTypeID.PIPE:
        invalid = any(
            segment_overlaps_entity(segment.start, segment.end, fixture)
            for path in state.paths if path.type == PathTypeID.BELT
            for segment in get_path_segments(path.points)
        )

    return {"outOfBounds": out_of_bounds, "invalidPlacement": invalid}


def _connected_to(ref, kind_ref_type, entity_id: str) -> bool:
    if isinstance(ref, FacilityConnectionRef) and kind_ref_type is FacilityConnectionRef:
        return ref.facility_id == entity_id
    if isinstance(ref, FixtureConnectionRef) and kind_ref_type is FixtureConnectionRef:
        return ref.fixture_id == entity_id
    return False


def validate_path_placement(path: Path, state: FieldState) -> Dict[str, bool]:
    """Geometry, bounds and overlap checks for a path.

    Endpoints may sit inside the facility or on the fixture they connect to.
    Crossing another path of the same type is only allowed where the two
    meet end-to-end at a fixture.

    Returns:
        Dict with ``invalidLayout`` and ``invalidPlacement`` booleans
    """
    errors = {"invalidLayout": False, "invalidPlacement": False}
    if not is_valid_path_geometry(path.points):
        errors["invalidLayout"] = True
        return errors

    for x, y in path.points:
        if path.type == PathTypeID.BELT:
            inside = 0 <= x < state.width and 0 <= y < state.height
        else:
            inside = is_within_extended_bounds(x, y, 1, 1, state)
        if not inside:
            errors["invalidPlacement"] = True
            return errors

    segments = get_path_segments(path.points)
    start, end = path.start, path.end

    for facility in state.facilities:
        for segment in segments:
            if not segment_overlaps_entity(segment.start, segment.end, facility):
                continue
            valid = (_connected_to(path.start_connected_to, FacilityConnectionRef, facility.id)
                     or _connected_to(path.end_connected_to, FacilityConnectionRef, facility.id)
                     or _contains_point(facility, start)
                     or _contains_point(facility, end))
            if not valid:
                errors["invalidPlacement"] = True
                return errors

    for fixture in state.path_fixtures:
        definition = PATH_FIXTURES[fixture.type]
        if path.type == PathTypeID.PIPE and definition.path_type == PathTypeID.BELT:
            continue
        for segment in segments:
            if not segment_overlaps_entity(segment.start, segment.end, fixture):
                continue
            if path.type == PathTypeID.BELT and definition.path_type == PathTypeID.PIPE:
                errors["invalidPlacement"] = True
                return errors
            cell = (fixture.x, fixture.y)
            valid = (_connected_to(path.start_connected_to, FixtureConnectionRef, fixture.id)
                     or _connected_to(path.end_connected_to, FixtureConnectionRef, fixture.id)
                     or start == cell or end == cell)
            if not valid:
                errors["invalidPlacement"] = True
                return errors

    fixture_cells = {(f.x, f.y) for f in state.path_fixtures}
    for other in state.paths:
        if other.id == path.id or other.type != path.type:
            continue
        for segment in segments:
            for other_segment in get_path_segments(other.points):
                if not segments_overlap(segment.start, segment.end,
                                        other_segment.start, other_segment.end):
                    continue
                shared = find_shared_endpoint(segment.start, segment.end,
                                              other_segment.start, other_segment.end)
                if shared is not None and shared in fixture_cells:
                    continue
                errors["invalidPlacement"] = True
                return errors

    return errors
