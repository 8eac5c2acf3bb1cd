"""Field State Model

Immutable snapshot of a factory field: facilities with their ports, belt and
pipe paths, path fixtures, and the aggregated depot/world/debug summaries.

Every pipeline stage builds a new snapshot with ``dataclasses.replace``;
nothing is ever modified in place. Error flags only record raised
conditions, so an entity without problems has an empty ``error_flags`` map.
"""

from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Tuple, Union

from ..catalog.templates import FieldTemplate

Point = Tuple[int, int]
ErrorFlags = Dict[str, bool]

START_TO_END = "start-to-end"
END_TO_START = "end-to-start"
FLOW_NONE = "none"
FLOW_BLOCKED = "blocked"


def set_flags(flags: ErrorFlags, **updates: bool) -> ErrorFlags:
    """Return a copy of ``flags`` with each update applied; False clears a flag."""
    result = dict(flags)
    for name, value in updates.items():
        if value:
            result[name] = True
        else:
            result.pop(name, None)
    return result


@dataclass(frozen=True)
class ItemFlow:
    """Items per second of one item type.

    ``source_rate`` is what upstream offers; ``sink_rate`` is what actually
    gets through after capacity limits.
    """
    item: str
    source_rate: float
    sink_rate: float


@dataclass(frozen=True)
class FacilityConnectionRef:
    facility_id: str
    port_index: int
    type: str = "facility"


@dataclass(frozen=True)
class FixtureConnectionRef:
    fixture_id: str
    side_index: int
    type: str = "fixture"


ConnectionRef = Union[FacilityConnectionRef, FixtureConnectionRef]


@dataclass(frozen=True)
class Port:
    """A facility connection point, offset relative to the facility's top-left."""
    type: str  # belt or pipe
    sub_type: str  # input or output
    x: int
    y: int
    direction: str
    external: Optional[str] = None  # depot or world
    connected_path_id: Optional[str] = None
    set_item: Optional[str] = None
    flows: List[ItemFlow] = field(default_factory=list)
    error_flags: ErrorFlags = field(default_factory=dict)


@dataclass(frozen=True)
class FixtureSide:
    type: str  # belt, pipe or control
    sub_type: str
    direction: str
    connected_path_id: Optional[str] = None
    flows: List[ItemFlow] = field(default_factory=list)
    error_flags: ErrorFlags = field(default_factory=dict)


@dataclass(frozen=True)
class Facility:
    id: str
    type: str
    x: int
    y: int
    rotation: int
    width: int
    height: int
    ports: List[Port] = field(default_factory=list)
    is_powered: bool = False
    jump_start_recipe: bool = False
    set_recipe: Optional[str] = None
    actual_recipe: Optional[str] = None
    throttle_factor: Optional[float] = None
    input_flows: List[ItemFlow] = field(default_factory=list)
    output_flows: List[ItemFlow] = field(default_factory=list)
    error_flags: ErrorFlags = field(default_factory=dict)

    def port_position(self, port: Port) -> Point:
        """Absolute grid cell of one of this facility's ports."""
        return (self.x + port.x, self.y + port.y)


@dataclass(frozen=True)
class Path:
    id: str
    type: str
    points: List[Point]
    flows: List[ItemFlow] = field(default_factory=list)
    flow_direction: str = FLOW_NONE
    start_connected_to: Optional[ConnectionRef] = None
    end_connected_to: Optional[ConnectionRef] = None
    error_flags: ErrorFlags = field(default_factory=dict)

    @property
    def start(self) -> Point:
        return self.points[0]

    @property
    def end(self) -> Point:
        return self.points[-1]


@dataclass(frozen=True)
class PathFixture:
    id: str
    type: str
    x: int
    y: int
    rotation: int
    sides: List[FixtureSide] = field(default_factory=list)
    set_item: Optional[str] = None
    error_flags: ErrorFlags = field(default_factory=dict)
    width: int = 1
    height: int = 1


@dataclass(frozen=True)
class DepotState:
    input_flows: List[ItemFlow] = field(default_factory=list)
    output_flows: List[ItemFlow] = field(default_factory=list)
    power_generated: float = 0.0
    power_consumed: float = 0.0


@dataclass(frozen=True)
class WorldState:
    input_flows: List[ItemFlow] = field(default_factory=list)
    output_flows: List[ItemFlow] = field(default_factory=list)


@dataclass(frozen=True)
class RecipeMatchWarning:
    facility_id: str
    matching_recipes: List[str]


@dataclass(frozen=True)
class RejectedChange:
    """A change the reducer refused, kept for diagnostics."""
    index: int
    change_type: str
    reason: str


@dataclass(frozen=True)
class DebugInfo:
    flow_solver_iterations: Optional[int] = None
    flow_solver_converged: Optional[bool] = None
    multiple_recipe_match_warnings: List[RecipeMatchWarning] = field(default_factory=list)
    rejected_changes: List[RejectedChange] = field(default_factory=list)


@dataclass(frozen=True)
class FieldState:
    """Complete derived state of one factory field."""
    template: Union[str, FieldTemplate]
    width: int
    height: int
    facilities: List[Facility] = field(default_factory=list)
    paths: List[Path] = field(default_factory=list)
    path_fixtures: List[PathFixture] = field(default_factory=list)
    depot: DepotState = field(default_factory=DepotState)
    world: WorldState = field(default_factory=WorldState)
    debug_info: DebugInfo = field(default_factory=DebugInfo)

    def find_facility(self, facility_id: str) -> Optional[Facility]:
        return next((f for f in self.facilities if f.id == facility_id), None)

    def find_path(self, path_id: str) -> Optional[Path]:
        return next((p for p in self.paths if p.id == path_id), None)

    def find_fixture(self, fixture_id: str) -> Optional[PathFixture]:
        return next((f for f in self.path_fixtures if f.id == fixture_id), None)


def replace_facility(state: FieldState, facility: Facility) -> FieldState:
    return replace(state, facilities=[facility if f.id == facility.id else f
                                      for f in state.facilities])


def replace_path(state: FieldState, path: Path) -> FieldState:
    return replace(state, paths=[path if p.id == path.id else p for p in state.paths])


def replace_fixture(state: FieldState, fixture: PathFixture) -> FieldState:
    return replace(state, path_fixtures=[fixture if f.id == fixture.id else f
                                         for f in state.path_fixtures])
