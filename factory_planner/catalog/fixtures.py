"""Path fixture and path type catalogs.

Fixtures are single-cell routing pieces sitting on a belt or pipe. Each side
of a fixture is defined relative to rotation 0.
"""

from enum import Enum
from typing import Dict, List, NamedTuple, Optional

from .facilities import FacilityCategory
from .regions import RegionID


class PathTypeID(str, Enum):
    BELT = "item_log_belt_01"
    PIPE = "item_log_pipe_01"


class PathFixtureID(str, Enum):
    ITEM_CONTROL_PORT = "item_log_conditioner"
    BELT_BRIDGE = "item_log_connector"
    CONVERGER = "item_log_converger"
    SPLITTER = "item_log_splitter"
    PIPE_CONTROL_PORT = "item_log_pipe_conditioner"
    PIPE_BRIDGE = "item_log_pipe_connector"
    PIPE_CONVERGER = "item_log_pipe_converger"
    PIPE_SPLITTER = "item_log_pipe_splitter"


class FixtureBehaviorType(str, Enum):
    BRIDGE = "bridge"
    SPLITTER = "splitter"
    CONVERGER = "converger"
    CONTROL_PORT = "control_port"


class FixtureSideSpec(NamedTuple):
    direction: str
    type: str  # belt, pipe or control
    sub_type: str  # input or output


class PathFixtureDefinition(NamedTuple):
    category: FacilityCategory
    behavior_type: FixtureBehaviorType
    path_type: PathTypeID
    sides: List[FixtureSideSpec]
    allowed_regions: Optional[List[RegionID]] = None


PATH_TYPE_ALLOWED_REGIONS: Dict[PathTypeID, List[RegionID]] = {
    PathTypeID.BELT: [RegionID.VALLEY_IV, RegionID.WULING],
    PathTypeID.PIPE: [RegionID.WULING],
}


def _sides(kind: str, inputs: List[str], outputs: List[str]) -> List[FixtureSideSpec]:
    return ([FixtureSideSpec(d, kind, "input") for d in inputs]
            + [FixtureSideSpec(d, kind, "output") for d in outputs])


def _family(kind: str, path_type: PathTypeID,
            allowed_regions: Optional[List[RegionID]]) -> Dict[FixtureBehaviorType, PathFixtureDefinition]:
    logistics = FacilityCategory.LOGISTICS
    return {
        FixtureBehaviorType.CONTROL_PORT: PathFixtureDefinition(
            logistics, FixtureBehaviorType.CONTROL_PORT, path_type,
            _sides(kind, ["down"], ["up"]), allowed_regions),
        FixtureBehaviorType.BRIDGE: PathFixtureDefinition(
            logistics, FixtureBehaviorType.BRIDGE, path_type,
            _sides(kind, [], ["up", "down", "left", "right"]), allowed_regions),
        FixtureBehaviorType.CONVERGER: PathFixtureDefinition(
            logistics, FixtureBehaviorType.CONVERGER, path_type,
            _sides(kind, ["down", "left", "right"], ["up"]), allowed_regions),
        FixtureBehaviorType.SPLITTER: PathFixtureDefinition(
            logistics, FixtureBehaviorType.SPLITTER, path_type,
            _sides(kind, ["down"], ["up", "left", "right"]), allowed_regions),
    }


_BELT_FAMILY = _family("belt", PathTypeID.BELT, None)
_PIPE_FAMILY = _family("pipe", PathTypeID.PIPE, [RegionID.WULING])

PATH_FIXTURES: Dict[PathFixtureID, PathFixtureDefinition] = {
    PathFixtureID.ITEM_CONTROL_PORT: _BELT_FAMILY[FixtureBehaviorType.CONTROL_PORT],
    PathFixtureID.BELT_BRIDGE: _BELT_FAMILY[FixtureBehaviorType.BRIDGE],
    PathFixtureID.CONVERGER: _BELT_FAMILY[FixtureBehaviorType.CONVERGER],
    PathFixtureID.SPLITTER: _BELT_FAMILY[FixtureBehaviorType.SPLITTER],
    PathFixtureID.PIPE_CONTROL_PORT: _PIPE_FAMILY[FixtureBehaviorType.CONTROL_PORT],
    PathFixtureID.PIPE_BRIDGE: _PIPE_FAMILY[FixtureBehaviorType.BRIDGE],
    PathFixtureID.PIPE_CONVERGER: _PIPE_FAMILY[FixtureBehaviorType.CONVERGER],
    PathFixtureID.PIPE_SPLITTER: _PIPE_FAMILY[FixtureBehaviorType.SPLITTER],
}

_FIXTURE_FOR_PATH = {
    (definition.behavior_type, definition.path_type): fixture_id
    for fixture_id, definition in PATH_FIXTURES.items()
}


def get_fixture_type_for_path(behavior_type: FixtureBehaviorType,
                              path_type: str) -> PathFixtureID:
    """Fixture type with the given behavior that fits on the given path type."""
    key = PathTypeID.BELT if path_type == PathTypeID.BELT else PathTypeID.PIPE
    return _FIXTURE_FOR_PATH[(FixtureBehaviorType(behavior_type), key)]
