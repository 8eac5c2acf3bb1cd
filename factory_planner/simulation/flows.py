"""Item flow arithmetic for facilities and paths.

Rates are items per second. Each flow carries a ``source_rate`` (offered by
upstream) and a ``sink_rate`` (actually delivered after capacity limits).
"""

from dataclasses import replace
from typing import Dict, Iterable, List, NamedTuple, Optional, Set

from ..catalog.fixtures import PathTypeID
from ..catalog.items import is_fluid
from ..catalog.recipes import RECIPES, Recipe
from ..config import BELT_THROUGHPUT, PIPE_THROUGHPUT
from ..core.models import (
    END_TO_START,
    FLOW_NONE,
    START_TO_END,
    FLOW_BLOCKED,
    Facility,
    FieldState,
    ItemFlow,
    Path,
    set_flags,
)
from .connections import get_connected_entity


class FlowRates(NamedTuple):
    inputs: Dict[str, float]
    outputs: Dict[str, float]


class FlowAnalysis(NamedTuple):
    insufficient: Set[str]
    bottleneck_item: Optional[str]
    oversupplied: Set[str]


def path_throughput(path_type: str) -> float:
    return BELT_THROUGHPUT if path_type == PathTypeID.BELT else PIPE_THROUGHPUT


def recipe_to_flow_rates(recipe: Recipe) -> FlowRates:
    """Per-second input and output rates of a recipe at full speed."""
    return FlowRates(
        {item: count / recipe.time for item, count in recipe.inputs.items()},
        {item: count / recipe.time for item, count in recipe.outputs.items()},
    )


def merge_item_flows(flow_lists: Iterable[Iterable[ItemFlow]]) -> List[ItemFlow]:
    """Sum flows by item, keeping first-seen item order."""
    totals: Dict[str, List[float]] = {}
    for flows in flow_lists:
        for flow in flows:
            if flow.item in totals:
                totals[flow.item][0] += flow.source_rate
                totals[flow.item][1] += flow.sink_rate
            else:
                totals[flow.item] = [flow.source_rate, flow.sink_rate]
    return [ItemFlow(item, source, sink) for item, (source, sink) in totals.items()]


def calculate_throttle_factor(facility: Facility, recipe: Recipe) -> float:
    """Fraction of full speed the scarcest recipe input allows, clamped to [0, 1]."""
    received: Dict[str, float] = {}
    for port in facility.ports:
        if port.sub_type != "input":
            continue
        for flow in port.flows:
            received[flow.item] = received.get(flow.item, 0.0) + flow.sink_rate

    ratio = 1.0
    for item, required in recipe_to_flow_rates(recipe).inputs.items():
        item_ratio = received.get(item, 0.0) / required if required > 0 else 1.0
        ratio = min(ratio, item_ratio)
    return max(0.0, min(1.0, ratio))


def calculate_facility_output_flows(recipe: Recipe, throttle: float) -> List[ItemFlow]:
    return [
        ItemFlow(item, rate * throttle, rate * throttle)
        for item, rate in recipe_to_flow_rates(recipe).outputs.items()
    ]


def calculate_facility_input_flows(facility: Facility, state: FieldState) -> List[ItemFlow]:
    """Merge the flows of every path feeding one of the facility's input ports."""
    feeds = []
    for port in facility.ports:
        if port.sub_type == "input" and port.connected_path_id:
            path = state.find_path(port.connected_path_id)
            if path is not None:
                feeds.append(path.flows)
    return merge_item_flows(feeds)


def _is_craft_output(port) -> bool:
    return port.sub_type == "output" and not port.external


def distribute_facility_outputs(outputs: List[ItemFlow], facility: Facility) -> Facility:
    """Split output flows evenly across connected, non-external output ports.

    Unconnected output ports carry nothing; external ports keep their flows.
    """
    connected = [p for p in facility.ports if _is_craft_output(p) and p.connected_path_id]
    if not connected:
        return replace(facility, ports=[
            replace(port, flows=[]) if _is_craft_output(port) else port
            for port in facility.ports
        ])

    share = len(connected)
    per_port = [ItemFlow(f.item, f.source_rate / share, f.sink_rate / share) for f in outputs]
    return replace(facility, ports=[
        replace(port, flows=per_port) if _is_craft_output(port) and port.connected_path_id
        else port
        for port in facility.ports
    ])


def apply_path_throughput_limit(path: Path) -> Path:
    """Scale sink rates down proportionally when the path is over capacity."""
    if not path.flows:
        return path
    limit = path_throughput(path.type)
    total = sum(flow.source_rate for flow in path.flows)
    if total <= limit:
        flows = [replace(flow, sink_rate=flow.source_rate) for flow in path.flows]
        return replace(path, flows=flows, error_flags=set_flags(path.error_flags, congested=False))

    scale = limit / total
    flows = [replace(flow, sink_rate=flow.source_rate * scale) for flow in path.flows]
    return replace(path, flows=flows, error_flags=set_flags(path.error_flags, congested=True))


def filter_flows_for_path_type(path_type: str, flows: List[ItemFlow]) -> List[ItemFlow]:
    """Belts drop fluids; pipes carry only the single strongest fluid."""
    if not flows:
        return flows
    if path_type == PathTypeID.BELT:
        return [flow for flow in flows if not is_fluid(flow.item)]

    fluids = merge_item_flows([[flow for flow in flows if is_fluid(flow.item)]])
    if not fluids:
        return []
    selected = fluids[0]
    for candidate in fluids[1:]:
        if candidate.source_rate > selected.source_rate:
            selected = candidate
    return [selected]


def _output_flows_at(path: Path, endpoint: str, state: FieldState) -> Optional[List[ItemFlow]]:
    """Flows offered by the output port or side at a path endpoint, if any."""
    connected = get_connected_entity(path, endpoint, state)
    if connected is None:
        return None
    connector = connected[1]
    if connector.sub_type == "output" and connector.flows:
        return list(connector.flows)
    return None


def calculate_path_flows(path: Path, state: FieldState) -> Path:
    """Pull flows onto a path from whichever end is offering them.

    An undetermined path adopts the direction of the only end with flows.
    A path whose established source goes quiet while the other end starts
    offering flows becomes blocked, and stays blocked.
    """
    start_flows = _output_flows_at(path, "start", state)
    end_flows = _output_flows_at(path, "end", state)

    direction = path.flow_direction or FLOW_NONE
    flows: List[ItemFlow] = []

    if direction == FLOW_NONE:
        if start_flows and not end_flows:
            direction = START_TO_END
            flows = start_flows
        elif end_flows and not start_flows:
            direction = END_TO_START
            flows = end_flows
    elif direction == START_TO_END:
        if start_flows:
            flows = start_flows
        elif end_flows:
            direction = FLOW_BLOCKED
    elif direction == END_TO_START:
        if end_flows:
            flows = end_flows
        elif start_flows:
            direction = FLOW_BLOCKED

    flows = filter_flows_for_path_type(path.type, flows)
    return apply_path_throughput_limit(replace(path, flows=flows, flow_direction=direction))


def analyze_facility_flows(facility: Facility) -> FlowAnalysis:
    """Find under-supplied and over-supplied recipe inputs of a facility."""
    recipe = RECIPES.get(facility.actual_recipe) if facility.actual_recipe else None
    if recipe is None:
        return FlowAnalysis(set(), None, set())

    insufficient: Set[str] = set()
    oversupplied: Set[str] = set()
    bottleneck_item = None
    bottleneck_ratio = 1.0
    received = {flow.item: flow for flow in facility.input_flows}

    for item, count in recipe.inputs.items():
        max_rate = count / recipe.time
        flow = received.get(item)
        sink = flow.sink_rate if flow else 0.0
        source = flow.source_rate if flow else 0.0
        if source > max_rate * 1.001:
            oversupplied.add(item)
        if sink < max_rate * 0.999:
            insufficient.add(item)
            ratio = sink / max_rate if max_rate > 0 else 0.0
            if ratio < bottleneck_ratio:
                bottleneck_ratio = ratio
                bottleneck_item = item

    return FlowAnalysis(insufficient, bottleneck_item, oversupplied)


def has_facility_flow_issues(facility: Facility) -> bool:
    """True if the facility is starved, oversupplied, obstructed or running slow."""
    analysis = analyze_facility_flows(facility)
    if analysis.insufficient or analysis.oversupplied:
        return True
    for flow in list(facility.input_flows) + list(facility.output_flows):
        if flow.source_rate > flow.sink_rate * 1.001:
            return True

    recipe = RECIPES.get(facility.actual_recipe) if facility.actual_recipe else None
    if recipe is not None and facility.output_flows:
        theoretical = sum(count / recipe.time for count in recipe.outputs.values())
        actual = sum(flow.source_rate for flow in facility.output_flows)
        percentage = actual / theoretical * 100 if theoretical > 0 else 0.0
        if percentage < 99.9:
            return True
    return False
