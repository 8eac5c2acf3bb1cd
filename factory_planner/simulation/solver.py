"""Iterative Flow Solver

Propagates item flows through a field by fixed-point iteration. Every
iteration moves flows one hop further: facilities produce, fixtures route,
paths carry, and input ports receive. Iteration stops once two consecutive
flow snapshots agree within epsilon, or when the iteration cap is reached.

Convergence is a pure comparison of two snapshots. Non-convergence is not an
error: the caller gets the last state back together with ``converged=False``.
"""

import logging
from dataclasses import dataclass, replace
from typing import List, NamedTuple, Tuple

import numpy as np

from ..catalog.facilities import FacilityID
from ..catalog.recipes import RECIPES
from ..config import BELT_THROUGHPUT, DEFAULT_SOLVER_CONFIG, PIPE_THROUGHPUT, SolverConfig
from ..core.models import Facility, FieldState, ItemFlow, Port
from .fixtures import calculate_fixture_flows
from .flows import (
    calculate_facility_input_flows,
    calculate_facility_output_flows,
    calculate_path_flows,
    calculate_throttle_factor,
    distribute_facility_outputs,
    merge_item_flows,
)
from .recipes import should_use_jump_start, update_facility_recipe

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SolverState:
    """The field snapshot being iterated, and how many iterations produced it."""
    field_state: FieldState
    iteration: int = 0


class FlowSnapshot(NamedTuple):
    """Flattened view of every flow the convergence check looks at.

    ``keys`` fixes the structure (owner and item of each flow); ``rates`` holds
    source and sink rates in the same order.
    """
    keys: Tuple[Tuple[str, str], ...]
    rates: np.ndarray


class SolveResult(NamedTuple):
    state: FieldState
    iterations: int
    converged: bool


def _external_output_flows(port: Port) -> List[ItemFlow]:
    rate = PIPE_THROUGHPUT if port.type == "pipe" else BELT_THROUGHPUT
    return [ItemFlow(port.set_item, rate, rate)]


def _is_supplied_external(port: Port) -> bool:
    return bool(port.external) and port.sub_type == "output" and bool(port.set_item)


def apply_external_output_flows(facility: Facility) -> Facility:
    """Depot and world output ports with a pinned item always offer a full path."""
    return replace(facility, ports=[
        replace(port, flows=_external_output_flows(port)) if _is_supplied_external(port) else port
        for port in facility.ports
    ])


def initialize_flows(state: FieldState) -> FieldState:
    """Clear every flow, seeding only external supplies and jump-started facilities."""
    facilities = []
    for facility in state.facilities:
        ports = [
            replace(port, flows=_external_output_flows(port) if _is_supplied_external(port) else [])
            for port in facility.ports
        ]
        output_flows: List[ItemFlow] = []
        if should_use_jump_start(facility):
            output_flows = calculate_facility_output_flows(RECIPES[facility.set_recipe], 1.0)
        facilities.append(replace(facility, ports=ports, input_flows=[],
                                  output_flows=output_flows))

    paths = [replace(path, flows=[]) for path in state.paths]
    fixtures = [
        replace(fixture, sides=[replace(side, flows=[]) for side in fixture.sides])
        for fixture in state.path_fixtures
    ]
    return replace(state, facilities=facilities, paths=paths, path_fixtures=fixtures)


def distribute_reactor_crucible_outputs(facility: Facility, outputs: List[ItemFlow]) -> Facility:
    """Route each item to the output ports pinned to it.

    A reactor crucible passes its inputs straight through as well, so what is
    available per item is the recipe output plus whatever arrives.
    """
    available = {}
    for flow in outputs:
        available[flow.item] = available.get(flow.item, 0.0) + flow.source_rate
    for flow in facility.input_flows:
        available[flow.item] = available.get(flow.item, 0.0) + flow.sink_rate

    connected_per_item = {}
    for port in facility.ports:
        if port.sub_type == "output" and port.set_item and port.connected_path_id:
            connected_per_item[port.set_item] = connected_per_item.get(port.set_item, 0) + 1

    ports = []
    for port in facility.ports:
        if port.sub_type != "output":
            ports.append(port)
            continue
        rate = available.get(port.set_item, 0.0) if port.set_item else 0.0
        if not port.set_item or not port.connected_path_id or rate <= 0:
            ports.append(replace(port, flows=[]))
            continue
        per_port = rate / connected_per_item[port.set_item]
        ports.append(replace(port, flows=[ItemFlow(port.set_item, per_port, per_port)]))

    output_flows = merge_item_flows(port.flows for port in ports if port.sub_type == "output")
    return replace(facility, ports=ports, output_flows=output_flows)


def _produce(facility: Facility) -> Facility:
    if not facility.actual_recipe or not facility.is_powered:
        idle = apply_external_output_flows(distribute_facility_outputs([], facility))
        return replace(idle, output_flows=[], throttle_factor=0.0)

    recipe = RECIPES[facility.actual_recipe]
    if should_use_jump_start(facility):
        outputs = calculate_facility_output_flows(recipe, 1.0)
        running = distribute_facility_outputs(outputs, facility)
        return replace(running, output_flows=outputs, throttle_factor=1.0)

    throttle = calculate_throttle_factor(facility, recipe)
    outputs = calculate_facility_output_flows(recipe, throttle)
    if facility.type == FacilityID.REACTOR_CRUCIBLE:
        running = distribute_reactor_crucible_outputs(facility, outputs)
        return replace(running, throttle_factor=throttle)
    running = distribute_facility_outputs(outputs, facility)
    return replace(running, output_flows=outputs, throttle_factor=throttle)


def _receive(facility: Facility, state: FieldState) -> Facility:
    ports = []
    for port in facility.ports:
        path = None
        if port.sub_type == "input" and port.connected_path_id:
            path = state.find_path(port.connected_path_id)
        if path is not None:
            port = replace(port, flows=list(path.flows))
        ports.append(port)

    output_flows = facility.output_flows or merge_item_flows(
        port.flows for port in ports if port.sub_type == "output")
    return replace(facility, ports=ports,
                   input_flows=calculate_facility_input_flows(facility, state),
                   output_flows=output_flows)


def run_iteration(solver_state: SolverState) -> SolverState:
    """Move every flow one hop further through the field."""
    state = solver_state.field_state
    state = replace(state, facilities=[_produce(f) for f in state.facilities])
    state = replace(state, path_fixtures=[calculate_fixture_flows(f, state)
                                          for f in state.path_fixtures])
    state = replace(state, paths=[calculate_path_flows(p, state) for p in state.paths])
    state = replace(state, facilities=[_receive(f, state) for f in state.facilities])
    state = replace(state, facilities=[
        f if f.set_recipe else update_facility_recipe(f) for f in state.facilities
    ])
    return SolverState(state, solver_state.iteration + 1)


def flow_snapshot(state: FieldState) -> FlowSnapshot:
    """Facility output flows, path flows and fixture side flows, in field order."""
    keys = []
    rates = []

    def take(owner: str, flows):
        for flow in flows:
            keys.append((owner, flow.item))
            rates.append((flow.source_rate, flow.sink_rate))
        keys.append((owner, ""))

    for facility in state.facilities:
        take(facility.id, facility.output_flows)
    for path in state.paths:
        take(path.id, path.flows)
    for fixture in state.path_fixtures:
        for index, side in enumerate(fixture.sides):
            take("%s:%d" % (fixture.id, index), side.flows)

    return FlowSnapshot(tuple(keys), np.array(rates, dtype=float).reshape(-1, 2))


def has_converged(previous: FlowSnapshot, current: FlowSnapshot, epsilon: float) -> bool:
    """True if both snapshots carry the same items and every rate moved at most epsilon."""
    if previous.keys != current.keys:
        return False
    return bool(np.allclose(previous.rates, current.rates, rtol=0.0, atol=epsilon))


def solve(state: FieldState, config: SolverConfig = DEFAULT_SOLVER_CONFIG) -> SolveResult:
    """Iterate flows to a fixed point.

    Args:
        state: Field with connections, power and recipes already resolved
        config: Iteration cap and convergence epsilon

    Returns:
        SolveResult with the final state, the iteration count and whether
        the flows converged
    """
    current = SolverState(initialize_flows(state))
    snapshot = flow_snapshot(current.field_state)

    while current.iteration < config.max_iterations:
        following = run_iteration(current)
        following_snapshot = flow_snapshot(following.field_state)
        if has_converged(snapshot, following_snapshot, config.epsilon):
            logger.debug("Flow solver converged after %d iterations", following.iteration)
            return SolveResult(following.field_state, following.iteration, True)
        current, snapshot = following, following_snapshot

    logger.warning("Flow solver did not converge within %d iterations", config.max_iterations)
    return SolveResult(current.field_state, config.max_iterations, False)
