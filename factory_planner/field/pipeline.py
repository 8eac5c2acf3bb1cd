"""Recalculation Pipeline

Rebuilds a complete field state from a template and a change list. The
stages run in a fixed order:

    1. apply changes
    2. facility and fixture placement checks
    3. initialize missing ports and sides
    4. power coverage
    5. port, side and path endpoint connections
    6. path placement checks
    7. template rules
    8. static path directions
    9. one early solver iteration, to seed input flows
   10. recipe inference
   11. flow solve
   12. depot and world totals
   13. power totals
   14. result-dependent error flags

Problems with the layout never stop the pipeline; they end up as error flags
on the entities. Changes that cannot be applied are skipped and recorded in
``debug_info.rejected_changes`` unless ``strict`` is set.
"""

import logging
from dataclasses import replace
from typing import Iterable, List, Optional, Tuple

from ..catalog.facilities import FACILITIES
from ..catalog.fixtures import PATH_FIXTURES, FixtureBehaviorType
from ..catalog.recipes import facility_has_recipes
from ..catalog.templates import TemplateRef, resolve_field_template
from ..changes.errors import ChangeError
from ..changes.reducer import apply_change
from ..changes.types import parse_change
from ..config import DEFAULT_SOLVER_CONFIG, SolverConfig
from ..core.geometry import (
    validate_facility_placement,
    validate_fixture_placement,
    validate_path_placement,
)
from ..core.models import (
    FLOW_BLOCKED,
    FLOW_NONE,
    DebugInfo,
    DepotState,
    FieldState,
    RejectedChange,
    WorldState,
    set_flags,
)
from ..simulation.connections import (
    initialize_facility_ports,
    initialize_fixture_sides,
    update_all_path_connections,
    update_facility_connections,
    update_fixture_connections,
    update_path_connection_refs,
)
from ..simulation.flows import merge_item_flows
from ..simulation.power import calculate_power_stats, update_all_facility_power_states
from ..simulation.recipes import update_all_facility_recipes
from ..simulation.solver import SolverState, initialize_flows, run_iteration, solve
from .template_rules import apply_template_validation

logger = logging.getLogger(__name__)


def create_empty_state(template: TemplateRef) -> FieldState:
    resolved = resolve_field_template(template)
    return FieldState(template=template, width=resolved.width, height=resolved.height)


def clear_derived_state(state: FieldState) -> FieldState:
    """Reset everything the pipeline computes, keeping only what changes set.

    Running the pipeline on an already computed state then gives the same
    result as running it on the bare entities.
    """
    facilities = [
        replace(
            facility,
            ports=[replace(port, connected_path_id=None, flows=[], error_flags={})
                   for port in facility.ports],
            is_powered=False,
            actual_recipe=None,
            throttle_factor=None,
            input_flows=[],
            output_flows=[],
            error_flags={},
        )
        for facility in state.facilities
    ]
    fixtures = [
        replace(fixture, error_flags={}, sides=initialize_fixture_sides(fixture))
        for fixture in state.path_fixtures
    ]
    paths = [
        replace(path, flows=[], flow_direction=FLOW_NONE, start_connected_to=None,
                end_connected_to=None, error_flags={})
        for path in state.paths
    ]
    return replace(state, facilities=facilities, path_fixtures=fixtures, paths=paths,
                   depot=DepotState(), world=WorldState(), debug_info=DebugInfo())


def apply_changes(state: FieldState, changes: Iterable,
                  strict: bool = False) -> Tuple[FieldState, List[RejectedChange]]:
    """Fold changes over a state in order.

    Wire changes (dicts) are parsed first. A change that fails is skipped as a
    whole, including every sub-change of a ``multi`` batch.

    Raises:
        ChangeError: for the first failing change, only if ``strict`` is set
    """
    rejected = []
    for index, change in enumerate(changes):
        change_type = change.get("type") if isinstance(change, dict) else getattr(change, "type", "?")
        try:
            if isinstance(change, dict):
                change = parse_change(change)
            state = apply_change(state, change)
        except ChangeError as exc:
            if strict:
                raise
            logger.warning("Rejected change %d (%s): %s", index, change_type, exc)
            rejected.append(RejectedChange(index, str(change_type), str(exc)))
    return state, rejected


def _validate_placements(state: FieldState) -> FieldState:
    facilities = [
        replace(f, error_flags=set_flags(f.error_flags, **validate_facility_placement(f, state)))
        for f in state.facilities
    ]
    fixtures = [
        replace(f, error_flags=set_flags(f.error_flags, **validate_fixture_placement(f, state)))
        for f in state.path_fixtures
    ]
    return replace(state, facilities=facilities, path_fixtures=fixtures)


def _initialize_connectors(state: FieldState) -> FieldState:
    facilities = [
        f if f.ports else replace(f, ports=initialize_facility_ports(f))
        for f in state.facilities
    ]
    fixtures = [
        f if f.sides else replace(f, sides=initialize_fixture_sides(f))
        for f in state.path_fixtures
    ]
    return replace(state, facilities=facilities, path_fixtures=fixtures)


def _resolve_connections(state: FieldState) -> FieldState:
    state = replace(
        state,
        facilities=[update_facility_connections(f, state) for f in state.facilities],
        path_fixtures=[update_fixture_connections(f, state) for f in state.path_fixtures],
    )
    return replace(state, paths=[update_path_connection_refs(p, state) for p in state.paths])


def _validate_paths(state: FieldState) -> FieldState:
    return replace(state, paths=[
        replace(p, error_flags=set_flags(p.error_flags, **validate_path_placement(p, state)))
        for p in state.paths
    ])


def _seed_input_flows(state: FieldState) -> FieldState:
    """One solver iteration so recipe inference can see supplied items."""
    seeded = run_iteration(SolverState(initialize_flows(state))).field_state
    return replace(state, facilities=seeded.facilities, paths=seeded.paths)


def _aggregate_external_flows(state: FieldState) -> FieldState:
    """Outputs of external ports are what the depot or world supplies; inputs are what it receives."""
    feeds = {("depot", "output"): [], ("depot", "input"): [],
             ("world", "output"): [], ("world", "input"): []}
    for facility in state.facilities:
        for port in facility.ports:
            key = (port.external, port.sub_type)
            if key in feeds:
                feeds[key].append(port.flows)

    stats = calculate_power_stats(state)
    depot = DepotState(
        input_flows=merge_item_flows(feeds[("depot", "output")]),
        output_flows=merge_item_flows(feeds[("depot", "input")]),
        power_generated=stats.generated,
        power_consumed=stats.consumed,
    )
    world = WorldState(
        input_flows=merge_item_flows(feeds[("world", "output")]),
        output_flows=merge_item_flows(feeds[("world", "input")]),
    )
    return replace(state, depot=depot, world=world)


def _result_flags(state: FieldState) -> FieldState:
    facilities = []
    for facility in state.facilities:
        definition = FACILITIES.get(facility.type)
        needs_power = bool(definition and definition.power)
        no_recipe = (facility.is_powered and not facility.actual_recipe
                     and bool(facility.input_flows) and facility_has_recipes(facility.type))
        ports = [
            replace(port, error_flags=set_flags(
                port.error_flags,
                noItemAssigned=bool(port.external and port.sub_type == "output"
                                    and port.connected_path_id and not port.set_item),
            ))
            for port in facility.ports
        ]
        facilities.append(replace(facility, ports=ports, error_flags=set_flags(
            facility.error_flags,
            unpowered=not facility.is_powered and needs_power,
            noValidRecipe=no_recipe,
        )))

    fixtures = []
    for fixture in state.path_fixtures:
        control = PATH_FIXTURES[fixture.type].behavior_type == FixtureBehaviorType.CONTROL_PORT
        sides = [
            replace(side, error_flags=set_flags(side.error_flags,
                                                noItemAssigned=control and not fixture.set_item))
            for side in fixture.sides
        ]
        fixtures.append(replace(fixture, sides=sides))

    paths = [
        replace(path, error_flags=set_flags(
            path.error_flags,
            blocked=path.flow_direction == FLOW_BLOCKED,
            disconnected=(path.start_connected_to is None) != (path.end_connected_to is None),
        ))
        for path in state.paths
    ]
    return replace(state, facilities=facilities, path_fixtures=fixtures, paths=paths)


def recalculate_state(state: FieldState, changes: Iterable = (),
                      config: Optional[SolverConfig] = None,
                      strict: bool = False) -> FieldState:
    """Apply changes to an existing state and recompute everything derived.

    Args:
        state: Starting state; anything derived on it is recomputed
        changes: Parsed change models or wire dicts, applied in order
        config: Solver settings, defaulting to the standard cap and epsilon
        strict: Raise on the first rejected change instead of skipping it

    Returns:
        The fully computed field state
    """
    config = config or DEFAULT_SOLVER_CONFIG
    state, rejected = apply_changes(clear_derived_state(state), changes, strict=strict)

    state = _validate_placements(state)
    state = _initialize_connectors(state)
    state = update_all_facility_power_states(state)
    state = _resolve_connections(state)
    state = _validate_paths(state)
    state = apply_template_validation(state)
    state = update_all_path_connections(state)
    state = _seed_input_flows(state)
    state, warnings = update_all_facility_recipes(state)

    result = solve(state, config)
    state = replace(result.state, debug_info=DebugInfo(
        flow_solver_iterations=result.iterations,
        flow_solver_converged=result.converged,
        multiple_recipe_match_warnings=warnings,
        rejected_changes=rejected,
    ))

    state = _aggregate_external_flows(state)
    return _result_flags(state)


def recalculate(template: TemplateRef, changes: Iterable = (),
                config: Optional[SolverConfig] = None, strict: bool = False) -> FieldState:
    """Build a field from scratch: the state is a pure function of template and changes."""
    return recalculate_state(create_empty_state(template), changes, config=config, strict=strict)
