"""Tests for flow arithmetic, fixture behaviors, the solver loop and solver settings."""

import numpy as np
import pytest

from factory_planner.catalog.facilities import FacilityID
from factory_planner.catalog.fixtures import PathFixtureID, PathTypeID
from factory_planner.catalog.items import ItemID
from factory_planner.catalog.regions import FieldTemplateID
from factory_planner.config import SolverConfig
from factory_planner.core.models import (
    START_TO_END,
    Facility,
    FieldState,
    FixtureConnectionRef,
    FixtureSide,
    ItemFlow,
    Path,
    PathFixture,
    Port,
)
from factory_planner.field.pipeline import create_empty_state
from factory_planner.simulation.fixtures import calculate_fixture_flows
from factory_planner.simulation.flows import (
    apply_path_throughput_limit,
    filter_flows_for_path_type,
    merge_item_flows,
)
from factory_planner.simulation.solver import (
    FlowSnapshot,
    SolverState,
    distribute_reactor_crucible_outputs,
    flow_snapshot,
    has_converged,
    run_iteration,
    solve,
)

ORE = ItemID.FERRIUM_ORE
NUGGET = ItemID.FERRIUM
WATER = ItemID.CLEAN_WATER
JINCAO = ItemID.JINCAO_SOLUTION


def snapshot(*rows, keys=None):
    keys = keys or tuple(("path_1", "item_%d" % i) for i in range(len(rows)))
    return FlowSnapshot(tuple(keys), np.array(rows, dtype=float).reshape(-1, 2))


class TestThroughputLimit:
    """Tests for path capacity."""

    def test_under_capacity(self):
        path = apply_path_throughput_limit(
            Path("path_1", PathTypeID.BELT, [(0, 0), (5, 0)], flows=[ItemFlow(ORE, 0.3, 0.0)]))

        assert path.flows == [ItemFlow(ORE, 0.3, 0.3)]
        assert "congested" not in path.error_flags

    def test_scaled_proportionally(self):
        path = apply_path_throughput_limit(Path(
            "path_1", PathTypeID.BELT, [(0, 0), (5, 0)],
            flows=[ItemFlow(ORE, 0.75, 0.75), ItemFlow(NUGGET, 0.25, 0.25)]))

        assert [f.sink_rate for f in path.flows] == [pytest.approx(0.375), pytest.approx(0.125)]
        assert [f.source_rate for f in path.flows] == [0.75, 0.25]
        assert path.error_flags["congested"] is True

    def test_pipe_ceiling(self):
        path = apply_path_throughput_limit(
            Path("path_1", PathTypeID.PIPE, [(0, 0), (5, 0)], flows=[ItemFlow(WATER, 3.0, 3.0)]))

        assert path.flows[0].sink_rate == pytest.approx(2.0)


class TestPathTypeFilter:
    """Tests for what belts and pipes can carry."""

    def test_belt_drops_fluids(self):
        flows = [ItemFlow(ORE, 0.5, 0.5), ItemFlow(WATER, 1.0, 1.0)]

        assert filter_flows_for_path_type(PathTypeID.BELT, flows) == [ItemFlow(ORE, 0.5, 0.5)]

    def test_pipe_keeps_strongest_fluid(self):
        flows = [ItemFlow(WATER, 1.0, 1.0), ItemFlow(JINCAO, 1.5, 1.5), ItemFlow(ORE, 3.0, 3.0)]

        assert filter_flows_for_path_type(PathTypeID.PIPE, flows) == [ItemFlow(JINCAO, 1.5, 1.5)]

    def test_pipe_without_fluids(self):
        assert filter_flows_for_path_type(PathTypeID.PIPE, [ItemFlow(ORE, 1.0, 1.0)]) == []


class TestMergeFlows:
    """Tests for summing flows by item."""

    def test_sums_in_first_seen_order(self):
        merged = merge_item_flows([
            [ItemFlow(NUGGET, 0.1, 0.1), ItemFlow(ORE, 0.2, 0.1)],
            [ItemFlow(ORE, 0.3, 0.3)],
        ])

        assert [f.item for f in merged] == [NUGGET, ORE]
        assert merged[1].source_rate == pytest.approx(0.5)
        assert merged[1].sink_rate == pytest.approx(0.4)

    def test_empty(self):
        assert merge_item_flows([]) == []


class TestConvergence:
    """Tests for the snapshot comparison."""

    def test_within_epsilon(self):
        assert has_converged(snapshot((0.5, 0.5)), snapshot((0.5005, 0.5)), 0.001)

    def test_beyond_epsilon(self):
        assert not has_converged(snapshot((0.5, 0.5)), snapshot((0.502, 0.5)), 0.001)

    def test_structure_change(self):
        previous = snapshot((0.5, 0.5), keys=[("path_1", ORE)])
        current = snapshot((0.5, 0.5), keys=[("path_1", NUGGET)])

        assert not has_converged(previous, current, 0.001)

    def test_snapshot_of_empty_field(self):
        result = flow_snapshot(create_empty_state(FieldTemplateID.VALLEY_IV_MAIN))

        assert result.keys == ()
        assert result.rates.shape == (0, 2)


class TestSolverLoop:
    """Tests for iteration counting."""

    def test_iteration_counter(self):
        state = SolverState(create_empty_state(FieldTemplateID.VALLEY_IV_MAIN))

        assert run_iteration(run_iteration(state)).iteration == 2

    def test_empty_field_converges_at_once(self):
        result = solve(create_empty_state(FieldTemplateID.VALLEY_IV_MAIN))

        assert result.converged is True
        assert result.iterations == 1


class TestSolverConfig:
    """Tests for solver settings."""

    def test_defaults(self):
        config = SolverConfig()

        assert config.max_iterations == 100
        assert config.epsilon == 0.001

    @pytest.mark.parametrize("kwargs", [{"max_iterations": 0}, {"epsilon": -0.1}])
    def test_invalid(self, kwargs):
        with pytest.raises(ValueError):
            SolverConfig(**kwargs)


def field(paths, fixture):
    return FieldState("valley_iv_main", 70, 70, paths=paths, path_fixtures=[fixture])


def belt(path_id, *flows, **kwargs):
    return Path(path_id, PathTypeID.BELT, [(0, 0), (0, 5)], flows=list(flows), **kwargs)


def side(sub_type, direction, path_id=None):
    return FixtureSide("belt", sub_type, direction, connected_path_id=path_id)


class TestFixtureBehaviors:
    """Tests for splitter, converger and control port sides."""

    def test_converger_sums_inputs(self):
        fixture = PathFixture("fixture_1", PathFixtureID.CONVERGER, 5, 5, 0, sides=[
            side("input", "down", "path_1"), side("input", "left", "path_2"),
            side("input", "right"), side("output", "up", "path_3"),
        ])
        state = field([belt("path_1", ItemFlow(ORE, 0.25, 0.25)),
                       belt("path_2", ItemFlow(ORE, 0.25, 0.25)),
                       belt("path_3")], fixture)

        result = calculate_fixture_flows(fixture, state)

        assert result.sides[3].flows == [ItemFlow(ORE, 0.5, 0.5)]
        assert all(s.flows == [] for s in result.sides[:3])

    def test_splitter_with_one_connected_output(self):
        fixture = PathFixture("fixture_1", PathFixtureID.SPLITTER, 5, 5, 0, sides=[
            side("input", "down", "path_1"), side("output", "up", "path_2"),
            side("output", "left"), side("output", "right"),
        ])
        state = field([belt("path_1", ItemFlow(ORE, 0.5, 0.5)), belt("path_2")], fixture)

        result = calculate_fixture_flows(fixture, state)

        assert result.sides[1].flows == [ItemFlow(ORE, 0.5, 0.5)]
        assert result.sides[2].flows == []

    @pytest.mark.parametrize("set_item,expected", [
        (ORE, [ItemFlow(ORE, 0.5, 0.5)]),
        (WATER, []),
        (None, []),
    ])
    def test_control_port_passes_pinned_item(self, set_item, expected):
        fixture = PathFixture("fixture_1", PathFixtureID.ITEM_CONTROL_PORT, 0, 5, 0, sides=[
            side("input", "down", "path_1"), side("output", "up", "path_2"),
        ], set_item=set_item)
        arriving = belt("path_1", ItemFlow(ORE, 0.5, 0.5), ItemFlow(NUGGET, 0.2, 0.2),
                        flow_direction=START_TO_END,
                        end_connected_to=FixtureConnectionRef("fixture_1", 0))
        state = field([arriving, belt("path_2")], fixture)

        assert calculate_fixture_flows(fixture, state).sides[1].flows == expected


class TestReactorCrucible:
    """Tests for pooled outputs routed to pinned ports."""

    def test_pool_split_between_ports_of_one_item(self):
        facility = Facility(
            "facility_1", FacilityID.REACTOR_CRUCIBLE, 0, 0, 0, 3, 3,
            ports=[
                Port("pipe", "input", 0, 0, "up", connected_path_id="path_1"),
                Port("pipe", "output", 1, 0, "up", connected_path_id="path_2", set_item=WATER),
                Port("pipe", "output", 2, 0, "up", connected_path_id="path_3", set_item=WATER),
                Port("pipe", "output", 0, 2, "down", set_item=JINCAO),
                Port("pipe", "output", 1, 2, "down", connected_path_id="path_4"),
            ],
            input_flows=[ItemFlow(JINCAO, 0.5, 0.4)],
        )

        result = distribute_reactor_crucible_outputs(facility, [ItemFlow(WATER, 1.0, 1.0)])

        assert [p.flows for p in result.ports[1:]] == [
            [ItemFlow(WATER, 0.5, 0.5)], [ItemFlow(WATER, 0.5, 0.5)], [], []]
        assert result.output_flows == [ItemFlow(WATER, 1.0, 1.0)]
