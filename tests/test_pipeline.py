"""Tests for the recalculation pipeline."""

import pytest

from factory_planner.catalog.facilities import FacilityID
from factory_planner.catalog.fixtures import PathFixtureID, PathTypeID
from factory_planner.catalog.items import ItemID
from factory_planner.catalog.recipes import Recipe
from factory_planner.catalog.regions import FieldTemplateID
from factory_planner.changes.errors import UnknownEntityError
from factory_planner.changes.types import (
    AddFacilityChange,
    AddPathChange,
    AddPathFixtureChange,
    MoveFacilityChange,
    SetPortItemChange,
)
from factory_planner.config import SolverConfig
from factory_planner.core.models import START_TO_END, ItemFlow
from factory_planner.field.pipeline import recalculate, recalculate_state
from factory_planner.field.samples import SAMPLE_TEMPLATE, get_sample_field_changes

VALLEY = FieldTemplateID.VALLEY_IV_MAIN

REFINE = Recipe("test_refine", FacilityID.REFINING_UNIT, 2,
                {ItemID.FERRIUM_ORE: 4}, {ItemID.FERRIUM: 2})


def unloader_changes():
    """A depot unloader on the bottom edge handing out ferrium ore at (11, 69)."""
    return [
        AddFacilityChange(facility_type=FacilityID.DEPOT_UNLOADER, position=(10, 69)),
        SetPortItemChange(facility_id="facility_1", port_index=0, item_id=ItemID.FERRIUM_ORE),
    ]


def belt_chain_changes():
    return unloader_changes() + [
        AddFacilityChange(facility_type=FacilityID.PROTOCOL_STASH, position=(10, 60)),
        AddPathChange(path_type=PathTypeID.BELT, points=[(11, 69), (11, 62)]),
    ]


def starved_refinery_changes():
    return unloader_changes() + [
        AddFacilityChange(facility_type=FacilityID.REFINING_UNIT, position=(10, 60)),
        AddFacilityChange(facility_type=FacilityID.ELECTRIC_PYLON, position=(14, 60)),
        AddPathChange(path_type=PathTypeID.BELT, points=[(11, 69), (11, 62)]),
    ]


class TestBeltChain:
    """Tests for a depot feeding a stash over one belt."""

    def test_flow_reaches_stash(self):
        state = recalculate(VALLEY, belt_chain_changes())
        stash = state.find_facility("facility_2")
        path = state.find_path("path_1")

        assert path.flow_direction == START_TO_END
        assert path.flows == [ItemFlow(ItemID.FERRIUM_ORE, 0.5, 0.5)]
        assert stash.input_flows == [ItemFlow(ItemID.FERRIUM_ORE, 0.5, 0.5)]

    def test_no_error_flags(self):
        state = recalculate(VALLEY, belt_chain_changes())

        for facility in state.facilities:
            assert facility.error_flags == {}
        assert state.find_path("path_1").error_flags == {}

    def test_depot_supplies_belt_rate(self):
        state = recalculate(VALLEY, belt_chain_changes())

        assert state.depot.input_flows == [ItemFlow(ItemID.FERRIUM_ORE, 0.5, 0.5)]

    def test_connection_refs(self):
        state = recalculate(VALLEY, belt_chain_changes())
        path = state.find_path("path_1")

        assert path.start_connected_to.facility_id == "facility_1"
        assert path.end_connected_to.facility_id == "facility_2"
        assert path.end_connected_to.port_index == 1

    def test_converges_within_chain_length(self):
        state = recalculate(VALLEY, belt_chain_changes())

        assert state.debug_info.flow_solver_converged is True
        # unloader -> stash
        assert state.debug_info.flow_solver_iterations <= 2 + 2

    def test_moving_stash_disconnects_belt(self):
        changes = belt_chain_changes() + [
            MoveFacilityChange(facility_id="facility_2", new_position=(20, 60)),
        ]
        state = recalculate(VALLEY, changes)
        path = state.find_path("path_1")

        assert path.end_connected_to is None
        assert path.error_flags.get("disconnected") is True
        assert state.find_facility("facility_2").input_flows == []


class TestStarvedFacility:
    """Tests for a refinery that receives less than its recipe needs."""

    def test_throttled_by_supply(self, recipe_catalog):
        recipe_catalog(REFINE)
        state = recalculate(VALLEY, starved_refinery_changes())
        refinery = state.find_facility("facility_2")

        assert refinery.actual_recipe == "test_refine"
        assert refinery.throttle_factor == pytest.approx(0.25)
        assert refinery.output_flows == [ItemFlow(ItemID.FERRIUM, 0.25, 0.25)]

    def test_converges_within_chain_length(self, recipe_catalog):
        recipe_catalog(REFINE)
        changes = starved_refinery_changes() + [
            AddFacilityChange(facility_type=FacilityID.PROTOCOL_STASH, position=(10, 50)),
            AddPathChange(path_type=PathTypeID.BELT, points=[(11, 60), (11, 52)]),
        ]
        state = recalculate(VALLEY, changes)

        assert state.find_facility("facility_4").input_flows == [
            ItemFlow(ItemID.FERRIUM, 0.25, 0.25)]
        assert state.debug_info.flow_solver_converged is True
        # unloader -> refinery -> stash
        assert state.debug_info.flow_solver_iterations <= 3 + 2

    def test_powered_without_flags(self, recipe_catalog):
        recipe_catalog(REFINE)
        state = recalculate(VALLEY, starved_refinery_changes())
        refinery = state.find_facility("facility_2")

        assert refinery.is_powered is True
        assert refinery.error_flags == {}

    def test_unpowered_without_pylon(self, recipe_catalog):
        recipe_catalog(REFINE)
        changes = [c for c in starved_refinery_changes()
                   if getattr(c, "facility_type", None) != FacilityID.ELECTRIC_PYLON]
        state = recalculate(VALLEY, changes)
        refinery = state.find_facility("facility_2")

        assert refinery.error_flags.get("unpowered") is True
        assert refinery.actual_recipe is None
        assert refinery.output_flows == []

    def test_no_valid_recipe(self, recipe_catalog):
        recipe_catalog(Recipe("test_other", FacilityID.REFINING_UNIT, 2,
                              {ItemID.AMETHYST_ORE: 1}, {ItemID.AMETHYST_FIBER: 1}))
        state = recalculate(VALLEY, starved_refinery_changes())
        refinery = state.find_facility("facility_2")

        assert refinery.actual_recipe is None
        assert refinery.error_flags.get("noValidRecipe") is True


class TestSplitter:
    """Tests for a belt splitter dividing one input between two outputs."""

    def _changes(self):
        return unloader_changes() + [
            AddPathFixtureChange(fixture_type=PathFixtureID.SPLITTER, position=(11, 60)),
            AddPathChange(path_type=PathTypeID.BELT, points=[(11, 69), (11, 60)]),
            AddPathChange(path_type=PathTypeID.BELT, points=[(11, 60), (5, 60)]),
            AddPathChange(path_type=PathTypeID.BELT, points=[(11, 60), (17, 60)]),
        ]

    def test_outputs_share_input(self):
        state = recalculate(VALLEY, self._changes())

        for path_id in ("path_2", "path_3"):
            path = state.find_path(path_id)
            assert path.flow_direction == START_TO_END
            assert [f.sink_rate for f in path.flows] == [pytest.approx(0.25)]

    def test_output_sides_sum_to_input(self):
        state = recalculate(VALLEY, self._changes())
        splitter = state.find_fixture("fixture_1")
        total = sum(flow.sink_rate for side in splitter.sides if side.sub_type == "output"
                    for flow in side.flows)

        assert total == pytest.approx(0.5)

    def test_sides_connected(self):
        state = recalculate(VALLEY, self._changes())
        sides = {side.direction: side.connected_path_id
                 for side in state.find_fixture("fixture_1").sides}

        assert sides == {"down": "path_1", "up": None, "left": "path_2", "right": "path_3"}


class TestBridge:
    """Tests for belts passing straight through a bridge."""

    def _vertical(self):
        return belt_chain_changes()[:3] + [
            AddPathFixtureChange(fixture_type=PathFixtureID.BELT_BRIDGE, position=(11, 64)),
            AddPathChange(path_type=PathTypeID.BELT, points=[(11, 69), (11, 64)]),
            AddPathChange(path_type=PathTypeID.BELT, points=[(11, 64), (11, 62)]),
        ]

    def _crossing(self):
        return self._vertical() + [
            AddFacilityChange(facility_type=FacilityID.DEPOT_UNLOADER, position=(16, 69)),
            SetPortItemChange(facility_id="facility_3", port_index=0,
                              item_id=ItemID.AMETHYST_ORE),
            AddFacilityChange(facility_type=FacilityID.PROTOCOL_STASH, position=(4, 60)),
            # enters the bridge from the right, leaves it to the left
            AddPathChange(path_type=PathTypeID.BELT, points=[(17, 69), (17, 64), (11, 64)]),
            AddPathChange(path_type=PathTypeID.BELT, points=[(11, 64), (5, 64), (5, 62)]),
        ]

    def test_flow_passes_through(self):
        state = recalculate(VALLEY, self._vertical())

        assert state.find_path("path_2").flow_direction == START_TO_END
        assert state.find_facility("facility_2").input_flows == [
            ItemFlow(ItemID.FERRIUM_ORE, 0.5, 0.5)]
        assert state.debug_info.flow_solver_converged is True

    def test_crossing_axes_stay_separate(self):
        state = recalculate(VALLEY, self._crossing())

        assert state.find_facility("facility_2").input_flows == [
            ItemFlow(ItemID.FERRIUM_ORE, 0.5, 0.5)]
        assert state.find_facility("facility_4").input_flows == [
            ItemFlow(ItemID.AMETHYST_ORE, 0.5, 0.5)]

    def test_sides_take_role_from_their_axis(self):
        state = recalculate(VALLEY, self._crossing())
        sides = {side.direction: side for side in state.find_fixture("fixture_1").sides}

        assert sides["up"].flows == [ItemFlow(ItemID.FERRIUM_ORE, 0.5, 0.5)]
        assert sides["left"].flows == [ItemFlow(ItemID.AMETHYST_ORE, 0.5, 0.5)]
        assert sides["down"].flows == []
        assert sides["right"].flows == []


class TestSolverCap:
    """Tests for the configurable iteration cap."""

    def test_non_convergence_is_reported(self):
        state = recalculate(VALLEY, belt_chain_changes(), config=SolverConfig(max_iterations=1))

        assert state.debug_info.flow_solver_converged is False
        assert state.debug_info.flow_solver_iterations == 1

    def test_default_cap_converges(self):
        state = recalculate(VALLEY, belt_chain_changes())

        assert state.debug_info.flow_solver_converged is True


class TestDeterminism:
    """Tests for recalculation being a pure function of template and changes."""

    def test_same_input_same_state(self):
        first = recalculate(SAMPLE_TEMPLATE, get_sample_field_changes())
        second = recalculate(SAMPLE_TEMPLATE, get_sample_field_changes())

        assert first == second

    def test_rerun_is_idempotent(self):
        state = recalculate(SAMPLE_TEMPLATE, get_sample_field_changes())

        assert recalculate_state(state) == state

    def test_incremental_matches_full(self):
        changes = belt_chain_changes()
        partial = recalculate(VALLEY, changes[:2])

        assert recalculate_state(partial, changes[2:]) == recalculate(VALLEY, changes)

    def test_wire_changes_match_models(self):
        wire = [change.model_dump(mode="json", by_alias=True) for change in belt_chain_changes()]

        assert recalculate(VALLEY, wire) == recalculate(VALLEY, belt_chain_changes())


class TestRejectedChanges:
    """Tests for changes the reducer refuses."""

    def test_skipped_and_recorded(self):
        changes = belt_chain_changes() + [
            MoveFacilityChange(facility_id="facility_9", new_position=(0, 0)),
        ]
        state = recalculate(VALLEY, changes)
        rejected = state.debug_info.rejected_changes

        assert len(rejected) == 1
        assert rejected[0].index == 4
        assert rejected[0].change_type == "move-facility"
        assert state.facilities == recalculate(VALLEY, belt_chain_changes()).facilities

    def test_unknown_wire_type_recorded(self):
        state = recalculate(VALLEY, [{"type": "teleport-facility"}])

        assert state.debug_info.rejected_changes[0].change_type == "teleport-facility"
        assert state.facilities == []

    def test_strict_mode_raises(self):
        changes = [MoveFacilityChange(facility_id="facility_9", new_position=(0, 0))]

        with pytest.raises(UnknownEntityError):
            recalculate(VALLEY, changes, strict=True)
