"""Tests for recipe inference, throttling and flow analysis."""

import logging

import pytest

from factory_planner.catalog.facilities import FacilityID
from factory_planner.catalog.fixtures import PathTypeID
from factory_planner.catalog.items import ItemID
from factory_planner.catalog.recipes import Recipe
from factory_planner.catalog.regions import FieldTemplateID
from factory_planner.changes.types import (
    AddFacilityChange,
    AddPathChange,
    SetFacilityRecipeChange,
    SetPortItemChange,
)
from factory_planner.core.models import Facility, ItemFlow, Port, RecipeMatchWarning
from factory_planner.field.pipeline import recalculate
from factory_planner.simulation.flows import (
    analyze_facility_flows,
    calculate_throttle_factor,
    has_facility_flow_issues,
)
from factory_planner.simulation.recipes import (
    find_matching_recipe,
    find_matching_recipes,
    update_all_facility_recipes,
    update_facility_recipe,
)
from factory_planner.simulation.solver import solve

VALLEY = FieldTemplateID.VALLEY_IV_MAIN
ORE = ItemID.FERRIUM_ORE
NUGGET = ItemID.FERRIUM


def make_refinery(*input_flows, **kwargs):
    ports = [Port("belt", "input", 1, 2, "down", flows=list(input_flows)),
             Port("belt", "output", 1, 0, "up")]
    defaults = dict(id="facility_1", type=FacilityID.REFINING_UNIT, x=0, y=0, rotation=0,
                    width=3, height=3, ports=ports, is_powered=True)
    defaults.update(kwargs)
    return Facility(**defaults)


def fed_refinery_changes():
    """Depot ore on a belt into a powered refinery."""
    return [
        AddFacilityChange(facility_type=FacilityID.DEPOT_UNLOADER, position=(10, 69)),
        SetPortItemChange(facility_id="facility_1", port_index=0, item_id=ORE),
        AddFacilityChange(facility_type=FacilityID.REFINING_UNIT, position=(10, 60)),
        AddFacilityChange(facility_type=FacilityID.ELECTRIC_PYLON, position=(14, 60)),
        AddPathChange(path_type=PathTypeID.BELT, points=[(11, 69), (11, 62)]),
    ]


class TestRecipeMatching:
    """Tests for exact input-set matching."""

    def test_exact_match_only(self, recipe_catalog):
        recipe_catalog(
            Recipe("test_single", FacilityID.REFINING_UNIT, 2, {ORE: 1}, {NUGGET: 1}),
            Recipe("test_double", FacilityID.REFINING_UNIT, 2,
                   {ORE: 1, ItemID.AMETHYST_ORE: 1}, {NUGGET: 1}),
        )

        assert find_matching_recipes(FacilityID.REFINING_UNIT, {ORE}) == ["test_single"]
        assert find_matching_recipes(FacilityID.REFINING_UNIT, {ItemID.AMETHYST_ORE}) == []

    def test_other_facility_type_ignored(self, recipe_catalog):
        recipe_catalog(Recipe("test_fit", FacilityID.FITTING_UNIT, 2, {ORE: 1}, {NUGGET: 1}))

        assert find_matching_recipes(FacilityID.REFINING_UNIT, {ORE}) == []

    def test_zero_source_rate_is_not_an_input(self, recipe_catalog):
        recipe_catalog(Recipe("test_single", FacilityID.REFINING_UNIT, 2, {ORE: 1}, {NUGGET: 1}))
        facility = update_facility_recipe(make_refinery(ItemFlow(ORE, 0.0, 0.0)))

        assert facility.actual_recipe is None


class TestRecipeTieBreak:
    """Tests for picking among several matching recipes."""

    def test_lowest_id_wins(self, recipe_catalog):
        recipe_catalog(
            Recipe("test_pick_b", FacilityID.REFINING_UNIT, 2, {ORE: 1}, {NUGGET: 1}),
            Recipe("test_pick_a", FacilityID.REFINING_UNIT, 2, {ORE: 1}, {NUGGET: 2}),
        )
        warnings = []

        chosen = find_matching_recipe(make_refinery(), {ORE}, warnings)

        assert chosen == "test_pick_a"
        assert warnings == [RecipeMatchWarning("facility_1", ["test_pick_a", "test_pick_b"])]

    def test_independent_of_catalog_order(self, recipe_catalog):
        first = Recipe("test_pick_a", FacilityID.REFINING_UNIT, 2, {ORE: 1}, {NUGGET: 2})
        second = Recipe("test_pick_b", FacilityID.REFINING_UNIT, 2, {ORE: 1}, {NUGGET: 1})

        recipe_catalog(first, second)
        forward = find_matching_recipe(make_refinery(), {ORE})
        recipe_catalog(second, first)
        backward = find_matching_recipe(make_refinery(), {ORE})

        assert forward == backward == "test_pick_a"

    def test_single_match_has_no_warning(self, recipe_catalog):
        recipe_catalog(Recipe("test_single", FacilityID.REFINING_UNIT, 2, {ORE: 1}, {NUGGET: 1}))
        warnings = []

        assert find_matching_recipe(make_refinery(), {ORE}, warnings) == "test_single"
        assert warnings == []

    def test_warning_is_logged(self, recipe_catalog, caplog):
        recipe_catalog(
            Recipe("test_pick_b", FacilityID.REFINING_UNIT, 2, {ORE: 1}, {NUGGET: 1}),
            Recipe("test_pick_a", FacilityID.REFINING_UNIT, 2, {ORE: 1}, {NUGGET: 2}),
        )
        with caplog.at_level(logging.WARNING, logger="factory_planner.simulation.recipes"):
            find_matching_recipe(make_refinery(), {ORE})

        assert "test_pick_a" in caplog.text

    def test_warning_in_debug_info(self, recipe_catalog):
        recipe_catalog(
            Recipe("test_pick_b", FacilityID.REFINING_UNIT, 2, {ORE: 4}, {NUGGET: 1}),
            Recipe("test_pick_a", FacilityID.REFINING_UNIT, 2, {ORE: 4}, {NUGGET: 2}),
        )
        state = recalculate(VALLEY, fed_refinery_changes())

        assert state.find_facility("facility_2").actual_recipe == "test_pick_a"
        assert state.debug_info.multiple_recipe_match_warnings == [
            RecipeMatchWarning("facility_2", ["test_pick_a", "test_pick_b"]),
        ]


class TestSetRecipes:
    """Tests for player-set recipes and jump-start."""

    def test_set_recipe_overrides_inference(self, recipe_catalog):
        recipe_catalog(
            Recipe("test_inferred", FacilityID.REFINING_UNIT, 2, {ORE: 1}, {NUGGET: 1}),
            Recipe("test_chosen", FacilityID.REFINING_UNIT, 2, {ItemID.AMETHYST_ORE: 1}, {NUGGET: 1}),
        )
        facility = make_refinery(ItemFlow(ORE, 0.5, 0.5), set_recipe="test_chosen")

        assert update_facility_recipe(facility).actual_recipe == "test_chosen"

    def test_jump_start_needs_power(self, recipe_catalog):
        recipe_catalog(Recipe("test_chosen", FacilityID.REFINING_UNIT, 2, {ORE: 1}, {NUGGET: 1}))
        facility = make_refinery(set_recipe="test_chosen", jump_start_recipe=True, is_powered=False)

        assert update_facility_recipe(facility).actual_recipe is None

    def test_unpowered_inference_is_inactive(self, recipe_catalog):
        recipe_catalog(Recipe("test_single", FacilityID.REFINING_UNIT, 2, {ORE: 1}, {NUGGET: 1}))
        facility = make_refinery(ItemFlow(ORE, 0.5, 0.5), is_powered=False)

        assert update_facility_recipe(facility).actual_recipe is None


class TestThrottle:
    """Tests for the throttle factor."""

    RECIPE = Recipe("test_mix", FacilityID.REFINING_UNIT, 1,
                    {ORE: 2, ItemID.AMETHYST_ORE: 1}, {NUGGET: 1})

    def _facility(self, ore_rate, amethyst_rate=1.0):
        return make_refinery(ItemFlow(ORE, ore_rate, ore_rate),
                             ItemFlow(ItemID.AMETHYST_ORE, amethyst_rate, amethyst_rate))

    def test_full_supply(self):
        assert calculate_throttle_factor(self._facility(2.0), self.RECIPE) == 1.0

    def test_scarcest_input_limits(self):
        assert calculate_throttle_factor(self._facility(2.0, 0.25), self.RECIPE) == pytest.approx(0.25)

    def test_clamped_to_one(self):
        assert calculate_throttle_factor(self._facility(10.0, 10.0), self.RECIPE) == 1.0

    def test_missing_input_stops(self):
        facility = make_refinery(ItemFlow(ORE, 2.0, 2.0))

        assert calculate_throttle_factor(facility, self.RECIPE) == 0.0

    def test_monotone_in_supply(self):
        rates = [2.0, 1.5, 1.0, 0.6, 0.2, 0.0]
        throttles = [calculate_throttle_factor(self._facility(rate), self.RECIPE) for rate in rates]

        assert throttles == sorted(throttles, reverse=True)
        assert all(0.0 <= t <= 1.0 for t in throttles)


class TestCyclicInference:
    """Tests for recipe inference on a two-refinery loop."""

    RECIPES = (
        Recipe("test_cycle_a", FacilityID.REFINING_UNIT, 1, {ORE: 1}, {NUGGET: 1}),
        Recipe("test_cycle_b", FacilityID.REFINING_UNIT, 1, {NUGGET: 1}, {ORE: 1}),
    )

    def _changes(self):
        return [
            AddFacilityChange(facility_type=FacilityID.REFINING_UNIT, position=(10, 40)),
            SetFacilityRecipeChange(facility_id="facility_1", recipe_id="test_cycle_a",
                                    jump_start=True),
            AddFacilityChange(facility_type=FacilityID.REFINING_UNIT, position=(10, 50)),
            AddFacilityChange(facility_type=FacilityID.ELECTRIC_PYLON, position=(14, 45)),
            # second refinery back into the first
            AddPathChange(path_type=PathTypeID.BELT, points=[(11, 50), (11, 42)]),
            # first refinery around the side into the second
            AddPathChange(path_type=PathTypeID.BELT, points=[
                (10, 40), (10, 37), (6, 37), (6, 56), (10, 56), (10, 52)]),
        ]

    def test_loop_converges(self, recipe_catalog):
        recipe_catalog(*self.RECIPES)
        state = recalculate(VALLEY, self._changes())

        assert state.debug_info.flow_solver_converged is True
        assert state.find_facility("facility_1").actual_recipe == "test_cycle_a"
        assert state.find_facility("facility_2").actual_recipe == "test_cycle_b"

    def test_early_inference_matches_converged_inference(self, recipe_catalog):
        recipe_catalog(*self.RECIPES)
        early = recalculate(VALLEY, self._changes())

        # Infer again from the converged flows and solve once more
        reinferred, _ = update_all_facility_recipes(early)
        late = solve(reinferred).state

        assert [f.actual_recipe for f in late.facilities] == \
            [f.actual_recipe for f in early.facilities]
        for before, after in zip(early.facilities, late.facilities):
            assert update_facility_recipe(before).actual_recipe == before.actual_recipe
            assert (after.throttle_factor or 0.0) == pytest.approx(before.throttle_factor or 0.0)
        for before, after in zip(early.paths, late.paths):
            assert [f.sink_rate for f in after.flows] == \
                pytest.approx([f.sink_rate for f in before.flows])


class TestFlowAnalysis:
    """Tests for starvation and oversupply analysis."""

    RECIPE = Recipe("test_single", FacilityID.REFINING_UNIT, 2, {ORE: 1}, {NUGGET: 1})

    def test_exact_supply_has_no_issues(self, recipe_catalog):
        recipe_catalog(self.RECIPE)
        facility = make_refinery(actual_recipe="test_single",
                                 input_flows=[ItemFlow(ORE, 0.5, 0.5)],
                                 output_flows=[ItemFlow(NUGGET, 0.5, 0.5)])

        analysis = analyze_facility_flows(facility)

        assert analysis.insufficient == set()
        assert analysis.bottleneck_item is None
        assert has_facility_flow_issues(facility) is False

    def test_starved_input_is_bottleneck(self, recipe_catalog):
        recipe_catalog(self.RECIPE)
        facility = make_refinery(actual_recipe="test_single",
                                 input_flows=[ItemFlow(ORE, 0.2, 0.2)],
                                 output_flows=[ItemFlow(NUGGET, 0.2, 0.2)])

        analysis = analyze_facility_flows(facility)

        assert analysis.insufficient == {ORE}
        assert analysis.bottleneck_item == ORE
        assert has_facility_flow_issues(facility) is True

    def test_oversupply(self, recipe_catalog):
        recipe_catalog(self.RECIPE)
        facility = make_refinery(actual_recipe="test_single",
                                 input_flows=[ItemFlow(ORE, 2.0, 0.5)])

        assert analyze_facility_flows(facility).oversupplied == {ORE}

    def test_no_recipe(self):
        assert analyze_facility_flows(make_refinery()) == (set(), None, set())