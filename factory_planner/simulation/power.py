"""Power coverage and power balance."""

from dataclasses import replace
from typing import NamedTuple, Optional

from ..catalog.facilities import FACILITIES
from ..catalog.recipes import RECIPES
from ..core.models import Facility, FieldState


class PowerArea(NamedTuple):
    min_x: float
    max_x: float
    min_y: float
    max_y: float


class PowerStats(NamedTuple):
    generated: float
    consumed: float


def calculate_power_area(facility: Facility) -> Optional[PowerArea]:
    """Area powered by a pylon-like facility, centred on its footprint."""
    definition = FACILITIES.get(facility.type)
    if definition is None or definition.power_area is None:
        return None
    center_x = facility.x + facility.width / 2
    center_y = facility.y + facility.height / 2
    half_w = definition.power_area.width / 2
    half_h = definition.power_area.height / 2
    return PowerArea(center_x - half_w, center_x + half_w, center_y - half_h, center_y + half_h)


def is_facility_in_power_area(facility: Facility, area: PowerArea) -> bool:
    """True if the facility overlaps the area; touching an edge is not enough."""
    max_x = facility.x + facility.width - 1
    max_y = facility.y + facility.height - 1
    return (facility.x < area.max_x and max_x > area.min_x
            and facility.y < area.max_y and max_y > area.min_y)


def requires_power(facility: Facility) -> bool:
    definition = FACILITIES.get(facility.type)
    return bool(definition and definition.power)


def update_facility_powered_state(facility: Facility, state: FieldState) -> Facility:
    if not requires_power(facility):
        return replace(facility, is_powered=True)
    for source in state.facilities:
        area = calculate_power_area(source)
        if area is not None and is_facility_in_power_area(facility, area):
            return replace(facility, is_powered=True)
    return replace(facility, is_powered=False)


def update_all_facility_power_states(state: FieldState) -> FieldState:
    return replace(state, facilities=[
        update_facility_powered_state(facility, state) for facility in state.facilities
    ])


def calculate_power_stats(state: FieldState) -> PowerStats:
    """Power generated by running generator recipes and consumed by powered facilities.

    Generation scales with the generator's throttle factor.
    """
    generated = 0.0
    consumed = 0.0
    for facility in state.facilities:
        if not facility.is_powered:
            continue
        recipe = RECIPES.get(facility.actual_recipe) if facility.actual_recipe else None
        if recipe is not None and recipe.power_output:
            throttle = 1.0 if facility.throttle_factor is None else facility.throttle_factor
            generated += recipe.power_output * throttle
        definition = FACILITIES.get(facility.type)
        if definition is not None and definition.power:
            consumed += definition.power
    return PowerStats(generated, consumed)
