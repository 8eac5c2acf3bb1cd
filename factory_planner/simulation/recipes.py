"""Recipe inference.

A facility without a player-set recipe runs whichever recipe of its type
consumes exactly the set of items arriving on its input ports. When several
recipes match, the lowest recipe id wins and a warning lists every match.
"""

import logging
from dataclasses import replace
from typing import List, Optional, Set, Tuple

from ..catalog.recipes import RECIPES, Recipe
from ..core.models import Facility, FieldState, RecipeMatchWarning

logger = logging.getLogger(__name__)


def get_input_items(facility: Facility) -> Set[str]:
    """Items arriving on input ports with a non-zero source rate."""
    items = set()
    for port in facility.ports:
        if port.sub_type != "input":
            continue
        for flow in port.flows:
            if flow.source_rate > 0:
                items.add(flow.item)
    return items


def find_matching_recipes(facility_type: str, input_items: Set[str]) -> List[str]:
    """Ids of every recipe of this facility type whose inputs are exactly ``input_items``, sorted."""
    return sorted(
        recipe_id for recipe_id, recipe in RECIPES.items()
        if recipe.facility_id == facility_type and set(recipe.inputs) == input_items
    )


def find_matching_recipe(facility: Facility, input_items: Set[str],
                         warnings: Optional[List[RecipeMatchWarning]] = None) -> Optional[str]:
    """Pick the recipe for a facility's current inputs.

    Args:
        facility: Facility being inferred
        input_items: Items currently arriving
        warnings: Collects a warning when more than one recipe matches

    Returns:
        The lowest matching recipe id, or None
    """
    matches = find_matching_recipes(facility.type, input_items)
    if not matches:
        return None
    if len(matches) > 1:
        logger.warning("Facility %s matches %d recipes, using %s",
                       facility.id, len(matches), matches[0])
        if warnings is not None:
            warnings.append(RecipeMatchWarning(facility.id, matches))
    return matches[0]


def can_recipe_activate(recipe: Recipe, facility: Facility) -> bool:
    if not facility.is_powered:
        return False
    available = get_input_items(facility)
    return all(item in available for item in recipe.inputs)


def should_use_jump_start(facility: Facility) -> bool:
    """Jump-start applies to a set recipe only while nothing is arriving."""
    if not facility.jump_start_recipe or not facility.set_recipe:
        return False
    return not get_input_items(facility)


def update_facility_recipe(facility: Facility,
                           warnings: Optional[List[RecipeMatchWarning]] = None) -> Facility:
    if facility.set_recipe:
        if should_use_jump_start(facility) and not facility.is_powered:
            return replace(facility, actual_recipe=None)
        return replace(facility, actual_recipe=facility.set_recipe)

    input_items = get_input_items(facility)
    if not input_items:
        return replace(facility, actual_recipe=None)

    recipe_id = find_matching_recipe(facility, input_items, warnings)
    if recipe_id is None:
        return replace(facility, actual_recipe=None)
    active = can_recipe_activate(RECIPES[recipe_id], facility)
    return replace(facility, actual_recipe=recipe_id if active else None)


def update_all_facility_recipes(state: FieldState) -> Tuple[FieldState, List[RecipeMatchWarning]]:
    warnings: List[RecipeMatchWarning] = []
    facilities = [update_facility_recipe(facility, warnings) for facility in state.facilities]
    return replace(state, facilities=facilities), warnings
