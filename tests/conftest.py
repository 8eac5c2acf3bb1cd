"""Shared fixtures for the factory planner tests."""

import pytest

from factory_planner.catalog import recipes as catalog_recipes
from factory_planner.catalog.recipes import Recipe
from factory_planner.changes import reducer, types as change_types
from factory_planner.simulation import flows, power, recipes, solver

# Every module that looks recipes up by id
_RECIPE_MODULES = (catalog_recipes, change_types, reducer, flows, power, recipes, solver)


@pytest.fixture
def recipe_catalog(monkeypatch):
    """Replace the recipe catalog with the given recipes for one test."""

    def install(*test_recipes: Recipe):
        table = {recipe.id: recipe for recipe in test_recipes}
        for module in _RECIPE_MODULES:
            monkeypatch.setattr(module, "RECIPES", table)
        return table

    return install
