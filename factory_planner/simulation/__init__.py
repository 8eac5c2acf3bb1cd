"""Connections, power, recipe inference and the iterative flow solver."""

from .power import calculate_power_stats, update_all_facility_power_states
from .recipes import find_matching_recipe, update_all_facility_recipes
from .solver import SolveResult, SolverState, run_iteration, solve

__all__ = [
    "calculate_power_stats",
    "update_all_facility_power_states",
    "find_matching_recipe",
    "update_all_facility_recipes",
    "SolveResult",
    "SolverState",
    "run_iteration",
    "solve",
]
