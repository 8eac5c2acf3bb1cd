"""Deterministic factory planner engine for Arknights: Endfield fields."""

from .config import DEFAULT_SOLVER_CONFIG, SolverConfig
from .field.history import ChangeLog
from .field.pipeline import recalculate, recalculate_state

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_SOLVER_CONFIG",
    "SolverConfig",
    "ChangeLog",
    "recalculate",
    "recalculate_state",
]
