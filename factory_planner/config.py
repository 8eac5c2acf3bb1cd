"""Engine constants and solver configuration.

The throughput ceilings and convergence settings are part of the saved-file
contract: a change list must replay to the same flows everywhere.
"""

from dataclasses import dataclass

# Items per second a single path can carry
BELT_THROUGHPUT = 0.5
PIPE_THROUGHPUT = 2.0

CONVERGENCE_EPSILON = 0.001
MAX_SOLVER_ITERATIONS = 100


@dataclass(frozen=True)
class SolverConfig:
    """Iteration cap and convergence tolerance for the flow solver."""
    max_iterations: int = MAX_SOLVER_ITERATIONS
    epsilon: float = CONVERGENCE_EPSILON

    def __post_init__(self):
        if self.max_iterations < 1:
            raise ValueError(f"max_iterations must be at least 1, got {self.max_iterations}")
        if self.epsilon < 0:
            raise ValueError(f"epsilon must be non-negative, got {self.epsilon}")


DEFAULT_SOLVER_CONFIG = SolverConfig()
