"""Projection engines."""

from rothplan.engines.monte_carlo import MonteCarloProjector, compute_percentiles
from rothplan.engines.simulator import ProjectionEngine, run_simulation

__all__ = [
    "MonteCarloProjector",
    "ProjectionEngine",
    "compute_percentiles",
    "run_simulation",
]
