"""Monte Carlo projection of account balances.

Replaces deterministic growth with log-normal annual returns. Both accounts
see the same sampled return each year (one market, two wrappers). Paths are
independent; only final balances are kept.
"""

import logging
import math
from collections.abc import Sequence

import numpy as np

from rothplan.models.results import (
    GrowthScenario,
    PathOutcome,
    PercentileOutcome,
    ScenarioOutcome,
)

logger = logging.getLogger(__name__)

DEFAULT_VOLATILITY = 0.15
DEFAULT_PATH_COUNT = 1000
DEFAULT_PERCENTILES = (10, 25, 50, 75, 90)
TOTAL_LOSS = -1.0


class MonteCarloProjector:
    """Samples return paths from a seedable numpy Generator."""

    def __init__(self, seed: int | None = None, rng: np.random.Generator | None = None) -> None:
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    def standard_normal(self) -> float:
        """One N(0, 1) draw via the Box-Muller transform."""
        u1 = 1.0 - self.rng.random()  # (0, 1], keeps log finite
        u2 = self.rng.random()
        return math.sqrt(-2.0 * math.log(u1)) * math.cos(2.0 * math.pi * u2)

    def sample_return(self, mean: float, std_dev: float) -> float:
        """One annual return whose gross factor is log-normal around 1 + mean.

        A mean of -100% or worse has no log-normal centre; every draw is a
        total loss.
        """
        z = self.standard_normal()
        if mean <= TOTAL_LOSS:
            return TOTAL_LOSS
        return math.exp(math.log1p(mean) + std_dev * z) - 1.0

    def run_paths(
        self,
        initial_traditional: float,
        initial_roth: float,
        years: int,
        mean_return: float,
        volatility: float = DEFAULT_VOLATILITY,
        path_count: int = DEFAULT_PATH_COUNT,
    ) -> list[PathOutcome]:
        """Compound both balances along independently sampled paths."""
        logger.info(
            "Running %d path(s) over %d year(s), mean=%.4f volatility=%.4f",
            path_count, years, mean_return, volatility,
        )
        outcomes: list[PathOutcome] = []
        for _ in range(path_count):
            traditional = float(initial_traditional)
            roth = float(initial_roth)
            for _ in range(years):
                rate = self.sample_return(mean_return, volatility)
                traditional *= 1.0 + rate
                roth *= 1.0 + rate
            outcomes.append(
                PathOutcome(traditional=traditional, roth=roth, total=traditional + roth)
            )
        return outcomes

    def run_growth_scenarios(
        self,
        traditional: float,
        roth: float,
        years: int,
        scenarios: Sequence[GrowthScenario],
    ) -> list[ScenarioOutcome]:
        """One sampled path per named scenario."""
        results: list[ScenarioOutcome] = []
        for scenario in scenarios:
            path = self.run_paths(
                traditional, roth, years, scenario.mean_return, scenario.volatility, path_count=1
            )[0]
            results.append(
                ScenarioOutcome(
                    scenario=scenario.name,
                    traditional=path.traditional,
                    roth=path.roth,
                    total=path.total,
                )
            )
        return results


def compute_percentiles(
    paths: Sequence[PathOutcome],
    percentiles: Sequence[float] = DEFAULT_PERCENTILES,
) -> list[PercentileOutcome]:
    """Nearest-rank percentiles of path totals (no interpolation).

    Percentiles outside 0-100 clamp to the lowest or highest path.
    """
    if not paths:
        return []
    ranked = sorted(paths, key=lambda p: p.total)
    last = len(ranked) - 1
    results: list[PercentileOutcome] = []
    for p in percentiles:
        index = min(max(math.floor(p / 100 * last), 0), last)
        path = ranked[index]
        results.append(
            PercentileOutcome(
                percentile=p, traditional=path.traditional, roth=path.roth, total=path.total
            )
        )
    return results
