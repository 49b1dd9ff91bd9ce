"""Tests for the Monte Carlo projector."""

import math

import pytest

from rothplan.engines.monte_carlo import MonteCarloProjector, compute_percentiles
from rothplan.models.results import GrowthScenario, PathOutcome


class FakeRng:
    """Returns canned uniforms in order."""

    def __init__(self, values):
        self.values = list(values)

    def random(self):
        return self.values.pop(0)


class TestSampling:
    def test_box_muller_with_known_uniforms(self):
        projector = MonteCarloProjector(rng=FakeRng([1 - math.exp(-0.5), 0.0]))
        assert projector.standard_normal() == pytest.approx(1.0)

    def test_zero_volatility_returns_mean(self):
        projector = MonteCarloProjector(seed=1)
        assert projector.sample_return(0.06, 0.0) == pytest.approx(0.06)

    def test_mean_at_or_below_total_loss(self):
        projector = MonteCarloProjector(seed=1)
        assert projector.sample_return(-1.0, 0.0) == -1.0
        assert projector.sample_return(-1.5, 0.3) == -1.0

    def test_draws_are_roughly_standard_normal(self):
        projector = MonteCarloProjector(seed=7)
        draws = [projector.standard_normal() for _ in range(20_000)]
        mean = sum(draws) / len(draws)
        variance = sum((d - mean) ** 2 for d in draws) / len(draws)
        assert abs(mean) < 0.05
        assert variance == pytest.approx(1.0, abs=0.05)


class TestRunPaths:
    def test_zero_volatility_is_deterministic_compounding(self):
        projector = MonteCarloProjector(seed=3)
        paths = projector.run_paths(100_000, 50_000, 10, 0.06, volatility=0.0, path_count=5)
        assert len(paths) == 5
        for path in paths:
            assert path.traditional == pytest.approx(100_000 * 1.06**10)
            assert path.roth == pytest.approx(50_000 * 1.06**10)
            assert path.total == pytest.approx(150_000 * 1.06**10)

    def test_same_seed_same_paths(self):
        first = MonteCarloProjector(seed=42).run_paths(100_000, 0, 20, 0.06, path_count=50)
        second = MonteCarloProjector(seed=42).run_paths(100_000, 0, 20, 0.06, path_count=50)
        assert first == second

    def test_different_seeds_differ(self):
        first = MonteCarloProjector(seed=1).run_paths(100_000, 0, 20, 0.06, path_count=10)
        second = MonteCarloProjector(seed=2).run_paths(100_000, 0, 20, 0.06, path_count=10)
        assert first != second

    def test_accounts_share_the_same_return(self):
        paths = MonteCarloProjector(seed=5).run_paths(200_000, 100_000, 15, 0.05, path_count=20)
        for path in paths:
            assert path.traditional / path.roth == pytest.approx(2.0)

    def test_balances_stay_positive(self):
        paths = MonteCarloProjector(seed=9).run_paths(10_000, 10_000, 30, 0.0, 0.5, 100)
        assert all(p.total > 0 for p in paths)

    def test_total_loss_wipes_out_balances(self):
        paths = MonteCarloProjector(seed=1).run_paths(100.0, 50.0, 2, -1.0, 0.0, 3)
        assert len(paths) == 3
        assert all(p.total == 0 for p in paths)

    def test_zero_years_keeps_initial_balances(self):
        [path] = MonteCarloProjector(seed=0).run_paths(1_000, 2_000, 0, 0.06, path_count=1)
        assert path.total == 3_000


class TestPercentiles:
    @pytest.fixture
    def paths(self):
        # Deliberately unsorted
        totals = [7, 3, 11, 1, 9, 5, 2, 10, 4, 8, 6]
        return [PathOutcome(traditional=t, roth=0, total=t) for t in totals]

    def test_nearest_rank_without_interpolation(self, paths):
        result = compute_percentiles(paths)
        assert [r.percentile for r in result] == [10, 25, 50, 75, 90]
        assert [r.total for r in result] == [2, 3, 6, 8, 10]

    def test_input_not_mutated(self, paths):
        before = [p.total for p in paths]
        compute_percentiles(paths)
        assert [p.total for p in paths] == before

    def test_custom_percentiles(self, paths):
        result = compute_percentiles(paths, percentiles=[0, 100])
        assert [r.total for r in result] == [1, 11]

    def test_out_of_range_percentiles_clamp(self, paths):
        result = compute_percentiles(paths, percentiles=[-10, 150])
        assert [r.total for r in result] == [1, 11]

    def test_empty(self):
        assert compute_percentiles([]) == []


class TestGrowthScenarios:
    def test_one_outcome_per_scenario(self):
        scenarios = [
            GrowthScenario(name="Conservative", mean_return=0.04, volatility=0.0),
            GrowthScenario(name="Aggressive", mean_return=0.09, volatility=0.0),
        ]
        outcomes = MonteCarloProjector(seed=11).run_growth_scenarios(100_000, 0, 10, scenarios)
        assert [o.scenario for o in outcomes] == ["Conservative", "Aggressive"]
        assert outcomes[0].total == pytest.approx(100_000 * 1.04**10)
        assert outcomes[1].total == pytest.approx(100_000 * 1.09**10)
