"""Tests for text report rendering."""

from decimal import Decimal

from rothplan.engines.brackets import get_brackets, get_standard_deduction
from rothplan.engines.simulator import (
    analyze_bracket_optimization,
    analyze_tax_brackets,
    run_simulation,
    summarize,
)
from rothplan.models.enums import FilingStatus
from rothplan.models.results import PercentileOutcome
from rothplan.reports import (
    BracketReportGenerator,
    MonteCarloReportGenerator,
    ProjectionReportGenerator,
)
from rothplan.reports.projection import money, percent


class TestFilters:
    def test_money(self):
        assert money(Decimal("1234567.89")) == "$1,234,568"
        assert money(0.0) == "$0"
        assert money(None) == "-"

    def test_percent(self):
        assert percent(Decimal("0.24")) == "24.0%"
        assert percent(0.15) == "15.0%"


class TestProjectionReport:
    def test_renders_rows_and_summary(self, one_time_inputs):
        results = run_simulation(one_time_inputs)
        output = ProjectionReportGenerator().render(
            one_time_inputs, results, summarize(results)
        )
        assert "=== Roth Conversion Projection (one-time, mfj) ===" in output
        assert "$200,000" in output
        assert "$28,191" in output
        assert "24.0%" in output
        assert "Break-Even Year:       Not reached" in output
        assert "Total Converted:       $200,000" in output

    def test_marks_break_even_years(self, make_inputs):
        inputs = make_inputs(
            age1=72, age2=72, strategy={"kind": "one-time", "amount": Decimal("500000")}
        )
        results = run_simulation(inputs)
        output = ProjectionReportGenerator().render(inputs, results, summarize(results))
        row = next(line for line in output.splitlines() if line.startswith("1 "))
        assert row.endswith(" *")
        assert "Break-Even Year:       Year 1" in output

    def test_one_line_per_year(self, make_inputs):
        inputs = make_inputs(simulation_years=5)
        results = run_simulation(inputs)
        output = ProjectionReportGenerator().render(inputs, results, summarize(results))
        rows = [line for line in output.splitlines() if line[:1].isdigit()]
        assert len(rows) == 5

    def test_bracket_recommendation_section(self, make_inputs):
        inputs = make_inputs(strategy={"kind": "bracket-optimization"})
        results = run_simulation(inputs)
        recommendation = analyze_bracket_optimization(
            Decimal("300000"), Decimal("1000000"), Decimal("0.12"), FilingStatus.SINGLE
        )
        output = ProjectionReportGenerator().render(
            inputs, results, summarize(results), recommendation
        )
        assert "BRACKET OPTIMIZATION" in output
        assert "Conversion not recommended" in output
        assert "Convert to reach 12% bracket" in output
        assert "Recommended Amount" not in output

    def test_no_recommendation_section_by_default(self, one_time_inputs):
        results = run_simulation(one_time_inputs)
        output = ProjectionReportGenerator().render(
            one_time_inputs, results, summarize(results)
        )
        assert "BRACKET OPTIMIZATION" not in output


class TestBracketReport:
    def test_bracket_table(self):
        output = BracketReportGenerator().render(
            FilingStatus.SINGLE,
            get_brackets(FilingStatus.SINGLE),
            get_standard_deduction(FilingStatus.SINGLE),
        )
        assert "=== Federal Tax Brackets (single) ===" in output
        assert "Standard Deduction: $14,600" in output
        assert "$95,375" in output
        assert "and above" in output
        assert "Bracket Room" not in output

    def test_bracket_room(self):
        rooms = analyze_tax_brackets(Decimal("95375"), Decimal("1000000"), FilingStatus.SINGLE)
        output = BracketReportGenerator().render(
            FilingStatus.SINGLE,
            get_brackets(FilingStatus.SINGLE),
            get_standard_deduction(FilingStatus.SINGLE),
            rooms=rooms,
            income=Decimal("95375"),
        )
        assert "=== Bracket Room at $95,375 ===" in output
        assert "$86,725" in output
        assert "unbounded" in output


class TestMonteCarloReport:
    def test_percentile_rows(self):
        percentiles = [
            PercentileOutcome(percentile=10, traditional=90_000, roth=10_000, total=100_000),
            PercentileOutcome(percentile=90, traditional=270_000, roth=30_000, total=300_000),
        ]
        output = MonteCarloReportGenerator().render(percentiles, 1000, 20, 0.06, 0.15)
        assert "=== Monte Carlo Projection ===" in output
        assert "1000 path(s), 20 year(s), mean return 6.0%, volatility 15.0%" in output
        assert "P10" in output
        assert "P90" in output
        assert "$300,000" in output
