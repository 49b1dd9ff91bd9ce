"""Projection, bracket and Monte Carlo report generators."""

from decimal import Decimal
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from rothplan.models.brackets import TaxBracket
from rothplan.models.inputs import SimulationInput
from rothplan.models.results import (
    BracketRecommendation,
    BracketRoom,
    PercentileOutcome,
    ProjectionSummary,
    YearResult,
)

TEMPLATE_DIR = Path(__file__).parent / "templates"


def money(value: Decimal | float | None) -> str:
    if value is None:
        return "-"
    return f"${value:,.0f}"


def percent(value: Decimal | float) -> str:
    return f"{value * 100:.1f}%"


def _environment() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    env.filters["money"] = money
    env.filters["percent"] = percent
    return env


class ProjectionReportGenerator:
    """Renders the year-by-year projection table and its summary."""

    def __init__(self) -> None:
        self.env = _environment()

    def render(
        self,
        inputs: SimulationInput,
        results: list[YearResult],
        summary: ProjectionSummary,
        recommendation: BracketRecommendation | None = None,
    ) -> str:
        template = self.env.get_template("projection.txt")
        return template.render(
            inputs=inputs, results=results, summary=summary, recommendation=recommendation
        )


class BracketReportGenerator:
    """Renders the bracket table and the bracket-room breakdown."""

    def __init__(self) -> None:
        self.env = _environment()

    def render(
        self,
        filing_status: str,
        brackets: list[TaxBracket],
        standard_deduction: Decimal,
        rooms: list[BracketRoom] | None = None,
        income: Decimal | None = None,
    ) -> str:
        template = self.env.get_template("brackets.txt")
        return template.render(
            filing_status=filing_status,
            brackets=brackets,
            standard_deduction=standard_deduction,
            rooms=rooms or [],
            income=income,
        )


class MonteCarloReportGenerator:
    """Renders percentile outcomes of a Monte Carlo run."""

    def __init__(self) -> None:
        self.env = _environment()

    def render(
        self,
        percentiles: list[PercentileOutcome],
        path_count: int,
        years: int,
        mean_return: float,
        volatility: float,
    ) -> str:
        template = self.env.get_template("monte_carlo.txt")
        return template.render(
            percentiles=percentiles,
            path_count=path_count,
            years=years,
            mean_return=mean_return,
            volatility=volatility,
        )
