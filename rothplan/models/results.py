"""Projection output models."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class YearResult(BaseModel):
    """End-of-year snapshot for one simulated year."""

    model_config = ConfigDict(frozen=True)

    year: int
    age1: int
    age2: int
    annual_income: Decimal
    # Balances
    traditional_balance: Decimal
    roth_balance: Decimal
    taxable_balance: Decimal | None = None
    # Conversion
    conversion_amount: Decimal
    conversion_tax: Decimal
    marginal_tax_rate: Decimal
    # RMD
    rmd_amount: Decimal
    rmd_tax: Decimal
    # Totals
    cumulative_tax_paid: Decimal
    total_after_tax_wealth: Decimal
    no_conversion_wealth: Decimal
    break_even: bool
    is_retired: bool


class ProjectionSummary(BaseModel):
    years: int
    break_even_year: int | None
    total_tax_savings: Decimal
    final_wealth: Decimal
    final_no_conversion_wealth: Decimal
    total_converted: Decimal
    total_tax_paid: Decimal


class BracketRoom(BaseModel):
    """Room left in one bracket above a given income."""

    bracket: int  # 1-based
    rate: Decimal
    max_income: Decimal | None  # None for the unbounded top bracket
    room_in_bracket: Decimal | None  # None when unbounded
    suggested_conversion: Decimal


class YearlyRecommendation(BaseModel):
    year: int
    income: Decimal
    recommended_amount: Decimal


class BracketRecommendation(BaseModel):
    should_convert: bool
    recommended_amount: Decimal
    reasoning: str
    yearly_recommendations: list[YearlyRecommendation] = Field(default_factory=list)


class RmdScheduleEntry(BaseModel):
    year: int
    age: int
    balance: Decimal
    rmd: Decimal


class PathOutcome(BaseModel):
    """Final balances of one Monte Carlo path."""

    traditional: float
    roth: float
    total: float


class PercentileOutcome(BaseModel):
    percentile: float
    traditional: float
    roth: float
    total: float


class GrowthScenario(BaseModel):
    name: str
    mean_return: float
    volatility: float = 0.15


class ScenarioOutcome(BaseModel):
    scenario: str
    traditional: float
    roth: float
    total: float
