"""Simulation input records.

A SimulationInput is built once from validated user input and never mutated.
String-to-number coercion and percentage-to-fraction conversion happen before
the record is built; the engines only ever see plain Decimals.
"""

from decimal import Decimal
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from rothplan.exceptions import InputValidationError
from rothplan.models.enums import FilingStatus


class OneTimeConversion(BaseModel):
    """Convert a fixed amount once, in the first simulated year."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["one-time"] = "one-time"
    amount: Decimal = Field(default=Decimal("0"), ge=0)


class AnnualConversion(BaseModel):
    """Convert every year: the lesser of a fixed amount and a share of the balance."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["annual"] = "annual"
    amount: Decimal = Field(default=Decimal("0"), ge=0)
    percentage: Decimal = Field(default=Decimal("100"), ge=0, le=100)  # of traditional balance


class BracketOptimization(BaseModel):
    """Fill income up to the top of a target bracket while still working."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["bracket-optimization"] = "bracket-optimization"
    target_rate: Decimal = Field(default=Decimal("0.22"), ge=Decimal("0.10"), le=Decimal("0.37"))


ConversionStrategy = Annotated[
    OneTimeConversion | AnnualConversion | BracketOptimization,
    Field(discriminator="kind"),
]


class SimulationInput(BaseModel):
    """Everything one projection run needs."""

    model_config = ConfigDict(frozen=True)

    age1: int = Field(ge=18, le=100)
    age2: int = Field(ge=18, le=100)
    filing_status: FilingStatus = FilingStatus.MFJ
    retirement_age: int = Field(default=65, ge=50, le=80)
    # Balances
    traditional_balance: Decimal = Field(ge=0)
    roth_balance: Decimal = Field(default=Decimal("0"), ge=0)
    taxable_balance: Decimal | None = Field(default=None, ge=0)  # None: not tracked
    # Income
    annual_income: Decimal = Field(default=Decimal("0"), ge=0)
    yearly_incomes: tuple[Decimal | None, ...] = Field(default=(), max_length=10)
    retirement_income: Decimal = Field(default=Decimal("0"), ge=0)
    # Strategy
    strategy: ConversionStrategy
    # Growth; None skips growth modeling, which is not the same as an explicit 0
    expected_return: Decimal | None = Field(default=None, ge=0, le=Decimal("0.2"))
    taxable_yield: Decimal | None = Field(default=None, ge=0, le=Decimal("0.1"))
    simulation_years: int = Field(default=30, ge=1, le=50)
    # State tax (fraction of gross income)
    state_tax_rate: Decimal = Field(default=Decimal("0"), ge=0, le=Decimal("0.15"))
    enable_state_tax: bool = False

    @property
    def effective_state_rate(self) -> Decimal:
        return self.state_tax_rate if self.enable_state_tax else Decimal("0")


def parse_simulation_input(data: dict[str, Any]) -> SimulationInput:
    """Validate a raw mapping into a SimulationInput.

    Raises InputValidationError naming the first offending field.
    """
    try:
        return SimulationInput.model_validate(data)
    except ValidationError as exc:
        errors = exc.errors()
        first = errors[0]
        field = ".".join(str(part) for part in first["loc"]) or "input"
        raise InputValidationError(field, first["msg"], errors) from exc
