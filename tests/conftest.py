"""Shared test fixtures for rothplan."""

from decimal import Decimal
from typing import Any

import pytest

from rothplan.models.enums import FilingStatus
from rothplan.models.inputs import SimulationInput


def build_inputs(**overrides: Any) -> SimulationInput:
    """A working-age MFJ household with no growth and no conversions by default."""
    data: dict[str, Any] = {
        "age1": 45,
        "age2": 45,
        "filing_status": FilingStatus.MFJ,
        "retirement_age": 65,
        "traditional_balance": Decimal("1000000"),
        "roth_balance": Decimal("0"),
        "annual_income": Decimal("150000"),
        "retirement_income": Decimal("60000"),
        "strategy": {"kind": "annual", "amount": Decimal("0")},
        "simulation_years": 1,
    }
    data.update(overrides)
    return SimulationInput.model_validate(data)


@pytest.fixture
def make_inputs():
    return build_inputs


@pytest.fixture
def one_time_inputs() -> SimulationInput:
    return build_inputs(
        traditional_balance=Decimal("1600000"),
        annual_income=Decimal("150000"),
        strategy={"kind": "one-time", "amount": Decimal("200000")},
    )
