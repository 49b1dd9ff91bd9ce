"""Marginal tax calculator.

Pure functions over a bracket table:
  - Progressive federal tax on taxable income
  - Marginal and effective rates after the standard deduction
  - Combined federal + flat state tax
  - Conversion sizing to fill a target bracket
"""

from decimal import Decimal

from rothplan.engines.brackets import (
    FALLBACK_CONVERSION_CEILING,
    FALLBACK_CONVERSION_SHARE,
    get_standard_deduction,
)
from rothplan.models.brackets import TaxBracket
from rothplan.models.enums import FilingStatus

ZERO = Decimal("0")


def marginal_tax(income: Decimal, brackets: list[TaxBracket]) -> Decimal:
    """Apply progressive brackets to taxable income.

    Each bracket taxes the slice between the previous cap and its own cap.
    Income equal to a cap is taxed entirely at that bracket's rate. Negative
    income is treated as zero.
    """
    income = max(income, ZERO)
    tax = ZERO
    prev_cap = ZERO

    for bracket in brackets:
        if bracket.cap is None or income <= bracket.cap:
            tax += (income - prev_cap) * bracket.rate
            break
        tax += (bracket.cap - prev_cap) * bracket.rate
        prev_cap = bracket.cap

    return tax


def taxable_income(income: Decimal, filing_status: FilingStatus) -> Decimal:
    return max(income - get_standard_deduction(filing_status), ZERO)


def marginal_rate(
    income: Decimal, brackets: list[TaxBracket], filing_status: FilingStatus
) -> Decimal:
    """Rate on the next dollar of gross income."""
    taxable = taxable_income(income, filing_status)
    for bracket in brackets:
        if bracket.cap is None or taxable <= bracket.cap:
            return bracket.rate
    return brackets[-1].rate


def total_tax(
    income: Decimal,
    brackets: list[TaxBracket],
    state_rate: Decimal,
    filing_status: FilingStatus,
) -> Decimal:
    """Federal tax after the standard deduction plus flat state tax on gross income."""
    federal = marginal_tax(taxable_income(income, filing_status), brackets)
    state = income * state_rate
    return federal + state


def effective_tax_rate(
    income: Decimal,
    brackets: list[TaxBracket],
    state_rate: Decimal,
    filing_status: FilingStatus,
) -> Decimal:
    if income == ZERO:
        return ZERO
    return total_tax(income, brackets, state_rate, filing_status) / income


def optimal_conversion_amount(
    current_income: Decimal,
    traditional_balance: Decimal,
    brackets: list[TaxBracket],
    target_rate: Decimal,
    filing_status: FilingStatus,
) -> Decimal:
    """How much to convert so income tops out at the target bracket.

    Room is measured in gross income, so the standard deduction is added back
    to every bracket cap.
    """
    deduction = get_standard_deduction(filing_status)
    current_rate = marginal_rate(current_income, brackets, filing_status)

    if current_rate <= target_rate:
        for bracket in brackets:
            if bracket.rate == target_rate and bracket.cap is not None:
                room = bracket.cap + deduction - current_income
                return min(room, traditional_balance)
        # Target matches no bounded bracket
        return min(traditional_balance * FALLBACK_CONVERSION_SHARE, FALLBACK_CONVERSION_CEILING)

    conversion = ZERO
    cursor = current_income
    for bracket in brackets:
        if bracket.rate <= target_rate and bracket.cap is not None:
            room = bracket.cap + deduction - cursor
            if room > ZERO:
                conversion += room
                cursor = bracket.cap + deduction

    return min(conversion, traditional_balance)
