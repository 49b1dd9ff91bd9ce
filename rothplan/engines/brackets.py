"""Tax bracket configuration.

Federal ordinary-income brackets and standard deductions keyed by filing status.
Never hardcode brackets in computation functions.

This is a simplified planning model: one static table per filing status, no
inflation indexing, no phase-outs.
"""

from decimal import Decimal

from rothplan.exceptions import BracketTableError
from rothplan.models.brackets import TaxBracket
from rothplan.models.enums import FilingStatus

# ---------------------------------------------------------------------------
# Federal ordinary income brackets: {filing_status: [TaxBracket, ...]}
# Cap is the upper bound of taxable income in the bracket, None for the top one.
# ---------------------------------------------------------------------------
FEDERAL_BRACKETS: dict[FilingStatus, list[TaxBracket]] = {
    FilingStatus.SINGLE: [
        TaxBracket(rate=Decimal("0.10"), cap=Decimal("11000"), label="10%"),
        TaxBracket(rate=Decimal("0.12"), cap=Decimal("44725"), label="12%"),
        TaxBracket(rate=Decimal("0.22"), cap=Decimal("95375"), label="22%"),
        TaxBracket(rate=Decimal("0.24"), cap=Decimal("182100"), label="24%"),
        TaxBracket(rate=Decimal("0.32"), cap=Decimal("231250"), label="32%"),
        TaxBracket(rate=Decimal("0.35"), cap=Decimal("346875"), label="35%"),
        TaxBracket(rate=Decimal("0.37"), cap=None, label="37%"),
    ],
    FilingStatus.MFJ: [
        TaxBracket(rate=Decimal("0.10"), cap=Decimal("22000"), label="10%"),
        TaxBracket(rate=Decimal("0.12"), cap=Decimal("89450"), label="12%"),
        TaxBracket(rate=Decimal("0.22"), cap=Decimal("190750"), label="22%"),
        TaxBracket(rate=Decimal("0.24"), cap=Decimal("364200"), label="24%"),
        TaxBracket(rate=Decimal("0.32"), cap=Decimal("462500"), label="32%"),
        TaxBracket(rate=Decimal("0.35"), cap=Decimal("693750"), label="35%"),
        TaxBracket(rate=Decimal("0.37"), cap=None, label="37%"),
    ],
}

# ---------------------------------------------------------------------------
# Federal standard deduction
# ---------------------------------------------------------------------------
FEDERAL_STANDARD_DEDUCTION: dict[FilingStatus, Decimal] = {
    FilingStatus.SINGLE: Decimal("14600"),
    FilingStatus.MFJ: Decimal("29200"),
}

# ---------------------------------------------------------------------------
# Flat state rate used as the default when state tax is enabled (New York,
# most income levels). Applied to gross income.
# ---------------------------------------------------------------------------
NY_STATE_TAX_RATE = Decimal("0.0685")

# ---------------------------------------------------------------------------
# Bracket-optimization fallback when the target rate matches no bounded bracket:
# convert 10% of the traditional balance, at most $50,000.
# ---------------------------------------------------------------------------
FALLBACK_CONVERSION_SHARE = Decimal("0.10")
FALLBACK_CONVERSION_CEILING = Decimal("50000")


def get_brackets(filing_status: FilingStatus) -> list[TaxBracket]:
    brackets = FEDERAL_BRACKETS.get(filing_status)
    if not brackets:
        raise BracketTableError(str(filing_status))
    return brackets


def get_standard_deduction(filing_status: FilingStatus) -> Decimal:
    deduction = FEDERAL_STANDARD_DEDUCTION.get(filing_status)
    if deduction is None:
        raise BracketTableError(str(filing_status))
    return deduction
