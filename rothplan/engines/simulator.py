"""Year-by-year Roth conversion projection engine.

Each simulated year runs, in order:
  1. Income for the year (explicit schedule, then last working income or
     retirement income)
  2. Conversion amount for the selected strategy
  3. Conversion tax and marginal rate
  4. Conversion: traditional -> Roth, tax debited from the taxable account
  5. RMD once retired and at least 72, taxed and debited the same way
  6. Growth on all accounts, when a return assumption is given
  7. The same RMD/growth sequence on a no-conversion baseline
  8. Wealth totals and the point-in-time break-even comparison

The run is a strict left fold: year N starts from year N-1's balances.
"""

import logging
from dataclasses import dataclass, replace
from decimal import Decimal

from rothplan.engines.brackets import (
    FALLBACK_CONVERSION_CEILING,
    FALLBACK_CONVERSION_SHARE,
    get_brackets,
)
from rothplan.engines.rmd import RMD_START_AGE, rmd
from rothplan.engines.tax import (
    marginal_rate,
    optimal_conversion_amount,
    total_tax,
)
from rothplan.models.brackets import TaxBracket
from rothplan.models.enums import FilingStatus
from rothplan.models.inputs import (
    AnnualConversion,
    BracketOptimization,
    OneTimeConversion,
    SimulationInput,
)
from rothplan.models.results import (
    BracketRecommendation,
    BracketRoom,
    ProjectionSummary,
    YearlyRecommendation,
    YearResult,
)

logger = logging.getLogger(__name__)

ZERO = Decimal("0")

# Years covered by the explicit yearly-income schedule
INCOME_SCHEDULE_YEARS = 10


@dataclass(frozen=True)
class BalanceState:
    """Account balances carried from one year to the next."""

    traditional: Decimal
    roth: Decimal
    taxable: Decimal | None = None  # None: taxable account not tracked

    @property
    def total_wealth(self) -> Decimal:
        taxable = max(self.taxable, ZERO) if self.taxable is not None else ZERO
        return self.traditional + self.roth + taxable

    def debit_taxable(self, amount: Decimal) -> "BalanceState":
        # May go negative; only the wealth total floors it.
        if self.taxable is None:
            return self
        return replace(self, taxable=self.taxable - amount)


@dataclass(frozen=True)
class YearContext:
    year: int
    age1: int
    age2: int
    income: Decimal
    is_retired: bool


@dataclass(frozen=True)
class StepOutcome:
    state: BalanceState
    conversion_amount: Decimal
    conversion_tax: Decimal
    rmd_amount: Decimal
    rmd_tax: Decimal


class ProjectionEngine:
    """Projects account balances under a Roth conversion strategy."""

    def run(self, inputs: SimulationInput) -> list[YearResult]:
        """Simulate every year and return one YearResult per year, in order."""
        brackets = get_brackets(inputs.filing_status)
        state_rate = inputs.effective_state_rate

        start = BalanceState(
            traditional=inputs.traditional_balance,
            roth=inputs.roth_balance,
            taxable=inputs.taxable_balance,
        )
        live = start
        baseline = start
        cumulative_tax = ZERO
        one_time_done = False
        results: list[YearResult] = []

        logger.info(
            "Projecting %d year(s), strategy=%s, filing_status=%s",
            inputs.simulation_years,
            inputs.strategy.kind,
            inputs.filing_status,
        )

        for year in range(1, inputs.simulation_years + 1):
            ctx = self._year_context(inputs, year)

            conversion = ZERO
            match inputs.strategy:
                case OneTimeConversion(amount=amount):
                    if not one_time_done:
                        conversion = min(amount, live.traditional)
                        one_time_done = True
                case AnnualConversion(amount=amount, percentage=percentage):
                    conversion = min(amount, live.traditional * (percentage / 100))
                case BracketOptimization(target_rate=target_rate):
                    if not ctx.is_retired:
                        conversion = optimal_conversion_amount(
                            ctx.income,
                            live.traditional,
                            brackets,
                            target_rate,
                            inputs.filing_status,
                        )

            rate = marginal_rate(ctx.income + conversion, brackets, inputs.filing_status)

            step = self._advance(live, conversion, ctx, inputs, brackets, state_rate)
            shadow = self._advance(baseline, ZERO, ctx, inputs, brackets, state_rate)
            live = step.state
            baseline = shadow.state

            cumulative_tax += step.conversion_tax + step.rmd_tax
            wealth = live.total_wealth
            no_conversion_wealth = baseline.total_wealth

            logger.debug(
                "Year %d (age %d): income=%s conversion=%s tax=%s rmd=%s wealth=%s baseline=%s",
                year,
                ctx.age1,
                ctx.income,
                step.conversion_amount,
                step.conversion_tax,
                step.rmd_amount,
                wealth,
                no_conversion_wealth,
            )

            results.append(
                YearResult(
                    year=year,
                    age1=ctx.age1,
                    age2=ctx.age2,
                    annual_income=ctx.income,
                    traditional_balance=live.traditional,
                    roth_balance=live.roth,
                    taxable_balance=live.taxable,
                    conversion_amount=step.conversion_amount,
                    conversion_tax=step.conversion_tax,
                    marginal_tax_rate=rate,
                    rmd_amount=step.rmd_amount,
                    rmd_tax=step.rmd_tax,
                    cumulative_tax_paid=cumulative_tax,
                    total_after_tax_wealth=wealth,
                    no_conversion_wealth=no_conversion_wealth,
                    break_even=wealth > no_conversion_wealth,
                    is_retired=ctx.is_retired,
                )
            )

        return results

    def _year_context(self, inputs: SimulationInput, year: int) -> YearContext:
        age1 = inputs.age1 + year - 1
        is_retired = age1 >= inputs.retirement_age

        if year <= INCOME_SCHEDULE_YEARS:
            income = self._scheduled_income(inputs, year - 1)
        elif is_retired:
            income = inputs.retirement_income
        else:
            # Working past the schedule: hold the last scheduled income
            income = self._scheduled_income(inputs, INCOME_SCHEDULE_YEARS - 1)

        return YearContext(
            year=year,
            age1=age1,
            age2=inputs.age2 + year - 1,
            income=income,
            is_retired=is_retired,
        )

    @staticmethod
    def _scheduled_income(inputs: SimulationInput, index: int) -> Decimal:
        if index < len(inputs.yearly_incomes):
            scheduled = inputs.yearly_incomes[index]
            if scheduled is not None:
                return scheduled
        return inputs.annual_income

    def _advance(
        self,
        state: BalanceState,
        conversion: Decimal,
        ctx: YearContext,
        inputs: SimulationInput,
        brackets: list[TaxBracket],
        state_rate: Decimal,
    ) -> StepOutcome:
        """Apply one year's conversion, RMD and growth to a balance track.

        The no-conversion baseline goes through the same path with a zero
        conversion.
        """
        conversion = min(max(conversion, ZERO), state.traditional)
        conversion_tax = (
            total_tax(conversion, brackets, state_rate, inputs.filing_status)
            if conversion > ZERO
            else ZERO
        )
        state = BalanceState(
            traditional=state.traditional - conversion,
            roth=state.roth + conversion,
            taxable=state.taxable,
        ).debit_taxable(conversion_tax)

        rmd_amount = ZERO
        if ctx.is_retired and ctx.age1 >= RMD_START_AGE:
            rmd_amount = min(rmd(state.traditional, ctx.age1), state.traditional)
        rmd_tax = (
            total_tax(rmd_amount, brackets, state_rate, inputs.filing_status)
            if rmd_amount > ZERO
            else ZERO
        )
        state = replace(state, traditional=state.traditional - rmd_amount).debit_taxable(rmd_tax)

        state = self._apply_growth(state, inputs.expected_return, inputs.taxable_yield)

        return StepOutcome(
            state=state,
            conversion_amount=conversion,
            conversion_tax=conversion_tax,
            rmd_amount=rmd_amount,
            rmd_tax=rmd_tax,
        )

    @staticmethod
    def _apply_growth(
        state: BalanceState,
        expected_return: Decimal | None,
        taxable_yield: Decimal | None,
    ) -> BalanceState:
        if expected_return is None or expected_return <= ZERO:
            return state

        taxable = state.taxable
        if taxable is not None and taxable_yield is not None and taxable_yield > ZERO:
            taxable = taxable * (1 + taxable_yield)

        return BalanceState(
            traditional=state.traditional * (1 + expected_return),
            roth=state.roth * (1 + expected_return),
            taxable=taxable,
        )


def run_simulation(inputs: SimulationInput) -> list[YearResult]:
    return ProjectionEngine().run(inputs)


# ---------------------------------------------------------------------------
# Result analysis
# ---------------------------------------------------------------------------

def find_break_even_year(results: list[YearResult]) -> int | None:
    """First year in which the conversion scenario is ahead, if any."""
    for result in results:
        if result.break_even:
            return result.year
    return None


def total_tax_savings(results: list[YearResult]) -> Decimal:
    """Final-year wealth advantage of converting over not converting."""
    if not results:
        return ZERO
    last = results[-1]
    return last.total_after_tax_wealth - last.no_conversion_wealth


def summarize(results: list[YearResult]) -> ProjectionSummary:
    last = results[-1] if results else None
    return ProjectionSummary(
        years=len(results),
        break_even_year=find_break_even_year(results),
        total_tax_savings=total_tax_savings(results),
        final_wealth=last.total_after_tax_wealth if last else ZERO,
        final_no_conversion_wealth=last.no_conversion_wealth if last else ZERO,
        total_converted=sum((r.conversion_amount for r in results), ZERO),
        total_tax_paid=last.cumulative_tax_paid if last else ZERO,
    )


def analyze_bracket_optimization(
    current_income: Decimal,
    traditional_balance: Decimal,
    target_rate: Decimal,
    filing_status: FilingStatus,
    yearly_incomes: list[Decimal] | None = None,
) -> BracketRecommendation:
    """Recommend conversions that fill up to the target bracket.

    With a yearly income schedule, each of the first ten years gets the room
    left in the target bracket while that year's rate is at or below the
    target. Without one (or when no year has room), the current year alone
    is analyzed.
    """
    brackets = get_brackets(filing_status)
    current_rate = marginal_rate(current_income, brackets, filing_status)
    pct = _pct(target_rate)

    if yearly_incomes:
        recommendations: list[YearlyRecommendation] = []
        total_recommended = ZERO

        for index, income in enumerate(yearly_incomes[:INCOME_SCHEDULE_YEARS]):
            if marginal_rate(income, brackets, filing_status) > target_rate:
                continue
            for bracket in brackets:
                if bracket.rate == target_rate and bracket.cap is not None:
                    amount = min(bracket.cap - income, traditional_balance - total_recommended)
                    if amount > ZERO:
                        recommendations.append(
                            YearlyRecommendation(
                                year=index + 1, income=income, recommended_amount=amount
                            )
                        )
                        total_recommended += amount
                    break

        if total_recommended > ZERO:
            return BracketRecommendation(
                should_convert=True,
                recommended_amount=total_recommended,
                reasoning=(
                    f"Convert ${total_recommended:,.0f} over {len(recommendations)} years "
                    f"to fill {pct} bracket"
                ),
                yearly_recommendations=recommendations,
            )

    if current_rate <= target_rate:
        # Fill the next bracket up
        for bracket in brackets:
            if bracket.rate > current_rate and bracket.cap is not None:
                amount = min(bracket.cap - current_income, traditional_balance)
                return BracketRecommendation(
                    should_convert=amount > ZERO,
                    recommended_amount=amount,
                    reasoning=f"Convert up to {bracket.label} bracket ({_pct(bracket.rate)})",
                )
        amount = min(traditional_balance * FALLBACK_CONVERSION_SHARE, FALLBACK_CONVERSION_CEILING)
        return BracketRecommendation(
            should_convert=amount > ZERO,
            recommended_amount=amount,
            reasoning=f"Convert ${amount:,.0f} at current rate ({_pct(current_rate)})",
        )

    amount = ZERO
    cursor = current_income
    for bracket in brackets:
        if bracket.rate <= target_rate and bracket.cap is not None:
            room = bracket.cap - cursor
            if room > ZERO:
                amount += room
                cursor = bracket.cap
    amount = min(amount, traditional_balance)
    return BracketRecommendation(
        should_convert=amount > ZERO,
        recommended_amount=amount,
        reasoning=f"Convert to reach {pct} bracket",
    )


def analyze_tax_brackets(
    current_income: Decimal,
    traditional_balance: Decimal,
    filing_status: FilingStatus,
) -> list[BracketRoom]:
    """Room left in every bracket above the current income."""
    analysis: list[BracketRoom] = []
    for index, bracket in enumerate(get_brackets(filing_status), start=1):
        if bracket.is_unbounded:
            room = None
            suggested = traditional_balance
        else:
            room = max(bracket.cap - current_income, ZERO)
            suggested = min(room, traditional_balance)
        analysis.append(
            BracketRoom(
                bracket=index,
                rate=bracket.rate,
                max_income=bracket.cap,
                room_in_bracket=room,
                suggested_conversion=suggested,
            )
        )
    return analysis


def _pct(rate: Decimal) -> str:
    return f"{(rate * 100).normalize():f}%"
