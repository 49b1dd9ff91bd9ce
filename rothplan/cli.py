"""Typer CLI interface for rothplan."""

import json
import logging
from decimal import Decimal
from pathlib import Path

import typer

from rothplan.exceptions import RothPlanError
from rothplan.models.enums import ConversionStrategyType, FilingStatus

BANNER = r"""
    ______________
   |  TRADITIONAL |
   |______________|
          ||
          ||   convert
          \/
    ______________
   |     ROTH     |
   |______________|

  rothplan
  "Pay the tax now, or pay it later?"
"""

app = typer.Typer(
    name="rothplan",
    help="rothplan - Roth conversion projections with bracket and RMD modeling.",
)

_STATUS_MAP = {
    "SINGLE": FilingStatus.SINGLE,
    "MFJ": FilingStatus.MFJ,
    "MARRIED_FILING_JOINTLY": FilingStatus.MFJ,
}


def show_banner() -> None:
    typer.echo(BANNER)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """rothplan - Roth conversion projections with bracket and RMD modeling."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if ctx.invoked_subcommand is None:
        show_banner()
        raise typer.Exit()


def _parse_filing_status(filing_status: str) -> FilingStatus:
    fs = _STATUS_MAP.get(filing_status.upper())
    if fs is None:
        valid = ", ".join(["SINGLE", "MFJ"])
        typer.echo(f"Error: Invalid filing status '{filing_status}'. Valid: {valid}", err=True)
        raise typer.Exit(1)
    return fs


def _dec(value: float | None) -> Decimal | None:
    return Decimal(str(value)) if value is not None else None


def _pct_to_fraction(value: float | None) -> Decimal | None:
    return Decimal(str(value)) / 100 if value is not None else None


@app.command()
def project(
    input_file: Path | None = typer.Option(
        None,
        "--input-file",
        "-f",
        help="JSON file with a full simulation input record (overrides all other options)",
    ),
    age1: int = typer.Option(55, "--age1", help="Age of the primary account holder"),
    age2: int = typer.Option(55, "--age2", help="Age of the spouse"),
    filing_status: str = typer.Option(
        "MFJ", "--filing-status", "-s", help="Filing status: SINGLE, MFJ"
    ),
    retirement_age: int = typer.Option(65, "--retirement-age", help="Age at retirement"),
    traditional: float = typer.Option(1_000_000.0, "--traditional", help="Traditional (pre-tax) balance"),
    roth: float = typer.Option(0.0, "--roth", help="Roth balance"),
    taxable: float | None = typer.Option(
        None, "--taxable", help="Taxable account balance; omit to not track one"
    ),
    income: float = typer.Option(100_000.0, "--income", help="Annual income while working"),
    yearly_income: list[float] | None = typer.Option(
        None,
        "--yearly-income",
        help="Explicit income for years 1-10; repeat up to 10 times",
    ),
    retirement_income: float = typer.Option(
        50_000.0, "--retirement-income", help="Annual income once retired"
    ),
    strategy: ConversionStrategyType = typer.Option(
        ConversionStrategyType.ANNUAL, "--strategy", help="Conversion strategy"
    ),
    amount: float = typer.Option(
        50_000.0, "--amount", help="Conversion amount (one-time or annual strategies)"
    ),
    conversion_percentage: float = typer.Option(
        100.0,
        "--conversion-percentage",
        help="Annual strategy: cap each conversion at this percent of the traditional balance",
    ),
    target_bracket: float = typer.Option(
        22.0, "--target-bracket", help="Bracket-optimization target rate, in percent"
    ),
    expected_return: float | None = typer.Option(
        None, "--expected-return", help="Annual return in percent; omit to skip growth"
    ),
    taxable_yield: float | None = typer.Option(
        None, "--taxable-yield", help="Taxable account yield in percent"
    ),
    years: int = typer.Option(30, "--years", "-y", help="Years to simulate"),
    state_tax: bool = typer.Option(False, "--state-tax/--no-state-tax", help="Apply state tax"),
    state_tax_rate: float = typer.Option(
        6.85, "--state-tax-rate", help="State tax rate in percent (NY default)"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output results as JSON"),
) -> None:
    """Project balances year by year against a no-conversion baseline."""
    from rothplan.engines.simulator import (
        ProjectionEngine,
        analyze_bracket_optimization,
        summarize,
    )
    from rothplan.models.inputs import BracketOptimization, parse_simulation_input
    from rothplan.reports.projection import ProjectionReportGenerator

    if input_file is not None:
        if not input_file.exists():
            typer.echo(f"Error: Input file not found: {input_file}", err=True)
            raise typer.Exit(1)
        try:
            data = json.loads(input_file.read_text())
        except json.JSONDecodeError as exc:
            typer.echo(f"Error: Invalid JSON in {input_file.name}: {exc}", err=True)
            raise typer.Exit(1)
    else:
        fs = _parse_filing_status(filing_status)
        strategy_data: dict = {"kind": strategy.value}
        match strategy:
            case ConversionStrategyType.ONE_TIME:
                strategy_data["amount"] = _dec(amount)
            case ConversionStrategyType.ANNUAL:
                strategy_data["amount"] = _dec(amount)
                strategy_data["percentage"] = _dec(conversion_percentage)
            case ConversionStrategyType.BRACKET_OPTIMIZATION:
                strategy_data["target_rate"] = _pct_to_fraction(target_bracket)
        data = {
            "age1": age1,
            "age2": age2,
            "filing_status": fs,
            "retirement_age": retirement_age,
            "traditional_balance": _dec(traditional),
            "roth_balance": _dec(roth),
            "taxable_balance": _dec(taxable),
            "annual_income": _dec(income),
            "yearly_incomes": [_dec(v) for v in (yearly_income or [])],
            "retirement_income": _dec(retirement_income),
            "strategy": strategy_data,
            "expected_return": _pct_to_fraction(expected_return),
            "taxable_yield": _pct_to_fraction(taxable_yield),
            "simulation_years": years,
            "state_tax_rate": _pct_to_fraction(state_tax_rate),
            "enable_state_tax": state_tax,
        }

    try:
        inputs = parse_simulation_input(data)
    except RothPlanError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1)

    results = ProjectionEngine().run(inputs)
    summary = summarize(results)
    recommendation = None
    if isinstance(inputs.strategy, BracketOptimization):
        recommendation = analyze_bracket_optimization(
            inputs.annual_income,
            inputs.traditional_balance,
            inputs.strategy.target_rate,
            inputs.filing_status,
        )

    if json_output:
        payload = {
            "inputs": inputs.model_dump(mode="json"),
            "results": [r.model_dump(mode="json") for r in results],
            "summary": summary.model_dump(mode="json"),
            "recommendation": recommendation.model_dump(mode="json") if recommendation else None,
        }
        typer.echo(json.dumps(payload, indent=2))
        return

    typer.echo(ProjectionReportGenerator().render(inputs, results, summary, recommendation))


@app.command()
def brackets(
    filing_status: str = typer.Option(
        "MFJ", "--filing-status", "-s", help="Filing status: SINGLE, MFJ"
    ),
    income: float | None = typer.Option(
        None, "--income", help="Current income for the bracket-room breakdown"
    ),
    balance: float = typer.Option(
        0.0, "--balance", help="Traditional balance available to convert"
    ),
    target_bracket: float | None = typer.Option(
        None, "--target-bracket", help="Recommend conversions up to this rate, in percent"
    ),
) -> None:
    """Show the federal bracket table and room left in each bracket."""
    from rothplan.engines.brackets import get_brackets, get_standard_deduction
    from rothplan.engines.simulator import analyze_bracket_optimization, analyze_tax_brackets
    from rothplan.reports.projection import BracketReportGenerator

    fs = _parse_filing_status(filing_status)
    current_income = _dec(income)
    traditional = Decimal(str(balance))

    rooms = (
        analyze_tax_brackets(current_income, traditional, fs)
        if current_income is not None
        else None
    )
    typer.echo(
        BracketReportGenerator().render(
            filing_status=filing_status.upper(),
            brackets=get_brackets(fs),
            standard_deduction=get_standard_deduction(fs),
            rooms=rooms,
            income=current_income,
        )
    )

    if target_bracket is not None and current_income is not None:
        recommendation = analyze_bracket_optimization(
            current_income, traditional, _pct_to_fraction(target_bracket), fs
        )
        typer.echo("RECOMMENDATION")
        typer.echo(f"  {recommendation.reasoning}")
        typer.echo(f"  Amount: ${recommendation.recommended_amount:,.0f}")


@app.command(name="monte-carlo")
def monte_carlo(
    traditional: float = typer.Option(1_000_000.0, "--traditional", help="Traditional balance"),
    roth: float = typer.Option(0.0, "--roth", help="Roth balance"),
    years: int = typer.Option(30, "--years", "-y", help="Years to simulate"),
    mean_return: float = typer.Option(6.0, "--mean-return", help="Mean annual return in percent"),
    volatility: float = typer.Option(15.0, "--volatility", help="Annual volatility in percent"),
    paths: int = typer.Option(1000, "--paths", "-n", help="Number of simulated paths"),
    seed: int | None = typer.Option(None, "--seed", help="Random seed for reproducible runs"),
    json_output: bool = typer.Option(False, "--json", help="Output percentiles as JSON"),
) -> None:
    """Simulate final balances under random returns and show percentiles."""
    from rothplan.engines.monte_carlo import MonteCarloProjector, compute_percentiles
    from rothplan.reports.projection import MonteCarloReportGenerator

    if paths < 1 or years < 0:
        typer.echo("Error: --paths must be at least 1 and --years non-negative", err=True)
        raise typer.Exit(1)

    projector = MonteCarloProjector(seed=seed)
    outcomes = projector.run_paths(
        traditional, roth, years, mean_return / 100, volatility / 100, paths
    )
    percentiles = compute_percentiles(outcomes)

    if json_output:
        typer.echo(json.dumps([p.model_dump() for p in percentiles], indent=2))
        return

    typer.echo(
        MonteCarloReportGenerator().render(
            percentiles, paths, years, mean_return / 100, volatility / 100
        )
    )


@app.command(name="rmd-schedule")
def rmd_schedule_cmd(
    balance: float = typer.Option(..., "--balance", help="Traditional balance at the start"),
    age: int = typer.Option(72, "--age", help="Age in the first year"),
    years: int = typer.Option(20, "--years", "-y", help="Years to project"),
    growth: float = typer.Option(0.0, "--growth", help="Annual growth in percent"),
) -> None:
    """Project required minimum distributions for a single traditional account."""
    from rothplan.engines.rmd import rmd_factor, rmd_schedule

    schedule = rmd_schedule(Decimal(str(balance)), age, years, Decimal(str(growth)) / 100)
    typer.echo("")
    typer.echo(f"=== RMD Schedule (start age {age}) ===")
    typer.echo("")
    typer.echo("  Year  Age  Divisor        RMD           Balance")
    for entry in schedule:
        typer.echo(
            f"  {entry.year:<5} {entry.age:<4} {rmd_factor(entry.age):>7}  "
            f"${entry.rmd:>12,.2f}  ${entry.balance:>14,.2f}"
        )
