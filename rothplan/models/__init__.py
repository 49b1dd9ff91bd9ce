"""Data models for rothplan."""

from rothplan.models.brackets import TaxBracket
from rothplan.models.enums import ConversionStrategyType, FilingStatus
from rothplan.models.inputs import (
    AnnualConversion,
    BracketOptimization,
    ConversionStrategy,
    OneTimeConversion,
    SimulationInput,
    parse_simulation_input,
)
from rothplan.models.results import (
    BracketRecommendation,
    BracketRoom,
    GrowthScenario,
    PathOutcome,
    PercentileOutcome,
    ProjectionSummary,
    RmdScheduleEntry,
    ScenarioOutcome,
    YearlyRecommendation,
    YearResult,
)

__all__ = [
    "AnnualConversion",
    "BracketOptimization",
    "BracketRecommendation",
    "BracketRoom",
    "ConversionStrategy",
    "ConversionStrategyType",
    "FilingStatus",
    "GrowthScenario",
    "OneTimeConversion",
    "PathOutcome",
    "PercentileOutcome",
    "ProjectionSummary",
    "RmdScheduleEntry",
    "ScenarioOutcome",
    "SimulationInput",
    "TaxBracket",
    "YearlyRecommendation",
    "YearResult",
    "parse_simulation_input",
]
