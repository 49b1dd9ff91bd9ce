"""Report generation for rothplan."""

from rothplan.reports.projection import (
    BracketReportGenerator,
    MonteCarloReportGenerator,
    ProjectionReportGenerator,
)

__all__ = [
    "BracketReportGenerator",
    "MonteCarloReportGenerator",
    "ProjectionReportGenerator",
]
