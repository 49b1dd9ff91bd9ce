"""Enumerations for rothplan."""

from enum import StrEnum


class FilingStatus(StrEnum):
    SINGLE = "single"
    MFJ = "mfj"


class ConversionStrategyType(StrEnum):
    ONE_TIME = "one-time"
    ANNUAL = "annual"
    BRACKET_OPTIMIZATION = "bracket-optimization"
