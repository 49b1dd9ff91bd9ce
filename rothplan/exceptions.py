"""Custom exceptions for rothplan."""

from typing import Any


class RothPlanError(Exception):
    """Base exception for projection errors."""


class InputValidationError(RothPlanError):
    """Raised when a simulation input record fails validation."""

    def __init__(self, field: str, message: str, errors: list[dict[str, Any]] | None = None):
        self.field = field
        self.errors = errors or []
        super().__init__(f"Validation error on '{field}': {message}")


class BracketTableError(RothPlanError):
    """Raised when no bracket table exists for a filing status."""

    def __init__(self, filing_status: str):
        self.filing_status = filing_status
        super().__init__(f"No federal brackets for filing status {filing_status}")
