from __future__ import annotations

from typing import Optional, Sequence


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class SwipeParseError(ValidationError):
    """Raised when a single raw swipe row cannot be turned into an event."""


class TemplateConfigError(ValidationError):
    """Raised when shift template settings are incomplete or malformed."""


class BatchValidationError(ValidationError):
    """Raised when no swipe survives parsing and filtering.

    Carries the counters so callers can explain the empty result.
    """

    def __init__(
        self,
        message: str,
        *,
        total_rows: int,
        filtered_by_status: int,
        filtered_by_allow_list: int,
        invalid_rows: int,
        warnings: Optional[Sequence[str]] = None,
    ):
        super().__init__(message)
        self.total_rows = total_rows
        self.filtered_by_status = filtered_by_status
        self.filtered_by_allow_list = filtered_by_allow_list
        self.invalid_rows = invalid_rows
        self.warnings = list(warnings or [])

    def to_details(self) -> dict:
        return {
            "total_rows": self.total_rows,
            "filtered_by_status": self.filtered_by_status,
            "filtered_by_allow_list": self.filtered_by_allow_list,
            "invalid_rows": self.invalid_rows,
            "warnings": self.warnings,
        }
