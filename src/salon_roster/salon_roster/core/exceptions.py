from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidDayKey(ValidationError):
    """Raised when a day identifier cannot be mapped to a weekday."""


class InvalidDayHours(ValidationError):
    """Raised when a working-hours entry breaks the start < end rule."""


class UnknownTemplate(ValidationError):
    """Raised when a schedule template name is not known."""


class NotScheduled(DomainError):
    """Raised when a check-in targets a day the employee does not work."""


class AlreadyCheckedIn(DomainError):
    """Raised when an employee has already checked in for the date."""


class StaleResponse(DomainError):
    """Raised when a remote result arrived for a view that was closed or reopened."""


class RemoteFailure(DomainError):
    """Raised when the backend cannot be reached or answers with an error."""

    def __init__(self, message: str, *, path: str = "", status_code: Optional[int] = None):
        super().__init__(message)
        self.path = path
        self.status_code = status_code
