from __future__ import annotations

from .enums import ErrorKind


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AttendanceError(DomainError):
    """Domain error tagged with a closed ErrorKind."""

    kind: ErrorKind

    def __init__(self, message: str, *, employee_id: str | None = None):
        super().__init__(message)
        self.message = message
        self.employee_id = employee_id


class EmployeeNotFoundError(AttendanceError):
    kind = ErrorKind.EMPLOYEE_NOT_FOUND


class InvalidShiftError(AttendanceError):
    kind = ErrorKind.INVALID_SHIFT


class EarlyCheckInNotAllowedError(AttendanceError):
    kind = ErrorKind.EARLY_CHECK_IN_NOT_ALLOWED


class AlreadyCheckedInError(AttendanceError):
    kind = ErrorKind.ALREADY_CHECKED_IN


class NoActiveCheckInError(AttendanceError):
    kind = ErrorKind.NO_ACTIVE_CHECK_IN


class NoScheduledPeriodError(AttendanceError):
    """Check-in when the day has no period left to attribute it to."""

    kind = ErrorKind.NO_SCHEDULED_PERIOD


class EventNotFoundError(AttendanceError):
    kind = ErrorKind.EVENT_NOT_FOUND


class InvalidRateSettingsError(AttendanceError):
    """Missing or negative rate data; payroll cannot run without it."""

    kind = ErrorKind.INVALID_RATE_SETTINGS
