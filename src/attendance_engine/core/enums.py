from __future__ import annotations

from enum import Enum


class PeriodType(str, Enum):
    REGULAR = "REGULAR"
    OVERTIME = "OVERTIME"


class PeriodState(str, Enum):
    """Where an instant falls relative to the day's ordered periods."""

    BEFORE_SHIFT = "BEFORE_SHIFT"
    IN_REGULAR = "IN_REGULAR"
    TRANSITION_WINDOW = "TRANSITION_WINDOW"
    IN_OVERTIME = "IN_OVERTIME"
    AFTER_ALL_PERIODS = "AFTER_ALL_PERIODS"


class PeriodProgress(str, Enum):
    PENDING = "PENDING"
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"


class EventKind(str, Enum):
    CHECK_IN = "CHECK_IN"
    CHECK_OUT = "CHECK_OUT"


class RequestStatus(str, Enum):
    """Approval flow state for shift adjustments, overtime and leave."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class ErrorKind(str, Enum):
    EMPLOYEE_NOT_FOUND = "EMPLOYEE_NOT_FOUND"
    INVALID_SHIFT = "INVALID_SHIFT"
    EARLY_CHECK_IN_NOT_ALLOWED = "EARLY_CHECK_IN_NOT_ALLOWED"
    ALREADY_CHECKED_IN = "ALREADY_CHECKED_IN"
    NO_ACTIVE_CHECK_IN = "NO_ACTIVE_CHECK_IN"
    LATE_CHECKOUT_UNAUTHORIZED = "LATE_CHECKOUT_UNAUTHORIZED"
    INVALID_RATE_SETTINGS = "INVALID_RATE_SETTINGS"
    NO_SCHEDULED_PERIOD = "NO_SCHEDULED_PERIOD"
    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"


class EmployeeType(str, Enum):
    FULLTIME = "FULLTIME"
    PARTTIME = "PARTTIME"
    PROBATION = "PROBATION"


class SalaryType(str, Enum):
    MONTHLY = "MONTHLY"
    DAILY = "DAILY"
    HOURLY = "HOURLY"


class LeaveType(str, Enum):
    SICK = "SICK"
    ANNUAL = "ANNUAL"
    BUSINESS = "BUSINESS"
    UNPAID = "UNPAID"


class OvertimeCategory(str, Enum):
    """Multiplier table key for overtime hours."""

    WORKDAY = "WORKDAY"
    DAY_OFF = "DAY_OFF"
    HOLIDAY = "HOLIDAY"


class PayrollStatus(str, Enum):
    DRAFT = "DRAFT"
    APPROVED = "APPROVED"
    PAID = "PAID"


class PayrollPeriodKind(str, Enum):
    HALF_MONTH = "HALF_MONTH"
    MONTH = "MONTH"
