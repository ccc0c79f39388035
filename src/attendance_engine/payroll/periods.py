from __future__ import annotations

import calendar
from datetime import date, timedelta
from typing import Optional

from ..core.enums import PayrollPeriodKind
from ..core.exceptions import ValidationError
from .model import PayrollPeriod


def _last_day(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def _previous_month(year: int, month: int) -> tuple[int, int]:
    return (year - 1, 12) if month == 1 else (year, month - 1)


def _next_month(year: int, month: int) -> tuple[int, int]:
    return (year + 1, 1) if month == 12 else (year, month + 1)


def month_period(year: int, month: int, cutoff_day: Optional[int] = None) -> PayrollPeriod:
    """Calendar month, or the cycle ending on `cutoff_day` of `month`.

    With cutoff 25 the March period runs Feb 26 - Mar 25. A cutoff past the
    end of a short month is clamped to its last day.
    """
    if not 1 <= month <= 12:
        raise ValidationError(f"month must be 1-12, got {month}")
    if cutoff_day is None:
        return PayrollPeriod(date(year, month, 1), date(year, month, _last_day(year, month)))
    if not 1 <= cutoff_day <= 31:
        raise ValidationError(f"cutoff day must be 1-31, got {cutoff_day}")

    prev_year, prev_month = _previous_month(year, month)
    previous_cutoff = date(prev_year, prev_month, min(cutoff_day, _last_day(prev_year, prev_month)))
    end = date(year, month, min(cutoff_day, _last_day(year, month)))
    return PayrollPeriod(previous_cutoff + timedelta(days=1), end)


def half_month_periods(year: int, month: int) -> tuple[PayrollPeriod, PayrollPeriod]:
    if not 1 <= month <= 12:
        raise ValidationError(f"month must be 1-12, got {month}")
    return (
        PayrollPeriod(date(year, month, 1), date(year, month, 15), kind=PayrollPeriodKind.HALF_MONTH),
        PayrollPeriod(date(year, month, 16), date(year, month, _last_day(year, month)), kind=PayrollPeriodKind.HALF_MONTH),
    )


def current_payroll_period(today: date, cutoff_day: Optional[int] = None) -> PayrollPeriod:
    """The monthly period that contains `today`."""
    if cutoff_day is not None and today.day > min(cutoff_day, _last_day(today.year, today.month)):
        return month_period(*_next_month(today.year, today.month), cutoff_day=cutoff_day)
    return month_period(today.year, today.month, cutoff_day=cutoff_day)
