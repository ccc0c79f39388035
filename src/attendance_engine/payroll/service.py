from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable, Optional

from ..attendance.repository import AttendanceEventStore
from ..common.datetime_utils import iter_days
from ..core import constants
from ..core.enums import PayrollStatus
from ..core.exceptions import ValidationError
from ..employees.model import Employee
from ..holidays.model import Holiday
from ..holidays.repository import HolidayStore
from ..leaves.repository import LeaveStore
from ..settings.provider import RateSettingsProvider
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import PayrollLine, PayrollPeriod
from .validation import validate_payroll_line

logger = logging.getLogger(__name__)


class PayrollService:
    """Batch payroll over a period: draft -> approved -> paid."""

    def __init__(
        self,
        events: AttendanceEventStore,
        leaves: LeaveStore,
        settings: RateSettingsProvider,
        *,
        holidays: Optional[HolidayStore] = None,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._events = events
        self._leaves = leaves
        self._settings = settings
        self._holidays = holidays
        self._calculator = calculator or StandardPayrollCalculator()

    def run(
        self,
        period: PayrollPeriod,
        employees: Iterable[Employee],
        chunk_size: int = constants.DEFAULT_PAYROLL_CHUNK_SIZE,
    ) -> PayrollPeriod:
        if chunk_size < 1:
            raise ValidationError("chunk_size must be >= 1")
        if period.status != PayrollStatus.DRAFT:
            raise ValidationError(f"Cannot recalculate a {period.status.value} payroll period")

        rate_settings = self._settings.get_rate_settings()
        holidays = self._holidays_in(period)
        staff = sorted(employees, key=lambda e: e.employee_id)

        lines: list[PayrollLine] = []
        for offset in range(0, len(staff), chunk_size):
            chunk = staff[offset : offset + chunk_size]
            for employee in chunk:
                line = self._calculator.calculate(
                    employee,
                    self._events.list_for_range(employee.employee_id, period.start_date, period.end_date),
                    self._leaves.get_approved_leave(employee.employee_id, period.start_date, period.end_date),
                    holidays,
                    period.start_date,
                    period.end_date,
                    rate_settings,
                )
                issues = validate_payroll_line(line)
                if issues:
                    logger.warning(
                        "payroll line needs review",
                        extra={"employee_id": employee.employee_id, "issues": issues},
                    )
                lines.append(line)
            logger.info(
                "payroll chunk calculated",
                extra={"offset": offset, "size": len(chunk), "period_start": period.start_date.isoformat()},
            )

        logger.info(
            "payroll run finished",
            extra={
                "period_start": period.start_date.isoformat(),
                "period_end": period.end_date.isoformat(),
                "employees": len(lines),
            },
        )
        return replace(period, lines=tuple(lines))

    def approve(self, period: PayrollPeriod) -> PayrollPeriod:
        return self._transition(period, PayrollStatus.DRAFT, PayrollStatus.APPROVED)

    def mark_paid(self, period: PayrollPeriod) -> PayrollPeriod:
        return self._transition(period, PayrollStatus.APPROVED, PayrollStatus.PAID)

    def _transition(self, period: PayrollPeriod, expected: PayrollStatus, target: PayrollStatus) -> PayrollPeriod:
        if period.status != expected:
            raise ValidationError(
                f"Payroll period must be {expected.value} to become {target.value} (is {period.status.value})"
            )
        logger.info(
            "payroll period status changed",
            extra={"period_start": period.start_date.isoformat(), "from": expected.value, "to": target.value},
        )
        return replace(period, status=target)

    def _holidays_in(self, period: PayrollPeriod) -> list[Holiday]:
        if self._holidays is None:
            return []
        found = []
        for day in iter_days(period.start_date, period.end_date):
            holiday = self._holidays.is_holiday(day)
            if holiday is not None:
                found.append(holiday)
        return found
