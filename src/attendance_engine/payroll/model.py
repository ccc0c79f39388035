from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Optional

from ..core.enums import PayrollPeriodKind, PayrollStatus
from .money import ZERO, money


@dataclass(frozen=True)
class HourBuckets:
    regular_hours: Decimal = ZERO
    holiday_hours: Decimal = ZERO
    workday_overtime_hours: Decimal = ZERO
    day_off_overtime_hours: Decimal = ZERO
    holiday_overtime_hours: Decimal = ZERO

    @property
    def overtime_hours(self) -> Decimal:
        return self.workday_overtime_hours + self.day_off_overtime_hours + self.holiday_overtime_hours


@dataclass(frozen=True)
class LeaveBuckets:
    sick_hours: Decimal = ZERO
    annual_hours: Decimal = ZERO
    business_hours: Decimal = ZERO
    unpaid_hours: Decimal = ZERO
    unpaid_days: Decimal = ZERO

    @property
    def paid_hours(self) -> Decimal:
        return self.sick_hours + self.annual_hours + self.business_hours


@dataclass(frozen=True)
class AttendanceSummary:
    present_days: int = 0
    payable_days: Decimal = ZERO
    late_count: int = 0
    late_minutes: int = 0
    early_checkout_count: int = 0
    late_checkout_count: int = 0
    incomplete_sessions: int = 0


@dataclass(frozen=True)
class Earnings:
    base: Decimal = ZERO
    overtime: Decimal = ZERO
    holiday: Decimal = ZERO
    paid_leave: Decimal = ZERO

    @property
    def gross(self) -> Decimal:
        return money(self.base + self.overtime + self.holiday + self.paid_leave)


@dataclass(frozen=True)
class Allowances:
    transportation: Decimal = ZERO
    housing: Decimal = ZERO
    meal: Decimal = ZERO

    @property
    def total(self) -> Decimal:
        return money(self.transportation + self.housing + self.meal)


@dataclass(frozen=True)
class Deductions:
    social_security: Decimal = ZERO
    income_tax: Decimal = ZERO
    late: Decimal = ZERO

    @property
    def total(self) -> Decimal:
        return money(self.social_security + self.income_tax + self.late)


def _plain(value: Any) -> Any:
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, date):
        return value.isoformat()
    return value


def _section(obj: Any, *extra: str) -> dict[str, Any]:
    out = {name: _plain(getattr(obj, name)) for name in obj.__dataclass_fields__}
    for name in extra:
        out[name] = _plain(getattr(obj, name))
    return out


@dataclass(frozen=True)
class PayrollLine:
    """Derived payroll figures for one employee over one period."""

    employee_id: str
    period_start: date
    period_end: date
    hourly_rate: Decimal
    hours: HourBuckets
    leave: LeaveBuckets
    attendance: AttendanceSummary
    earnings: Earnings
    allowances: Allowances
    deductions: Deductions
    net_payable: Decimal

    def to_dict(self) -> dict[str, Any]:
        """Plain, ordered dict; Decimals and dates rendered as strings."""
        return {
            "employee_id": self.employee_id,
            "period_start": _plain(self.period_start),
            "period_end": _plain(self.period_end),
            "hourly_rate": _plain(self.hourly_rate),
            "hours": _section(self.hours, "overtime_hours"),
            "leave": _section(self.leave, "paid_hours"),
            "attendance": _section(self.attendance),
            "earnings": _section(self.earnings, "gross"),
            "allowances": _section(self.allowances, "total"),
            "deductions": _section(self.deductions, "total"),
            "net_payable": _plain(self.net_payable),
        }


@dataclass(frozen=True)
class PayrollPeriod:
    start_date: date
    end_date: date
    kind: PayrollPeriodKind = PayrollPeriodKind.MONTH
    status: PayrollStatus = PayrollStatus.DRAFT
    lines: tuple[PayrollLine, ...] = field(default_factory=tuple)

    @property
    def total_net_payable(self) -> Decimal:
        return money(sum((line.net_payable for line in self.lines), ZERO))

    def line_for(self, employee_id: str) -> Optional[PayrollLine]:
        return next((line for line in self.lines if line.employee_id == employee_id), None)
