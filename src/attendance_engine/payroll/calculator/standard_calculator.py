from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Iterable

from ...attendance.model import AttendanceEvent
from ...attendance.sessions import WorkSession, pair_sessions, period_key
from ...common.datetime_utils import minutes_between
from ...common.validators import require_rate
from ...core.enums import LeaveType, OvertimeCategory, RequestStatus, SalaryType
from ...core.exceptions import InvalidRateSettingsError
from ...employees.model import Employee
from ...holidays.model import Holiday
from ...leaves.model import LeaveRecord
from ...periods.model import Period
from ...settings.model import RateSettings
from ..model import (
    Allowances,
    AttendanceSummary,
    Deductions,
    Earnings,
    HourBuckets,
    LeaveBuckets,
    PayrollLine,
)
from ..money import ZERO, hours_from_minutes, money
from ..tax import progressive_tax
from .base import PayrollCalculator

logger = logging.getLogger(__name__)


def hourly_rate(employee: Employee, settings: RateSettings) -> Decimal:
    base = require_rate(employee.base_salary, f"base salary of employee {employee.employee_id}")
    if employee.salary_type == SalaryType.MONTHLY:
        return base / (settings.days_per_month * settings.daily_hours)
    if employee.salary_type == SalaryType.DAILY:
        return base / settings.daily_hours
    if employee.salary_type == SalaryType.HOURLY:
        return base
    raise InvalidRateSettingsError(f"Unsupported salary type: {employee.salary_type!r}")


def _clipped_minutes(session: WorkSession, period: Period) -> int:
    start = max(session.check_in.instant, period.start)
    end = min(session.ended_at, period.end)
    return minutes_between(start, end)


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule set.

    Regular time per day and period is min(worked - break, scheduled - break);
    overtime is clipped to its approved window. Holidays are checked first.
    """

    def calculate(
        self,
        employee: Employee,
        events: Iterable[AttendanceEvent],
        leave_records: Iterable[LeaveRecord],
        holidays: Iterable[Holiday],
        period_start: date,
        period_end: date,
        rate_settings: RateSettings,
    ) -> PayrollLine:
        settings = rate_settings.validate()
        rate = hourly_rate(employee, settings)
        holiday_dates = {h.holiday_date for h in holidays}

        in_range = [
            e
            for e in events
            if e.employee_id == employee.employee_id and period_start <= e.attendance_date <= period_end
        ]
        sessions = pair_sessions(in_range)

        hours = self._hour_buckets(sessions, holiday_dates)
        leave = self._leave_buckets(employee, leave_records, period_start, period_end, settings)
        attendance = self._attendance_summary(in_range, sessions, leave, settings.daily_hours)

        overtime = (
            hours.workday_overtime_hours * settings.overtime_multiplier(OvertimeCategory.WORKDAY, employee.employee_type)
            + hours.day_off_overtime_hours
            * settings.overtime_multiplier(OvertimeCategory.DAY_OFF, employee.employee_type)
            + hours.holiday_overtime_hours
            * settings.overtime_multiplier(OvertimeCategory.HOLIDAY, employee.employee_type)
        )
        paid_leave = (
            leave.sick_hours * settings.leave_pay_rates[LeaveType.SICK]
            + leave.annual_hours * settings.leave_pay_rates[LeaveType.ANNUAL]
            + leave.business_hours * settings.leave_pay_rates[LeaveType.BUSINESS]
            + leave.unpaid_hours * settings.leave_pay_rates[LeaveType.UNPAID]
        )
        earnings = Earnings(
            base=money(hours.regular_hours * rate),
            overtime=money(overtime * rate),
            holiday=money(hours.holiday_hours * rate * settings.holiday_multiplier),
            paid_leave=money(paid_leave * rate),
        )

        allowance_rates = settings.allowances_for(employee.employee_type)
        allowances = Allowances(
            transportation=money(allowance_rates.transportation),
            housing=money(allowance_rates.housing),
            meal=money(allowance_rates.meal_per_day * attendance.present_days),
        )

        deductions = self._deductions(earnings.gross, attendance.late_minutes, rate, settings)
        net = money(earnings.gross + allowances.total - deductions.total)

        line = PayrollLine(
            employee_id=employee.employee_id,
            period_start=period_start,
            period_end=period_end,
            hourly_rate=money(rate),
            hours=hours,
            leave=leave,
            attendance=attendance,
            earnings=earnings,
            allowances=allowances,
            deductions=deductions,
            net_payable=net,
        )
        logger.debug(
            "payroll line calculated",
            extra={"employee_id": employee.employee_id, "gross": str(earnings.gross), "net_payable": str(net)},
        )
        return line

    def _hour_buckets(self, sessions: list[WorkSession], holiday_dates: set[date]) -> HourBuckets:
        regular_worked: dict[tuple, int] = defaultdict(int)
        regular_periods: dict[tuple, Period] = {}
        overtime_worked: dict[tuple, int] = defaultdict(int)
        overtime_periods: dict[tuple, Period] = {}

        for session in sessions:
            period = session.period
            if not session.is_closed or period is None:
                continue
            key = (session.check_in.attendance_date, period_key(period))
            if period.is_overtime or session.check_in.is_overtime:
                overtime_worked[key] += _clipped_minutes(session, period)
                overtime_periods[key] = period
            else:
                regular_worked[key] += minutes_between(session.check_in.instant, session.ended_at)
                regular_periods[key] = period

        regular = holiday = 0
        for key, worked in regular_worked.items():
            period = regular_periods[key]
            minutes = max(0, min(worked - period.break_minutes, period.duration_minutes - period.break_minutes))
            if key[0] in holiday_dates:
                holiday += minutes
            else:
                regular += minutes

        workday_ot = day_off_ot = holiday_ot = 0
        for key, worked in overtime_worked.items():
            period = overtime_periods[key]
            minutes = min(worked, period.duration_minutes)
            if key[0] in holiday_dates:
                holiday_ot += minutes
            elif period.is_day_off:
                day_off_ot += minutes
            else:
                workday_ot += minutes

        return HourBuckets(
            regular_hours=hours_from_minutes(regular),
            holiday_hours=hours_from_minutes(holiday),
            workday_overtime_hours=hours_from_minutes(workday_ot),
            day_off_overtime_hours=hours_from_minutes(day_off_ot),
            holiday_overtime_hours=hours_from_minutes(holiday_ot),
        )

    def _leave_buckets(
        self,
        employee: Employee,
        leave_records: Iterable[LeaveRecord],
        period_start: date,
        period_end: date,
        settings: RateSettings,
    ) -> LeaveBuckets:
        days = {leave_type: ZERO for leave_type in LeaveType}
        for record in leave_records:
            if record.employee_id != employee.employee_id or record.status != RequestStatus.APPROVED:
                continue
            days[record.leave_type] += record.days_within(period_start, period_end)

        return LeaveBuckets(
            sick_hours=money(days[LeaveType.SICK] * settings.daily_hours),
            annual_hours=money(days[LeaveType.ANNUAL] * settings.daily_hours),
            business_hours=money(days[LeaveType.BUSINESS] * settings.daily_hours),
            unpaid_hours=money(days[LeaveType.UNPAID] * settings.daily_hours),
            unpaid_days=days[LeaveType.UNPAID],
        )

    def _attendance_summary(
        self,
        events: list[AttendanceEvent],
        sessions: list[WorkSession],
        leave: LeaveBuckets,
        daily_hours: Decimal,
    ) -> AttendanceSummary:
        effective = {s.check_in.event_id for s in sessions} | {s.check_out.event_id for s in sessions if s.check_out}
        manual = [e for e in events if e.event_id in effective and not e.is_auto]

        late_ins = [e for e in manual if e.is_check_in and e.is_late]
        present_days = len({s.check_in.attendance_date for s in sessions if s.is_closed})

        return AttendanceSummary(
            present_days=present_days,
            payable_days=money(Decimal(present_days) + leave.paid_hours / daily_hours),
            late_count=len(late_ins),
            late_minutes=sum(e.late_minutes for e in late_ins),
            early_checkout_count=sum(1 for e in manual if not e.is_check_in and e.is_early),
            late_checkout_count=sum(1 for e in manual if not e.is_check_in and e.is_late),
            incomplete_sessions=sum(1 for s in sessions if not s.is_closed),
        )

    def _deductions(self, gross: Decimal, late_minutes: int, rate: Decimal, settings: RateSettings) -> Deductions:
        insurable = min(max(gross, settings.social_security_min_base), settings.social_security_ceiling)
        social_security = money(insurable * settings.social_security_rate)
        income_tax = progressive_tax(gross, settings.tax_brackets, settings.tax_annualization_factor)

        late = ZERO
        if late_minutes > settings.late_deduction_threshold_minutes:
            daily_wage = rate * settings.daily_hours
            late = late_minutes * daily_wage / (settings.daily_hours * 60)

        return Deductions(social_security=social_security, income_tax=income_tax, late=money(late))
