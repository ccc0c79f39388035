from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

import pytest

from attendance_engine.attendance.event_log import InMemoryAttendanceEventLog
from attendance_engine.attendance.model import AttendanceEvent
from attendance_engine.core.enums import EventKind, LeaveType, PayrollStatus, PeriodType, SalaryType
from attendance_engine.core.exceptions import InvalidRateSettingsError, ValidationError
from attendance_engine.employees.model import Employee
from attendance_engine.holidays.model import Holiday
from attendance_engine.leaves.model import LeaveRecord
from attendance_engine.payroll.periods import month_period
from attendance_engine.payroll.service import PayrollService
from attendance_engine.periods.model import Period
from attendance_engine.settings.provider import StaticRateSettingsProvider

DAY = date(2024, 3, 5)


@dataclass
class InMemoryLeave:
    records: list[LeaveRecord] = field(default_factory=list)

    def get_approved_leave(self, employee_id: str, start: date, end: date) -> list[LeaveRecord]:
        return [r for r in self.records if r.employee_id == employee_id and r.start_date <= end and r.end_date >= start]


@dataclass
class InMemoryHolidays:
    holidays: dict[date, Holiday] = field(default_factory=dict)

    def is_holiday(self, day: date) -> Optional[Holiday]:
        return self.holidays.get(day)


def _employee(employee_id: str) -> Employee:
    return Employee(employee_id, employee_id.lower(), salary_type=SalaryType.HOURLY, base_salary=Decimal("100"))


def _log_with_day(employee_id: str, log: InMemoryAttendanceEventLog, day: date = DAY) -> None:
    period = Period(PeriodType.REGULAR, datetime(day.year, day.month, day.day, 8), datetime(day.year, day.month, day.day, 17), 0)
    log.append(AttendanceEvent(0, employee_id, day, period.start, EventKind.CHECK_IN, period=period))
    log.append(AttendanceEvent(0, employee_id, day, period.end, EventKind.CHECK_OUT, period=period))


def _service(log=None, leave=None, holidays=None, provider=None):
    return PayrollService(
        log or InMemoryAttendanceEventLog(),
        leave or InMemoryLeave(),
        provider or StaticRateSettingsProvider(),
        holidays=holidays,
    )


def test_run_builds_draft_lines_sorted_by_employee():
    log = InMemoryAttendanceEventLog()
    for emp in ("E3", "E1", "E2"):
        _log_with_day(emp, log)

    period = _service(log).run(month_period(2024, 3), [_employee("E3"), _employee("E1"), _employee("E2")], chunk_size=2)

    assert period.status == PayrollStatus.DRAFT
    assert [line.employee_id for line in period.lines] == ["E1", "E2", "E3"]
    assert period.line_for("E2").hours.regular_hours == Decimal("9.00")
    assert period.total_net_payable == sum(line.net_payable for line in period.lines)


def test_run_uses_holiday_store_and_leave_store():
    log = InMemoryAttendanceEventLog()
    _log_with_day("E1", log)
    service = _service(
        log,
        leave=InMemoryLeave([LeaveRecord("E1", LeaveType.SICK, date(2024, 3, 20), date(2024, 3, 20))]),
        holidays=InMemoryHolidays({DAY: Holiday(DAY, "Holiday")}),
    )

    line = service.run(month_period(2024, 3), [_employee("E1")]).lines[0]

    assert line.hours.holiday_hours == Decimal("9.00")
    assert line.leave.sick_hours == Decimal("8.00")


def test_status_flow_draft_approved_paid():
    service = _service()
    draft = service.run(month_period(2024, 3), [_employee("E1")])

    approved = service.approve(draft)
    paid = service.mark_paid(approved)

    assert approved.status == PayrollStatus.APPROVED
    assert paid.status == PayrollStatus.PAID
    assert paid.lines == draft.lines


@pytest.mark.parametrize(
    "action,status",
    [
        ("approve", PayrollStatus.APPROVED),
        ("approve", PayrollStatus.PAID),
        ("mark_paid", PayrollStatus.DRAFT),
        ("mark_paid", PayrollStatus.PAID),
    ],
)
def test_invalid_transitions(action, status):
    period = replace(month_period(2024, 3), status=status)
    with pytest.raises(ValidationError):
        getattr(_service(), action)(period)


def test_run_refuses_non_draft_period_and_bad_chunk():
    service = _service()
    approved = service.approve(month_period(2024, 3))

    with pytest.raises(ValidationError):
        service.run(approved, [_employee("E1")])
    with pytest.raises(ValidationError):
        service.run(month_period(2024, 3), [_employee("E1")], chunk_size=0)


def test_missing_rate_settings_fail_the_run():
    with pytest.raises(InvalidRateSettingsError):
        _service(provider=StaticRateSettingsProvider(rate_settings=None)).run(month_period(2024, 3), [_employee("E1")])
