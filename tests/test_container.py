from datetime import date, datetime
from decimal import Decimal

from attendance_engine.container import build_container
from attendance_engine.core.enums import RequestStatus, SalaryType
from attendance_engine.employees.model import Employee
from attendance_engine.overtime.model import OvertimeWindow
from attendance_engine.payroll.periods import month_period
from attendance_engine.settings.model import AttendancePolicy
from attendance_engine.settings.provider import StaticRateSettingsProvider
from attendance_engine.shifts.model import ShiftDefinition

DAY = date(2024, 3, 5)


class Shifts:
    def get_standing_shift(self, employee_id):
        return ShiftDefinition("S1", "Day", "08:00", "17:00", break_minutes=60)

    def get_approved_adjustment(self, employee_id, work_date):
        return None


class Overtime:
    def get_approved_windows(self, employee_id, work_date):
        if work_date != DAY:
            return []
        return [OvertimeWindow("OT1", employee_id, DAY, "17:00", "19:00", status=RequestStatus.APPROVED)]


class NoLeave:
    def get_approved_leave(self, employee_id, start, end):
        return []


def test_ledger_output_feeds_payroll():
    container = build_container(
        shifts=Shifts(),
        overtime=Overtime(),
        leaves=NoLeave(),
        settings=StaticRateSettingsProvider(attendance_policy=AttendancePolicy(transition_buffer_minutes=10)),
    )
    assert container.classifier.transition_buffer.total_seconds() == 600

    container.ledger.record_check_in("E1", datetime(2024, 3, 5, 7, 55))
    container.ledger.record_check_out("E1", datetime(2024, 3, 5, 18, 30))

    employee = Employee("E1", "Alice", salary_type=SalaryType.HOURLY, base_salary=Decimal("100"))
    line = container.payroll_service.run(month_period(2024, 3), [employee]).lines[0]

    assert line.hours.regular_hours == Decimal("8.00")
    assert line.hours.workday_overtime_hours == Decimal("1.50")
    # 800 base + 1.5h * 1.5 * 100
    assert line.earnings.gross == Decimal("1025.00")


def test_default_settings_accept_naive_instants(monkeypatch):
    monkeypatch.setenv("APP_ENV", "development")
    container = build_container(shifts=Shifts(), overtime=Overtime(), leaves=NoLeave())

    check_in = container.ledger.record_check_in("E1", datetime(2024, 3, 5, 7, 55))
    check_out = container.ledger.record_check_out("E1", datetime(2024, 3, 5, 18, 30))

    assert check_in.attendance_date == DAY
    assert check_out.period.overtime_id == "OT1"
    assert check_in.instant.tzinfo is container.shift_resolver.tz
