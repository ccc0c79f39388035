"""Example: record a day with a transition into overtime, then run payroll.

Everything runs in memory; stores are plain dict-backed classes.
"""

from datetime import date, datetime
from decimal import Decimal

from attendance_engine.container import build_container
from attendance_engine.core.enums import RequestStatus, SalaryType
from attendance_engine.employees.model import Employee
from attendance_engine.main import configure_logging
from attendance_engine.overtime.model import OvertimeWindow
from attendance_engine.payroll.periods import month_period
from attendance_engine.settings.provider import StaticRateSettingsProvider
from attendance_engine.shifts.model import ShiftDefinition


class DictShiftStore:
    def __init__(self, standing):
        self._standing = standing

    def get_standing_shift(self, employee_id):
        return self._standing.get(employee_id)

    def get_approved_adjustment(self, employee_id, work_date):
        return None


class DictOvertimeStore:
    def __init__(self, windows):
        self._windows = windows

    def get_approved_windows(self, employee_id, work_date):
        return [w for w in self._windows if w.employee_id == employee_id and w.work_date == work_date]


class NoLeave:
    def get_approved_leave(self, employee_id, start, end):
        return []


class PrintSink:
    def notify(self, employee_id, message):
        print(f"[notify {employee_id}] {message.kind.value}: {message.text}")


def main():
    configure_logging()

    day = date(2024, 3, 5)
    container = build_container(
        shifts=DictShiftStore({"E1": ShiftDefinition("S1", "Day", "08:00", "17:00", break_minutes=60)}),
        overtime=DictOvertimeStore(
            [OvertimeWindow("OT1", "E1", day, "17:00", "19:00", status=RequestStatus.APPROVED)]
        ),
        leaves=NoLeave(),
        notifications=PrintSink(),
        settings=StaticRateSettingsProvider(),
    )

    ledger = container.ledger
    ledger.record_check_in("E1", datetime(2024, 3, 5, 7, 55))
    ledger.record_check_out("E1", datetime(2024, 3, 5, 18, 30))
    print(ledger.get_day_status("E1", day))

    employee = Employee("E1", "Demo", salary_type=SalaryType.HOURLY, base_salary=Decimal("100"))
    period = container.payroll_service.run(month_period(2024, 3), [employee])
    print(period.lines[0].to_dict())


if __name__ == "__main__":
    main()
