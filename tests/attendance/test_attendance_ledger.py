from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from typing import Optional

import pytest

from attendance_engine.attendance.event_log import InMemoryAttendanceEventLog
from attendance_engine.attendance.ledger import AttendanceLedger
from attendance_engine.core.enums import ErrorKind, PeriodProgress, PeriodState, PeriodType, RequestStatus
from attendance_engine.core.exceptions import (
    AlreadyCheckedInError,
    EarlyCheckInNotAllowedError,
    EventNotFoundError,
    NoActiveCheckInError,
    NoScheduledPeriodError,
    ValidationError,
)
from attendance_engine.holidays.model import Holiday
from attendance_engine.overtime.model import OvertimeWindow
from attendance_engine.settings.model import AttendancePolicy
from attendance_engine.shifts.model import ShiftDefinition
from attendance_engine.shifts.resolver import ShiftResolver

TUESDAY = date(2024, 3, 5)
SUNDAY = date(2024, 3, 10)

DAY_SHIFT = ShiftDefinition("S1", "Day", "08:00", "17:00", break_minutes=60)
NIGHT_SHIFT = ShiftDefinition("S2", "Night", "22:00", "06:00")


@dataclass
class InMemoryShifts:
    standing: dict[str, ShiftDefinition]

    def get_standing_shift(self, employee_id: str) -> Optional[ShiftDefinition]:
        return self.standing.get(employee_id)

    def get_approved_adjustment(self, employee_id: str, work_date: date):
        return None


@dataclass
class InMemoryOvertime:
    windows: list[OvertimeWindow] = field(default_factory=list)

    def get_approved_windows(self, employee_id: str, work_date: date) -> list[OvertimeWindow]:
        return [w for w in self.windows if w.employee_id == employee_id and w.work_date == work_date]


@dataclass
class InMemoryHolidays:
    holidays: dict[date, Holiday] = field(default_factory=dict)

    def is_holiday(self, day: date) -> Optional[Holiday]:
        return self.holidays.get(day)


@dataclass
class RecordingSink:
    sent: list = field(default_factory=list)

    def notify(self, employee_id, message):
        self.sent.append((employee_id, message))


class BrokenSink:
    def notify(self, employee_id, message):
        raise RuntimeError("bot is down")


def _at(day: date, hour: int, minute: int = 0) -> datetime:
    return datetime(day.year, day.month, day.day, hour, minute)


def _ledger(shift=DAY_SHIFT, windows=(), holidays=None, sink=None, policy=None, tz=None):
    return AttendanceLedger(
        ShiftResolver(InMemoryShifts({"E1": shift}), tz=tz),
        InMemoryOvertime(list(windows)),
        InMemoryAttendanceEventLog(),
        holidays=InMemoryHolidays(holidays or {}),
        notifications=sink,
        policy=policy,
    )


def _overtime(start, end, day=TUESDAY, oid="OT1"):
    return OvertimeWindow(oid, "E1", day, start, end, status=RequestStatus.APPROVED)


def test_check_in_five_minutes_early_is_accepted_not_late():
    ledger = _ledger()

    event = ledger.record_check_in("E1", _at(TUESDAY, 7, 55), location="HQ")

    assert event.is_late is False
    assert event.is_early is True
    assert event.attendance_date == TUESDAY
    assert event.period.period_type == PeriodType.REGULAR
    assert event.location == "HQ"


def test_check_in_half_an_hour_early_is_rejected_and_notified():
    sink = RecordingSink()
    ledger = _ledger(sink=sink)

    with pytest.raises(EarlyCheckInNotAllowedError):
        ledger.record_check_in("E1", _at(TUESDAY, 7, 30))

    assert len(ledger.events) == 0
    assert [m.kind for _, m in sink.sent] == [ErrorKind.EARLY_CHECK_IN_NOT_ALLOWED]


def test_late_check_in_counts_minutes_after_grace():
    ledger = _ledger(policy=AttendancePolicy(grace_minutes=5))

    event = ledger.record_check_in("E1", _at(TUESDAY, 8, 10))

    assert event.is_late is True
    assert event.late_minutes == 10


def test_double_check_in_stores_one_event():
    ledger = _ledger()
    ledger.record_check_in("E1", _at(TUESDAY, 8, 0))

    with pytest.raises(AlreadyCheckedInError):
        ledger.record_check_in("E1", _at(TUESDAY, 8, 5))
    assert len(ledger.events) == 1


def test_check_out_without_check_in():
    with pytest.raises(NoActiveCheckInError):
        _ledger().record_check_out("E1", _at(TUESDAY, 17, 0))


def test_early_check_out_is_flagged():
    ledger = _ledger()
    ledger.record_check_in("E1", _at(TUESDAY, 8, 0))

    event = ledger.record_check_out("E1", _at(TUESDAY, 16, 0))

    assert event.is_early is True
    assert event.is_late is False


def test_overnight_shift_belongs_to_the_start_date():
    ledger = _ledger(shift=NIGHT_SHIFT)

    check_in = ledger.record_check_in("E1", _at(TUESDAY, 21, 50))
    check_out = ledger.record_check_out("E1", _at(date(2024, 3, 6), 6, 0))

    assert check_in.attendance_date == TUESDAY
    assert check_out.attendance_date == TUESDAY
    assert check_out.is_late is False
    assert ledger.get_day_status("E1", TUESDAY).is_complete is True


def test_check_in_at_two_am_joins_previous_night_shift():
    ledger = _ledger(shift=NIGHT_SHIFT)

    event = ledger.record_check_in("E1", _at(date(2024, 3, 6), 2, 0))

    assert event.attendance_date == TUESDAY
    assert event.period.start == _at(TUESDAY, 22, 0)
    assert event.is_late is True
    assert event.late_minutes == 240


def test_check_out_past_shift_end_rolls_into_connecting_overtime():
    ledger = _ledger(windows=[_overtime("17:00", "19:00")])
    ledger.record_check_in("E1", _at(TUESDAY, 7, 55))

    final = ledger.record_check_out("E1", _at(TUESDAY, 18, 30))

    events = ledger.events.list_for_day("E1", TUESDAY)
    assert len(events) == 4
    auto_out, auto_in = events[1], events[2]
    assert auto_out.is_auto and auto_out.instant == _at(TUESDAY, 17, 0)
    assert auto_out.period.period_type == PeriodType.REGULAR
    assert auto_in.is_auto and auto_in.is_overtime
    assert auto_in.instant == _at(TUESDAY, 17, 0)
    assert final.period.overtime_id == "OT1"
    assert final.is_overtime is True
    assert final.is_late is False

    status = ledger.get_day_status("E1", TUESDAY)
    assert status.is_complete is True
    assert status.completed_count == 2


def test_late_check_out_without_overtime_is_flagged_and_notified():
    sink = RecordingSink()
    ledger = _ledger(sink=sink)
    ledger.record_check_in("E1", _at(TUESDAY, 8, 0))

    event = ledger.record_check_out("E1", _at(TUESDAY, 17, 30))

    assert event.is_late is True
    ((employee_id, notice),) = sink.sent
    assert employee_id == "E1"
    assert notice.kind == ErrorKind.LATE_CHECKOUT_UNAUTHORIZED
    assert notice.event_id == event.event_id


def test_late_check_out_tolerance_is_configurable():
    ledger = _ledger(policy=AttendancePolicy(late_checkout_tolerance_minutes=30))
    ledger.record_check_in("E1", _at(TUESDAY, 8, 0))

    assert ledger.record_check_out("E1", _at(TUESDAY, 17, 20)).is_late is False


def test_notification_failure_does_not_break_check_out():
    ledger = _ledger(sink=BrokenSink())
    ledger.record_check_in("E1", _at(TUESDAY, 8, 0))

    event = ledger.record_check_out("E1", _at(TUESDAY, 18, 0))

    assert event.is_late is True
    assert ledger.events.get_open_check_in("E1") is None


def test_check_in_during_transition_goes_to_overtime():
    ledger = _ledger(windows=[_overtime("17:10", "19:00")])

    event = ledger.record_check_in("E1", _at(TUESDAY, 17, 5))

    assert event.is_overtime is True
    assert event.period.overtime_id == "OT1"


def test_day_off_without_overtime_has_nothing_to_check_into():
    with pytest.raises(NoScheduledPeriodError):
        _ledger().record_check_in("E1", _at(SUNDAY, 9, 0))


def test_day_off_overtime_accepts_check_in():
    ledger = _ledger(windows=[_overtime("09:00", "12:00", day=SUNDAY)])

    event = ledger.record_check_in("E1", _at(SUNDAY, 9, 0))

    assert event.is_overtime is True
    assert event.period.is_day_off is True


def test_holiday_drops_regular_period():
    ledger = _ledger(holidays={TUESDAY: Holiday(TUESDAY, "Founders Day")})

    assert ledger.periods_for_day("E1", TUESDAY) == []


def test_correction_appends_replacement_and_recomputes_flags():
    ledger = _ledger()
    original = ledger.record_check_in("E1", _at(TUESDAY, 8, 10))

    corrected = ledger.record_correction(original.event_id, _at(TUESDAY, 8, 0), note="badge reader offline")

    assert corrected.supersedes == original.event_id
    assert corrected.is_late is False
    assert corrected.late_minutes == 0
    assert corrected.note == "badge reader offline"
    assert ledger.events.get(original.event_id) == original
    assert ledger.events.get_open_check_in("E1") == corrected


def test_correction_of_unknown_event():
    with pytest.raises(EventNotFoundError):
        _ledger().record_correction(42, _at(TUESDAY, 8, 0))


def test_partial_day_is_reported_not_raised():
    ledger = _ledger(windows=[_overtime("17:00", "19:00")])
    ledger.record_check_in("E1", _at(TUESDAY, 8, 0))

    status = ledger.get_day_status("E1", TUESDAY)

    assert [p.progress for p in status.periods] == [PeriodProgress.ACTIVE, PeriodProgress.PENDING]
    assert status.is_complete is False


def test_current_state_follows_open_event():
    ledger = _ledger(shift=NIGHT_SHIFT)
    ledger.record_check_in("E1", _at(TUESDAY, 22, 0))

    snapshot = ledger.get_current_state("E1", _at(date(2024, 3, 6), 3, 0))

    assert snapshot.attendance_date == TUESDAY
    assert snapshot.state.state == PeriodState.IN_REGULAR
    assert snapshot.open_event is not None


MONDAY = date(2024, 3, 4)
BANGKOK = timezone(timedelta(hours=7), "Asia/Bangkok")
EARLY_SHIFT = ShiftDefinition("S3", "Early", "06:00", "15:00")


def test_naive_instants_are_read_in_the_attendance_timezone():
    ledger = _ledger(windows=[_overtime("17:00", "19:00")], tz=BANGKOK)

    check_in = ledger.record_check_in("E1", _at(TUESDAY, 7, 55))
    final = ledger.record_check_out("E1", _at(TUESDAY, 18, 30))

    assert check_in.instant == datetime(2024, 3, 5, 7, 55, tzinfo=BANGKOK)
    assert check_in.is_late is False
    assert final.period.overtime_id == "OT1"
    assert final.is_late is False


def test_utc_instant_is_attributed_to_the_local_attendance_day():
    ledger = _ledger(shift=EARLY_SHIFT, tz=BANGKOK)

    # 06:10 on the 6th in Bangkok
    event = ledger.record_check_in("E1", datetime(2024, 3, 5, 23, 10, tzinfo=timezone.utc))

    assert event.attendance_date == date(2024, 3, 6)
    assert event.is_late is True
    assert event.late_minutes == 10
    assert event.instant == datetime(2024, 3, 6, 6, 10, tzinfo=BANGKOK)


def test_aware_instant_without_attendance_timezone_is_rejected():
    ledger = _ledger()

    with pytest.raises(ValidationError):
        ledger.record_check_in("E1", datetime(2024, 3, 5, 8, 0, tzinfo=timezone.utc))
    assert len(ledger.events) == 0


def test_check_out_on_a_later_attendance_day_is_rejected():
    ledger = _ledger()
    ledger.record_check_in("E1", _at(MONDAY, 8, 0))

    with pytest.raises(NoActiveCheckInError):
        ledger.record_check_out("E1", _at(date(2024, 3, 6), 17, 0))
    assert len(ledger.events) == 1


def test_forgotten_check_out_is_auto_completed_by_next_check_in():
    ledger = _ledger()
    stale = ledger.record_check_in("E1", _at(MONDAY, 8, 0))

    event = ledger.record_check_in("E1", _at(TUESDAY, 7, 55))

    assert event.attendance_date == TUESDAY
    monday = ledger.events.list_for_day("E1", MONDAY)
    assert monday[0] == stale
    auto_out = monday[1]
    assert auto_out.is_auto is True
    assert auto_out.instant == _at(MONDAY, 17, 0)
    assert ledger.get_day_status("E1", MONDAY).is_complete is True
    assert ledger.events.get_open_check_in("E1") == event


def test_stale_open_check_in_is_not_reported_as_current():
    ledger = _ledger()
    ledger.record_check_in("E1", _at(MONDAY, 8, 0))

    snapshot = ledger.get_current_state("E1", _at(TUESDAY, 9, 0))

    assert snapshot.attendance_date == TUESDAY
    assert snapshot.open_event is None


def test_late_check_out_of_overnight_shift_stays_on_its_day():
    ledger = _ledger(shift=NIGHT_SHIFT)
    ledger.record_check_in("E1", _at(TUESDAY, 22, 0))

    event = ledger.record_check_out("E1", _at(date(2024, 3, 6), 6, 30))

    assert event.attendance_date == TUESDAY
    assert event.is_late is True
