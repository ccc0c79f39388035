from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.event_log import InMemoryAttendanceEventLog
from .attendance.factory import CheckInStrategyFactory
from .attendance.ledger import AttendanceLedger
from .attendance.notifications import NotificationSink
from .attendance.repository import AttendanceEventStore
from .holidays.repository import HolidayStore
from .leaves.repository import LeaveStore
from .overtime.repository import OvertimeStore
from .payroll.service import PayrollService
from .periods.classifier import PeriodClassifier
from .settings.provider import ModuleRateSettingsProvider, RateSettingsProvider
from .shifts.repository import ShiftStore
from .shifts.resolver import ShiftResolver


@dataclass(frozen=True)
class Container:
    settings: RateSettingsProvider
    events: AttendanceEventStore

    shift_resolver: ShiftResolver
    classifier: PeriodClassifier
    ledger: AttendanceLedger
    payroll_service: PayrollService


def build_container(
    *,
    shifts: ShiftStore,
    overtime: OvertimeStore,
    leaves: LeaveStore,
    holidays: Optional[HolidayStore] = None,
    notifications: Optional[NotificationSink] = None,
    events: Optional[AttendanceEventStore] = None,
    settings: Optional[RateSettingsProvider] = None,
) -> Container:
    settings = settings or ModuleRateSettingsProvider()
    events = events if events is not None else InMemoryAttendanceEventLog()
    policy = settings.get_attendance_policy()

    get_timezone = getattr(settings, "get_timezone", None)
    tz = get_timezone() if get_timezone is not None else None

    shift_resolver = ShiftResolver(shifts, tz=tz)
    classifier = PeriodClassifier(transition_buffer=policy.transition_buffer)
    ledger = AttendanceLedger(
        shift_resolver,
        overtime,
        events,
        holidays=holidays,
        notifications=notifications,
        policy=policy,
        classifier=classifier,
        strategy_factory=CheckInStrategyFactory(),
    )
    payroll_service = PayrollService(events, leaves, settings, holidays=holidays)

    return Container(
        settings=settings,
        events=events,
        shift_resolver=shift_resolver,
        classifier=classifier,
        ledger=ledger,
        payroll_service=payroll_service,
    )
