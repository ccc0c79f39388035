from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime, timedelta
from typing import Optional

from ..common.datetime_utils import in_zone, minutes_between
from ..core.enums import ErrorKind, EventKind, PeriodProgress, PeriodState
from ..core.exceptions import (
    AlreadyCheckedInError,
    EarlyCheckInNotAllowedError,
    EmployeeNotFoundError,
    EventNotFoundError,
    NoActiveCheckInError,
    ValidationError,
)
from ..holidays.repository import HolidayStore
from ..overtime.repository import OvertimeStore
from ..periods.builder import build_day_periods
from ..periods.classifier import PeriodClassifier
from ..periods.model import Period
from ..settings.model import AttendancePolicy
from ..shifts.resolver import ShiftResolver
from .factory import CheckInStrategyFactory
from .model import AttendanceEvent, AttendanceSnapshot, DayAttendanceStatus, PeriodAttendance
from .notifications import LedgerNotice, NotificationSink, notify_safely
from .repository import AttendanceEventStore
from .sessions import pair_sessions, period_key

logger = logging.getLogger(__name__)

_RUNNING_STATES = {PeriodState.IN_REGULAR, PeriodState.IN_OVERTIME, PeriodState.TRANSITION_WINDOW}


class AttendanceLedger:
    """Use case: record and judge check-in/check-out events.

    Integrity violations (double check-in, check-out without check-in) are
    rejected; advisory ones (late check-out) are recorded with a flag and a
    notification.

    Instants are read in the resolver's timezone: naive values are taken as
    local wall-clock time, aware values are converted. An open check-in can
    be checked out until the next attendance day opens; after that it is
    stale, and the next check-in closes it automatically at its period end.
    """

    def __init__(
        self,
        resolver: ShiftResolver,
        overtime: OvertimeStore,
        events: AttendanceEventStore,
        *,
        holidays: Optional[HolidayStore] = None,
        notifications: Optional[NotificationSink] = None,
        policy: Optional[AttendancePolicy] = None,
        classifier: Optional[PeriodClassifier] = None,
        strategy_factory: Optional[CheckInStrategyFactory] = None,
    ):
        self._resolver = resolver
        self._overtime = overtime
        self._events = events
        self._holidays = holidays
        self._notifications = notifications
        self._policy = policy or AttendancePolicy()
        self._classifier = classifier or PeriodClassifier(transition_buffer=self._policy.transition_buffer)
        self._factory = strategy_factory or CheckInStrategyFactory()

    @property
    def events(self) -> AttendanceEventStore:
        return self._events

    def periods_for_day(self, employee_id: str, work_date: date) -> list[Period]:
        shift = self._resolver.resolve_effective_shift(employee_id, work_date)
        windows = self._overtime.get_approved_windows(employee_id, work_date)
        is_holiday = self._holidays is not None and self._holidays.is_holiday(work_date) is not None
        return build_day_periods(shift, windows, is_holiday=is_holiday, tz=self._resolver.tz)

    def resolve_attendance_day(self, employee_id: str, now: datetime) -> tuple[date, list[Period]]:
        """The day whose periods govern `now`.

        Yesterday wins while one of its periods (an overnight shift or
        overtime) is still running or about to roll into overtime.
        """
        now = self._local(now)
        previous_day = now.date() - timedelta(days=1)
        try:
            previous = self.periods_for_day(employee_id, previous_day)
        except EmployeeNotFoundError:
            previous = []

        if previous and self._classifier.classify(previous, now).state in _RUNNING_STATES:
            return previous_day, previous
        return now.date(), self.periods_for_day(employee_id, now.date())

    def get_current_state(self, employee_id: str, now: datetime) -> AttendanceSnapshot:
        now = self._local(now)
        open_event = self._events.get_open_check_in(employee_id)
        if open_event is not None and now >= self._check_out_deadline(open_event):
            open_event = None

        if open_event is not None:
            day = open_event.attendance_date
            periods = self.periods_for_day(employee_id, day)
        else:
            day, periods = self.resolve_attendance_day(employee_id, now)

        return AttendanceSnapshot(
            employee_id=employee_id,
            attendance_date=day,
            periods=tuple(periods),
            state=self._classifier.classify(periods, now),
            open_event=open_event,
        )

    def record_check_in(self, employee_id: str, instant: datetime, location: Optional[str] = None) -> AttendanceEvent:
        instant = self._local(instant)
        with self._events.lock_for(employee_id):
            open_event = self._events.get_open_check_in(employee_id)
            if open_event is not None:
                if instant < self._check_out_deadline(open_event):
                    raise AlreadyCheckedInError(
                        f"Employee {employee_id} is already checked in",
                        employee_id=employee_id,
                    )
                self._auto_complete(open_event)

            day, periods = self.resolve_attendance_day(employee_id, instant)
            state = self._classifier.classify(periods, instant)
            strategy = self._factory.for_check_in(state)
            try:
                decision = strategy.decide_check_in(
                    employee_id=employee_id,
                    now=instant,
                    state=state,
                    policy=self._policy,
                )
            except EarlyCheckInNotAllowedError as exc:
                notify_safely(
                    self._notifications,
                    employee_id,
                    LedgerNotice(kind=ErrorKind.EARLY_CHECK_IN_NOT_ALLOWED, text=exc.message),
                )
                raise

            event = self._events.append(
                AttendanceEvent(
                    event_id=0,
                    employee_id=employee_id,
                    attendance_date=day,
                    instant=instant,
                    kind=EventKind.CHECK_IN,
                    location=location,
                    period=decision.period,
                    is_late=decision.is_late,
                    is_early=decision.is_early,
                    is_overtime=decision.is_overtime,
                    late_minutes=decision.late_minutes,
                )
            )

        logger.info(
            "check-in recorded",
            extra={
                "employee_id": employee_id,
                "event_id": event.event_id,
                "attendance_date": day.isoformat(),
                "period_state": state.state.value,
                "is_late": event.is_late,
                "is_overtime": event.is_overtime,
            },
        )
        return event

    def record_check_out(self, employee_id: str, instant: datetime, location: Optional[str] = None) -> AttendanceEvent:
        instant = self._local(instant)
        with self._events.lock_for(employee_id):
            open_event = self._events.get_open_check_in(employee_id)
            if open_event is None:
                raise NoActiveCheckInError(
                    f"Employee {employee_id} has not checked in",
                    employee_id=employee_id,
                )
            if instant >= self._check_out_deadline(open_event):
                raise NoActiveCheckInError(
                    f"Employee {employee_id} has no check-in on the current attendance day "
                    f"(open check-in belongs to {open_event.attendance_date.isoformat()})",
                    employee_id=employee_id,
                )

            period = open_event.period
            periods = self.periods_for_day(employee_id, open_event.attendance_date)
            tolerance = self._policy.late_checkout_tolerance

            while instant > period.end + tolerance:
                target = self._connecting_overtime(periods, period, instant)
                if target is None:
                    break
                self._roll_into_overtime(open_event, period, target, location)
                period = target

            is_late = instant > period.end + tolerance
            event = self._events.append(
                AttendanceEvent(
                    event_id=0,
                    employee_id=employee_id,
                    attendance_date=open_event.attendance_date,
                    instant=instant,
                    kind=EventKind.CHECK_OUT,
                    location=location,
                    period=period,
                    is_late=is_late,
                    is_early=instant < period.end,
                    is_overtime=period.is_overtime,
                )
            )

        if is_late:
            notify_safely(
                self._notifications,
                employee_id,
                LedgerNotice(
                    kind=ErrorKind.LATE_CHECKOUT_UNAUTHORIZED,
                    text=(
                        f"Checked out at {instant:%H:%M}, {minutes_between(period.end, instant)} minutes "
                        f"after the period ended at {period.end:%H:%M} without approved overtime"
                    ),
                    event_id=event.event_id,
                ),
            )

        logger.info(
            "check-out recorded",
            extra={
                "employee_id": employee_id,
                "event_id": event.event_id,
                "attendance_date": event.attendance_date.isoformat(),
                "is_late": event.is_late,
                "is_early": event.is_early,
                "is_overtime": event.is_overtime,
            },
        )
        return event

    def record_correction(self, event_id: int, corrected_instant: datetime, *, note: Optional[str] = None) -> AttendanceEvent:
        """Administrative override: append a replacement, keep the original."""
        corrected_instant = self._local(corrected_instant)
        # Read outside the lock: the employee is not known yet, and logged events never change.
        original = self._events.get(event_id)
        if original is None:
            raise EventNotFoundError(f"Attendance event {event_id} does not exist")

        with self._events.lock_for(original.employee_id):
            period = original.period
            is_late = original.is_late
            is_early = original.is_early
            late_minutes = original.late_minutes
            if period is not None:
                if original.is_check_in:
                    is_late = corrected_instant > period.start + self._policy.grace
                    is_early = corrected_instant < period.start
                    late_minutes = minutes_between(period.start, corrected_instant) if is_late else 0
                else:
                    is_late = corrected_instant > period.end + self._policy.late_checkout_tolerance
                    is_early = corrected_instant < period.end

            correction = self._events.append(
                replace(
                    original,
                    event_id=0,
                    instant=corrected_instant,
                    is_late=is_late,
                    is_early=is_early,
                    late_minutes=late_minutes,
                    is_auto=False,
                    supersedes=original.event_id,
                    note=note,
                )
            )

        logger.info(
            "attendance correction recorded",
            extra={"employee_id": original.employee_id, "event_id": correction.event_id, "supersedes": event_id},
        )
        return correction

    def get_day_status(self, employee_id: str, work_date: date) -> DayAttendanceStatus:
        periods = self.periods_for_day(employee_id, work_date)
        sessions = pair_sessions(self._events.list_for_day(employee_id, work_date))

        rows = []
        for period in periods:
            key = period_key(period)
            matching = [s for s in sessions if period_key(s.period) == key]
            closed = next((s for s in matching if s.is_closed), None)
            if closed is not None:
                rows.append(PeriodAttendance(period, PeriodProgress.COMPLETED, closed.check_in, closed.check_out))
            elif matching:
                rows.append(PeriodAttendance(period, PeriodProgress.ACTIVE, matching[-1].check_in))
            else:
                rows.append(PeriodAttendance(period, PeriodProgress.PENDING))

        return DayAttendanceStatus(employee_id=employee_id, attendance_date=work_date, periods=tuple(rows))

    def _local(self, instant: datetime) -> datetime:
        try:
            return in_zone(instant, self._resolver.tz)
        except ValueError as exc:
            raise ValidationError(str(exc))

    def _check_out_deadline(self, open_event: AttendanceEvent) -> datetime:
        """First instant at which `open_event` no longer belongs to the current attendance day.

        That is when check-in opens for the following day's first period,
        capped at one day after the open day's last period ends.
        """
        day = open_event.attendance_date
        ends = [p.end for p in self.periods_for_day(open_event.employee_id, day)]
        if open_event.period is not None:
            ends.append(open_event.period.end)
        last_end = max(ends + [open_event.instant])

        try:
            following = self.periods_for_day(open_event.employee_id, day + timedelta(days=1))
        except EmployeeNotFoundError:
            following = []

        deadline = last_end + timedelta(days=1)
        if following:
            opens_at = min(p.start for p in following) - self._policy.early_check_in
            deadline = min(deadline, max(opens_at, last_end))
        return deadline

    def _auto_complete(self, open_event: AttendanceEvent) -> AttendanceEvent:
        """Close a stale check-in at the end of its period."""
        period = open_event.period
        instant = max(period.end, open_event.instant) if period is not None else open_event.instant
        event = self._events.append(
            AttendanceEvent(
                event_id=0,
                employee_id=open_event.employee_id,
                attendance_date=open_event.attendance_date,
                instant=instant,
                kind=EventKind.CHECK_OUT,
                period=period,
                is_overtime=open_event.is_overtime,
                is_auto=True,
                note="auto-completed: no check-out recorded",
            )
        )
        logger.warning(
            "stale check-in auto-completed",
            extra={
                "employee_id": open_event.employee_id,
                "event_id": event.event_id,
                "attendance_date": open_event.attendance_date.isoformat(),
            },
        )
        return event

    def _connecting_overtime(self, periods: list[Period], current: Period, now: datetime) -> Optional[Period]:
        current_key = period_key(current)
        candidates = [
            p
            for p in periods
            if p.is_overtime
            and period_key(p) != current_key
            and p.start >= current.start
            and p.start <= now
            and self._classifier.connects(current, p)
        ]
        if not candidates:
            return None
        return min(candidates, key=lambda p: (p.start, p.sequence))

    def _roll_into_overtime(
        self,
        open_event: AttendanceEvent,
        current: Period,
        target: Period,
        location: Optional[str],
    ) -> None:
        """Close `current` at its end and open `target` without a real check pair."""
        self._events.append(
            AttendanceEvent(
                event_id=0,
                employee_id=open_event.employee_id,
                attendance_date=open_event.attendance_date,
                instant=current.end,
                kind=EventKind.CHECK_OUT,
                location=location,
                period=current,
                is_overtime=current.is_overtime,
                is_auto=True,
            )
        )
        self._events.append(
            AttendanceEvent(
                event_id=0,
                employee_id=open_event.employee_id,
                attendance_date=open_event.attendance_date,
                instant=max(target.start, current.end),
                kind=EventKind.CHECK_IN,
                location=location,
                period=target,
                is_overtime=True,
                is_auto=True,
            )
        )
        logger.info(
            "rolled open attendance into overtime",
            extra={"employee_id": open_event.employee_id, "overtime_id": target.overtime_id},
        )
