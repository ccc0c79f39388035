from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, Optional

from ..core.enums import EventKind, PeriodProgress
from ..periods.model import CurrentPeriodState, Period


@dataclass(frozen=True)
class AttendanceEvent:
    """Domain entity: one check-in or check-out. Never mutated once stored.

    A correction is a new event whose `supersedes` points at the event it
    replaces.
    """

    event_id: int
    employee_id: str
    attendance_date: date
    instant: datetime
    kind: EventKind
    location: Optional[str] = None
    period: Optional[Period] = None
    is_late: bool = False
    is_early: bool = False
    is_overtime: bool = False
    late_minutes: int = 0
    is_auto: bool = False
    supersedes: Optional[int] = None
    note: Optional[str] = None

    @property
    def is_check_in(self) -> bool:
        return self.kind == EventKind.CHECK_IN


@dataclass(frozen=True)
class PeriodAttendance:
    period: Period
    progress: PeriodProgress
    check_in: Optional[AttendanceEvent] = None
    check_out: Optional[AttendanceEvent] = None


@dataclass(frozen=True)
class DayAttendanceStatus:
    """Per-period progress for one employee-day. Partial days are normal."""

    employee_id: str
    attendance_date: date
    periods: tuple[PeriodAttendance, ...]

    @property
    def is_complete(self) -> bool:
        return all(p.progress == PeriodProgress.COMPLETED for p in self.periods)

    @property
    def completed_count(self) -> int:
        return sum(1 for p in self.periods if p.progress == PeriodProgress.COMPLETED)


@dataclass(frozen=True)
class AttendanceSnapshot:
    """What a status screen needs: the day, its periods and where `now` falls."""

    employee_id: str
    attendance_date: date
    periods: tuple[Period, ...]
    state: CurrentPeriodState
    open_event: Optional[AttendanceEvent] = None


def effective_events(events: Iterable[AttendanceEvent]) -> list[AttendanceEvent]:
    """Drop events replaced by a correction; order by (instant, event_id)."""
    events = list(events)
    superseded = {e.supersedes for e in events if e.supersedes is not None}
    kept = [e for e in events if e.event_id not in superseded]
    kept.sort(key=lambda e: (e.instant, e.event_id))
    return kept
