from __future__ import annotations

from datetime import date
from typing import ContextManager, Optional, Protocol, Sequence

from .model import AttendanceEvent


class AttendanceEventStore(Protocol):
    """Append-only event log keyed by employee-day.

    `append` assigns the event id and enforces at most one open check-in per
    employee (corrections, i.e. events with `supersedes`, are exempt).
    """

    def lock_for(self, employee_id: str) -> ContextManager:
        raise NotImplementedError

    def append(self, event: AttendanceEvent) -> AttendanceEvent:
        raise NotImplementedError

    def get(self, event_id: int) -> Optional[AttendanceEvent]:
        raise NotImplementedError

    def get_open_check_in(self, employee_id: str) -> Optional[AttendanceEvent]:
        raise NotImplementedError

    def list_for_day(self, employee_id: str, attendance_date: date) -> Sequence[AttendanceEvent]:
        raise NotImplementedError

    def list_for_range(self, employee_id: str, start: date, end: date) -> Sequence[AttendanceEvent]:
        raise NotImplementedError
