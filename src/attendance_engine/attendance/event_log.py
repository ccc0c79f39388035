from __future__ import annotations

import threading
from dataclasses import replace
from datetime import date
from typing import Optional, Sequence

from ..core.enums import EventKind
from ..core.exceptions import AlreadyCheckedInError, NoActiveCheckInError
from .model import AttendanceEvent


class InMemoryAttendanceEventLog:
    """Arena-style append log.

    Events live in one list indexed by `event_id - 1`; per employee-day and
    per employee indexes hold arena positions. Nothing is ever updated in place.
    """

    def __init__(self):
        self._arena: list[AttendanceEvent] = []
        self._by_day: dict[tuple[str, date], list[int]] = {}
        self._open: dict[str, int] = {}
        self._locks: dict[str, threading.RLock] = {}
        self._guard = threading.Lock()

    def lock_for(self, employee_id: str) -> threading.RLock:
        with self._guard:
            lock = self._locks.get(employee_id)
            if lock is None:
                lock = self._locks[employee_id] = threading.RLock()
            return lock

    def append(self, event: AttendanceEvent) -> AttendanceEvent:
        with self.lock_for(event.employee_id):
            open_id = self._open.get(event.employee_id)

            if event.supersedes is None:
                if event.kind == EventKind.CHECK_IN and open_id is not None:
                    raise AlreadyCheckedInError(
                        f"Employee {event.employee_id} already has an open check-in",
                        employee_id=event.employee_id,
                    )
                if event.kind == EventKind.CHECK_OUT and open_id is None:
                    raise NoActiveCheckInError(
                        f"Employee {event.employee_id} has no open check-in",
                        employee_id=event.employee_id,
                    )

            with self._guard:
                stored = replace(event, event_id=len(self._arena) + 1)
                self._arena.append(stored)
                self._by_day.setdefault((stored.employee_id, stored.attendance_date), []).append(stored.event_id - 1)

            if stored.supersedes is None:
                if stored.kind == EventKind.CHECK_IN:
                    self._open[stored.employee_id] = stored.event_id
                else:
                    self._open.pop(stored.employee_id, None)
            elif stored.supersedes == open_id:
                # Corrected open check-in: the replacement is now the open one.
                self._open[stored.employee_id] = stored.event_id
            return stored

    def get(self, event_id: int) -> Optional[AttendanceEvent]:
        if 1 <= event_id <= len(self._arena):
            return self._arena[event_id - 1]
        return None

    def get_open_check_in(self, employee_id: str) -> Optional[AttendanceEvent]:
        open_id = self._open.get(employee_id)
        return self.get(open_id) if open_id is not None else None

    def list_for_day(self, employee_id: str, attendance_date: date) -> Sequence[AttendanceEvent]:
        return [self._arena[i] for i in self._by_day.get((employee_id, attendance_date), [])]

    def list_for_range(self, employee_id: str, start: date, end: date) -> Sequence[AttendanceEvent]:
        with self._guard:
            positions = sorted(
                i
                for (emp, day), indexes in self._by_day.items()
                if emp == employee_id and start <= day <= end
                for i in indexes
            )
        return [self._arena[i] for i in positions]

    def __len__(self) -> int:
        return len(self._arena)
