from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional

from ..periods.model import Period
from .model import AttendanceEvent, effective_events

PeriodKey = tuple


def period_key(period: Optional[Period]) -> PeriodKey:
    """Identity of a period independent of its sequence number."""
    if period is None:
        return ()
    return (period.period_type, period.start, period.end, period.overtime_id)


@dataclass(frozen=True)
class WorkSession:
    check_in: AttendanceEvent
    check_out: Optional[AttendanceEvent] = None

    @property
    def period(self) -> Optional[Period]:
        return self.check_in.period

    @property
    def is_closed(self) -> bool:
        return self.check_out is not None

    @property
    def ended_at(self) -> Optional[datetime]:
        return self.check_out.instant if self.check_out else None


def pair_sessions(events: Iterable[AttendanceEvent]) -> list[WorkSession]:
    """Pair each check-in with the next check-out.

    A check-in followed by another check-in is left open; stray check-outs
    are ignored.
    """
    sessions: list[WorkSession] = []
    pending: Optional[AttendanceEvent] = None

    for event in effective_events(events):
        if event.is_check_in:
            if pending is not None:
                sessions.append(WorkSession(check_in=pending))
            pending = event
        elif pending is not None:
            sessions.append(WorkSession(check_in=pending, check_out=event))
            pending = None

    if pending is not None:
        sessions.append(WorkSession(check_in=pending))
    return sessions
