from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from .model import LeaveRecord


class LeaveStore(Protocol):
    def get_approved_leave(self, employee_id: str, start: date, end: date) -> Sequence[LeaveRecord]:
        """Approved leave overlapping the inclusive range [start, end]."""

        raise NotImplementedError
