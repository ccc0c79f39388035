from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from ..core.enums import LeaveType, RequestStatus


@dataclass(frozen=True)
class LeaveRecord:
    employee_id: str
    leave_type: LeaveType
    start_date: date
    end_date: date
    status: RequestStatus = RequestStatus.APPROVED
    is_half_day: bool = False

    def days_within(self, start: date, end: date) -> Decimal:
        """Leave days overlapping [start, end]; a half-day leave counts 0.5 per day."""
        first = max(self.start_date, start)
        last = min(self.end_date, end)
        if last < first:
            return Decimal("0")
        days = Decimal((last - first).days + 1)
        return days / 2 if self.is_half_day else days
