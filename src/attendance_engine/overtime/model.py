from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..common.datetime_utils import TimeOfDay
from ..core.enums import RequestStatus


@dataclass(frozen=True)
class OvertimeWindow:
    """Requested/approved overtime for one calendar day (may cross midnight)."""

    overtime_id: str
    employee_id: str
    work_date: date
    start_time: TimeOfDay
    end_time: TimeOfDay
    status: RequestStatus = RequestStatus.PENDING
    is_inside_shift_hours: bool = False
    is_day_off_overtime: bool = False
