from __future__ import annotations

import logging
from datetime import date, time, tzinfo
from typing import Optional

from ..common.datetime_utils import anchor_window, parse_time_of_day
from ..core.enums import RequestStatus
from ..core.exceptions import EmployeeNotFoundError, InvalidShiftError
from .model import EffectiveShift, ShiftDefinition
from .repository import ShiftStore

logger = logging.getLogger(__name__)


def shift_times(shift: ShiftDefinition) -> tuple[time, time]:
    """Parsed (start, end) of a shift; malformed or 24h shifts are rejected."""
    try:
        start = parse_time_of_day(shift.start_time)
        end = parse_time_of_day(shift.end_time)
    except ValueError as exc:
        raise InvalidShiftError(f"Shift {shift.shift_id} has an invalid time of day: {exc}")

    if start == end:
        raise InvalidShiftError(f"Shift {shift.shift_id} starts and ends at {start:%H:%M} (24h shifts are not supported)")
    if shift.break_minutes < 0:
        raise InvalidShiftError(f"Shift {shift.shift_id} has a negative break")
    return start, end


class ShiftResolver:
    """Use case: which shift governs an employee on a date, as absolute instants."""

    def __init__(self, shifts: ShiftStore, *, tz: Optional[tzinfo] = None):
        self._shifts = shifts
        self._tz = tz

    @property
    def tz(self) -> Optional[tzinfo]:
        return self._tz

    def resolve_effective_shift(self, employee_id: str, work_date: date) -> EffectiveShift:
        adjustment = self._shifts.get_approved_adjustment(employee_id, work_date)
        if adjustment is not None and adjustment.status != RequestStatus.APPROVED:
            logger.warning(
                "ignoring non-approved shift adjustment",
                extra={"employee_id": employee_id, "work_date": work_date.isoformat(), "status": adjustment.status.value},
            )
            adjustment = None

        if adjustment is not None:
            shift = adjustment.shift
        else:
            shift = self._shifts.get_standing_shift(employee_id)
            if shift is None:
                raise EmployeeNotFoundError(
                    f"Employee {employee_id} has no shift assignment",
                    employee_id=employee_id,
                )

        start_tod, end_tod = shift_times(shift)
        start, end = anchor_window(work_date, start_tod, end_tod, self._tz)

        return EffectiveShift(
            employee_id=employee_id,
            work_date=work_date,
            shift=shift,
            start=start,
            end=end,
            is_adjusted=adjustment is not None,
            # An approved adjustment means the employee is scheduled that day.
            is_working_day=adjustment is not None or work_date.isoweekday() in shift.workdays,
        )
