from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import FrozenSet, Optional

from ..common.datetime_utils import TimeOfDay
from ..core.constants import DEFAULT_WORKDAYS
from ..core.enums import RequestStatus


@dataclass(frozen=True)
class ShiftDefinition:
    """Domain entity: a work shift (wall-clock times, no date).

    end <= start means the shift ends on the following calendar day.
    """

    shift_id: str
    name: str
    start_time: TimeOfDay
    end_time: TimeOfDay
    workdays: FrozenSet[int] = field(default=DEFAULT_WORKDAYS)
    break_minutes: int = 0


@dataclass(frozen=True)
class ShiftAdjustment:
    """Ad-hoc replacement of an employee's shift for a single date."""

    employee_id: str
    work_date: date
    shift: ShiftDefinition
    status: RequestStatus = RequestStatus.PENDING
    reason: Optional[str] = None


@dataclass(frozen=True)
class EffectiveShift:
    """The shift governing one employee-date, anchored to absolute instants."""

    employee_id: str
    work_date: date
    shift: ShiftDefinition
    start: datetime
    end: datetime
    is_adjusted: bool = False
    is_working_day: bool = True

    @property
    def is_overnight(self) -> bool:
        return self.end.date() > self.start.date()

    @property
    def scheduled_minutes(self) -> int:
        return int((self.end - self.start).total_seconds() // 60)
