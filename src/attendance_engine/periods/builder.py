from __future__ import annotations

import logging
from dataclasses import replace
from datetime import tzinfo
from typing import Optional, Sequence

from ..common.datetime_utils import anchor_window, parse_time_of_day
from ..core.enums import PeriodType, RequestStatus
from ..overtime.model import OvertimeWindow
from ..shifts.model import EffectiveShift
from .model import Period

logger = logging.getLogger(__name__)


def _overtime_period(window: OvertimeWindow, *, day_off: bool, tz: Optional[tzinfo]) -> Optional[Period]:
    try:
        start_tod = parse_time_of_day(window.start_time)
        end_tod = parse_time_of_day(window.end_time)
    except ValueError:
        logger.warning("skipping overtime window with invalid times", extra={"overtime_id": window.overtime_id})
        return None
    if start_tod == end_tod:
        logger.warning("skipping zero/24h overtime window", extra={"overtime_id": window.overtime_id})
        return None

    start, end = anchor_window(window.work_date, start_tod, end_tod, tz)
    return Period(
        period_type=PeriodType.OVERTIME,
        start=start,
        end=end,
        sequence=0,
        overtime_id=window.overtime_id,
        is_day_off=day_off or window.is_day_off_overtime,
        is_inside_shift_hours=window.is_inside_shift_hours,
    )


def build_day_periods(
    effective_shift: Optional[EffectiveShift],
    overtime_windows: Sequence[OvertimeWindow] = (),
    *,
    is_holiday: bool = False,
    tz: Optional[tzinfo] = None,
) -> list[Period]:
    """Ordered periods of one employee-day.

    The regular period is left out on a day off (non-working weekday or
    holiday). Only approved overtime windows become periods.
    """
    if effective_shift is not None and tz is None:
        tz = effective_shift.start.tzinfo

    day_off = effective_shift is None or not effective_shift.is_working_day or is_holiday
    periods: list[Period] = []

    if not day_off:
        periods.append(
            Period(
                period_type=PeriodType.REGULAR,
                start=effective_shift.start,
                end=effective_shift.end,
                sequence=0,
                break_minutes=int(effective_shift.shift.break_minutes or 0),
            )
        )

    for window in overtime_windows:
        if window.status != RequestStatus.APPROVED:
            continue
        period = _overtime_period(window, day_off=day_off, tz=tz)
        if period is not None:
            periods.append(period)

    periods.sort(key=lambda p: (p.start, 0 if p.period_type == PeriodType.REGULAR else 1))
    return [replace(p, sequence=i) for i, p in enumerate(periods)]
