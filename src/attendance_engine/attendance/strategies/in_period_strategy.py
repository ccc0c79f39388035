from __future__ import annotations

from datetime import datetime

from ...common.datetime_utils import minutes_between
from ...periods.model import CurrentPeriodState
from ...settings.model import AttendancePolicy
from .base import CheckInDecision, CheckInStrategy


class InPeriodStrategy(CheckInStrategy):
    """Check-in inside a regular or overtime window; late past the grace period."""

    def decide_check_in(
        self,
        *,
        employee_id: str,
        now: datetime,
        state: CurrentPeriodState,
        policy: AttendancePolicy,
    ) -> CheckInDecision:
        period = state.active_period
        is_late = now > period.start + policy.grace
        return CheckInDecision(
            period=period,
            is_late=is_late,
            is_overtime=period.is_overtime,
            late_minutes=minutes_between(period.start, now) if is_late else 0,
        )
