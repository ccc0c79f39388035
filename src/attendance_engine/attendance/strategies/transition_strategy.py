from __future__ import annotations

from datetime import datetime

from ...periods.model import CurrentPeriodState
from ...settings.model import AttendancePolicy
from .base import CheckInDecision, CheckInStrategy


class TransitionStrategy(CheckInStrategy):
    """Check-in in the buffer before a connecting overtime period."""

    def decide_check_in(
        self,
        *,
        employee_id: str,
        now: datetime,
        state: CurrentPeriodState,
        policy: AttendancePolicy,
    ) -> CheckInDecision:
        return CheckInDecision(period=state.upcoming_period, is_early=True, is_overtime=True)
