from __future__ import annotations

from datetime import datetime

from ...core.exceptions import EarlyCheckInNotAllowedError
from ...periods.model import CurrentPeriodState
from ...settings.model import AttendancePolicy
from .base import CheckInDecision, CheckInStrategy


class EarlyArrivalStrategy(CheckInStrategy):
    """Before the next period: accepted only inside the early check-in window."""

    def decide_check_in(
        self,
        *,
        employee_id: str,
        now: datetime,
        state: CurrentPeriodState,
        policy: AttendancePolicy,
    ) -> CheckInDecision:
        upcoming = state.upcoming_period
        earliest = upcoming.start - policy.early_check_in
        if now < earliest:
            raise EarlyCheckInNotAllowedError(
                f"Check-in opens at {earliest:%H:%M} for the period starting {upcoming.start:%Y-%m-%d %H:%M}",
                employee_id=employee_id,
            )
        return CheckInDecision(period=upcoming, is_early=True, is_overtime=upcoming.is_overtime)
