from __future__ import annotations

from datetime import datetime

from ...core.exceptions import NoScheduledPeriodError
from ...periods.model import CurrentPeriodState
from ...settings.model import AttendancePolicy
from .base import CheckInDecision, CheckInStrategy


class ClosedDayStrategy(CheckInStrategy):
    """Nothing left to attribute a check-in to (all periods over, or day off)."""

    def decide_check_in(
        self,
        *,
        employee_id: str,
        now: datetime,
        state: CurrentPeriodState,
        policy: AttendancePolicy,
    ) -> CheckInDecision:
        raise NoScheduledPeriodError(
            f"No regular or approved overtime period left on this day ({now:%Y-%m-%d %H:%M})",
            employee_id=employee_id,
        )
