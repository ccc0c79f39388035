from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime

from ...periods.model import CurrentPeriodState, Period
from ...settings.model import AttendancePolicy


@dataclass(frozen=True)
class CheckInDecision:
    period: Period
    is_late: bool = False
    is_early: bool = False
    is_overtime: bool = False
    late_minutes: int = 0


class CheckInStrategy(ABC):
    """Strategy Pattern: how a check-in is judged in a given period state."""

    @abstractmethod
    def decide_check_in(
        self,
        *,
        employee_id: str,
        now: datetime,
        state: CurrentPeriodState,
        policy: AttendancePolicy,
    ) -> CheckInDecision:
        raise NotImplementedError
