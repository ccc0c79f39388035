from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import PeriodState
from ..periods.model import CurrentPeriodState
from .strategies.base import CheckInStrategy
from .strategies.closed_strategy import ClosedDayStrategy
from .strategies.early_strategy import EarlyArrivalStrategy
from .strategies.in_period_strategy import InPeriodStrategy
from .strategies.transition_strategy import TransitionStrategy


@dataclass
class CheckInStrategyFactory:
    """Factory Pattern: choose the check-in strategy from the classified state."""

    def for_check_in(self, state: CurrentPeriodState) -> CheckInStrategy:
        if state.state in (PeriodState.IN_REGULAR, PeriodState.IN_OVERTIME):
            return InPeriodStrategy()
        if state.state == PeriodState.TRANSITION_WINDOW:
            return TransitionStrategy()
        if state.state == PeriodState.BEFORE_SHIFT:
            return EarlyArrivalStrategy()
        return ClosedDayStrategy()
