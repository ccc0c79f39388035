from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional, Sequence

from ..core.constants import DEFAULT_TRANSITION_BUFFER_MINUTES
from ..core.enums import PeriodType
from .model import (
    AfterAllPeriods,
    BeforeShift,
    InOvertime,
    InRegular,
    InTransitionWindow,
    Period,
    PeriodStateVariant,
)


class PeriodClassifier:
    """Maps an instant onto the day's ordered periods.

    Stateless between calls and total: every input yields one of the five
    states, including an empty period list (AFTER_ALL_PERIODS).
    """

    def __init__(self, *, transition_buffer: timedelta = timedelta(minutes=DEFAULT_TRANSITION_BUFFER_MINUTES)):
        self._buffer = transition_buffer

    @property
    def transition_buffer(self) -> timedelta:
        return self._buffer

    def connects(self, previous: Period, following: Period) -> bool:
        """`following` is overtime starting within the buffer of `previous`'s end."""
        return following.period_type == PeriodType.OVERTIME and following.start - previous.end <= self._buffer

    def classify(self, periods: Sequence[Period], now: datetime) -> PeriodStateVariant:
        ordered = sorted(periods, key=lambda p: p.sequence)
        if not ordered:
            return AfterAllPeriods(now=now)

        # Lower sequence wins when windows overlap.
        for period in ordered:
            if period.contains(now):
                following = self._following(ordered, period)
                in_transition = (
                    following is not None
                    and self.connects(period, following)
                    and now >= period.end - self._buffer
                )
                variant = InRegular if period.period_type == PeriodType.REGULAR else InOvertime
                return variant(now=now, period=period, next_period=following, in_transition=in_transition)

        upcoming = [p for p in ordered if p.start > now]
        finished = [p for p in ordered if p.end <= now]
        previous = max(finished, key=lambda p: (p.end, -p.sequence)) if finished else None

        if not upcoming:
            return AfterAllPeriods(now=now, last_period=previous)

        following = min(upcoming, key=lambda p: (p.start, p.sequence))
        if previous is None:
            return BeforeShift(now=now, next_period=following)
        if self.connects(previous, following):
            return InTransitionWindow(now=now, previous_period=previous, next_period=following)
        return BeforeShift(now=now, next_period=following, previous_period=previous)

    @staticmethod
    def _following(ordered: Sequence[Period], period: Period) -> Optional[Period]:
        later = [p for p in ordered if (p.start, p.sequence) > (period.start, period.sequence)]
        if not later:
            return None
        return min(later, key=lambda p: (p.start, p.sequence))
