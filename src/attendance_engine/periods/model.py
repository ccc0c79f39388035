from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import ClassVar, Optional, Union

from ..core.enums import PeriodState, PeriodType


@dataclass(frozen=True)
class Period:
    """A contiguous [start, end) window of REGULAR or OVERTIME work."""

    period_type: PeriodType
    start: datetime
    end: datetime
    sequence: int
    break_minutes: int = 0
    overtime_id: Optional[str] = None
    is_day_off: bool = False
    is_inside_shift_hours: bool = False

    def contains(self, instant: datetime) -> bool:
        return self.start <= instant < self.end

    @property
    def duration_minutes(self) -> int:
        return int((self.end - self.start).total_seconds() // 60)

    @property
    def is_overtime(self) -> bool:
        return self.period_type == PeriodType.OVERTIME


@dataclass(frozen=True)
class CurrentPeriodState:
    """Result of classifying an instant. Concrete subclasses are the variants."""

    state: ClassVar[PeriodState]

    now: datetime

    @property
    def active_period(self) -> Optional[Period]:
        return None

    @property
    def upcoming_period(self) -> Optional[Period]:
        return None

    @property
    def is_within_bounds(self) -> bool:
        return self.active_period is not None

    @property
    def is_in_transition(self) -> bool:
        return False


@dataclass(frozen=True)
class BeforeShift(CurrentPeriodState):
    """Before the first period, or in a gap that is not a transition."""

    state: ClassVar[PeriodState] = PeriodState.BEFORE_SHIFT

    next_period: Optional[Period] = None
    previous_period: Optional[Period] = None

    @property
    def upcoming_period(self) -> Optional[Period]:
        return self.next_period


@dataclass(frozen=True)
class _InPeriod(CurrentPeriodState):
    period: Optional[Period] = None
    next_period: Optional[Period] = None
    in_transition: bool = False

    @property
    def active_period(self) -> Optional[Period]:
        return self.period

    @property
    def upcoming_period(self) -> Optional[Period]:
        return self.next_period

    @property
    def is_in_transition(self) -> bool:
        return self.in_transition


@dataclass(frozen=True)
class InRegular(_InPeriod):
    state: ClassVar[PeriodState] = PeriodState.IN_REGULAR


@dataclass(frozen=True)
class InOvertime(_InPeriod):
    state: ClassVar[PeriodState] = PeriodState.IN_OVERTIME


@dataclass(frozen=True)
class InTransitionWindow(CurrentPeriodState):
    """Gap right before a connecting overtime period; that period is the candidate."""

    state: ClassVar[PeriodState] = PeriodState.TRANSITION_WINDOW

    previous_period: Optional[Period] = None
    next_period: Optional[Period] = None

    @property
    def upcoming_period(self) -> Optional[Period]:
        return self.next_period

    @property
    def is_in_transition(self) -> bool:
        return True


@dataclass(frozen=True)
class AfterAllPeriods(CurrentPeriodState):
    state: ClassVar[PeriodState] = PeriodState.AFTER_ALL_PERIODS

    last_period: Optional[Period] = None


PeriodStateVariant = Union[BeforeShift, InRegular, InOvertime, InTransitionWindow, AfterAllPeriods]
