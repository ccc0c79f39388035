from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone
from typing import Optional

import pytest

from attendance_engine.core.enums import RequestStatus
from attendance_engine.core.exceptions import EmployeeNotFoundError, InvalidShiftError
from attendance_engine.shifts.model import ShiftAdjustment, ShiftDefinition
from attendance_engine.shifts.resolver import ShiftResolver


@dataclass
class InMemoryShifts:
    standing: dict[str, ShiftDefinition]
    adjustments: dict[tuple[str, date], ShiftAdjustment] = field(default_factory=dict)

    def get_standing_shift(self, employee_id: str) -> Optional[ShiftDefinition]:
        return self.standing.get(employee_id)

    def get_approved_adjustment(self, employee_id: str, work_date: date) -> Optional[ShiftAdjustment]:
        return self.adjustments.get((employee_id, work_date))


DAY = ShiftDefinition("S1", "Day", time(8, 0), time(17, 0), break_minutes=60)
NIGHT = ShiftDefinition("S2", "Night", "22:00", "06:00")


def test_standing_shift_anchored_on_date():
    resolver = ShiftResolver(InMemoryShifts({"E1": DAY}))

    eff = resolver.resolve_effective_shift("E1", date(2024, 3, 5))

    assert eff.start == datetime(2024, 3, 5, 8, 0)
    assert eff.end == datetime(2024, 3, 5, 17, 0)
    assert eff.is_adjusted is False
    assert eff.is_overnight is False
    assert eff.scheduled_minutes == 540


def test_overnight_shift_ends_next_day():
    resolver = ShiftResolver(InMemoryShifts({"E1": NIGHT}))

    eff = resolver.resolve_effective_shift("E1", date(2024, 3, 5))

    assert eff.start == datetime(2024, 3, 5, 22, 0)
    assert eff.end == datetime(2024, 3, 6, 6, 0)
    assert eff.end > eff.start
    assert eff.is_overnight is True


def test_approved_adjustment_overrides_standing_shift():
    day = date(2024, 3, 5)
    shifts = InMemoryShifts(
        {"E1": DAY},
        {("E1", day): ShiftAdjustment("E1", day, NIGHT, status=RequestStatus.APPROVED)},
    )

    eff = ShiftResolver(shifts).resolve_effective_shift("E1", day)

    assert eff.shift is NIGHT
    assert eff.is_adjusted is True
    # Only that date is affected.
    assert ShiftResolver(shifts).resolve_effective_shift("E1", date(2024, 3, 6)).shift is DAY


def test_pending_adjustment_is_ignored():
    day = date(2024, 3, 5)
    shifts = InMemoryShifts({"E1": DAY}, {("E1", day): ShiftAdjustment("E1", day, NIGHT)})

    eff = ShiftResolver(shifts).resolve_effective_shift("E1", day)

    assert eff.shift is DAY
    assert eff.is_adjusted is False


def test_adjustment_without_standing_shift_is_enough():
    day = date(2024, 3, 10)  # Sunday
    shifts = InMemoryShifts({}, {("E9", day): ShiftAdjustment("E9", day, DAY, status=RequestStatus.APPROVED)})

    eff = ShiftResolver(shifts).resolve_effective_shift("E9", day)

    assert eff.is_working_day is True


def test_unknown_employee_raises():
    with pytest.raises(EmployeeNotFoundError) as exc:
        ShiftResolver(InMemoryShifts({})).resolve_effective_shift("nobody", date(2024, 3, 5))
    assert exc.value.employee_id == "nobody"


def test_sunday_is_not_a_working_day_by_default():
    eff = ShiftResolver(InMemoryShifts({"E1": DAY})).resolve_effective_shift("E1", date(2024, 3, 10))
    assert eff.is_working_day is False


@pytest.mark.parametrize(
    "shift",
    [
        ShiftDefinition("bad", "Same", "08:00", "08:00"),
        ShiftDefinition("bad", "Garbage", "eight", "17:00"),
        ShiftDefinition("bad", "Negative break", "08:00", "17:00", break_minutes=-5),
    ],
)
def test_invalid_shift_definitions(shift):
    with pytest.raises(InvalidShiftError):
        ShiftResolver(InMemoryShifts({"E1": shift})).resolve_effective_shift("E1", date(2024, 3, 5))


def test_timezone_makes_instants_aware():
    eff = ShiftResolver(InMemoryShifts({"E1": DAY}), tz=timezone.utc).resolve_effective_shift("E1", date(2024, 3, 5))
    assert eff.start.tzinfo is timezone.utc
