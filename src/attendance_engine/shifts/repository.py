from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

from .model import ShiftAdjustment, ShiftDefinition


class ShiftStore(Protocol):
    """Scheduling collaborator; the resolver depends on this, not on a DB."""

    def get_standing_shift(self, employee_id: str) -> Optional[ShiftDefinition]:
        raise NotImplementedError

    def get_approved_adjustment(self, employee_id: str, work_date: date) -> Optional[ShiftAdjustment]:
        raise NotImplementedError
