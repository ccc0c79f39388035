from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from .model import OvertimeWindow


class OvertimeStore(Protocol):
    def get_approved_windows(self, employee_id: str, work_date: date) -> Sequence[OvertimeWindow]:
        raise NotImplementedError
