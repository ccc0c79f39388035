from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

from .model import Holiday


class HolidayStore(Protocol):
    def is_holiday(self, day: date) -> Optional[Holiday]:
        raise NotImplementedError
