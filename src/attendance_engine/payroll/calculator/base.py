from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import Iterable

from ...attendance.model import AttendanceEvent
from ...employees.model import Employee
from ...holidays.model import Holiday
from ...leaves.model import LeaveRecord
from ...settings.model import RateSettings
from ..model import PayrollLine


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def calculate(
        self,
        employee: Employee,
        events: Iterable[AttendanceEvent],
        leave_records: Iterable[LeaveRecord],
        holidays: Iterable[Holiday],
        period_start: date,
        period_end: date,
        rate_settings: RateSettings,
    ) -> PayrollLine:
        raise NotImplementedError
