from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from ..core.enums import EmployeeType, SalaryType


@dataclass(frozen=True)
class Employee:
    """Domain entity: the payroll-relevant part of an employee record."""

    employee_id: str
    name: str
    employee_type: EmployeeType = EmployeeType.FULLTIME
    salary_type: SalaryType = SalaryType.MONTHLY
    base_salary: Optional[Decimal] = None
    department: Optional[str] = None
