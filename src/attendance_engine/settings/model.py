from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from decimal import Decimal
from typing import FrozenSet, Mapping, Optional, Tuple

from ..common.validators import require_rate
from ..core import constants
from ..core.enums import EmployeeType, LeaveType, OvertimeCategory
from ..core.exceptions import InvalidRateSettingsError


@dataclass(frozen=True)
class AttendancePolicy:
    """Check-in/out tolerances. Minutes, all configurable."""

    grace_minutes: int = constants.DEFAULT_GRACE_MINUTES
    transition_buffer_minutes: int = constants.DEFAULT_TRANSITION_BUFFER_MINUTES
    early_check_in_minutes: int = constants.DEFAULT_EARLY_CHECK_IN_MINUTES
    late_checkout_tolerance_minutes: int = constants.DEFAULT_LATE_CHECKOUT_TOLERANCE_MINUTES

    @property
    def grace(self) -> timedelta:
        return timedelta(minutes=self.grace_minutes)

    @property
    def transition_buffer(self) -> timedelta:
        return timedelta(minutes=self.transition_buffer_minutes)

    @property
    def early_check_in(self) -> timedelta:
        return timedelta(minutes=self.early_check_in_minutes)

    @property
    def late_checkout_tolerance(self) -> timedelta:
        return timedelta(minutes=self.late_checkout_tolerance_minutes)


@dataclass(frozen=True)
class TaxBracket:
    """Income up to `upper` (inclusive) taxed at `rate`; None = unbounded."""

    upper: Optional[Decimal]
    rate: Decimal


@dataclass(frozen=True)
class AllowanceRates:
    transportation: Decimal = Decimal("0")
    housing: Decimal = Decimal("0")
    meal_per_day: Decimal = Decimal("0")


def _d(value: str) -> Decimal:
    return Decimal(value)


DEFAULT_TAX_BRACKETS: Tuple[TaxBracket, ...] = (
    TaxBracket(_d("150000"), _d("0")),
    TaxBracket(_d("300000"), _d("0.05")),
    TaxBracket(_d("500000"), _d("0.10")),
    TaxBracket(_d("750000"), _d("0.15")),
    TaxBracket(_d("1000000"), _d("0.20")),
    TaxBracket(_d("2000000"), _d("0.25")),
    TaxBracket(_d("5000000"), _d("0.30")),
    TaxBracket(None, _d("0.35")),
)


def _default_overtime_multipliers() -> dict[OvertimeCategory, Decimal]:
    return {
        OvertimeCategory.WORKDAY: _d("1.5"),
        OvertimeCategory.DAY_OFF: _d("1.0"),
        OvertimeCategory.HOLIDAY: _d("2.0"),
    }


def _default_employee_type_multipliers() -> dict[EmployeeType, dict[OvertimeCategory, Decimal]]:
    return {EmployeeType.PARTTIME: {OvertimeCategory.DAY_OFF: _d("2.0")}}


def _default_leave_pay_rates() -> dict[LeaveType, Decimal]:
    return {
        LeaveType.SICK: _d("1.0"),
        LeaveType.ANNUAL: _d("1.0"),
        LeaveType.BUSINESS: _d("1.0"),
        LeaveType.UNPAID: _d("0"),
    }


@dataclass(frozen=True)
class RateSettings:
    """Rate tables consumed by the payroll calculator. Pure data."""

    overtime_multipliers: Mapping[OvertimeCategory, Decimal] = field(default_factory=_default_overtime_multipliers)
    employee_type_overtime_multipliers: Mapping[EmployeeType, Mapping[OvertimeCategory, Decimal]] = field(
        default_factory=_default_employee_type_multipliers
    )
    holiday_multiplier: Decimal = _d("1.0")
    social_security_rate: Decimal = _d("0.05")
    social_security_ceiling: Decimal = _d("15000")
    social_security_min_base: Decimal = _d("0")
    tax_brackets: Tuple[TaxBracket, ...] = DEFAULT_TAX_BRACKETS
    tax_annualization_factor: int = 1
    late_deduction_threshold_minutes: int = constants.DEFAULT_LATE_DEDUCTION_THRESHOLD_MINUTES
    daily_hours: Decimal = _d(str(constants.DEFAULT_DAILY_HOURS))
    days_per_month: Decimal = _d(str(constants.DEFAULT_DAYS_PER_MONTH))
    leave_pay_rates: Mapping[LeaveType, Decimal] = field(default_factory=_default_leave_pay_rates)
    allowance_rates: Mapping[EmployeeType, AllowanceRates] = field(default_factory=dict)
    working_weekdays: FrozenSet[int] = constants.DEFAULT_WORKDAYS

    def overtime_multiplier(self, category: OvertimeCategory, employee_type: EmployeeType) -> Decimal:
        override = self.employee_type_overtime_multipliers.get(employee_type, {})
        if category in override:
            return override[category]
        if category not in self.overtime_multipliers:
            raise InvalidRateSettingsError(f"No overtime multiplier configured for {category.value}")
        return self.overtime_multipliers[category]

    def allowances_for(self, employee_type: EmployeeType) -> AllowanceRates:
        return self.allowance_rates.get(employee_type, AllowanceRates())

    def validate(self) -> "RateSettings":
        """Raise InvalidRateSettingsError on missing or negative data."""
        for category in OvertimeCategory:
            require_rate(self.overtime_multipliers.get(category), f"overtime multiplier {category.value}")
        for employee_type, table in self.employee_type_overtime_multipliers.items():
            for category, value in table.items():
                require_rate(value, f"{employee_type.value} overtime multiplier {category.value}")
        require_rate(self.holiday_multiplier, "holiday multiplier")
        require_rate(self.social_security_rate, "social security rate")
        require_rate(self.social_security_ceiling, "social security ceiling")
        require_rate(self.social_security_min_base, "social security minimum base")
        if self.social_security_min_base > self.social_security_ceiling:
            raise InvalidRateSettingsError("social security minimum base exceeds the ceiling")

        if not self.tax_brackets:
            raise InvalidRateSettingsError("tax bracket table is empty")
        previous_upper = Decimal("0")
        for i, bracket in enumerate(self.tax_brackets):
            require_rate(bracket.rate, f"tax bracket {i} rate")
            if bracket.upper is None:
                if i != len(self.tax_brackets) - 1:
                    raise InvalidRateSettingsError("only the last tax bracket may be unbounded")
                continue
            upper = require_rate(bracket.upper, f"tax bracket {i} upper bound")
            if upper <= previous_upper and i > 0:
                raise InvalidRateSettingsError("tax brackets must be in ascending order")
            previous_upper = upper

        if int(self.tax_annualization_factor) < 1:
            raise InvalidRateSettingsError("tax annualization factor must be >= 1")
        if int(self.late_deduction_threshold_minutes) < 0:
            raise InvalidRateSettingsError("late deduction threshold must not be negative")
        if require_rate(self.daily_hours, "daily hours") == 0:
            raise InvalidRateSettingsError("daily hours must be positive")
        if require_rate(self.days_per_month, "days per month") == 0:
            raise InvalidRateSettingsError("days per month must be positive")
        for leave_type in LeaveType:
            require_rate(self.leave_pay_rates.get(leave_type), f"{leave_type.value} leave pay rate")
        for employee_type, rates in self.allowance_rates.items():
            require_rate(rates.transportation, f"{employee_type.value} transportation allowance")
            require_rate(rates.housing, f"{employee_type.value} housing allowance")
            require_rate(rates.meal_per_day, f"{employee_type.value} meal allowance")
        return self
