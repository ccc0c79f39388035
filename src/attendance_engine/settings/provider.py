from __future__ import annotations

import importlib
import json
import logging
from dataclasses import dataclass, field
from datetime import tzinfo
from types import ModuleType
from typing import Any, Optional, Protocol
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

from ..common.validators import require_rate
from ..config import get_settings_module
from ..core.enums import EmployeeType, OvertimeCategory
from ..core.exceptions import InvalidRateSettingsError
from .model import AllowanceRates, AttendancePolicy, RateSettings, TaxBracket

logger = logging.getLogger(__name__)

_MISSING = object()


class RateSettingsProvider(Protocol):
    def get_rate_settings(self) -> RateSettings:
        raise NotImplementedError

    def get_attendance_policy(self) -> AttendancePolicy:
        raise NotImplementedError


@dataclass(frozen=True)
class StaticRateSettingsProvider:
    """Provider over ready-made objects (tests, embedding applications)."""

    rate_settings: Optional[RateSettings] = field(default_factory=RateSettings)
    attendance_policy: AttendancePolicy = field(default_factory=AttendancePolicy)

    def get_rate_settings(self) -> RateSettings:
        if self.rate_settings is None:
            raise InvalidRateSettingsError("No rate settings configured")
        return self.rate_settings.validate()

    def get_attendance_policy(self) -> AttendancePolicy:
        return self.attendance_policy


def _required(settings: ModuleType, name: str) -> Any:
    value = getattr(settings, name, _MISSING)
    if value is _MISSING or value is None:
        raise InvalidRateSettingsError(f"Setting {name} is missing from {settings.__name__}")
    return value


def _enum_key(enum_cls, key: Any, setting: str):
    try:
        return enum_cls(str(key).upper())
    except ValueError:
        raise InvalidRateSettingsError(f"{setting} has an unknown key {key!r}")


def parse_tax_brackets(raw: Any) -> tuple[TaxBracket, ...]:
    """JSON text (or already-decoded list) of [upper, rate] pairs."""
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise InvalidRateSettingsError(f"TAX_BRACKETS is not valid JSON: {exc}")
    if not isinstance(raw, (list, tuple)):
        raise InvalidRateSettingsError("TAX_BRACKETS must be a list of [upper, rate] pairs")

    brackets = []
    for i, item in enumerate(raw):
        try:
            upper, rate = item
        except (TypeError, ValueError):
            raise InvalidRateSettingsError(f"TAX_BRACKETS entry {i} must be an [upper, rate] pair")
        brackets.append(
            TaxBracket(
                upper=None if upper is None else require_rate(upper, f"tax bracket {i} upper bound"),
                rate=require_rate(rate, f"tax bracket {i} rate"),
            )
        )
    return tuple(brackets)


def rate_settings_from_module(settings: ModuleType) -> RateSettings:
    multipliers = {
        _enum_key(OvertimeCategory, key, "OVERTIME_MULTIPLIERS"): require_rate(value, f"overtime multiplier {key}")
        for key, value in dict(_required(settings, "OVERTIME_MULTIPLIERS")).items()
    }
    parttime = {
        _enum_key(OvertimeCategory, key, "PARTTIME_OVERTIME_MULTIPLIERS"): require_rate(value, f"part-time overtime multiplier {key}")
        for key, value in dict(getattr(settings, "PARTTIME_OVERTIME_MULTIPLIERS", {}) or {}).items()
    }
    allowances = {
        _enum_key(EmployeeType, key, "ALLOWANCES"): AllowanceRates(
            transportation=require_rate(values.get("transportation", "0"), f"{key} transportation allowance"),
            housing=require_rate(values.get("housing", "0"), f"{key} housing allowance"),
            meal_per_day=require_rate(values.get("meal_per_day", "0"), f"{key} meal allowance"),
        )
        for key, values in dict(getattr(settings, "ALLOWANCES", {}) or {}).items()
    }

    rates = RateSettings(
        overtime_multipliers=multipliers,
        employee_type_overtime_multipliers={EmployeeType.PARTTIME: parttime} if parttime else {},
        holiday_multiplier=require_rate(getattr(settings, "HOLIDAY_MULTIPLIER", "1.0"), "holiday multiplier"),
        social_security_rate=require_rate(_required(settings, "SOCIAL_SECURITY_RATE"), "social security rate"),
        social_security_ceiling=require_rate(_required(settings, "SOCIAL_SECURITY_CEILING"), "social security ceiling"),
        social_security_min_base=require_rate(getattr(settings, "SOCIAL_SECURITY_MIN_BASE", "0"), "social security minimum base"),
        tax_brackets=parse_tax_brackets(_required(settings, "TAX_BRACKETS")),
        tax_annualization_factor=int(getattr(settings, "TAX_ANNUALIZATION_FACTOR", 1)),
        late_deduction_threshold_minutes=int(getattr(settings, "LATE_DEDUCTION_THRESHOLD_MINUTES", 30)),
        daily_hours=require_rate(getattr(settings, "DAILY_HOURS", "8"), "daily hours"),
        days_per_month=require_rate(getattr(settings, "DAYS_PER_MONTH", "30"), "days per month"),
        allowance_rates=allowances,
    )
    return rates.validate()


def attendance_policy_from_module(settings: ModuleType) -> AttendancePolicy:
    policy = AttendancePolicy(
        grace_minutes=int(getattr(settings, "GRACE_MINUTES", 0)),
        transition_buffer_minutes=int(getattr(settings, "TRANSITION_BUFFER_MINUTES", 15)),
        early_check_in_minutes=int(getattr(settings, "EARLY_CHECK_IN_MINUTES", 29)),
        late_checkout_tolerance_minutes=int(getattr(settings, "LATE_CHECKOUT_TOLERANCE_MINUTES", 0)),
    )
    for name in ("grace_minutes", "transition_buffer_minutes", "early_check_in_minutes", "late_checkout_tolerance_minutes"):
        if getattr(policy, name) < 0:
            raise InvalidRateSettingsError(f"{name} must not be negative")
    return policy


class ModuleRateSettingsProvider:
    """Reads rate tables and attendance tolerances from a settings module.

    The module is chosen by APP_ENV (see `attendance_engine.config`) unless
    given explicitly; `.env` is loaded first without overriding the process
    environment.
    """

    def __init__(self, settings_module: Optional[str] = None):
        load_dotenv(override=False)
        self._module_name = settings_module or get_settings_module()
        self._settings = importlib.import_module(self._module_name)
        logger.debug("settings module loaded", extra={"settings_module": self._module_name})

    @property
    def settings(self) -> ModuleType:
        return self._settings

    def get_rate_settings(self) -> RateSettings:
        return rate_settings_from_module(self._settings)

    def get_attendance_policy(self) -> AttendancePolicy:
        return attendance_policy_from_module(self._settings)

    def get_timezone(self) -> Optional[tzinfo]:
        name = getattr(self._settings, "ATTENDANCE_TIMEZONE", None)
        if not name:
            return None
        try:
            return ZoneInfo(name)
        except ZoneInfoNotFoundError:
            logger.warning("unknown ATTENDANCE_TIMEZONE, using naive local time", extra={"timezone": name})
            return None
