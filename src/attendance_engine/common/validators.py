from __future__ import annotations

from decimal import Decimal, InvalidOperation

from ..core.exceptions import InvalidRateSettingsError


def require_rate(value, field_name: str) -> Decimal:
    """Coerce a rate/amount to Decimal; missing or negative fails payroll."""
    if value is None:
        raise InvalidRateSettingsError(f"{field_name} is missing")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise InvalidRateSettingsError(f"{field_name} is not a number: {value!r}")
    if not amount.is_finite() or amount < 0:
        raise InvalidRateSettingsError(f"{field_name} must be a non-negative number")
    return amount
