from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Union

Number = Union[Decimal, int, str]

CENT = Decimal("0.01")
ZERO = Decimal("0")


def money(value: Number) -> Decimal:
    """Round half-up to 2 places."""
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def hours_from_minutes(minutes: int) -> Decimal:
    return money(Decimal(minutes) / Decimal(60))
