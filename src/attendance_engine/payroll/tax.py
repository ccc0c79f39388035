from __future__ import annotations

from decimal import Decimal
from typing import Sequence

from ..settings.model import TaxBracket
from .money import ZERO, money


def progressive_tax(taxable: Decimal, brackets: Sequence[TaxBracket], annualization_factor: int = 1) -> Decimal:
    """Marginal tax over ascending bracket upper edges.

    Each bracket taxes the slice between the previous upper edge and its own.
    With an annualization factor the income is scaled up, taxed, and the tax
    scaled back down. Income above the last bounded edge is taxed at the last
    rate.
    """
    factor = Decimal(max(int(annualization_factor), 1))
    income = Decimal(taxable) * factor
    if income <= 0:
        return money(ZERO)

    tax = ZERO
    lower = ZERO
    rate = ZERO
    for bracket in brackets:
        rate = bracket.rate
        if bracket.upper is None:
            tax += (income - lower) * rate
            lower = income
            break
        if income <= bracket.upper:
            tax += (income - lower) * rate
            lower = income
            break
        tax += (bracket.upper - lower) * rate
        lower = bracket.upper

    if income > lower:
        tax += (income - lower) * rate

    return money(tax / factor)
