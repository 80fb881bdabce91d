from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

CENT = Decimal("0.01")


def round_money(amount: Decimal | int | str) -> Decimal:
    """Two decimal places, half-up. Every monetary output goes through here."""
    return Decimal(str(amount)).quantize(CENT, rounding=ROUND_HALF_UP)


def fold_money(values: Iterable[Decimal]) -> Decimal:
    # rounded once on the total, never per term
    total = Decimal(0)
    for v in values:
        total += v
    return round_money(total)
