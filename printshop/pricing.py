from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

COLOR_PRICE_PER_PAGE = Decimal("2")
MONO_PRICE_PER_PAGE = Decimal("1")
A3_MULTIPLIER = Decimal("1.5")
DOUBLE_SIDED_MULTIPLIER = Decimal("1.8")
TAX_RATE = Decimal("0.10")


@dataclass(frozen=True)
class Quote:
    subtotal: int
    tax: int
    total: int


# Decimal keeps half-way products such as 13.5 exact
def _round_half_up(value: Decimal) -> int:
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def quote(copies: int, paper_size: str, print_side: str, color: str) -> Quote:
    base = COLOR_PRICE_PER_PAGE if color == "color" else MONO_PRICE_PER_PAGE
    size_multiplier = A3_MULTIPLIER if paper_size == "A3" else Decimal("1")
    side_multiplier = DOUBLE_SIDED_MULTIPLIER if print_side == "double-sided" else Decimal("1")

    subtotal = _round_half_up(base * size_multiplier * side_multiplier * Decimal(copies))
    tax = _round_half_up(Decimal(subtotal) * TAX_RATE)
    return Quote(subtotal=subtotal, tax=tax, total=subtotal + tax)
