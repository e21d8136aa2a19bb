"""Cart pricing: subtotal, tax and total under fixed rounding rules."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from storefront.models import CartLine, Totals

TAX_RATE = Decimal("0.08")
_CENT = Decimal("0.01")


def round2(value: Decimal) -> Decimal:
    """Round to cents, halves away from zero."""
    return value.quantize(_CENT, rounding=ROUND_HALF_UP)


def compute_totals(lines: Iterable[CartLine]) -> Totals:
    """Price a cart.

    Tax and total are derived from the unrounded subtotal and each reported
    figure is rounded exactly once.
    """
    subtotal = sum((line.line_total for line in lines), Decimal("0"))
    tax = round2(subtotal * TAX_RATE)
    return Totals(
        subtotal=round2(subtotal),
        tax=tax,
        total=round2(subtotal + tax),
    )


def format_money(value: Decimal) -> str:
    return f"${round2(value):.2f}"
