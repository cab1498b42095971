"""
Financial derivation.

Two paths that must stay separate:

    display_summary(total)   order-level subtotal/tax from ONE nominal rate
    derive_line(line)        per-line amounts from the line's OWN rate

They disagree when lines carry different rates. Both are kept as-is.
Nothing here rounds; rounding happens in format_money() and
amount_minor_units() only.
"""

from __future__ import annotations

import math

from checkout_flow.cart import CartLine
from checkout_flow.pricing._types import LineAmounts, DisplaySummary

NOMINAL_TAX_RATE_PERCENT = 16.0


def ex_tax_unit_price(unit_price: float, tax_rate_percent: float) -> float:
    """Tax-exclusive unit price from a tax-inclusive one."""
    return unit_price / (1 + tax_rate_percent / 100)


def derive_line(line: CartLine) -> LineAmounts:
    rate = line.tax_rate_percent / 100
    ex_unit = ex_tax_unit_price(line.unit_price, line.tax_rate_percent)
    ex_tax = ex_unit * line.quantity
    tax_amount = ex_tax * rate
    return LineAmounts(
        ex_tax_unit=ex_unit,
        ex_tax=ex_tax,
        tax_amount=tax_amount,
        inc_tax=ex_tax + tax_amount,
        tax_rate_percent=line.tax_rate_percent,
    )


def display_summary(
    total: float,
    nominal_rate_percent: float = NOMINAL_TAX_RATE_PERCENT,
) -> DisplaySummary:
    subtotal = total / (1 + nominal_rate_percent / 100)
    return DisplaySummary(
        subtotal=subtotal,
        tax=total - subtotal,
        total=total,
        nominal_rate_percent=nominal_rate_percent,
    )


# ═══════════════════════════════════════════════════════════════════════════════
# Presentation boundary
# ═══════════════════════════════════════════════════════════════════════════════


def format_money(value: float) -> str:
    return f"{value:.2f}"


def amount_minor_units(total: float) -> int:
    """Charge amount in cents, half-up."""
    return math.floor(total * 100 + 0.5)


__all__ = (
    "NOMINAL_TAX_RATE_PERCENT",
    "ex_tax_unit_price",
    "derive_line",
    "display_summary",
    "format_money",
    "amount_minor_units",
)
