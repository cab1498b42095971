"""
Pricing — tax-inclusive prices to subtotal/tax/total.

    from checkout_flow import pricing as P

    P.display_summary(total)      # nominal rate, for the drawer footer
    P.derive_line(line)           # line's own rate, for the persisted order
"""

from __future__ import annotations

from checkout_flow.pricing._types import LineAmounts, DisplaySummary
from checkout_flow.pricing._derive import (
    NOMINAL_TAX_RATE_PERCENT,
    ex_tax_unit_price,
    derive_line,
    display_summary,
    format_money,
    amount_minor_units,
)

__all__ = (
    "LineAmounts",
    "DisplaySummary",
    "NOMINAL_TAX_RATE_PERCENT",
    "ex_tax_unit_price",
    "derive_line",
    "display_summary",
    "format_money",
    "amount_minor_units",
)
