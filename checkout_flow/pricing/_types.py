"""
Pricing types.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class LineAmounts:
    """Per-line derivation from a tax-inclusive unit price and the line's own rate."""

    ex_tax_unit: float
    ex_tax: float
    tax_amount: float
    inc_tax: float
    tax_rate_percent: float


@dataclass(frozen=True, slots=True)
class DisplaySummary:
    """Order-level figures derived with the nominal rate."""

    subtotal: float
    tax: float
    total: float
    nominal_rate_percent: float


__all__ = ("LineAmounts", "DisplaySummary")
