"""
Cart operations — pure functions over Cart and CustomerInfo.
"""

from __future__ import annotations

from collections.abc import Iterable

import structlog

from checkout_flow.cart._types import Cart, CartLine, CustomerInfo

log = structlog.get_logger(__name__)

REQUIRED_CUSTOMER_FIELDS = ("email", "full_name", "address_line", "city", "postal_code")


# ═══════════════════════════════════════════════════════════════════════════════
# set_quantity(): the only cart mutation
# ═══════════════════════════════════════════════════════════════════════════════


def set_quantity(cart: Cart, line_index: int, new_quantity: int) -> bool:
    """
    Replace the quantity of one line.

    Returns True when the cart changed (caller re-renders). Negative
    quantities, non-integers and unknown indexes are ignored. There is no
    upper bound and no stock check.
    """
    if isinstance(new_quantity, bool) or not isinstance(new_quantity, int):
        log.debug("quantity_rejected", line_index=line_index, quantity=new_quantity)
        return False
    if new_quantity < 0:
        log.debug("quantity_rejected", line_index=line_index, quantity=new_quantity)
        return False
    if not 0 <= line_index < len(cart.lines):
        log.debug("quantity_unknown_line", line_index=line_index, lines=len(cart.lines))
        return False

    cart.lines[line_index].quantity = new_quantity
    return True


# ═══════════════════════════════════════════════════════════════════════════════
# total()
# ═══════════════════════════════════════════════════════════════════════════════


def total(cart: Cart) -> float:
    """Tax-inclusive cart total. Float, no intermediate rounding."""
    return sum((line.unit_price * line.quantity for line in cart.lines), 0.0)


def item_count(cart: Cart) -> int:
    return sum(line.quantity for line in cart.lines)


# ═══════════════════════════════════════════════════════════════════════════════
# validate()
# ═══════════════════════════════════════════════════════════════════════════════


def missing_fields(info: CustomerInfo) -> tuple[str, ...]:
    return tuple(
        name for name in REQUIRED_CUSTOMER_FIELDS
        if not getattr(info, name).strip()
    )


def validate(info: CustomerInfo) -> bool:
    """Every required field non-empty after trimming. Phone is optional."""
    return not missing_fields(info)


# ═══════════════════════════════════════════════════════════════════════════════
# Construction
# ═══════════════════════════════════════════════════════════════════════════════


def cart_from_lines(lines: Iterable[CartLine]) -> Cart:
    """New cart; each line starts with quantity 1."""
    return Cart(
        lines=[
            CartLine(
                product_id=line.product_id,
                name=line.name,
                unit_price=line.unit_price,
                tax_rate_percent=line.tax_rate_percent,
                quantity=1,
                variant=line.variant,
                sku=line.sku,
                cost=line.cost,
                unit=line.unit,
            )
            for line in lines
        ]
    )


__all__ = (
    "REQUIRED_CUSTOMER_FIELDS",
    "set_quantity",
    "total",
    "item_count",
    "missing_fields",
    "validate",
    "cart_from_lines",
)
