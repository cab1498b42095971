"""
Cart — line items and customer details.

    from checkout_flow import cart as C

    c = C.cart_from_lines(catalog_lines)
    C.set_quantity(c, 0, 2)
    C.total(c)
"""

from __future__ import annotations

from checkout_flow.cart._types import Cart, CartLine, CustomerInfo
from checkout_flow.cart._ops import (
    REQUIRED_CUSTOMER_FIELDS,
    set_quantity,
    total,
    item_count,
    missing_fields,
    validate,
    cart_from_lines,
)

__all__ = (
    "Cart",
    "CartLine",
    "CustomerInfo",
    "REQUIRED_CUSTOMER_FIELDS",
    "set_quantity",
    "total",
    "item_count",
    "missing_fields",
    "validate",
    "cart_from_lines",
)
