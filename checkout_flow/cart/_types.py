"""
Cart types.
"""

from __future__ import annotations

from dataclasses import dataclass, field


# ═══════════════════════════════════════════════════════════════════════════════
# Cart Line
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(slots=True)
class CartLine:
    """
    One cart entry.

    ``unit_price`` is tax-inclusive. ``quantity`` 0 keeps the line in the
    cart (removed-but-present); lines are never deleted.
    """

    product_id: str
    name: str
    unit_price: float
    tax_rate_percent: float
    quantity: int = 1
    variant: str | None = None
    sku: str = ""
    cost: float = 0.0
    unit: str | None = None


# ═══════════════════════════════════════════════════════════════════════════════
# Customer
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class CustomerInfo:
    """Contact and shipping fields. Replaced as a whole, never merged."""

    email: str = ""
    full_name: str = ""
    address_line: str = ""
    city: str = ""
    postal_code: str = ""
    phone: str | None = None

    @classmethod
    def capture(
        cls,
        email: str,
        full_name: str,
        address_line: str,
        city: str,
        postal_code: str,
        phone: str | None = None,
    ) -> CustomerInfo:
        """Build from raw form values, trimming every field."""
        phone = phone.strip() if phone else None
        return cls(
            email=email.strip(),
            full_name=full_name.strip(),
            address_line=address_line.strip(),
            city=city.strip(),
            postal_code=postal_code.strip(),
            phone=phone or None,
        )


# ═══════════════════════════════════════════════════════════════════════════════
# Cart
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(slots=True)
class Cart:
    lines: list[CartLine] = field(default_factory=list[CartLine])

    def __len__(self) -> int:
        return len(self.lines)


__all__ = ("CartLine", "CustomerInfo", "Cart")
