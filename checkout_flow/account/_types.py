"""
Account configuration documents.

Parsed with pydantic from whatever the config backend returns; unknown
keys are ignored.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from checkout_flow.cart import CartLine


class _Document(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


# ═══════════════════════════════════════════════════════════════════════════════
# Catalog
# ═══════════════════════════════════════════════════════════════════════════════


class CatalogProduct(_Document):
    product_id: str
    name: str
    unit_price: float = Field(ge=0)
    tax_rate_percent: float = Field(default=16.0, ge=0)
    variant: str | None = None
    sku: str = ""
    cost: float = 0.0
    unit: str | None = None

    def to_cart_line(self) -> CartLine:
        return CartLine(
            product_id=self.product_id,
            name=self.name,
            unit_price=self.unit_price,
            tax_rate_percent=self.tax_rate_percent,
            quantity=1,
            variant=self.variant,
            sku=self.sku,
            cost=self.cost,
            unit=self.unit,
        )


# ═══════════════════════════════════════════════════════════════════════════════
# Order-commit defaults
# ═══════════════════════════════════════════════════════════════════════════════


class KeyedRef(_Document):
    key: str | None = None
    name: str = ""


class AccountDefaults(_Document):
    """Warehouse, branch and customer type stamped on every order."""

    warehouse: KeyedRef | None = None
    branch: KeyedRef | None = None
    customer_type: KeyedRef | None = None

    def missing(self) -> tuple[str, ...]:
        refs = {
            "warehouse": self.warehouse,
            "branch": self.branch,
            "customer type": self.customer_type,
        }
        return tuple(name for name, ref in refs.items() if ref is None or not ref.key)


# ═══════════════════════════════════════════════════════════════════════════════
# Contract template
# ═══════════════════════════════════════════════════════════════════════════════


class ContractTemplate(_Document):
    """
    Contract template. The backend nests the signature flag:

        {"name": "...", "config": {"general": {"requires_signature": true}}}

    Anything but a literal ``true`` means no signature.
    """

    name: str = ""
    title: str | None = None
    requires_signature: bool = False

    @model_validator(mode="before")
    @classmethod
    def _lift_signature_flag(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        if "requires_signature" in data:
            flag = data["requires_signature"]
        else:
            config = data.get("config")
            general = config.get("general") if isinstance(config, dict) else None
            flag = general.get("requires_signature") if isinstance(general, dict) else None
        return {**data, "requires_signature": flag is True}


# ═══════════════════════════════════════════════════════════════════════════════
# AccountConfig: everything a flow needs before it opens
# ═══════════════════════════════════════════════════════════════════════════════


class AccountConfig(_Document):
    account_id: str
    config_id: str | None = None
    catalog: tuple[CatalogProduct, ...] = ()
    defaults: AccountDefaults | None = None
    contract: ContractTemplate | None = None
    processor_account_id: str | None = None

    @property
    def signature_required(self) -> bool:
        return self.contract is not None and self.contract.requires_signature

    def with_products(self, products: tuple[CatalogProduct, ...]) -> AccountConfig:
        return self.model_copy(update={"catalog": products})


__all__ = (
    "CatalogProduct",
    "KeyedRef",
    "AccountDefaults",
    "ContractTemplate",
    "AccountConfig",
)
