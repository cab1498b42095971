"""
Order payload — what the order service persists after a confirmed payment.

    header    order-level figures (nominal-rate display path) + customer
    details   one row per cart line, quantity 0 included (per-line rate path)
    payments  the card payment that was just captured
    signature_image  PNG data URL, only when the flow required a signature
"""

from __future__ import annotations

from datetime import datetime

from kungfu import Result, Ok, Error
from pydantic import BaseModel, ConfigDict

from checkout_flow import cart as C
from checkout_flow import pricing as P
from checkout_flow.cart import CartLine
from checkout_flow.errors import ConfigError
from checkout_flow.payment._types import CheckoutContext


class _Payload(BaseModel):
    model_config = ConfigDict(frozen=True)


class OrderHeader(_Payload):
    order_date: str
    order_time: str
    subtotal: float
    tax: float
    total: float
    currency: str
    line_count: int
    warehouse_key: str
    warehouse_name: str
    branch_key: str
    branch_name: str
    customer_type_key: str
    customer_name: str
    customer_email: str
    customer_phone: str | None
    address_line: str
    city: str
    postal_code: str
    status: str = "open"
    payment_status: str = "paid"
    payment_method: str = "card"
    channel: str = "checkout-widget"
    payment_intent_id: str
    payment_intent_status: str


class OrderDetail(_Payload):
    product_id: str
    sku: str
    name: str
    variant: str | None
    unit: str | None
    quantity: int
    cost: float
    unit_price: float
    unit_price_ex_tax: float
    tax_rate_percent: float
    amount_ex_tax: float
    tax_amount: float
    amount_inc_tax: float
    discount_amount: float = 0.0


class PaymentRecord(_Payload):
    method: str = "card"
    amount: float
    currency: str
    paid_at: datetime
    payment_intent_id: str
    payment_intent_status: str


class OrderPayload(_Payload):
    account_id: str
    config_id: str | None
    instance_id: str
    header: OrderHeader
    details: list[OrderDetail]
    payments: list[PaymentRecord]
    signature_image: str | None = None


# ═══════════════════════════════════════════════════════════════════════════════
# Builders
# ═══════════════════════════════════════════════════════════════════════════════


def order_detail(line: CartLine) -> OrderDetail:
    amounts = P.derive_line(line)
    return OrderDetail(
        product_id=line.product_id,
        sku=line.sku,
        name=line.name,
        variant=line.variant,
        unit=line.unit,
        quantity=line.quantity,
        cost=line.cost,
        unit_price=line.unit_price,
        unit_price_ex_tax=amounts.ex_tax_unit,
        tax_rate_percent=amounts.tax_rate_percent,
        amount_ex_tax=amounts.ex_tax,
        tax_amount=amounts.tax_amount,
        amount_inc_tax=amounts.inc_tax,
    )


def build_order_payload(
    ctx: CheckoutContext,
    intent_id: str,
    intent_status: str,
    now: datetime,
) -> Result[OrderPayload, ConfigError]:
    """
    Fails with ConfigError when the account defaults (warehouse, branch,
    customer type) are missing; the error carries the intent id because
    the payment is already captured at this point.
    """
    defaults = ctx.account.defaults
    if defaults is None:
        return Error(ConfigError("Account configuration (defaults) not found", intent_id))
    warehouse, branch, customer_type = defaults.warehouse, defaults.branch, defaults.customer_type
    missing = defaults.missing()
    if missing or warehouse is None or branch is None or customer_type is None:
        return Error(
            ConfigError(
                f"Account configuration is missing: {', '.join(missing)}",
                intent_id,
                raw_detail=defaults.model_dump_json(),
            )
        )

    total = C.total(ctx.cart)
    summary = P.display_summary(total, ctx.nominal_rate_percent)
    customer = ctx.customer

    header = OrderHeader(
        order_date=now.strftime("%Y-%m-%d"),
        order_time=now.strftime("%H:%M:%S"),
        subtotal=summary.subtotal,
        tax=summary.tax,
        total=summary.total,
        currency=ctx.currency,
        line_count=len(ctx.cart),
        warehouse_key=warehouse.key or "",
        warehouse_name=warehouse.name,
        branch_key=branch.key or "",
        branch_name=branch.name,
        customer_type_key=customer_type.key or "",
        customer_name=customer.full_name,
        customer_email=customer.email,
        customer_phone=customer.phone,
        address_line=customer.address_line,
        city=customer.city,
        postal_code=customer.postal_code,
        payment_intent_id=intent_id,
        payment_intent_status=intent_status,
    )
    payment = PaymentRecord(
        amount=total,
        currency=ctx.currency,
        paid_at=now,
        payment_intent_id=intent_id,
        payment_intent_status=intent_status,
    )
    signature = ctx.signature.data_url() if ctx.signature is not None else None

    return Ok(
        OrderPayload(
            account_id=ctx.account.account_id,
            config_id=ctx.account.config_id,
            instance_id=ctx.instance_id,
            header=header,
            details=[order_detail(line) for line in ctx.cart.lines],
            payments=[payment],
            signature_image=signature,
        )
    )


__all__ = (
    "OrderHeader",
    "OrderDetail",
    "PaymentRecord",
    "OrderPayload",
    "order_detail",
    "build_order_payload",
)
