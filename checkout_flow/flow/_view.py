"""
FlowView — immutable snapshot handed to the render hook.

Everything a UI needs to draw the current step, already formatted.
"""

from __future__ import annotations

from dataclasses import dataclass

from kungfu import Error

from checkout_flow import cart as C
from checkout_flow import pricing as P
from checkout_flow import steps as St
from checkout_flow.flow._instance import FlowInstance
from checkout_flow.steps import Step, StepBadge


@dataclass(frozen=True, slots=True)
class LineView:
    index: int
    product_id: str
    name: str
    variant: str | None
    quantity: int
    unit_price: str
    line_total: str


@dataclass(frozen=True, slots=True)
class ConfirmationCodes:
    qr_text: str
    barcode_value: str | None


@dataclass(frozen=True, slots=True)
class FailureView:
    """Shown on the paid-but-not-recorded screen; quote this to support."""

    reason: str
    intent_id: str | None
    transaction_ref: str | None
    raw_detail: str


@dataclass(frozen=True, slots=True)
class FlowView:
    instance_id: str
    container_id: str | None
    is_open: bool
    step: Step
    step_label: str
    stepper: tuple[StepBadge, ...]
    signature_required: bool
    error: str | None
    lines: tuple[LineView, ...]
    item_count: int
    subtotal: str
    tax: str
    total: str
    paying: bool
    pay_enabled: bool
    can_confirm_signature: bool
    order_number: str | None = None
    transaction_ref: str | None = None
    codes: ConfirmationCodes | None = None
    failure: FailureView | None = None


def confirmation_codes(order_number: str, total: float) -> ConfirmationCodes:
    """QR text and a numeric barcode value (first 12 digits of the order number)."""
    digits = "".join(ch for ch in order_number if ch.isdigit())[:12]
    return ConfirmationCodes(
        qr_text=f"Order: {order_number}\nTotal: ${P.format_money(total)}",
        barcode_value=digits or None,
    )


def build_view(instance: FlowInstance, nominal_rate_percent: float = P.NOMINAL_TAX_RATE_PERCENT) -> FlowView:
    total = C.total(instance.cart)
    summary = P.display_summary(total, nominal_rate_percent)
    step = instance.current_step

    lines = tuple(
        LineView(
            index=i,
            product_id=line.product_id,
            name=line.name,
            variant=line.variant,
            quantity=line.quantity,
            unit_price=P.format_money(line.unit_price),
            line_total=P.format_money(line.unit_price * line.quantity),
        )
        for i, line in enumerate(instance.cart.lines)
    )

    codes = None
    if step is Step.CONFIRMATION and instance.order_number:
        codes = confirmation_codes(instance.order_number, total)

    failure = None
    match instance.commit:
        case Error(e) if step is Step.PAYMENT_SUCCEEDED_ORDER_FAILED:
            failure = FailureView(e.reason, e.intent_id, instance.transaction_ref, e.raw_detail)
        case _:
            pass

    return FlowView(
        instance_id=instance.instance_id,
        container_id=instance.container_id,
        is_open=instance.is_open,
        step=step,
        step_label=St.display_label(step, instance.signature_required),
        stepper=St.stepper(step, instance.signature_required),
        signature_required=instance.signature_required,
        error=instance.error,
        lines=lines,
        item_count=C.item_count(instance.cart),
        subtotal=P.format_money(summary.subtotal),
        tax=P.format_money(summary.tax),
        total=P.format_money(summary.total),
        paying=instance.paying,
        pay_enabled=step is Step.PAYMENT and not instance.paying,
        can_confirm_signature=instance.signature_pad.can_confirm,
        order_number=instance.order_number,
        transaction_ref=instance.transaction_ref,
        codes=codes,
        failure=failure,
    )


__all__ = (
    "LineView",
    "ConfirmationCodes",
    "FailureView",
    "FlowView",
    "confirmation_codes",
    "build_view",
)
