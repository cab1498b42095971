from kungfu import Error, Ok, Result
from pydantic import BaseModel

from checkout_flow.errors import user_message
from checkout_flow.flow import FlowView
from checkout_flow.registry import (
    Close,
    ControlError,
    GoToStep,
    Open,
    Show,
    UpdateQuantity,
)
from checkout_flow.steps import Step


# ═══════════════════════════════════════════════════════════════════════════════
# Requests
# ═══════════════════════════════════════════════════════════════════════════════


class KeyIn(BaseModel):
    id: str | None = None


class ShowIn(BaseModel):
    key: str

    def to_domain(self) -> Show:
        return Show(self.key)


class OpenIn(KeyIn):
    def to_domain(self) -> Open:
        return Open(self.id)


class CloseIn(KeyIn):
    def to_domain(self) -> Close:
        return Close(self.id)


class QuantityIn(KeyIn):
    index: int
    quantity: int

    def to_domain(self) -> UpdateQuantity:
        return UpdateQuantity(self.index, self.quantity, self.id)


class StepIn(KeyIn):
    step: Step

    def to_domain(self) -> GoToStep:
        return GoToStep(self.step, self.id)


# ═══════════════════════════════════════════════════════════════════════════════
# Responses
# ═══════════════════════════════════════════════════════════════════════════════


class StepBadgeOut(BaseModel):
    step: int
    label: str
    title: str
    status: str


class LineOut(BaseModel):
    index: int
    product_id: str
    name: str
    variant: str | None
    quantity: int
    unit_price: str
    line_total: str


class FlowViewOut(BaseModel):
    instance_id: str
    container_id: str | None
    is_open: bool
    step: int
    step_label: str
    stepper: list[StepBadgeOut]
    signature_required: bool
    error: str | None
    lines: list[LineOut]
    item_count: int
    subtotal: str
    tax: str
    total: str
    paying: bool
    pay_enabled: bool
    order_number: str | None = None
    transaction_ref: str | None = None
    qr_text: str | None = None
    barcode_value: str | None = None
    failure_reason: str | None = None
    failure_intent_id: str | None = None

    @classmethod
    def of(cls, view: FlowView) -> "FlowViewOut":
        return cls(
            instance_id=view.instance_id,
            container_id=view.container_id,
            is_open=view.is_open,
            step=int(view.step),
            step_label=view.step_label,
            stepper=[
                StepBadgeOut(step=int(b.step), label=b.label, title=b.title, status=b.status.value)
                for b in view.stepper
            ],
            signature_required=view.signature_required,
            error=view.error,
            lines=[
                LineOut(
                    index=line.index,
                    product_id=line.product_id,
                    name=line.name,
                    variant=line.variant,
                    quantity=line.quantity,
                    unit_price=line.unit_price,
                    line_total=line.line_total,
                )
                for line in view.lines
            ],
            item_count=view.item_count,
            subtotal=view.subtotal,
            tax=view.tax,
            total=view.total,
            paying=view.paying,
            pay_enabled=view.pay_enabled,
            order_number=view.order_number,
            transaction_ref=view.transaction_ref,
            qr_text=view.codes.qr_text if view.codes else None,
            barcode_value=view.codes.barcode_value if view.codes else None,
            failure_reason=view.failure.reason if view.failure else None,
            failure_intent_id=view.failure.intent_id if view.failure else None,
        )


class CheckoutOut(BaseModel):
    ok: bool
    error: str | None = None
    view: FlowViewOut | None = None

    @classmethod
    def from_domain(cls, dom: Result[FlowView, ControlError]) -> "CheckoutOut":
        match dom:
            case Ok(view):
                return cls(ok=True, view=FlowViewOut.of(view))
            case Error(e):
                return cls(ok=False, error=user_message(e))


__all__ = (
    "KeyIn",
    "ShowIn",
    "OpenIn",
    "CloseIn",
    "QuantityIn",
    "StepIn",
    "StepBadgeOut",
    "LineOut",
    "FlowViewOut",
    "CheckoutOut",
)
