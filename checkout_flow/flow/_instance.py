"""
FlowInstance — all state of one embedded checkout.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from uuid import uuid4

from kungfu import Result

from checkout_flow import cart as C
from checkout_flow.account import AccountConfig
from checkout_flow.cart import Cart, CustomerInfo
from checkout_flow.errors import CommitFailure
from checkout_flow.payment import Committed, PaymentAttempt
from checkout_flow.signature import SignaturePad
from checkout_flow.steps import Step


def new_instance_id() -> str:
    return f"checkout-{uuid4().hex[:9]}"


@dataclass(slots=True)
class FlowInstance:
    """
    Mutable aggregate owned by exactly one StepMachine.

    ``account`` is frozen, so ``signature_required`` cannot change after
    init. ``generation`` is bumped on every open; a payment started under
    an older generation no longer owns the view.
    """

    account: AccountConfig
    cart: Cart
    instance_id: str = field(default_factory=new_instance_id)
    container_id: str | None = None
    config_id: str | None = None
    customer: CustomerInfo = field(default_factory=CustomerInfo)
    signature_pad: SignaturePad = field(default_factory=SignaturePad)
    current_step: Step = Step.CART
    is_open: bool = False
    generation: int = 0
    paying: bool = False
    error: str | None = None
    attempt: PaymentAttempt | None = None
    commit: Result[Committed, CommitFailure] | None = None
    order_number: str | None = None
    transaction_ref: str | None = None

    @classmethod
    def create(
        cls,
        account: AccountConfig,
        container_id: str | None = None,
        signature_size: tuple[int, int] = (600, 200),
    ) -> FlowInstance:
        width, height = signature_size
        return cls(
            account=account,
            cart=C.cart_from_lines(p.to_cart_line() for p in account.catalog),
            container_id=container_id,
            config_id=account.config_id,
            signature_pad=SignaturePad(width, height),
        )

    @property
    def signature_required(self) -> bool:
        return self.account.signature_required

    def reset_for_reopen(self) -> None:
        """Back to the cart; cart lines and customer info survive."""
        self.generation += 1
        self.current_step = Step.CART
        self.error = None
        self.attempt = None
        self.commit = None
        self.order_number = None
        self.transaction_ref = None
        self.signature_pad.clear()


__all__ = ("new_instance_id", "FlowInstance")
