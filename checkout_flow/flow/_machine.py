"""
StepMachine — drives one FlowInstance through the checkout.

    machine = StepMachine(instance, orchestrator, render=print)
    machine.open()
    machine.continue_from_cart()
    machine.submit_customer_info(CustomerInfo.capture(...))
    machine.confirm_signature(accepted_terms=True)     # only with signature
    await machine.pay(card_element)

Every accepted transition clears the error banner and re-renders. Rejected
transitions return an error value and leave the step unchanged.
"""

from __future__ import annotations

from dataclasses import replace

import structlog
from kungfu import Result, Ok, Error

from checkout_flow import cart as C
from checkout_flow import pricing as P
from checkout_flow import steps as St
from checkout_flow._types import RenderHook
from checkout_flow.cart import CustomerInfo
from checkout_flow.errors import (
    CheckoutError,
    NavigationError,
    ValidationError,
    is_terminal,
    user_message,
)
from checkout_flow.flow._instance import FlowInstance
from checkout_flow.flow._view import FlowView, build_view
from checkout_flow.payment import (
    CUSTOMER_INFO_INCOMPLETE,
    CheckoutContext,
    Committed,
    PaymentOrchestrator,
    transaction_reference,
)
from checkout_flow.signature import SignatureImage, SignaturePad
from checkout_flow.steps import Step, TERMINAL_STEPS

log = structlog.get_logger(__name__)

PAYMENT_IN_PROGRESS = "A payment is already in progress"


def _wrong_step(action: str, step: Step) -> NavigationError:
    return NavigationError(f"Cannot {action} from step {step.name.lower()}")


class StepMachine:
    def __init__(
        self,
        instance: FlowInstance,
        orchestrator: PaymentOrchestrator,
        render: RenderHook[FlowView] | None = None,
        currency: str = "mxn",
        nominal_rate_percent: float = P.NOMINAL_TAX_RATE_PERCENT,
    ) -> None:
        self.instance = instance
        self._orchestrator = orchestrator
        self._render = render
        self._currency = currency
        self._nominal_rate = nominal_rate_percent
        self._log = log.bind(instance_id=instance.instance_id)

    # ═══════════════════════════════════════════════════════════════════════
    # View
    # ═══════════════════════════════════════════════════════════════════════

    @property
    def step(self) -> Step:
        return self.instance.current_step

    @property
    def signature_pad(self) -> SignaturePad:
        return self.instance.signature_pad

    def view(self) -> FlowView:
        return build_view(self.instance, self._nominal_rate)

    def render(self) -> None:
        if self._render is not None and self.instance.is_open:
            self._render(self.view())

    def _transition(self, step: Step) -> Ok[Step]:
        previous = self.instance.current_step
        self.instance.current_step = step
        self.instance.error = None
        self._log.info("step_changed", previous=previous.name, current=step.name)
        self.render()
        return Ok(step)

    def _reject[E: (ValidationError, NavigationError)](self, error: E) -> Error[E]:
        self.instance.error = error.message
        self._log.info("transition_rejected", step=self.step.name, reason=error.message)
        self.render()
        return Error(error)

    # ═══════════════════════════════════════════════════════════════════════
    # Drawer
    # ═══════════════════════════════════════════════════════════════════════

    def open(self) -> FlowView:
        """Open the drawer at the cart. Reopening resets everything but cart and customer."""
        instance = self.instance
        if not instance.is_open:
            instance.reset_for_reopen()
            instance.is_open = True
            self._log.info("checkout_opened", generation=instance.generation)
        self.render()
        return self.view()

    def close(self) -> FlowView:
        """
        Allowed from every step. A payment in flight is not cancelled; its
        result is discarded when it arrives.
        """
        instance = self.instance
        if instance.is_open:
            instance.is_open = False
            self._log.info("checkout_closed", step=instance.current_step.name, paying=instance.paying)
        return self.view()

    # ═══════════════════════════════════════════════════════════════════════
    # Forward transitions
    # ═══════════════════════════════════════════════════════════════════════

    def continue_from_cart(self) -> Result[Step, NavigationError]:
        if self.step is not Step.CART:
            return self._reject(_wrong_step("continue to customer info", self.step))
        return self._transition(Step.CUSTOMER_INFO)

    def submit_customer_info(self, info: CustomerInfo) -> Result[Step, ValidationError | NavigationError]:
        """Replaces the stored customer info as a whole, then validates it."""
        if self.step is not Step.CUSTOMER_INFO:
            return self._reject(_wrong_step("submit customer info", self.step))
        self.instance.customer = info
        if not C.validate(info):
            self._log.info("customer_info_incomplete", missing=C.missing_fields(info))
            return self._reject(ValidationError(CUSTOMER_INFO_INCOMPLETE))
        return self._transition(St.after_customer_info(self.instance.signature_required))

    def clear_signature(self) -> Result[None, NavigationError]:
        if self.step is not Step.SIGNATURE:
            return self._reject(_wrong_step("clear the signature", self.step))
        self.instance.signature_pad.clear()
        self.render()
        return Ok(None)

    def confirm_signature(self, accepted_terms: bool | None = None) -> Result[SignatureImage, ValidationError | NavigationError]:
        if self.step is not Step.SIGNATURE:
            return self._reject(_wrong_step("confirm a signature", self.step))
        match self.instance.signature_pad.confirm(accepted_terms):
            case Ok(image):
                self._transition(Step.PAYMENT)
                return Ok(image)
            case Error(e):
                return self._reject(e)

    # ═══════════════════════════════════════════════════════════════════════
    # Backward transitions
    # ═══════════════════════════════════════════════════════════════════════

    def _guard_backward(self) -> NavigationError | None:
        if self.instance.paying:
            return NavigationError(PAYMENT_IN_PROGRESS)
        if self.step in TERMINAL_STEPS:
            return _wrong_step("go back", self.step)
        return None

    def back(self) -> Result[Step, NavigationError]:
        if (error := self._guard_backward()) is not None:
            return self._reject(error)
        target = St.back_target(self.step, self.instance.signature_required)
        if target is None:
            return self._reject(_wrong_step("go back", self.step))
        return self._transition(target)

    def back_to_cart(self) -> Result[Step, NavigationError]:
        """Explicit "back to step 1"; offered before the payment step only."""
        if (error := self._guard_backward()) is not None:
            return self._reject(error)
        if self.step >= Step.PAYMENT:
            return self._reject(_wrong_step("return to the cart", self.step))
        return self._transition(Step.CART)

    def go_to_step(self, target: Step) -> Result[Step, NavigationError]:
        """Host-driven jump; backward only, to a step this flow has."""
        if (error := self._guard_backward()) is not None:
            return self._reject(error)
        if target == self.step:
            self.render()
            return Ok(target)
        if not St.can_go_back_to(self.step, target, self.instance.signature_required):
            return self._reject(NavigationError(f"Cannot jump from {self.step.name.lower()} to {target.name.lower()}"))
        return self._transition(target)

    # ═══════════════════════════════════════════════════════════════════════
    # Cart
    # ═══════════════════════════════════════════════════════════════════════

    def update_quantity(self, line_index: int, quantity: int) -> Result[bool, NavigationError]:
        """Ok(False) when the value was ignored (negative, non-integer, unknown line)."""
        if self.instance.paying:
            return Error(NavigationError(PAYMENT_IN_PROGRESS))
        if self.step in TERMINAL_STEPS:
            return Error(_wrong_step("change the cart", self.step))
        changed = C.set_quantity(self.instance.cart, line_index, quantity)
        if changed:
            self.render()
        return Ok(changed)

    # ═══════════════════════════════════════════════════════════════════════
    # Payment
    # ═══════════════════════════════════════════════════════════════════════

    def _context(self) -> CheckoutContext:
        instance = self.instance
        return CheckoutContext(
            account=instance.account,
            cart=C.Cart([replace(line) for line in instance.cart.lines]),
            customer=instance.customer,
            signature=instance.signature_pad.state.image if instance.signature_required else None,
            currency=self._currency,
            nominal_rate_percent=self._nominal_rate,
            instance_id=instance.instance_id,
        )

    async def pay(self, card_element: object) -> Result[Committed, CheckoutError]:
        instance = self.instance
        if instance.paying:
            return Error(NavigationError(PAYMENT_IN_PROGRESS))
        if not instance.is_open:
            return Error(NavigationError("Checkout is closed"))
        if self.step is not Step.PAYMENT:
            return self._reject(_wrong_step("pay", self.step))

        generation = instance.generation
        instance.paying = True
        instance.error = None
        self.render()
        try:
            outcome = await self._orchestrator.pay(self._context(), card_element)
        finally:
            instance.paying = False

        if generation != instance.generation or not instance.is_open:
            self._log.warning(
                "late_payment_result_discarded",
                intent_id=outcome.attempt.intent_id if outcome.attempt else None,
                succeeded=isinstance(outcome.result, Ok),
            )
            return outcome.result

        instance.attempt = outcome.attempt
        match outcome.result:
            case Ok(committed):
                instance.commit = Ok(committed)
                instance.order_number = committed.order_reference
                instance.transaction_ref = committed.transaction_ref
                self._transition(Step.CONFIRMATION)
            case Error(e) if is_terminal(e):
                instance.commit = Error(e)
                instance.transaction_ref = transaction_reference(e.intent_id) if e.intent_id else None
                self._transition(Step.PAYMENT_SUCCEEDED_ORDER_FAILED)
            case Error(e):
                instance.error = user_message(e)
                self.render()
        return outcome.result


__all__ = ("PAYMENT_IN_PROGRESS", "StepMachine")
