"""
PaymentOrchestrator — intent → confirm → commit, strictly in sequence.

    orchestrator = PaymentOrchestrator(intents, processor, orders, notifier)
    outcome = await orchestrator.pay(ctx, card_element)

    match outcome.result:
        case Ok(committed):            # → Confirmation
        case Error(e) if is_terminal(e):   # → paid, order not recorded
        case Error(e):                 # stay on Payment, show message

Failure before the processor confirms leaves no money captured; the user may
retry, which creates a new intent. Failure after confirmation is terminal and
carries the intent id for reconciliation. The commit is never retried.
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import Callable
from datetime import datetime

import structlog
from combinators import flow
from kungfu import LazyCoroResult, Result, Ok, Error

from checkout_flow import cart as C
from checkout_flow import lift as L
from checkout_flow import pricing as P
from checkout_flow.errors import (
    CheckoutError,
    CommitError,
    CommitFailure,
    CommitFailureKind,
    NetworkError,
    RemoteCallFailed,
    ValidationError,
)
from checkout_flow.payment._payload import build_order_payload
from checkout_flow.payment._services import (
    NotificationService,
    OrderService,
    PaymentIntentService,
    PaymentProcessorClient,
)
from checkout_flow.payment._types import (
    BillingDetails,
    CheckoutContext,
    Committed,
    PaymentAttempt,
    PaymentOutcome,
    intent_id_from_secret,
    transaction_reference,
)

log = structlog.get_logger(__name__)

CUSTOMER_INFO_INCOMPLETE = "Please complete all required fields"
SIGNATURE_MISSING = "Please sign the contract before paying"
CART_EMPTY = "Your cart is empty"


def payment_metadata(ctx: CheckoutContext) -> dict[str, str]:
    products = [
        {"name": line.name, "quantity": line.quantity, "price": line.unit_price}
        for line in ctx.cart.lines
    ]
    return {
        "account_id": ctx.account.account_id,
        "customer_name": ctx.customer.full_name,
        "customer_email": ctx.customer.email,
        "products": json.dumps(products),
    }


def as_commit_error(intent_id: str) -> Callable[[Exception], CommitError]:
    def convert(exc: Exception) -> CommitError:
        match exc:
            case RemoteCallFailed(status=None, message=message, detail=detail):
                kind = CommitFailureKind.NETWORK
            case RemoteCallFailed(status=status, message=message, detail=detail) if status < 500:
                kind = CommitFailureKind.REJECTED
            case RemoteCallFailed(message=message, detail=detail):
                kind = CommitFailureKind.NETWORK
            case _:
                message, detail, kind = str(exc) or type(exc).__name__, repr(exc), CommitFailureKind.NETWORK
        return CommitError(message, intent_id, detail, kind)

    return convert


class PaymentOrchestrator:
    def __init__(
        self,
        intents: PaymentIntentService,
        processor: PaymentProcessorClient,
        orders: OrderService,
        notifier: NotificationService | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._intents = intents
        self._processor = processor
        self._orders = orders
        self._notifier = notifier
        self._clock = clock
        self._background: set[asyncio.Task[None]] = set()

    # ═══════════════════════════════════════════════════════════════════════
    # pay()
    # ═══════════════════════════════════════════════════════════════════════

    async def pay(self, ctx: CheckoutContext, card_element: object) -> PaymentOutcome:
        bound = log.bind(instance_id=ctx.instance_id, account_id=ctx.account.account_id)

        match self._precheck(ctx):
            case Error(e):
                bound.info("payment_precheck_failed", reason=e.message)
                return PaymentOutcome(None, Error(e))
            case Ok(_):
                pass

        total = C.total(ctx.cart)
        amount = P.amount_minor_units(total)

        match await self._create_attempt(ctx, amount):
            case Ok(attempt):
                bound.info("payment_intent_created", amount_minor_units=amount, currency=ctx.currency)
            case Error(e):
                bound.warning("payment_intent_failed", error=e.message, detail=e.detail)
                return PaymentOutcome(None, Error(e))

        billing = BillingDetails.from_customer(ctx.customer)
        confirmation = await L.processor(
            lambda: self._processor.confirm(attempt.client_secret, billing, card_element)
        )
        match confirmation:
            case Ok(confirmed):
                attempt = attempt.confirmed(confirmed.intent_id)
                status = confirmed.status
            case Error(e):
                bound.warning("payment_declined", intent_id=attempt.intent_id, error=e.message, code=e.code)
                return PaymentOutcome(attempt.failed(), Error(e))

        intent_id = confirmed.intent_id
        bound.info("payment_confirmed", intent_id=intent_id)

        committed = await self._commit(ctx, intent_id, status)
        match committed:
            case Ok(c):
                bound.info("order_committed", intent_id=intent_id, order_reference=c.order_reference)
                self._notify(c.order_reference)
            case Error(e):
                bound.error(
                    "order_not_recorded",
                    intent_id=intent_id,
                    reason=e.reason,
                    kind=e.kind.name,
                    raw_detail=e.raw_detail,
                )
        return PaymentOutcome(attempt, committed)

    def _precheck(self, ctx: CheckoutContext) -> Result[None, ValidationError]:
        if not C.validate(ctx.customer):
            return Error(ValidationError(CUSTOMER_INFO_INCOMPLETE))
        if ctx.account.signature_required and ctx.signature is None:
            return Error(ValidationError(SIGNATURE_MISSING))
        if P.amount_minor_units(C.total(ctx.cart)) <= 0:
            return Error(ValidationError(CART_EMPTY))
        return Ok(None)

    def _create_attempt(
        self, ctx: CheckoutContext, amount: int
    ) -> LazyCoroResult[PaymentAttempt, NetworkError]:
        metadata = payment_metadata(ctx)
        return (
            flow(L.remote(lambda: self._intents.create_intent(amount, ctx.currency, metadata)))
            .map(
                lambda handle: PaymentAttempt(
                    client_secret=handle.client_secret,
                    amount_minor_units=amount,
                    currency=ctx.currency,
                    intent_id=handle.intent_id or intent_id_from_secret(handle.client_secret),
                )
            )
            .compile()
        )

    # ═══════════════════════════════════════════════════════════════════════
    # Commit: the single call site for order persistence
    # ═══════════════════════════════════════════════════════════════════════

    async def _commit(
        self,
        ctx: CheckoutContext,
        intent_id: str,
        intent_status: str,
    ) -> Result[Committed, CommitFailure]:
        match build_order_payload(ctx, intent_id, intent_status, self._clock()):
            case Ok(payload):
                pass
            case Error(e):
                return Error(e)

        receipt = await L.catching_async(
            lambda: self._orders.commit_order(payload),
            on_error=as_commit_error(intent_id),
        )
        match receipt:
            case Ok(r):
                return Ok(Committed(r.order_reference, intent_id, transaction_reference(intent_id)))
            case Error(e):
                return Error(e)

    # ═══════════════════════════════════════════════════════════════════════
    # Confirmation notification, fire and forget
    # ═══════════════════════════════════════════════════════════════════════

    def _notify(self, order_reference: str) -> None:
        notifier = self._notifier
        if notifier is None:
            return
        task = asyncio.create_task(self._send_confirmation(notifier, order_reference))
        self._background.add(task)
        task.add_done_callback(self._background.discard)

    async def _send_confirmation(self, notifier: NotificationService, order_reference: str) -> None:
        try:
            await notifier.send_confirmation(order_reference)
        except Exception:
            log.warning("confirmation_notification_failed", order_reference=order_reference, exc_info=True)
        else:
            log.info("confirmation_notification_sent", order_reference=order_reference)

    async def drain(self) -> None:
        """Wait for pending notifications (shutdown, tests)."""
        if self._background:
            await asyncio.gather(*self._background)


__all__ = (
    "CUSTOMER_INFO_INCOMPLETE",
    "SIGNATURE_MISSING",
    "CART_EMPTY",
    "payment_metadata",
    "as_commit_error",
    "PaymentOrchestrator",
)
