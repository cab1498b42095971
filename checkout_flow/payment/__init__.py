"""
Payment — intent creation, processor confirmation and order commit.

    from checkout_flow import payment as Pay

    orchestrator = Pay.PaymentOrchestrator(intents, processor, orders, notifier)
    outcome = await orchestrator.pay(ctx, card_element)
"""

from __future__ import annotations

from checkout_flow.payment._types import (
    ProcessorStatus,
    PaymentAttempt,
    intent_id_from_secret,
    transaction_reference,
    BillingDetails,
    IntentHandle,
    ProcessorConfirmation,
    OrderReceipt,
    CheckoutContext,
    Committed,
    PaymentOutcome,
)
from checkout_flow.payment._payload import (
    OrderHeader,
    OrderDetail,
    PaymentRecord,
    OrderPayload,
    order_detail,
    build_order_payload,
)
from checkout_flow.payment._services import (
    PaymentIntentService,
    PaymentProcessorClient,
    OrderService,
    NotificationService,
)
from checkout_flow.payment._orchestrator import (
    CUSTOMER_INFO_INCOMPLETE,
    SIGNATURE_MISSING,
    CART_EMPTY,
    payment_metadata,
    as_commit_error,
    PaymentOrchestrator,
)

__all__ = (
    "ProcessorStatus",
    "PaymentAttempt",
    "intent_id_from_secret",
    "transaction_reference",
    "BillingDetails",
    "IntentHandle",
    "ProcessorConfirmation",
    "OrderReceipt",
    "CheckoutContext",
    "Committed",
    "PaymentOutcome",
    "OrderHeader",
    "OrderDetail",
    "PaymentRecord",
    "OrderPayload",
    "order_detail",
    "build_order_payload",
    "PaymentIntentService",
    "PaymentProcessorClient",
    "OrderService",
    "NotificationService",
    "CUSTOMER_INFO_INCOMPLETE",
    "SIGNATURE_MISSING",
    "CART_EMPTY",
    "payment_metadata",
    "as_commit_error",
    "PaymentOrchestrator",
)
