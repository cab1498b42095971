"""
External collaborators of the orchestrator.

Implementations raise on failure (``RemoteCallFailed``,
``ProcessorDeclined`` or anything else); the orchestrator lifts exceptions
into error values.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol

from checkout_flow.payment._payload import OrderPayload
from checkout_flow.payment._types import (
    BillingDetails,
    IntentHandle,
    ProcessorConfirmation,
    OrderReceipt,
)


class PaymentIntentService(Protocol):
    async def create_intent(
        self,
        amount_minor_units: int,
        currency: str,
        metadata: Mapping[str, str],
    ) -> IntentHandle: ...


class PaymentProcessorClient(Protocol):
    async def confirm(
        self,
        client_secret: str,
        billing: BillingDetails,
        card_element: object,
    ) -> ProcessorConfirmation: ...


class OrderService(Protocol):
    async def commit_order(self, payload: OrderPayload) -> OrderReceipt: ...


class NotificationService(Protocol):
    async def send_confirmation(self, order_reference: str) -> None: ...


__all__ = (
    "PaymentIntentService",
    "PaymentProcessorClient",
    "OrderService",
    "NotificationService",
)
