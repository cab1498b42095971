"""
HTTP implementations of the payment-side collaborators.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from checkout_flow.errors import RemoteCallFailed
from checkout_flow.payment import IntentHandle, OrderPayload, OrderReceipt
from checkout_flow.remote._client import BackendClient


def _field(data: Any, name: str) -> str | None:
    if isinstance(data, dict):
        value = data.get(name)
        if value is not None and value != "":
            return str(value)
    return None


class HttpIntentService:
    """POST /payments/intents → {"client_secret", "intent_id"?}"""

    def __init__(self, client: BackendClient) -> None:
        self._client = client

    async def create_intent(
        self,
        amount_minor_units: int,
        currency: str,
        metadata: Mapping[str, str],
    ) -> IntentHandle:
        data = await self._client.post(
            "/payments/intents",
            json={
                "amount": amount_minor_units,
                "currency": currency,
                "metadata": dict(metadata),
            },
        )
        secret = _field(data, "client_secret")
        if secret is None:
            raise RemoteCallFailed("Payment intent response has no client secret", detail=repr(data), status=200)
        return IntentHandle(client_secret=secret, intent_id=_field(data, "intent_id"))


class HttpOrderService:
    """POST /orders → {"order_reference"}"""

    def __init__(self, client: BackendClient) -> None:
        self._client = client

    async def commit_order(self, payload: OrderPayload) -> OrderReceipt:
        data = await self._client.post("/orders", json=payload.model_dump(mode="json"))
        reference = _field(data, "order_reference")
        if reference is None:
            raise RemoteCallFailed("Order response has no order reference", detail=repr(data), status=200)
        return OrderReceipt(order_reference=reference)


class HttpNotificationService:
    """POST /orders/{reference}/confirmation"""

    def __init__(self, client: BackendClient) -> None:
        self._client = client

    async def send_confirmation(self, order_reference: str) -> None:
        await self._client.post(f"/orders/{order_reference}/confirmation")


__all__ = ("HttpIntentService", "HttpOrderService", "HttpNotificationService")
