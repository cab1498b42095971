"""Shared infrastructure for examples: in-memory stand-ins for the backends."""

from __future__ import annotations

import asyncio
import itertools
import uuid
from collections.abc import Callable, Coroutine, Mapping
from dataclasses import dataclass, field
from typing import Any

from checkout_flow.errors import ProcessorDeclined, RemoteCallFailed
from checkout_flow.payment import (
    BillingDetails,
    IntentHandle,
    OrderPayload,
    OrderReceipt,
    ProcessorConfirmation,
)


# Config backend
@dataclass(slots=True)
class MemoryConfigSource:
    defaults: dict[str, dict[str, Any]] = field(default_factory=lambda: {
        "acme": {
            "warehouse": {"key": "WH-01", "name": "Main warehouse"},
            "branch": {"key": "BR-01", "name": "Downtown"},
            "customer_type": {"key": "RETAIL", "name": "Retail"},
        },
    })
    storefronts: dict[str, dict[str, Any]] = field(default_factory=lambda: {
        "acme": {
            "products": [
                {"product_id": "p-1", "name": "Yoga mat", "unit_price": 100.0, "sku": "YM-1"},
                {"product_id": "p-2", "name": "Water bottle", "unit_price": 58.0, "variant": "1L"},
            ],
        },
    })
    templates: dict[str, dict[str, Any]] = field(default_factory=dict[str, dict[str, Any]])

    async def fetch_defaults(self, account_id: str) -> Mapping[str, Any] | None:
        await asyncio.sleep(0.01)
        return self.defaults.get(account_id)

    async def fetch_storefront(self, account_id: str, config_id: str | None) -> Mapping[str, Any] | None:
        await asyncio.sleep(0.01)
        return self.storefronts.get(account_id)

    async def fetch_contract_template(self, account_id: str) -> Mapping[str, Any] | None:
        await asyncio.sleep(0.01)
        return self.templates.get(account_id)

    async def fetch_processor_account(self, account_id: str) -> str | None:
        return None


# Payment side
@dataclass(slots=True)
class FakeIntents:
    async def create_intent(
        self, amount_minor_units: int, currency: str, metadata: Mapping[str, str]
    ) -> IntentHandle:
        await asyncio.sleep(0.01)
        intent_id = f"pi_{uuid.uuid4().hex[:16]}"
        print(f"  [INTENTS] {amount_minor_units / 100:.2f} {currency.upper()} → {intent_id}")
        return IntentHandle(client_secret=f"{intent_id}_secret_{uuid.uuid4().hex[:8]}")


@dataclass(slots=True)
class FakeProcessor:
    decline: bool = False

    async def confirm(
        self, client_secret: str, billing: BillingDetails, card_element: object
    ) -> ProcessorConfirmation:
        await asyncio.sleep(0.01)
        if self.decline:
            print(f"  [PROCESSOR] declined card for {billing.name}")
            raise ProcessorDeclined("Your card was declined", code="card_declined")
        intent_id = client_secret.partition("_secret_")[0]
        print(f"  [PROCESSOR] confirmed {intent_id} for {billing.name}")
        return ProcessorConfirmation(intent_id=intent_id)


@dataclass(slots=True)
class FakeOrders:
    down: bool = False
    committed: list[OrderPayload] = field(default_factory=list[OrderPayload])
    _folios: itertools.count[int] = field(default_factory=lambda: itertools.count(1001))

    async def commit_order(self, payload: OrderPayload) -> OrderReceipt:
        await asyncio.sleep(0.01)
        if self.down:
            print("  [ORDERS] unreachable")
            raise RemoteCallFailed("Could not reach the server (POST /orders)")
        self.committed.append(payload)
        reference = f"ORD-{next(self._folios)}"
        print(f"  [ORDERS] {reference}: {len(payload.details)} lines, total {payload.header.total:.2f}")
        return OrderReceipt(order_reference=reference)


@dataclass(slots=True)
class FakeNotifier:
    async def send_confirmation(self, order_reference: str) -> None:
        print(f"  [MAIL] confirmation for {order_reference}")


# Helpers
def banner(title: str) -> None:
    print(f"\n{'─' * 50}\n{title}\n{'─' * 50}")


def run(main: Callable[[], Coroutine[object, object, None]]) -> None:
    asyncio.run(main())
