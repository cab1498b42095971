import asyncio
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

import pytest

from checkout_flow.account import (
    AccountConfig,
    AccountDefaults,
    CatalogProduct,
    ContractTemplate,
    KeyedRef,
)
from checkout_flow.cart import CustomerInfo
from checkout_flow.errors import ProcessorDeclined
from checkout_flow.flow import FlowInstance, FlowView, StepMachine
from checkout_flow.payment import (
    BillingDetails,
    IntentHandle,
    OrderPayload,
    OrderReceipt,
    PaymentOrchestrator,
    ProcessorConfirmation,
)

FIXED_NOW = datetime(2026, 3, 14, 15, 9, 26)

DEFAULTS = AccountDefaults(
    warehouse=KeyedRef(key="WH-01", name="Main warehouse"),
    branch=KeyedRef(key="BR-01", name="Downtown"),
    customer_type=KeyedRef(key="RETAIL", name="Retail"),
)


# ═══════════════════════════════════════════════════════════════════════════════
# Fakes for the external collaborators
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass
class FakeIntents:
    fail: Exception | None = None
    calls: list[tuple[int, str, dict[str, str]]] = field(default_factory=list)

    async def create_intent(
        self, amount_minor_units: int, currency: str, metadata: Mapping[str, str]
    ) -> IntentHandle:
        self.calls.append((amount_minor_units, currency, dict(metadata)))
        if self.fail is not None:
            raise self.fail
        return IntentHandle(client_secret=f"pi_test{len(self.calls)}_secret_xyz")


@dataclass
class FakeProcessor:
    decline: bool = False
    gate: asyncio.Event | None = None
    secrets: list[str] = field(default_factory=list)
    billing: list[BillingDetails] = field(default_factory=list)

    async def confirm(
        self, client_secret: str, billing: BillingDetails, card_element: object
    ) -> ProcessorConfirmation:
        self.secrets.append(client_secret)
        self.billing.append(billing)
        if self.gate is not None:
            await self.gate.wait()
        if self.decline:
            raise ProcessorDeclined("Your card was declined", code="card_declined")
        return ProcessorConfirmation(intent_id=client_secret.partition("_secret_")[0])


@dataclass
class FakeOrders:
    fail: Exception | None = None
    payloads: list[OrderPayload] = field(default_factory=list)

    async def commit_order(self, payload: OrderPayload) -> OrderReceipt:
        self.payloads.append(payload)
        if self.fail is not None:
            raise self.fail
        return OrderReceipt(order_reference=f"ORD-{1000 + len(self.payloads)}")


@dataclass
class FakeNotifier:
    fail: bool = False
    sent: list[str] = field(default_factory=list)

    async def send_confirmation(self, order_reference: str) -> None:
        self.sent.append(order_reference)
        if self.fail:
            raise RuntimeError("mail server down")


@dataclass
class MemorySource:
    defaults: dict[str, dict[str, Any]] = field(default_factory=dict)
    storefronts: dict[str, dict[str, Any]] = field(default_factory=dict)
    templates: dict[str, dict[str, Any]] = field(default_factory=dict)
    fail_on: str | None = None
    calls: int = 0

    def _check(self, document: str) -> None:
        if self.fail_on == document:
            raise ConnectionError(f"{document} backend unreachable")

    async def fetch_defaults(self, account_id: str) -> Mapping[str, Any] | None:
        self.calls += 1
        self._check("defaults")
        return self.defaults.get(account_id)

    async def fetch_storefront(self, account_id: str, config_id: str | None) -> Mapping[str, Any] | None:
        self._check("storefront")
        return self.storefronts.get(account_id)

    async def fetch_contract_template(self, account_id: str) -> Mapping[str, Any] | None:
        self._check("template")
        return self.templates.get(account_id)

    async def fetch_processor_account(self, account_id: str) -> str | None:
        self._check("processor")
        return None


# ═══════════════════════════════════════════════════════════════════════════════
# Fixtures
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.fixture
def catalog() -> tuple[CatalogProduct, ...]:
    return (CatalogProduct(product_id="p-1", name="Yoga mat", unit_price=100.0, tax_rate_percent=16.0),)


@pytest.fixture
def account(catalog: tuple[CatalogProduct, ...]) -> AccountConfig:
    return AccountConfig(account_id="acme", catalog=catalog, defaults=DEFAULTS)


@pytest.fixture
def signed_account(account: AccountConfig) -> AccountConfig:
    return account.model_copy(update={"contract": ContractTemplate(name="Rental", requires_signature=True)})


@pytest.fixture
def customer() -> CustomerInfo:
    return CustomerInfo.capture(
        email="ana@example.com",
        full_name="Ana López",
        address_line="Av. Reforma 100",
        city="CDMX",
        postal_code="06600",
        phone="5555555555",
    )


@pytest.fixture
def intents() -> FakeIntents:
    return FakeIntents()


@pytest.fixture
def processor() -> FakeProcessor:
    return FakeProcessor()


@pytest.fixture
def orders() -> FakeOrders:
    return FakeOrders()


@pytest.fixture
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture
def orchestrator(
    intents: FakeIntents,
    processor: FakeProcessor,
    orders: FakeOrders,
    notifier: FakeNotifier,
) -> PaymentOrchestrator:
    return PaymentOrchestrator(intents, processor, orders, notifier, clock=lambda: FIXED_NOW)


@pytest.fixture
def views() -> list[FlowView]:
    return []


@pytest.fixture
def make_machine(
    orchestrator: PaymentOrchestrator, views: list[FlowView]
) -> Callable[..., StepMachine]:
    def make(account: AccountConfig, container_id: str | None = None) -> StepMachine:
        instance = FlowInstance.create(account, container_id=container_id)
        return StepMachine(instance, orchestrator, render=views.append)

    return make


def draw_signature(machine: StepMachine) -> None:
    pad = machine.signature_pad
    pad.pen_down(10, 10)
    pad.pen_move(60, 30)
    pad.pen_move(120, 20)
    pad.pen_up()
