import json
from collections.abc import Callable
from datetime import datetime

import httpx
import pytest
from kungfu import Error, Ok

from checkout_flow.account import AccountConfig
from checkout_flow.cart import Cart, CartLine, CustomerInfo
from checkout_flow.config import Settings
from checkout_flow.errors import RemoteCallFailed
from checkout_flow.payment import CheckoutContext, build_order_payload
from checkout_flow.remote import (
    BackendClient,
    HttpConfigSource,
    HttpIntentService,
    HttpNotificationService,
    HttpOrderService,
    connect,
)

from tests.conftest import FakeProcessor

type Handler = Callable[[httpx.Request], httpx.Response]


def client(handler: Handler) -> BackendClient:
    return BackendClient("https://api.test/v1", transport=httpx.MockTransport(handler))


def ok(data: object) -> httpx.Response:
    return httpx.Response(200, json={"success": True, "data": data})


# ═══════════════════════════════════════════════════════════════════════════════
# Envelope
# ═══════════════════════════════════════════════════════════════════════════════


async def test_success_returns_data() -> None:
    async with client(lambda request: ok({"a": 1})) as api:
        assert await api.get("/thing") == {"a": 1}


@pytest.mark.parametrize(
    ("response", "message", "status"),
    [
        (httpx.Response(200, json={"success": False, "error": "Out of stock"}), "Out of stock", 200),
        (httpx.Response(200, json={"success": False, "message": "Nope"}), "Nope", 200),
        (httpx.Response(200, json={"data": {}}), "Request rejected by the server", 200),
        (httpx.Response(200, text="<html>"), "Malformed server response", 200),
        (httpx.Response(422, json={"success": False, "error": "Bad sku"}), "Bad sku", 422),
        (httpx.Response(502, text="gateway"), "Server responded with HTTP 502", 502),
    ],
)
async def test_failures_raise_remote_call_failed(response: httpx.Response, message: str, status: int) -> None:
    async with client(lambda request: response) as api:
        with pytest.raises(RemoteCallFailed) as info:
            await api.post("/orders", json={})
    assert info.value.message == message
    assert info.value.status == status


async def test_transport_error_has_no_status() -> None:
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with client(refuse) as api:
        with pytest.raises(RemoteCallFailed) as info:
            await api.get("/thing")
    assert info.value.status is None
    assert info.value.message == "Could not reach the server (GET /thing)"


# ═══════════════════════════════════════════════════════════════════════════════
# Payment adapters
# ═══════════════════════════════════════════════════════════════════════════════


async def test_intent_service_posts_amount_and_metadata() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return ok({"client_secret": "pi_9_secret_q"})

    async with client(handler) as api:
        handle = await HttpIntentService(api).create_intent(20000, "mxn", {"account_id": "acme"})

    assert handle.client_secret == "pi_9_secret_q"
    assert handle.intent_id is None
    assert seen[0].url.path == "/v1/payments/intents"
    assert json.loads(seen[0].content) == {"amount": 20000, "currency": "mxn", "metadata": {"account_id": "acme"}}


async def test_intent_service_requires_client_secret() -> None:
    async with client(lambda request: ok({})) as api:
        with pytest.raises(RemoteCallFailed):
            await HttpIntentService(api).create_intent(100, "mxn", {})


async def test_order_service_posts_payload(account: AccountConfig, customer: CustomerInfo) -> None:
    ctx = CheckoutContext(
        account=account,
        cart=Cart([CartLine(product_id="p-1", name="Mat", unit_price=100.0, tax_rate_percent=16.0)]),
        customer=customer,
    )
    match build_order_payload(ctx, "pi_1", "succeeded", datetime(2026, 1, 2, 3, 4, 5)):
        case Ok(payload):
            pass
        case Error(e):
            pytest.fail(e.reason)

    bodies: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content))
        return ok({"order_reference": "ORD-77"})

    async with client(handler) as api:
        receipt = await HttpOrderService(api).commit_order(payload)

    assert receipt.order_reference == "ORD-77"
    assert bodies[0]["header"]["payment_intent_id"] == "pi_1"
    assert bodies[0]["payments"][0]["paid_at"] == "2026-01-02T03:04:05"


async def test_order_service_without_reference_is_rejected(account: AccountConfig, customer: CustomerInfo) -> None:
    ctx = CheckoutContext(account=account, cart=Cart([]), customer=customer)
    payload = build_order_payload(ctx, "pi_1", "succeeded", datetime(2026, 1, 1)).value

    async with client(lambda request: ok({"id": 5})) as api:
        with pytest.raises(RemoteCallFailed) as info:
            await HttpOrderService(api).commit_order(payload)
    assert info.value.status == 200


async def test_notification_service_posts_to_order() -> None:
    paths: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        paths.append(request.url.path)
        return ok(None)

    async with client(handler) as api:
        await HttpNotificationService(api).send_confirmation("ORD-1")
    assert paths == ["/v1/orders/ORD-1/confirmation"]


# ═══════════════════════════════════════════════════════════════════════════════
# Config source
# ═══════════════════════════════════════════════════════════════════════════════


def config_backend(request: httpx.Request) -> httpx.Response:
    match request.url.path:
        case "/v1/accounts/acme/defaults":
            return ok([{"warehouse": {"key": "WH"}}])
        case "/v1/accounts/acme/storefront":
            assert request.url.params.get("config_id") == "s-1"
            return ok({"products": []})
        case "/v1/accounts/acme/processor-account":
            return ok({"processor_account_id": "acct_1"})
        case _:
            return httpx.Response(404, json={"success": False, "error": "Not found"})


async def test_config_source_documents() -> None:
    async with client(config_backend) as api:
        source = HttpConfigSource(api)
        assert await source.fetch_defaults("acme") == {"warehouse": {"key": "WH"}}
        assert await source.fetch_storefront("acme", "s-1") == {"products": []}
        assert await source.fetch_contract_template("acme") is None
        assert await source.fetch_processor_account("acme") == "acct_1"


async def test_config_source_propagates_server_errors() -> None:
    async with client(lambda request: httpx.Response(500, text="boom")) as api:
        with pytest.raises(RemoteCallFailed):
            await HttpConfigSource(api).fetch_defaults("acme")


async def test_connect_wires_http_adapters() -> None:
    services, backends = connect(Settings(config_cache_size=5), processor=FakeProcessor(), notify=False)
    try:
        assert services.settings.config_cache_size == 5
        assert isinstance(backends.api, BackendClient)
    finally:
        await backends.aclose()
