"""
connect() — CheckoutServices backed by the HTTP adapters.

    services, backends = connect(settings, processor=host_processor)
    try:
        await registry.init(CheckoutOptions("acme"), services)
        ...
    finally:
        await backends.aclose()
"""

from __future__ import annotations

from dataclasses import dataclass

from checkout_flow.account import AccountConfigLoader
from checkout_flow.config import Settings
from checkout_flow.payment import PaymentOrchestrator, PaymentProcessorClient
from checkout_flow.registry import CheckoutServices
from checkout_flow.remote._client import BackendClient
from checkout_flow.remote._config import HttpConfigSource
from checkout_flow.remote._services import (
    HttpIntentService,
    HttpNotificationService,
    HttpOrderService,
)


@dataclass(frozen=True, slots=True)
class HttpBackends:
    api: BackendClient
    config_api: BackendClient

    async def aclose(self) -> None:
        await self.api.aclose()
        await self.config_api.aclose()


def connect(
    settings: Settings,
    processor: PaymentProcessorClient,
    notify: bool = True,
) -> tuple[CheckoutServices, HttpBackends]:
    backends = HttpBackends(
        api=BackendClient(settings.api_url, timeout=settings.http_timeout_seconds),
        config_api=BackendClient(settings.config_api_url, timeout=settings.http_timeout_seconds),
    )
    orchestrator = PaymentOrchestrator(
        intents=HttpIntentService(backends.api),
        processor=processor,
        orders=HttpOrderService(backends.config_api),
        notifier=HttpNotificationService(backends.api) if notify else None,
    )
    loader = AccountConfigLoader(
        HttpConfigSource(backends.config_api),
        max_size=settings.config_cache_size,
    )
    return CheckoutServices(loader=loader, orchestrator=orchestrator, settings=settings), backends


__all__ = ("HttpBackends", "connect")
