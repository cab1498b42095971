"""
Control surface — the registry over HTTP.

    uvicorn examples.control_server:app --reload

then POST {"id": "shop"} to /checkouts/open and look at /docs.
"""

from contextlib import asynccontextmanager

import fastapi

from checkout_flow import Settings, configure_logging
from checkout_flow.account import AccountConfigLoader
from checkout_flow.payment import PaymentOrchestrator
from checkout_flow.registry import CheckoutOptions, CheckoutServices, registry
from checkout_flow.wire import create_app
from examples._infra import FakeIntents, FakeNotifier, FakeOrders, FakeProcessor, MemoryConfigSource

settings = Settings.from_env()
configure_logging(settings.log_level, json=settings.log_json)

services = CheckoutServices(
    loader=AccountConfigLoader(MemoryConfigSource(), max_size=settings.config_cache_size),
    orchestrator=PaymentOrchestrator(FakeIntents(), FakeProcessor(), FakeOrders(), FakeNotifier()),
    settings=settings,
)


@asynccontextmanager
async def lifespan(_: fastapi.FastAPI):
    await registry.init(CheckoutOptions("acme", container_id="shop"), services)
    yield
    registry.clear()


app = create_app(registry, lifespan=lifespan)
