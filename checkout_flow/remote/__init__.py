"""
Remote — httpx adapters for the backend services.

    from checkout_flow import remote as R

    api = R.BackendClient(settings.api_url, timeout=settings.http_timeout_seconds)
    intents = R.HttpIntentService(api)
    orders = R.HttpOrderService(api)

The payment processor client is not here: card confirmation happens where
the card element lives, and the host passes its own client in.
"""

from __future__ import annotations

from checkout_flow.remote._client import BackendClient
from checkout_flow.remote._services import (
    HttpIntentService,
    HttpOrderService,
    HttpNotificationService,
)
from checkout_flow.remote._config import HttpConfigSource
from checkout_flow.remote._bootstrap import HttpBackends, connect

__all__ = (
    "BackendClient",
    "HttpIntentService",
    "HttpOrderService",
    "HttpNotificationService",
    "HttpConfigSource",
    "HttpBackends",
    "connect",
)
