"""
Wire — the registry's control surface over HTTP.

    from checkout_flow.registry import registry
    from checkout_flow.wire import create_app

    app = create_app(registry)

    POST /checkouts/open       {"id": "shop"}
    POST /checkouts/close      {"id": "shop"}
    POST /checkouts/quantity   {"index": 0, "quantity": 3}
    POST /checkouts/step       {"step": 2}
    GET  /checkouts/{key}

``id`` is optional everywhere; without it the most recently created
checkout is targeted.
"""

from checkout_flow.wire._codec import (
    ToDomain,
    FromDomain,
    HTTPRouteTrigger,
    RequestResponseCodec,
    Route,
)
from checkout_flow.wire._models import (
    ShowIn,
    OpenIn,
    CloseIn,
    QuantityIn,
    StepIn,
    FlowViewOut,
    CheckoutOut,
)
from checkout_flow.wire._fastapi import ROUTES, status_for, compile_route, create_app

__all__ = (
    "ToDomain",
    "FromDomain",
    "HTTPRouteTrigger",
    "RequestResponseCodec",
    "Route",
    "ShowIn",
    "OpenIn",
    "CloseIn",
    "QuantityIn",
    "StepIn",
    "FlowViewOut",
    "CheckoutOut",
    "create_app",
    "ROUTES",
    "status_for",
    "compile_route",
)
