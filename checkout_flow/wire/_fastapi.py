from typing import Annotated, Any

import fastapi
from kungfu import Error, Result

from checkout_flow.errors import UnknownInstance
from checkout_flow.registry import CheckoutRegistry, Command
from checkout_flow.wire._codec import HTTPRouteTrigger, RequestResponseCodec, Route
from checkout_flow.wire._models import (
    CheckoutOut,
    CloseIn,
    OpenIn,
    QuantityIn,
    ShowIn,
    StepIn,
)


ROUTES: tuple[Route, ...] = (
    (HTTPRouteTrigger("GET", "/checkouts/{key}"), RequestResponseCodec(ShowIn, CheckoutOut)),
    (HTTPRouteTrigger("POST", "/checkouts/open"), RequestResponseCodec(OpenIn, CheckoutOut)),
    (HTTPRouteTrigger("POST", "/checkouts/close"), RequestResponseCodec(CloseIn, CheckoutOut)),
    (HTTPRouteTrigger("POST", "/checkouts/quantity"), RequestResponseCodec(QuantityIn, CheckoutOut)),
    (HTTPRouteTrigger("POST", "/checkouts/step"), RequestResponseCodec(StepIn, CheckoutOut)),
)


def status_for(result: Result[Any, Any]) -> int:
    match result:
        case Error(UnknownInstance()):
            return 404
        case Error(_):
            return 409
        case _:
            return 200


def compile_route(registry: CheckoutRegistry, route: Route) -> tuple[str, str, Any]:
    trigger, codec = route

    def make_handler(req_cls: type[Any], resp_cls: type[Any]) -> Any:
        async def _route_handler(req: Any, response: fastapi.Response) -> Any:
            command: Command = req.to_domain()
            result = registry.dispatch(command)
            response.status_code = status_for(result)
            return resp_cls.from_domain(result)

        # Path parameters bind through the model's constructor.
        if trigger.method == "GET":
            req_cls = Annotated[req_cls, fastapi.Depends()]  # type: ignore

        _route_handler.__annotations__ = {
            "req": req_cls,
            "response": fastapi.Response,
            "return": resp_cls,
        }
        return _route_handler

    return trigger.method, trigger.path, make_handler(codec.request, codec.response)


def create_app(
    registry: CheckoutRegistry,
    routes: tuple[Route, ...] = ROUTES,
    lifespan: Any = None,
) -> fastapi.FastAPI:
    """
    FastAPI app exposing the host control surface of ``registry``.

        app = create_app(registry)
        # uvicorn module:app
    """
    app = fastapi.FastAPI(title="checkout-flow", lifespan=lifespan)
    for route in routes:
        method, path, handler = compile_route(registry, route)
        getattr(app, method.lower())(path)(handler)
    return app


__all__ = ("ROUTES", "status_for", "compile_route", "create_app")
