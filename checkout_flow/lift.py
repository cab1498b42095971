"""
Lift — turning raising adapter calls into checkout results.

    confirmation = await L.processor(lambda: client.confirm(secret, billing, card))
    match confirmation:
        case Ok(c): ...
        case Error(ProcessorError(message, code)): ...

Built on combinators.lift.catching_async; nothing runs until awaited.
"""

from __future__ import annotations

from collections.abc import Callable, Awaitable

from kungfu import LazyCoroResult, Result

from combinators.lift import catching_async

from checkout_flow._types import Lazy
from checkout_flow.errors import (
    NetworkError,
    ProcessorError,
    ProcessorDeclined,
    RemoteCallFailed,
)


def from_result[T, E](result: Result[T, E]) -> Lazy[T, E]:
    """Lift an already computed Result."""
    async def _run() -> Result[T, E]:
        return result
    return LazyCoroResult(_run)


# ═══════════════════════════════════════════════════════════════════════════════
# Exception → error value
# ═══════════════════════════════════════════════════════════════════════════════

def as_network_error(exc: Exception) -> NetworkError:
    if isinstance(exc, RemoteCallFailed):
        return NetworkError(exc.message, exc.detail)
    return NetworkError(str(exc) or type(exc).__name__, repr(exc))


def as_processor_error(exc: Exception) -> ProcessorError:
    if isinstance(exc, ProcessorDeclined):
        return ProcessorError(exc.message, exc.code)
    return ProcessorError(str(exc) or "Payment could not be confirmed")


# ═══════════════════════════════════════════════════════════════════════════════
# Call wrappers
# ═══════════════════════════════════════════════════════════════════════════════

def remote[T](call: Callable[[], Awaitable[T]]) -> Lazy[T, NetworkError]:
    """Backend call; any exception becomes a NetworkError."""
    return catching_async(call, on_error=as_network_error)


def processor[T](call: Callable[[], Awaitable[T]]) -> Lazy[T, ProcessorError]:
    """Processor call; any exception becomes a ProcessorError."""
    return catching_async(call, on_error=as_processor_error)


__all__ = (
    "catching_async",
    "from_result",
    "as_network_error",
    "as_processor_error",
    "remote",
    "processor",
)
