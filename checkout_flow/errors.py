"""
Error taxonomy.

Errors are values: they travel inside ``kungfu.Error`` and are never raised
across the core boundary.

    ValidationError   local, user-correctable, blocks a transition
    NavigationError   rejected step change (wrong state, payment in flight)
    UnknownInstance   no checkout matches the given key
    NetworkError      remote call failed before any side effect
    ProcessorError    payment not captured
    CommitError       payment captured, order NOT recorded
    ConfigError       account configuration missing at commit time

Only ``CommitError`` and ``ConfigError`` are terminal for a flow; both carry
the intent id of an already-confirmed payment.

Adapters talking to the outside world raise ``RemoteCallFailed`` or
``ProcessorDeclined``; the orchestrator lifts them into the values above.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


# ═══════════════════════════════════════════════════════════════════════════════
# Recoverable
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class ValidationError:
    message: str


@dataclass(frozen=True, slots=True)
class NavigationError:
    message: str


@dataclass(frozen=True, slots=True)
class UnknownInstance:
    message: str


@dataclass(frozen=True, slots=True)
class NetworkError:
    message: str
    detail: str = ""


@dataclass(frozen=True, slots=True)
class ProcessorError:
    message: str
    code: str | None = None


# ═══════════════════════════════════════════════════════════════════════════════
# Terminal (paid, not recorded)
# ═══════════════════════════════════════════════════════════════════════════════


class CommitFailureKind(Enum):
    NETWORK = auto()
    REJECTED = auto()
    CONFIG = auto()


@dataclass(frozen=True, slots=True)
class CommitError:
    reason: str
    intent_id: str
    raw_detail: str = ""
    kind: CommitFailureKind = CommitFailureKind.NETWORK


@dataclass(frozen=True, slots=True)
class ConfigError:
    reason: str
    intent_id: str | None = None
    raw_detail: str = ""
    kind: CommitFailureKind = CommitFailureKind.CONFIG


type CommitFailure = CommitError | ConfigError
type RecoverableError = ValidationError | NavigationError | UnknownInstance | NetworkError | ProcessorError
type CheckoutError = RecoverableError | CommitFailure


def is_terminal(error: object) -> bool:
    """True for failures that end the forward flow (money captured)."""
    return isinstance(error, (CommitError, ConfigError))


def user_message(error: CheckoutError) -> str:
    match error:
        case ValidationError(message) | NavigationError(message) | UnknownInstance(message):
            return message
        case NetworkError(message, _) | ProcessorError(message, _):
            return message
        case CommitError(reason=reason) | ConfigError(reason=reason):
            return reason


# ═══════════════════════════════════════════════════════════════════════════════
# Adapter exceptions
# ═══════════════════════════════════════════════════════════════════════════════


class RemoteCallFailed(Exception):
    """A backend call failed: transport error or ``success: false`` envelope."""

    def __init__(self, message: str, detail: str = "", status: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail
        self.status = status


class ProcessorDeclined(Exception):
    """The payment processor refused to confirm the intent."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code


__all__ = (
    "ValidationError",
    "NavigationError",
    "UnknownInstance",
    "NetworkError",
    "ProcessorError",
    "CommitFailureKind",
    "CommitError",
    "ConfigError",
    "CommitFailure",
    "RecoverableError",
    "CheckoutError",
    "is_terminal",
    "user_message",
    "RemoteCallFailed",
    "ProcessorDeclined",
)
