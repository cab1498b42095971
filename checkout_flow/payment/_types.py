"""
Payment types.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum, auto

from kungfu import Result

from checkout_flow.account import AccountConfig
from checkout_flow.cart import Cart, CustomerInfo
from checkout_flow.errors import CheckoutError
from checkout_flow.signature import SignatureImage


# ═══════════════════════════════════════════════════════════════════════════════
# PaymentAttempt
# ═══════════════════════════════════════════════════════════════════════════════


class ProcessorStatus(Enum):
    CREATED = auto()
    CONFIRMED = auto()
    FAILED = auto()


@dataclass(frozen=True, slots=True)
class PaymentAttempt:
    """
    One intent at the processor. Created → Confirmed | Failed, once.

    A retry after failure is a new attempt with a new intent.
    """

    client_secret: str
    amount_minor_units: int
    currency: str
    intent_id: str | None = None
    processor_status: ProcessorStatus = ProcessorStatus.CREATED

    def confirmed(self, intent_id: str) -> PaymentAttempt:
        self._ensure_open()
        return replace(self, intent_id=intent_id, processor_status=ProcessorStatus.CONFIRMED)

    def failed(self) -> PaymentAttempt:
        self._ensure_open()
        return replace(self, processor_status=ProcessorStatus.FAILED)

    def _ensure_open(self) -> None:
        if self.processor_status is not ProcessorStatus.CREATED:
            raise ValueError(f"payment attempt already {self.processor_status.name.lower()}")


def intent_id_from_secret(client_secret: str) -> str | None:
    """``pi_123_secret_abc`` → ``pi_123``."""
    intent_id, sep, _ = client_secret.partition("_secret_")
    return intent_id if sep and intent_id else None


def transaction_reference(intent_id: str) -> str:
    """Display reference: intent id without its type prefix, upper-cased."""
    _, sep, rest = intent_id.partition("_")
    return (rest if sep else intent_id).upper()


# ═══════════════════════════════════════════════════════════════════════════════
# Service payloads
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class BillingDetails:
    name: str
    email: str
    address_line: str
    city: str
    postal_code: str
    phone: str | None = None

    @classmethod
    def from_customer(cls, info: CustomerInfo) -> BillingDetails:
        return cls(
            name=info.full_name,
            email=info.email,
            address_line=info.address_line,
            city=info.city,
            postal_code=info.postal_code,
            phone=info.phone,
        )


@dataclass(frozen=True, slots=True)
class IntentHandle:
    client_secret: str
    intent_id: str | None = None


@dataclass(frozen=True, slots=True)
class ProcessorConfirmation:
    intent_id: str
    status: str = "succeeded"


@dataclass(frozen=True, slots=True)
class OrderReceipt:
    order_reference: str


# ═══════════════════════════════════════════════════════════════════════════════
# Orchestrator input / output
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class CheckoutContext:
    """Snapshot of a flow taken when the user presses pay."""

    account: AccountConfig
    cart: Cart
    customer: CustomerInfo
    signature: SignatureImage | None = None
    currency: str = "mxn"
    nominal_rate_percent: float = 16.0
    instance_id: str = ""


@dataclass(frozen=True, slots=True)
class Committed:
    order_reference: str
    intent_id: str
    transaction_ref: str


@dataclass(frozen=True, slots=True)
class PaymentOutcome:
    attempt: PaymentAttempt | None
    result: Result[Committed, CheckoutError]


__all__ = (
    "ProcessorStatus",
    "PaymentAttempt",
    "intent_id_from_secret",
    "transaction_reference",
    "BillingDetails",
    "IntentHandle",
    "ProcessorConfirmation",
    "OrderReceipt",
    "CheckoutContext",
    "Committed",
    "PaymentOutcome",
)
