"""
Step identifiers.

Internal ids are fixed: Payment is always 4 and Confirmation always 5,
whether or not the Signature step exists. What the user sees is derived
separately by display_label().
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum


class Step(IntEnum):
    CART = 1
    CUSTOMER_INFO = 2
    SIGNATURE = 3
    PAYMENT = 4
    CONFIRMATION = 5
    PAYMENT_SUCCEEDED_ORDER_FAILED = 99


TERMINAL_STEPS = frozenset({Step.CONFIRMATION, Step.PAYMENT_SUCCEEDED_ORDER_FAILED})


class StepStatus(Enum):
    PENDING = "pending"
    ACTIVE = "active"
    COMPLETED = "completed"


@dataclass(frozen=True, slots=True)
class StepBadge:
    """One entry of the stepper header."""

    step: Step
    label: str
    title: str
    status: StepStatus


__all__ = ("Step", "TERMINAL_STEPS", "StepStatus", "StepBadge")
