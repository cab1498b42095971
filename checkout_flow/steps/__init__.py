"""
Steps — identifiers and topology of the checkout.

    from checkout_flow import steps as St

    St.display_label(St.Step.PAYMENT, signature_required=False)   # "3"
    St.after_customer_info(signature_required=True)               # Step.SIGNATURE
"""

from __future__ import annotations

from checkout_flow.steps._types import Step, TERMINAL_STEPS, StepStatus, StepBadge
from checkout_flow.steps._topology import (
    TITLES,
    visible_steps,
    is_reachable,
    display_label,
    stepper,
    after_customer_info,
    back_target,
    can_go_back_to,
)

__all__ = (
    "Step",
    "TERMINAL_STEPS",
    "StepStatus",
    "StepBadge",
    "TITLES",
    "visible_steps",
    "is_reachable",
    "display_label",
    "stepper",
    "after_customer_info",
    "back_target",
    "can_go_back_to",
)
