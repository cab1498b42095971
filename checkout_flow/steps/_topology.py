"""
Step topology — pure functions of (step, signature_required).

    with signature:     1 → 2 → 3 → 4 → 5
    without signature:  1 → 2 → 4 → 5      (displayed as 1 2 3 4)

99 (paid, order not recorded) hangs off Payment and is never shown in the
stepper; the stepper treats it as "stopped at Payment".
"""

from __future__ import annotations

from checkout_flow.steps._types import Step, StepBadge, StepStatus, TERMINAL_STEPS

TITLES: dict[Step, str] = {
    Step.CART: "Cart",
    Step.CUSTOMER_INFO: "Info",
    Step.SIGNATURE: "Signature",
    Step.PAYMENT: "Payment",
    Step.CONFIRMATION: "Confirm",
}


def visible_steps(signature_required: bool) -> tuple[Step, ...]:
    if signature_required:
        return (Step.CART, Step.CUSTOMER_INFO, Step.SIGNATURE, Step.PAYMENT, Step.CONFIRMATION)
    return (Step.CART, Step.CUSTOMER_INFO, Step.PAYMENT, Step.CONFIRMATION)


def is_reachable(step: Step, signature_required: bool) -> bool:
    if step is Step.PAYMENT_SUCCEEDED_ORDER_FAILED:
        return True
    return step in visible_steps(signature_required)


def display_label(step: Step, signature_required: bool) -> str:
    """
    Number shown to the user for an internal step.

    Raises ValueError for the Signature step of a flow without signature.
    """
    if step is Step.PAYMENT_SUCCEEDED_ORDER_FAILED:
        step = Step.PAYMENT
    steps = visible_steps(signature_required)
    if step not in steps:
        raise ValueError(f"{step.name} is not part of this checkout")
    return str(steps.index(step) + 1)


def stepper(current: Step, signature_required: bool) -> tuple[StepBadge, ...]:
    effective = Step.PAYMENT if current is Step.PAYMENT_SUCCEEDED_ORDER_FAILED else current
    badges: list[StepBadge] = []
    for number, step in enumerate(visible_steps(signature_required), start=1):
        if effective > step:
            status = StepStatus.COMPLETED
        elif effective == step:
            status = StepStatus.ACTIVE
        else:
            status = StepStatus.PENDING
        badges.append(StepBadge(step, str(number), TITLES[step], status))
    return tuple(badges)


# ═══════════════════════════════════════════════════════════════════════════════
# Transitions
# ═══════════════════════════════════════════════════════════════════════════════


def after_customer_info(signature_required: bool) -> Step:
    return Step.SIGNATURE if signature_required else Step.PAYMENT


def back_target(current: Step, signature_required: bool) -> Step | None:
    """Where "back" leads from ``current``; None when back is not offered."""
    match current:
        case Step.CUSTOMER_INFO:
            return Step.CART
        case Step.SIGNATURE:
            return Step.CUSTOMER_INFO
        case Step.PAYMENT:
            return Step.SIGNATURE if signature_required else Step.CUSTOMER_INFO
        case _:
            return None


def can_go_back_to(current: Step, target: Step, signature_required: bool) -> bool:
    """
    Backward jump from the host control surface.

    Only to an earlier, reachable step; never out of a terminal step and
    never from Payment straight to the Cart.
    """
    if current in TERMINAL_STEPS:
        return False
    if not is_reachable(target, signature_required) or target in TERMINAL_STEPS:
        return False
    if target >= current:
        return False
    if target is Step.CART and current >= Step.PAYMENT:
        return False
    return True


__all__ = (
    "TITLES",
    "visible_steps",
    "is_reachable",
    "display_label",
    "stepper",
    "after_customer_info",
    "back_target",
    "can_go_back_to",
)
