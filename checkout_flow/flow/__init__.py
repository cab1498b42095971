"""
Flow — one checkout instance, its view and the machine that drives it.

    from checkout_flow import flow as F

    instance = F.FlowInstance.create(account_config, container_id="shop")
    machine = F.StepMachine(instance, orchestrator, render=draw)
    machine.open()
"""

from __future__ import annotations

from checkout_flow.flow._instance import new_instance_id, FlowInstance
from checkout_flow.flow._view import (
    LineView,
    ConfirmationCodes,
    FailureView,
    FlowView,
    confirmation_codes,
    build_view,
)
from checkout_flow.flow._machine import PAYMENT_IN_PROGRESS, StepMachine

__all__ = (
    "new_instance_id",
    "FlowInstance",
    "LineView",
    "ConfirmationCodes",
    "FailureView",
    "FlowView",
    "confirmation_codes",
    "build_view",
    "PAYMENT_IN_PROGRESS",
    "StepMachine",
)
