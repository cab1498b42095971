"""
checkout_flow — embeddable multi-step checkout core.

    from checkout_flow import cart as C        # Cart lines, customer info
    from checkout_flow import pricing as P     # Tax derivation, money formatting
    from checkout_flow import steps as St      # Step ids, topology, labels
    from checkout_flow import flow as F        # FlowInstance + StepMachine
    from checkout_flow import payment as Pay   # Intent → confirm → commit
    from checkout_flow.registry import registry
"""

from checkout_flow import cart
from checkout_flow import pricing
from checkout_flow import signature
from checkout_flow import steps
from checkout_flow import account
from checkout_flow import payment
from checkout_flow import flow
from checkout_flow import lift
from checkout_flow._types import (
    Lazy,
    InstanceKey,
    RenderHook,
)
from checkout_flow._log import configure_logging
from checkout_flow.config import Settings, SettingsError
from checkout_flow.registry import (
    CheckoutOptions,
    CheckoutRegistry,
    CheckoutServices,
    registry,
)

__version__ = "0.1.0"

__all__ = (
    "cart",
    "pricing",
    "signature",
    "steps",
    "account",
    "payment",
    "flow",
    "lift",
    "Lazy",
    "InstanceKey",
    "RenderHook",
    "configure_logging",
    "Settings",
    "SettingsError",
    "CheckoutOptions",
    "CheckoutRegistry",
    "CheckoutServices",
    "registry",
)
