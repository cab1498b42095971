"""
Core types for checkout_flow.

Re-exports from kungfu + checkout-specific aliases.
"""

from __future__ import annotations

from collections.abc import Callable

# Re-export from kungfu
from kungfu import Result, Ok, Error, LazyCoroResult

# ═══════════════════════════════════════════════════════════════════════════════
# Lazy Computation Aliases
# ═══════════════════════════════════════════════════════════════════════════════

type Lazy[T, E] = LazyCoroResult[T, E]
"""Lazy async call that may fail; nothing runs until awaited."""

# ═══════════════════════════════════════════════════════════════════════════════
# Identity
# ═══════════════════════════════════════════════════════════════════════════════

type InstanceKey = str
"""Container id, config id or generated instance id."""

# ═══════════════════════════════════════════════════════════════════════════════
# Render hook
# ═══════════════════════════════════════════════════════════════════════════════

type RenderHook[V] = Callable[[V], None]
"""Called with a fresh view after every state change."""

# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = (
    # Re-exports from kungfu
    "Result",
    "Ok",
    "Error",
    "LazyCoroResult",
    # Type aliases
    "Lazy",
    "InstanceKey",
    "RenderHook",
)
