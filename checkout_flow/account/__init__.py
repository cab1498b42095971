"""
Account — configuration a checkout needs before it can open.

    from checkout_flow import account as A

    loader = A.AccountConfigLoader(source)
    match await loader.load("acme"):
        case Ok(config): config.signature_required
        case Error(e): e.reason
"""

from __future__ import annotations

from checkout_flow.account._types import (
    CatalogProduct,
    KeyedRef,
    AccountDefaults,
    ContractTemplate,
    AccountConfig,
)
from checkout_flow.account._source import ConfigSource
from checkout_flow.account._cache import AccountKey, LocalTier, ConfigCache, Lookup, cache
from checkout_flow.account._loader import AccountConfigLoader

__all__ = (
    "CatalogProduct",
    "KeyedRef",
    "AccountDefaults",
    "ContractTemplate",
    "AccountConfig",
    "ConfigSource",
    "AccountKey",
    "LocalTier",
    "ConfigCache",
    "Lookup",
    "cache",
    "AccountConfigLoader",
)
