"""
ConfigSource — where account documents come from.

Each fetch returns the raw document (a mapping) or None when the account
has no such document. Transport failures are raised; the loader lifts them.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol


class ConfigSource(Protocol):
    async def fetch_defaults(self, account_id: str) -> Mapping[str, Any] | None: ...

    async def fetch_storefront(
        self, account_id: str, config_id: str | None
    ) -> Mapping[str, Any] | None: ...

    async def fetch_contract_template(self, account_id: str) -> Mapping[str, Any] | None: ...

    async def fetch_processor_account(self, account_id: str) -> str | None: ...


__all__ = ("ConfigSource",)
