"""
Config cache — read-through, in-memory LRU.

    configs = (
        cache(fetch_config)
        .tier(LocalTier[AccountConfig](max_size=100))
        .build()
    )
    result = await configs.get(AccountKey("acme", None))

Only successful loads are stored; a failed fetch is retried on the next get.
"""

from __future__ import annotations

from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

import structlog
from kungfu import LazyCoroResult, Result, Ok, Error

log = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class AccountKey:
    account_id: str
    config_id: str | None = None

    def __str__(self) -> str:
        return f"account:{self.account_id}:{self.config_id or '-'}"


# ═══════════════════════════════════════════════════════════════════════════════
# Tiers
# ═══════════════════════════════════════════════════════════════════════════════


class Tier[T](Protocol):
    @property
    def name(self) -> str: ...

    async def get(self, key: str) -> T | None: ...

    async def set(self, key: str, value: T) -> None: ...

    async def delete(self, key: str) -> bool: ...


class LocalTier[T]:
    """
    In-process LRU tier.

    Example:
        tier = LocalTier[AccountConfig](max_size=100)
    """

    def __init__(self, max_size: int = 100) -> None:
        self._max_size = max_size
        self._entries: OrderedDict[str, T] = OrderedDict()

    @property
    def name(self) -> str:
        return "local"

    def __len__(self) -> int:
        return len(self._entries)

    async def get(self, key: str) -> T | None:
        if key not in self._entries:
            return None
        self._entries.move_to_end(key)
        return self._entries[key]

    async def set(self, key: str, value: T) -> None:
        self._entries[key] = value
        self._entries.move_to_end(key)
        while len(self._entries) > self._max_size:
            evicted, _ = self._entries.popitem(last=False)
            log.debug("config_cache_evicted", key=evicted)

    async def delete(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None


@dataclass(frozen=True, slots=True)
class Lookup[T]:
    value: T
    hit: bool
    tier: str | None


# ═══════════════════════════════════════════════════════════════════════════════
# Builder / executor
# ═══════════════════════════════════════════════════════════════════════════════


type Fetch[T, E] = Callable[[AccountKey], LazyCoroResult[T, E]]


@dataclass(frozen=True, slots=True)
class CacheBuilder[T, E]:
    _fetch: Fetch[T, E]
    _tiers: tuple[Tier[T], ...] = ()

    def tier(self, t: Tier[T]) -> CacheBuilder[T, E]:
        return CacheBuilder(self._fetch, (*self._tiers, t))

    def build(self) -> ConfigCache[T, E]:
        return ConfigCache(self._fetch, self._tiers)


@dataclass(frozen=True, slots=True)
class ConfigCache[T, E]:
    fetch: Fetch[T, E]
    tiers: tuple[Tier[T], ...]

    def get(self, key: AccountKey) -> LazyCoroResult[Lookup[T], E]:
        """Tiers in order, then fetch; a fetched value populates every tier."""
        cache_key = str(key)
        tiers = self.tiers
        fetch = self.fetch

        async def execute() -> Result[Lookup[T], E]:
            for t in tiers:
                value = await t.get(cache_key)
                if value is not None:
                    log.debug("config_cache_hit", key=cache_key, tier=t.name)
                    return Ok(Lookup(value, hit=True, tier=t.name))

            match await fetch(key):
                case Ok(value):
                    for t in tiers:
                        await t.set(cache_key, value)
                    return Ok(Lookup(value, hit=False, tier=None))
                case Error(e):
                    return Error(e)

        return LazyCoroResult(execute)

    async def invalidate(self, key: AccountKey) -> bool:
        deleted = False
        for t in self.tiers:
            if await t.delete(str(key)):
                deleted = True
        return deleted


def cache[T, E](fetch: Fetch[T, E]) -> CacheBuilder[T, E]:
    return CacheBuilder(fetch)


__all__ = (
    "AccountKey",
    "Tier",
    "LocalTier",
    "Lookup",
    "CacheBuilder",
    "ConfigCache",
    "cache",
)
