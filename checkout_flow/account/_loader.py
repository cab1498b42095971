"""
AccountConfigLoader — resolves everything a flow needs before it opens.

    loader = AccountConfigLoader(source, max_size=settings.config_cache_size)

    match await loader.load("acme", config_id="store-1"):
        case Ok(config): ...
        case Error(e): ...          # ConfigError, nothing cached

Absent documents fall back to defaults (empty catalog, no signature, no
account defaults). A missing ``defaults`` document is not a load failure:
it surfaces later as a ConfigError when the order is committed.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

import structlog
from kungfu import LazyCoroResult, Result, Ok, Error
from pydantic import ValidationError as DocumentInvalid

from checkout_flow import lift as L
from checkout_flow.errors import ConfigError, NetworkError
from checkout_flow.account._types import (
    AccountConfig,
    AccountDefaults,
    CatalogProduct,
    ContractTemplate,
)
from checkout_flow.account._source import ConfigSource
from checkout_flow.account._cache import AccountKey, ConfigCache, LocalTier, cache

log = structlog.get_logger(__name__)


def _unreachable(document: str, account_id: str, error: NetworkError) -> ConfigError:
    return ConfigError(
        reason=f"Could not load {document} for account {account_id}",
        raw_detail=error.detail or error.message,
    )


def _parse_catalog(document: Mapping[str, Any] | None) -> tuple[CatalogProduct, ...]:
    if not document:
        return ()
    return tuple(CatalogProduct.model_validate(p) for p in document.get("products") or ())


class AccountConfigLoader:
    def __init__(self, source: ConfigSource, max_size: int = 100) -> None:
        self._source = source
        self._configs: ConfigCache[AccountConfig, ConfigError] = (
            cache(self._fetch)
            .tier(LocalTier[AccountConfig](max_size=max_size))
            .build()
        )

    async def load(
        self,
        account_id: str,
        config_id: str | None = None,
        products: Iterable[CatalogProduct | Mapping[str, Any]] | None = None,
    ) -> Result[AccountConfig, ConfigError]:
        """
        Cached per (account_id, config_id). Embed-supplied ``products``
        replace the storefront catalog for this call only.
        """
        match await self._configs.get(AccountKey(account_id, config_id)):
            case Ok(lookup):
                config = lookup.value
            case Error(e):
                return Error(e)

        if products is None:
            return Ok(config)
        try:
            override = tuple(CatalogProduct.model_validate(p) for p in products)
        except DocumentInvalid as exc:
            return Error(ConfigError("Invalid product list", raw_detail=str(exc)))
        return Ok(config.with_products(override))

    async def refresh(self, account_id: str, config_id: str | None = None) -> None:
        await self._configs.invalidate(AccountKey(account_id, config_id))

    # ── fetch on miss ────────────────────────────────────────────────────────

    def _fetch(self, key: AccountKey) -> LazyCoroResult[AccountConfig, ConfigError]:
        return LazyCoroResult(lambda: self._resolve(key))

    async def _resolve(self, key: AccountKey) -> Result[AccountConfig, ConfigError]:
        account_id = key.account_id
        source = self._source
        log.info("account_config_loading", account_id=account_id, config_id=key.config_id)

        match await L.remote(lambda: source.fetch_defaults(account_id)):
            case Ok(defaults_doc):
                pass
            case Error(e):
                return Error(_unreachable("account defaults", account_id, e))

        match await L.remote(lambda: source.fetch_storefront(account_id, key.config_id)):
            case Ok(storefront_doc):
                pass
            case Error(e):
                return Error(_unreachable("storefront", account_id, e))

        match await L.remote(lambda: source.fetch_contract_template(account_id)):
            case Ok(template_doc):
                pass
            case Error(e):
                return Error(_unreachable("contract template", account_id, e))

        match await L.remote(lambda: source.fetch_processor_account(account_id)):
            case Ok(processor_account_id):
                pass
            case Error(e):
                # Optional: only needed by processors with connected accounts.
                log.warning("processor_account_unavailable", account_id=account_id, error=e.message)
                processor_account_id = None

        try:
            config = AccountConfig(
                account_id=account_id,
                config_id=key.config_id,
                catalog=_parse_catalog(storefront_doc),
                defaults=AccountDefaults.model_validate(defaults_doc) if defaults_doc else None,
                contract=ContractTemplate.model_validate(template_doc) if template_doc else None,
                processor_account_id=processor_account_id,
            )
        except DocumentInvalid as exc:
            log.warning("account_config_invalid", account_id=account_id, error=str(exc))
            return Error(ConfigError(f"Invalid configuration for account {account_id}", raw_detail=str(exc)))

        if config.defaults is None or config.defaults.missing():
            log.warning(
                "account_defaults_incomplete",
                account_id=account_id,
                missing=config.defaults.missing() if config.defaults else ("defaults",),
            )
        log.info(
            "account_config_loaded",
            account_id=account_id,
            products=len(config.catalog),
            signature_required=config.signature_required,
        )
        return Ok(config)


__all__ = ("AccountConfigLoader",)
