from typing import Any

import pytest
from kungfu import Error, Ok

from checkout_flow.account import (
    AccountConfig,
    AccountConfigLoader,
    AccountKey,
    ContractTemplate,
    LocalTier,
    cache,
)
from checkout_flow.errors import ConfigError
from checkout_flow.lift import from_result

from tests.conftest import MemorySource

STOREFRONT = {
    "products": [
        {"product_id": "p-1", "name": "Mat", "unit_price": 100.0, "sku": "MAT", "ignored": "x"},
        {"product_id": "p-2", "name": "Block", "unit_price": 20.0, "tax_rate_percent": 8},
    ]
}


@pytest.fixture
def source() -> MemorySource:
    return MemorySource(
        defaults={
            "acme": {
                "warehouse": {"key": "WH-01", "name": "Main"},
                "branch": {"key": "BR-01", "name": "Downtown"},
                "customer_type": {"key": "RETAIL", "name": "Retail"},
            }
        },
        storefronts={"acme": STOREFRONT},
    )


async def load(loader: AccountConfigLoader, *args: Any, **kw: Any) -> AccountConfig:
    match await loader.load(*args, **kw):
        case Ok(config):
            return config
        case Error(e):
            pytest.fail(e.reason)


# ═══════════════════════════════════════════════════════════════════════════════
# Documents
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.mark.parametrize(
    ("document", "required"),
    [
        ({"name": "Rental", "config": {"general": {"requires_signature": True}}}, True),
        ({"name": "Rental", "config": {"general": {"requires_signature": False}}}, False),
        ({"name": "Rental", "config": {"general": {"requires_signature": "true"}}}, False),
        ({"name": "Rental", "config": {"general": {}}}, False),
        ({"name": "Rental", "config": "broken"}, False),
        ({"name": "Rental"}, False),
    ],
)
def test_signature_flag_needs_literal_true(document: dict[str, Any], required: bool) -> None:
    assert ContractTemplate.model_validate(document).requires_signature is required


def test_no_template_means_no_signature() -> None:
    assert not AccountConfig(account_id="acme").signature_required


# ═══════════════════════════════════════════════════════════════════════════════
# Loader
# ═══════════════════════════════════════════════════════════════════════════════


async def test_load_assembles_every_document(source: MemorySource) -> None:
    source.templates["acme"] = {"name": "Rental", "config": {"general": {"requires_signature": True}}}
    config = await load(AccountConfigLoader(source), "acme")

    assert [p.product_id for p in config.catalog] == ["p-1", "p-2"]
    assert config.catalog[0].tax_rate_percent == 16.0
    assert config.catalog[1].tax_rate_percent == 8.0
    assert config.defaults is not None and config.defaults.missing() == ()
    assert config.signature_required


async def test_load_is_cached_per_account_and_config(source: MemorySource) -> None:
    loader = AccountConfigLoader(source)
    first = await load(loader, "acme")
    second = await load(loader, "acme")
    assert first is second
    assert source.calls == 1

    await load(loader, "acme", config_id="store-2")
    assert source.calls == 2

    await loader.refresh("acme")
    await load(loader, "acme")
    assert source.calls == 3


async def test_products_override_catalog_without_touching_cache(source: MemorySource) -> None:
    loader = AccountConfigLoader(source)
    config = await load(loader, "acme", products=[{"product_id": "x", "name": "Strap", "unit_price": 5}])
    assert [p.product_id for p in config.catalog] == ["x"]
    assert [p.product_id for p in (await load(loader, "acme")).catalog] == ["p-1", "p-2"]


async def test_invalid_products_are_a_config_error(source: MemorySource) -> None:
    loader = AccountConfigLoader(source)
    match await loader.load("acme", products=[{"product_id": "x", "name": "Strap", "unit_price": -1}]):
        case Error(ConfigError(reason=reason)):
            assert reason == "Invalid product list"
        case other:
            pytest.fail(f"unexpected {other}")


@pytest.mark.parametrize(
    ("document", "label"),
    [("defaults", "account defaults"), ("storefront", "storefront"), ("template", "contract template")],
)
async def test_transport_failure_fails_load_and_is_not_cached(
    source: MemorySource, document: str, label: str
) -> None:
    source.fail_on = document
    loader = AccountConfigLoader(source)

    match await loader.load("acme"):
        case Error(ConfigError(reason=reason, raw_detail=raw)):
            assert reason == f"Could not load {label} for account acme"
            assert "unreachable" in raw
        case other:
            pytest.fail(f"unexpected {other}")

    source.fail_on = None
    assert isinstance(await loader.load("acme"), Ok)


async def test_processor_account_failure_is_tolerated(source: MemorySource) -> None:
    source.fail_on = "processor"
    config = await load(AccountConfigLoader(source), "acme")
    assert config.processor_account_id is None


async def test_absent_documents_fall_back(source: MemorySource) -> None:
    config = await load(AccountConfigLoader(source), "unknown")
    assert config.catalog == ()
    assert config.defaults is None
    assert not config.signature_required


async def test_invalid_storefront_is_a_config_error(source: MemorySource) -> None:
    source.storefronts["acme"] = {"products": [{"name": "no id", "unit_price": 1}]}
    match await AccountConfigLoader(source).load("acme"):
        case Error(ConfigError(reason=reason)):
            assert reason == "Invalid configuration for account acme"
        case other:
            pytest.fail(f"unexpected {other}")


# ═══════════════════════════════════════════════════════════════════════════════
# Cache
# ═══════════════════════════════════════════════════════════════════════════════


async def test_local_tier_evicts_least_recently_used() -> None:
    tier = LocalTier[str](max_size=2)
    await tier.set("a", "1")
    await tier.set("b", "2")
    await tier.get("a")
    await tier.set("c", "3")

    assert len(tier) == 2
    assert await tier.get("b") is None
    assert await tier.get("a") == "1"


async def test_cache_reports_hits_and_skips_failures() -> None:
    fetched: list[str] = []

    def fetch(key: AccountKey):
        fetched.append(str(key))
        return from_result(Ok(key.account_id.upper()) if key.account_id != "bad" else Error("nope"))

    configs = cache(fetch).tier(LocalTier[str]()).build()

    miss = await configs.get(AccountKey("acme"))
    hit = await configs.get(AccountKey("acme"))
    assert (miss.value.hit, hit.value.hit, hit.value.tier) == (False, True, "local")
    assert hit.value.value == "ACME"

    assert isinstance(await configs.get(AccountKey("bad")), Error)
    assert isinstance(await configs.get(AccountKey("bad")), Error)
    assert fetched == ["account:acme:-", "account:bad:-", "account:bad:-"]

    assert await configs.invalidate(AccountKey("acme"))
    assert not await configs.invalidate(AccountKey("acme"))
