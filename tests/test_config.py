import json

import pytest
import structlog

from checkout_flow import configure_logging
from checkout_flow.config import Settings, SettingsError


def test_defaults_from_empty_environment() -> None:
    settings = Settings.from_env(env={})
    assert settings == Settings()
    assert settings.currency == "mxn"
    assert settings.nominal_tax_rate_percent == 16.0


def test_values_are_normalised() -> None:
    settings = Settings.from_env(
        env={
            "CHECKOUT_API_URL": "https://pay.test/v2/",
            "CHECKOUT_CURRENCY": "USD",
            "CHECKOUT_NOMINAL_TAX_RATE": "8",
            "CHECKOUT_SIGNATURE_WIDTH": "320",
            "LOG_LEVEL": "debug",
            "LOG_JSON": "yes",
        }
    )
    assert settings.api_url == "https://pay.test/v2"
    assert settings.currency == "usd"
    assert settings.nominal_tax_rate_percent == 8.0
    assert settings.signature_width == 320
    assert settings.log_level == "DEBUG"
    assert settings.log_json is True


@pytest.mark.parametrize(
    "env",
    [
        {"CHECKOUT_NOMINAL_TAX_RATE": "abc"},
        {"CHECKOUT_NOMINAL_TAX_RATE": "-1"},
        {"CHECKOUT_SIGNATURE_HEIGHT": "0"},
        {"CHECKOUT_CONFIG_CACHE_SIZE": "1.5"},
        {"CHECKOUT_HTTP_TIMEOUT": "soon"},
    ],
)
def test_invalid_values_fail_fast(env: dict[str, str]) -> None:
    with pytest.raises(SettingsError):
        Settings.from_env(env=env)


def test_reads_dotenv_file(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("CHECKOUT_CURRENCY", raising=False)
    dotenv = tmp_path / ".env"
    dotenv.write_text("CHECKOUT_CURRENCY=eur\n")
    try:
        assert Settings.from_env(dotenv_path=dotenv).currency == "eur"
    finally:
        monkeypatch.delenv("CHECKOUT_CURRENCY", raising=False)


def test_configure_logging_renders_json(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging("verbose", json=True)
    try:
        structlog.get_logger("checkout_flow.test").info("order_committed", intent_id="pi_1")
        structlog.get_logger("checkout_flow.test").debug("hidden")
    finally:
        structlog.reset_defaults()
    line = json.loads(capsys.readouterr().out.strip())
    assert line["event"] == "order_committed"
    assert line["intent_id"] == "pi_1"
    assert line["level"] == "info"
