"""
Settings — environment-driven configuration.

    from checkout_flow.config import Settings
    settings = Settings.from_env()

A ``.env`` file in the working directory is loaded first if present.
Invalid values fail fast with ``SettingsError``.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv


class SettingsError(Exception):
    """Raised when an environment value cannot be parsed."""


def _float(env: Mapping[str, str], key: str, default: float) -> float:
    raw = env.get(key)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise SettingsError(f"{key} must be a number, got {raw!r}") from None


def _int(env: Mapping[str, str], key: str, default: int) -> int:
    raw = env.get(key)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise SettingsError(f"{key} must be an integer, got {raw!r}") from None
    if value <= 0:
        raise SettingsError(f"{key} must be positive, got {value}")
    return value


def _bool(env: Mapping[str, str], key: str, default: bool) -> bool:
    raw = env.get(key)
    if raw is None or raw == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    api_url: str = "https://api.example.com/v1"
    config_api_url: str = "https://api.example.com/v1"
    currency: str = "mxn"
    nominal_tax_rate_percent: float = 16.0
    http_timeout_seconds: float = 30.0
    signature_width: int = 600
    signature_height: int = 200
    config_cache_size: int = 100
    log_level: str = "INFO"
    log_json: bool = False

    @classmethod
    def from_env(
        cls,
        env: Mapping[str, str] | None = None,
        dotenv_path: Path | None = None,
    ) -> Settings:
        if env is None:
            path = dotenv_path or Path(".env")
            if path.exists():
                load_dotenv(path)
            env = os.environ

        rate = _float(env, "CHECKOUT_NOMINAL_TAX_RATE", cls.nominal_tax_rate_percent)
        if rate < 0:
            raise SettingsError(f"CHECKOUT_NOMINAL_TAX_RATE must be >= 0, got {rate}")

        return cls(
            api_url=env.get("CHECKOUT_API_URL", cls.api_url).rstrip("/"),
            config_api_url=env.get("CHECKOUT_CONFIG_API_URL", cls.config_api_url).rstrip("/"),
            currency=env.get("CHECKOUT_CURRENCY", cls.currency).lower(),
            nominal_tax_rate_percent=rate,
            http_timeout_seconds=_float(env, "CHECKOUT_HTTP_TIMEOUT", cls.http_timeout_seconds),
            signature_width=_int(env, "CHECKOUT_SIGNATURE_WIDTH", cls.signature_width),
            signature_height=_int(env, "CHECKOUT_SIGNATURE_HEIGHT", cls.signature_height),
            config_cache_size=_int(env, "CHECKOUT_CONFIG_CACHE_SIZE", cls.config_cache_size),
            log_level=env.get("LOG_LEVEL", cls.log_level).upper(),
            log_json=_bool(env, "LOG_JSON", cls.log_json),
        )


__all__ = ("Settings", "SettingsError")
