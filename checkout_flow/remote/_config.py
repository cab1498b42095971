"""
HttpConfigSource — account documents from the config backend.

    GET /accounts/{id}/defaults
    GET /accounts/{id}/storefront?config_id=...
    GET /accounts/{id}/contract-template
    GET /accounts/{id}/processor-account

A 404 or empty ``data`` means the account has no such document.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from checkout_flow.errors import RemoteCallFailed
from checkout_flow.remote._client import BackendClient


def _document(data: Any) -> Mapping[str, Any] | None:
    if isinstance(data, list):
        data = data[0] if data else None
    return data if isinstance(data, dict) and data else None


class HttpConfigSource:
    def __init__(self, client: BackendClient) -> None:
        self._client = client

    async def _get(self, path: str, params: Mapping[str, str] | None = None) -> Mapping[str, Any] | None:
        try:
            return _document(await self._client.get(path, params=params))
        except RemoteCallFailed as exc:
            if exc.status == 404:
                return None
            raise

    async def fetch_defaults(self, account_id: str) -> Mapping[str, Any] | None:
        return await self._get(f"/accounts/{account_id}/defaults")

    async def fetch_storefront(self, account_id: str, config_id: str | None) -> Mapping[str, Any] | None:
        params = {"config_id": config_id} if config_id else None
        return await self._get(f"/accounts/{account_id}/storefront", params)

    async def fetch_contract_template(self, account_id: str) -> Mapping[str, Any] | None:
        return await self._get(f"/accounts/{account_id}/contract-template")

    async def fetch_processor_account(self, account_id: str) -> str | None:
        document = await self._get(f"/accounts/{account_id}/processor-account")
        if document is None:
            return None
        value = document.get("processor_account_id")
        return str(value) if value else None


__all__ = ("HttpConfigSource",)
