"""
BackendClient — httpx wrapper that unwraps the backend envelope.

    {"success": true,  "data": {...}}
    {"success": false, "error": "..."}      # or "message"

Transport errors, HTTP error statuses, malformed bodies and
``success: false`` all raise RemoteCallFailed. ``status`` is None for
transport errors so callers can tell "never reached" from "rejected".
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import httpx
import structlog

from checkout_flow.errors import RemoteCallFailed

log = structlog.get_logger(__name__)

_DETAIL_LIMIT = 500


def _envelope_message(body: Any) -> str | None:
    if isinstance(body, dict):
        message = body.get("error") or body.get("message")
        if isinstance(message, str) and message:
            return message
    return None


class BackendClient:
    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        headers: Mapping[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._http = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            headers=dict(headers or {}),
            transport=transport,
        )

    async def __aenter__(self) -> BackendClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: Mapping[str, str] | None = None,
    ) -> Any:
        """Returns the envelope's ``data``."""
        try:
            response = await self._http.request(method, path, json=json, params=params)
        except httpx.HTTPError as exc:
            log.warning("backend_unreachable", method=method, path=path, error=str(exc))
            raise RemoteCallFailed(f"Could not reach the server ({method} {path})", detail=repr(exc)) from exc

        try:
            body = response.json()
        except ValueError:
            body = None
        detail = response.text[:_DETAIL_LIMIT]

        if response.is_error:
            log.warning("backend_http_error", method=method, path=path, status=response.status_code)
            raise RemoteCallFailed(
                _envelope_message(body) or f"Server responded with HTTP {response.status_code}",
                detail=detail,
                status=response.status_code,
            )
        if not isinstance(body, dict):
            raise RemoteCallFailed("Malformed server response", detail=detail, status=response.status_code)
        if body.get("success") is not True:
            log.info("backend_rejected", method=method, path=path, error=_envelope_message(body))
            raise RemoteCallFailed(
                _envelope_message(body) or "Request rejected by the server",
                detail=detail,
                status=response.status_code,
            )
        return body.get("data")

    async def get(self, path: str, params: Mapping[str, str] | None = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, json: Any = None) -> Any:
        return await self.request("POST", path, json=json)


__all__ = ("BackendClient",)
