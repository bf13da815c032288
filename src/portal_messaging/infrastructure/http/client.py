"""Thin JSON-over-HTTP wrapper around httpx for the portal backend."""
from __future__ import annotations

import logging
from typing import Any

import httpx

from portal_messaging.application.exceptions import BackendError

logger = logging.getLogger(__name__)


class PortalHttpClient:
    """Every failure surfaces as :class:`BackendError`.

    Non-2xx responses carry ``"{status}: {body}"`` as the detail, or the
    reason phrase when the body is empty.
    """

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
        allow_not_found: bool = False,
    ) -> Any:
        try:
            response = await self._client.request(method, path, params=params, json=json)
        except httpx.HTTPError as exc:
            logger.debug("%s %s transport error: %r", method, path, exc)
            raise BackendError(f"{method} {path} failed: {exc}") from exc

        if allow_not_found and response.status_code == httpx.codes.NOT_FOUND:
            return None
        if response.is_error:
            text = response.text or response.reason_phrase
            raise BackendError(f"{response.status_code}: {text}", status_code=response.status_code)
        if not response.content:
            return None

        try:
            return response.json()
        except ValueError as exc:
            raise BackendError(f"{method} {path} returned invalid JSON") from exc

    def set_token(self, token: str) -> None:
        """Forward a refreshed bearer token on subsequent requests."""
        self._client.headers["Authorization"] = f"Bearer {token}"

    async def aclose(self) -> None:
        await self._client.aclose()
