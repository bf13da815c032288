from __future__ import annotations

import httpx

from portal_messaging.config import settings
from portal_messaging.infrastructure.http.client import PortalHttpClient
from portal_messaging.infrastructure.http.repositories.contact import ContactReaderRepo
from portal_messaging.infrastructure.http.repositories.message import (
    MessageReaderRepo,
    MessageWriterRepo,
)
from portal_messaging.infrastructure.http.repositories.pregnancy import PregnancyReaderRepo


class HttpPortalBackend:
    """Concrete portal backend backed by a single httpx client."""

    def __init__(self, client: PortalHttpClient) -> None:
        self._client = client
        self.contacts = ContactReaderRepo(client)
        self.pregnancies = PregnancyReaderRepo(client)
        self.messages = MessageReaderRepo(client)
        self.messages_w = MessageWriterRepo(client)

    def set_token(self, token: str) -> None:
        self._client.set_token(token)

    async def aclose(self) -> None:
        await self._client.aclose()


def build_http_backend(token: str, *, transport: httpx.AsyncBaseTransport | None = None) -> HttpPortalBackend:
    """Backend acting on behalf of the bearer of ``token``."""
    client = httpx.AsyncClient(
        base_url=settings.PORTAL_API_URL,
        timeout=settings.PORTAL_API_TIMEOUT,
        headers={"Accept": "application/json", "Authorization": f"Bearer {token}"},
        transport=transport,
    )
    return HttpPortalBackend(PortalHttpClient(client))
