from __future__ import annotations

from typing import Protocol

from portal_messaging.application.repositories.contact import ContactReader
from portal_messaging.application.repositories.message import MessageReader, MessageWriter
from portal_messaging.application.repositories.pregnancy import PregnancyReader


class PortalBackend(Protocol):
    contacts: ContactReader
    pregnancies: PregnancyReader
    messages: MessageReader
    messages_w: MessageWriter

    def set_token(self, token: str) -> None: ...

    async def aclose(self) -> None: ...
