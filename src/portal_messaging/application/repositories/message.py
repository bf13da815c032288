from __future__ import annotations

from typing import Protocol

from portal_messaging.application.dto.message import SendMessageDTO
from portal_messaging.domain.entities.message import Message


class MessageReader(Protocol):
    async def list_between(self, pregnancy_id: int, other_user_id: int) -> list[Message]:
        """Full thread snapshot, ascending by timestamp then id."""
        ...


class MessageWriter(Protocol):
    async def create(self, dto: SendMessageDTO) -> Message:
        """Create a message. Id and timestamp are assigned by the backend."""
        ...

    async def mark_read(self, message_id: int) -> None:
        """Idempotent: re-marking an already read message must not fail."""
        ...
