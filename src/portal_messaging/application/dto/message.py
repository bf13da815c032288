from __future__ import annotations

from dataclasses import dataclass

from portal_messaging.domain.entities.message import Message
from portal_messaging.domain.value_objects.enums import SendStatus


@dataclass(frozen=True, slots=True)
class SendMessageDTO:
    pregnancy_id: int
    to_user_id: int
    body: str


@dataclass(frozen=True, slots=True)
class SendResult:
    status: SendStatus
    message: Message | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == SendStatus.SENT
