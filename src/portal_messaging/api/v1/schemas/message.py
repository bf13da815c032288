from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from portal_messaging.domain.entities.message import Message


class SendMessageRequest(BaseModel):
    body: str


class MessageResponse(BaseModel):
    id: int
    pregnancy_id: int
    from_user_id: int
    to_user_id: int
    body: str
    timestamp: datetime
    read: bool
    is_own: bool
    # only meaningful for the caller's own messages
    delivery_status: str | None = None

    @classmethod
    def from_entity(cls, message: Message, user_id: int) -> MessageResponse:
        own = message.is_outbound(user_id)
        return cls(
            id=message.id,
            pregnancy_id=message.pregnancy_id,
            from_user_id=message.from_user_id,
            to_user_id=message.to_user_id,
            body=message.body,
            timestamp=message.timestamp,
            read=message.read,
            is_own=own,
            delivery_status=message.delivery_status.value if own else None,
        )
