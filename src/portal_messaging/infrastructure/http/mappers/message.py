from __future__ import annotations

from portal_messaging.application.dto.message import SendMessageDTO
from portal_messaging.domain.entities.message import Message
from portal_messaging.infrastructure.http.models.message import (
    CreateMessagePayload,
    MessagePayload,
)


def payload_to_entity(payload: MessagePayload) -> Message:
    return Message(
        id=payload.id,
        pregnancy_id=payload.pregnancy_id,
        from_user_id=payload.from_user_id,
        to_user_id=payload.to_user_id,
        body=payload.message,
        timestamp=payload.timestamp,
        read=payload.read,
    )


def dto_to_payload(dto: SendMessageDTO) -> CreateMessagePayload:
    return CreateMessagePayload(
        pregnancy_id=dto.pregnancy_id,
        to_user_id=dto.to_user_id,
        message=dto.body,
    )
