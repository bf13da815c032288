from __future__ import annotations

from pydantic import TypeAdapter
from pydantic import ValidationError as PayloadError

from portal_messaging.application.dto.message import SendMessageDTO
from portal_messaging.application.exceptions import BackendError
from portal_messaging.domain.entities.message import Message
from portal_messaging.infrastructure.http.client import PortalHttpClient
from portal_messaging.infrastructure.http.mappers import message as mapper
from portal_messaging.infrastructure.http.models.message import MessagePayload

_messages = TypeAdapter(list[MessagePayload])


class MessageReaderRepo:
    def __init__(self, client: PortalHttpClient) -> None:
        self._client = client

    async def list_between(self, pregnancy_id: int, other_user_id: int) -> list[Message]:
        data = await self._client.request(
            "GET",
            "/messages",
            params={"pregnancyId": pregnancy_id, "otherUserId": other_user_id},
        )
        try:
            payloads = _messages.validate_python(data or [])
        except PayloadError as exc:
            raise BackendError(f"Malformed message snapshot: {exc}") from exc
        return [mapper.payload_to_entity(p) for p in payloads]


class MessageWriterRepo:
    def __init__(self, client: PortalHttpClient) -> None:
        self._client = client

    async def create(self, dto: SendMessageDTO) -> Message:
        body = mapper.dto_to_payload(dto).model_dump(by_alias=True)
        data = await self._client.request("POST", "/messages", json=body)
        try:
            payload = MessagePayload.model_validate(data)
        except PayloadError as exc:
            raise BackendError(f"Malformed created message: {exc}") from exc
        return mapper.payload_to_entity(payload)

    async def mark_read(self, message_id: int) -> None:
        await self._client.request("POST", f"/messages/{message_id}/read")
