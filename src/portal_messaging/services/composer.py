from __future__ import annotations

import logging

from portal_messaging.application.dto.message import SendMessageDTO, SendResult
from portal_messaging.application.exceptions import BackendError
from portal_messaging.application.repositories.message import MessageWriter
from portal_messaging.domain.value_objects.enums import SendStatus
from portal_messaging.services.poll_synchronizer import PollSynchronizer

logger = logging.getLogger(__name__)


class Composer:
    """Validates and submits outbound messages for the active conversation.

    A sent message is never inserted locally: success triggers a sync so
    the backend snapshot stays the only source of truth. The draft is
    cleared on success only.
    """

    def __init__(self, writer: MessageWriter, synchronizer: PollSynchronizer) -> None:
        self._writer = writer
        self._synchronizer = synchronizer
        self.draft = ""
        self._sending = False

    @property
    def is_sending(self) -> bool:
        return self._sending

    async def send(self, body: str | None = None) -> SendResult:
        if self._sending:
            return SendResult(SendStatus.REJECTED, error="A message is already being sent")
        if body is not None:
            self.draft = body
        text = self.draft.strip()

        key = self._synchronizer.key
        if key is None:
            return SendResult(SendStatus.REJECTED, error="No active conversation")
        if not text:
            return SendResult(SendStatus.REJECTED, error="Message is empty")

        self._sending = True
        try:
            message = await self._writer.create(
                SendMessageDTO(
                    pregnancy_id=key.pregnancy_id,
                    to_user_id=key.counterpart_id,
                    body=text,
                )
            )
        except BackendError as exc:
            logger.warning("Failed to send message to %s: %s", key, exc.detail)
            return SendResult(SendStatus.FAILED, error=exc.detail or "Failed to send message")
        finally:
            self._sending = False

        self.draft = ""
        logger.info("Message %d sent in %s", message.id, key)
        await self._synchronizer.sync_now()
        return SendResult(SendStatus.SENT, message=message)
