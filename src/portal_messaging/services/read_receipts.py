"""Read acknowledgements for inbound messages."""
from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Sequence

from portal_messaging.application.exceptions import BackendError
from portal_messaging.application.repositories.message import MessageWriter
from portal_messaging.domain.entities.message import Message

logger = logging.getLogger(__name__)


class ReadReceiptTracker:
    """Issues one read acknowledgement per unread inbound message.

    An id stays tracked from the moment its acknowledgement is issued
    until a reconciled snapshot shows it as read, so overlapping passes
    never submit it twice. A failed acknowledgement releases the id and
    the next pass retries it. Ids that leave the snapshot are forgotten
    once their acknowledgement has settled.
    """

    def __init__(
        self,
        writer: MessageWriter,
        user_id: int,
        *,
        on_acknowledged: Callable[[], None] | None = None,
    ) -> None:
        self._writer = writer
        self._user_id = user_id
        self._on_acknowledged = on_acknowledged
        self._tracked: set[int] = set()
        self._tasks: dict[int, asyncio.Task[None]] = {}

    @property
    def tracked(self) -> frozenset[int]:
        return frozenset(self._tracked)

    @property
    def in_flight(self) -> int:
        return len(self._tasks)

    def observe(self, messages: Sequence[Message]) -> int:
        """Schedule acknowledgements for ``messages``; return how many were issued."""
        self._tracked &= {m.id for m in messages} | set(self._tasks)

        issued = 0
        for message in messages:
            if not message.is_inbound(self._user_id):
                continue
            if message.read:
                self._tracked.discard(message.id)
                continue
            if message.id in self._tracked:
                continue

            self._tracked.add(message.id)
            task = asyncio.create_task(
                self._acknowledge(message.id), name=f"read-ack-{message.id}",
            )
            self._tasks[message.id] = task
            task.add_done_callback(lambda _t, mid=message.id: self._tasks.pop(mid, None))
            issued += 1
        return issued

    async def drain(self) -> None:
        """Wait for every outstanding acknowledgement."""
        while self._tasks:
            await asyncio.gather(*self._tasks.values(), return_exceptions=True)

    async def close(self) -> None:
        tasks = list(self._tasks.values())
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._tasks.clear()

    async def _acknowledge(self, message_id: int) -> None:
        acknowledged = False
        try:
            await self._writer.mark_read(message_id)
            acknowledged = True
        except BackendError as exc:
            logger.warning("Read acknowledgement for message %d failed: %s", message_id, exc.detail)
        except Exception:
            logger.exception("Read acknowledgement for message %d failed", message_id)
        finally:
            if not acknowledged:
                self._tracked.discard(message_id)

        if acknowledged:
            logger.debug("Message %d acknowledged as read", message_id)
            if self._on_acknowledged is not None:
                self._on_acknowledged()
