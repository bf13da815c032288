"""Fixed-interval polling of the active conversation.

State machine::

    IDLE -> SCHEDULED -> FETCHING -> RECONCILED -> SCHEDULED ...
                              `-> FAILED -----`

Every activation bumps a generation counter. A fetch that completes
under an older generation is discarded, whatever its outcome.
"""
from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Sequence

from portal_messaging.application.exceptions import BackendError
from portal_messaging.application.repositories.message import MessageReader
from portal_messaging.domain.entities.conversation import ConversationKey
from portal_messaging.domain.entities.message import Message
from portal_messaging.domain.value_objects.enums import SyncState
from portal_messaging.services.message_store import MessageStore

logger = logging.getLogger(__name__)

ReconciledCallback = Callable[[Sequence[Message]], None]


class PollSynchronizer:
    def __init__(
        self,
        reader: MessageReader,
        store: MessageStore,
        *,
        interval: float,
        on_reconciled: ReconciledCallback | None = None,
    ) -> None:
        self._reader = reader
        self._store = store
        self._interval = interval
        self._on_reconciled = on_reconciled

        self._key: ConversationKey | None = None
        self._generation = 0
        self._lock = asyncio.Lock()
        self._wake = asyncio.Event()
        self._task: asyncio.Task[None] | None = None
        self._stopping = False

        self._state = SyncState.IDLE
        self._last_error: str | None = None
        self._loaded = False

    @property
    def key(self) -> ConversationKey | None:
        return self._key

    @property
    def state(self) -> SyncState:
        return self._state

    @property
    def last_error(self) -> str | None:
        return self._last_error

    @property
    def is_loading(self) -> bool:
        """Fetching a conversation that has not been loaded yet."""
        return self._state == SyncState.FETCHING and not self._loaded

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def activate(self, key: ConversationKey | None) -> bool:
        """Switch polling to ``key``. Re-activating the current key is a no-op."""
        if key == self._key:
            return False

        self._generation += 1
        self._key = key
        self._lock = asyncio.Lock()
        self._loaded = False
        self._last_error = None
        self._store.clear()

        if key is None:
            self._state = SyncState.IDLE
            logger.debug("Polling idle (generation=%d)", self._generation)
            return True

        self._state = SyncState.SCHEDULED
        logger.debug("Polling %s (generation=%d)", key, self._generation)
        self.start()
        return True

    def start(self) -> None:
        if self._stopping:
            return
        if not self.is_running:
            self._task = asyncio.create_task(self._run(), name="message-poll")

    def trigger(self) -> None:
        """Wake the poll loop ahead of the next tick."""
        self._wake.set()

    async def sync_now(self) -> bool:
        """Run one fetch/reconcile cycle for the active key and wait for it."""
        return await self._cycle()

    async def close(self) -> None:
        """Stop polling for good. The loop exits even if its cancellation is lost."""
        self._stopping = True
        self._generation += 1
        self._key = None
        self._state = SyncState.IDLE
        task, self._task = self._task, None
        if task:
            self._wake.set()
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
        logger.debug("Polling stopped")

    async def _run(self) -> None:
        while not self._stopping:
            woken = False
            try:
                await asyncio.wait_for(self._wake.wait(), timeout=self._interval)
                woken = True
            except TimeoutError:
                pass
            self._wake.clear()
            if self._stopping:
                break

            # a slow fetch is still out: skip the tick rather than queue behind it
            if not woken and self._lock.locked():
                continue

            try:
                await self._cycle()
            except Exception:
                logger.exception("Message poll loop error")
                if self._key is not None:
                    self._state = SyncState.SCHEDULED

    async def _cycle(self) -> bool:
        key, generation, lock = self._key, self._generation, self._lock
        if key is None:
            return False

        async with lock:
            if generation != self._generation:
                return False

            self._state = SyncState.FETCHING
            try:
                snapshot = await self._reader.list_between(key.pregnancy_id, key.counterpart_id)
            except BackendError as exc:
                if generation != self._generation:
                    logger.debug("Discarding failed fetch for superseded %s", key)
                    return False
                self._state = SyncState.FAILED
                self._last_error = exc.detail or "Failed to fetch messages"
                logger.warning("Message poll for %s failed: %s", key, self._last_error)
                self._settle()
                return False

            if generation != self._generation:
                logger.debug("Discarding stale snapshot for %s", key)
                return False

            changed = self._store.reconcile(key, snapshot)
            self._loaded = True
            self._last_error = None
            self._state = SyncState.RECONCILED
            if changed:
                logger.debug("Conversation %s now has %d messages", key, len(self._store))

            if self._on_reconciled is not None:
                self._on_reconciled(self._store.messages)
            self._settle()
            return True

    def _settle(self) -> None:
        if self.is_running:
            self._state = SyncState.SCHEDULED
