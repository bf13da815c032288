"""Per-user messaging session.

The session is the single owner of the contact directory, the active
selection, the message store and the synchronizer for one signed-in
user. Nothing here is module-level state.
"""
from __future__ import annotations

import logging

from portal_messaging.application.backend import PortalBackend
from portal_messaging.application.dto.conversation import ConversationView
from portal_messaging.application.dto.message import SendResult
from portal_messaging.application.dto.principal import Principal
from portal_messaging.application.exceptions import NotFoundError
from portal_messaging.domain.entities.contact import Contact
from portal_messaging.domain.entities.conversation import ConversationKey
from portal_messaging.services.composer import Composer
from portal_messaging.services.contact_directory import ContactDirectory
from portal_messaging.services.conversation_selector import ConversationSelector
from portal_messaging.services.message_store import MessageStore
from portal_messaging.services.poll_synchronizer import PollSynchronizer
from portal_messaging.services.pregnancy_resolver import PregnancyResolver
from portal_messaging.services.read_receipts import ReadReceiptTracker

logger = logging.getLogger(__name__)


class MessagingSession:
    def __init__(
        self,
        principal: Principal,
        backend: PortalBackend,
        *,
        poll_interval: float,
    ) -> None:
        self.principal = principal
        self._backend = backend

        self.directory = ContactDirectory(backend.contacts)
        self.selector = ConversationSelector()
        self.resolver = PregnancyResolver(backend.pregnancies, principal)
        self.store = MessageStore(principal.user_id)
        self.receipts = ReadReceiptTracker(
            backend.messages_w,
            principal.user_id,
            on_acknowledged=self._on_acknowledged,
        )
        self.synchronizer = PollSynchronizer(
            backend.messages,
            self.store,
            interval=poll_interval,
            on_reconciled=self.receipts.observe,
        )
        self.composer = Composer(backend.messages_w, self.synchronizer)
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def start(self) -> None:
        contacts = await self.directory.load(self.principal)
        self.synchronizer.start()
        if self.selector.ensure_default(contacts):
            await self._activate(self.selector.active_id)

    async def refresh_contacts(self) -> list[Contact]:
        contacts = await self.directory.load(self.principal)
        active = self.selector.active_id
        if active is not None and active not in self.directory:
            self.selector.clear()
            self.synchronizer.activate(None)
        if self.selector.ensure_default(contacts):
            await self._activate(self.selector.active_id)
        return contacts

    def search_contacts(self, term: str) -> list[Contact]:
        return self.directory.search(term)

    async def select(self, counterpart_id: int) -> None:
        if counterpart_id not in self.directory:
            raise NotFoundError("Contact not found")
        if not self.selector.select(counterpart_id):
            return
        await self._activate(counterpart_id)

    async def send(self, body: str | None = None) -> SendResult:
        return await self.composer.send(body)

    def view(self) -> ConversationView:
        return ConversationView(
            contacts=tuple(self.directory.contacts),
            active_counterpart_id=self.selector.active_id,
            key=self.synchronizer.key,
            messages=self.store.messages,
            state=self.synchronizer.state,
            is_loading=self.synchronizer.is_loading,
            error=self.synchronizer.last_error,
            draft=self.composer.draft,
            is_sending=self.composer.is_sending,
        )

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        await self.synchronizer.close()
        await self.receipts.close()
        logger.info("Messaging session closed for %s", self.principal.principal_key)

    async def _activate(self, counterpart_id: int | None) -> None:
        if counterpart_id is None:
            self.synchronizer.activate(None)
            return

        current = self.synchronizer.key
        if current is None or current.counterpart_id != counterpart_id:
            # drop the previous thread before the pregnancy lookup suspends
            self.synchronizer.activate(None)

        pregnancy_id = await self.resolver.resolve(counterpart_id)
        if self.selector.active_id != counterpart_id or self._closed:
            return
        if pregnancy_id is None:
            self.synchronizer.activate(None)
            return

        if self.synchronizer.activate(ConversationKey(pregnancy_id, counterpart_id)):
            await self.synchronizer.sync_now()

    def _on_acknowledged(self) -> None:
        if not self._closed:
            self.synchronizer.trigger()
