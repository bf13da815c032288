"""Client-side copy of the active conversation's thread."""
from __future__ import annotations

import logging
from collections.abc import Sequence

from portal_messaging.domain.entities.conversation import ConversationKey
from portal_messaging.domain.entities.message import Message

logger = logging.getLogger(__name__)


class MessageStore:
    """Ordered messages for one conversation key.

    Every reconciliation replaces the content with the latest snapshot.
    The backend sorts by timestamp then id, and that order is kept as is.
    ``version`` only moves when the visible content actually changes.
    """

    def __init__(self, user_id: int) -> None:
        self._user_id = user_id
        self._key: ConversationKey | None = None
        self._messages: tuple[Message, ...] = ()
        self._version = 0

    @property
    def key(self) -> ConversationKey | None:
        return self._key

    @property
    def messages(self) -> tuple[Message, ...]:
        return self._messages

    @property
    def version(self) -> int:
        return self._version

    def __len__(self) -> int:
        return len(self._messages)

    def reconcile(self, key: ConversationKey | None, snapshot: Sequence[Message]) -> bool:
        """Replace content with ``snapshot``; return whether anything changed."""
        if key is None:
            return self.clear()

        accepted = tuple(m for m in snapshot if self._belongs(key, m))
        if len(accepted) != len(snapshot):
            logger.warning(
                "Dropped %d snapshot entries outside conversation %s",
                len(snapshot) - len(accepted), key,
            )

        if key == self._key and accepted == self._messages:
            return False

        self._key = key
        self._messages = accepted
        self._version += 1
        return True

    def clear(self) -> bool:
        if self._key is None and not self._messages:
            return False
        self._key = None
        self._messages = ()
        self._version += 1
        return True

    def unread_inbound(self) -> list[Message]:
        return [m for m in self._messages if m.is_inbound(self._user_id) and not m.read]

    def _belongs(self, key: ConversationKey, message: Message) -> bool:
        if message.pregnancy_id != key.pregnancy_id or not message.involves(self._user_id):
            return False
        return message.involves(key.counterpart_id)
