from __future__ import annotations

from dataclasses import dataclass

from portal_messaging.domain.entities.contact import Contact
from portal_messaging.domain.entities.conversation import ConversationKey
from portal_messaging.domain.entities.message import Message
from portal_messaging.domain.value_objects.enums import SyncState


@dataclass(frozen=True, slots=True)
class ConversationView:
    """Read-only snapshot of a session handed to the presentation layer."""

    contacts: tuple[Contact, ...]
    active_counterpart_id: int | None
    key: ConversationKey | None
    messages: tuple[Message, ...]
    state: SyncState
    is_loading: bool
    error: str | None
    draft: str
    is_sending: bool
