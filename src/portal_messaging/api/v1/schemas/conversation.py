from __future__ import annotations

from pydantic import BaseModel

from portal_messaging.api.v1.schemas.contact import ContactResponse
from portal_messaging.api.v1.schemas.message import MessageResponse
from portal_messaging.application.dto.conversation import ConversationView


class ConversationResponse(BaseModel):
    contacts: list[ContactResponse]
    active_counterpart_id: int | None
    pregnancy_id: int | None
    messages: list[MessageResponse]
    state: str
    is_loading: bool
    error: str | None
    draft: str
    is_sending: bool

    @classmethod
    def from_view(cls, view: ConversationView, user_id: int) -> ConversationResponse:
        return cls(
            contacts=[ContactResponse.from_entity(c) for c in view.contacts],
            active_counterpart_id=view.active_counterpart_id,
            pregnancy_id=view.key.pregnancy_id if view.key else None,
            messages=[MessageResponse.from_entity(m, user_id) for m in view.messages],
            state=view.state.value,
            is_loading=view.is_loading,
            error=view.error,
            draft=view.draft,
            is_sending=view.is_sending,
        )
