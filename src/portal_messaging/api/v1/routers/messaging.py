from __future__ import annotations

from fastapi import APIRouter, Query, Response, status

from portal_messaging.api.deps import CurrentPrincipal, RegistryDep, SessionDep
from portal_messaging.api.v1.schemas.contact import ContactResponse
from portal_messaging.api.v1.schemas.conversation import ConversationResponse
from portal_messaging.api.v1.schemas.message import MessageResponse, SendMessageRequest
from portal_messaging.application.exceptions import BackendError, ValidationError
from portal_messaging.domain.value_objects.enums import SendStatus

router = APIRouter(prefix="/api/v1/messaging", tags=["messaging"])


@router.get("/contacts", response_model=list[ContactResponse])
async def list_contacts(
    session: SessionDep,
    search: str = Query(""),
    refresh: bool = Query(False),
) -> list[ContactResponse]:
    if refresh:
        await session.refresh_contacts()
    return [ContactResponse.from_entity(c) for c in session.search_contacts(search)]


@router.get("/conversation", response_model=ConversationResponse)
async def get_conversation(session: SessionDep) -> ConversationResponse:
    return ConversationResponse.from_view(session.view(), session.principal.user_id)


@router.put("/conversation/{counterpart_id}", response_model=ConversationResponse)
async def select_conversation(
    counterpart_id: int,
    session: SessionDep,
) -> ConversationResponse:
    await session.select(counterpart_id)
    return ConversationResponse.from_view(session.view(), session.principal.user_id)


@router.post("/conversation/messages", response_model=MessageResponse, status_code=201)
async def send_message(body: SendMessageRequest, session: SessionDep) -> MessageResponse:
    result = await session.send(body.body)
    if result.status == SendStatus.REJECTED:
        raise ValidationError(result.error or "Message rejected")
    if result.status == SendStatus.FAILED or result.message is None:
        raise BackendError(result.error or "Failed to send message")
    return MessageResponse.from_entity(result.message, session.principal.user_id)


@router.delete("/session", status_code=status.HTTP_204_NO_CONTENT)
async def close_session(principal: CurrentPrincipal, registry: RegistryDep) -> Response:
    await registry.close(principal)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
