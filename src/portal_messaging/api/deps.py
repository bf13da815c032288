"""FastAPI dependency injection helpers."""
from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from portal_messaging.application.dto.principal import Principal
from portal_messaging.application.ports.auth import TokenVerifier
from portal_messaging.config import settings
from portal_messaging.infrastructure.auth.hs256_verifier import HS256Verifier
from portal_messaging.services.messaging_session import MessagingSession
from portal_messaging.services.session_registry import SessionRegistry

_bearer_scheme = HTTPBearer()

BearerCredentials = Annotated[HTTPAuthorizationCredentials, Depends(_bearer_scheme)]

_verifier: TokenVerifier | None = None


def get_verifier() -> TokenVerifier:
    global _verifier  # noqa: PLW0603
    if _verifier is None:
        _verifier = HS256Verifier(settings.JWT_SECRET, settings.JWT_ALGORITHM)
    return _verifier


async def get_current_principal(credentials: BearerCredentials) -> Principal:
    verifier = get_verifier()
    try:
        return await verifier.verify(credentials.credentials)
    except Exception as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(exc),
        ) from exc


CurrentPrincipal = Annotated[Principal, Depends(get_current_principal)]


def get_registry(request: Request) -> SessionRegistry:
    return request.app.state.sessions


RegistryDep = Annotated[SessionRegistry, Depends(get_registry)]


async def get_session(
    principal: CurrentPrincipal,
    credentials: BearerCredentials,
    registry: RegistryDep,
) -> MessagingSession:
    """The caller's messaging session, opened on first use."""
    return await registry.get_or_create(principal, credentials.credentials)


SessionDep = Annotated[MessagingSession, Depends(get_session)]
