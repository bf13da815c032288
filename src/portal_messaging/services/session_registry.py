from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from portal_messaging.application.backend import PortalBackend
from portal_messaging.application.dto.principal import Principal
from portal_messaging.services.messaging_session import MessagingSession

logger = logging.getLogger(__name__)

BackendFactory = Callable[[str], PortalBackend]


class SessionRegistry:
    """One messaging session per signed-in principal.

    Existing sessions are returned without waiting on anything. Opening a
    session is serialized per principal only, so one user's slow first
    load never holds up another user's requests.
    """

    def __init__(self, backend_factory: BackendFactory, *, poll_interval: float) -> None:
        self._backend_factory = backend_factory
        self._poll_interval = poll_interval
        self._sessions: dict[str, MessagingSession] = {}
        self._backends: dict[str, PortalBackend] = {}
        self._tokens: dict[str, str] = {}
        self._opening: dict[str, asyncio.Lock] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def get(self, principal: Principal) -> MessagingSession | None:
        return self._sessions.get(principal.principal_key)

    async def get_or_create(self, principal: Principal, token: str) -> MessagingSession:
        key = principal.principal_key
        session = self._sessions.get(key)
        if session is not None:
            self._refresh_token(key, token)
            return session

        async with self._opening.setdefault(key, asyncio.Lock()):
            session = self._sessions.get(key)
            if session is not None:
                self._refresh_token(key, token)
                return session

            backend = self._backend_factory(token)
            session = MessagingSession(principal, backend, poll_interval=self._poll_interval)
            try:
                await session.start()
            except BaseException:
                await session.close()
                await backend.aclose()
                raise

            self._sessions[key] = session
            self._backends[key] = backend
            self._tokens[key] = token
            logger.info("Messaging session opened for %s (total=%d)", key, len(self._sessions))
            return session

    async def close(self, principal: Principal) -> bool:
        key = principal.principal_key
        session = self._sessions.pop(key, None)
        backend = self._backends.pop(key, None)
        self._tokens.pop(key, None)
        if session is None:
            return False
        await session.close()
        if backend is not None:
            await backend.aclose()
        return True

    async def close_all(self) -> None:
        sessions, self._sessions = self._sessions, {}
        backends, self._backends = self._backends, {}
        self._tokens.clear()
        for session in sessions.values():
            await session.close()
        for backend in backends.values():
            await backend.aclose()
        if sessions:
            logger.info("Closed %d messaging sessions", len(sessions))

    def _refresh_token(self, key: str, token: str) -> None:
        if self._tokens.get(key) == token:
            return
        backend = self._backends.get(key)
        if backend is not None:
            backend.set_token(token)
            self._tokens[key] = token
            logger.debug("Bearer token refreshed for %s", key)
