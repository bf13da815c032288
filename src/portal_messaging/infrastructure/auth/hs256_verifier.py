from __future__ import annotations

import jwt

from portal_messaging.application.dto.principal import Principal
from portal_messaging.domain.value_objects.enums import UserRole


class HS256Verifier:
    """Verify portal JWTs signed with a shared HS256 secret."""

    def __init__(self, secret: str, algorithm: str = "HS256") -> None:
        self._secret = secret
        self._algorithm = algorithm

    async def verify(self, token: str) -> Principal:
        payload = jwt.decode(token, self._secret, algorithms=[self._algorithm])
        role_raw = payload.get("role", UserRole.PATIENT.value)
        if role_raw not in UserRole.__members__.values():
            raise jwt.InvalidTokenError(f"Unsupported role: {role_raw}")
        return Principal(
            user_id=int(payload["sub"]),
            role=UserRole(role_raw),
            username=payload.get("username"),
        )
