from __future__ import annotations

from dataclasses import dataclass

from portal_messaging.domain.value_objects.enums import UserRole


@dataclass(frozen=True, slots=True)
class Principal:
    """Signed-in user identity extracted from JWT."""

    user_id: int
    role: UserRole
    username: str | None = None

    @property
    def counterpart_role(self) -> UserRole:
        return self.role.counterpart

    @property
    def principal_key(self) -> str:
        """Unique key for the session registry."""
        return f"{self.role}:{self.user_id}"
