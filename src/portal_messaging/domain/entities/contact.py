from __future__ import annotations

from dataclasses import dataclass

from portal_messaging.domain.value_objects.enums import UserRole

_ROLE_LABELS: dict[UserRole, str] = {
    UserRole.CLINICIAN: "Healthcare Provider",
    UserRole.PATIENT: "Patient",
}


@dataclass(frozen=True, slots=True)
class Contact:
    id: int
    username: str
    first_name: str
    last_name: str
    role: UserRole
    email: str | None = None

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def role_label(self) -> str:
        return _ROLE_LABELS[self.role]
