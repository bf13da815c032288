from __future__ import annotations

from typing import Protocol

from portal_messaging.domain.entities.contact import Contact
from portal_messaging.domain.value_objects.enums import UserRole


class ContactReader(Protocol):
    async def list_by_role(self, role: UserRole) -> list[Contact]: ...
