from __future__ import annotations

from pydantic import BaseModel

from portal_messaging.domain.entities.contact import Contact


class ContactResponse(BaseModel):
    id: int
    username: str
    first_name: str
    last_name: str
    display_name: str
    role: str
    role_label: str

    @classmethod
    def from_entity(cls, contact: Contact) -> ContactResponse:
        return cls(
            id=contact.id,
            username=contact.username,
            first_name=contact.first_name,
            last_name=contact.last_name,
            display_name=contact.display_name,
            role=contact.role.value,
            role_label=contact.role_label,
        )
