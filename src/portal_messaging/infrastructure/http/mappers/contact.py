from __future__ import annotations

from portal_messaging.domain.entities.contact import Contact
from portal_messaging.infrastructure.http.models.contact import ContactPayload


def payload_to_entity(payload: ContactPayload) -> Contact:
    return Contact(
        id=payload.id,
        username=payload.username,
        first_name=payload.first_name,
        last_name=payload.last_name,
        role=payload.role,
        email=payload.email,
    )
