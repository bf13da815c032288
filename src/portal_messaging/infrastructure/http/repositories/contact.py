from __future__ import annotations

from pydantic import TypeAdapter
from pydantic import ValidationError as PayloadError

from portal_messaging.application.exceptions import BackendError
from portal_messaging.domain.entities.contact import Contact
from portal_messaging.domain.value_objects.enums import UserRole
from portal_messaging.infrastructure.http.client import PortalHttpClient
from portal_messaging.infrastructure.http.mappers import contact as mapper
from portal_messaging.infrastructure.http.models.contact import ContactPayload

_contacts = TypeAdapter(list[ContactPayload])


class ContactReaderRepo:
    def __init__(self, client: PortalHttpClient) -> None:
        self._client = client

    async def list_by_role(self, role: UserRole) -> list[Contact]:
        data = await self._client.request("GET", "/contacts", params={"role": role.value})
        try:
            payloads = _contacts.validate_python(data or [])
        except PayloadError as exc:
            raise BackendError(f"Malformed contact list: {exc}") from exc
        return [mapper.payload_to_entity(p) for p in payloads]
