"""Counterpart contacts visible to the signed-in user."""
from __future__ import annotations

import logging

from portal_messaging.application.dto.principal import Principal
from portal_messaging.application.exceptions import BackendError
from portal_messaging.application.repositories.contact import ContactReader
from portal_messaging.domain.entities.contact import Contact

logger = logging.getLogger(__name__)


class ContactDirectory:
    """Resolves role-complementary contacts, in backend order.

    Patients see clinicians, clinicians see patients. A failed query
    degrades to an empty directory instead of raising.
    """

    def __init__(self, reader: ContactReader) -> None:
        self._reader = reader
        self._contacts: dict[int, Contact] = {}

    async def load(self, principal: Principal) -> list[Contact]:
        role = principal.counterpart_role
        try:
            fetched = await self._reader.list_by_role(role)
        except BackendError as exc:
            logger.warning("Contact lookup for role=%s failed: %s", role, exc.detail)
            fetched = []

        contacts: dict[int, Contact] = {}
        for contact in fetched:
            if contact.id == principal.user_id or contact.role != role:
                continue
            contacts.setdefault(contact.id, contact)
        self._contacts = contacts

        logger.debug("Loaded %d contacts for %s", len(contacts), principal.principal_key)
        return self.contacts

    @property
    def contacts(self) -> list[Contact]:
        return list(self._contacts.values())

    def get(self, contact_id: int) -> Contact | None:
        return self._contacts.get(contact_id)

    def __contains__(self, contact_id: object) -> bool:
        return contact_id in self._contacts

    def search(self, term: str) -> list[Contact]:
        needle = term.strip().lower()
        if not needle:
            return self.contacts
        return [c for c in self._contacts.values() if needle in c.display_name.lower()]
