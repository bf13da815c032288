from __future__ import annotations

from collections.abc import Sequence

from portal_messaging.domain.entities.contact import Contact


class ConversationSelector:
    """Holds the active counterpart id, at most one at a time."""

    def __init__(self) -> None:
        self._active_id: int | None = None

    @property
    def active_id(self) -> int | None:
        return self._active_id

    def ensure_default(self, contacts: Sequence[Contact]) -> bool:
        """Select the first contact if nothing is selected yet."""
        if self._active_id is not None or not contacts:
            return False
        self._active_id = contacts[0].id
        return True

    def select(self, counterpart_id: int) -> bool:
        """Return False when ``counterpart_id`` is already active."""
        if counterpart_id == self._active_id:
            return False
        self._active_id = counterpart_id
        return True

    def clear(self) -> None:
        self._active_id = None
