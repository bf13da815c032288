from __future__ import annotations

from typing import Protocol

from portal_messaging.domain.entities.pregnancy import Pregnancy


class PregnancyReader(Protocol):
    async def get_current(self, patient_id: int | None = None) -> Pregnancy | None:
        """Return the caller's pregnancy, or the given patient's for clinicians.

        Returns None when no pregnancy record exists.
        """
        ...
