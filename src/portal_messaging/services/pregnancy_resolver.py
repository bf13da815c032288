from __future__ import annotations

import logging

from portal_messaging.application.dto.principal import Principal
from portal_messaging.application.exceptions import BackendError
from portal_messaging.application.repositories.pregnancy import PregnancyReader
from portal_messaging.domain.value_objects.enums import UserRole

logger = logging.getLogger(__name__)


class PregnancyResolver:
    """Finds the pregnancy that scopes a conversation.

    A patient has one pregnancy of their own. A clinician talks to a
    patient within that patient's pregnancy, so the lookup is per
    counterpart. Successful lookups are cached; misses are not.
    """

    def __init__(self, reader: PregnancyReader, principal: Principal) -> None:
        self._reader = reader
        self._principal = principal
        self._cache: dict[int | None, int] = {}

    async def resolve(self, counterpart_id: int) -> int | None:
        patient_id = None if self._principal.role == UserRole.PATIENT else counterpart_id
        if patient_id in self._cache:
            return self._cache[patient_id]

        try:
            pregnancy = await self._reader.get_current(patient_id)
        except BackendError as exc:
            logger.warning("Pregnancy lookup failed (patient=%s): %s", patient_id, exc.detail)
            return None

        if pregnancy is None:
            logger.info(
                "No pregnancy record for %s (patient=%s)",
                self._principal.principal_key, patient_id,
            )
            return None

        self._cache[patient_id] = pregnancy.id
        return pregnancy.id
