from __future__ import annotations

from pydantic import ValidationError as PayloadError

from portal_messaging.application.exceptions import BackendError
from portal_messaging.domain.entities.pregnancy import Pregnancy
from portal_messaging.infrastructure.http.client import PortalHttpClient
from portal_messaging.infrastructure.http.models.pregnancy import PregnancyPayload


class PregnancyReaderRepo:
    def __init__(self, client: PortalHttpClient) -> None:
        self._client = client

    async def get_current(self, patient_id: int | None = None) -> Pregnancy | None:
        params = {"patientId": patient_id} if patient_id is not None else None
        data = await self._client.request("GET", "/pregnancy", params=params, allow_not_found=True)
        if data is None:
            return None
        try:
            payload = PregnancyPayload.model_validate(data)
        except PayloadError as exc:
            raise BackendError(f"Malformed pregnancy record: {exc}") from exc
        return Pregnancy(id=payload.id, patient_id=payload.patient_id)
