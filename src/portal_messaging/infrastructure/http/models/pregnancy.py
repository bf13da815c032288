from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class PregnancyPayload(BaseModel):
    id: int
    patient_id: int = Field(validation_alias=AliasChoices("patientId", "patient_id"))

    model_config = ConfigDict(extra="ignore")
