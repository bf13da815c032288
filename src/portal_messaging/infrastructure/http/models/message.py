from __future__ import annotations

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class MessagePayload(BaseModel):
    """Message as returned by ``GET /messages`` and ``POST /messages``."""

    id: int
    pregnancy_id: int = Field(validation_alias=AliasChoices("pregnancyId", "pregnancy_id"))
    from_user_id: int = Field(validation_alias=AliasChoices("fromUserId", "fromId", "from_id"))
    to_user_id: int = Field(validation_alias=AliasChoices("toUserId", "toId", "to_id"))
    message: str
    timestamp: datetime
    read: bool = False

    model_config = ConfigDict(extra="ignore")


class CreateMessagePayload(BaseModel):
    pregnancy_id: int = Field(serialization_alias="pregnancyId")
    to_user_id: int = Field(serialization_alias="toUserId")
    message: str
