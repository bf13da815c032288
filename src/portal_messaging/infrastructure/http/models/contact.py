from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from portal_messaging.domain.value_objects.enums import UserRole


class ContactPayload(BaseModel):
    id: int
    username: str
    email: str | None = None
    first_name: str = Field(default="", validation_alias=AliasChoices("firstName", "first_name"))
    last_name: str = Field(default="", validation_alias=AliasChoices("lastName", "last_name"))
    role: UserRole

    model_config = ConfigDict(extra="ignore")
