from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from portal_messaging.domain.value_objects.enums import DeliveryStatus


@dataclass(frozen=True, slots=True)
class Message:
    id: int
    pregnancy_id: int
    from_user_id: int
    to_user_id: int
    body: str
    timestamp: datetime
    read: bool = False

    def is_outbound(self, user_id: int) -> bool:
        return self.from_user_id == user_id

    def is_inbound(self, user_id: int) -> bool:
        return self.to_user_id == user_id

    def involves(self, user_id: int) -> bool:
        """Exactly one side of a valid message is ``user_id``."""
        if self.from_user_id == self.to_user_id:
            return False
        return self.is_outbound(user_id) or self.is_inbound(user_id)

    @property
    def delivery_status(self) -> DeliveryStatus:
        return DeliveryStatus.READ if self.read else DeliveryStatus.DELIVERED
