from __future__ import annotations

from enum import StrEnum


class UserRole(StrEnum):
    PATIENT = "patient"
    CLINICIAN = "clinician"

    @property
    def counterpart(self) -> UserRole:
        """Role of the parties this role may message."""
        if self is UserRole.PATIENT:
            return UserRole.CLINICIAN
        return UserRole.PATIENT


class SyncState(StrEnum):
    IDLE = "idle"
    SCHEDULED = "scheduled"
    FETCHING = "fetching"
    RECONCILED = "reconciled"
    FAILED = "failed"


class DeliveryStatus(StrEnum):
    DELIVERED = "delivered"
    READ = "read"


class SendStatus(StrEnum):
    SENT = "sent"
    REJECTED = "rejected"
    FAILED = "failed"
