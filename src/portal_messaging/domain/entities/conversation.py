from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ConversationKey:
    """Identifies one two-party thread inside a pregnancy."""

    pregnancy_id: int
    counterpart_id: int
