from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Pregnancy:
    id: int
    patient_id: int
