from __future__ import annotations

from dataclasses import dataclass

"""Reference data (gazetteer) models: governorates and their cities."""

__all__ = [
    "Governorate",
    "City",
]


@dataclass(frozen=True)
class Governorate:
    id: int
    name_en: str
    name_ar: str


@dataclass(frozen=True)
class City:
    id: int
    name_en: str
    name_ar: str
    governorate_id: int  # owning Governorate.id
