from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence
from typing import TypeVar

from ..models.location import City, Governorate
from ..models.order_row import ImportedOrderRow

"""Location resolver: free-text governorate / city -> gazetteer ids.

Matching per field: exact match on the normalized English or Arabic name
first, then substring containment in either direction. Governorates are
matched against the whole list; cities only against the cities of the
already-resolved governorate. An unresolved governorate means the city is not
attempted. Unresolved rows keep their original text and no ids.
"""

__all__ = [
    "normalize_place_name",
    "match_place",
    "resolve_row_location",
    "resolve_location_ids",
]

logger = logging.getLogger(__name__)

Place = TypeVar("Place", Governorate, City)

_AR_GOVERNORATE = "محافظه"  # after ta marbuta folding
_EN_SUFFIX_RE = re.compile(r"\s+(?:governorate|gov\.?)$")
_WHITESPACE_RE = re.compile(r"\s+")


def normalize_place_name(value: str) -> str:
    """Normalize a place name for comparison.

    trim + lowercase, drop trailing "governorate" / "gov." and the Arabic
    "محافظة" prefix or suffix, fold ة (ta marbuta) to ه.
    """
    text = _WHITESPACE_RE.sub(" ", value.strip().lower())
    text = _EN_SUFFIX_RE.sub("", text).replace("ة", "ه")
    if text.startswith(_AR_GOVERNORATE):
        text = text[len(_AR_GOVERNORATE):]
    if text.endswith(_AR_GOVERNORATE):
        text = text[: -len(_AR_GOVERNORATE)]
    return text.strip()


def _candidate_names(place: Governorate | City) -> list[str]:
    names = (normalize_place_name(place.name_en), normalize_place_name(place.name_ar))
    return [n for n in names if n]


def match_place(value: str, candidates: Sequence[Place]) -> Place | None:
    """Return the first exact match, else the first substring match, else None."""
    needle = normalize_place_name(value)
    if not needle:
        return None
    for place in candidates:
        if needle in _candidate_names(place):
            return place
    for place in candidates:
        if any(needle in name or name in needle for name in _candidate_names(place)):
            return place
    return None


def resolve_row_location(
    row: ImportedOrderRow,
    governorates: Sequence[Governorate],
    cities_by_governorate: dict[int, list[City]],
) -> bool:
    """Resolve one row in place. Returns True when the governorate resolved.

    On success the display text is rewritten to the canonical English name.
    """
    row.governorate_id = None
    row.city_id = None
    gov = match_place(row.governorate, governorates)
    if gov is None:
        return False
    row.governorate_id = gov.id
    row.governorate = gov.name_en

    city = match_place(row.city, cities_by_governorate.get(gov.id, []))
    if city is not None:
        row.city_id = city.id
        row.city = city.name_en
    return True


def resolve_location_ids(
    rows: Iterable[ImportedOrderRow],
    governorates: Sequence[Governorate],
    cities: Iterable[City],
) -> int:
    """Resolve governorate / city ids for every row, in place.

    Args:
        rows: Rows to annotate
        governorates: Full governorate reference list
        cities: All cities (any governorate); scoped per governorate here

    Returns:
        Number of rows whose governorate resolved
    """
    cities_by_governorate: dict[int, list[City]] = {}
    for city in cities:
        cities_by_governorate.setdefault(city.governorate_id, []).append(city)

    resolved = 0
    total = 0
    for row in rows:
        total += 1
        if resolve_row_location(row, governorates, cities_by_governorate):
            resolved += 1
    logger.debug("location resolution resolved=%d/%d", resolved, total)
    return resolved
