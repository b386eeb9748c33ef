from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from ..models.location import City, Governorate
from .loader import SCHEMA_DIR, ConfigError, validate_against_schema

"""Gazetteer (governorate / city reference data) loading.

In the dashboard this data comes from the reference data API; batch and test
runs read the same shape from a YAML or JSON file:

    governorates:
      - id: 1
        name_en: Cairo
        name_ar: القاهرة
        cities:
          - {id: 101, name_en: Nasr City, name_ar: مدينة نصر}
"""

__all__ = [
    "Gazetteer",
    "gazetteer_from_dict",
    "load_gazetteer",
]

logger = logging.getLogger(__name__)

GAZETTEER_SCHEMA_PATH = SCHEMA_DIR / "gazetteer.json"

Gazetteer = tuple[list[Governorate], list[City]]


def gazetteer_from_dict(data: Any) -> Gazetteer:
    """Build reference lists from API-shaped data (validated first)."""
    validate_against_schema(data, GAZETTEER_SCHEMA_PATH)
    governorates: list[Governorate] = []
    cities: list[City] = []
    for gov in data["governorates"]:
        governorates.append(Governorate(id=gov["id"], name_en=gov["name_en"], name_ar=gov["name_ar"]))
        for city in gov.get("cities") or []:
            cities.append(
                City(id=city["id"], name_en=city["name_en"], name_ar=city["name_ar"], governorate_id=gov["id"])
            )
    return governorates, cities


def load_gazetteer(path: Path) -> Gazetteer:
    """Load governorates and cities from a .yml / .yaml / .json file.

    Raises:
        ConfigError: Missing file, unparsable content or schema violation
    """
    if not path.exists():
        raise ConfigError(f"gazetteer file not found: {path}")
    text = path.read_text(encoding="utf-8")
    try:
        if path.suffix.lower() == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigError(f"invalid gazetteer file {path}: {e}") from e
    governorates, cities = gazetteer_from_dict(data or {})
    logger.debug("gazetteer loaded governorates=%d cities=%d", len(governorates), len(cities))
    return governorates, cities
