from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.fields import CanonicalField
from ..tabular.reader import DEFAULT_MAX_FILE_SIZE

"""Config loader.

Responsibilities:
- Load YAML config (default: config/import.yml)
- Validate against the bundled JSON schema (unknown keys rejected)
- Apply defaults (error_log_dir=./logs, max_file_size_bytes=5 MiB)
"""

__all__ = [
    "SCHEMA_DIR",
    "DEFAULT_CONFIG_PATH",
    "ConfigError",
    "ImportConfig",
    "validate_against_schema",
    "load_config",
]

SCHEMA_DIR = Path(__file__).parent / "schemas"
SCHEMA_PATH = SCHEMA_DIR / "import_config.json"
DEFAULT_CONFIG_PATH = Path("config/import.yml")


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class ImportConfig:
    gazetteer: str | None = None  # reference data file (YAML / JSON)
    error_log_dir: str = "./logs"
    max_file_size_bytes: int = DEFAULT_MAX_FILE_SIZE
    header_synonyms: dict[str, CanonicalField] = field(default_factory=dict)


def validate_against_schema(data: Any, schema_path: Path) -> None:
    """Validate `data` against a JSON schema file.

    Raises:
        ConfigError: Schema file missing / not JSON, or `data` violates it
    """
    if not schema_path.exists():
        raise ConfigError(f"schema not found: {schema_path}")
    try:
        schema = json.loads(schema_path.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def load_config(path: Path) -> ImportConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e

    validate_against_schema(data, SCHEMA_PATH)

    synonyms = {
        str(header): CanonicalField(target)
        for header, target in (data.get("header_synonyms") or {}).items()
    }
    return ImportConfig(
        gazetteer=data.get("gazetteer"),
        error_log_dir=data.get("error_log_dir", "./logs"),
        max_file_size_bytes=data.get("max_file_size_bytes", DEFAULT_MAX_FILE_SIZE),
        header_synonyms=synonyms,
    )
