from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

"""ParsedTable: tabular parser output (header row + raw records)."""

__all__ = [
    "RawRecord",
    "ParsedTable",
]

# Original header text -> cell value (string, or raw primitive before stringification)
RawRecord = dict[str, Any]


@dataclass
class ParsedTable:
    headers: list[str]
    rows: list[RawRecord] = field(default_factory=list)
    encoding: str | None = None  # CSV only: encoding chosen by the detector
