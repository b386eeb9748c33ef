from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

"""Batch processing result models (CLI / server-side batch use).

Each file is still an independent import; these models only aggregate the
outcome of several imports for the SUMMARY line and exit code.
"""

__all__ = [
    "FileStatus",
    "FileStat",
    "ProcessingResult",
]


class FileStatus(Enum):
    """Outcome of one file import: success (rows produced) or failed (fatal error)."""
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class FileStat:
    """Per-file processing statistics."""
    file_name: str
    status: str  # success/failed
    rows: int  # imported rows (0 when failed)
    invalid_rows: int  # rows with a non-empty error map
    orders: int  # distinct orders (grouped Shopify rows count once)
    elapsed_seconds: float
    error: str | None = None  # fatal parse error message


@dataclass(frozen=True)
class ProcessingResult:
    """Aggregated results for a batch of imports."""
    success_files: int
    failed_files: int
    total_rows: int
    invalid_rows: int
    total_orders: int
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    file_stats: list[FileStat] | None = None

    @property
    def has_problems(self) -> bool:
        return self.failed_files > 0 or self.invalid_rows > 0
