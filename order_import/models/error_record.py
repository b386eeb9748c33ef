from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""ErrorRecord model for the row-level validation error log.

One record per (row, field) validation error, written as JSON Lines by
`order_import.logging.error_log.ErrorLogBuffer`. File-level failures use
row=-1 and field="<FILE_LEVEL>".
"""

__all__ = [
    "ErrorRecord",
    "FILE_LEVEL",
]

FILE_LEVEL = "<FILE_LEVEL>"


@dataclass(frozen=True)
class ErrorRecord:
    """Structured error record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        file: Source file name
        row: 1-based data row number, -1 for file-level errors
        field: Canonical field identifier (or FILE_LEVEL)
        error_code: Symbolic error code (e.g. "invalidMobile") or fatal error class
        value: Offending cell value as text
    """
    timestamp: str
    file: str
    row: int
    field: str
    error_code: str
    value: str

    @staticmethod
    def create(file: str, row: int, field: str, error_code: str, value: str = "") -> ErrorRecord:
        """Create a new ErrorRecord stamped with the current UTC time."""
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(
            timestamp=ts,
            file=file,
            row=row,
            field=field,
            error_code=error_code,
            value=value,
        )

    def to_json_line(self) -> str:
        # Arabic values stay readable in the log
        return json.dumps(asdict(self), ensure_ascii=False)
