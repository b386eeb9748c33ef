from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

from ..models.error_record import FILE_LEVEL, ErrorRecord
from ..models.order_row import ImportedOrderRow, get_canonical_field

"""Validation error log buffering.

- JSON Lines, fixed key set (see ErrorRecord)
- one `errors-YYYYMMDD-HHMMSS.log` (UTC) per run, created on first flush
- records are buffered and written in one go at flush()
"""

__all__ = [
    "ErrorRecord",
    "ErrorLogBuffer",
    "DEFAULT_LOGS_DIR",
]

DEFAULT_LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"


class ErrorLogBuffer:
    """In-memory buffer for error records. Flush writes JSON Lines.

    Not thread safe; one buffer per batch run.
    """
    def __init__(self, logs_dir: Path | None = None) -> None:
        self._logs_dir = logs_dir or DEFAULT_LOGS_DIR
        self._records: list[ErrorRecord] = []
        self._file_path: Path | None = None

    @property
    def file_path(self) -> Path:
        if self._file_path is None:
            self._logs_dir.mkdir(parents=True, exist_ok=True)
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._file_path = self._logs_dir / f"errors-{stamp}.log"
        return self._file_path

    def append(self, record: ErrorRecord) -> None:
        self._records.append(record)

    def append_row_errors(self, file: str, row_number: int, row: ImportedOrderRow) -> int:
        """Append one record per field error of `row`. Returns the number appended."""
        for target, code in row.errors.items():
            value = get_canonical_field(row, target)
            self.append(ErrorRecord.create(file, row_number, target.value, code.value, str(value)))
        return len(row.errors)

    def append_file_error(self, file: str, error_code: str, message: str) -> None:
        self.append(ErrorRecord.create(file, -1, FILE_LEVEL, error_code, message))

    def __len__(self) -> int:  # pragma: no cover (trivial)
        return len(self._records)

    def flush(self) -> Path | None:
        """Write buffered records; returns the log path, or None when nothing was written."""
        if not self._records:
            return None
        fp = self.file_path
        with fp.open("a", encoding="utf-8") as f:
            for r in self._records:
                f.write(r.to_json_line() + "\n")
        self._records.clear()
        return fp
