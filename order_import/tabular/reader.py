from __future__ import annotations

import csv
import io
import logging
import numbers
from datetime import datetime, time
from pathlib import Path
from typing import Any

import pandas as pd

from ..models.parsed_table import ParsedTable, RawRecord
from .encoding import decode_bytes

"""Tabular parser: CSV / Excel bytes -> header row + raw records.

- CSV: bytes are decoded with the detected encoding, first row is the header.
- Workbook (.xlsx / .xls): first sheet only, first row is the header. Raw cell
  types are kept until stringification so numeric phone numbers can get their
  leading zero back.

Blank rows (every cell empty) are skipped in both paths. Any failure here is
fatal for the whole import: no partial tables are returned.
"""

__all__ = [
    "ImportFileError",
    "UnsupportedFileTypeError",
    "EmptyFileError",
    "FileTooLargeError",
    "TabularParseError",
    "SUPPORTED_EXTENSIONS",
    "DEFAULT_MAX_FILE_SIZE",
    "parse_csv",
    "parse_workbook",
    "parse_import_file",
    "is_phone_header",
]

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = ("csv", "xlsx", "xls")
DEFAULT_MAX_FILE_SIZE = 5 * 1024 * 1024  # 5 MiB

_DELIMITER_CANDIDATES = (",", ";", "\t", "|")
_PHONE_HEADER_TOKENS = ("phone", "mobile", "موبايل", "هاتف", "تليفون", "محمول", "جوال")


class ImportFileError(Exception):
    """Base class for fatal, whole-file import errors."""


class UnsupportedFileTypeError(ImportFileError):
    """Raised when the file extension is not csv / xlsx / xls."""


class EmptyFileError(ImportFileError):
    """Raised for empty files, workbooks without sheets, or files without data rows."""


class FileTooLargeError(ImportFileError):
    """Raised when the upload exceeds the configured size limit."""


class TabularParseError(ImportFileError):
    """Raised when the byte stream cannot be read as CSV / workbook."""


def is_phone_header(header: str) -> bool:
    """Header-name heuristic for phone / mobile columns (English + Arabic)."""
    text = header.strip().lower()
    return any(token in text for token in _PHONE_HEADER_TOKENS)


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def _cell_to_str(value: Any, phone: bool = False) -> str:
    """Stringify a raw cell value.

    Integral floats lose their ".0". In phone columns a numeric value that
    serializes to exactly 10 digits gets its leading zero restored
    (Egyptian mobiles are 11 digits starting with 0; Excel drops the zero).
    """
    if _is_blank(value):
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return str(value).upper()
    if isinstance(value, numbers.Real):
        if isinstance(value, numbers.Integral):
            text = str(int(value))
        elif float(value).is_integer():
            text = str(int(value))
        else:
            text = str(float(value))
        if phone and len(text) == 10 and text.isdigit() and not text.startswith("0"):
            return "0" + text
        return text
    if isinstance(value, datetime):
        # 時刻 0:00 の日付セルは日付のみ (Excel の表示と同じ)
        if value.time() == time(0):
            return value.strftime("%Y-%m-%d")
        return value.strftime("%Y-%m-%d %H:%M:%S")
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return str(value)


def _records_from_frame(df: pd.DataFrame, fix_phones: bool) -> ParsedTable:
    """Use the first frame row as header and build one RawRecord per data row."""
    if df.shape[0] == 0:
        raise EmptyFileError("file has no header row")
    header_cells = df.iloc[0].tolist()

    # 列位置 -> ヘッダ名 (空ヘッダ / 重複ヘッダの列は捨てる)
    columns: list[tuple[int, str]] = []
    seen: set[str] = set()
    for idx, cell in enumerate(header_cells):
        header = _cell_to_str(cell).strip()
        if not header:
            continue
        if header in seen:
            logger.debug("duplicate header '%s' at column %d ignored", header, idx)
            continue
        seen.add(header)
        columns.append((idx, header))
    if not columns:
        raise EmptyFileError("header row is empty")

    phone_columns = {h for _, h in columns if fix_phones and is_phone_header(h)}
    rows: list[RawRecord] = []
    for _, raw in df.iloc[1:].iterrows():
        values = raw.tolist()
        if all(_is_blank(v) for v in values):
            continue
        record: RawRecord = {}
        for idx, header in columns:
            val = values[idx] if idx < len(values) else None
            record[header] = _cell_to_str(val, phone=header in phone_columns)
        rows.append(record)
    return ParsedTable(headers=[h for _, h in columns], rows=rows)


def _sniff_delimiter(text: str) -> str:
    first_line = next((line for line in text.splitlines() if line.strip()), "")
    best = max(_DELIMITER_CANDIDATES, key=first_line.count)
    return best if first_line.count(best) > 0 else ","


def _header_width(text: str, sep: str) -> int:
    for fields in csv.reader(io.StringIO(text), delimiter=sep):
        if fields:
            return len(fields)
    return 0


def parse_csv(data: bytes) -> ParsedTable:
    """Parse CSV bytes (UTF-8 or Windows-1256, detected) into a ParsedTable.

    Rows with more fields than the header row are cut to the header width
    (stray trailing delimiters); shorter rows are padded with blanks.

    Raises:
        EmptyFileError: No content at all
        TabularParseError: Undecodable bytes or malformed delimited text
    """
    try:
        text, encoding = decode_bytes(data)
    except UnicodeDecodeError as e:
        # BOM 付きでも中身が UTF-8 でないケース
        raise TabularParseError(f"csv is not valid UTF-8: {e}") from e
    if not text.strip():
        raise EmptyFileError("csv file is empty")
    sep = _sniff_delimiter(text)
    width = _header_width(text, sep)
    try:
        df = pd.read_csv(
            io.StringIO(text),
            sep=sep,
            header=None,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            engine="python",
            on_bad_lines=lambda fields: fields[:width],
        )
    except pd.errors.EmptyDataError as e:
        raise EmptyFileError("csv file is empty") from e
    except pd.errors.ParserError as e:
        raise TabularParseError(f"invalid csv: {e}") from e
    table = _records_from_frame(df.fillna(""), fix_phones=False)
    table.encoding = encoding
    logger.debug("csv parsed encoding=%s columns=%d rows=%d", encoding, len(table.headers), len(table.rows))
    return table


def parse_workbook(data: bytes) -> ParsedTable:
    """Parse the first sheet of an .xlsx / .xls workbook into a ParsedTable.

    Raises:
        EmptyFileError: Workbook has no sheets, or the first sheet is empty
        TabularParseError: Bytes are not a readable workbook
    """
    try:
        xls = pd.ExcelFile(io.BytesIO(data))
    except Exception as e:  # openpyxl / xlrd raise their own error types
        raise TabularParseError(f"unreadable workbook: {e}") from e
    if not xls.sheet_names:
        raise EmptyFileError("workbook contains no sheets")
    sheet_name = xls.sheet_names[0]
    # ヘッダなし・dtype=object で生の型を保持 (電話番号の先頭0復元用)
    df = xls.parse(sheet_name, header=None, dtype=object, keep_default_na=False)
    if df.shape[0] == 0:
        raise EmptyFileError(f"sheet '{sheet_name}' is empty")
    table = _records_from_frame(df, fix_phones=True)
    logger.debug("workbook parsed sheet=%s columns=%d rows=%d", sheet_name, len(table.headers), len(table.rows))
    return table


def parse_import_file(
    content: bytes, filename: str, max_file_size: int | None = DEFAULT_MAX_FILE_SIZE
) -> ParsedTable:
    """Route to the CSV or workbook parser based on the file extension.

    Parameters
    ----------
    content: raw file bytes
    filename: original file name (only the extension is used)
    max_file_size: size limit in bytes; None disables the check

    Raises
    ------
    UnsupportedFileTypeError, FileTooLargeError, EmptyFileError, TabularParseError
    """
    extension = Path(filename).suffix.lower().lstrip(".")
    if extension not in SUPPORTED_EXTENSIONS:
        raise UnsupportedFileTypeError(f"Unsupported file type: .{extension}")
    if max_file_size is not None and len(content) > max_file_size:
        raise FileTooLargeError(f"file is {len(content)} bytes, limit is {max_file_size}")

    table = parse_csv(content) if extension == "csv" else parse_workbook(content)
    if not table.rows:
        raise EmptyFileError(f"{filename}: no data rows")
    return table
