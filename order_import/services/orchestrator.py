from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from datetime import UTC, datetime
from pathlib import Path

from ..config.loader import ImportConfig
from ..logging.error_log import ErrorLogBuffer
from ..models.fields import CanonicalField
from ..models.import_result import ImportResult
from ..models.location import City, Governorate
from ..models.processing_result import FileStat, FileStatus, ProcessingResult
from ..tabular.reader import DEFAULT_MAX_FILE_SIZE, ImportFileError, parse_import_file
from .column_mapper import auto_map_columns
from .locations import resolve_location_ids
from .materializer import map_rows_to_orders
from .progress import ProgressTracker
from .shopify import ORDER_ID_COLUMN, adjust_shopify_mapping, is_shopify_export, preprocess_shopify_rows
from .summary import render_counts
from .validator import validate_all_rows

"""Import pipeline orchestration.

`run_import` is the whole pipeline for one in-memory file:

    parse -> map columns -> (Shopify preprocess) -> materialize rows
          -> resolve locations -> validate

It reads no ambient state: the file bytes, reference data and synonyms come in
as arguments and everything produced is returned. `process_files` runs one
independent import per file for batch / CLI use and aggregates the metrics.
"""

__all__ = [
    "ProcessingError",
    "run_import",
    "process_files",
]

logger = logging.getLogger(__name__)


class ProcessingError(Exception):
    """Batch-level fatal error (nothing could be processed)."""


def run_import(
    content: bytes,
    filename: str,
    governorates: Sequence[Governorate] = (),
    cities: Iterable[City] = (),
    *,
    extra_synonyms: Mapping[str, CanonicalField] | None = None,
    max_file_size: int | None = DEFAULT_MAX_FILE_SIZE,
) -> ImportResult:
    """Parse, normalize, resolve and validate one file.

    Args:
        content: Raw file bytes
        filename: Original file name (extension selects the parser)
        governorates: Reference governorates; location resolution is skipped when empty
        cities: Reference cities of all governorates
        extra_synonyms: Additional header -> field synonyms
        max_file_size: Size limit in bytes (None = unlimited)

    Returns:
        ImportResult with validated rows and the batch error count

    Raises:
        ImportFileError: Fatal parse error; no rows are produced
    """
    table = parse_import_file(content, filename, max_file_size)
    mapping = auto_map_columns(table.headers, extra_synonyms)

    shopify = is_shopify_export(table.headers)
    order_ref_column: str | None = None
    if shopify:
        preprocess_shopify_rows(table.rows)
        mapping = adjust_shopify_mapping(mapping)
        order_ref_column = ORDER_ID_COLUMN
        logger.debug("%s: shopify export detected", filename)

    rows = map_rows_to_orders(table.rows, mapping, order_ref_column)
    if governorates:
        resolve_location_ids(rows, governorates, cities)
    error_count = validate_all_rows(rows)

    return ImportResult(
        file_name=filename,
        headers=table.headers,
        mapping=mapping,
        rows=rows,
        is_shopify=shopify,
        encoding=table.encoding,
        error_count=error_count,
    )


def process_files(
    paths: Sequence[Path],
    config: ImportConfig,
    governorates: Sequence[Governorate] = (),
    cities: Sequence[City] = (),
    error_log: ErrorLogBuffer | None = None,
) -> tuple[ProcessingResult, list[ImportResult]]:
    """Import each file independently and aggregate the outcome.

    A fatal error in one file is recorded (error log + FileStat) and the batch
    continues with the next file. Row validation errors are appended to the
    error log with 1-based data row numbers.

    Raises:
        ProcessingError: When `paths` is empty
    """
    if not paths:
        raise ProcessingError("no input files given")

    start_time = datetime.now(UTC)
    error_log = error_log if error_log is not None else ErrorLogBuffer(Path(config.error_log_dir))

    results: list[ImportResult] = []
    file_stats: list[FileStat] = []
    success = failed = total_rows = invalid_rows = total_orders = 0

    with ProgressTracker(len(paths)) as progress:
        for path in paths:
            progress.start_file(path)
            file_start = datetime.now(UTC)
            try:
                result = run_import(
                    path.read_bytes(),
                    path.name,
                    governorates,
                    cities,
                    extra_synonyms=config.header_synonyms,
                    max_file_size=config.max_file_size_bytes,
                )
            except (ImportFileError, OSError) as e:
                failed += 1
                elapsed = (datetime.now(UTC) - file_start).total_seconds()
                logger.error("%s: %s", path.name, e)
                error_log.append_file_error(path.name, type(e).__name__, str(e))
                file_stats.append(
                    FileStat(path.name, FileStatus.FAILED.value, 0, 0, 0, elapsed, error=str(e))
                )
                progress.finish_file(success=success, failed=failed)
                continue

            success += 1
            results.append(result)
            for number, row in enumerate(result.rows, start=1):
                if row.errors:
                    error_log.append_row_errors(path.name, number, row)
            total_rows += result.item_count
            invalid_rows += result.error_count
            total_orders += result.order_count

            unmapped = result.unmapped_headers
            if unmapped:
                logger.warning("%s: unmapped columns %s", path.name, unmapped)
            logger.info("%s: %s, invalid_rows=%d", path.name, render_counts(result), result.error_count)

            elapsed = (datetime.now(UTC) - file_start).total_seconds()
            file_stats.append(
                FileStat(
                    file_name=path.name,
                    status=FileStatus.SUCCESS.value,
                    rows=result.item_count,
                    invalid_rows=result.error_count,
                    orders=result.order_count,
                    elapsed_seconds=elapsed,
                )
            )
            progress.finish_file(success=success, failed=failed, rows=total_rows)

    try:
        log_path = error_log.flush()
    except OSError as e:
        logger.warning("error log flush failed: %s", e)
    else:
        if log_path is not None:
            logger.info("error log written: %s", log_path)

    end_time = datetime.now(UTC)
    return (
        ProcessingResult(
            success_files=success,
            failed_files=failed,
            total_rows=total_rows,
            invalid_rows=invalid_rows,
            total_orders=total_orders,
            start_time=start_time,
            end_time=end_time,
            elapsed_seconds=(end_time - start_time).total_seconds(),
            file_stats=file_stats,
        ),
        results,
    )
