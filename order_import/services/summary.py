from __future__ import annotations

from ..models.import_result import ImportResult
from ..models.processing_result import ProcessingResult

"""SUMMARY line and per-file count rendering."""

__all__ = [
    "format_seconds",
    "render_summary_line",
    "render_counts",
]


def format_seconds(value: float) -> str:
    """Integers without decimals, tiny values without scientific notation."""
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return f"{value:.3f}".rstrip("0").rstrip(".")


def render_summary_line(total_files: int, result: ProcessingResult) -> str:
    """Render the batch SUMMARY line.

    Examples:
        >>> from datetime import datetime, timezone
        >>> t = datetime(2024, 1, 1, tzinfo=timezone.utc)
        >>> result = ProcessingResult(
        ...     success_files=1, failed_files=0, total_rows=12, invalid_rows=2,
        ...     total_orders=5, start_time=t, end_time=t, elapsed_seconds=2.0,
        ... )
        >>> render_summary_line(1, result)
        'SUMMARY files=1/1 success=1 failed=0 rows=12 invalid_rows=2 orders=5 elapsed_sec=2'
    """
    return (
        f"SUMMARY files={total_files}/{total_files} "
        f"success={result.success_files} "
        f"failed={result.failed_files} "
        f"rows={result.total_rows} "
        f"invalid_rows={result.invalid_rows} "
        f"orders={result.total_orders} "
        f"elapsed_sec={format_seconds(result.elapsed_seconds)}"
    )


def render_counts(result: ImportResult) -> str:
    """`N items across M orders` for grouped imports, `N rows` otherwise."""
    if result.is_shopify:
        return f"{result.item_count} items across {result.order_count} orders"
    return f"{result.item_count} rows"
