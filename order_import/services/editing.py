from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

from ..models.fields import CanonicalField
from ..models.order_row import ImportedOrderRow, set_canonical_field
from .materializer import coerce_field_value
from .validator import validate_order_row

"""Preview / edit helpers: manual correction, error rendering, submission split.

`translate` is the external localization lookup (error code -> message); this
module only passes symbolic codes through it and never stores the result.
"""

__all__ = [
    "Translate",
    "update_row_field",
    "describe_errors",
    "collect_error_reasons",
    "partition_rows",
]

Translate = Callable[[str], str]


def update_row_field(row: ImportedOrderRow, target: CanonicalField, value: Any) -> bool:
    """Apply a manual edit and revalidate the row.

    Editing governorate text drops both resolved ids; editing city text drops
    the city id only (the governorate stays resolved).

    Returns:
        True when the row is valid after the edit
    """
    target = CanonicalField(target)
    set_canonical_field(row, target, coerce_field_value(target, value))
    if target is CanonicalField.GOVERNORATE:
        row.governorate_id = None
        row.city_id = None
    elif target is CanonicalField.CITY:
        row.city_id = None
    return validate_order_row(row)


def describe_errors(row: ImportedOrderRow, translate: Translate) -> dict[CanonicalField, str]:
    """Render the row's error codes for humans, keyed by field."""
    return {target: translate(code.value) for target, code in row.errors.items()}


def collect_error_reasons(rows: Iterable[ImportedOrderRow], translate: Translate) -> list[str]:
    """Distinct translated reasons across rows, in first-seen order."""
    reasons: dict[str, None] = {}
    for row in rows:
        for code in row.errors.values():
            reasons.setdefault(translate(code.value), None)
    return list(reasons)


def partition_rows(rows: Iterable[ImportedOrderRow]) -> tuple[list[ImportedOrderRow], list[ImportedOrderRow]]:
    """Revalidate every row and split into (valid, invalid), keeping order."""
    valid: list[ImportedOrderRow] = []
    invalid: list[ImportedOrderRow] = []
    for row in rows:
        (valid if validate_order_row(row) else invalid).append(row)
    return valid, invalid
