from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from typing import Any

from ..models.fields import CanonicalField
from ..models.import_result import ColumnMapping
from ..models.order_row import ImportedOrderRow, new_row_id, set_canonical_field
from ..models.parsed_table import RawRecord

"""Row materializer: raw records + column mapping -> ImportedOrderRow list.

Rules:
- First non-empty value wins when several headers map to the same field
  (e.g. "Billing Phone", "Shipping Phone" and "Phone" -> customerMobile).
- Blank cells never overwrite defaults.
- quantity / unitPrice parse leniently (leading number) and fall back to 1 / 0;
  NaN never reaches the model.
"""

__all__ = [
    "DEFAULT_QUANTITY",
    "DEFAULT_UNIT_PRICE",
    "parse_quantity",
    "parse_unit_price",
    "coerce_field_value",
    "map_rows_to_orders",
]

logger = logging.getLogger(__name__)

DEFAULT_QUANTITY = 1
DEFAULT_UNIT_PRICE = 0.0

_INT_PREFIX_RE = re.compile(r"^[+-]?\d+")
_FLOAT_PREFIX_RE = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")
# Arabic-Indic and Eastern Arabic-Indic digits -> ASCII
_DIGIT_TRANSLATION = str.maketrans("٠١٢٣٤٥٦٧٨٩۰۱۲۳۴۵۶۷۸۹", "01234567890123456789")


def _clean_number_text(value: Any) -> str:
    text = "" if value is None else str(value).strip()
    return text.translate(_DIGIT_TRANSLATION).replace(",", "")


def parse_quantity(value: Any) -> int:
    """Leading integer of `value` ("3 pcs" -> 3), DEFAULT_QUANTITY when none."""
    match = _INT_PREFIX_RE.match(_clean_number_text(value))
    return int(match.group(0)) if match else DEFAULT_QUANTITY


def parse_unit_price(value: Any) -> float:
    """Leading decimal number of `value` ("350 EGP" -> 350.0), DEFAULT_UNIT_PRICE when none."""
    match = _FLOAT_PREFIX_RE.match(_clean_number_text(value))
    if not match:
        return DEFAULT_UNIT_PRICE
    number = float(match.group(0))
    # inf (e.g. "1e999") is as useless as NaN here
    return number if number not in (float("inf"), float("-inf")) else DEFAULT_UNIT_PRICE


def coerce_field_value(target: CanonicalField, value: Any) -> Any:
    """Convert a raw value to the type stored for `target`."""
    if target is CanonicalField.QUANTITY:
        return parse_quantity(value)
    if target is CanonicalField.UNIT_PRICE:
        return parse_unit_price(value)
    return "" if value is None else str(value).strip()


def _materialize(index: int, raw: RawRecord, pairs: list[tuple[str, CanonicalField]], order_ref_column: str | None) -> ImportedOrderRow:
    row = ImportedOrderRow(row_id=new_row_id(index))
    if order_ref_column is not None:
        row.order_ref = str(raw.get(order_ref_column) or "").strip()

    filled: set[CanonicalField] = set()
    for header, target in pairs:
        if target in filled:
            continue
        value = raw.get(header)
        text = "" if value is None else str(value).strip()
        if not text:
            continue
        set_canonical_field(row, target, coerce_field_value(target, text))
        filled.add(target)
    return row


def map_rows_to_orders(
    raw_rows: Iterable[RawRecord],
    mapping: ColumnMapping,
    order_ref_column: str | None = None,
) -> list[ImportedOrderRow]:
    """Apply `mapping` to every raw record.

    Args:
        raw_rows: Raw records (already Shopify-preprocessed when applicable)
        mapping: Header -> canonical field (None = unmapped), in header order
        order_ref_column: Column holding the order reference (Shopify "Name");
            None for ungrouped sources

    Returns:
        One ImportedOrderRow per raw record, in file order
    """
    pairs = [(header, target) for header, target in mapping.items() if target is not None]
    rows = [_materialize(i, raw, pairs, order_ref_column) for i, raw in enumerate(raw_rows)]
    logger.debug("materialized rows=%d mapped_columns=%d", len(rows), len(pairs))
    return rows
