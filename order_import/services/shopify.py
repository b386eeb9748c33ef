from __future__ import annotations

import logging
from collections.abc import Iterable

from ..models.import_result import ColumnMapping
from ..models.parsed_table import RawRecord

"""Shopify order export detection and pre-processing.

Shopify exports one row per line item. Order-level columns (customer,
address, payment...) are only filled on the first row of each order, so the
rows are forward-filled by order `Name` before column mapping is applied.
"""

__all__ = [
    "SHOPIFY_MARKERS",
    "ORDER_ID_COLUMN",
    "ORDER_LEVEL_FIELDS",
    "is_shopify_export",
    "normalize_payment_value",
    "preprocess_shopify_rows",
    "adjust_shopify_mapping",
]

logger = logging.getLogger(__name__)

SHOPIFY_MARKERS = (
    "Lineitem name",
    "Lineitem quantity",
    "Shipping Name",
    "Financial Status",
)

ORDER_ID_COLUMN = "Name"

ORDER_LEVEL_FIELDS = (
    "Shipping Name",
    "Shipping Phone",
    "Shipping Address1",
    "Shipping Address2",
    "Shipping Street",
    "Shipping City",
    "Shipping Province",
    "Shipping Province Name",
    "Shipping Zip",
    "Shipping Country",
    "Billing Name",
    "Billing Phone",
    "Payment Method",
    "Financial Status",
    "Notes",
    "Email",
    "Phone",
)

ADDRESS_PRIMARY = "Shipping Address1"
ADDRESS_SECONDARY = "Shipping Address2"
PAYMENT_COLUMNS = ("Payment Method", "Financial Status")

_CARD_TOKENS = ("shopify payments", "stripe", "klarna", "paypal", "apple pay")


def _cell(row: RawRecord, column: str) -> str:
    value = row.get(column)
    return "" if value is None else str(value).strip()


def is_shopify_export(headers: Iterable[str]) -> bool:
    """True when at least two Shopify marker headers are present verbatim."""
    header_set = {h.strip() for h in headers}
    return sum(1 for marker in SHOPIFY_MARKERS if marker in header_set) >= 2


def normalize_payment_value(raw: str) -> str | None:
    """Map a Shopify gateway / financial status to "card" or "cash".

    Returns None when the value is not recognized (left for manual correction).
    """
    text = raw.strip().lower()
    if text == "paid" or any(token in text for token in _CARD_TOKENS):
        return "card"
    if text == "cod" or "cash" in text:
        return "cash"
    return None


def _forward_fill(rows: list[RawRecord]) -> int:
    """Copy order-level values from each order's first row into its line-item rows.

    A new order starts at a row whose `Name` differs from the current one.
    Line-item rows either leave `Name` blank or repeat it. The group cache is
    local to this call and starts empty.
    """
    filled = 0
    group: dict[str, str] | None = None
    for row in rows:
        order_name = _cell(row, ORDER_ID_COLUMN)
        if order_name and (group is None or order_name != group[ORDER_ID_COLUMN]):
            group = {ORDER_ID_COLUMN: order_name}
            for column in ORDER_LEVEL_FIELDS:
                value = _cell(row, column)
                if value:
                    group[column] = value
            continue
        if group is None:
            # line items before any order name: nothing to copy from
            continue
        for column in ORDER_LEVEL_FIELDS:
            if not _cell(row, column) and column in group:
                row[column] = group[column]
                filled += 1
        row[ORDER_ID_COLUMN] = group[ORDER_ID_COLUMN]
    return filled


def _join_addresses(rows: list[RawRecord]) -> None:
    for row in rows:
        addr1 = _cell(row, ADDRESS_PRIMARY)
        addr2 = _cell(row, ADDRESS_SECONDARY)
        if not (addr1 and addr2):
            continue
        suffix = f", {addr2}"
        if addr1.endswith(suffix):
            continue  # already joined
        row[ADDRESS_PRIMARY] = addr1 + suffix


def _normalize_payments(rows: list[RawRecord]) -> None:
    for row in rows:
        raw = _cell(row, "Payment Method") or _cell(row, "Financial Status")
        normalized = normalize_payment_value(raw)
        if normalized is None:
            continue
        # 存在する支払い列すべてに書き戻す (first-wins マッピングで生の値が選ばれないように)
        for column in PAYMENT_COLUMNS:
            if column in row:
                row[column] = normalized


def preprocess_shopify_rows(rows: list[RawRecord]) -> list[RawRecord]:
    """Forward-fill, join address lines and normalize payments, in place.

    Idempotent: running it again on its own output changes nothing.

    Returns:
        The same list, for chaining
    """
    filled = _forward_fill(rows)
    _join_addresses(rows)
    _normalize_payments(rows)
    logger.debug("shopify preprocessing rows=%d forward_filled_cells=%d", len(rows), filled)
    return rows


def adjust_shopify_mapping(mapping: ColumnMapping) -> ColumnMapping:
    """Unmap the order-identifier column.

    In Shopify exports `Name` holds the order number (e.g. "#1001"), not the
    customer; it becomes the order reference instead of a customer name.
    """
    adjusted = dict(mapping)
    for header in adjusted:
        if header.strip() == ORDER_ID_COLUMN:
            adjusted[header] = None
    return adjusted
