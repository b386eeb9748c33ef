from __future__ import annotations

import re
from collections.abc import Iterable

from ..models.fields import CanonicalField, ErrorCode
from ..models.order_row import ImportedOrderRow

"""Row validator: field-level business rules -> symbolic error codes.

Each pass rebuilds the row's error map from scratch, so validation is
idempotent and safe to rerun after every manual edit. Governorate, city,
payment method and vendor notes carry no hard rule here.
"""

__all__ = [
    "MOBILE_RE",
    "compute_row_errors",
    "validate_order_row",
    "validate_all_rows",
]

# 01 + 9 digits (Egyptian local mobile)
MOBILE_RE = re.compile(r"^01[0-9]{9}$")


def compute_row_errors(row: ImportedOrderRow) -> dict[CanonicalField, ErrorCode]:
    """Pure rule evaluation; does not touch the row."""
    errors: dict[CanonicalField, ErrorCode] = {}

    name = row.customer_name.strip()
    if not name:
        errors[CanonicalField.CUSTOMER_NAME] = ErrorCode.REQUIRED
    elif name.isdigit():
        # phone number pasted into the name column
        errors[CanonicalField.CUSTOMER_NAME] = ErrorCode.INVALID_NAME

    mobile = row.customer_mobile.strip()
    if not mobile:
        errors[CanonicalField.CUSTOMER_MOBILE] = ErrorCode.REQUIRED
    elif not MOBILE_RE.match(mobile):
        errors[CanonicalField.CUSTOMER_MOBILE] = ErrorCode.INVALID_MOBILE

    if not row.customer_address.strip():
        errors[CanonicalField.CUSTOMER_ADDRESS] = ErrorCode.REQUIRED
    if not row.product_name.strip():
        errors[CanonicalField.PRODUCT_NAME] = ErrorCode.REQUIRED
    if row.quantity < 1:
        errors[CanonicalField.QUANTITY] = ErrorCode.MIN_ONE
    if row.unit_price < 0:
        errors[CanonicalField.UNIT_PRICE] = ErrorCode.MIN_ZERO
    return errors


def validate_order_row(row: ImportedOrderRow) -> bool:
    """Replace `row.errors` with a fresh error map. Returns True when valid."""
    row.errors = compute_row_errors(row)
    return not row.errors


def validate_all_rows(rows: Iterable[ImportedOrderRow]) -> int:
    """Validate every row; returns the number of rows with errors."""
    error_count = 0
    for row in rows:
        if not validate_order_row(row):
            error_count += 1
    return error_count
