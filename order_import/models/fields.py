from __future__ import annotations

from enum import Enum

"""Canonical order fields and symbolic validation error codes.

Every source column is mapped onto one of the ten fields below. The enum values
are the identifiers shared with the preview UI and the translation catalog, so
they must stay stable.
"""

__all__ = [
    "CanonicalField",
    "ErrorCode",
    "STRING_FIELDS",
    "NUMERIC_FIELDS",
]


class CanonicalField(str, Enum):
    """Closed set of logical order attributes every import is normalized onto."""
    CUSTOMER_NAME = "customerName"
    CUSTOMER_MOBILE = "customerMobile"
    CUSTOMER_ADDRESS = "customerAddress"
    GOVERNORATE = "governorate"
    CITY = "city"
    PRODUCT_NAME = "productName"
    QUANTITY = "quantity"
    UNIT_PRICE = "unitPrice"
    PAYMENT_METHOD = "paymentMethod"
    VENDOR_NOTES = "vendorNotes"

    @classmethod
    def from_identifier(cls, identifier: str) -> CanonicalField | None:
        """Look up a field by identifier, ignoring case and surrounding whitespace."""
        key = identifier.strip().lower()
        for member in cls:
            if member.value.lower() == key:
                return member
        return None


class ErrorCode(str, Enum):
    """Symbolic per-field error codes (translated by the UI, never here)."""
    REQUIRED = "required"
    INVALID_NAME = "invalidName"
    INVALID_MOBILE = "invalidMobile"
    MIN_ONE = "min1"
    MIN_ZERO = "minZero"


NUMERIC_FIELDS: frozenset[CanonicalField] = frozenset(
    {CanonicalField.QUANTITY, CanonicalField.UNIT_PRICE}
)
STRING_FIELDS: frozenset[CanonicalField] = frozenset(set(CanonicalField) - NUMERIC_FIELDS)
