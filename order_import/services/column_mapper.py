from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from ..models.fields import CanonicalField
from ..models.import_result import ColumnMapping

"""Column mapper: source header names -> canonical fields.

Exact lookups only (canonical identifier, then the synonym table). Headers
that match nothing stay unmapped (None) for manual resolution. No fuzzy
matching at this stage.
"""

__all__ = [
    "HEADER_SYNONYMS",
    "normalize_header",
    "auto_map_columns",
]

logger = logging.getLogger(__name__)

F = CanonicalField

# Keys are normalized (trimmed, lowercase). English, Arabic and Shopify vocabulary.
HEADER_SYNONYMS: dict[str, CanonicalField] = {
    # customer name
    "customer name": F.CUSTOMER_NAME,
    "customer": F.CUSTOMER_NAME,
    "name": F.CUSTOMER_NAME,
    "billing name": F.CUSTOMER_NAME,
    "shipping name": F.CUSTOMER_NAME,
    "اسم العميل": F.CUSTOMER_NAME,
    "العميل": F.CUSTOMER_NAME,
    "الاسم": F.CUSTOMER_NAME,
    # customer mobile
    "mobile": F.CUSTOMER_MOBILE,
    "phone": F.CUSTOMER_MOBILE,
    "customer mobile": F.CUSTOMER_MOBILE,
    "customer phone": F.CUSTOMER_MOBILE,
    "phone number": F.CUSTOMER_MOBILE,
    "mobile number": F.CUSTOMER_MOBILE,
    "shipping phone": F.CUSTOMER_MOBILE,
    "billing phone": F.CUSTOMER_MOBILE,
    "رقم الموبايل": F.CUSTOMER_MOBILE,
    "الموبايل": F.CUSTOMER_MOBILE,
    "رقم الهاتف": F.CUSTOMER_MOBILE,
    "الهاتف": F.CUSTOMER_MOBILE,
    # customer address
    "address": F.CUSTOMER_ADDRESS,
    "customer address": F.CUSTOMER_ADDRESS,
    "delivery address": F.CUSTOMER_ADDRESS,
    "shipping address1": F.CUSTOMER_ADDRESS,
    "shipping street": F.CUSTOMER_ADDRESS,
    "العنوان": F.CUSTOMER_ADDRESS,
    "عنوان العميل": F.CUSTOMER_ADDRESS,
    "عنوان التوصيل": F.CUSTOMER_ADDRESS,
    # governorate
    "governorate": F.GOVERNORATE,
    "province": F.GOVERNORATE,
    "state": F.GOVERNORATE,
    "shipping province": F.GOVERNORATE,
    "shipping province name": F.GOVERNORATE,
    "المحافظة": F.GOVERNORATE,
    # city
    "city": F.CITY,
    "shipping city": F.CITY,
    "المدينة": F.CITY,
    "المنطقة": F.CITY,
    # product name
    "product": F.PRODUCT_NAME,
    "product name": F.PRODUCT_NAME,
    "item": F.PRODUCT_NAME,
    "item name": F.PRODUCT_NAME,
    "lineitem name": F.PRODUCT_NAME,
    "المنتج": F.PRODUCT_NAME,
    "اسم المنتج": F.PRODUCT_NAME,
    # quantity
    "quantity": F.QUANTITY,
    "qty": F.QUANTITY,
    "lineitem quantity": F.QUANTITY,
    "الكمية": F.QUANTITY,
    # unit price
    "price": F.UNIT_PRICE,
    "unit price": F.UNIT_PRICE,
    "price per unit": F.UNIT_PRICE,
    "lineitem price": F.UNIT_PRICE,
    "السعر": F.UNIT_PRICE,
    "سعر الوحدة": F.UNIT_PRICE,
    # payment method
    "payment": F.PAYMENT_METHOD,
    "payment method": F.PAYMENT_METHOD,
    "financial status": F.PAYMENT_METHOD,
    "طريقة الدفع": F.PAYMENT_METHOD,
    "الدفع": F.PAYMENT_METHOD,
    # vendor notes
    "notes": F.VENDOR_NOTES,
    "vendor notes": F.VENDOR_NOTES,
    "order notes": F.VENDOR_NOTES,
    "ملاحظات": F.VENDOR_NOTES,
    "ملاحظات المورد": F.VENDOR_NOTES,
}


def normalize_header(header: str) -> str:
    return header.strip().lower()


def auto_map_columns(
    headers: Iterable[str],
    extra_synonyms: Mapping[str, CanonicalField] | None = None,
) -> ColumnMapping:
    """Map each original header to a canonical field or None.

    Lookup order per header (after trim + lowercase):
    1. canonical identifier itself (e.g. "unitprice" -> unitPrice)
    2. `extra_synonyms` (configured, keys normalized here)
    3. static HEADER_SYNONYMS

    Args:
        headers: Header strings exactly as written in the file
        extra_synonyms: Additional header -> field entries from configuration

    Returns:
        Mapping keyed by the original (unmodified) header strings
    """
    extras = {normalize_header(k): CanonicalField(v) for k, v in (extra_synonyms or {}).items()}
    mapping: ColumnMapping = {}
    for header in headers:
        normalized = normalize_header(header)
        target = CanonicalField.from_identifier(normalized)
        if target is None:
            target = extras.get(normalized) or HEADER_SYNONYMS.get(normalized)
        mapping[header] = target
        if target is None:
            logger.debug("header '%s' left unmapped", header)
    return mapping
