from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any

from .fields import CanonicalField, ErrorCode

"""ImportedOrderRow model and canonical-field dispatchers.

An ImportedOrderRow is the unit the preview grid edits and the validator
inspects. Rows are mutable: the location resolver, manual edits and repeated
validation passes all update them in place.
"""

__all__ = [
    "ImportedOrderRow",
    "new_row_id",
    "set_canonical_field",
    "get_canonical_field",
]

# CanonicalField -> dataclass attribute
_FIELD_ATTRIBUTES: dict[CanonicalField, str] = {
    CanonicalField.CUSTOMER_NAME: "customer_name",
    CanonicalField.CUSTOMER_MOBILE: "customer_mobile",
    CanonicalField.CUSTOMER_ADDRESS: "customer_address",
    CanonicalField.GOVERNORATE: "governorate",
    CanonicalField.CITY: "city",
    CanonicalField.PRODUCT_NAME: "product_name",
    CanonicalField.QUANTITY: "quantity",
    CanonicalField.UNIT_PRICE: "unit_price",
    CanonicalField.PAYMENT_METHOD: "payment_method",
    CanonicalField.VENDOR_NOTES: "vendor_notes",
}


def new_row_id(index: int) -> str:
    """Generate a unique row identifier (`import-<index>-<random>`)."""
    return f"import-{index}-{uuid.uuid4().hex[:12]}"


@dataclass
class ImportedOrderRow:
    """One imported order line with all ten canonical fields populated.

    Attributes:
        row_id: Generated unique identifier
        order_ref: Order grouping key (Shopify order name); empty when ungrouped
        governorate_id: Resolved governorate id, None until the resolver succeeds
        city_id: Resolved city id, always belongs to governorate_id when set
        errors: Field -> error code, replaced wholesale on every validation pass
    """
    row_id: str
    order_ref: str = ""
    customer_name: str = ""
    customer_mobile: str = ""
    customer_address: str = ""
    governorate: str = ""
    city: str = ""
    product_name: str = ""
    quantity: int = 1
    unit_price: float = 0.0
    payment_method: str = "cash"
    vendor_notes: str = ""
    governorate_id: int | None = None
    city_id: int | None = None
    errors: dict[CanonicalField, ErrorCode] = field(default_factory=dict)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def to_dict(self) -> dict[str, Any]:
        """Serialize with canonical identifiers as keys (preview grid shape)."""
        data: dict[str, Any] = {"_id": self.row_id, "_orderRef": self.order_ref}
        for canonical in CanonicalField:
            data[canonical.value] = get_canonical_field(self, canonical)
        data["_governorateId"] = self.governorate_id
        data["_cityId"] = self.city_id
        data["_errors"] = {f.value: code.value for f, code in self.errors.items()}
        return data


def set_canonical_field(row: ImportedOrderRow, target: CanonicalField, value: Any) -> None:
    """Write `value` into the attribute backing `target`.

    Raises:
        ValueError: If `target` is not a CanonicalField identifier
    """
    setattr(row, _FIELD_ATTRIBUTES[CanonicalField(target)], value)


def get_canonical_field(row: ImportedOrderRow, target: CanonicalField) -> Any:
    return getattr(row, _FIELD_ATTRIBUTES[CanonicalField(target)])
