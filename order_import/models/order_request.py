from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

"""Submission payload models for the external order-creation API."""

__all__ = [
    "OrderCustomer",
    "OrderItem",
    "CreateOrderRequest",
]


@dataclass(frozen=True)
class OrderCustomer:
    name: str
    mobile: str
    address: str
    governorate_id: int | None = None
    city_id: int | None = None


@dataclass(frozen=True)
class OrderItem:
    product_name: str
    quantity: int
    unit_price: float


@dataclass(frozen=True)
class CreateOrderRequest:
    """One order (customer + one or more items) as the create-order endpoint expects it."""
    customer: OrderCustomer
    items: list[OrderItem] = field(default_factory=list)
    payment_method: str | None = None
    vendor_notes: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
