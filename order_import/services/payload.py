from __future__ import annotations

from collections.abc import Iterable

from ..models.order_request import CreateOrderRequest, OrderCustomer, OrderItem
from ..models.order_row import ImportedOrderRow

"""Submission payload builder.

Rows sharing an order reference (multi-item Shopify orders) become one
CreateOrderRequest with several items; ungrouped rows become single-item
orders. The HTTP call itself belongs to the API client, not here.
"""

__all__ = [
    "DEFAULT_PAYMENT_METHOD",
    "group_rows_by_order",
    "build_order_requests",
]

DEFAULT_PAYMENT_METHOD = "cod"


def group_rows_by_order(rows: Iterable[ImportedOrderRow]) -> list[list[ImportedOrderRow]]:
    """Group by order_ref (row_id when empty), preserving first-appearance order."""
    groups: dict[str, list[ImportedOrderRow]] = {}
    for row in rows:
        groups.setdefault(row.order_ref or row.row_id, []).append(row)
    return list(groups.values())


def build_order_requests(rows: Iterable[ImportedOrderRow]) -> list[CreateOrderRequest]:
    """Build one create-order request per order group.

    Customer, payment method and notes come from the first row of each group.
    """
    requests: list[CreateOrderRequest] = []
    for group in group_rows_by_order(rows):
        first = group[0]
        requests.append(
            CreateOrderRequest(
                customer=OrderCustomer(
                    name=first.customer_name,
                    mobile=first.customer_mobile,
                    address=first.customer_address,
                    governorate_id=first.governorate_id,
                    city_id=first.city_id,
                ),
                items=[
                    OrderItem(product_name=r.product_name, quantity=r.quantity, unit_price=r.unit_price)
                    for r in group
                ],
                payment_method=first.payment_method or DEFAULT_PAYMENT_METHOD,
                vendor_notes=first.vendor_notes or None,
            )
        )
    return requests
