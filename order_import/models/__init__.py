"""Domain models for the bulk order import pipeline.

This package contains the data model shared by every pipeline stage: canonical
fields, imported order rows, gazetteer entries, results and payload shapes.
"""

from .fields import CanonicalField, ErrorCode
from .import_result import ColumnMapping, ImportResult
from .location import City, Governorate
from .order_request import CreateOrderRequest, OrderCustomer, OrderItem
from .order_row import ImportedOrderRow, get_canonical_field, set_canonical_field
from .parsed_table import ParsedTable, RawRecord

__all__ = [
    # Fields
    "CanonicalField",
    "ErrorCode",
    # Rows
    "ImportedOrderRow",
    "get_canonical_field",
    "set_canonical_field",
    "ParsedTable",
    "RawRecord",
    "ColumnMapping",
    "ImportResult",
    # Reference data
    "Governorate",
    "City",
    # Submission
    "CreateOrderRequest",
    "OrderCustomer",
    "OrderItem",
]
