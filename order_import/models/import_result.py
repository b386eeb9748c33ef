from __future__ import annotations

from dataclasses import dataclass, field

from .fields import CanonicalField
from .order_row import ImportedOrderRow

"""ImportResult: what one import hands to the preview / edit step."""

__all__ = [
    "ColumnMapping",
    "ImportResult",
]

# Original header -> canonical field, or None when unmapped
ColumnMapping = dict[str, "CanonicalField | None"]


@dataclass
class ImportResult:
    """Rows plus mapping and counters for a single imported file.

    `error_count` is a snapshot taken by the last batch validation pass;
    callers that edit rows must revalidate (see services.validator.validate_all_rows)
    and store the new count.
    """
    file_name: str
    headers: list[str]
    mapping: ColumnMapping
    rows: list[ImportedOrderRow] = field(default_factory=list)
    is_shopify: bool = False
    encoding: str | None = None
    error_count: int = 0

    @property
    def item_count(self) -> int:
        return len(self.rows)

    @property
    def order_count(self) -> int:
        """Distinct orders: one per order_ref, ungrouped rows count individually."""
        refs: set[str] = set()
        ungrouped = 0
        for row in self.rows:
            if row.order_ref:
                refs.add(row.order_ref)
            else:
                ungrouped += 1
        return len(refs) + ungrouped

    @property
    def unmapped_headers(self) -> list[str]:
        return [h for h in self.headers if self.mapping.get(h) is None]
