from __future__ import annotations

import pytest

from order_import.models.fields import CanonicalField, ErrorCode, NUMERIC_FIELDS, STRING_FIELDS
from order_import.models.import_result import ImportResult
from order_import.models.order_row import ImportedOrderRow, get_canonical_field, set_canonical_field


def test_canonical_field_from_identifier():
    assert CanonicalField.from_identifier(" UnitPrice ") is CanonicalField.UNIT_PRICE
    assert CanonicalField.from_identifier("unit price") is None


def test_field_partitions_cover_all_fields():
    assert NUMERIC_FIELDS | STRING_FIELDS == set(CanonicalField)
    assert not NUMERIC_FIELDS & STRING_FIELDS


def test_set_and_get_canonical_field():
    row = ImportedOrderRow(row_id="r")
    set_canonical_field(row, CanonicalField.CUSTOMER_MOBILE, "01001234567")
    set_canonical_field(row, "quantity", 3)
    assert row.customer_mobile == "01001234567"
    assert get_canonical_field(row, CanonicalField.QUANTITY) == 3


def test_set_unknown_field_rejected():
    with pytest.raises(ValueError):
        set_canonical_field(ImportedOrderRow(row_id="r"), "email", "x")


def test_row_to_dict():
    row = ImportedOrderRow(row_id="r1", order_ref="#1", customer_name="Mona", governorate_id=2)
    row.errors = {CanonicalField.CUSTOMER_MOBILE: ErrorCode.REQUIRED}
    data = row.to_dict()
    assert data["_id"] == "r1"
    assert data["_orderRef"] == "#1"
    assert data["customerName"] == "Mona"
    assert data["quantity"] == 1
    assert data["paymentMethod"] == "cash"
    assert data["_governorateId"] == 2
    assert data["_cityId"] is None
    assert data["_errors"] == {"customerMobile": "required"}
    assert row.has_errors


def test_import_result_counts():
    rows = [
        ImportedOrderRow(row_id="a", order_ref="#1"),
        ImportedOrderRow(row_id="b", order_ref="#1"),
        ImportedOrderRow(row_id="c", order_ref="#2"),
        ImportedOrderRow(row_id="d"),
    ]
    result = ImportResult(
        file_name="f.csv",
        headers=["Name", "Mobile", "Tags"],
        mapping={"Name": None, "Mobile": CanonicalField.CUSTOMER_MOBILE, "Tags": None},
        rows=rows,
    )
    assert result.item_count == 4
    assert result.order_count == 3
    assert result.unmapped_headers == ["Name", "Tags"]
