from __future__ import annotations

import codecs
import io
from datetime import datetime

import openpyxl
import pytest

from order_import.tabular.encoding import LEGACY_ARABIC
from order_import.tabular.reader import (
    EmptyFileError,
    FileTooLargeError,
    TabularParseError,
    UnsupportedFileTypeError,
    is_phone_header,
    parse_csv,
    parse_import_file,
    parse_workbook,
)


def test_parse_csv_basic():
    table = parse_csv(b"Customer Name,Mobile,Quantity\nAhmed,01012345678,2\nMona,01112345678,1\n")
    assert table.headers == ["Customer Name", "Mobile", "Quantity"]
    assert len(table.rows) == 2
    # 文字列のまま (先頭0保持)
    assert table.rows[0] == {"Customer Name": "Ahmed", "Mobile": "01012345678", "Quantity": "2"}
    assert table.encoding == "utf-8"


def test_parse_csv_bom_not_in_first_header():
    table = parse_csv(codecs.BOM_UTF8 + b"Customer Name,Mobile\nAhmed,01012345678\n")
    assert table.headers[0] == "Customer Name"


def test_parse_csv_legacy_arabic():
    data = "اسم العميل,المحافظة\nأحمد,الجيزة\n".encode("cp1256")
    table = parse_csv(data)
    assert table.encoding == LEGACY_ARABIC
    assert table.headers == ["اسم العميل", "المحافظة"]
    assert table.rows[0]["المحافظة"] == "الجيزة"


def test_parse_csv_skips_blank_lines():
    table = parse_csv(b"a,b\n\n1,2\n,\n3,4\n\n")
    assert [r["a"] for r in table.rows] == ["1", "3"]


def test_parse_csv_short_rows_filled_with_empty_strings():
    table = parse_csv(b"a,b,c\n1,2,3\n4\n")
    assert table.rows[1] == {"a": "4", "b": "", "c": ""}


def test_parse_csv_semicolon_delimiter():
    table = parse_csv(b"name;qty\nAhmed;2\n")
    assert table.headers == ["name", "qty"]
    assert table.rows[0]["qty"] == "2"


def test_parse_csv_quoted_comma():
    table = parse_csv(b'name,address\nAhmed,"12 Main St, Nasr City"\n')
    assert table.rows[0]["address"] == "12 Main St, Nasr City"


def test_parse_csv_empty():
    with pytest.raises(EmptyFileError):
        parse_csv(b"")


def test_parse_csv_long_row_cut_to_header_width():
    table = parse_csv(b"a,b\n1,2\n3,4,5,6\n7,8,\n")
    assert table.headers == ["a", "b"]
    assert table.rows == [{"a": "1", "b": "2"}, {"a": "3", "b": "4"}, {"a": "7", "b": "8"}]


def test_parse_csv_trailing_delimiter_row_kept():
    data = (
        b"Customer Name,Mobile,Address,Product Name\n"
        b"Ali,01001234567,St 1,Mug\n"
        b"Mona,01001234568,St 2,Cup,\n"
    )
    table = parse_csv(data)
    assert len(table.rows) == 2
    assert table.rows[1]["Product Name"] == "Cup"


def test_parse_csv_bom_with_invalid_utf8():
    with pytest.raises(TabularParseError):
        parse_csv(b"\xef\xbb\xbfName,Mobile\nAli,01001234567\n\xff\xfe,0100\n")


def test_is_phone_header():
    assert is_phone_header("Mobile")
    assert is_phone_header("Shipping Phone")
    assert is_phone_header("رقم الموبايل")
    assert is_phone_header("الهاتف")
    assert not is_phone_header("Quantity")


def test_parse_workbook_restores_phone_leading_zero(make_workbook):
    data = make_workbook([
        ["Customer Name", "Mobile", "Quantity", "Order Number", "Unit Price"],
        ["Ahmed", 1012345678, 2, 1234567890, 350.5],
    ])
    table = parse_workbook(data)
    row = table.rows[0]
    assert row["Mobile"] == "01012345678"
    assert row["Quantity"] == "2"
    # phone 列以外の 10 桁はそのまま
    assert row["Order Number"] == "1234567890"
    assert row["Unit Price"] == "350.5"


def test_parse_workbook_keeps_text_phone(make_workbook):
    table = parse_workbook(make_workbook([["Mobile"], ["01012345678"]]))
    assert table.rows[0]["Mobile"] == "01012345678"


def test_parse_workbook_arabic_phone_header(make_workbook):
    table = parse_workbook(make_workbook([["رقم الموبايل"], [1112345678]]))
    assert table.rows[0]["رقم الموبايل"] == "01112345678"


def test_parse_workbook_skips_empty_rows(make_workbook):
    table = parse_workbook(make_workbook([["name", "qty"], ["Ahmed", 1], [None, None], ["Mona", 2]]))
    assert [r["name"] for r in table.rows] == ["Ahmed", "Mona"]


def test_parse_workbook_first_sheet_only():
    wb = openpyxl.Workbook()
    first = wb.active
    first.title = "Orders"
    first.append(["name"])
    first.append(["Ahmed"])
    second = wb.create_sheet("Other")
    second.append(["ignored"])
    second.append(["x"])
    buf = io.BytesIO()
    wb.save(buf)
    table = parse_workbook(buf.getvalue())
    assert table.headers == ["name"]
    assert table.rows == [{"name": "Ahmed"}]


def test_parse_workbook_date_cells():
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.append(["name", "order date", "delivery"])
    ws.append(["Ahmed", datetime(2024, 1, 1), datetime(2024, 1, 2, 13, 45)])
    buf = io.BytesIO()
    wb.save(buf)
    table = parse_workbook(buf.getvalue())
    assert table.rows[0]["order date"] == "2024-01-01"
    assert table.rows[0]["delivery"] == "2024-01-02 13:45:00"


def test_parse_workbook_empty_sheet():
    buf = io.BytesIO()
    openpyxl.Workbook().save(buf)
    with pytest.raises(EmptyFileError):
        parse_workbook(buf.getvalue())


def test_parse_workbook_garbage_bytes():
    with pytest.raises(TabularParseError):
        parse_workbook(b"definitely not a workbook")


def test_parse_import_file_unsupported_extension():
    with pytest.raises(UnsupportedFileTypeError) as e:
        parse_import_file(b"a,b\n1,2\n", "orders.txt")
    assert ".txt" in str(e.value)


def test_parse_import_file_too_large():
    with pytest.raises(FileTooLargeError):
        parse_import_file(b"a,b\n1,2\n", "orders.csv", max_file_size=4)


def test_parse_import_file_header_only_is_empty():
    with pytest.raises(EmptyFileError):
        parse_import_file(b"Customer Name,Mobile\n", "orders.csv")


def test_parse_import_file_dispatches_by_extension(make_workbook):
    table = parse_import_file(make_workbook([["name"], ["Ahmed"]]), "Orders.XLSX")
    assert table.rows == [{"name": "Ahmed"}]
    table = parse_import_file(b"name\nAhmed\n", "orders.CSV")
    assert table.rows == [{"name": "Ahmed"}]
