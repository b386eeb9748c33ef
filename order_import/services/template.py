from __future__ import annotations

import io
from dataclasses import dataclass

import pandas as pd

"""Blank import template generation (CSV or XLSX).

The CSV variant is UTF-8 with a BOM so spreadsheet tools reopen Arabic text
correctly. All template cells are text, which keeps the sample mobile's
leading zero in the workbook variant.
"""

__all__ = [
    "TEMPLATE_HEADERS",
    "TEMPLATE_SAMPLE_ROW",
    "TemplateFile",
    "generate_template",
]

TEMPLATE_HEADERS = [
    "Customer Name",
    "Mobile",
    "Address",
    "Governorate",
    "City",
    "Product Name",
    "Quantity",
    "Unit Price",
    "Payment Method",
    "Notes",
]

TEMPLATE_SAMPLE_ROW = [
    "Ahmed Mohamed",
    "01012345678",
    "123 Main St, Nasr City",
    "Cairo",
    "Nasr City",
    "T-Shirt - Black - XL",
    "2",
    "350",
    "cash",
    "Handle with care",
]

TEMPLATE_SHEET_NAME = "Orders"


@dataclass(frozen=True)
class TemplateFile:
    filename: str
    content: bytes
    media_type: str


def generate_template(fmt: str = "csv") -> TemplateFile:
    """Build the starter file: header row + one sample row.

    Raises:
        ValueError: For formats other than "csv" / "xlsx"
    """
    df = pd.DataFrame([TEMPLATE_SAMPLE_ROW], columns=TEMPLATE_HEADERS, dtype=str)
    if fmt == "csv":
        text = df.to_csv(index=False, lineterminator="\n")
        return TemplateFile(
            filename="orders-template.csv",
            content=("\ufeff" + text).encode("utf-8"),
            media_type="text/csv;charset=utf-8",
        )
    if fmt == "xlsx":
        buf = io.BytesIO()
        with pd.ExcelWriter(buf, engine="openpyxl") as writer:
            df.to_excel(writer, sheet_name=TEMPLATE_SHEET_NAME, index=False)
        return TemplateFile(
            filename="orders-template.xlsx",
            content=buf.getvalue(),
            media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        )
    raise ValueError(f"unsupported template format: {fmt}")
