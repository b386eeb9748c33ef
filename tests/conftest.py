# Shared pytest fixtures
from __future__ import annotations
import io
import tempfile
from pathlib import Path

import pandas as pd
import pytest

from order_import.logging.init import reset_logging
from order_import.models.location import City, Governorate


@pytest.fixture(autouse=True)
def _clean_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("ORDER_IMPORT_CONFIG", raising=False)
        yield p


@pytest.fixture()
def governorates() -> list[Governorate]:
    return [
        Governorate(1, "Cairo", "القاهرة"),
        Governorate(2, "Giza", "الجيزة"),
        Governorate(3, "Alexandria", "الإسكندرية"),
    ]


@pytest.fixture()
def cities() -> list[City]:
    return [
        City(101, "Nasr City", "مدينة نصر", 1),
        City(102, "Maadi", "المعادي", 1),
        City(104, "Downtown", "وسط البلد", 1),
        City(201, "Dokki", "الدقي", 2),
        City(203, "Haram", "الهرم", 2),
        City(301, "Smouha", "سموحة", 3),
        City(303, "Downtown", "وسط البلد", 3),
    ]


@pytest.fixture()
def sample_gazetteer_yaml() -> str:
    return """governorates:
  - id: 1
    name_en: Cairo
    name_ar: القاهرة
    cities:
      - {id: 101, name_en: Nasr City, name_ar: مدينة نصر}
  - id: 2
    name_en: Giza
    name_ar: الجيزة
    cities:
      - {id: 201, name_en: Dokki, name_ar: الدقي}
"""


@pytest.fixture()
def sample_config_yaml() -> str:
    return """gazetteer: locations.yml
error_log_dir: ./logs
max_file_size_bytes: 1048576
header_synonyms:
  recipient: customerName
"""


@pytest.fixture()
def write_gazetteer(temp_workdir: Path, sample_gazetteer_yaml: str) -> Path:
    p = temp_workdir / "config" / "locations.yml"
    p.write_text(sample_gazetteer_yaml, encoding="utf-8")
    return p


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str, write_gazetteer: Path) -> Path:
    cfg = temp_workdir / "config" / "import.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


def _make_workbook(rows: list[list[object]], sheet_name: str = "Sheet1") -> bytes:
    """Build .xlsx bytes where rows[0] is the header row."""
    buf = io.BytesIO()
    with pd.ExcelWriter(buf, engine="openpyxl") as writer:
        pd.DataFrame(rows).to_excel(writer, sheet_name=sheet_name, header=False, index=False)
    return buf.getvalue()


_SHOPIFY_CSV = (
    "Name,Email,Financial Status,Lineitem quantity,Lineitem name,Lineitem price,"
    "Billing Name,Shipping Name,Shipping Address1,Shipping Address2,Shipping City,"
    "Shipping Province,Shipping Phone,Payment Method,Notes\n"
    "#1001,mona@example.com,paid,2,Mug,120,Mona Ali,Mona Ali,12 Tahrir St,Apt 4,Dokki,"
    "Giza,01001234567,Shopify Payments,Ring twice\n"
    ",,,1,Plate,80,,,,,,,,,\n"
    ",,,3,Spoon,15.5,,,,,,,,,\n"
    "#1002,omar@example.com,pending,1,Kettle,450,Omar Hassan,Omar Hassan,5 Nile St,,Maadi,"
    "Cairo,01112345678,Cash on Delivery (COD),\n"
)


@pytest.fixture()
def make_workbook():
    return _make_workbook


@pytest.fixture()
def shopify_csv() -> bytes:
    return _SHOPIFY_CSV.encode("utf-8")
