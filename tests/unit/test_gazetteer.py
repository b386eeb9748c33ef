from __future__ import annotations

import json
from pathlib import Path

import pytest

from order_import.config.gazetteer import gazetteer_from_dict, load_gazetteer
from order_import.config.loader import ConfigError


def test_load_yaml_gazetteer(write_gazetteer: Path):
    governorates, cities = load_gazetteer(write_gazetteer)
    assert [(g.id, g.name_en) for g in governorates] == [(1, "Cairo"), (2, "Giza")]
    assert governorates[1].name_ar == "الجيزة"
    assert [(c.id, c.governorate_id) for c in cities] == [(101, 1), (201, 2)]


def test_load_json_gazetteer(temp_workdir: Path):
    p = temp_workdir / "config" / "locations.json"
    data = {"governorates": [{"id": 3, "name_en": "Alexandria", "name_ar": "الإسكندرية"}]}
    p.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
    governorates, cities = load_gazetteer(p)
    assert governorates[0].id == 3
    assert cities == []


def test_missing_gazetteer(temp_workdir: Path):
    with pytest.raises(ConfigError, match="not found"):
        load_gazetteer(temp_workdir / "config" / "missing.yml")


def test_unparsable_gazetteer(temp_workdir: Path):
    p = temp_workdir / "config" / "locations.json"
    p.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigError, match="invalid gazetteer"):
        load_gazetteer(p)


@pytest.mark.parametrize(
    "data",
    [
        {},
        {"governorates": [{"id": "one", "name_en": "Cairo", "name_ar": "القاهرة"}]},
        {"governorates": [{"id": 1, "name_en": "Cairo"}]},
        {"governorates": [{"id": 1, "name_en": "Cairo", "name_ar": "x", "cities": [{"id": 9}]}]},
    ],
)
def test_schema_violations(data):
    with pytest.raises(ConfigError):
        gazetteer_from_dict(data)


def test_repository_gazetteer_loads():
    root = Path(__file__).resolve().parents[2]
    governorates, cities = load_gazetteer(root / "config" / "locations.yml")
    gov_ids = {g.id for g in governorates}
    assert governorates
    assert all(c.governorate_id in gov_ids for c in cities)
