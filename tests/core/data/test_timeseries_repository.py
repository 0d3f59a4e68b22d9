"""Tests for the JSON time-series repository."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from tradefeed.core.data.storage import TimeSeriesRepository
from tradefeed.core.exceptions import StorageError
from tradefeed.core.models import FxRates, Observation, Record, RecordErrors

LEGACY_ROW = {
    "date": "2025-01-06",
    "ts": "2025-01-06T16:00:00+08:00",
    "fx": {"usdCny": 7.3, "usdCnyMid": 7.18, "usdBrl": None, "brlCny": None, "sources": {"spot": "xe.com"}},
    "commodities": {
        "copper1": {"value": 78140, "unit": "CNY/t", "source": "https://m.ccmn.cn/", "note": "manual"},
    },
    "errors": {"fxSpot": None, "usdCnyMid": None, "commodities": None, "commoditiesDetailed": {}},
    "note": "manually patched",
}


def _record() -> Record:
    return Record(
        date="2025-01-07",
        ts="2025-01-07T09:31:05.123+08:00",
        fx=FxRates(usd_cny=7.2981, usd_cny_mid=None, sources={"spot": "xe.com", "mid": "chinamoney"}),
        commodities={
            "au9999": Observation(value=613.5, unit="CNY/g", source="smm"),
            "zn0": Observation(value=None, unit="CNY/t", source="ccmn"),
        },
        errors=RecordErrors(commodities_detailed={"zinc0": "parse_failed (zinc)"}),
    )


def test_missing_file_loads_empty(tmp_path: Path) -> None:
    repository = TimeSeriesRepository(tmp_path / "public" / "trade-data.json")

    assert not repository.exists()
    assert repository.load() == []


def test_save_writes_pretty_wire_format(tmp_path: Path) -> None:
    path = tmp_path / "public" / "trade-data.json"
    repository = TimeSeriesRepository(path)

    repository.save([_record()])

    content = path.read_text(encoding="utf-8")
    assert content.startswith("[\n  {")
    assert content.endswith("\n")
    payload = json.loads(content)
    assert payload[0]["fx"]["usdCny"] == 7.2981
    assert payload[0]["fx"]["usdCnyMid"] is None
    assert payload[0]["commodities"]["zn0"] == {"value": None, "unit": "CNY/t", "source": "ccmn"}
    assert payload[0]["errors"]["commoditiesDetailed"] == {"zinc0": "parse_failed (zinc)"}
    assert "runTs" not in payload[0]
    assert list(path.parent.iterdir()) == [path]


def test_round_trip_preserves_unknown_fields(tmp_path: Path) -> None:
    path = tmp_path / "trade-data.json"
    path.write_text(json.dumps([LEGACY_ROW], ensure_ascii=False), encoding="utf-8")
    repository = TimeSeriesRepository(path)

    records = repository.load()
    repository.save(records)

    saved = json.loads(path.read_text(encoding="utf-8"))[0]
    assert saved["note"] == "manually patched"
    assert saved["commodities"]["copper1"]["value"] == 78140
    assert saved["commodities"]["copper1"]["note"] == "manual"
    assert records[0].fx.usd_cny_mid == 7.18


def test_accepts_rows_wrapper(tmp_path: Path) -> None:
    path = tmp_path / "trade-data.json"
    path.write_text(json.dumps({"rows": [LEGACY_ROW]}), encoding="utf-8")

    records = TimeSeriesRepository(path).load()

    assert [record.ts for record in records] == ["2025-01-06T16:00:00+08:00"]


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        '{"data": []}',
        '"just a string"',
        "[1, 2, 3]",
        '[{"fx": "not an object"}]',
    ],
)
def test_malformed_file_raises_storage_error(tmp_path: Path, content: str) -> None:
    path = tmp_path / "trade-data.json"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(StorageError) as exc_info:
        TimeSeriesRepository(path).load()

    assert exc_info.value.error_code == "STORAGE_ERROR"
    assert exc_info.value.path == str(path)
    assert path.read_text(encoding="utf-8") == content


def test_unwritable_target_raises_storage_error(tmp_path: Path) -> None:
    blocker = tmp_path / "public"
    blocker.write_text("a file where a directory should be", encoding="utf-8")
    repository = TimeSeriesRepository(blocker / "trade-data.json")

    with pytest.raises(StorageError):
        repository.save([_record()])
