"""Mini README: Tests for loading record collections from JSON snapshots."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

import pytest

from courierledger.ingestion import SnapshotLoader, snapshot_from_dict
from courierledger.records import RecordValidationError


def test_loader_reads_every_collection(tmp_path: Path, snapshot_payload: Dict[str, Any]) -> None:
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps(snapshot_payload), encoding="utf-8")

    snapshot = SnapshotLoader(path).load()

    assert len(snapshot.couriers) == 3
    assert len(snapshot.courses) == 4
    assert len(snapshot.expenses) == 2
    assert len(snapshot.payments) == 2
    assert len(snapshot.shortages) == 1
    assert snapshot.get_courier("l1").name == "Awa Diop"


def test_loader_rereads_the_file_on_every_call(tmp_path: Path, snapshot_payload: Dict[str, Any]) -> None:
    """Updates written between two loads are visible to the second load."""

    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps(snapshot_payload), encoding="utf-8")
    loader = SnapshotLoader(path)
    assert len(loader.load().payments) == 2

    snapshot_payload["payments"].append(
        {"id": "p3", "livreurId": "l1", "date": "2024-05-10", "amount": 2800, "expectedAmount": 7800}
    )
    path.write_text(json.dumps(snapshot_payload), encoding="utf-8")

    assert len(loader.load().payments) == 3


def test_missing_collections_default_to_empty() -> None:
    snapshot = snapshot_from_dict({"couriers": [{"id": "l1", "name": "Awa"}]})

    assert snapshot.courses == []
    assert snapshot.shortages == []


def test_unknown_courier_raises_key_error() -> None:
    with pytest.raises(KeyError):
        snapshot_from_dict({}).get_courier("ghost")


def test_invalid_files_are_reported(tmp_path: Path) -> None:
    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")

    with pytest.raises(RecordValidationError):
        SnapshotLoader(broken).load()
    with pytest.raises(FileNotFoundError):
        SnapshotLoader(tmp_path / "absent.json").load()
    with pytest.raises(RecordValidationError):
        snapshot_from_dict({"courses": {"id": "c1"}})
