"""Tests for JSON persistence of the store."""
from __future__ import annotations

import json

import pytest

from spacity.services.recap import range_breakdown
from spacity.storage import (
    open_store,
    read_snapshot,
    reference_data_from_json,
    snapshot_from_json,
    snapshot_to_json,
    wipe_all,
    write_snapshot,
)
from spacity.store import Snapshot, Store


def test_missing_file_gives_empty_snapshot(tmp_path) -> None:
    assert read_snapshot(tmp_path / "nope.json") == Snapshot()


def test_written_file_uses_camel_case_keys(tmp_path, snapshot) -> None:
    path = tmp_path / "spacity.json"
    write_snapshot(path, snapshot)

    payload = json.loads(path.read_text(encoding="utf-8"))
    assert payload["branches"][0]["profitSharingPercent"] == 30
    assert payload["services"][0]["durationMinutes"] == 60
    assert payload["bookings"][0]["serviceId"] == "svc-001"
    assert read_snapshot(path) == snapshot


def test_reads_original_storage_shape() -> None:
    text = json.dumps(
        {
            "services": [
                {"id": "svc-001", "name": "Balinese", "category": "Massage", "durationMinutes": 60,
                 "price": 350000, "description": "", "isActive": True, "extra": "ignored"}
            ],
            "bookings": [
                {"id": "bk-001", "branchId": "br-001", "serviceId": "svc-001", "therapistId": "th-001",
                 "customerName": "Budi", "date": "2026-10-19", "time": "10:00", "status": "completed"}
            ],
        }
    )
    snap = snapshot_from_json(text)
    assert snap.services[0].duration_minutes == 60
    assert snap.bookings[0].customer_name == "Budi"
    assert snap.bookings[0].notes == ""
    assert snap.branches == ()


@pytest.mark.parametrize("text", ["not json", "[1, 2]"])
def test_invalid_json_rejected(text) -> None:
    with pytest.raises(ValueError):
        snapshot_from_json(text)


def test_open_store_persists_every_command(tmp_path, snapshot) -> None:
    path = tmp_path / "data" / "spacity.json"
    write_snapshot(path, snapshot)

    store = open_store(path)
    item = store.add_inventory_item(name="Towel", category="Linen", unit="piece", current_stock=40, min_stock=30)

    reopened = read_snapshot(path)
    assert any(i.id == item.id for i in reopened.inventory)
    assert reopened.version == store.snapshot.version

    wipe_all(store)
    assert read_snapshot(path).counts() == {k: 0 for k in snapshot.counts()}


def test_json_text_roundtrip_keeps_version(snapshot) -> None:
    assert snapshot_from_json(snapshot_to_json(snapshot)).version == snapshot.version


STRING_NUMBERS = json.dumps(
    {
        "branches": [{"id": "br-001", "name": "Jakarta", "profitSharingPercent": "30"}],
        "services": [{"id": "svc-001", "name": "Balinese", "durationMinutes": "60", "price": "350000"}],
        "therapists": [{"id": "th-001", "name": "Sari", "hourlyIncentive": "50000"}],
        "bookings": [
            {"id": "bk-001", "branchId": "br-001", "serviceId": "svc-001", "therapistId": "th-001",
             "customerName": "Budi", "date": "2026-10-19", "time": "10:00", "status": "completed"}
        ],
    }
)


def test_imported_numeric_text_feeds_the_recap() -> None:
    store = Store()
    store.replace_all(snapshot_from_json(STRING_NUMBERS))
    snap = store.snapshot

    recap = range_breakdown(snap.bookings, snap.services, snap.therapists, snap.branch("br-001"),
                            "2026-10-19", "2026-10-19")
    assert recap.revenue == 350000
    assert recap.incentives == 50000
    assert recap.profit_split.spa_amount == 90000


def test_open_store_converts_stored_numeric_text(tmp_path) -> None:
    path = tmp_path / "spacity.json"
    path.write_text(STRING_NUMBERS, encoding="utf-8")
    assert open_store(path).snapshot.services[0].duration_minutes == 60


def test_reference_data_from_json() -> None:
    branches, therapists = reference_data_from_json(STRING_NUMBERS)
    assert [b.id for b in branches] == ["br-001"]
    assert [t.name for t in therapists] == ["Sari"]


@pytest.mark.parametrize("text", ['{"branches": {"id": "br-001"}}', '{"therapists": [1]}'])
def test_reference_data_must_be_lists_of_objects(text) -> None:
    with pytest.raises(ValueError, match="list of objects"):
        reference_data_from_json(text)
