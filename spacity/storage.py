from __future__ import annotations

import json
import logging
from pathlib import Path

import streamlit as st

from spacity.models import Booking, Branch, InventoryItem, Service, Therapist
from spacity.store import COLLECTIONS, Snapshot, Store, validate_snapshot

logger = logging.getLogger(__name__)

RECORD_TYPES = {
    "branches": Branch,
    "services": Service,
    "therapists": Therapist,
    "bookings": Booking,
    "inventory": InventoryItem,
}


def snapshot_to_json(snapshot: Snapshot) -> str:
    payload = {name: [r.to_dict() for r in getattr(snapshot, name)] for name in COLLECTIONS}
    payload["version"] = snapshot.version
    return json.dumps(payload, indent=2, ensure_ascii=False)


def _records(payload: dict, name: str) -> tuple:
    rows = payload.get(name, [])
    if not isinstance(rows, list) or not all(isinstance(r, dict) for r in rows):
        raise ValueError(f"'{name}' must be a list of objects.")
    return tuple(RECORD_TYPES[name].from_dict(r) for r in rows)


def _load_object(text: str) -> dict:
    try:
        payload = json.loads(text)
    except ValueError:
        raise ValueError("Store file is not valid JSON.")
    if not isinstance(payload, dict):
        raise ValueError("Store file must contain a JSON object.")
    return payload


def snapshot_from_json(text: str) -> Snapshot:
    payload = _load_object(text)
    kwargs = {name: _records(payload, name) for name in COLLECTIONS}
    return Snapshot(**kwargs, version=int(payload.get("version", 0)))


def reference_data_from_json(text: str) -> tuple[tuple[Branch, ...], tuple[Therapist, ...]]:
    """Branches and therapists from a JSON object; other keys are ignored."""
    payload = _load_object(text)
    return _records(payload, "branches"), _records(payload, "therapists")


def read_snapshot(path: Path) -> Snapshot:
    if not path.exists():
        logger.debug("No store file at %s, starting empty", path)
        return Snapshot()
    logger.debug("Reading store from %s", path)
    return snapshot_from_json(path.read_text(encoding="utf-8"))


def write_snapshot(path: Path, snapshot: Snapshot) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    tmp.write_text(snapshot_to_json(snapshot), encoding="utf-8")
    tmp.replace(path)
    logger.debug("Wrote store version %s to %s", snapshot.version, path)


def open_store(path: Path) -> Store:
    return Store(validate_snapshot(read_snapshot(path)), on_change=lambda snap: write_snapshot(path, snap))


@st.cache_resource
def get_store(path: Path) -> Store:
    return open_store(path)


def wipe_all(store: Store) -> None:
    store.replace_all(Snapshot())
