"""
Canonical collections and the commands that change them.

A Snapshot is immutable: every command returns a new Snapshot with its
version bumped. Services, bookings and inventory items can be added, updated
and deleted; branches and therapists change only through a full import
or `upsert_reference_data`. Validators convert numeric text and return the
normalized record, so the calculation code can trust durations, percents
and stock levels.
"""
from __future__ import annotations

import logging
import math
import uuid
from dataclasses import MISSING, dataclass, fields, replace
from datetime import date
from typing import Any, Callable, Iterable, Optional

from spacity.models import (
    BOOKING_STATUSES,
    Booking,
    Branch,
    InventoryItem,
    Service,
    Therapist,
)

logger = logging.getLogger(__name__)

COLLECTIONS = ("branches", "services", "therapists", "bookings", "inventory")


@dataclass(frozen=True)
class Snapshot:
    branches: tuple[Branch, ...] = ()
    services: tuple[Service, ...] = ()
    therapists: tuple[Therapist, ...] = ()
    bookings: tuple[Booking, ...] = ()
    inventory: tuple[InventoryItem, ...] = ()
    version: int = 0

    def branch(self, branch_id: Optional[str]) -> Optional[Branch]:
        return next((b for b in self.branches if b.id == branch_id), None)

    def counts(self) -> dict[str, int]:
        return {name: len(getattr(self, name)) for name in COLLECTIONS}


def _new_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:12]}"


def _require_text(value: Any, label: str) -> str:
    s = str(value or "").strip()
    if not s:
        raise ValueError(f"{label} is required.")
    return s


def _number(value: Any, label: str) -> float:
    try:
        n = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{label} must be a number.")
    if not math.isfinite(n):
        raise ValueError(f"{label} must be a number.")
    return int(n) if n.is_integer() else n


def _whole(value: Any, label: str) -> int:
    n = _number(value, label)
    if not isinstance(n, int):
        raise ValueError(f"{label} must be a whole number.")
    return n


def validate_service(s: Service) -> Service:
    duration = _whole(s.duration_minutes, "Duration")
    if duration <= 0:
        raise ValueError("Duration must be > 0.")
    price = _number(s.price, "Price")
    if price < 0:
        raise ValueError("Price must be >= 0.")
    return replace(s, name=_require_text(s.name, "Service name"), duration_minutes=duration, price=price)


def validate_booking(b: Booking) -> Booking:
    if b.status not in BOOKING_STATUSES:
        raise ValueError(f"Invalid status. Use one of: {', '.join(BOOKING_STATUSES)}.")
    try:
        day = date.fromisoformat(str(b.date))
    except ValueError:
        raise ValueError("Date must be YYYY-MM-DD.")
    hh, _, mm = str(b.time).partition(":")
    if not (hh.isdigit() and mm.isdigit() and 0 <= int(hh) < 24 and 0 <= int(mm) < 60):
        raise ValueError("Time must be HH:MM (24h).")
    return replace(
        b,
        branch_id=_require_text(b.branch_id, "Branch"),
        service_id=_require_text(b.service_id, "Service"),
        therapist_id=_require_text(b.therapist_id, "Therapist"),
        customer_name=_require_text(b.customer_name, "Customer name"),
        date=day.isoformat(),
        time=f"{int(hh):02d}:{int(mm):02d}",
    )


def validate_inventory_item(i: InventoryItem) -> InventoryItem:
    current = _whole(i.current_stock, "Current stock")
    if current < 0:
        raise ValueError("Current stock must be >= 0.")
    minimum = _whole(i.min_stock, "Minimum stock")
    if minimum < 0:
        raise ValueError("Minimum stock must be >= 0.")
    price = _number(i.price_per_unit, "Price per unit")
    if price < 0:
        raise ValueError("Price per unit must be >= 0.")
    return replace(
        i,
        name=_require_text(i.name, "Item name"),
        current_stock=current,
        min_stock=minimum,
        price_per_unit=price,
    )


def validate_branch(b: Branch) -> Branch:
    pct = _number(b.profit_sharing_percent, "Profit sharing percent")
    if not 0 <= pct <= 100:
        raise ValueError("Profit sharing percent must be between 0 and 100.")
    return replace(b, id=_require_text(b.id, "Branch id"), profit_sharing_percent=pct)


def validate_therapist(t: Therapist) -> Therapist:
    rate = _number(t.hourly_incentive, "Hourly incentive")
    if rate < 0:
        raise ValueError("Hourly incentive must be >= 0.")
    return replace(t, id=_require_text(t.id, "Therapist id"), hourly_incentive=rate)


VALIDATORS: dict[str, Callable] = {
    "branches": validate_branch,
    "services": validate_service,
    "therapists": validate_therapist,
    "bookings": validate_booking,
    "inventory": validate_inventory_item,
}


def validate_snapshot(snapshot: Snapshot) -> Snapshot:
    """Validate every record, returning a snapshot of the normalized records."""
    return replace(
        snapshot,
        **{name: tuple(VALIDATORS[name](r) for r in getattr(snapshot, name)) for name in COLLECTIONS},
    )


# -------------------------
# Generic commands
# -------------------------

def _check_known(cls, names: Iterable[str], collection: str) -> None:
    unknown = sorted(set(names) - {f.name for f in fields(cls)})
    if unknown:
        raise ValueError(f"Unknown field(s) for {collection}: {', '.join(unknown)}.")


def _build(cls, collection: str, prefix: str, values: dict[str, Any]):
    values = {k: v for k, v in values.items() if k != "id"}
    _check_known(cls, values, collection)
    # Missing required text fields become "" so the validator names them.
    for f in fields(cls):
        if f.name != "id" and f.default is MISSING:
            values.setdefault(f.name, "")
    return cls(id=_new_id(prefix), **values)


def _add(snapshot: Snapshot, collection: str, record) -> tuple[Snapshot, Any]:
    record = VALIDATORS[collection](record)
    items = getattr(snapshot, collection) + (record,)
    logger.info("Added %s %s", collection, record.id)
    return replace(snapshot, **{collection: items, "version": snapshot.version + 1}), record


def _update(snapshot: Snapshot, collection: str, record_id: str, updates: dict[str, Any]) -> Snapshot:
    items = getattr(snapshot, collection)
    record = next((i for i in items if i.id == record_id), None)
    if record is None:
        raise ValueError(f"Record {record_id} not found in {collection}.")

    updates = {k: v for k, v in updates.items() if k != "id"}
    _check_known(type(record), updates, collection)

    updated = VALIDATORS[collection](replace(record, **updates))
    new_items = tuple(updated if i.id == record_id else i for i in items)
    logger.info("Updated %s %s (%s)", collection, record_id, ", ".join(sorted(updates)))
    return replace(snapshot, **{collection: new_items, "version": snapshot.version + 1})


def _merge(items: tuple, incoming: Iterable, collection: str) -> tuple:
    by_id = {i.id: i for i in items}
    for record in incoming:
        record = VALIDATORS[collection](record)
        if record.id in by_id:
            logger.info("Replaced %s %s", collection, record.id)
        else:
            logger.info("Added %s %s", collection, record.id)
        by_id[record.id] = record
    return tuple(by_id.values())


def upsert_reference_data(
    snapshot: Snapshot,
    branches: Iterable[Branch] = (),
    therapists: Iterable[Therapist] = (),
) -> Snapshot:
    """
    Insert or replace branches and therapists by id.

    These collections are read-only for the pages; this is the only way they
    change besides a full import. Existing records keep their position.
    """
    return replace(
        snapshot,
        branches=_merge(snapshot.branches, branches, "branches"),
        therapists=_merge(snapshot.therapists, therapists, "therapists"),
        version=snapshot.version + 1,
    )


def _delete(snapshot: Snapshot, collection: str, record_id: str) -> Snapshot:
    items = getattr(snapshot, collection)
    kept = tuple(i for i in items if i.id != record_id)
    if len(kept) == len(items):
        raise ValueError(f"Record {record_id} not found in {collection}.")
    logger.info("Deleted %s %s", collection, record_id)
    return replace(snapshot, **{collection: kept, "version": snapshot.version + 1})


# -------------------------
# Services
# -------------------------

def add_service(snapshot: Snapshot, **fields: Any) -> tuple[Snapshot, Service]:
    return _add(snapshot, "services", _build(Service, "services", "svc", fields))


def update_service(snapshot: Snapshot, service_id: str, **updates: Any) -> Snapshot:
    return _update(snapshot, "services", service_id, updates)


def delete_service(snapshot: Snapshot, service_id: str) -> Snapshot:
    # Bookings keep their service_id; the calculations treat it as dangling.
    return _delete(snapshot, "services", service_id)


# -------------------------
# Bookings
# -------------------------

def add_booking(snapshot: Snapshot, branch_id: str, **fields: Any) -> tuple[Snapshot, Booking]:
    return _add(snapshot, "bookings", _build(Booking, "bookings", "bk", {**fields, "branch_id": branch_id}))


def update_booking(snapshot: Snapshot, booking_id: str, **updates: Any) -> Snapshot:
    return _update(snapshot, "bookings", booking_id, updates)


def delete_booking(snapshot: Snapshot, booking_id: str) -> Snapshot:
    return _delete(snapshot, "bookings", booking_id)


# -------------------------
# Inventory
# -------------------------

def add_inventory_item(snapshot: Snapshot, **fields: Any) -> tuple[Snapshot, InventoryItem]:
    return _add(snapshot, "inventory", _build(InventoryItem, "inventory", "inv", fields))


def update_inventory_item(snapshot: Snapshot, item_id: str, **updates: Any) -> Snapshot:
    return _update(snapshot, "inventory", item_id, updates)


def delete_inventory_item(snapshot: Snapshot, item_id: str) -> Snapshot:
    return _delete(snapshot, "inventory", item_id)


class Store:
    """
    Mutable holder for the current snapshot.

    Each command swaps in the new snapshot and hands it to `on_change`
    (the storage layer uses this to write the file).
    """

    def __init__(self, snapshot: Optional[Snapshot] = None, on_change: Optional[Callable[[Snapshot], None]] = None):
        self.snapshot = snapshot or Snapshot()
        self._on_change = on_change

    def _commit(self, snapshot: Snapshot) -> None:
        self.snapshot = snapshot
        if self._on_change is not None:
            self._on_change(snapshot)

    def replace_all(self, snapshot: Snapshot) -> None:
        snapshot = validate_snapshot(snapshot)
        self._commit(replace(snapshot, version=self.snapshot.version + 1))

    def upsert_reference_data(self, branches: Iterable[Branch] = (), therapists: Iterable[Therapist] = ()) -> None:
        self._commit(upsert_reference_data(self.snapshot, branches, therapists))

    def add_service(self, **fields: Any) -> Service:
        snapshot, service = add_service(self.snapshot, **fields)
        self._commit(snapshot)
        return service

    def update_service(self, service_id: str, **updates: Any) -> None:
        self._commit(update_service(self.snapshot, service_id, **updates))

    def delete_service(self, service_id: str) -> None:
        self._commit(delete_service(self.snapshot, service_id))

    def add_booking(self, branch_id: str, **fields: Any) -> Booking:
        snapshot, booking = add_booking(self.snapshot, branch_id, **fields)
        self._commit(snapshot)
        return booking

    def update_booking(self, booking_id: str, **updates: Any) -> None:
        self._commit(update_booking(self.snapshot, booking_id, **updates))

    def delete_booking(self, booking_id: str) -> None:
        self._commit(delete_booking(self.snapshot, booking_id))

    def add_inventory_item(self, **fields: Any) -> InventoryItem:
        snapshot, item = add_inventory_item(self.snapshot, **fields)
        self._commit(snapshot)
        return item

    def update_inventory_item(self, item_id: str, **updates: Any) -> None:
        self._commit(update_inventory_item(self.snapshot, item_id, **updates))

    def delete_inventory_item(self, item_id: str) -> None:
        self._commit(delete_inventory_item(self.snapshot, item_id))
