from __future__ import annotations

from typing import Any, Callable, Iterable, TypeVar

from spacity.models import InventoryItem
from spacity.utils import ratio

T = TypeVar("T")

CRITICAL = "critical"
LOW = "low"
NORMAL = "normal"

STATUS_LABELS = {
    CRITICAL: "Habis",
    LOW: "Stok Rendah",
    NORMAL: "Normal",
}


def group_by(items: Iterable[T], key: Callable[[T], Any]) -> dict[Any, list[T]]:
    """
    Partition items by key. Groups appear in first-seen order and keep the
    original order of their members.
    """
    out: dict[Any, list[T]] = {}
    for item in items:
        out.setdefault(key(item), []).append(item)
    return out


def group_by_category(items: Iterable[T]) -> dict[str, list[T]]:
    return group_by(items, lambda i: i.category)


def is_low_stock(item: InventoryItem) -> bool:
    # Equal to the minimum is not low.
    return int(item.current_stock) < int(item.min_stock)


def is_critical(item: InventoryItem) -> bool:
    return int(item.current_stock) == 0


def stock_status(item: InventoryItem) -> str:
    if is_critical(item):
        return CRITICAL
    if is_low_stock(item):
        return LOW
    return NORMAL


def stock_percent(item: InventoryItem) -> float:
    """Current stock as a percentage of the minimum; NaN when no minimum is set."""
    return ratio(item.current_stock, item.min_stock) * 100


def item_value(item: InventoryItem) -> float:
    return item.current_stock * item.price_per_unit


def inventory_value(items: Iterable[InventoryItem]) -> float:
    return sum((item_value(i) for i in items), 0)


def low_stock_items(items: Iterable[InventoryItem]) -> list[InventoryItem]:
    return [i for i in items if is_low_stock(i)]


def critical_items(items: Iterable[InventoryItem]) -> list[InventoryItem]:
    return [i for i in items if is_critical(i)]


def adjust_stock(item: InventoryItem, delta: int) -> int:
    """New stock level after a +/- adjustment, never below zero."""
    return max(0, int(item.current_stock) + int(delta))
