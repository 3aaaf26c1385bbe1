from __future__ import annotations

from typing import Iterable

from spacity.models import Service
from spacity.services.inventory import group_by_category

SERVICE_CATEGORIES = ["Massage", "Facial", "Body Treatment", "Therapy", "Other"]

CATEGORY_ICONS = {
    "Massage": "💆",
    "Facial": "✨",
    "Body Treatment": "🌿",
    "Therapy": "🧘",
}
DEFAULT_ICON = "📦"

INVENTORY_CATEGORIES = [
    "Oil & Aromatherapy",
    "Facial Products",
    "Body Products",
    "Equipment",
    "Linen",
    "Other",
]

INVENTORY_UNITS = ["bottle", "liter", "kg", "gram", "pack", "piece", "set", "box"]


def category_icon(category: str) -> str:
    return CATEGORY_ICONS.get(category, DEFAULT_ICON)


def active_services(services: Iterable[Service]) -> list[Service]:
    return [s for s in services if s.is_active]


def group_services_by_category(services: Iterable[Service]) -> dict[str, list[Service]]:
    return group_by_category(services)
