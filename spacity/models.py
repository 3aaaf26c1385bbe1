from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any

PENDING = "pending"
CONFIRMED = "confirmed"
COMPLETED = "completed"
CANCELLED = "cancelled"
BOOKING_STATUSES = (PENDING, CONFIRMED, COMPLETED, CANCELLED)


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(p.capitalize() for p in rest)


class Record:
    """
    Mixin for the stored entities.

    Records are stored as camelCase JSON objects (profitSharingPercent,
    durationMinutes, ...). Unknown keys are ignored on read; missing keys
    fall back to the dataclass default.
    """

    id: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]):
        kwargs = {}
        for f in fields(cls):
            key = _camel(f.name)
            if key in data:
                kwargs[f.name] = data[key]
            elif f.name in data:
                kwargs[f.name] = data[f.name]
        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        return {_camel(k): v for k, v in asdict(self).items()}


@dataclass(frozen=True)
class Branch(Record):
    id: str
    name: str
    hotel_partner: str = ""
    location: str = ""
    profit_sharing_percent: float = 30
    is_active: bool = True


@dataclass(frozen=True)
class Service(Record):
    id: str
    name: str
    category: str = "Massage"
    duration_minutes: int = 60
    price: int = 0
    description: str = ""
    is_active: bool = True


@dataclass(frozen=True)
class Therapist(Record):
    id: str
    name: str
    specialization: str = ""
    hourly_incentive: float = 0


@dataclass(frozen=True)
class Booking(Record):
    id: str
    branch_id: str
    service_id: str
    therapist_id: str
    customer_name: str = ""
    date: str = ""
    time: str = "09:00"
    status: str = CONFIRMED
    notes: str = ""

    @property
    def is_completed(self) -> bool:
        return self.status == COMPLETED


@dataclass(frozen=True)
class InventoryItem(Record):
    id: str
    name: str
    category: str = "Other"
    unit: str = "piece"
    current_stock: int = 0
    min_stock: int = 0
    price_per_unit: float = 0
