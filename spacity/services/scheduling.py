from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from spacity.models import CANCELLED, COMPLETED, CONFIRMED, PENDING, Booking, Service, Therapist
from spacity.services.analytics import bookings_today
from spacity.services.calculations import index_by_id, total_revenue
from spacity.utils import DateLike, to_iso

FIRST_HOUR = 9
LAST_HOUR = 20

STATUS_LABELS = {
    "pending": "Menunggu",
    "confirmed": "Dikonfirmasi",
    "completed": "Selesai",
    "cancelled": "Dibatalkan",
}

# Completed and cancelled bookings are final.
STATUS_TRANSITIONS = {
    PENDING: (CONFIRMED, CANCELLED),
    CONFIRMED: (COMPLETED, CANCELLED),
    COMPLETED: (),
    CANCELLED: (),
}


def next_statuses(status: str) -> list[str]:
    """The current status followed by the statuses it may move to."""
    return [status, *STATUS_TRANSITIONS.get(status, ())]


@dataclass(frozen=True)
class DashboardStats:
    total_bookings: int
    revenue: float
    completed_bookings: int
    active_therapists: int


def time_slots(first_hour: int = FIRST_HOUR, last_hour: int = LAST_HOUR) -> list[str]:
    """Half-hour booking slots, e.g. 09:00, 09:30, ... 20:30."""
    slots = []
    for hour in range(first_hour, last_hour + 1):
        slots.append(f"{hour:02d}:00")
        slots.append(f"{hour:02d}:30")
    return slots


def bookings_on(bookings: Iterable[Booking], day: DateLike) -> list[Booking]:
    iso = to_iso(day)
    return sorted((b for b in bookings if b.date == iso), key=lambda b: b.time)


def dashboard_stats(
    bookings: Iterable[Booking],
    services: Sequence[Service],
    therapists: Sequence[Therapist],
    today: Optional[DateLike] = None,
) -> DashboardStats:
    """
    Today's figures for the home page. Revenue here covers every booking on
    the schedule today, not only completed ones.
    """
    todays = bookings_today(bookings, today)
    return DashboardStats(
        total_bookings=len(todays),
        revenue=total_revenue(todays, services),
        completed_bookings=sum(1 for b in todays if b.status == COMPLETED),
        active_therapists=len({b.therapist_id for b in todays}),
    )


def booking_rows(
    bookings: Iterable[Booking],
    services: Sequence[Service],
    therapists: Sequence[Therapist],
) -> list[dict]:
    """Flat rows for schedule tables; unknown references show as '-'."""
    service_by_id = index_by_id(services)
    therapist_by_id = index_by_id(therapists)

    rows = []
    for b in bookings:
        service = service_by_id.get(b.service_id)
        therapist = therapist_by_id.get(b.therapist_id)
        rows.append(
            {
                "id": b.id,
                "time": b.time,
                "customer": b.customer_name,
                "service": service.name if service else "-",
                "duration_minutes": service.duration_minutes if service else 0,
                "therapist": therapist.name if therapist else "-",
                "price": service.price if service else 0,
                "status": b.status,
                "notes": b.notes,
            }
        )
    return rows
