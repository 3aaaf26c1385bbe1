"""
Financial calculations over booking snapshots.

Everything here is pure: collections come in as parameters and nothing is
mutated. Bookings are NOT filtered by status; pass completed bookings when
realized figures are wanted. A booking whose service or therapist no longer
exists contributes nothing.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence, TypeVar

from spacity.models import Booking, Service, Therapist
from spacity.utils import ratio, round_rupiah

T = TypeVar("T")


@dataclass(frozen=True)
class ProfitSplit:
    spa_amount: float
    hotel_amount: float
    spa_percent: float
    hotel_percent: float


@dataclass
class TherapistPerformance:
    therapist: Therapist
    booking_count: int = 0
    total_minutes: int = 0
    total_incentive: float = 0

    @property
    def total_hours(self) -> float:
        return self.total_minutes / 60


def index_by_id(items: Iterable[T]) -> dict[str, T]:
    return {item.id: item for item in items}


def total_revenue(bookings: Iterable[Booking], services: Iterable[Service]) -> float:
    by_id = index_by_id(services)
    total = 0
    for b in bookings:
        service = by_id.get(b.service_id)
        if service is not None:
            total += service.price
    return total


def therapist_incentive(duration_minutes: float, hourly_rate: float) -> float:
    return (duration_minutes / 60) * hourly_rate


def total_incentives(
    bookings: Iterable[Booking],
    services: Iterable[Service],
    therapists: Iterable[Therapist],
) -> float:
    service_by_id = index_by_id(services)
    therapist_by_id = index_by_id(therapists)

    total = 0
    for b in bookings:
        service = service_by_id.get(b.service_id)
        therapist = therapist_by_id.get(b.therapist_id)
        if service is not None and therapist is not None:
            total += therapist_incentive(service.duration_minutes, therapist.hourly_incentive)
    return total


def net_profit(revenue: float, incentives: float) -> float:
    return revenue - incentives


def profit_sharing(net: float, spa_percent: float) -> ProfitSplit:
    """
    Split net profit between the spa operator and the hotel partner.

    The spa share is rounded to whole rupiah and the hotel takes the
    remainder, so spa_amount + hotel_amount == net holds exactly.
    """
    spa_amount = round_rupiah(net * spa_percent / 100)
    return ProfitSplit(
        spa_amount=spa_amount,
        hotel_amount=net - spa_amount,
        spa_percent=spa_percent,
        hotel_percent=100 - spa_percent,
    )


def profit_margin(revenue: float, net: float) -> float:
    # NaN when there is no revenue.
    return ratio(net, revenue) * 100


def therapist_performance(
    bookings: Iterable[Booking],
    services: Iterable[Service],
    therapists: Iterable[Therapist],
) -> list[TherapistPerformance]:
    """
    One entry per therapist with at least one resolvable booking, in order of
    first appearance in `bookings`.
    """
    service_by_id = index_by_id(services)
    therapist_by_id = index_by_id(therapists)

    perf: dict[str, TherapistPerformance] = {}
    for b in bookings:
        service = service_by_id.get(b.service_id)
        therapist = therapist_by_id.get(b.therapist_id)
        if service is None or therapist is None:
            continue

        entry = perf.setdefault(therapist.id, TherapistPerformance(therapist=therapist))
        entry.booking_count += 1
        entry.total_minutes += service.duration_minutes
        entry.total_incentive += therapist_incentive(service.duration_minutes, therapist.hourly_incentive)

    return list(perf.values())


def totals(
    bookings: Sequence[Booking],
    services: Sequence[Service],
    therapists: Sequence[Therapist],
) -> tuple[float, float, float]:
    """(revenue, incentives, net_profit) for one booking set."""
    revenue = total_revenue(bookings, services)
    incentives = total_incentives(bookings, services, therapists)
    return revenue, incentives, net_profit(revenue, incentives)
