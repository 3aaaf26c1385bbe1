"""
Aggregations behind the dashboard, analytics and export views.

Each function takes an explicit booking snapshot plus the reference
collections it needs and returns presentation-ready data. Status filtering
happens here (completed_in_range) and never inside the calculation engine.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, Optional, Sequence

from spacity.models import Booking, Branch, InventoryItem, Service, Therapist
from spacity.services.calculations import index_by_id, total_revenue, totals
from spacity.services.inventory import inventory_value, low_stock_items
from spacity.utils import DateLike, iter_days, to_date, to_iso

ALL_BRANCHES = "all"


@dataclass(frozen=True)
class BranchStat:
    branch: Branch
    revenue: float
    booking_count: int


@dataclass
class ServiceStat:
    service: Service
    count: int = 0
    revenue: float = 0


@dataclass(frozen=True)
class PeriodKpis:
    revenue: float
    incentives: float
    net_profit: float
    booking_count: int
    inventory_value: float
    low_stock_count: int
    inventory_item_count: int


def completed_in_range(bookings: Iterable[Booking], start_date: DateLike, end_date: DateLike) -> list[Booking]:
    # ISO YYYY-MM-DD strings compare in date order.
    start, end = to_iso(start_date), to_iso(end_date)
    return [b for b in bookings if b.is_completed and start <= b.date <= end]


def bookings_for_branch(bookings: Iterable[Booking], branch_id: Optional[str]) -> list[Booking]:
    if branch_id is None or branch_id == ALL_BRANCHES:
        return list(bookings)
    return [b for b in bookings if b.branch_id == branch_id]


def bookings_today(bookings: Iterable[Booking], today: Optional[DateLike] = None) -> list[Booking]:
    day = to_iso(today) if today is not None else date.today().isoformat()
    return [b for b in bookings if b.date == day]


def last_n_days(days: int, today: Optional[DateLike] = None) -> tuple[str, str]:
    """(start, end) window of `days` calendar days ending today."""
    if int(days) <= 0:
        raise ValueError("Days must be > 0.")
    end = to_date(today) if today is not None else date.today()
    start = end - timedelta(days=int(days) - 1)
    return start.isoformat(), end.isoformat()


def daily_revenue(
    bookings: Iterable[Booking],
    services: Iterable[Service],
    start_date: DateLike,
    end_date: DateLike,
) -> list[dict]:
    """
    One {"date", "revenue"} bucket for every day in [start_date, end_date],
    including days without bookings. Bookings outside the range are ignored.
    """
    buckets = {day: {"date": day, "revenue": 0} for day in iter_days(start_date, end_date)}
    service_by_id = index_by_id(services)

    for b in bookings:
        service = service_by_id.get(b.service_id)
        bucket = buckets.get(b.date)
        if service is not None and bucket is not None:
            bucket["revenue"] += service.price

    return list(buckets.values())


def branch_comparison(
    branches: Iterable[Branch],
    bookings: Sequence[Booking],
    services: Sequence[Service],
) -> list[BranchStat]:
    """Revenue per branch, highest first. Ties keep branch order."""
    stats = []
    for branch in branches:
        branch_bookings = bookings_for_branch(bookings, branch.id)
        stats.append(
            BranchStat(
                branch=branch,
                revenue=total_revenue(branch_bookings, services),
                booking_count=len(branch_bookings),
            )
        )
    return sorted(stats, key=lambda s: s.revenue, reverse=True)


def service_breakdown(bookings: Iterable[Booking], services: Iterable[Service]) -> list[ServiceStat]:
    """
    Count and revenue per booked service, highest revenue first.
    Services without bookings, and bookings on unknown services, are absent.
    """
    service_by_id = index_by_id(services)
    stats: dict[str, ServiceStat] = {}
    for b in bookings:
        service = service_by_id.get(b.service_id)
        if service is None:
            continue
        stat = stats.setdefault(service.id, ServiceStat(service=service))
        stat.count += 1
        stat.revenue += service.price

    return sorted(stats.values(), key=lambda s: s.revenue, reverse=True)


def top_services(bookings: Iterable[Booking], services: Iterable[Service], limit: int = 5) -> list[ServiceStat]:
    return service_breakdown(bookings, services)[: max(0, int(limit))]


def period_kpis(
    bookings: Iterable[Booking],
    services: Sequence[Service],
    therapists: Sequence[Therapist],
    inventory: Sequence[InventoryItem],
    start_date: DateLike,
    end_date: DateLike,
) -> PeriodKpis:
    completed = completed_in_range(bookings, start_date, end_date)
    revenue, incentives, net = totals(completed, services, therapists)
    return PeriodKpis(
        revenue=revenue,
        incentives=incentives,
        net_profit=net,
        booking_count=len(completed),
        inventory_value=inventory_value(inventory),
        low_stock_count=len(low_stock_items(inventory)),
        inventory_item_count=len(inventory),
    )
