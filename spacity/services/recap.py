from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

from spacity.config import DEFAULT_SPA_PERCENT
from spacity.models import Booking, Branch, Service, Therapist
from spacity.services.analytics import ServiceStat, bookings_for_branch, completed_in_range, service_breakdown
from spacity.services.calculations import (
    ProfitSplit,
    TherapistPerformance,
    profit_margin,
    profit_sharing,
    therapist_performance,
    totals,
)
from spacity.utils import DateLike, to_iso


@dataclass
class Recap:
    start_date: str
    end_date: str
    branch: Optional[Branch]
    booking_count: int
    revenue: float
    incentives: float
    net_profit: float
    margin_percent: float
    profit_split: ProfitSplit
    service_breakdown: list[ServiceStat] = field(default_factory=list)
    therapist_performance: list[TherapistPerformance] = field(default_factory=list)

    @property
    def is_single_day(self) -> bool:
        return self.start_date == self.end_date


def spa_percent_for(branch: Optional[Branch], default_spa_percent: float = DEFAULT_SPA_PERCENT) -> float:
    if branch is None:
        return default_spa_percent
    return branch.profit_sharing_percent


def range_breakdown(
    bookings: Iterable[Booking],
    services: Sequence[Service],
    therapists: Sequence[Therapist],
    branch: Optional[Branch],
    start_date: DateLike,
    end_date: DateLike,
    *,
    default_spa_percent: float = DEFAULT_SPA_PERCENT,
) -> Recap:
    """
    Revenue, incentives, net profit and the hotel/spa split for the completed
    bookings of one branch (or all branches when branch is None) within a
    date range.
    """
    scoped = bookings_for_branch(bookings, branch.id if branch is not None else None)
    completed = completed_in_range(scoped, start_date, end_date)

    revenue, incentives, net = totals(completed, services, therapists)
    return Recap(
        start_date=to_iso(start_date),
        end_date=to_iso(end_date),
        branch=branch,
        booking_count=len(completed),
        revenue=revenue,
        incentives=incentives,
        net_profit=net,
        margin_percent=profit_margin(revenue, net),
        profit_split=profit_sharing(net, spa_percent_for(branch, default_spa_percent)),
        service_breakdown=service_breakdown(completed, services),
        therapist_performance=therapist_performance(completed, services, therapists),
    )


def daily_recap(
    bookings: Iterable[Booking],
    services: Sequence[Service],
    therapists: Sequence[Therapist],
    branch: Optional[Branch],
    day: DateLike,
    *,
    default_spa_percent: float = DEFAULT_SPA_PERCENT,
) -> Recap:
    return range_breakdown(
        bookings,
        services,
        therapists,
        branch,
        day,
        day,
        default_spa_percent=default_spa_percent,
    )
