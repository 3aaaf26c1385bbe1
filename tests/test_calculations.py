"""Tests for the revenue, incentive and profit-sharing calculations."""
from __future__ import annotations

import math

import pytest

from conftest import make_booking
from spacity.services.calculations import (
    net_profit,
    profit_margin,
    profit_sharing,
    therapist_incentive,
    therapist_performance,
    total_incentives,
    total_revenue,
    totals,
)


def test_single_completed_booking_figures(services, therapists) -> None:
    """60 min at Rp350000 with a Rp50000/hour therapist."""
    bookings = [make_booking("bk-1", "svc-001", "th-001")]

    assert total_revenue(bookings, services) == 350000
    assert total_incentives(bookings, services, therapists) == 50000
    assert net_profit(350000, 50000) == 300000
    assert totals(bookings, services, therapists) == (350000, 50000, 300000)


def test_incentive_keeps_fractional_hours() -> None:
    assert therapist_incentive(90, 50000) == 75000
    assert therapist_incentive(45, 60000) == 45000


def test_empty_bookings_are_zero(services, therapists) -> None:
    assert total_revenue([], services) == 0
    assert total_incentives([], services, therapists) == 0
    assert therapist_performance([], services, therapists) == []


def test_revenue_does_not_filter_by_status(services) -> None:
    bookings = [
        make_booking("bk-1", "svc-001", status="cancelled"),
        make_booking("bk-2", "svc-002", status="pending"),
    ]
    assert total_revenue(bookings, services) == 850000


def test_dangling_references_contribute_nothing(services, therapists) -> None:
    bookings = [
        make_booking("bk-1", "svc-deleted", "th-001"),
        make_booking("bk-2", "svc-001", "th-gone"),
        make_booking("bk-3", "svc-002", "th-001"),
    ]
    assert total_revenue(bookings, services) == 850000
    # only bk-3 has both references resolved: 1.5h * 50000
    assert total_incentives(bookings, services, therapists) == 75000


def test_net_profit_may_be_negative() -> None:
    assert net_profit(100000, 150000) == -50000


@pytest.mark.parametrize("net", [300000, 1, -50000, 123456.789, 0.1 + 0.2])
@pytest.mark.parametrize("percent", [0, 30, 33.3, 35, 100])
def test_profit_split_adds_up_exactly(net, percent) -> None:
    split = profit_sharing(net, percent)
    assert split.spa_amount + split.hotel_amount == net
    assert split.spa_percent + split.hotel_percent == 100


def test_profit_split_values() -> None:
    split = profit_sharing(300000, 30)
    assert split.spa_amount == 90000
    assert split.hotel_amount == 210000
    assert split.hotel_percent == 70


def test_profit_split_rounds_spa_share_to_whole_rupiah() -> None:
    split = profit_sharing(123456.789, 35)
    assert split.spa_amount == 43210
    assert split.spa_amount + split.hotel_amount == 123456.789

    assert profit_sharing(850000, 35).spa_amount == 297500
    assert profit_sharing(1001, 50).spa_amount == 501


def test_profit_margin_is_nan_without_revenue() -> None:
    assert profit_margin(400000, 100000) == 25
    assert math.isnan(profit_margin(0, 0))


def test_therapist_performance_groups_in_first_seen_order(services, therapists) -> None:
    bookings = [
        make_booking("bk-1", "svc-003", "th-002"),
        make_booking("bk-2", "svc-001", "th-001"),
        make_booking("bk-3", "svc-002", "th-002"),
        make_booking("bk-4", "svc-deleted", "th-001"),
    ]
    perf = therapist_performance(bookings, services, therapists)

    assert [p.therapist.id for p in perf] == ["th-002", "th-001"]
    dewi, sari = perf
    assert dewi.booking_count == 2
    assert dewi.total_minutes == 165
    assert dewi.total_incentive == pytest.approx(165000)
    assert sari.booking_count == 1
    assert sari.total_hours == 1
