"""pytest configuration for path management and shared records."""
from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure the project root is available on sys.path so tests can import the spacity package.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from spacity.models import Booking, Branch, InventoryItem, Service, Therapist  # noqa: E402
from spacity.store import Snapshot  # noqa: E402


def make_booking(id: str, service_id: str = "svc-001", therapist_id: str = "th-001", *,
                 branch_id: str = "br-001", date: str = "2026-10-19", time: str = "10:00",
                 status: str = "completed") -> Booking:
    return Booking(
        id=id,
        branch_id=branch_id,
        service_id=service_id,
        therapist_id=therapist_id,
        customer_name=f"Customer {id}",
        date=date,
        time=time,
        status=status,
    )


@pytest.fixture
def services() -> list[Service]:
    return [
        Service(id="svc-001", name="Traditional Balinese Massage", category="Massage", duration_minutes=60, price=350000),
        Service(id="svc-002", name="Swedish Massage", category="Massage", duration_minutes=90, price=500000),
        Service(id="svc-003", name="Gold Facial", category="Facial", duration_minutes=75, price=450000),
    ]


@pytest.fixture
def therapists() -> list[Therapist]:
    return [
        Therapist(id="th-001", name="Sari Wijaya", specialization="Massage", hourly_incentive=50000),
        Therapist(id="th-002", name="Dewi Lestari", specialization="Facial", hourly_incentive=60000),
    ]


@pytest.fixture
def branches() -> list[Branch]:
    return [
        Branch(id="br-001", name="SPAcity Grand Hotel Jakarta", hotel_partner="Grand Hotel Jakarta",
               location="Jakarta Pusat", profit_sharing_percent=30),
        Branch(id="br-002", name="SPAcity Bali Resort", hotel_partner="Bali Paradise Resort",
               location="Nusa Dua, Bali", profit_sharing_percent=35),
    ]


@pytest.fixture
def inventory() -> list[InventoryItem]:
    return [
        InventoryItem(id="inv-001", name="Lavender Oil", category="Oil & Aromatherapy", unit="bottle",
                      current_stock=25, min_stock=10, price_per_unit=85000),
        InventoryItem(id="inv-002", name="Face Mask", category="Facial Products", unit="pack",
                      current_stock=8, min_stock=12, price_per_unit=45000),
        InventoryItem(id="inv-003", name="Coconut Oil", category="Oil & Aromatherapy", unit="liter",
                      current_stock=0, min_stock=5, price_per_unit=120000),
    ]


@pytest.fixture
def snapshot(branches, services, therapists, inventory) -> Snapshot:
    return Snapshot(
        branches=tuple(branches),
        services=tuple(services),
        therapists=tuple(therapists),
        bookings=(
            make_booking("bk-001", "svc-001", "th-001", date="2026-10-01"),
            make_booking("bk-002", "svc-002", "th-002", date="2026-10-02", branch_id="br-002"),
            make_booking("bk-003", "svc-003", "th-002", date="2026-10-02", status="confirmed"),
        ),
        inventory=tuple(inventory),
    )
