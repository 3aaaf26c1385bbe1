"""
Report data for the PDF/Excel exports.

The writers themselves live outside this package; they take the DataFrames
built here. ExportOptions lists every option the export dialog offers.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional, Sequence

import pandas as pd

from spacity.config import DEFAULT_SPA_PERCENT
from spacity.models import InventoryItem
from spacity.services.analytics import ALL_BRANCHES
from spacity.services.inventory import STATUS_LABELS, group_by_category, inventory_value, is_low_stock, item_value, stock_status
from spacity.services.recap import Recap, range_breakdown
from spacity.store import Snapshot
from spacity.utils import DateLike, first_of_month, to_iso

PDF = "pdf"
EXCEL = "excel"
FORMATS = (PDF, EXCEL)


@dataclass(frozen=True)
class ExportOptions:
    """
    format:                 'pdf' or 'excel'.
    start_date, end_date:   revenue reports only; inclusive ISO dates.
    branch_id:              'all' or a branch id.
    include_details:        revenue reports add service and therapist tables.
    include_low_stock_only: inventory reports list only items below minimum.
    include_values:         inventory reports add price and value columns.
    """

    format: str = PDF
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    branch_id: str = ALL_BRANCHES
    include_details: bool = True
    include_low_stock_only: bool = False
    include_values: bool = True

    def __post_init__(self):
        if self.format not in FORMATS:
            raise ValueError("Invalid export format. Use 'pdf' or 'excel'.")
        if self.start_date and self.end_date and to_iso(self.start_date) > to_iso(self.end_date):
            raise ValueError("Start date must not be after end date.")

    @classmethod
    def for_month(cls, today: Optional[DateLike] = None, **overrides) -> "ExportOptions":
        """Dialog defaults: first of the current month through today."""
        end = to_iso(today) if today is not None else date.today().isoformat()
        return cls(start_date=first_of_month(end), end_date=end, **overrides)


def report_filename(kind: str, options: ExportOptions, today: Optional[DateLike] = None) -> str:
    stamp = to_iso(today) if today is not None else date.today().isoformat()
    ext = "pdf" if options.format == PDF else "xlsx"
    return f"SPAcity_{kind}_{stamp}.{ext}"


def recap_summary_frame(recap: Recap) -> pd.DataFrame:
    split = recap.profit_split
    rows = [
        ("Total Booking", recap.booking_count),
        ("Total Pendapatan", recap.revenue),
        ("Total Insentif Terapis", recap.incentives),
        ("Laba Bersih", recap.net_profit),
        (f"Bagian SPA ({split.spa_percent:g}%)", split.spa_amount),
        (f"Bagian Hotel ({split.hotel_percent:g}%)", split.hotel_amount),
    ]
    return pd.DataFrame(rows, columns=["item", "value"])


def service_breakdown_frame(recap: Recap) -> pd.DataFrame:
    rows = [
        {
            "service": s.service.name,
            "category": s.service.category,
            "price": s.service.price,
            "count": s.count,
            "revenue": s.revenue,
        }
        for s in recap.service_breakdown
    ]
    return pd.DataFrame(rows, columns=["service", "category", "price", "count", "revenue"])


def therapist_frame(recap: Recap) -> pd.DataFrame:
    rows = [
        {
            "therapist": p.therapist.name,
            "bookings": p.booking_count,
            "hours": round(p.total_hours, 1),
            "incentive": p.total_incentive,
        }
        for p in recap.therapist_performance
    ]
    return pd.DataFrame(rows, columns=["therapist", "bookings", "hours", "incentive"])


def revenue_report(
    snapshot: Snapshot,
    options: ExportOptions,
    default_spa_percent: float = DEFAULT_SPA_PERCENT,
) -> dict[str, pd.DataFrame]:
    if not options.start_date or not options.end_date:
        raise ValueError("Revenue export needs a start and end date.")

    branch = None
    if options.branch_id != ALL_BRANCHES:
        branch = snapshot.branch(options.branch_id)
        if branch is None:
            raise ValueError("Branch not found.")

    recap = range_breakdown(
        snapshot.bookings,
        snapshot.services,
        snapshot.therapists,
        branch,
        options.start_date,
        options.end_date,
        default_spa_percent=default_spa_percent,
    )

    frames = {"summary": recap_summary_frame(recap)}
    if options.include_details:
        frames["services"] = service_breakdown_frame(recap)
        frames["therapists"] = therapist_frame(recap)
    return frames


def inventory_frame(items: Sequence[InventoryItem], include_values: bool = True) -> pd.DataFrame:
    columns = ["category", "item", "current_stock", "unit", "min_stock", "status"]
    if include_values:
        columns += ["price_per_unit", "total_value"]

    rows = []
    for category, members in group_by_category(items).items():
        for i in members:
            rows.append(
                {
                    "category": category,
                    "item": i.name,
                    "current_stock": i.current_stock,
                    "unit": i.unit,
                    "min_stock": i.min_stock,
                    "status": STATUS_LABELS[stock_status(i)],
                    "price_per_unit": i.price_per_unit,
                    "total_value": item_value(i),
                }
            )
    return pd.DataFrame(rows, columns=columns)


def inventory_report(items: Sequence[InventoryItem], options: ExportOptions) -> dict[str, pd.DataFrame]:
    """
    summary, detail, then one frame per category (keyed 'category:<name>').
    """
    if options.include_low_stock_only:
        items = [i for i in items if is_low_stock(i)]

    summary = [
        ("Total Item", len(items)),
        ("Item Stok Rendah", sum(1 for i in items if is_low_stock(i))),
    ]
    if options.include_values:
        summary.append(("Total Nilai Inventory", inventory_value(items)))

    frames = {
        "summary": pd.DataFrame(summary, columns=["item", "value"]),
        "detail": inventory_frame(items, options.include_values),
    }
    for category, members in group_by_category(items).items():
        frames[f"category:{category}"] = inventory_frame(members, options.include_values).drop(columns=["category"])
    return frames
