from __future__ import annotations

from datetime import date, datetime, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterator, Union

DateLike = Union[str, date]


def iso_today() -> str:
    # Local calendar date, no timezone conversion.
    return date.today().isoformat()


def round_rupiah(amount: float) -> int:
    # Whole rupiah, halves away from zero.
    return int(Decimal(str(amount)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def to_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def to_iso(value: DateLike) -> str:
    return to_date(value).isoformat()


def iter_days(start_date: DateLike, end_date: DateLike) -> Iterator[str]:
    """
    Yield every ISO date from start_date to end_date inclusive.
    Nothing is yielded when start_date is after end_date.
    """
    current = to_date(start_date)
    end = to_date(end_date)
    while current <= end:
        yield current.isoformat()
        current += timedelta(days=1)


def first_of_month(today: DateLike | None = None) -> str:
    d = to_date(today) if today is not None else date.today()
    return d.replace(day=1).isoformat()


def ratio(n: float, d: float) -> float:
    # Zero denominators give NaN; callers decide how to render it.
    return float(n) / float(d) if d else float("nan")
