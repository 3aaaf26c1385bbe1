"""
Display formatting for amounts, dates, times and durations.

Labels follow the dashboard's Indonesian locale (id-ID): thousands are
separated with '.', dates use Indonesian month and day names.
"""
from __future__ import annotations

import math
from datetime import date, datetime
from typing import Optional

from spacity.utils import DateLike, round_rupiah, to_date

MISSING = "—"

MONTHS = [
    "Januari", "Februari", "Maret", "April", "Mei", "Juni",
    "Juli", "Agustus", "September", "Oktober", "November", "Desember",
]

# Monday first, matching date.weekday()
DAYS = ["Senin", "Selasa", "Rabu", "Kamis", "Jumat", "Sabtu", "Minggu"]


def _is_nan(value) -> bool:
    return isinstance(value, float) and math.isnan(value)


def _group_thousands(n: int) -> str:
    return f"{n:,}".replace(",", ".")


def format_currency(amount: float, currency_symbol: str = "Rp") -> str:
    """
    Whole-rupiah currency string, e.g. 350000 -> 'Rp 350.000'.
    Halves round away from zero. NaN renders as an em dash.
    """
    if amount is None or _is_nan(amount):
        return MISSING
    rounded = round_rupiah(amount)
    sign = "-" if rounded < 0 else ""
    return f"{sign}{currency_symbol} {_group_thousands(abs(rounded))}"


def format_percent(value: float, digits: int = 1) -> str:
    if value is None or _is_nan(value):
        return MISSING
    return f"{value:.{digits}f}%"


def format_date(value: DateLike, style: str = "medium") -> str:
    """
    short:  19/10/2026
    medium: 19 Oktober 2026
    long:   Senin, 19 Oktober 2026
    """
    d = to_date(value)
    if style == "short":
        return f"{d.day:02d}/{d.month:02d}/{d.year}"
    medium = f"{d.day} {MONTHS[d.month - 1]} {d.year}"
    if style == "medium":
        return medium
    if style == "long":
        return f"{day_name(d)}, {medium}"
    raise ValueError("Invalid date style. Use 'short', 'medium' or 'long'.")


def format_time(value: str) -> str:
    hours, minutes = str(value).split(":")[:2]
    return f"{hours}:{minutes} WIB"


def format_duration(minutes: int) -> str:
    hours, mins = divmod(int(minutes), 60)
    if hours == 0:
        return f"{mins} menit"
    if mins == 0:
        return f"{hours} jam"
    return f"{hours} jam {mins} menit"


def format_number(num: float) -> str:
    if num >= 1_000_000:
        return f"{num / 1_000_000:.1f}M"
    if num >= 1_000:
        return f"{num / 1_000:.1f}K"
    return str(num)


def day_name(value: DateLike) -> str:
    return DAYS[to_date(value).weekday()]


def relative_time(value: datetime, now: Optional[datetime] = None) -> str:
    now = now or datetime.now(value.tzinfo)
    seconds = (now - value).total_seconds()
    mins = int(seconds // 60)
    hours = int(seconds // 3600)
    days = int(seconds // 86400)

    if mins < 1:
        return "Baru saja"
    if mins < 60:
        return f"{mins} menit lalu"
    if hours < 24:
        return f"{hours} jam lalu"
    if days == 1:
        return "Kemarin"
    if days < 7:
        return f"{days} hari lalu"
    return format_date(value.date(), "short")


def is_today(value: DateLike, today: Optional[date] = None) -> bool:
    return to_date(value) == (today or date.today())
