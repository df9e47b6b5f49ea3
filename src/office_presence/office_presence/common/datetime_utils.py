from __future__ import annotations

import calendar
import re
from datetime import date, datetime, timedelta, timezone

from ..core.constants import DATE_FORMAT

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_MONTH_RE = re.compile(r"^\d{4}-\d{2}$")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, DATE_FORMAT).date()


def format_date(value: date) -> str:
    return value.strftime(DATE_FORMAT)


def is_valid_date_str(value: object) -> bool:
    """True when value is a zero-padded YYYY-MM-DD string naming a real day."""
    if not isinstance(value, str) or not _DATE_RE.match(value):
        return False
    try:
        parse_iso_date(value)
    except ValueError:
        return False
    return True


def now_utc() -> datetime:
    """Current UTC time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc)


def today_str() -> str:
    """Today's date as YYYY-MM-DD, evaluated in UTC."""
    return format_date(now_utc().date())


def add_days(date_str: str, days: int) -> str:
    return format_date(parse_iso_date(date_str) + timedelta(days=days))


def iter_date_range(start: str, end: str) -> list[str]:
    """Every date from start to end, both inclusive."""
    first = parse_iso_date(start)
    span = (parse_iso_date(end) - first).days
    return [format_date(first + timedelta(days=i)) for i in range(span + 1)]


def is_weekend(date_str: str) -> bool:
    # Monday=0 ... Saturday=5, Sunday=6
    return parse_iso_date(date_str).weekday() >= 5


def month_range(year_month: str) -> tuple[str, str]:
    """First and last day of a YYYY-MM month."""
    if not isinstance(year_month, str) or not _MONTH_RE.match(year_month):
        raise ValueError(f"Invalid month: {year_month!r}")
    year, month = (int(p) for p in year_month.split("-"))
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month: {year_month!r}")
    last_day = calendar.monthrange(year, month)[1]
    return f"{year:04d}-{month:02d}-01", f"{year:04d}-{month:02d}-{last_day:02d}"
