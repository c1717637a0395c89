from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta
from typing import Iterator, List, Optional


def parse_date_key(value: str) -> date:
    """Parse a canonical ``YYYY-MM-DD`` key; raises ValueError for anything else."""
    parsed = datetime.strptime(value, "%Y-%m-%d").date()
    # strptime also accepts "2024-6-10" and padded input, which would alias another key
    if date_key(parsed) != value:
        raise ValueError(f"{value!r} is not a canonical YYYY-MM-DD key")
    return parsed


def try_parse_date_key(value: object) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    try:
        return parse_date_key(value)
    except ValueError:
        return None


def date_key(day: date) -> str:
    return day.strftime("%Y-%m-%d")


def sunday_based_weekday(day: date) -> int:
    """Weekday index with 0 = Sunday … 6 = Saturday."""
    return (day.weekday() + 1) % 7


def add_months(day: date, months: int) -> date:
    """Shift by calendar months, clamping to the last day of the target month."""
    month_index = day.month - 1 + months
    year = day.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def iter_dates(start: date, end: date) -> Iterator[date]:
    """Yield every date from start to end, both inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def week_start_sunday(day: date) -> date:
    return day - timedelta(days=sunday_based_weekday(day))


def week_dates_sunday(anchor: date) -> List[date]:
    start = week_start_sunday(anchor)
    return [start + timedelta(days=i) for i in range(7)]


def month_dates(year: int, month: int) -> List[date]:
    last_day = calendar.monthrange(year, month)[1]
    return [date(year, month, d) for d in range(1, last_day + 1)]
