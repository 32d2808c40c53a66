from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional

from ..core.constants import DURATION_FORMAT, DURATION_NOT_AVAILABLE

_ONE_TICK = timedelta(microseconds=1)


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_iso_datetime(value: str) -> datetime:
    """Parse an ISO-8601 local timestamp (e.g. 2024-03-01T09:00:00)."""
    return datetime.fromisoformat(value)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def seconds_between(start: datetime, end: datetime) -> int:
    """Whole seconds from start to end, fractional part truncated."""
    return int((end - start).total_seconds())


def format_duration(total_seconds: Optional[int]) -> str:
    """Render seconds as "H hours, M minutes, S seconds".

    Hours are not carried into days; nothing is rounded.
    """
    if total_seconds is None:
        return DURATION_NOT_AVAILABLE
    total_seconds = int(total_seconds)
    return DURATION_FORMAT.format(
        hours=total_seconds // 3600,
        minutes=(total_seconds // 60) % 60,
        seconds=total_seconds % 60,
    )


def inclusive_day_count(start: date, end: date) -> int:
    return (end - start).days + 1


def iso_week_start(year: int, week_of_year: int) -> datetime:
    # Week 1 starts on the Monday on/before January 4.
    jan4 = date(year, 1, 4)
    anchor = jan4 - timedelta(days=jan4.weekday())
    start = anchor + timedelta(weeks=week_of_year - 1)
    return datetime.combine(start, datetime.min.time())


def iso_week_bounds(year: int, week_of_year: int) -> tuple[datetime, datetime]:
    """Inclusive [start, end] window of an ISO-anchored week."""
    start = iso_week_start(year, week_of_year)
    return start, start + timedelta(days=7) - _ONE_TICK


def month_bounds(year: int, month: int) -> tuple[datetime, datetime]:
    """Inclusive [first instant, last instant] of a calendar month."""
    start = datetime(year, month, 1)
    if month == 12:
        next_start = datetime(year + 1, 1, 1)
    else:
        next_start = datetime(year, month + 1, 1)
    return start, next_start - _ONE_TICK


def month_date_range(day: date) -> tuple[date, date]:
    """First and last calendar day of the month containing ``day``."""
    start, end = month_bounds(day.year, day.month)
    return start.date(), end.date()


def _first_week_start(year: int, first_weekday: int, min_days: int) -> date:
    jan1 = date(year, 1, 1)
    offset = (jan1.weekday() - first_weekday) % 7
    week_start = jan1 - timedelta(days=offset)
    if 7 - offset >= min_days:
        return week_start
    return week_start + timedelta(days=7)


def week_of_week_based_year(day: date, *, first_weekday: int, min_days: int) -> int:
    """Week number of ``day`` under a configurable week definition.

    ``first_weekday`` uses Python numbering (0=Monday ... 6=Sunday). A week
    belongs to the year that holds at least ``min_days`` of its days, so days
    near New Year may fall into week 1 of the next year or the last week of
    the previous one. Monday/4 gives ISO numbering.
    """
    next_start = _first_week_start(day.year + 1, first_weekday, min_days)
    if day >= next_start:
        start = next_start
    else:
        start = _first_week_start(day.year, first_weekday, min_days)
        if day < start:
            start = _first_week_start(day.year - 1, first_weekday, min_days)
    return (day - start).days // 7 + 1
