from __future__ import annotations

import calendar
from datetime import date, datetime, time, timezone


def utc_now() -> datetime:
    """Current UTC time as a naive datetime.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_utc(value: datetime) -> datetime:
    """Normalize a timestamp to naive UTC.

    Naive values are already treated as UTC; aware values are converted.
    """
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def month_window(instant: datetime) -> tuple[datetime, datetime]:
    """Closed [first instant, last instant] of the calendar month containing `instant`."""
    instant = to_utc(instant)
    last_day = calendar.monthrange(instant.year, instant.month)[1]
    start = datetime(instant.year, instant.month, 1)
    end = datetime.combine(date(instant.year, instant.month, last_day), time.max)
    return start, end


def period_key(instant: datetime) -> str:
    """Month period key used to de-duplicate rewards, e.g. '2024-01'."""
    instant = to_utc(instant)
    return f"{instant.year:04d}-{instant.month:02d}"
