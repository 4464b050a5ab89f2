from __future__ import annotations

import datetime as dt
from typing import Optional, Union

from .config import LOCAL_TZ

DayLike = Union[dt.date, dt.datetime, str]


def _resolve_tz(tz: Optional[dt.tzinfo]) -> dt.tzinfo:
    return tz if tz is not None else LOCAL_TZ


def ensure_aware(value: dt.datetime, tz: Optional[dt.tzinfo] = None) -> dt.datetime:
    """Attach the local timezone to naive datetimes, leave aware ones untouched."""
    if value.tzinfo is None:
        return value.replace(tzinfo=_resolve_tz(tz))
    return value


def to_utc(value: dt.datetime, tz: Optional[dt.tzinfo] = None) -> dt.datetime:
    """The same instant in UTC, for elapsed-time arithmetic and ordering."""
    return ensure_aware(value, tz).astimezone(dt.timezone.utc)


def local_day(value: Union[dt.date, dt.datetime], tz: Optional[dt.tzinfo] = None) -> dt.date:
    """Return the calendar date of ``value`` as seen on the local wall clock."""
    if isinstance(value, dt.datetime):
        return ensure_aware(value, tz).astimezone(_resolve_tz(tz)).date()
    return value


def coerce_day(value: DayLike, tz: Optional[dt.tzinfo] = None) -> dt.date:
    """Accept a date, a datetime or an ISO string and return the local date.

    A bare ``YYYY-MM-DD`` string names a local calendar day and is never
    routed through an instant, so the weekday cannot shift for users far
    from UTC. Strings carrying a time part are parsed as instants.
    """
    if isinstance(value, str):
        text = value.strip()
        if "T" in text:
            if text.endswith("Z"):
                text = text[:-1] + "+00:00"
            return local_day(dt.datetime.fromisoformat(text), tz)
        return dt.date.fromisoformat(text)
    return local_day(value, tz)


def at_local_time(day: dt.date, time: dt.time, tz: Optional[dt.tzinfo] = None) -> dt.datetime:
    return dt.datetime.combine(day, time, tzinfo=_resolve_tz(tz))


def duration_hours(start: dt.datetime, end: Optional[dt.datetime]) -> float:
    if end is None:
        return 0.0
    return (to_utc(end) - to_utc(start)).total_seconds() / 3600
