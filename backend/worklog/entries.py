from __future__ import annotations

import datetime as dt
from typing import List, Optional, Union

from .models import Category, CategoryKind, ScheduleSettings, TimeRecord
from .services import target_hours
from .utils import DayLike, at_local_time, coerce_day, to_utc

MARKER_TIME = dt.time(9, 0)
OPERATION_START = dt.time(8, 0)
OPERATION_END = dt.time(17, 0)


def build_entry(
    day: DayLike,
    category: Union[Category, str],
    schedule: ScheduleSettings,
    start: Optional[dt.time] = None,
    end: Optional[dt.time] = None,
    note: str = "",
    tz: Optional[dt.tzinfo] = None,
) -> TimeRecord:
    """Create the record a manual entry form would store for ``day``.

    Work and travel need explicit times. Recovery becomes a zero-length
    marker, any leave spans the day's target hours from 09:00.
    """
    parsed = Category.parse(category) if isinstance(category, str) else category
    calendar_day = coerce_day(day, tz)
    if parsed.is_credited:
        if start is None or end is None:
            raise ValueError("Start and end time are required")
        start_time = at_local_time(calendar_day, start, tz)
        end_time = at_local_time(calendar_day, end, tz)
        if to_utc(end_time) <= to_utc(start_time):
            raise ValueError("End time must be after start time")
    elif parsed.kind is CategoryKind.RECOVERY:
        start_time = end_time = at_local_time(calendar_day, MARKER_TIME, tz)
    else:
        start_time = at_local_time(calendar_day, MARKER_TIME, tz)
        span = dt.timedelta(hours=target_hours(calendar_day, schedule, tz))
        end_time = (to_utc(start_time) + span).astimezone(start_time.tzinfo)
    return TimeRecord(start_time=start_time, end_time=end_time, category=parsed, note=note)


def expand_operation(
    start_day: DayLike,
    end_day: DayLike,
    location: str,
    tz: Optional[dt.tzinfo] = None,
) -> List[TimeRecord]:
    first = coerce_day(start_day, tz)
    last = coerce_day(end_day, tz)
    if last < first:
        raise ValueError("End date must not be before start date")
    category = Category.parse("operation")
    records: List[TimeRecord] = []
    current = first
    while current <= last:
        records.append(
            TimeRecord(
                start_time=at_local_time(current, OPERATION_START, tz),
                end_time=at_local_time(current, OPERATION_END, tz),
                category=category,
                note=location,
            )
        )
        current += dt.timedelta(days=1)
    return records
