from __future__ import annotations

import datetime as dt
import logging
from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Set, Tuple

from .holidays import holiday_name
from .models import (
    Category,
    CategoryKind,
    DayKind,
    DaySummary,
    HOLIDAY_RECOVERY_TAG,
    LeaveBalances,
    MonthlyPresence,
    ScheduleSettings,
    TimeRecord,
)
from .utils import DayLike, coerce_day, local_day

logger = logging.getLogger(__name__)

SKIPPED_FOR_USAGE: Set[CategoryKind] = {CategoryKind.WORK, CategoryKind.RECOVERY, CategoryKind.OPERATION}

PRESENCE_KINDS: Set[CategoryKind] = {CategoryKind.WORK, CategoryKind.TRAVEL, CategoryKind.OPERATION}


def target_hours(value: DayLike, schedule: ScheduleSettings, tz: Optional[dt.tzinfo] = None) -> float:
    """Expected working hours for the local calendar day of ``value``.

    Holidays are checked before the weekday, so a holiday on a Tuesday
    still resolves to the weekend target.
    """
    day = coerce_day(value, tz)
    if holiday_name(day) is not None:
        return schedule.sat_sun
    weekday = day.weekday()
    if weekday >= 5:
        return schedule.sat_sun
    if weekday == 4:
        return schedule.fri
    return schedule.mon_thu


def group_by_local_day(
    records: Iterable[TimeRecord], tz: Optional[dt.tzinfo] = None
) -> Dict[dt.date, List[TimeRecord]]:
    buckets: Dict[dt.date, List[TimeRecord]] = defaultdict(list)
    for record in records:
        buckets[local_day(record.start_time, tz)].append(record)
    return dict(buckets)


def classify_day(records: Iterable[TimeRecord]) -> DayKind:
    """Operations and full-day leave make a day neutral, then recovery, then ordinary."""
    has_recovery = False
    for record in records:
        category = record.category
        if category.kind is CategoryKind.OPERATION or category.is_full_day_leave:
            return DayKind.NEUTRAL
        if category.kind is CategoryKind.RECOVERY:
            has_recovery = True
    return DayKind.RECOVERY if has_recovery else DayKind.ORDINARY


def _credited_hours(records: Iterable[TimeRecord]) -> float:
    return sum(
        record.duration_hours
        for record in records
        if record.category.is_credited and record.end_time is not None
    )


def _summarize_day(
    day: dt.date,
    records: List[TimeRecord],
    schedule: ScheduleSettings,
) -> DaySummary:
    kind = classify_day(records)
    target = target_hours(day, schedule)
    worked = _credited_hours(records)
    if kind is DayKind.NEUTRAL:
        change = 0.0
    elif kind is DayKind.RECOVERY:
        change = -target
    else:
        change = worked - target
    name = holiday_name(day)
    logger.debug("Day %s classified as %s, change %.2f h", day, kind.value, change)
    return DaySummary(
        day=day,
        kind=kind,
        worked_hours=worked,
        target_hours=target,
        balance_change=change,
        is_weekend=day.weekday() >= 5,
        is_holiday=name is not None,
        holiday_name=name,
        categories=sorted({record.category.tag for record in records}),
    )


def day_summaries(
    records: Iterable[TimeRecord],
    schedule: ScheduleSettings,
    tz: Optional[dt.tzinfo] = None,
) -> List[DaySummary]:
    buckets = group_by_local_day(records, tz)
    return [_summarize_day(day, buckets[day], schedule) for day in sorted(buckets)]


def compute_hour_bank(
    records: Iterable[TimeRecord],
    schedule: ScheduleSettings,
    opening: float = 0.0,
    tz: Optional[dt.tzinfo] = None,
) -> float:
    balance = opening
    for summary in day_summaries(records, schedule, tz):
        balance += summary.balance_change
    return balance


def used_leave(records: Iterable[TimeRecord]) -> Dict[str, float]:
    """Consumed amount per tag.

    Travel accumulates hours, every leave record counts as one whole day
    whatever its timestamps say.
    """
    usage: Dict[str, float] = defaultdict(float)
    for record in records:
        category = record.category
        if category.kind in SKIPPED_FOR_USAGE:
            continue
        if category.kind is CategoryKind.TRAVEL:
            usage[category.tag] += record.duration_hours
        else:
            usage[category.tag] += 1
    return dict(usage)


def earned_holiday_recovery(records: Iterable[TimeRecord], tz: Optional[dt.tzinfo] = None) -> int:
    worked_holidays: Set[dt.date] = set()
    for record in records:
        if record.category.kind is not CategoryKind.WORK:
            continue
        day = local_day(record.start_time, tz)
        if holiday_name(day) is not None:
            worked_holidays.add(day)
    return len(worked_holidays)


def remaining_leave(
    balances: LeaveBalances,
    records: Iterable[TimeRecord],
    tz: Optional[dt.tzinfo] = None,
) -> Dict[str, float]:
    """Opening plus earned minus used for every leave tag in play.

    Negative results are kept: they show over-consumption.
    """
    snapshot = list(records)
    used = used_leave(snapshot)
    earned = earned_holiday_recovery(snapshot, tz)
    tags = [*balances.tags(), *(tag for tag in used if tag not in balances)]
    # Earned days go to a single holiday-recovery tag, even when aliases coexist
    credit_tag = next(
        (tag for tag in tags if _kind_of(tag) is CategoryKind.HOLIDAY_RECOVERY),
        HOLIDAY_RECOVERY_TAG,
    )
    if earned and credit_tag not in tags:
        tags.append(credit_tag)
    remaining: Dict[str, float] = {}
    for tag in tags:
        if _kind_of(tag) is CategoryKind.RECOVERY:
            continue
        credit = earned if tag == credit_tag else 0
        remaining[tag] = balances.get(tag) + credit - used.get(tag, 0.0)
    return remaining


def _kind_of(tag: str) -> Optional[CategoryKind]:
    category = Category.try_parse(tag)
    return category.kind if category is not None else None


def _presence_days(records: Iterable[TimeRecord], tz: Optional[dt.tzinfo]) -> Set[dt.date]:
    return {
        local_day(record.start_time, tz)
        for record in records
        if record.category.kind in PRESENCE_KINDS
    }


def presence_days(records: Iterable[TimeRecord], tz: Optional[dt.tzinfo] = None) -> int:
    """Distinct local days with work, travel or operation records."""
    return len(_presence_days(records, tz))


def monthly_presence(records: Iterable[TimeRecord], tz: Optional[dt.tzinfo] = None) -> List[MonthlyPresence]:
    """Presence days per calendar month, for every month that has any record."""
    snapshot = list(records)
    months: Dict[Tuple[int, int], int] = {}
    for record in snapshot:
        day = local_day(record.start_time, tz)
        months.setdefault((day.year, day.month), 0)
    for day in _presence_days(snapshot, tz):
        months[(day.year, day.month)] += 1
    return [
        MonthlyPresence(year=year, month=month, days=count)
        for (year, month), count in sorted(months.items())
    ]


def recent_days(
    records: Iterable[TimeRecord],
    schedule: ScheduleSettings,
    today: DayLike,
    days: int = 7,
    tz: Optional[dt.tzinfo] = None,
) -> List[DaySummary]:
    """Rows for the last ``days`` calendar days ending at ``today``, empty days included.

    Worked hours add up every closed record regardless of its category.
    """
    end_day = coerce_day(today, tz)
    start_day = end_day - dt.timedelta(days=max(days, 1) - 1)
    buckets = group_by_local_day(records, tz)
    rows: List[DaySummary] = []
    current = start_day
    while current <= end_day:
        day_records = buckets.get(current, [])
        worked = sum(record.duration_hours for record in day_records if record.end_time is not None)
        target = target_hours(current, schedule)
        name = holiday_name(current)
        rows.append(
            DaySummary(
                day=current,
                kind=classify_day(day_records),
                worked_hours=worked,
                target_hours=target,
                balance_change=worked - target,
                is_weekend=current.weekday() >= 5,
                is_holiday=name is not None,
                holiday_name=name,
                categories=sorted({record.category.tag for record in day_records}),
            )
        )
        current += dt.timedelta(days=1)
    return rows
