from __future__ import annotations

import datetime as dt
import logging
from typing import Dict, Iterable, List, Optional, Tuple

from .config import settings
from .models import Category, CategoryKind, LeaveBalances, ScheduleSettings, TimeRecord, ordinary_leave_tag
from .services import used_leave
from .utils import DayLike, coerce_day, to_utc

logger = logging.getLogger(__name__)

FIXED_BALANCE_TAGS = ("lic_937", "rec_fest", "com_log", "rec_comp")


def default_settings(today: Optional[DayLike] = None) -> Tuple[ScheduleSettings, LeaveBalances]:
    current = coerce_day(today) if today is not None else dt.date.today()
    schedule = ScheduleSettings(
        mon_thu=settings.schedule_mon_thu,
        fri=settings.schedule_fri,
        sat_sun=settings.schedule_sat_sun,
    )
    balances: Dict[str, float] = {ordinary_leave_tag(current.year): settings.ordinary_leave_days}
    for tag in FIXED_BALANCE_TAGS:
        balances[tag] = 0.0
    return schedule, LeaveBalances(balances)


def _years_before(moment: dt.datetime, years: int) -> dt.datetime:
    try:
        return moment.replace(year=moment.year - years)
    except ValueError:
        # 29 February without a leap year counterpart
        return moment.replace(year=moment.year - years, day=28)


def prune_records(
    records: Iterable[TimeRecord],
    now: dt.datetime,
    retention_years: Optional[int] = None,
) -> List[TimeRecord]:
    """Drop records that started before the retention window."""
    years = settings.retention_years if retention_years is None else retention_years
    cutoff = _years_before(to_utc(now), years)
    snapshot = list(records)
    kept = [record for record in snapshot if to_utc(record.start_time) >= cutoff]
    removed = len(snapshot) - len(kept)
    if removed:
        logger.info("Removed %d records older than %d years", removed, years)
    return kept


def reconcile_leave_balances(
    balances: LeaveBalances,
    records: Iterable[TimeRecord],
    today: DayLike,
    default_ordinary_days: Optional[float] = None,
) -> LeaveBalances:
    """Keep the ordinary leave tags in line with the calendar year.

    The current year's tag is added when missing, exhausted past years and
    empty future years are dropped. Other tags pass through unchanged.
    """
    year = coerce_day(today).year
    default_days = settings.ordinary_leave_days if default_ordinary_days is None else default_ordinary_days
    used = used_leave(records)
    updated: Dict[str, float] = dict(balances.root)

    current_tag = ordinary_leave_tag(year)
    if not any(_ordinary_year(tag) == year for tag in updated):
        updated[current_tag] = default_days
        logger.info("Added %s with %s days", current_tag, default_days)

    for tag, initial in list(updated.items()):
        tag_year = _ordinary_year(tag)
        if tag_year is None:
            continue
        if tag_year < year and initial - used.get(tag, 0.0) <= 0:
            del updated[tag]
            logger.info("Dropped exhausted balance %s", tag)
        elif tag_year > year and initial == 0:
            del updated[tag]
            logger.info("Dropped empty future balance %s", tag)
    return LeaveBalances(updated)


def _ordinary_year(tag: str) -> Optional[int]:
    category = Category.try_parse(tag)
    if category is None or category.kind is not CategoryKind.ORDINARY_LEAVE:
        return None
    return category.year
