from __future__ import annotations

import datetime as dt
from typing import Dict, Optional, Tuple

from .utils import DayLike, coerce_day

# (month, day) -> name. Fixed-date national holidays only, Easter Monday is not covered.
FIXED_HOLIDAYS: Dict[Tuple[int, int], str] = {
    (1, 1): "Capodanno",
    (1, 6): "Epifania",
    (4, 25): "Festa della Liberazione",
    (5, 1): "Festa dei Lavoratori",
    (6, 2): "Festa della Repubblica",
    (8, 15): "Ferragosto",
    (11, 1): "Ognissanti",
    (12, 8): "Immacolata Concezione",
    (12, 25): "Natale",
    (12, 26): "Santo Stefano",
}


def holiday_name(value: DayLike, tz: Optional[dt.tzinfo] = None) -> Optional[str]:
    day = coerce_day(value, tz)
    return FIXED_HOLIDAYS.get((day.month, day.day))


def is_holiday(value: DayLike, tz: Optional[dt.tzinfo] = None) -> bool:
    """Return True when the local calendar date of ``value`` is a public holiday.

    Only month and day are compared, so every year matches identically.
    """
    return holiday_name(value, tz) is not None
