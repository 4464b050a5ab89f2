from __future__ import annotations

import datetime as dt
import re
import uuid
from enum import Enum
from typing import Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, RootModel, field_serializer, field_validator, model_validator

from .utils import duration_hours, ensure_aware, to_utc


class CategoryKind(str, Enum):
    WORK = "work"
    TRAVEL = "travel"
    OPERATION = "operation"
    RECOVERY = "recovery"
    STATUTORY_LEAVE = "statutory_leave"
    HOLIDAY_RECOVERY = "holiday_recovery"
    ORDINARY_LEAVE = "ordinary_leave"


FULL_DAY_LEAVE_KINDS = frozenset(
    {CategoryKind.STATUTORY_LEAVE, CategoryKind.HOLIDAY_RECOVERY, CategoryKind.ORDINARY_LEAVE}
)

CREDITED_KINDS = frozenset({CategoryKind.WORK, CategoryKind.TRAVEL})

# Tags used by the mobile client first, readable aliases second.
CATEGORY_TAGS: Dict[str, CategoryKind] = {
    "work": CategoryKind.WORK,
    "com_log": CategoryKind.TRAVEL,
    "travel": CategoryKind.TRAVEL,
    "operation": CategoryKind.OPERATION,
    "rec_comp": CategoryKind.RECOVERY,
    "recovery": CategoryKind.RECOVERY,
    "lic_937": CategoryKind.STATUTORY_LEAVE,
    "statutory-leave": CategoryKind.STATUTORY_LEAVE,
    "rec_fest": CategoryKind.HOLIDAY_RECOVERY,
    "holiday-recovery": CategoryKind.HOLIDAY_RECOVERY,
}

ORDINARY_LEAVE_PATTERN = re.compile(r"^(?:ord_|ordinary-)(?P<year>\d{4})$")

ORDINARY_LEAVE_PREFIX = "ord_"

HOLIDAY_RECOVERY_TAG = "rec_fest"


def ordinary_leave_tag(year: int) -> str:
    return f"{ORDINARY_LEAVE_PREFIX}{year}"


class Category(BaseModel):
    """Structural category of a record, keeping the tag it was parsed from."""

    model_config = ConfigDict(frozen=True)

    kind: CategoryKind
    tag: str
    year: Optional[int] = None

    @classmethod
    def parse(cls, tag: str) -> "Category":
        normalized = tag.strip() if isinstance(tag, str) else ""
        kind = CATEGORY_TAGS.get(normalized)
        if kind is not None:
            return cls(kind=kind, tag=normalized)
        match = ORDINARY_LEAVE_PATTERN.match(normalized)
        if match:
            return cls(kind=CategoryKind.ORDINARY_LEAVE, tag=normalized, year=int(match.group("year")))
        raise ValueError(f"Unknown category: {tag!r}")

    @classmethod
    def try_parse(cls, tag: str) -> Optional["Category"]:
        try:
            return cls.parse(tag)
        except ValueError:
            return None

    @property
    def is_full_day_leave(self) -> bool:
        return self.kind in FULL_DAY_LEAVE_KINDS

    @property
    def is_credited(self) -> bool:
        return self.kind in CREDITED_KINDS


class TimeRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    start_time: dt.datetime = Field(validation_alias=AliasChoices("start_time", "startTime"))
    end_time: Optional[dt.datetime] = Field(
        default=None, validation_alias=AliasChoices("end_time", "endTime")
    )
    category: Category = Field(validation_alias=AliasChoices("category", "type"))
    note: str = Field(default="", validation_alias=AliasChoices("note", "activityRaw"))

    @field_validator("category", mode="before")
    @classmethod
    def _parse_category(cls, value):
        if isinstance(value, str):
            return Category.parse(value)
        return value

    @field_validator("start_time", "end_time")
    @classmethod
    def _attach_local_tz(cls, value: Optional[dt.datetime]) -> Optional[dt.datetime]:
        if value is None:
            return None
        return ensure_aware(value)

    @field_validator("note", mode="before")
    @classmethod
    def _none_note(cls, value):
        return "" if value is None else value

    @model_validator(mode="after")
    def _check_span(self) -> "TimeRecord":
        if self.end_time is not None and to_utc(self.end_time) < to_utc(self.start_time):
            raise ValueError("End time must not be before start time")
        return self

    @field_serializer("category")
    def _serialize_category(self, category: Category) -> str:
        return category.tag

    @property
    def duration_hours(self) -> float:
        return duration_hours(self.start_time, self.end_time)


class ScheduleSettings(BaseModel):
    """Target hours per weekday group."""

    model_config = ConfigDict(populate_by_name=True)

    mon_thu: float = Field(default=8.5, ge=0, validation_alias=AliasChoices("mon_thu", "monThu"))
    fri: float = Field(default=4.0, ge=0)
    sat_sun: float = Field(default=0.0, ge=0, validation_alias=AliasChoices("sat_sun", "satSun"))


class LeaveBalances(RootModel[Dict[str, float]]):
    """Opening allotments keyed by category tag. Missing tags read as zero."""

    root: Dict[str, float] = Field(default_factory=dict)

    def get(self, tag: str) -> float:
        return self.root.get(tag, 0.0)

    def tags(self) -> List[str]:
        return list(self.root)

    def __contains__(self, tag: object) -> bool:
        return tag in self.root

    def amount_for(self, kind: CategoryKind) -> float:
        total = 0.0
        for tag, value in self.root.items():
            category = Category.try_parse(tag)
            if category is not None and category.kind is kind:
                total += value
        return total

    @property
    def opening_hour_bank(self) -> float:
        return self.amount_for(CategoryKind.RECOVERY)


class DayKind(str, Enum):
    NEUTRAL = "neutral"
    RECOVERY = "recovery"
    ORDINARY = "ordinary"


class DaySummary(BaseModel):
    day: dt.date
    kind: DayKind
    worked_hours: float
    target_hours: float
    balance_change: float
    is_weekend: bool
    is_holiday: bool
    holiday_name: Optional[str] = None
    categories: List[str] = Field(default_factory=list)


class MonthlyPresence(BaseModel):
    year: int
    month: int
    days: int
