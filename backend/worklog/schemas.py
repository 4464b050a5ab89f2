from __future__ import annotations

import datetime as dt
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from .models import LeaveBalances, MonthlyPresence, ScheduleSettings, TimeRecord


class TargetHoursRequest(BaseModel):
    day: str
    schedule: Optional[ScheduleSettings] = None


class TargetHoursResponse(BaseModel):
    day: dt.date
    target_hours: float
    is_holiday: bool
    holiday_name: Optional[str] = None


class LedgerRequest(BaseModel):
    records: List[TimeRecord] = Field(default_factory=list)
    schedule: Optional[ScheduleSettings] = None
    balances: Optional[LeaveBalances] = None
    today: Optional[dt.date] = None


class EarnedLeave(BaseModel):
    rec_fest: int = 0


class LedgerResponse(BaseModel):
    hour_bank: float
    used_leave: Dict[str, float]
    earned: EarnedLeave
    remaining_leave: Dict[str, float]
    presence_days: int


class DaysRequest(BaseModel):
    records: List[TimeRecord] = Field(default_factory=list)
    schedule: Optional[ScheduleSettings] = None


class RecentDaysRequest(DaysRequest):
    today: Optional[dt.date] = None
    days: int = Field(default=7, ge=1, le=366)


class EntryCreateRequest(BaseModel):
    day: dt.date
    category: str
    start: Optional[dt.time] = None
    end: Optional[dt.time] = None
    note: str = ""
    schedule: Optional[ScheduleSettings] = None


class OperationCreateRequest(BaseModel):
    start_day: dt.date
    end_day: dt.date
    location: str = Field(min_length=1)


class PresenceResponse(BaseModel):
    total: int
    months: List[MonthlyPresence]


class ReconcileRequest(BaseModel):
    records: List[TimeRecord] = Field(default_factory=list)
    balances: LeaveBalances
    today: Optional[dt.date] = None

