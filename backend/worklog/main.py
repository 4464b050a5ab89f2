from __future__ import annotations

import datetime as dt
from typing import List, Optional

from fastapi import FastAPI, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware

from .config import LOCAL_TZ, settings
from .entries import build_entry, expand_operation
from .holidays import holiday_name
from .models import DaySummary, LeaveBalances, ScheduleSettings, TimeRecord
from .schemas import (
    DaysRequest,
    EarnedLeave,
    EntryCreateRequest,
    LedgerRequest,
    LedgerResponse,
    OperationCreateRequest,
    PresenceResponse,
    RecentDaysRequest,
    ReconcileRequest,
    TargetHoursRequest,
    TargetHoursResponse,
)
from .services import (
    compute_hour_bank,
    day_summaries,
    earned_holiday_recovery,
    monthly_presence,
    presence_days,
    recent_days,
    remaining_leave,
    target_hours,
    used_leave,
)
from .state import default_settings, reconcile_leave_balances
from .utils import coerce_day


def _today() -> dt.date:
    return dt.datetime.now(LOCAL_TZ).date()


def _schedule(schedule: Optional[ScheduleSettings]) -> ScheduleSettings:
    if schedule is not None:
        return schedule
    return default_settings(_today())[0]


def _balances(balances: Optional[LeaveBalances], today: Optional[dt.date] = None) -> LeaveBalances:
    if balances is not None:
        return balances
    return default_settings(today or _today())[1]


app = FastAPI(title=settings.app_name)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://127.0.0.1:5173", "http://localhost:5173"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"]
)


@app.get("/healthz")
def healthz() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/target-hours", response_model=TargetHoursResponse)
def resolve_target_hours(payload: TargetHoursRequest) -> TargetHoursResponse:
    try:
        day = coerce_day(payload.day)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid date") from exc
    name = holiday_name(day)
    return TargetHoursResponse(
        day=day,
        target_hours=target_hours(day, _schedule(payload.schedule)),
        is_holiday=name is not None,
        holiday_name=name,
    )


@app.post("/ledger", response_model=LedgerResponse)
def ledger(payload: LedgerRequest) -> LedgerResponse:
    schedule = _schedule(payload.schedule)
    balances = _balances(payload.balances, payload.today)
    records = payload.records
    return LedgerResponse(
        hour_bank=compute_hour_bank(records, schedule, balances.opening_hour_bank),
        used_leave=used_leave(records),
        earned=EarnedLeave(rec_fest=earned_holiday_recovery(records)),
        remaining_leave=remaining_leave(balances, records),
        presence_days=presence_days(records),
    )


@app.post("/presence", response_model=PresenceResponse)
def presence(payload: DaysRequest) -> PresenceResponse:
    return PresenceResponse(total=presence_days(payload.records), months=monthly_presence(payload.records))


@app.post("/days", response_model=List[DaySummary])
def days(payload: DaysRequest) -> List[DaySummary]:
    return day_summaries(payload.records, _schedule(payload.schedule))


@app.post("/days/recent", response_model=List[DaySummary])
def days_recent(payload: RecentDaysRequest) -> List[DaySummary]:
    today = payload.today or _today()
    return recent_days(payload.records, _schedule(payload.schedule), today, payload.days)


@app.post("/entries", response_model=TimeRecord, status_code=status.HTTP_201_CREATED)
def create_entry(payload: EntryCreateRequest) -> TimeRecord:
    try:
        return build_entry(
            payload.day,
            payload.category,
            _schedule(payload.schedule),
            start=payload.start,
            end=payload.end,
            note=payload.note,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@app.post("/operations", response_model=List[TimeRecord], status_code=status.HTTP_201_CREATED)
def create_operation(payload: OperationCreateRequest) -> List[TimeRecord]:
    try:
        return expand_operation(payload.start_day, payload.end_day, payload.location)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@app.post("/balances/reconcile", response_model=LeaveBalances)
def reconcile_balances(payload: ReconcileRequest) -> LeaveBalances:
    today = payload.today or _today()
    return reconcile_leave_balances(payload.balances, payload.records, today)
