from .entries import build_entry, expand_operation
from .holidays import holiday_name, is_holiday
from .models import Category, CategoryKind, DayKind, DaySummary, LeaveBalances, MonthlyPresence, ScheduleSettings, TimeRecord
from .services import (
    classify_day,
    compute_hour_bank,
    day_summaries,
    earned_holiday_recovery,
    group_by_local_day,
    monthly_presence,
    presence_days,
    recent_days,
    remaining_leave,
    target_hours,
    used_leave,
)
from .state import default_settings, prune_records, reconcile_leave_balances

__all__ = [
    "Category",
    "CategoryKind",
    "DayKind",
    "DaySummary",
    "LeaveBalances",
    "MonthlyPresence",
    "ScheduleSettings",
    "TimeRecord",
    "build_entry",
    "classify_day",
    "compute_hour_bank",
    "day_summaries",
    "default_settings",
    "earned_holiday_recovery",
    "expand_operation",
    "group_by_local_day",
    "holiday_name",
    "is_holiday",
    "monthly_presence",
    "presence_days",
    "prune_records",
    "recent_days",
    "reconcile_leave_balances",
    "remaining_leave",
    "target_hours",
    "used_leave",
]
