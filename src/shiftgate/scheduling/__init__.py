"""Scheduling engine (work pattern, check-in window, leave overlay, next-eligibility search)."""

from .calendar import (
    AbsenceRecord,
    AbsenceStatus,
    CheckinRecord,
    WeekCalendarDay,
    WeeklySummary,
    summarize_week,
    week_calendar,
    week_dataframe,
)
from .exemptions import (
    ExemptionInterval,
    ExemptionStatus,
    active_exemptions,
    covering_exemptions,
    earliest_return_date,
    is_suppressed,
)
from .finder import EligibilityReason, EligibilityResult, evaluate, format_time_until
from .pattern import (
    WorkDayAdjustment,
    WorkPattern,
    actual_streak,
    adjust_to_work_day,
    count_work_days,
    format_shift_hours,
    format_shift_time,
    format_work_days,
    is_work_day,
    next_work_day,
    parse_work_days,
    shift_bounds,
    streak_continues,
)
from .window import CheckinWindow, checkin_window, grace_start_clock, is_eligible_now, late_minutes

__all__ = [
    "AbsenceRecord",
    "AbsenceStatus",
    "CheckinRecord",
    "WeekCalendarDay",
    "WeeklySummary",
    "summarize_week",
    "week_calendar",
    "week_dataframe",
    "ExemptionInterval",
    "ExemptionStatus",
    "active_exemptions",
    "covering_exemptions",
    "earliest_return_date",
    "is_suppressed",
    "EligibilityReason",
    "EligibilityResult",
    "evaluate",
    "format_time_until",
    "WorkDayAdjustment",
    "WorkPattern",
    "adjust_to_work_day",
    "count_work_days",
    "format_shift_hours",
    "format_shift_time",
    "format_work_days",
    "streak_continues",
    "actual_streak",
    "is_work_day",
    "next_work_day",
    "parse_work_days",
    "shift_bounds",
    "CheckinWindow",
    "checkin_window",
    "grace_start_clock",
    "is_eligible_now",
    "late_minutes",
]
