"""Day codes and engine-wide constants."""

from __future__ import annotations

from datetime import date
from enum import Enum


class DayCode(str, Enum):
    MON = "MON"
    TUE = "TUE"
    WED = "WED"
    THU = "THU"
    FRI = "FRI"
    SAT = "SAT"
    SUN = "SUN"

    @classmethod
    def for_date(cls, day: date) -> "DayCode":
        return WEEK_ORDER[day.weekday()]

    @property
    def full_name(self) -> str:
        return DAY_CODE_TO_NAME[self]

    @property
    def short_name(self) -> str:
        return DAY_CODE_TO_SHORT[self]


# Monday-first, matching ``date.weekday()``.
WEEK_ORDER: tuple[DayCode, ...] = (
    DayCode.MON,
    DayCode.TUE,
    DayCode.WED,
    DayCode.THU,
    DayCode.FRI,
    DayCode.SAT,
    DayCode.SUN,
)

WEEKDAYS: frozenset[DayCode] = frozenset(WEEK_ORDER[:5])

DAY_CODE_TO_NAME: dict[DayCode, str] = {
    DayCode.MON: "Monday",
    DayCode.TUE: "Tuesday",
    DayCode.WED: "Wednesday",
    DayCode.THU: "Thursday",
    DayCode.FRI: "Friday",
    DayCode.SAT: "Saturday",
    DayCode.SUN: "Sunday",
}

DAY_CODE_TO_SHORT: dict[DayCode, str] = {
    DayCode.MON: "M",
    DayCode.TUE: "T",
    DayCode.WED: "W",
    DayCode.THU: "Th",
    DayCode.FRI: "F",
    DayCode.SAT: "Sa",
    DayCode.SUN: "Su",
}

DEFAULT_TIMEZONE = "Asia/Manila"
DEFAULT_GRACE_PERIOD_MINUTES = 30
SEARCH_HORIZON_DAYS = 14
RETURN_SEARCH_DAYS = 7
MAX_STREAK_GAP_DAYS = 3

__all__ = [
    "DayCode",
    "WEEK_ORDER",
    "WEEKDAYS",
    "DAY_CODE_TO_NAME",
    "DAY_CODE_TO_SHORT",
    "DEFAULT_TIMEZONE",
    "DEFAULT_GRACE_PERIOD_MINUTES",
    "SEARCH_HORIZON_DAYS",
    "RETURN_SEARCH_DAYS",
    "MAX_STREAK_GAP_DAYS",
]
