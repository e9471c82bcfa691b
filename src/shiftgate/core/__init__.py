"""Core utilities shared across shiftgate modules."""

from .errors import ResolutionDegradedWarning, ShiftgateValueError
from .types import (
    DEFAULT_GRACE_PERIOD_MINUTES,
    DEFAULT_TIMEZONE,
    MAX_STREAK_GAP_DAYS,
    RETURN_SEARCH_DAYS,
    SEARCH_HORIZON_DAYS,
    WEEK_ORDER,
    WEEKDAYS,
    DayCode,
)

__all__ = [
    "ShiftgateValueError",
    "ResolutionDegradedWarning",
    "DayCode",
    "WEEK_ORDER",
    "WEEKDAYS",
    "DEFAULT_TIMEZONE",
    "DEFAULT_GRACE_PERIOD_MINUTES",
    "SEARCH_HORIZON_DAYS",
    "RETURN_SEARCH_DAYS",
    "MAX_STREAK_GAP_DAYS",
]
