"""Weekly work pattern: scheduled work days plus shift hours."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from shiftgate.civil import CivilInstant, civil_date, parse_clock, resolve_instant
from shiftgate.core.errors import ShiftgateValueError
from shiftgate.core.types import (
    MAX_STREAK_GAP_DAYS,
    RETURN_SEARCH_DAYS,
    WEEK_ORDER,
    WEEKDAYS,
    DayCode,
)

__all__ = [
    "WorkPattern",
    "WorkDayAdjustment",
    "parse_work_days",
    "is_work_day",
    "shift_bounds",
    "next_work_day",
    "adjust_to_work_day",
    "count_work_days",
    "format_work_days",
    "format_shift_time",
    "format_shift_hours",
    "streak_continues",
    "actual_streak",
]


def parse_work_days(value: str | Iterable[str | DayCode] | None) -> frozenset[DayCode]:
    """Parse ``"MON,TUE,..."`` (or an iterable of codes) into a set of ``DayCode``."""
    if value is None:
        return frozenset()
    if isinstance(value, str):
        parts: Iterable[str | DayCode] = value.split(",")
    else:
        parts = value
    codes: set[DayCode] = set()
    for part in parts:
        raw = part.value if isinstance(part, DayCode) else str(part).strip().upper()
        if not raw:
            continue
        try:
            codes.add(DayCode(raw))
        except ValueError as exc:
            raise ShiftgateValueError(f"Unknown work day code '{part}'.") from exc
    return frozenset(codes)


class WorkPattern(BaseModel):
    """Scheduled work days and daily shift hours for a team.

    Attributes
    ----------
    work_days:
        Day codes on which check-in is expected. An empty set is legal and means
        "never a work day".
    shift_start / shift_end:
        24-hour ``HH:MM`` wall-clock strings in the organization's zone. Overnight
        shifts (end at or before start) are not supported.
    """

    model_config = ConfigDict(frozen=True)

    work_days: frozenset[DayCode] = WEEKDAYS
    shift_start: str = "08:00"
    shift_end: str = "17:00"

    @field_validator("work_days", mode="before")
    @classmethod
    def _coerce_work_days(cls, value: object) -> frozenset[DayCode]:
        try:
            return parse_work_days(value)  # type: ignore[arg-type]
        except ShiftgateValueError as exc:
            raise ValueError(str(exc)) from exc

    @field_validator("shift_start", "shift_end", mode="before")
    @classmethod
    def _valid_clock(cls, value: object) -> str:
        if isinstance(value, int) and not isinstance(value, bool):
            # YAML 1.1 reads unquoted 08:00 as the sexagesimal integer 480.
            value = f"{value // 60:02d}:{value % 60:02d}"
        try:
            moment = parse_clock(value)
        except ShiftgateValueError as exc:
            raise ValueError(str(exc)) from exc
        return f"{moment.hour:02d}:{moment.minute:02d}"

    @model_validator(mode="after")
    def _same_day_shift(self) -> "WorkPattern":
        if parse_clock(self.shift_end) <= parse_clock(self.shift_start):
            raise ValueError(
                f"shift_end {self.shift_end} must be after shift_start {self.shift_start} "
                "(overnight shifts are not supported)"
            )
        return self

    @property
    def shift_start_time(self) -> time:
        return parse_clock(self.shift_start)

    @property
    def shift_end_time(self) -> time:
        return parse_clock(self.shift_end)

    def includes(self, code: DayCode) -> bool:
        return code in self.work_days

    def ordered_work_days(self) -> list[DayCode]:
        return [code for code in WEEK_ORDER if code in self.work_days]


def is_work_day(day: date | datetime, pattern: WorkPattern, zone: str | None = None) -> bool:
    """Return whether ``day`` falls on a scheduled weekday.

    ``day`` is either a civil date or an aware instant; instants are localized to
    ``zone`` first so the weekday never depends on the host's local zone.
    """
    return pattern.includes(DayCode.for_date(civil_date(day, zone)))


def shift_bounds(day: date, pattern: WorkPattern, zone: str) -> tuple[datetime, datetime]:
    """Return the (start, end) instants of the shift on civil date ``day``."""
    start = resolve_instant(CivilInstant.at(day, pattern.shift_start), zone)
    end = resolve_instant(CivilInstant.at(day, pattern.shift_end), zone)
    return start, end


def next_work_day(
    day: date,
    pattern: WorkPattern,
    *,
    include_start: bool = True,
    max_days: int = RETURN_SEARCH_DAYS,
) -> date | None:
    """Return the first work day on/after ``day`` (after, when ``include_start`` is false)."""
    offset = 0 if include_start else 1
    for step in range(offset, offset + max_days):
        candidate = day + timedelta(days=step)
        if is_work_day(candidate, pattern):
            return candidate
    return None


@dataclass(frozen=True, slots=True)
class WorkDayAdjustment:
    original: date
    adjusted: date
    was_adjusted: bool

    @property
    def original_code(self) -> DayCode:
        return DayCode.for_date(self.original)

    @property
    def adjusted_code(self) -> DayCode:
        return DayCode.for_date(self.adjusted)


def adjust_to_work_day(day: date, pattern: WorkPattern) -> WorkDayAdjustment:
    """Move ``day`` forward to the nearest work day; unchanged if none exists within a week."""
    adjusted = next_work_day(day, pattern) or day
    return WorkDayAdjustment(original=day, adjusted=adjusted, was_adjusted=adjusted != day)


def count_work_days(start: date, end: date, pattern: WorkPattern) -> int:
    """Count work days in the inclusive range ``[start, end]``."""
    if end < start:
        return 0
    span = (end - start).days + 1
    return sum(1 for step in range(span) if is_work_day(start + timedelta(days=step), pattern))


def format_work_days(pattern: WorkPattern, style: str = "full") -> str:
    """Human-readable work days, e.g. ``"Monday - Friday"`` or ``"M-F"``."""
    if style not in {"full", "short"}:
        raise ShiftgateValueError("style must be 'full' or 'short'.")
    days = pattern.ordered_work_days()
    if not days:
        return "No work days set"
    if pattern.work_days == WEEKDAYS:
        return "Monday - Friday" if style == "full" else "M-F"
    if style == "full":
        return ", ".join(code.full_name for code in days)
    return "".join(code.short_name for code in days)


def format_shift_time(value: str) -> str:
    """Render ``"08:00"`` as ``"8:00 AM"``."""
    moment = parse_clock(value)
    period = "PM" if moment.hour >= 12 else "AM"
    hour = moment.hour % 12 or 12
    return f"{hour}:{moment.minute:02d} {period}"


def format_shift_hours(pattern: WorkPattern) -> str:
    return f"{format_shift_time(pattern.shift_start)} - {format_shift_time(pattern.shift_end)}"


def streak_continues(
    last_checkin: datetime | None,
    now: datetime,
    pattern: WorkPattern,
    zone: str,
    max_gap_days: int = MAX_STREAK_GAP_DAYS,
) -> bool:
    """Return whether a check-in streak survives from ``last_checkin`` to ``now``.

    Both instants are reduced to zone-local dates. A same-day check-in always
    continues the streak; a gap longer than ``max_gap_days`` always breaks it.
    Otherwise the streak holds only if every day strictly between the two dates
    is a non-work day.
    """
    if last_checkin is None:
        return False
    last_day = civil_date(last_checkin, zone)
    gap = (civil_date(now, zone) - last_day).days
    if gap <= 0:
        return True
    if gap > max_gap_days:
        return False
    return not any(is_work_day(last_day + timedelta(days=step), pattern) for step in range(1, gap))


def actual_streak(
    stored_streak: int,
    last_checkin: datetime | None,
    now: datetime,
    pattern: WorkPattern,
    zone: str,
    max_gap_days: int = MAX_STREAK_GAP_DAYS,
) -> int:
    """Stored streak length, or 0 once a scheduled work day has been missed."""
    if last_checkin is None or stored_streak <= 0:
        return 0
    if streak_continues(last_checkin, now, pattern, zone, max_gap_days):
        return stored_streak
    return 0
