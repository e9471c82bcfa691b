"""Check-in window: shift hours opened early by a grace period."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime

from shiftgate.civil import CivilInstant, require_aware, resolve, shift_clock
from shiftgate.core.errors import ShiftgateValueError
from shiftgate.core.types import DEFAULT_GRACE_PERIOD_MINUTES
from shiftgate.scheduling.pattern import WorkPattern

__all__ = [
    "CheckinWindow",
    "grace_start_clock",
    "checkin_window",
    "is_eligible_now",
    "late_minutes",
]


def _validate_grace(grace_minutes: int) -> int:
    if grace_minutes < 0:
        raise ShiftgateValueError(f"grace_minutes must be non-negative (got {grace_minutes}).")
    return grace_minutes


def grace_start_clock(shift_start: str, grace_minutes: int = DEFAULT_GRACE_PERIOD_MINUTES) -> str:
    """Return the ``HH:MM`` at which check-in opens (``shift_start - grace``)."""
    return shift_clock(shift_start, -_validate_grace(grace_minutes))


@dataclass(frozen=True, slots=True)
class CheckinWindow:
    """Resolved check-in window for one civil date.

    Attributes
    ----------
    day:
        Civil date (in the organization's zone) the window belongs to.
    opens_at:
        Instant the grace period begins; check-in is allowed from here.
    shift_start / shift_end:
        Shift bounds as instants. ``shift_end`` also closes the check-in window.
    degraded:
        True when any bound fell back to the naive-UTC resolution.
    """

    day: date
    opens_at: datetime
    shift_start: datetime
    shift_end: datetime
    degraded: bool = False

    def contains(self, instant: datetime) -> bool:
        require_aware(instant)
        return self.opens_at <= instant <= self.shift_end

    def is_before(self, instant: datetime) -> bool:
        """True when ``instant`` precedes the opening of the window."""
        return instant < self.opens_at


def checkin_window(
    day: date,
    pattern: WorkPattern,
    zone: str,
    grace_minutes: int = DEFAULT_GRACE_PERIOD_MINUTES,
) -> CheckinWindow:
    opens = resolve(CivilInstant.at(day, grace_start_clock(pattern.shift_start, grace_minutes)), zone)
    start = resolve(CivilInstant.at(day, pattern.shift_start), zone)
    end = resolve(CivilInstant.at(day, pattern.shift_end), zone)
    return CheckinWindow(
        day=day,
        opens_at=opens.instant,
        shift_start=start.instant,
        shift_end=end.instant,
        degraded=opens.degraded or start.degraded or end.degraded,
    )


def is_eligible_now(
    now: datetime,
    day: date,
    pattern: WorkPattern,
    grace_minutes: int,
    zone: str,
) -> bool:
    """Return whether ``now`` lies within ``[shift_start - grace, shift_end]`` on ``day``."""
    return checkin_window(day, pattern, zone, grace_minutes).contains(now)


def late_minutes(
    checked_in_at: datetime,
    day: date,
    pattern: WorkPattern,
    zone: str,
    grace_minutes: int = DEFAULT_GRACE_PERIOD_MINUTES,
) -> int:
    """Whole minutes a check-in landed after ``shift_start + grace`` (0 when on time)."""
    require_aware(checked_in_at)
    window = checkin_window(day, pattern, zone, grace_minutes)
    tolerance = window.shift_start.timestamp() + _validate_grace(grace_minutes) * 60
    overshoot = checked_in_at.timestamp() - tolerance
    if overshoot <= 0:
        return 0
    return math.floor(overshoot / 60)
