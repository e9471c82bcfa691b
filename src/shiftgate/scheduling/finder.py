"""Next-eligibility search: is check-in open now, and if not, when does it open?

``evaluate`` is a pure function of the injected ``now``, the work pattern, the
grace period, the zone and a read-only snapshot of exemptions. Checks run in
priority order:

1. the worker is on approved leave today (or has a pending return date): not
   eligible, ``return_date`` is set and no check-in instant is offered;
2. today is a work day, the worker has not checked in and ``now`` is inside the
   window: eligible immediately;
3. today is a work day, not checked in, and the window has not opened yet: the
   next instant is today's window opening;
4. otherwise the following days are probed one at a time (never today) up to
   the search horizon, skipping leave, non-work days and openings not after
   ``now``.

Example
-------
>>> from datetime import datetime, UTC
>>> from shiftgate.scheduling import WorkPattern, evaluate
>>> pattern = WorkPattern(work_days="MON,TUE,WED,THU,FRI", shift_start="08:00", shift_end="17:00")
>>> result = evaluate(datetime(2025, 1, 12, 23, 0, tzinfo=UTC), pattern, "Asia/Manila")
>>> result.eligible_now, result.next_eligible_instant.isoformat()
(False, '2025-01-12T23:30:00+00:00')
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Any

from shiftgate.civil import civil_date, date_key, require_aware
from shiftgate.core.errors import ShiftgateValueError
from shiftgate.core.types import DEFAULT_GRACE_PERIOD_MINUTES, SEARCH_HORIZON_DAYS
from shiftgate.scheduling.exemptions import ExemptionInterval, earliest_return_date, is_suppressed
from shiftgate.scheduling.pattern import WorkPattern, is_work_day
from shiftgate.scheduling.window import checkin_window

__all__ = [
    "EligibilityReason",
    "EligibilityResult",
    "evaluate",
    "format_time_until",
]


class EligibilityReason(str, Enum):
    READY = "ready"
    OPENS_LATER_TODAY = "opens_later_today"
    ON_LEAVE = "on_leave"
    ALREADY_CHECKED_IN = "already_checked_in"
    WINDOW_CLOSED = "window_closed"
    NOT_WORK_DAY = "not_work_day"
    NO_ELIGIBLE_DAY = "no_eligible_day"


REASON_MESSAGES: dict[EligibilityReason, str] = {
    EligibilityReason.READY: "Ready to check in",
    EligibilityReason.OPENS_LATER_TODAY: "Check-in opens later today",
    EligibilityReason.ON_LEAVE: "On approved leave",
    EligibilityReason.ALREADY_CHECKED_IN: "Already checked in today",
    EligibilityReason.WINDOW_CLOSED: "Check-in window has closed for today",
    EligibilityReason.NOT_WORK_DAY: "Today is not a scheduled work day",
    EligibilityReason.NO_ELIGIBLE_DAY: "No eligible check-in day within the search horizon",
}


def format_time_until(target: datetime, now: datetime) -> str:
    """Countdown label: ``"Now"``, ``"2d 3h"``, ``"1h 5m"`` or ``"12m"``."""
    seconds = int((target - now).total_seconds())
    if seconds <= 0:
        return "Now"
    minutes_total = seconds // 60
    days, rem = divmod(minutes_total, 24 * 60)
    hours, minutes = divmod(rem, 60)
    if days > 0:
        return f"{days}d {hours}h"
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"


@dataclass(frozen=True, slots=True)
class EligibilityResult:
    """Outcome of one eligibility evaluation (never persisted).

    Attributes
    ----------
    eligible_now:
        True only when the worker may check in at the evaluated instant.
    next_eligible_instant:
        ``now`` when eligible, the next window opening otherwise, or ``None``
        while on leave / when the horizon was exhausted.
    reason:
        Why the result looks the way it does.
    return_date:
        First work day after the current leave (``ON_LEAVE`` only).
    degraded:
        True when a civil time on the decisive path hit the naive-UTC fallback.
    days_probed:
        Number of future days inspected by the forward search.
    """

    eligible_now: bool
    next_eligible_instant: datetime | None
    reason: EligibilityReason
    return_date: date | None = None
    degraded: bool = False
    days_probed: int = 0

    @property
    def message(self) -> str:
        return REASON_MESSAGES[self.reason]

    def time_until(self, now: datetime) -> str | None:
        if self.next_eligible_instant is None:
            return None
        return format_time_until(self.next_eligible_instant, now)

    def to_record(self) -> dict[str, Any]:
        return {
            "eligible_now": self.eligible_now,
            "next_eligible_instant": (
                self.next_eligible_instant.isoformat() if self.next_eligible_instant else None
            ),
            "reason": self.reason.value,
            "return_date": date_key(self.return_date) if self.return_date else None,
            "degraded": self.degraded,
            "days_probed": self.days_probed,
        }


def _idle_reason(todays_work_day: bool, checked_in: bool) -> EligibilityReason:
    if not todays_work_day:
        return EligibilityReason.NOT_WORK_DAY
    if checked_in:
        return EligibilityReason.ALREADY_CHECKED_IN
    return EligibilityReason.WINDOW_CLOSED


def evaluate(
    now: datetime,
    pattern: WorkPattern,
    zone: str,
    exemptions: Iterable[ExemptionInterval] = (),
    *,
    grace_minutes: int = DEFAULT_GRACE_PERIOD_MINUTES,
    already_checked_in_today: bool = False,
    worker_id: str | None = None,
    horizon_days: int = SEARCH_HORIZON_DAYS,
) -> EligibilityResult:
    """Decide whether check-in is open at ``now`` and find the next opening otherwise.

    Parameters
    ----------
    now:
        Timezone-aware evaluation instant (injected; the engine never reads a clock).
    pattern:
        Team work days and shift hours.
    zone:
        IANA identifier of the organization's time zone.
    exemptions:
        Read-only snapshot of leave intervals; filtered to ``worker_id`` when given.
    grace_minutes:
        Minutes before ``shift_start`` at which check-in opens.
    already_checked_in_today:
        Whether the worker already has a check-in record for today.
    horizon_days:
        Maximum number of future days to probe.
    """
    require_aware(now)
    if horizon_days < 1:
        raise ShiftgateValueError(f"horizon_days must be >= 1 (got {horizon_days}).")
    leave = list(exemptions)
    today = civil_date(now, zone)

    return_date = earliest_return_date(leave, pattern, today, worker_id=worker_id)
    if return_date is not None or is_suppressed(today, leave, worker_id=worker_id):
        return EligibilityResult(
            eligible_now=False,
            next_eligible_instant=None,
            reason=EligibilityReason.ON_LEAVE,
            return_date=return_date,
        )

    todays_work_day = is_work_day(today, pattern)
    if todays_work_day and not already_checked_in_today:
        window = checkin_window(today, pattern, zone, grace_minutes)
        if window.contains(now):
            return EligibilityResult(
                eligible_now=True,
                next_eligible_instant=now,
                reason=EligibilityReason.READY,
                degraded=window.degraded,
            )
        if window.is_before(now):
            return EligibilityResult(
                eligible_now=False,
                next_eligible_instant=window.opens_at,
                reason=EligibilityReason.OPENS_LATER_TODAY,
                degraded=window.degraded,
            )

    reason = _idle_reason(todays_work_day, already_checked_in_today)
    # Probing starts at today + 1; today was fully decided above.
    for step in range(1, horizon_days + 1):
        candidate = today + timedelta(days=step)
        if is_suppressed(candidate, leave, worker_id=worker_id):
            continue
        if not is_work_day(candidate, pattern):
            continue
        window = checkin_window(candidate, pattern, zone, grace_minutes)
        if window.opens_at <= now:
            continue
        return EligibilityResult(
            eligible_now=False,
            next_eligible_instant=window.opens_at,
            reason=reason,
            degraded=window.degraded,
            days_probed=step,
        )

    return EligibilityResult(
        eligible_now=False,
        next_eligible_instant=None,
        reason=EligibilityReason.NO_ELIGIBLE_DAY,
        days_probed=horizon_days,
    )
