"""Leave/exemption overlay: approved intervals that suppress check-in days."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime, timedelta
from enum import Enum

from pydantic import BaseModel

from shiftgate.civil import civil_date, date_key
from shiftgate.core.types import RETURN_SEARCH_DAYS
from shiftgate.scheduling.pattern import WorkPattern, next_work_day

__all__ = [
    "ExemptionStatus",
    "ExemptionInterval",
    "active_exemptions",
    "is_suppressed",
    "covering_exemptions",
    "earliest_return_date",
]


class ExemptionStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class ExemptionInterval(BaseModel):
    """Leave interval for one worker, with inclusive civil start/end dates.

    Attributes
    ----------
    worker_id:
        Worker the interval belongs to.
    start_date / end_date:
        Civil dates in the organization's zone, both inclusive. Intervals with
        ``start_date > end_date`` are kept as data but never suppress anything.
    status:
        Approval state; only ``APPROVED`` intervals participate in suppression.
    exemption_id / kind / reason:
        Optional bookkeeping carried through from the approvals workflow.
    """

    worker_id: str
    start_date: date
    end_date: date
    status: ExemptionStatus = ExemptionStatus.PENDING
    exemption_id: str | None = None
    kind: str | None = None
    reason: str | None = None

    @classmethod
    def from_instants(
        cls,
        *,
        worker_id: str,
        start: datetime,
        end: datetime,
        zone: str,
        status: ExemptionStatus | str = ExemptionStatus.PENDING,
        **extra: object,
    ) -> "ExemptionInterval":
        """Build an interval from stored instants, localized to civil dates in ``zone``."""
        return cls(
            worker_id=worker_id,
            start_date=civil_date(start, zone),
            end_date=civil_date(end, zone),
            status=ExemptionStatus(status),
            **extra,
        )

    @property
    def is_active(self) -> bool:
        return self.status is ExemptionStatus.APPROVED and self.start_date <= self.end_date

    def covers(self, day: date) -> bool:
        """Inclusive containment, compared on ``YYYY-MM-DD`` keys."""
        key = date_key(day)
        return date_key(self.start_date) <= key <= date_key(self.end_date)


def active_exemptions(
    exemptions: Iterable[ExemptionInterval], worker_id: str | None = None
) -> list[ExemptionInterval]:
    """Approved, well-formed intervals, optionally restricted to ``worker_id``."""
    return [
        exemption
        for exemption in exemptions
        if exemption.is_active and (worker_id is None or exemption.worker_id == worker_id)
    ]


def covering_exemptions(
    day: date,
    exemptions: Iterable[ExemptionInterval],
    worker_id: str | None = None,
) -> list[ExemptionInterval]:
    return [exemption for exemption in active_exemptions(exemptions, worker_id) if exemption.covers(day)]


def is_suppressed(
    day: date | datetime,
    exemptions: Iterable[ExemptionInterval],
    zone: str | None = None,
    worker_id: str | None = None,
) -> bool:
    """Return whether ``day`` falls inside any approved interval.

    ``day`` may be an aware instant, in which case it is localized to ``zone``.
    """
    return bool(covering_exemptions(civil_date(day, zone), exemptions, worker_id))


def earliest_return_date(
    exemptions: Iterable[ExemptionInterval],
    pattern: WorkPattern,
    today: date | datetime,
    zone: str | None = None,
    worker_id: str | None = None,
) -> date | None:
    """Return the first work day after the leave that covers ``today``.

    Only intervals containing ``today`` count; intervals that have not started
    yet are ignored. When several overlap, the one ending first wins. The day
    after its ``end_date`` is moved forward (at most a week) to a work day; with
    no work day in reach the day after ``end_date`` is returned unchanged.
    ``None`` means no current leave, or a return date already in the past.
    """
    current = civil_date(today, zone)
    covering = covering_exemptions(current, exemptions, worker_id)
    if not covering:
        return None
    leave = min(covering, key=lambda exemption: exemption.end_date)
    day_after = leave.end_date + timedelta(days=1)
    returning = next_work_day(day_after, pattern, max_days=RETURN_SEARCH_DAYS + 1) or day_after
    if date_key(returning) < date_key(current):
        return None
    return returning
