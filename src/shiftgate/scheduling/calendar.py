"""Monday-to-Sunday week view of work days, check-ins, leave and absences."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import asdict, dataclass
from datetime import date, datetime, timedelta
from enum import Enum

import pandas as pd
from pydantic import BaseModel, field_validator

from shiftgate.civil import civil_date, date_key
from shiftgate.core.types import DayCode
from shiftgate.scheduling.exemptions import ExemptionInterval, is_suppressed
from shiftgate.scheduling.pattern import WorkPattern, is_work_day

__all__ = [
    "AbsenceStatus",
    "AbsenceRecord",
    "CheckinRecord",
    "WeekCalendarDay",
    "WeeklySummary",
    "week_calendar",
    "summarize_week",
    "week_dataframe",
]


class AbsenceStatus(str, Enum):
    PENDING_JUSTIFICATION = "PENDING_JUSTIFICATION"
    EXCUSED = "EXCUSED"
    UNEXCUSED = "UNEXCUSED"


class AbsenceRecord(BaseModel):
    """Recorded absence for a worker on a civil date."""

    worker_id: str
    absence_date: date
    status: AbsenceStatus = AbsenceStatus.PENDING_JUSTIFICATION
    reason: str | None = None


class CheckinRecord(BaseModel):
    """A recorded check-in; ``checked_in_at`` must carry a UTC offset."""

    worker_id: str
    checked_in_at: datetime
    checkin_id: str | None = None

    @field_validator("checked_in_at")
    @classmethod
    def _aware(cls, value: datetime) -> datetime:
        if value.tzinfo is None or value.utcoffset() is None:
            raise ValueError(f"checked_in_at {value.isoformat()} has no UTC offset")
        return value


@dataclass(slots=True)
class WeekCalendarDay:
    day: date
    day_code: DayCode
    is_today: bool
    is_work_day: bool
    is_future: bool
    is_exempted: bool
    checked_in: bool
    absence_status: AbsenceStatus | None = None

    @property
    def date_key(self) -> str:
        return date_key(self.day)


@dataclass(slots=True)
class WeeklySummary:
    checkins: int
    work_days: int
    work_days_passed: int
    excused_absences: int
    unexcused_absences: int
    pending_absences: int


def week_calendar(
    now: datetime,
    pattern: WorkPattern,
    zone: str,
    *,
    checkins: Iterable[datetime] = (),
    exemptions: Sequence[ExemptionInterval] = (),
    absences: Iterable[AbsenceRecord] = (),
    worker_id: str | None = None,
) -> list[WeekCalendarDay]:
    """Build the zone-local week (Monday first) that contains ``now``.

    Check-in instants are bucketed by their civil date in ``zone``. Leave only
    marks work days as exempted.
    """
    today = civil_date(now, zone)
    monday = today - timedelta(days=today.weekday())
    checkin_keys = {date_key(civil_date(instant, zone)) for instant in checkins}
    absence_by_key: dict[str, AbsenceStatus] = {}
    for record in absences:
        if worker_id is not None and record.worker_id != worker_id:
            continue
        absence_by_key.setdefault(date_key(record.absence_date), record.status)

    days: list[WeekCalendarDay] = []
    for offset in range(7):
        day = monday + timedelta(days=offset)
        key = date_key(day)
        work_day = is_work_day(day, pattern)
        days.append(
            WeekCalendarDay(
                day=day,
                day_code=DayCode.for_date(day),
                is_today=day == today,
                is_work_day=work_day,
                is_future=key > date_key(today),
                is_exempted=work_day and is_suppressed(day, exemptions, worker_id=worker_id),
                checked_in=key in checkin_keys,
                absence_status=absence_by_key.get(key),
            )
        )
    return days


def summarize_week(days: Iterable[WeekCalendarDay]) -> WeeklySummary:
    days = list(days)
    statuses = [day.absence_status for day in days]
    return WeeklySummary(
        checkins=sum(1 for day in days if day.checked_in),
        work_days=sum(1 for day in days if day.is_work_day),
        work_days_passed=sum(1 for day in days if day.is_work_day and not day.is_future),
        excused_absences=statuses.count(AbsenceStatus.EXCUSED),
        unexcused_absences=statuses.count(AbsenceStatus.UNEXCUSED),
        pending_absences=statuses.count(AbsenceStatus.PENDING_JUSTIFICATION),
    )


def week_dataframe(days: Iterable[WeekCalendarDay]) -> pd.DataFrame:
    """Tabulate a week calendar (one row per day) for export or display."""
    rows = []
    for day in days:
        row = asdict(day)
        row["day"] = day.date_key
        row["day_code"] = day.day_code.value
        row["absence_status"] = day.absence_status.value if day.absence_status else None
        rows.append(row)
    columns = [
        "day",
        "day_code",
        "is_today",
        "is_work_day",
        "is_future",
        "is_exempted",
        "checked_in",
        "absence_status",
    ]
    return pd.DataFrame(rows, columns=columns)
