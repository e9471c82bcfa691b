"""Civil time <-> instant conversion in IANA time zones.

Every instant the engine reasons about ("08:00 in Asia/Manila on 2025-01-13")
is produced here. Fixed UTC offsets are wrong across daylight-saving
transitions, so callers never add offsets themselves; they build a
:class:`CivilInstant` and resolve it against the organization's zone.

Resolution uses ``zoneinfo`` rules directly and then verifies the result by
formatting it back into civil fields. Two transition cases follow from that:

* spring-forward gap (the wall time never occurs): verification fails, the
  civil fields are read as UTC, the :class:`Resolution` is flagged
  ``degraded`` and a :class:`~shiftgate.core.errors.ResolutionDegradedWarning`
  is emitted;
* fall-back overlap (the wall time occurs twice): the earlier instant wins.

Example
-------
>>> from shiftgate.civil import CivilInstant, resolve_instant
>>> resolve_instant(CivilInstant(2025, 1, 13, 8, 0), "Asia/Manila").isoformat()
'2025-01-13T00:00:00+00:00'
"""

from __future__ import annotations

import re
import warnings
from dataclasses import dataclass
from datetime import UTC, date, datetime, time
from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from shiftgate.core.errors import ResolutionDegradedWarning, ShiftgateValueError
from shiftgate.core.types import DayCode

__all__ = [
    "CivilInstant",
    "Resolution",
    "get_zone",
    "is_valid_timezone",
    "parse_clock",
    "format_clock",
    "shift_clock",
    "resolve",
    "resolve_instant",
    "to_civil",
    "civil_date",
    "date_key",
    "require_aware",
]

_CLOCK_PATTERN = re.compile(r"^([01]?[0-9]|2[0-3]):([0-5][0-9])$")
_MINUTES_PER_DAY = 24 * 60


@dataclass(frozen=True, slots=True)
class CivilInstant:
    """Calendar date and wall-clock minute understood in a specific zone."""

    year: int
    month: int
    day: int
    hour: int = 0
    minute: int = 0

    @classmethod
    def at(cls, day: date, clock: str | time) -> "CivilInstant":
        """Combine a civil date with an ``HH:MM`` string (or ``time``)."""
        moment = parse_clock(clock) if isinstance(clock, str) else clock
        return cls(day.year, day.month, day.day, moment.hour, moment.minute)

    def date(self) -> date:
        return date(self.year, self.month, self.day)

    def time(self) -> time:
        return time(self.hour, self.minute)

    def naive(self) -> datetime:
        return datetime(self.year, self.month, self.day, self.hour, self.minute)

    @property
    def day_code(self) -> DayCode:
        return DayCode.for_date(self.date())

    def __str__(self) -> str:
        return f"{date_key(self.date())} {self.hour:02d}:{self.minute:02d}"


@dataclass(frozen=True, slots=True)
class Resolution:
    """Outcome of resolving a civil time; ``degraded`` marks the naive-UTC fallback."""

    instant: datetime
    degraded: bool = False


@lru_cache(maxsize=None)
def get_zone(zone: str) -> ZoneInfo:
    """Return the ``ZoneInfo`` for an IANA identifier or raise ``ShiftgateValueError``."""
    if not isinstance(zone, str) or not zone.strip():
        raise ShiftgateValueError("Time zone identifier must be a non-empty string.")
    try:
        return ZoneInfo(zone)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ShiftgateValueError(f"Unknown time zone '{zone}'.") from exc


def is_valid_timezone(zone: str) -> bool:
    try:
        get_zone(zone)
    except ShiftgateValueError:
        return False
    return True


def parse_clock(value: str) -> time:
    """Parse a 24-hour ``HH:MM`` wall-clock string."""
    match = _CLOCK_PATTERN.match(value.strip()) if isinstance(value, str) else None
    if match is None:
        raise ShiftgateValueError(f"Invalid clock time {value!r}; expected HH:MM (24-hour).")
    return time(int(match.group(1)), int(match.group(2)))


def format_clock(value: time) -> str:
    return f"{value.hour:02d}:{value.minute:02d}"


def shift_clock(value: str, minutes: int) -> str:
    """Move an ``HH:MM`` string by ``minutes`` in wall-clock space.

    The result stays on the same calendar day: it is clamped to ``00:00`` and
    ``23:59``.
    """
    moment = parse_clock(value)
    total = moment.hour * 60 + moment.minute + minutes
    total = min(max(total, 0), _MINUTES_PER_DAY - 1)
    return f"{total // 60:02d}:{total % 60:02d}"


def require_aware(instant: datetime) -> None:
    if instant.tzinfo is None or instant.utcoffset() is None:
        raise ShiftgateValueError(
            f"Instant {instant.isoformat()} is naive; pass a timezone-aware datetime."
        )


def to_civil(instant: datetime, zone: str) -> CivilInstant:
    """Express an absolute instant as civil fields in ``zone`` (seconds truncated)."""
    require_aware(instant)
    local = instant.astimezone(get_zone(zone))
    return CivilInstant(local.year, local.month, local.day, local.hour, local.minute)


def resolve(civil: CivilInstant, zone: str) -> Resolution:
    """Resolve civil fields in ``zone`` to a UTC instant, flagging degraded fallbacks."""
    tz = get_zone(zone)
    naive = civil.naive()
    # fold=0 selects the earlier of two repeated wall times.
    candidate = naive.replace(tzinfo=tz, fold=0).astimezone(UTC)
    if to_civil(candidate, zone) == civil:
        return Resolution(candidate)
    warnings.warn(
        f"Civil time {civil} does not exist in {zone}; falling back to {civil} UTC.",
        ResolutionDegradedWarning,
        stacklevel=2,
    )
    return Resolution(naive.replace(tzinfo=UTC), degraded=True)


def resolve_instant(civil: CivilInstant, zone: str) -> datetime:
    return resolve(civil, zone).instant


def civil_date(value: date | datetime, zone: str | None = None) -> date:
    """Return the zone-local calendar date for a civil ``date`` or an aware ``datetime``."""
    if isinstance(value, datetime):
        if zone is None:
            raise ShiftgateValueError("A time zone is required to localize an instant.")
        return to_civil(value, zone).date()
    return value


def date_key(value: date) -> str:
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
