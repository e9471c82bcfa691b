"""Civil time resolution (wall clock + date + zone <-> absolute instant)."""

from .resolver import (
    CivilInstant,
    Resolution,
    civil_date,
    date_key,
    format_clock,
    get_zone,
    is_valid_timezone,
    parse_clock,
    require_aware,
    resolve,
    resolve_instant,
    shift_clock,
    to_civil,
)

__all__ = [
    "CivilInstant",
    "Resolution",
    "civil_date",
    "date_key",
    "format_clock",
    "get_zone",
    "is_valid_timezone",
    "parse_clock",
    "require_aware",
    "resolve",
    "resolve_instant",
    "shift_clock",
    "to_civil",
]
