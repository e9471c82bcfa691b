from __future__ import annotations

from datetime import UTC, date, datetime, time

import pytest

from shiftgate.civil import (
    CivilInstant,
    civil_date,
    get_zone,
    is_valid_timezone,
    parse_clock,
    resolve,
    resolve_instant,
    shift_clock,
    to_civil,
)
from shiftgate.core.errors import ResolutionDegradedWarning, ShiftgateValueError
from shiftgate.core.types import DayCode


def test_resolve_manila_morning_to_utc() -> None:
    instant = resolve_instant(CivilInstant(2025, 1, 13, 8, 0), "Asia/Manila")
    assert instant == datetime(2025, 1, 13, 0, 0, tzinfo=UTC)


def test_half_hour_offset_zone_round_trips() -> None:
    civil = CivilInstant(2025, 6, 2, 8, 0)
    instant = resolve_instant(civil, "Asia/Kolkata")
    assert instant == datetime(2025, 6, 2, 2, 30, tzinfo=UTC)
    assert to_civil(instant, "Asia/Kolkata") == civil


def test_resolution_tracks_daylight_saving_offsets() -> None:
    before = resolve_instant(CivilInstant(2025, 3, 7, 8, 0), "America/New_York")
    after = resolve_instant(CivilInstant(2025, 3, 10, 8, 0), "America/New_York")
    assert before == datetime(2025, 3, 7, 13, 0, tzinfo=UTC)
    assert after == datetime(2025, 3, 10, 12, 0, tzinfo=UTC)


def test_spring_forward_gap_falls_back_to_naive_utc() -> None:
    civil = CivilInstant(2025, 3, 9, 2, 30)
    with pytest.warns(ResolutionDegradedWarning):
        result = resolve(civil, "America/New_York")
    assert result.degraded
    assert result.instant == datetime(2025, 3, 9, 2, 30, tzinfo=UTC)


def test_fall_back_overlap_picks_earlier_instant() -> None:
    result = resolve(CivilInstant(2025, 11, 2, 1, 30), "America/New_York")
    assert not result.degraded
    assert result.instant == datetime(2025, 11, 2, 5, 30, tzinfo=UTC)


def test_to_civil_uses_zone_calendar_date() -> None:
    instant = datetime(2025, 1, 17, 17, 0, tzinfo=UTC)
    civil = to_civil(instant, "Asia/Manila")
    assert civil == CivilInstant(2025, 1, 18, 1, 0)
    assert civil.day_code is DayCode.SAT
    assert to_civil(instant, "UTC").day_code is DayCode.FRI


def test_naive_instants_are_rejected() -> None:
    with pytest.raises(ShiftgateValueError):
        to_civil(datetime(2025, 1, 13, 8, 0), "Asia/Manila")


def test_unknown_zone_is_a_configuration_error() -> None:
    with pytest.raises(ShiftgateValueError):
        get_zone("Mars/Olympus_Mons")
    assert not is_valid_timezone("")
    assert is_valid_timezone("Europe/Vienna")


def test_parse_clock_accepts_24_hour_strings() -> None:
    assert parse_clock("08:00") == time(8, 0)
    assert parse_clock("8:05") == time(8, 5)
    assert parse_clock(" 23:59 ") == time(23, 59)
    for bad in ("24:00", "8am", "08:60", ""):
        with pytest.raises(ShiftgateValueError):
            parse_clock(bad)


def test_shift_clock_stays_on_the_same_day() -> None:
    assert shift_clock("08:00", -30) == "07:30"
    assert shift_clock("08:10", -90) == "06:40"
    assert shift_clock("00:15", -30) == "00:00"
    assert shift_clock("23:50", 30) == "23:59"


def test_civil_instant_helpers() -> None:
    civil = CivilInstant.at(date(2025, 1, 13), "07:30")
    assert civil == CivilInstant(2025, 1, 13, 7, 30)
    assert str(civil) == "2025-01-13 07:30"
    assert civil.date() == date(2025, 1, 13)
    assert civil.time() == time(7, 30)


def test_civil_date_requires_zone_for_instants() -> None:
    assert civil_date(date(2025, 1, 13)) == date(2025, 1, 13)
    assert civil_date(datetime(2025, 1, 12, 16, 0, tzinfo=UTC), "Asia/Manila") == date(2025, 1, 13)
    with pytest.raises(ShiftgateValueError):
        civil_date(datetime(2025, 1, 12, 16, 0, tzinfo=UTC))
