from __future__ import annotations

from datetime import UTC, date, datetime

import pytest

from shiftgate.core.errors import ResolutionDegradedWarning, ShiftgateValueError
from shiftgate.scheduling import (
    WorkPattern,
    checkin_window,
    grace_start_clock,
    is_eligible_now,
    late_minutes,
)

MANILA = "Asia/Manila"
MONDAY = date(2025, 1, 13)


def test_grace_start_is_computed_on_the_wall_clock() -> None:
    assert grace_start_clock("08:00", 30) == "07:30"
    assert grace_start_clock("08:15", 0) == "08:15"
    with pytest.raises(ShiftgateValueError):
        grace_start_clock("08:00", -5)


def test_grace_boundary_is_inclusive(weekday_pattern, manila_now) -> None:
    assert is_eligible_now(manila_now(2025, 1, 13, 7, 30, 0), MONDAY, weekday_pattern, 30, MANILA)
    assert not is_eligible_now(
        manila_now(2025, 1, 13, 7, 29, 59), MONDAY, weekday_pattern, 30, MANILA
    )


def test_shift_end_is_inclusive(weekday_pattern, manila_now) -> None:
    assert is_eligible_now(manila_now(2025, 1, 13, 17, 0, 0), MONDAY, weekday_pattern, 30, MANILA)
    assert not is_eligible_now(
        manila_now(2025, 1, 13, 17, 0, 1), MONDAY, weekday_pattern, 30, MANILA
    )


def test_window_instants(weekday_pattern) -> None:
    window = checkin_window(MONDAY, weekday_pattern, MANILA, 30)
    assert window.opens_at == datetime(2025, 1, 12, 23, 30, tzinfo=UTC)
    assert window.shift_start == datetime(2025, 1, 13, 0, 0, tzinfo=UTC)
    assert window.shift_end == datetime(2025, 1, 13, 9, 0, tzinfo=UTC)
    assert not window.degraded
    assert window.is_before(datetime(2025, 1, 12, 23, 0, tzinfo=UTC))


def test_window_rejects_naive_instants(weekday_pattern) -> None:
    window = checkin_window(MONDAY, weekday_pattern, MANILA, 30)
    with pytest.raises(ShiftgateValueError):
        window.contains(datetime(2025, 1, 13, 8, 0))


def test_window_in_daylight_saving_gap_is_degraded() -> None:
    pattern = WorkPattern(work_days="SUN", shift_start="02:45", shift_end="10:00")
    with pytest.warns(ResolutionDegradedWarning):
        window = checkin_window(date(2025, 3, 9), pattern, "America/New_York", 30)
    assert window.degraded
    assert window.opens_at == datetime(2025, 3, 9, 2, 15, tzinfo=UTC)


def test_late_minutes_counts_past_grace(weekday_pattern, manila_now) -> None:
    assert late_minutes(manila_now(2025, 1, 13, 8, 20), MONDAY, weekday_pattern, MANILA) == 0
    assert late_minutes(manila_now(2025, 1, 13, 8, 30), MONDAY, weekday_pattern, MANILA) == 0
    assert late_minutes(manila_now(2025, 1, 13, 8, 45, 30), MONDAY, weekday_pattern, MANILA) == 15
    assert late_minutes(manila_now(2025, 1, 13, 9, 0), MONDAY, weekday_pattern, MANILA, 0) == 60
