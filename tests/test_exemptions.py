from __future__ import annotations

from datetime import UTC, date, datetime

from shiftgate.scheduling import (
    ExemptionInterval,
    ExemptionStatus,
    WorkPattern,
    active_exemptions,
    earliest_return_date,
    is_suppressed,
)


def _leave(start: str, end: str, status=ExemptionStatus.APPROVED, worker_id: str = "W-100"):
    return ExemptionInterval(worker_id=worker_id, start_date=start, end_date=end, status=status)


def test_suppression_is_inclusive(sick_leave) -> None:
    assert not is_suppressed(date(2025, 1, 12), [sick_leave])
    assert is_suppressed(date(2025, 1, 13), [sick_leave])
    assert is_suppressed(date(2025, 1, 17), [sick_leave])
    assert not is_suppressed(date(2025, 1, 18), [sick_leave])


def test_only_approved_well_formed_intervals_suppress() -> None:
    intervals = [
        _leave("2025-01-13", "2025-01-17", ExemptionStatus.PENDING),
        _leave("2025-01-13", "2025-01-17", ExemptionStatus.REJECTED),
        _leave("2025-01-17", "2025-01-13"),
    ]
    assert active_exemptions(intervals) == []
    assert not is_suppressed(date(2025, 1, 15), intervals)


def test_worker_filter(sick_leave) -> None:
    assert is_suppressed(date(2025, 1, 15), [sick_leave], worker_id="W-100")
    assert not is_suppressed(date(2025, 1, 15), [sick_leave], worker_id="W-200")


def test_instants_are_localized_before_comparison(sick_leave) -> None:
    # 2025-01-17T16:30Z is already Saturday 00:30 in Manila.
    late_friday_utc = datetime(2025, 1, 17, 16, 30, tzinfo=UTC)
    assert not is_suppressed(late_friday_utc, [sick_leave], zone="Asia/Manila")
    assert is_suppressed(late_friday_utc, [sick_leave], zone="UTC")


def test_from_instants_uses_zone_dates() -> None:
    interval = ExemptionInterval.from_instants(
        worker_id="W-100",
        start=datetime(2025, 1, 12, 16, 0, tzinfo=UTC),
        end=datetime(2025, 1, 17, 15, 59, tzinfo=UTC),
        zone="Asia/Manila",
        status="APPROVED",
        reason="Flu",
    )
    assert interval.start_date == date(2025, 1, 13)
    assert interval.end_date == date(2025, 1, 17)
    assert interval.is_active
    assert interval.reason == "Flu"


def test_return_date_skips_the_weekend(sick_leave, weekday_pattern) -> None:
    returning = earliest_return_date([sick_leave], weekday_pattern, date(2025, 1, 15))
    assert returning == date(2025, 1, 20)
    assert earliest_return_date([sick_leave], weekday_pattern, date(2025, 1, 17)) == date(2025, 1, 20)


def test_return_date_uses_earliest_ending_interval(weekday_pattern) -> None:
    intervals = [_leave("2025-01-13", "2025-01-17"), _leave("2025-01-14", "2025-01-15")]
    assert earliest_return_date(intervals, weekday_pattern, date(2025, 1, 15)) == date(2025, 1, 16)


def test_future_interval_does_not_count_as_current_leave(sick_leave, weekday_pattern) -> None:
    assert earliest_return_date([sick_leave], weekday_pattern, date(2025, 1, 10)) is None
    assert earliest_return_date([sick_leave], weekday_pattern, date(2025, 1, 18)) is None
    assert earliest_return_date([], weekday_pattern, date(2025, 1, 15)) is None


def test_return_date_without_work_days_is_day_after_leave(sick_leave) -> None:
    pattern = WorkPattern(work_days="")
    assert earliest_return_date([sick_leave], pattern, date(2025, 1, 15)) == date(2025, 1, 18)


def test_return_date_from_instant_and_worker(sick_leave, weekday_pattern, manila_now) -> None:
    now = manila_now(2025, 1, 15, 10, 0)
    assert earliest_return_date(
        [sick_leave], weekday_pattern, now, zone="Asia/Manila", worker_id="W-100"
    ) == date(2025, 1, 20)
    assert (
        earliest_return_date([sick_leave], weekday_pattern, now, zone="Asia/Manila", worker_id="W-9")
        is None
    )
