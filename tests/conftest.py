from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

from shiftgate.scheduling import ExemptionInterval, ExemptionStatus, WorkPattern

MANILA = "Asia/Manila"


@pytest.fixture
def weekday_pattern() -> WorkPattern:
    return WorkPattern(work_days="MON,TUE,WED,THU,FRI", shift_start="08:00", shift_end="17:00")


@pytest.fixture
def manila_now():
    """Build an aware instant from Manila wall-clock fields."""

    def _build(year: int, month: int, day: int, hour: int = 0, minute: int = 0, second: int = 0):
        return datetime(year, month, day, hour, minute, second, tzinfo=ZoneInfo(MANILA))

    return _build


@pytest.fixture
def sick_leave() -> ExemptionInterval:
    return ExemptionInterval(
        worker_id="W-100",
        start_date="2025-01-13",
        end_date="2025-01-17",
        status=ExemptionStatus.APPROVED,
    )
