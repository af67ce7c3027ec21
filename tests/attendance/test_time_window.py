from datetime import datetime, timedelta, timezone

import pytest

from workers_management.attendance.factory import TimeWindowStrategyFactory
from workers_management.attendance.strategies.midweek_strategy import MidweekServiceStrategy
from workers_management.attendance.strategies.open_strategy import OpenStrategy
from workers_management.attendance.strategies.sunday_strategy import SundayServiceStrategy
from workers_management.attendance.time_window import classify, counts_towards_quota
from workers_management.core.enums import AttendanceType

SUNDAY = AttendanceType.SUNDAY_SERVICE
MIDWEEK = AttendanceType.MIDWEEK_SERVICE


@pytest.mark.parametrize(
    "attendance_type, at, valid, early",
    [
        # 2024-01-07 is a Sunday, 2024-01-10 a Wednesday, 2024-01-08 a Monday.
        (SUNDAY, datetime(2024, 1, 7, 8, 0), True, True),
        (SUNDAY, datetime(2024, 1, 7, 9, 0), True, True),
        (SUNDAY, datetime(2024, 1, 7, 9, 1), True, False),
        (SUNDAY, datetime(2024, 1, 7, 19, 0), True, False),
        (SUNDAY, datetime(2024, 1, 7, 19, 0, 1), False, False),
        (SUNDAY, datetime(2024, 1, 7, 7, 59), False, False),
        (SUNDAY, datetime(2024, 1, 8, 9, 0), False, False),
        (MIDWEEK, datetime(2024, 1, 10, 18, 45), True, True),
        (MIDWEEK, datetime(2024, 1, 10, 18, 46), True, False),
        (MIDWEEK, datetime(2024, 1, 10, 20, 30), True, False),
        (MIDWEEK, datetime(2024, 1, 10, 20, 31), False, False),
        (MIDWEEK, datetime(2024, 1, 10, 18, 44), False, False),
        (MIDWEEK, datetime(2024, 1, 7, 19, 0), False, False),
    ],
)
def test_classify_fixed_windows(attendance_type, at, valid, early):
    decision = classify(attendance_type, at)

    assert decision.valid is valid
    assert decision.early is early


def test_special_meeting_is_always_valid_and_early():
    for at in (datetime(2024, 1, 8, 3, 0), datetime(2024, 1, 13, 23, 59)):
        decision = classify(AttendanceType.SPECIAL_SERVICE_MEETING, at)
        assert decision.valid is True
        assert decision.early is True


def test_workers_meeting_is_valid_but_never_early():
    decision = classify(AttendanceType.WORKERS_MEETING, datetime(2024, 1, 7, 8, 30))

    assert decision.valid is True
    assert decision.early is False


def test_rejection_carries_a_readable_message():
    decision = classify(SUNDAY, datetime(2024, 1, 8, 10, 0))

    assert decision.message == "Sunday service check-in is only allowed on Sunday between 08:00 and 19:00 (UTC)."


def test_aware_timestamps_are_converted_to_utc():
    lagos = timezone(timedelta(hours=1))
    # 09:30 in UTC+1 is 08:30 UTC: inside the window and early.
    decision = classify(SUNDAY, datetime(2024, 1, 7, 9, 30, tzinfo=lagos))

    assert decision.valid is True
    assert decision.early is True


def test_factory_picks_strategy_per_type():
    factory = TimeWindowStrategyFactory()

    assert isinstance(factory.for_type(SUNDAY), SundayServiceStrategy)
    assert isinstance(factory.for_type(MIDWEEK), MidweekServiceStrategy)
    assert isinstance(factory.for_type(AttendanceType.WORKERS_MEETING), OpenStrategy)


def test_factory_accepts_raw_enum_values():
    factory = TimeWindowStrategyFactory()

    assert isinstance(factory.for_type("SundayService"), SundayServiceStrategy)


def test_workers_meeting_never_counts_towards_quota():
    assert counts_towards_quota(AttendanceType.WORKERS_MEETING, datetime(2024, 1, 7, 8, 30)) is False
    assert counts_towards_quota(SUNDAY, datetime(2024, 1, 7, 8, 30)) is True
    assert counts_towards_quota(SUNDAY, datetime(2024, 1, 7, 20, 0)) is False
