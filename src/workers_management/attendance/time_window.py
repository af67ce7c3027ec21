"""Time-window classification of check-ins.

All day-of-week and time-of-day checks run on UTC; aware timestamps are
converted first and naive timestamps are assumed to already be UTC.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..common.datetime_utils import to_utc
from ..core.enums import AttendanceType
from .factory import TimeWindowStrategyFactory
from .strategies.base import WindowDecision

_DEFAULT_FACTORY = TimeWindowStrategyFactory()


def classify(
    attendance_type: AttendanceType,
    timestamp: datetime,
    *,
    factory: Optional[TimeWindowStrategyFactory] = None,
) -> WindowDecision:
    strategy = (factory or _DEFAULT_FACTORY).for_type(attendance_type)
    return strategy.decide(at=to_utc(timestamp))


def counts_towards_quota(attendance_type: AttendanceType, timestamp: datetime) -> bool:
    """Sunday/Wednesday check-ins count only inside their window; special meetings always count."""
    attendance_type = AttendanceType(attendance_type)
    if attendance_type == AttendanceType.WORKERS_MEETING:
        return False
    return classify(attendance_type, timestamp).valid
