from __future__ import annotations

from collections import Counter
from datetime import datetime
from typing import Iterable, Optional

from ..attendance.model import AttendanceEvent
from ..attendance.time_window import counts_towards_quota
from ..common.datetime_utils import to_utc
from ..core.enums import AttendanceType, HabitType
from ..habits.model import HabitEvent
from .model import QuotaCounts


def _within(value: datetime, start: Optional[datetime], end: Optional[datetime]) -> bool:
    value = to_utc(value)
    if start is not None and value < start:
        return False
    if end is not None and value > end:
        return False
    return True


def count_events(
    attendance: Iterable[AttendanceEvent],
    habits: Iterable[HabitEvent],
    *,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
) -> QuotaCounts:
    """Aggregate raw events into QuotaCounts.

    Events outside [start, end] are ignored. Sunday and midweek check-ins only
    count inside their window; workers' meetings never count.
    """
    attendance_counts: Counter = Counter()
    for event in attendance:
        if not _within(event.check_in_time, start, end):
            continue
        if counts_towards_quota(event.type, event.check_in_time):
            attendance_counts[AttendanceType(event.type)] += 1

    habit_counts: Counter = Counter(
        HabitType(h.type) for h in habits if _within(h.completed_at, start, end)
    )

    return QuotaCounts(
        sunday_attendance=attendance_counts[AttendanceType.SUNDAY_SERVICE],
        midweek_attendance=attendance_counts[AttendanceType.MIDWEEK_SERVICE],
        special_meeting_attendance=attendance_counts[AttendanceType.SPECIAL_SERVICE_MEETING],
        nlp_prayer=habit_counts[HabitType.NLP_PRAYER],
        bible_study=habit_counts[HabitType.BIBLE_STUDY],
        devotionals=habit_counts[HabitType.DEVOTIONALS],
        fasting=habit_counts[HabitType.FASTING],
        giving=habit_counts[HabitType.GIVING],
    )
