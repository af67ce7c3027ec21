from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Iterable, Union

from ..common.datetime_utils import to_utc
from ..core.enums import HabitType
from .model import HabitEvent


def _as_date(value: Union[HabitEvent, datetime, date]) -> date:
    if isinstance(value, HabitEvent):
        value = value.completed_at
    if isinstance(value, datetime):
        return to_utc(value).date()
    return value


def calculate_streak(completions: Iterable[Union[HabitEvent, datetime, date]], habit_type: HabitType) -> int:
    """Consecutive distinct days ending at the most recent completion day.

    Only the head run counts: {01-05, 01-04, 01-03, 01-01} -> 3.
    Giving is a monetary habit and never has a streak.
    """
    habit_type = HabitType(habit_type)
    if habit_type == HabitType.GIVING:
        return 0

    days = sorted(
        {_as_date(c) for c in completions if not isinstance(c, HabitEvent) or c.type == habit_type},
        reverse=True,
    )
    if not days:
        return 0

    streak = 1
    current = days[0]
    for day in days[1:]:
        if day != current - timedelta(days=1):
            break
        streak += 1
        current = day
    return streak
