from __future__ import annotations

from datetime import datetime, time

from .base import TimeWindowStrategy, WindowDecision

_WEEKDAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


class FixedWindowStrategy(TimeWindowStrategy):
    """One weekday, an inclusive [start, end] time range and an early cutoff."""

    label = "Service"

    def __init__(self, *, weekday: int, start: time, end: time, early_cutoff: time):
        self._weekday = weekday
        self._start = start
        self._end = end
        self._early_cutoff = early_cutoff

    def decide(self, *, at: datetime) -> WindowDecision:
        moment = at.time()
        if at.weekday() != self._weekday or not (self._start <= moment <= self._end):
            return WindowDecision(valid=False, early=False, message=self.rejection_message())
        return WindowDecision(valid=True, early=moment <= self._early_cutoff)

    def rejection_message(self) -> str:
        return (
            f"{self.label} check-in is only allowed on {_WEEKDAY_NAMES[self._weekday]} "
            f"between {self._start:%H:%M} and {self._end:%H:%M} (UTC)."
        )
