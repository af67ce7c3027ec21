from __future__ import annotations

from datetime import datetime

from .base import TimeWindowStrategy, WindowDecision


class OpenStrategy(TimeWindowStrategy):
    """No day/time restriction (special meetings, workers' meetings)."""

    def __init__(self, *, always_early: bool = False):
        self._always_early = bool(always_early)

    def decide(self, *, at: datetime) -> WindowDecision:
        return WindowDecision(valid=True, early=self._always_early)
