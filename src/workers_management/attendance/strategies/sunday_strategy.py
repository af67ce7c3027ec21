from __future__ import annotations

from ...core.constants import SUNDAY_SERVICE_EARLY_CUTOFF, SUNDAY_SERVICE_END, SUNDAY_SERVICE_START
from .fixed_window_strategy import FixedWindowStrategy


class SundayServiceStrategy(FixedWindowStrategy):
    """Sunday 08:00-19:00, early up to 09:00."""

    label = "Sunday service"

    def __init__(self):
        super().__init__(
            weekday=6,
            start=SUNDAY_SERVICE_START,
            end=SUNDAY_SERVICE_END,
            early_cutoff=SUNDAY_SERVICE_EARLY_CUTOFF,
        )
