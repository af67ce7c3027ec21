from __future__ import annotations

from ...core.constants import MIDWEEK_SERVICE_EARLY_CUTOFF, MIDWEEK_SERVICE_END, MIDWEEK_SERVICE_START
from .fixed_window_strategy import FixedWindowStrategy


class MidweekServiceStrategy(FixedWindowStrategy):
    """Wednesday 18:45-20:30; early only at 18:45:00 sharp."""

    label = "Midweek service"

    def __init__(self):
        super().__init__(
            weekday=2,
            start=MIDWEEK_SERVICE_START,
            end=MIDWEEK_SERVICE_END,
            early_cutoff=MIDWEEK_SERVICE_EARLY_CUTOFF,
        )
