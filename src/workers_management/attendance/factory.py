from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from ..core.enums import AttendanceType
from .strategies.base import TimeWindowStrategy
from .strategies.midweek_strategy import MidweekServiceStrategy
from .strategies.open_strategy import OpenStrategy
from .strategies.sunday_strategy import SundayServiceStrategy


def _default_strategies() -> Dict[AttendanceType, TimeWindowStrategy]:
    return {
        AttendanceType.SUNDAY_SERVICE: SundayServiceStrategy(),
        AttendanceType.MIDWEEK_SERVICE: MidweekServiceStrategy(),
        AttendanceType.SPECIAL_SERVICE_MEETING: OpenStrategy(always_early=True),
    }


@dataclass
class TimeWindowStrategyFactory:
    """Factory Pattern: choose the window rule for an attendance type."""

    strategies: Dict[AttendanceType, TimeWindowStrategy] = field(default_factory=_default_strategies)
    fallback: TimeWindowStrategy = field(default_factory=OpenStrategy)

    def for_type(self, attendance_type: AttendanceType) -> TimeWindowStrategy:
        return self.strategies.get(AttendanceType(attendance_type), self.fallback)
