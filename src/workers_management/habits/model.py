from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from ..core.enums import GivingType, HabitType


@dataclass(frozen=True)
class HabitEvent:
    """Domain entity: one completed habit. Immutable once stored."""

    habit_id: int
    worker_id: int
    type: HabitType
    completed_at: datetime
    amount: Optional[Decimal] = None
    giving_type: Optional[GivingType] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class NewHabit:
    worker_id: int
    type: HabitType
    completed_at: datetime
    amount: Optional[Decimal] = None
    giving_type: Optional[GivingType] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class HabitPreference:
    worker_id: int
    habit_type: HabitType


@dataclass(frozen=True)
class HabitDashboardItem:
    habit: HabitType
    monthly_count: int
    all_time_count: int
    monthly_amount: Decimal
    all_time_amount: Decimal
    streak: int
    message: str


@dataclass(frozen=True)
class GivingDashboardItem:
    """Per giving sub-type totals; giving_type None is the total row."""

    giving_type: Optional[GivingType]
    monthly_amount: Decimal
    all_time_amount: Decimal
    message: str


@dataclass
class HabitDashboard:
    worker_id: int
    first_name: str
    habits: List[HabitDashboardItem] = field(default_factory=list)
    giving_details: List[GivingDashboardItem] = field(default_factory=list)
