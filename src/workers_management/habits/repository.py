from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional, Protocol, Sequence

from ..core.enums import HabitType
from .model import HabitEvent, HabitPreference, NewHabit


class HabitRepository(Protocol):
    def get_habits(
        self,
        worker_id: int,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> Sequence[HabitEvent]:
        """Completions with start <= completed_at <= end; open bounds when None."""
        raise NotImplementedError

    def add_habit(self, habit: NewHabit) -> int:
        raise NotImplementedError


class HabitPreferenceRepository(Protocol):
    def list_for_worker(self, worker_id: int) -> Sequence[HabitPreference]:
        raise NotImplementedError

    def add_preferences(self, worker_id: int, habit_types: Iterable[HabitType]) -> None:
        raise NotImplementedError

    def remove_preferences(self, worker_id: int, habit_types: Iterable[HabitType]) -> None:
        raise NotImplementedError
