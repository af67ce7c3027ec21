from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Sequence

from ..common.datetime_utils import month_window, to_utc, utc_now
from ..common.validators import require_non_negative_amount
from ..core.enums import GivingType, HabitType
from ..core.exceptions import ValidationError, WorkerNotFound
from ..workers.model import Worker
from ..workers.repository import WorkerRepository
from .model import GivingDashboardItem, HabitDashboard, HabitDashboardItem, HabitEvent, NewHabit
from .repository import HabitPreferenceRepository, HabitRepository
from .streaks import calculate_streak

logger = logging.getLogger("workers_management.habits")

_ZERO = Decimal("0")


def _money(value: Decimal) -> str:
    return f"£{value:,.2f}"


def _sum_amounts(events: Iterable[HabitEvent]) -> Decimal:
    return sum((e.amount or _ZERO for e in events), _ZERO)


def build_message(
    name: str,
    habit: HabitType,
    *,
    monthly_count: int,
    monthly_amount: Decimal,
    all_time_count: int,
    all_time_amount: Decimal,
    streak: int,
) -> str:
    if habit == HabitType.GIVING:
        return f"Hi {name}, you have given {_money(monthly_amount)} this month. All-time giving: {_money(all_time_amount)}."
    if habit == HabitType.FASTING:
        return f"Hi {name}, you fasted {monthly_count} days this month. Current streak: {streak}. Total: {all_time_count} days."
    if habit == HabitType.BIBLE_STUDY:
        return (
            f"Hi {name}, you studied the Bible {monthly_count} times this month. "
            f"Streak: {streak}. Total studies: {all_time_count}."
        )
    if habit == HabitType.NLP_PRAYER:
        return (
            f"Hi {name}, you prayed {monthly_count} times this month. "
            f"Streak: {streak} days. All-time total: {all_time_count} sessions."
        )
    if habit == HabitType.DEVOTIONALS:
        return (
            f"Hi {name}, you completed {monthly_count} devotionals this month. "
            f"Streak: {streak}. Total: {all_time_count}."
        )
    return f"Hi {name}, great job staying consistent!"


class HabitService:
    """Use cases: log habits, choose tracked habits, build the habit dashboard."""

    def __init__(
        self,
        habits: HabitRepository,
        preferences: HabitPreferenceRepository,
        workers: WorkerRepository,
    ):
        self._habits = habits
        self._preferences = preferences
        self._workers = workers

    def _require_worker(self, worker_id: int) -> Worker:
        worker = self._workers.get_by_id(worker_id)
        if not worker:
            raise WorkerNotFound(worker_id)
        return worker

    def log_habit(
        self,
        worker_id: int,
        habit_type: HabitType,
        *,
        amount: Optional[Decimal] = None,
        giving_type: Optional[GivingType] = None,
        notes: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> HabitEvent:
        habit_type = HabitType(habit_type)
        worker = self._require_worker(worker_id)

        if habit_type == HabitType.GIVING:
            if giving_type is None:
                raise ValidationError("Giving type must be specified for Giving habit.")
            giving_type = GivingType(giving_type)
            amount = require_non_negative_amount(amount, "Amount")
        else:
            if amount is not None or giving_type is not None:
                raise ValidationError("Amount and giving type only apply to Giving habits.")

        new_habit = NewHabit(
            worker_id=worker.worker_id,
            type=habit_type,
            completed_at=to_utc(now) if now else utc_now(),
            amount=amount,
            giving_type=giving_type,
            notes=notes,
        )
        habit_id = self._habits.add_habit(new_habit)
        logger.info("habit_logged", extra={"worker_id": worker.worker_id, "habit_type": habit_type.value})
        return HabitEvent(
            habit_id=habit_id,
            worker_id=new_habit.worker_id,
            type=new_habit.type,
            completed_at=new_habit.completed_at,
            amount=new_habit.amount,
            giving_type=new_habit.giving_type,
            notes=new_habit.notes,
        )

    def save_preferences(self, worker_id: int, selected: Iterable[HabitType]) -> List[HabitType]:
        """Replace the tracked habit set: drop unselected, add missing, keep the rest."""
        worker = self._require_worker(worker_id)

        requested: List[HabitType] = []
        for habit in selected:
            habit = HabitType(habit)
            if habit not in requested:
                requested.append(habit)

        existing = [p.habit_type for p in self._preferences.list_for_worker(worker.worker_id)]
        to_remove = [h for h in existing if h not in requested]
        to_add = [h for h in requested if h not in existing]

        self._preferences.remove_preferences(worker.worker_id, to_remove)
        self._preferences.add_preferences(worker.worker_id, to_add)
        logger.info(
            "habit_preferences_saved",
            extra={
                "worker_id": worker.worker_id,
                "added": [h.value for h in to_add],
                "removed": [h.value for h in to_remove],
            },
        )
        return requested

    def get_dashboard(self, worker_id: int, *, now: Optional[datetime] = None) -> HabitDashboard:
        worker = self._require_worker(worker_id)
        month_start, month_end = month_window(now or utc_now())

        logs = self._habits.get_habits(worker.worker_id)
        dashboard = HabitDashboard(worker_id=worker.worker_id, first_name=worker.first_name)

        for pref in self._preferences.list_for_worker(worker.worker_id):
            habit_logs = [log for log in logs if log.type == pref.habit_type]
            monthly_logs = [log for log in habit_logs if month_start <= to_utc(log.completed_at) <= month_end]

            monthly_amount = _sum_amounts(monthly_logs)
            all_time_amount = _sum_amounts(habit_logs)
            streak = calculate_streak(habit_logs, pref.habit_type)

            dashboard.habits.append(
                HabitDashboardItem(
                    habit=pref.habit_type,
                    monthly_count=len(monthly_logs),
                    all_time_count=len(habit_logs),
                    monthly_amount=monthly_amount,
                    all_time_amount=all_time_amount,
                    streak=streak,
                    message=build_message(
                        worker.first_name,
                        pref.habit_type,
                        monthly_count=len(monthly_logs),
                        monthly_amount=monthly_amount,
                        all_time_count=len(habit_logs),
                        all_time_amount=all_time_amount,
                        streak=streak,
                    ),
                )
            )

            if pref.habit_type == HabitType.GIVING:
                dashboard.giving_details.extend(
                    self._giving_breakdown(worker.first_name, habit_logs, monthly_logs)
                )

        return dashboard

    def _giving_breakdown(
        self,
        name: str,
        habit_logs: Sequence[HabitEvent],
        monthly_logs: Sequence[HabitEvent],
    ) -> List[GivingDashboardItem]:
        by_type: Dict[GivingType, Decimal] = {}
        for log in habit_logs:
            if log.giving_type is None:
                continue
            by_type[log.giving_type] = by_type.get(log.giving_type, _ZERO) + (log.amount or _ZERO)

        items = [
            GivingDashboardItem(
                giving_type=giving_type,
                monthly_amount=_sum_amounts(log for log in monthly_logs if log.giving_type == giving_type),
                all_time_amount=total,
                message=f"Hi {name}, your total {giving_type.value} payment is {_money(total)}",
            )
            for giving_type, total in by_type.items()
        ]

        total_giving = sum(by_type.values(), _ZERO)
        items.append(
            GivingDashboardItem(
                giving_type=None,
                monthly_amount=_sum_amounts(monthly_logs),
                all_time_amount=total_giving,
                message=f"Your total giving across all types is {_money(total_giving)}",
            )
        )
        return items
