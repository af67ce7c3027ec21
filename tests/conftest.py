from __future__ import annotations

from datetime import datetime, timedelta
from decimal import Decimal
from typing import Iterable, Optional

import pytest

from workers_management.attendance.model import AttendanceEvent, NewAttendance
from workers_management.core.enums import AttendanceType, GivingType, HabitType
from workers_management.core.exceptions import DuplicateRecord, NotificationFailure
from workers_management.habits.model import HabitEvent, HabitPreference, NewHabit
from workers_management.rewards.issuer import RewardIssuer
from workers_management.rewards.model import NewReward, Reward
from workers_management.rewards.service import RewardService
from workers_management.workers.model import Worker


class InMemoryWorkers:
    def __init__(self, workers: Iterable[Worker] = ()):
        self._by_id = {w.worker_id: w for w in workers}

    def add(self, worker: Worker) -> None:
        self._by_id[worker.worker_id] = worker

    def get_by_id(self, worker_id: int) -> Optional[Worker]:
        return self._by_id.get(worker_id)

    def get_by_number(self, worker_number: str) -> Optional[Worker]:
        return next((w for w in self._by_id.values() if w.worker_number == worker_number), None)

    def list_active_worker_ids(self):
        return sorted(w.worker_id for w in self._by_id.values() if w.is_active)

    def count_all(self) -> int:
        return len(self._by_id)


class InMemoryAttendance:
    def __init__(self):
        self.events: list[AttendanceEvent] = []
        self.reads = 0

    def add(self, worker_id: int, attendance_type: AttendanceType, at: datetime) -> None:
        self.save_attendance(NewAttendance(worker_id=worker_id, check_in_time=at, type=attendance_type, created_at=at))

    def get_attendance(self, worker_id: int, start: datetime, end: datetime):
        self.reads += 1
        rows = [e for e in self.events if e.worker_id == worker_id and start <= e.check_in_time <= end]
        return sorted(rows, key=lambda e: e.check_in_time, reverse=True)

    def save_attendance(self, event: NewAttendance) -> int:
        attendance_id = len(self.events) + 1
        self.events.append(
            AttendanceEvent(
                attendance_id=attendance_id,
                worker_id=event.worker_id,
                check_in_time=event.check_in_time,
                type=event.type,
                created_at=event.created_at,
                is_early_check_in=event.is_early_check_in,
            )
        )
        return attendance_id

    def get_recent_for_worker(self, worker_id: int, limit: int):
        rows = [e for e in self.events if e.worker_id == worker_id]
        rows.sort(key=lambda e: e.check_in_time, reverse=True)
        return rows[:limit]


class InMemoryHabits:
    def __init__(self):
        self.events: list[HabitEvent] = []

    def add(
        self,
        worker_id: int,
        habit_type: HabitType,
        at: datetime,
        *,
        amount: Optional[Decimal] = None,
        giving_type: Optional[GivingType] = None,
    ) -> None:
        self.add_habit(NewHabit(worker_id=worker_id, type=habit_type, completed_at=at, amount=amount, giving_type=giving_type))

    def get_habits(self, worker_id: int, start: Optional[datetime] = None, end: Optional[datetime] = None):
        rows = [
            h
            for h in self.events
            if h.worker_id == worker_id
            and (start is None or h.completed_at >= start)
            and (end is None or h.completed_at <= end)
        ]
        return sorted(rows, key=lambda h: h.completed_at, reverse=True)

    def add_habit(self, habit: NewHabit) -> int:
        habit_id = len(self.events) + 1
        self.events.append(
            HabitEvent(
                habit_id=habit_id,
                worker_id=habit.worker_id,
                type=habit.type,
                completed_at=habit.completed_at,
                amount=habit.amount,
                giving_type=habit.giving_type,
                notes=habit.notes,
            )
        )
        return habit_id


class InMemoryPreferences:
    def __init__(self):
        self.rows: list[HabitPreference] = []
        self.added: list[HabitType] = []
        self.removed: list[HabitType] = []

    def list_for_worker(self, worker_id: int):
        return [p for p in self.rows if p.worker_id == worker_id]

    def add_preferences(self, worker_id: int, habit_types):
        for habit_type in habit_types:
            self.added.append(habit_type)
            self.rows.append(HabitPreference(worker_id=worker_id, habit_type=habit_type))

    def remove_preferences(self, worker_id: int, habit_types):
        habit_types = list(habit_types)
        self.removed.extend(habit_types)
        self.rows = [p for p in self.rows if not (p.worker_id == worker_id and p.habit_type in habit_types)]


class InMemoryRewards:
    def __init__(self):
        self.rows: list[Reward] = []

    def save_reward(self, reward: NewReward) -> int:
        if self.get_for_period(reward.worker_id, reward.period):
            raise DuplicateRecord(f"duplicate reward {reward.worker_id}/{reward.period}")
        reward_id = len(self.rows) + 1
        self.rows.append(
            Reward(
                reward_id=reward_id,
                worker_id=reward.worker_id,
                reward_type=reward.reward_type,
                status=reward.status,
                period=reward.period,
                created_at=reward.created_at,
            )
        )
        return reward_id

    def get_rewards_for_worker(self, worker_id: int):
        return [r for r in self.rows if r.worker_id == worker_id]

    def get_for_period(self, worker_id: int, period: str):
        return next((r for r in self.rows if r.worker_id == worker_id and r.period == period), None)


class RecordingNotifier:
    def __init__(self, *, fail: bool = False):
        self.fail = fail
        self.attempts: list[tuple[int, str, str]] = []

    def notify(self, worker_id: int, subject: str, body: str) -> None:
        self.attempts.append((worker_id, subject, body))
        if self.fail:
            raise NotificationFailure("SMTP server unavailable")


def make_worker(worker_id: int = 1, **overrides) -> Worker:
    values = dict(
        worker_id=worker_id,
        worker_number=f"MIN-{worker_id:03d}",
        first_name=f"Grace{worker_id}",
        last_name="Ade",
        email=f"worker{worker_id}@example.com",
        team_name="Ministry",
    )
    values.update(overrides)
    return Worker(**values)


# January 2024: Sundays are the 7th, 14th, 21st and 28th.
JANUARY_SUNDAYS = [datetime(2024, 1, d, 8, 30) for d in (7, 14, 21, 28)]
END_OF_JANUARY = datetime(2024, 1, 31, 12, 0)


def seed_qualifying_month(
    attendance: InMemoryAttendance,
    habits: InMemoryHabits,
    worker_id: int,
    *,
    sundays: int = 4,
    nlp_prayer: int = 20,
    bible_study: int = 20,
    devotionals: int = 20,
    fasting: int = 8,
    giving: int = 4,
) -> None:
    for at in JANUARY_SUNDAYS[:sundays]:
        attendance.add(worker_id, AttendanceType.SUNDAY_SERVICE, at)

    first = datetime(2024, 1, 1, 7, 0)
    for habit_type, count in (
        (HabitType.NLP_PRAYER, nlp_prayer),
        (HabitType.BIBLE_STUDY, bible_study),
        (HabitType.DEVOTIONALS, devotionals),
        (HabitType.FASTING, fasting),
    ):
        for day in range(count):
            habits.add(worker_id, habit_type, first + timedelta(days=day))
    for day in range(giving):
        habits.add(
            worker_id,
            HabitType.GIVING,
            first + timedelta(days=day),
            amount=Decimal("10.00"),
            giving_type=GivingType.TITHE,
        )


@pytest.fixture
def worker() -> Worker:
    return make_worker(1)


@pytest.fixture
def workers(worker) -> InMemoryWorkers:
    return InMemoryWorkers([worker])


@pytest.fixture
def attendance() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def habits() -> InMemoryHabits:
    return InMemoryHabits()


@pytest.fixture
def preferences() -> InMemoryPreferences:
    return InMemoryPreferences()


@pytest.fixture
def rewards() -> InMemoryRewards:
    return InMemoryRewards()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def issuer(rewards, workers, notifier) -> RewardIssuer:
    return RewardIssuer(rewards, workers, notifier)


@pytest.fixture
def reward_service(attendance, habits, workers, rewards, issuer) -> RewardService:
    return RewardService(attendance, habits, workers, rewards, issuer)
