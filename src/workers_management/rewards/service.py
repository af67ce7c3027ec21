from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import month_window, period_key, to_utc, utc_now
from ..core.exceptions import WorkerNotFound
from ..habits.repository import HabitRepository
from ..workers.repository import WorkerRepository
from .issuer import RewardIssuer
from .locks import KeyedLock
from .model import EvaluationResult, RewardListing
from .policy.base import RewardPolicy
from .policy.monthly_quota_policy import MonthlyQuotaPolicy
from .quota import count_events
from .repository import RewardRepository

logger = logging.getLogger("workers_management.rewards")


class RewardService:
    """Use cases: evaluate monthly quotas and issue rewards to qualifying workers."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        habits: HabitRepository,
        workers: WorkerRepository,
        rewards: RewardRepository,
        issuer: RewardIssuer,
        *,
        policy: Optional[RewardPolicy] = None,
        locks: Optional[KeyedLock] = None,
    ):
        self._attendance = attendance
        self._habits = habits
        self._workers = workers
        self._rewards = rewards
        self._issuer = issuer
        self._policy = policy or MonthlyQuotaPolicy()
        self._locks = locks or KeyedLock()

    def evaluate(self, worker_id: int, *, now: Optional[datetime] = None) -> EvaluationResult:
        """Read-only: recount the month containing `now` from raw events."""
        now = to_utc(now) if now else utc_now()
        start, end = month_window(now)

        worker = self._workers.get_by_id(worker_id)
        if not worker:
            raise WorkerNotFound(worker_id)

        attendance = self._attendance.get_attendance(worker.worker_id, start, end)
        habits = self._habits.get_habits(worker.worker_id, start, end)
        counts = count_events(attendance, habits, start=start, end=end)
        shortfalls = self._policy.shortfalls(counts)

        return EvaluationResult(
            worker_id=worker.worker_id,
            period=period_key(now),
            counts=counts,
            qualifies=not shortfalls,
            shortfalls=shortfalls,
        )

    def check_and_process_reward(
        self,
        worker_id: int,
        *,
        now: Optional[datetime] = None,
        cancelled: Optional[threading.Event] = None,
    ) -> EvaluationResult:
        """Evaluate and, when every quota is met, issue the period's reward.

        Runs under a per-worker lock so two evaluations of one worker never
        interleave between the read and the reward write. Once `cancelled` is
        set (the caller gave up waiting), nothing is issued.
        """
        now = to_utc(now) if now else utc_now()
        with self._locks.hold(worker_id):
            result = self.evaluate(worker_id, now=now)
            if not result.qualifies:
                logger.info(
                    "reward_not_qualified",
                    extra={"worker_id": worker_id, "period": result.period, "shortfalls": result.shortfalls},
                )
                return result

            if cancelled is not None and cancelled.is_set():
                logger.warning("reward_issue_cancelled", extra={"worker_id": worker_id, "period": result.period})
                return result

            issued = self._issuer.issue(worker_id, result.counts, now=now)
            return EvaluationResult(
                worker_id=result.worker_id,
                period=result.period,
                counts=result.counts,
                qualifies=True,
                reward=issued.reward,
                newly_issued=issued.newly_issued,
            )

    def get_rewards_for_worker(self, worker_id: int) -> RewardListing:
        rewards = list(self._rewards.get_rewards_for_worker(worker_id))
        message = "The worker has no rewards at this time." if not rewards else "Rewards retrieved successfully."
        return RewardListing(rewards=rewards, message=message)
