from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Tuple

from ..common.datetime_utils import period_key, to_utc, utc_now
from ..core.enums import RewardStatus, RewardType
from ..core.exceptions import DuplicateRecord, StoreFailure, WorkerNotFound
from ..notifications.notifier import Notifier
from ..workers.model import Worker
from ..workers.repository import WorkerRepository
from .model import IssuedReward, NewReward, QuotaCounts, Reward
from .repository import RewardRepository

logger = logging.getLogger("workers_management.rewards")

REWARD_EMAIL_SUBJECT = "Congratulations! You've Earned a Gift Voucher"


def compose_reward_message(worker: Worker, counts: QuotaCounts, period: str) -> Tuple[str, str]:
    body = (
        f"Dear {worker.first_name},\n"
        "\n"
        f"Congratulations! You met every monthly goal for {period}:\n"
        f"  - Services attended: {counts.total_attendance} "
        f"(Sunday {counts.sunday_attendance}, midweek {counts.midweek_attendance}, "
        f"special meetings {counts.special_meeting_attendance})\n"
        f"  - NLP prayer sessions: {counts.nlp_prayer}\n"
        f"  - Bible study sessions: {counts.bible_study}\n"
        f"  - Devotionals: {counts.devotionals}\n"
        f"  - Fasting days: {counts.fasting}\n"
        f"  - Giving records: {counts.giving}\n"
        "\n"
        "As a token of our appreciation, you have earned a gift voucher.\n"
        "Please collect your gift voucher from the church office.\n"
        "\n"
        "Thank you for your dedication and commitment.\n"
        "\n"
        "Best regards,\n"
        "Church Management Team\n"
    )
    return REWARD_EMAIL_SUBJECT, body


class RewardIssuer:
    """Persist at most one reward per worker per period, then notify the worker.

    The reward write and the notification are independent: a failed
    notification is logged and the reward stays.
    """

    def __init__(self, rewards: RewardRepository, workers: WorkerRepository, notifier: Notifier):
        self._rewards = rewards
        self._workers = workers
        self._notifier = notifier

    def issue(self, worker_id: int, counts: QuotaCounts, *, now: Optional[datetime] = None) -> IssuedReward:
        """`now` picks the period (its calendar month); defaults to the current UTC time."""
        period = period_key(to_utc(now) if now else utc_now())

        worker = self._workers.get_by_id(worker_id)
        if not worker:
            raise WorkerNotFound(worker_id)

        existing = self._rewards.get_for_period(worker.worker_id, period)
        if existing:
            logger.info("reward_already_issued", extra={"worker_id": worker.worker_id, "period": period})
            return IssuedReward(reward=existing, newly_issued=False)

        new_reward = NewReward(
            worker_id=worker.worker_id,
            reward_type=RewardType.GIFT_VOUCHER,
            status=RewardStatus.PENDING,
            period=period,
            created_at=utc_now(),
        )
        try:
            reward_id = self._rewards.save_reward(new_reward)
        except DuplicateRecord:
            # Lost a race against another evaluation of the same worker.
            existing = self._rewards.get_for_period(worker.worker_id, period)
            if existing is None:
                raise StoreFailure(f"Reward for worker {worker.worker_id} in {period} could not be read back")
            return IssuedReward(reward=existing, newly_issued=False)

        reward = Reward(
            reward_id=reward_id,
            worker_id=new_reward.worker_id,
            reward_type=new_reward.reward_type,
            status=new_reward.status,
            period=new_reward.period,
            created_at=new_reward.created_at,
        )
        logger.info(
            "reward_issued",
            extra={"worker_id": worker.worker_id, "reward_id": reward_id, "period": period},
        )

        self._notify(worker, counts, period)
        return IssuedReward(reward=reward, newly_issued=True)

    def _notify(self, worker: Worker, counts: QuotaCounts, period: str) -> None:
        subject, body = compose_reward_message(worker, counts, period)
        try:
            self._notifier.notify(worker.worker_id, subject, body)
        except Exception:
            logger.exception(
                "reward_notification_failed",
                extra={"worker_id": worker.worker_id, "period": period},
            )
