from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import NewReward, Reward


class RewardRepository(Protocol):
    def save_reward(self, reward: NewReward) -> int:
        """Raises DuplicateRecord when (worker_id, period) already has a reward."""
        raise NotImplementedError

    def get_rewards_for_worker(self, worker_id: int) -> Sequence[Reward]:
        raise NotImplementedError

    def get_for_period(self, worker_id: int, period: str) -> Optional[Reward]:
        raise NotImplementedError
