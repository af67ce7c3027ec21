from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..core.enums import RewardStatus, RewardType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_datetime
from .model import NewReward, Reward
from .repository import RewardRepository

_COLUMNS = "reward_id, worker_id, reward_type, status, period, created_at, redeemed_at"


def _to_reward(r: Dict[str, Any]) -> Reward:
    redeemed_at = r.get("redeemed_at")
    return Reward(
        reward_id=int(r["reward_id"]),
        worker_id=int(r["worker_id"]),
        reward_type=RewardType(r["reward_type"]),
        status=RewardStatus(r["status"]),
        period=r["period"],
        created_at=normalize_mysql_datetime(r["created_at"]),
        redeemed_at=normalize_mysql_datetime(redeemed_at) if redeemed_at else None,
    )


class MySQLRewardRepository(RewardRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def save_reward(self, reward: NewReward) -> int:
        # uq_reward_worker_period turns a concurrent second insert into DuplicateRecord.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO worker_rewards(worker_id, reward_type, status, period, created_at)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (
                    int(reward.worker_id),
                    reward.reward_type.value,
                    reward.status.value,
                    reward.period,
                    reward.created_at,
                ),
            )
            return int(cur.lastrowid)

    def get_rewards_for_worker(self, worker_id: int) -> Sequence[Reward]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM worker_rewards WHERE worker_id=%s ORDER BY created_at DESC",
                (int(worker_id),),
            )
            return [_to_reward(r) for r in fetchall(cur)]

    def get_for_period(self, worker_id: int, period: str) -> Optional[Reward]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM worker_rewards WHERE worker_id=%s AND period=%s",
                (int(worker_id), period),
            )
            r = fetchone(cur)
            return _to_reward(r) if r else None
