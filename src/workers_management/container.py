from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

from .attendance.factory import TimeWindowStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_WORKER_TIMEOUT_SECONDS
from .database.connection import DatabaseConnection, DBConfig
from .habits.mysql_habit_repository import MySQLHabitPreferenceRepository, MySQLHabitRepository
from .habits.service import HabitService
from .notifications.notifier import SmtpConfig, SmtpNotifier
from .rewards.batch import RewardBatchRunner
from .rewards.issuer import RewardIssuer
from .rewards.locks import KeyedLock
from .rewards.mysql_reward_repository import MySQLRewardRepository
from .rewards.service import RewardService
from .workers.mysql_worker_repository import MySQLWorkerRepository
from .workers.numbering import WorkerNumberGenerator


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    workers_repo: MySQLWorkerRepository
    attendance_repo: MySQLAttendanceRepository
    habits_repo: MySQLHabitRepository
    preferences_repo: MySQLHabitPreferenceRepository
    rewards_repo: MySQLRewardRepository

    notifier: SmtpNotifier
    attendance_service: AttendanceService
    habit_service: HabitService
    reward_issuer: RewardIssuer
    reward_service: RewardService
    reward_batch_runner: RewardBatchRunner
    worker_numbers: WorkerNumberGenerator


def build_container(
    *,
    db_config: dict,
    smtp_config: Optional[dict] = None,
    team_codes: Optional[Mapping[str, str]] = None,
    worker_timeout_seconds: Optional[float] = DEFAULT_WORKER_TIMEOUT_SECONDS,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    workers_repo = MySQLWorkerRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)
    habits_repo = MySQLHabitRepository(conn)
    preferences_repo = MySQLHabitPreferenceRepository(conn)
    rewards_repo = MySQLRewardRepository(conn)

    notifier = SmtpNotifier(workers_repo, SmtpConfig.from_dict(smtp_config or {}))
    attendance_service = AttendanceService(
        attendance_repo,
        workers_repo,
        strategy_factory=TimeWindowStrategyFactory(),
    )
    habit_service = HabitService(habits_repo, preferences_repo, workers_repo)
    reward_issuer = RewardIssuer(rewards_repo, workers_repo, notifier)
    reward_service = RewardService(
        attendance_repo,
        habits_repo,
        workers_repo,
        rewards_repo,
        reward_issuer,
        locks=KeyedLock(),
    )
    reward_batch_runner = RewardBatchRunner(workers_repo, reward_service, timeout_seconds=worker_timeout_seconds)
    worker_numbers = WorkerNumberGenerator(workers_repo, team_codes or {})

    return Container(
        conn=conn,
        workers_repo=workers_repo,
        attendance_repo=attendance_repo,
        habits_repo=habits_repo,
        preferences_repo=preferences_repo,
        rewards_repo=rewards_repo,
        notifier=notifier,
        attendance_service=attendance_service,
        habit_service=habit_service,
        reward_issuer=reward_issuer,
        reward_service=reward_service,
        reward_batch_runner=reward_batch_runner,
        worker_numbers=worker_numbers,
    )
