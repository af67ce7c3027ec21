from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from ..common.datetime_utils import to_utc, utc_now
from ..core.constants import DEFAULT_WORKER_TIMEOUT_SECONDS
from ..core.enums import FailureKind
from ..core.exceptions import StoreFailure, WorkerNotFound
from ..workers.repository import WorkerRepository
from .model import EvaluationResult
from .service import RewardService

logger = logging.getLogger("workers_management.rewards.batch")


@dataclass(frozen=True)
class BatchFailure:
    worker_id: int
    kind: FailureKind
    message: str


@dataclass
class BatchSummary:
    attempted: int = 0
    succeeded: int = 0
    failed: List[BatchFailure] = field(default_factory=list)
    rewarded: List[int] = field(default_factory=list)

    @property
    def failed_worker_ids(self) -> List[int]:
        return [f.worker_id for f in self.failed]


def _failure_kind(exc: BaseException) -> FailureKind:
    if isinstance(exc, WorkerNotFound):
        return FailureKind.WORKER_NOT_FOUND
    if isinstance(exc, StoreFailure):
        return FailureKind.STORE_FAILURE
    return FailureKind.UNEXPECTED


class RewardBatchRunner:
    """Evaluate every active worker once, one at a time.

    A failure (or timeout) for one worker is recorded in the summary and the
    batch moves on; the run always covers the full list it started with.
    """

    def __init__(
        self,
        workers: WorkerRepository,
        rewards: RewardService,
        *,
        timeout_seconds: Optional[float] = DEFAULT_WORKER_TIMEOUT_SECONDS,
    ):
        self._workers = workers
        self._rewards = rewards
        self._timeout_seconds = timeout_seconds

    def run_all(self, *, now: Optional[datetime] = None) -> BatchSummary:
        now = to_utc(now) if now else utc_now()
        worker_ids = list(self._workers.list_active_worker_ids())
        summary = BatchSummary(attempted=len(worker_ids))
        logger.info("reward_batch_started", extra={"attempted": summary.attempted, "at": now})

        for worker_id in worker_ids:
            try:
                result = self._run_one(worker_id, now)
            except FutureTimeoutError:
                self._record_failure(
                    summary,
                    worker_id,
                    FailureKind.TIMEOUT,
                    f"Evaluation exceeded {self._timeout_seconds}s",
                )
                continue
            except Exception as exc:
                self._record_failure(summary, worker_id, _failure_kind(exc), str(exc), exc_info=True)
                continue

            summary.succeeded += 1
            if result.newly_issued:
                summary.rewarded.append(worker_id)

        logger.info(
            "reward_batch_finished",
            extra={
                "attempted": summary.attempted,
                "succeeded": summary.succeeded,
                "failed": summary.failed_worker_ids,
                "rewarded": summary.rewarded,
            },
        )
        return summary

    def _run_one(self, worker_id: int, now: datetime) -> EvaluationResult:
        if not self._timeout_seconds:
            return self._rewards.check_and_process_reward(worker_id, now=now)

        # A fresh single-thread pool per worker so a hung call never blocks the next one.
        # The abandoned call keeps running; `cancelled` stops it before it issues a reward.
        cancelled = threading.Event()
        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix=f"reward-worker-{worker_id}")
        try:
            future = executor.submit(
                self._rewards.check_and_process_reward,
                worker_id,
                now=now,
                cancelled=cancelled,
            )
            try:
                return future.result(timeout=self._timeout_seconds)
            except FutureTimeoutError:
                cancelled.set()
                raise
        finally:
            executor.shutdown(wait=False)

    @staticmethod
    def _record_failure(
        summary: BatchSummary,
        worker_id: int,
        kind: FailureKind,
        message: str,
        *,
        exc_info: bool = False,
    ) -> None:
        summary.failed.append(BatchFailure(worker_id=worker_id, kind=kind, message=message))
        logger.error(
            "reward_batch_worker_failed",
            extra={"worker_id": worker_id, "kind": kind.value, "error": message},
            exc_info=exc_info,
        )
