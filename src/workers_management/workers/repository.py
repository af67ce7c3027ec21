from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Worker


class WorkerRepository(Protocol):
    """Repository interface for workers.

    Note (DIP): services depend on this interface, never on a concrete database.
    """

    def get_by_id(self, worker_id: int) -> Optional[Worker]:
        raise NotImplementedError

    def get_by_number(self, worker_number: str) -> Optional[Worker]:
        raise NotImplementedError

    def list_active_worker_ids(self) -> Sequence[int]:
        raise NotImplementedError

    def count_all(self) -> int:
        raise NotImplementedError
