from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Worker
from .repository import WorkerRepository

_WORKER_COLUMNS = "worker_id, worker_number, first_name, last_name, email, team_name, is_active"


def _to_worker(r: Dict[str, Any]) -> Worker:
    return Worker(
        worker_id=int(r["worker_id"]),
        worker_number=r["worker_number"],
        first_name=r["first_name"],
        last_name=r["last_name"],
        email=r.get("email"),
        team_name=r.get("team_name"),
        is_active=bool(r.get("is_active", 1)),
    )


class MySQLWorkerRepository(WorkerRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, worker_id: int) -> Optional[Worker]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_WORKER_COLUMNS} FROM workers WHERE worker_id=%s", (int(worker_id),))
            r = fetchone(cur)
            return _to_worker(r) if r else None

    def get_by_number(self, worker_number: str) -> Optional[Worker]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_WORKER_COLUMNS} FROM workers WHERE worker_number=%s", (worker_number,))
            r = fetchone(cur)
            return _to_worker(r) if r else None

    def list_active_worker_ids(self) -> Sequence[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT worker_id FROM workers WHERE is_active=1 ORDER BY worker_id")
            return [int(r["worker_id"]) for r in fetchall(cur)]

    def count_all(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS total FROM workers")
            r = fetchone(cur)
            return int(r["total"]) if r else 0
