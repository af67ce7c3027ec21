from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Sequence

from ..core.enums import AttendanceStatus, AttendanceType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, normalize_mysql_datetime
from .model import AttendanceEvent, NewAttendance
from .repository import AttendanceRepository

_COLUMNS = "attendance_id, worker_id, check_in_time, type, status, is_early_check_in, created_at"


def _to_event(r: Dict[str, Any]) -> AttendanceEvent:
    return AttendanceEvent(
        attendance_id=int(r["attendance_id"]),
        worker_id=int(r["worker_id"]),
        check_in_time=normalize_mysql_datetime(r["check_in_time"]),
        type=AttendanceType(r["type"]),
        created_at=normalize_mysql_datetime(r["created_at"]),
        is_early_check_in=bool(r.get("is_early_check_in")),
        status=AttendanceStatus(r.get("status") or AttendanceStatus.PRESENT.value),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_attendance(self, worker_id: int, start: datetime, end: datetime) -> Sequence[AttendanceEvent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendances
                WHERE worker_id=%s AND check_in_time BETWEEN %s AND %s
                ORDER BY check_in_time DESC
                """,
                (int(worker_id), start, end),
            )
            return [_to_event(r) for r in fetchall(cur)]

    def save_attendance(self, event: NewAttendance) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendances(worker_id, check_in_time, type, status, is_early_check_in, created_at)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(event.worker_id),
                    event.check_in_time,
                    event.type.value,
                    AttendanceStatus.PRESENT.value,
                    int(event.is_early_check_in),
                    event.created_at,
                ),
            )
            return int(cur.lastrowid)

    def get_recent_for_worker(self, worker_id: int, limit: int) -> Sequence[AttendanceEvent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendances
                WHERE worker_id=%s
                ORDER BY check_in_time DESC
                LIMIT %s
                """,
                (int(worker_id), int(limit)),
            )
            return [_to_event(r) for r in fetchall(cur)]
