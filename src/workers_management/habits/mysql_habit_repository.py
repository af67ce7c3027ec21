from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Iterable, Optional, Sequence

from ..common.datetime_utils import utc_now
from ..core.enums import GivingType, HabitType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, normalize_mysql_datetime, normalize_mysql_decimal
from .model import HabitEvent, HabitPreference, NewHabit
from .repository import HabitPreferenceRepository, HabitRepository


def _to_habit(r: Dict[str, Any]) -> HabitEvent:
    giving_type = r.get("giving_type")
    return HabitEvent(
        habit_id=int(r["habit_id"]),
        worker_id=int(r["worker_id"]),
        type=HabitType(r["type"]),
        completed_at=normalize_mysql_datetime(r["completed_at"]),
        amount=normalize_mysql_decimal(r.get("amount")),
        giving_type=GivingType(giving_type) if giving_type else None,
        notes=r.get("notes"),
    )


class MySQLHabitRepository(HabitRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_habits(
        self,
        worker_id: int,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> Sequence[HabitEvent]:
        clauses = ["worker_id=%s"]
        params: list[object] = [int(worker_id)]
        if start is not None:
            clauses.append("completed_at >= %s")
            params.append(start)
        if end is not None:
            clauses.append("completed_at <= %s")
            params.append(end)

        where = " AND ".join(clauses)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT habit_id, worker_id, type, completed_at, amount, giving_type, notes
                FROM habits
                WHERE {where}
                ORDER BY completed_at DESC
                """,
                tuple(params),
            )
            return [_to_habit(r) for r in fetchall(cur)]

    def add_habit(self, habit: NewHabit) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO habits(worker_id, type, completed_at, amount, giving_type, notes)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(habit.worker_id),
                    habit.type.value,
                    habit.completed_at,
                    habit.amount,
                    habit.giving_type.value if habit.giving_type else None,
                    habit.notes,
                ),
            )
            return int(cur.lastrowid)


class MySQLHabitPreferenceRepository(HabitPreferenceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_worker(self, worker_id: int) -> Sequence[HabitPreference]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT worker_id, habit_type FROM worker_habit_preferences WHERE worker_id=%s ORDER BY preference_id",
                (int(worker_id),),
            )
            return [
                HabitPreference(worker_id=int(r["worker_id"]), habit_type=HabitType(r["habit_type"]))
                for r in fetchall(cur)
            ]

    def add_preferences(self, worker_id: int, habit_types: Iterable[HabitType]) -> None:
        rows = [(int(worker_id), HabitType(t).value, utc_now()) for t in habit_types]
        if not rows:
            return
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(
                "INSERT INTO worker_habit_preferences(worker_id, habit_type, created_at) VALUES(%s,%s,%s)",
                rows,
            )

    def remove_preferences(self, worker_id: int, habit_types: Iterable[HabitType]) -> None:
        values = [HabitType(t).value for t in habit_types]
        if not values:
            return
        placeholders = ",".join(["%s"] * len(values))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"DELETE FROM worker_habit_preferences WHERE worker_id=%s AND habit_type IN ({placeholders})",
                (int(worker_id), *values),
            )
