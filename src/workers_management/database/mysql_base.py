from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

import mysql.connector

from ..core.exceptions import DuplicateRecord, StoreFailure
from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield (conn, cursor); commit on success, rollback on error.

    Connector errors are re-raised as StoreFailure (DuplicateRecord for unique
    key violations) so services never depend on the driver's exception types.
    """
    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as exc:
        raise StoreFailure(f"Database unavailable: {exc}") from exc

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.IntegrityError as exc:
        conn.rollback()
        raise DuplicateRecord(str(exc)) from exc
    except mysql.connector.Error as exc:
        conn.rollback()
        raise StoreFailure(str(exc)) from exc
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def normalize_mysql_decimal(value: Any) -> Optional[Decimal]:
    """DECIMAL columns come back as Decimal, but tolerate float/str from drivers."""

    if value is None:
        return None
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def normalize_mysql_datetime(value: Any) -> datetime:
    """DATETIME columns are stored as naive UTC; accept ISO strings as well."""

    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        return datetime.fromisoformat(value.strip())
    raise TypeError(f"Unsupported MySQL DATETIME value type: {type(value)!r}")
