from __future__ import annotations

from datetime import datetime
from typing import Protocol, Sequence

from .model import AttendanceEvent, NewAttendance


class AttendanceRepository(Protocol):
    def get_attendance(self, worker_id: int, start: datetime, end: datetime) -> Sequence[AttendanceEvent]:
        """Check-ins with start <= check_in_time <= end, newest first."""
        raise NotImplementedError

    def save_attendance(self, event: NewAttendance) -> int:
        raise NotImplementedError

    def get_recent_for_worker(self, worker_id: int, limit: int) -> Sequence[AttendanceEvent]:
        raise NotImplementedError
