from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..core.enums import AttendanceStatus, AttendanceType


@dataclass(frozen=True)
class AttendanceEvent:
    """Domain entity: one check-in. Immutable once stored."""

    attendance_id: int
    worker_id: int
    check_in_time: datetime
    type: AttendanceType
    created_at: datetime
    is_early_check_in: bool = False
    status: AttendanceStatus = AttendanceStatus.PRESENT


@dataclass(frozen=True)
class NewAttendance:
    """Write-model for a check-in that has not been persisted yet."""

    worker_id: int
    check_in_time: datetime
    type: AttendanceType
    created_at: datetime
    is_early_check_in: bool = False
