from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import to_utc, utc_now
from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.enums import AttendanceType
from ..core.exceptions import InvalidTimeWindow, WorkerNotFound
from ..workers.repository import WorkerRepository
from .factory import TimeWindowStrategyFactory
from .model import AttendanceEvent, NewAttendance
from .repository import AttendanceRepository

logger = logging.getLogger("workers_management.attendance")


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        workers: WorkerRepository,
        *,
        strategy_factory: Optional[TimeWindowStrategyFactory] = None,
    ):
        self._attendance = attendance
        self._workers = workers
        self._factory = strategy_factory or TimeWindowStrategyFactory()

    def record_check_in(
        self,
        worker_id: int,
        attendance_type: AttendanceType,
        *,
        now: Optional[datetime] = None,
    ) -> AttendanceEvent:
        """Validate the check-in window, then persist one attendance row.

        Raises InvalidTimeWindow (nothing is written) when the timestamp is outside
        the allowed day/time for the type.
        """
        attendance_type = AttendanceType(attendance_type)
        check_in_time = to_utc(now) if now else utc_now()

        worker = self._workers.get_by_id(worker_id)
        if not worker or not worker.is_active:
            raise WorkerNotFound(worker_id)

        decision = self._factory.for_type(attendance_type).decide(at=check_in_time)
        if not decision.valid:
            logger.info(
                "check_in_rejected",
                extra={"worker_id": worker_id, "attendance_type": attendance_type.value, "at": check_in_time},
            )
            raise InvalidTimeWindow(attendance_type, decision.message or "Check-in is outside the allowed window.")

        new_event = NewAttendance(
            worker_id=worker.worker_id,
            check_in_time=check_in_time,
            type=attendance_type,
            created_at=utc_now(),
            is_early_check_in=decision.early,
        )
        attendance_id = self._attendance.save_attendance(new_event)
        logger.info(
            "check_in_recorded",
            extra={
                "worker_id": worker.worker_id,
                "attendance_id": attendance_id,
                "attendance_type": attendance_type.value,
                "early": decision.early,
            },
        )
        return AttendanceEvent(
            attendance_id=attendance_id,
            worker_id=new_event.worker_id,
            check_in_time=new_event.check_in_time,
            type=new_event.type,
            created_at=new_event.created_at,
            is_early_check_in=new_event.is_early_check_in,
        )

    def mark_from_qr(
        self,
        payload: str,
        attendance_type: AttendanceType = AttendanceType.SUNDAY_SERVICE,
        *,
        now: Optional[datetime] = None,
    ) -> AttendanceEvent:
        """QR payload format: 'WORKERNUMBER FirstName LastName' (only the number is used)."""
        payload = require_non_empty(payload, "QR code data")
        worker_number = payload.split()[0]

        worker = self._workers.get_by_number(worker_number)
        if not worker or not worker.is_active:
            raise WorkerNotFound(worker_number)

        return self.record_check_in(worker.worker_id, attendance_type, now=now)

    def get_history(self, worker_id: int, *, limit: int = DEFAULT_HISTORY_LIMIT) -> Sequence[AttendanceEvent]:
        return self._attendance.get_recent_for_worker(worker_id, limit)
