from datetime import datetime

import pytest

from conftest import InMemoryAttendance, InMemoryWorkers, make_worker
from workers_management.attendance.service import AttendanceService
from workers_management.core.enums import AttendanceType
from workers_management.core.exceptions import InvalidTimeWindow, ValidationError, WorkerNotFound


def _service(*workers):
    attendance = InMemoryAttendance()
    return AttendanceService(attendance, InMemoryWorkers(workers or [make_worker(1)])), attendance


def test_record_check_in_inside_window_is_saved_as_early():
    service, attendance = _service()

    event = service.record_check_in(1, AttendanceType.SUNDAY_SERVICE, now=datetime(2024, 1, 7, 8, 45))

    assert event.attendance_id == 1
    assert event.is_early_check_in is True
    assert event.check_in_time == datetime(2024, 1, 7, 8, 45)
    assert len(attendance.events) == 1


def test_record_check_in_after_cutoff_is_not_early():
    service, _ = _service()

    event = service.record_check_in(1, AttendanceType.MIDWEEK_SERVICE, now=datetime(2024, 1, 10, 19, 30))

    assert event.is_early_check_in is False


def test_record_check_in_outside_window_is_rejected_and_not_saved():
    service, attendance = _service()

    with pytest.raises(InvalidTimeWindow) as exc_info:
        service.record_check_in(1, AttendanceType.SUNDAY_SERVICE, now=datetime(2024, 1, 8, 10, 0))

    assert exc_info.value.attendance_type == AttendanceType.SUNDAY_SERVICE
    assert attendance.events == []


def test_record_check_in_for_unknown_worker():
    service, attendance = _service()

    with pytest.raises(WorkerNotFound):
        service.record_check_in(99, AttendanceType.SUNDAY_SERVICE, now=datetime(2024, 1, 7, 8, 45))
    assert attendance.events == []


def test_record_check_in_for_inactive_worker():
    service, _ = _service(make_worker(1, is_active=False))

    with pytest.raises(WorkerNotFound):
        service.record_check_in(1, AttendanceType.SPECIAL_SERVICE_MEETING, now=datetime(2024, 1, 9, 12, 0))


def test_mark_from_qr_uses_worker_number_from_payload():
    service, attendance = _service(make_worker(1), make_worker(2, worker_number="KID-002"))

    event = service.mark_from_qr("KID-002 Grace2 Ade", now=datetime(2024, 1, 7, 10, 0))

    assert event.worker_id == 2
    assert event.type == AttendanceType.SUNDAY_SERVICE
    assert attendance.events[0].worker_id == 2


def test_mark_from_qr_rejects_blank_payload():
    service, _ = _service()

    with pytest.raises(ValidationError, match="QR code data is required"):
        service.mark_from_qr("   ")


def test_mark_from_qr_unknown_number():
    service, _ = _service()

    with pytest.raises(WorkerNotFound):
        service.mark_from_qr("GEN-404 Nobody Here", now=datetime(2024, 1, 7, 10, 0))


def test_history_is_most_recent_first_and_limited():
    service, _ = _service()
    for day in (7, 14, 21):
        service.record_check_in(1, AttendanceType.SUNDAY_SERVICE, now=datetime(2024, 1, day, 8, 30))

    history = service.get_history(1, limit=2)

    assert [e.check_in_time.day for e in history] == [21, 14]
