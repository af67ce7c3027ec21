class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidTimeWindow(ValidationError):
    """Raised when a check-in falls outside the allowed day/time for its type."""

    def __init__(self, attendance_type, message: str):
        super().__init__(message)
        self.attendance_type = attendance_type


class WorkerNotFound(DomainError):
    """Raised when an operation targets an unknown (or inactive) worker."""

    def __init__(self, worker_ref):
        super().__init__(f"Worker {worker_ref} was not found")
        self.worker_ref = worker_ref


class NotificationFailure(DomainError):
    """Raised by notifiers when a message could not be delivered."""


class StoreFailure(DomainError):
    """Raised when the backing store cannot be read or written."""


class DuplicateRecord(StoreFailure):
    """Raised when a write violates a unique key (e.g. one reward per worker per period)."""
