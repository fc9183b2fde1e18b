"""Custom application exceptions."""

from datetime import datetime


class AppException(Exception):
    """Base application exception."""

    def __init__(self, message: str):
        """Initialize exception with message."""
        self.message = message
        super().__init__(self.message)


class PoolError(AppException):
    """Base class for connection pool failures."""


class PoolExhausted(PoolError):
    """No connection became available within the acquire timeout."""

    def __init__(self, timeout: float):
        """Initialize with the timeout that elapsed."""
        self.timeout = timeout
        super().__init__(f"No database connection available within {timeout:g} seconds")


class PoolClosed(PoolError):
    """Acquire attempted after the pool was shut down."""

    def __init__(self, message: str = "Connection pool is shut down"):
        """Initialize with default message."""
        super().__init__(message)


class DuplicateEntry(AppException):
    """A uniqueness precondition was violated.

    Carries the logical field that collided and the offending value so the
    caller can render a field-specific message.
    """

    def __init__(self, field: str, value: str, message: str | None = None):
        """Initialize with the colliding field and value."""
        self.field = field
        self.value = value
        super().__init__(message or f"A record with {field} '{value}' already exists.")


class OperationFailed(AppException):
    """Generic store-level failure."""

    def __init__(self, message: str = "Operation failed"):
        """Initialize with default message."""
        super().__init__(message)


class ConflictDetected(AppException):
    """The doctor already has an appointment at the requested time."""

    def __init__(self, doctor_id: int, appointment_at: datetime):
        """Initialize with the booking-conflict key."""
        self.doctor_id = doctor_id
        self.appointment_at = appointment_at
        super().__init__(
            f"Doctor {doctor_id} already has an appointment at {appointment_at.isoformat()}"
        )
