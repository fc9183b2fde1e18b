"""Appointment schemas."""

from datetime import UTC, datetime
from enum import Enum

from pydantic import Field, field_validator

from medrecords.schemas.base import Entity


def to_naive_utc(value: datetime) -> datetime:
    """Convert an aware timestamp to naive UTC; naive values are kept as-is."""
    if value.tzinfo is None:
        return value
    return value.astimezone(UTC).replace(tzinfo=None)


class AppointmentStatus(str, Enum):
    """Appointment status enumeration."""

    SCHEDULED = "Scheduled"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class Appointment(Entity):
    """Appointment between a patient and a doctor at a point in time.

    ``appointment_at`` is stored as naive UTC; aware values are converted on
    construction so the booking key compares instants, not wall-clock times.
    """

    patient_id: int = Field(..., gt=0)
    doctor_id: int = Field(..., gt=0)
    status: AppointmentStatus = AppointmentStatus.SCHEDULED
    appointment_at: datetime

    @field_validator("appointment_at")
    @classmethod
    def normalize_appointment_at(cls, v: datetime) -> datetime:
        """Store aware timestamps as naive UTC."""
        return to_naive_utc(v)


class AppointmentDetail(Appointment):
    """Appointment joined with patient and doctor names, for display."""

    patient_name: str
    doctor_name: str
