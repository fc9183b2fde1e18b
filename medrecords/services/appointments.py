"""Appointment service."""

from datetime import datetime

import structlog

from medrecords.core.exceptions import ConflictDetected
from medrecords.repositories.appointments import AppointmentStore
from medrecords.schemas.appointments import Appointment, AppointmentStatus
from medrecords.services.base import CachedRecordService

logger = structlog.get_logger()


class AppointmentService(CachedRecordService[Appointment]):
    """Cached appointments with a store-backed booking-conflict check."""

    text_fields = ("status",)

    def __init__(self, store: AppointmentStore):
        """Initialize service with the appointment store."""
        super().__init__(store)
        self.appointments = store

    def has_conflict(
        self,
        doctor_id: int,
        appointment_at: datetime,
        exclude_appointment_id: int = -1,
    ) -> bool:
        """Check for a booking in the same slot; always queries the store."""
        return self.appointments.has_conflict(doctor_id, appointment_at, exclude_appointment_id)

    def book(self, appointment: Appointment) -> Appointment | None:
        """
        Insert an appointment unless the doctor is already booked.

        Args:
            appointment: New appointment

        Returns:
            The persisted appointment, or None if the store failed

        Raises:
            ConflictDetected: If the doctor already has an appointment at that time
        """
        if self.has_conflict(appointment.doctor_id, appointment.appointment_at):
            logger.info(
                "appointment_conflict_detected",
                doctor_id=appointment.doctor_id,
                appointment_at=appointment.appointment_at.isoformat(),
            )
            raise ConflictDetected(appointment.doctor_id, appointment.appointment_at)
        return self.add(appointment)

    def get_by_patient(self, patient_id: int) -> list[Appointment]:
        """Get a patient's appointments from the cache."""
        return self.cache.filter(lambda a: a.patient_id == patient_id)

    def get_by_doctor(self, doctor_id: int) -> list[Appointment]:
        """Get a doctor's appointments from the cache."""
        return self.cache.filter(lambda a: a.doctor_id == doctor_id)

    def get_by_status(self, status: AppointmentStatus) -> list[Appointment]:
        """Get appointments with the given status from the cache."""
        return self.cache.filter(lambda a: a.status == status)
