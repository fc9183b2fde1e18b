"""Appointment record store and booking-conflict check."""

from datetime import datetime
from typing import Any

from sqlalchemy import func, select

from medrecords.models.appointments import appointments
from medrecords.models.doctors import doctors
from medrecords.models.patients import patients
from medrecords.repositories.base import RecordStore, UniqueRule
from medrecords.schemas.appointments import (
    Appointment,
    AppointmentDetail,
    AppointmentStatus,
    to_naive_utc,
)


class AppointmentStore(RecordStore[Appointment]):
    """Appointments, newest first."""

    table = appointments
    entity = Appointment
    label = "appointment"
    ordering = (appointments.c.appointment_at.desc(),)
    search_columns = ("status",)
    unique_rules = (
        UniqueRule(
            field="doctor_slot",
            label="doctor and time",
            constraint="uq_appointments_doctor_slot",
            columns=("doctor_id", "appointment_at"),
            describe=lambda a: f"{a.doctor_id} @ {a.appointment_at.isoformat()}",
        ),
    )

    def _values(self, entity: Appointment) -> dict[str, Any]:
        values = super()._values(entity)
        # Stored as naive UTC, including copies made without validation
        values["appointment_at"] = to_naive_utc(values["appointment_at"])
        return values

    def has_conflict(
        self,
        doctor_id: int,
        appointment_at: datetime,
        exclude_appointment_id: int = -1,
    ) -> bool:
        """
        Check the backing store for a booking in the same slot.

        Args:
            doctor_id: Doctor to check
            appointment_at: Exact timestamp of the booking
            exclude_appointment_id: Appointment being updated, or -1 for a new one

        Returns:
            True if another appointment holds this doctor at this time
        """
        stmt = (
            select(func.count())
            .select_from(appointments)
            .where(
                appointments.c.doctor_id == doctor_id,
                appointments.c.appointment_at == to_naive_utc(appointment_at),
                appointments.c.id != exclude_appointment_id,
            )
        )
        return (self._scalar(stmt, "has_conflict") or 0) > 0

    def get_by_patient(self, patient_id: int) -> list[Appointment]:
        """Get a patient's appointments."""
        return self._where(appointments.c.patient_id == patient_id, operation="get_by_patient")

    def get_by_doctor(self, doctor_id: int) -> list[Appointment]:
        """Get a doctor's appointments."""
        return self._where(appointments.c.doctor_id == doctor_id, operation="get_by_doctor")

    def get_by_status(self, status: AppointmentStatus) -> list[Appointment]:
        """Get appointments with the given status."""
        return self._where(appointments.c.status == status.value, operation="get_by_status")

    def get_all_with_names(self) -> list[AppointmentDetail]:
        """Get all appointments with patient and doctor names."""
        stmt = (
            select(
                appointments,
                patients.c.name.label("patient_name"),
                doctors.c.name.label("doctor_name"),
            )
            .select_from(
                appointments.join(patients, appointments.c.patient_id == patients.c.id).join(
                    doctors, appointments.c.doctor_id == doctors.c.id
                )
            )
            .order_by(*self.ordering, appointments.c.id)
        )
        return self._fetch(stmt, "get_all_with_names", AppointmentDetail)
