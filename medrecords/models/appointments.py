"""Appointments table model using SQLAlchemy Core."""

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Table,
    UniqueConstraint,
)

from medrecords.models.base import metadata

appointments = Table(
    "appointments",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    # Ownership / references
    Column("patient_id", Integer, ForeignKey("patients.id"), nullable=False, index=True),
    Column("doctor_id", Integer, ForeignKey("doctors.id"), nullable=False),
    # Appointment details
    Column("status", String(50), nullable=False, server_default="Scheduled", index=True),
    Column("appointment_at", DateTime, nullable=False, index=True),
    # Constraints
    CheckConstraint(
        "status IN ('Scheduled', 'Completed', 'Cancelled')",
        name="appointments_status_check",
    ),
    # One booking per doctor per timestamp, backing the application-level check
    UniqueConstraint("doctor_id", "appointment_at", name="uq_appointments_doctor_slot"),
)
