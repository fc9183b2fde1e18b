"""Prescription schemas."""

from datetime import date

from pydantic import Field

from medrecords.schemas.base import Entity


class Prescription(Entity):
    """Prescription issued by a doctor to a patient."""

    patient_id: int = Field(..., gt=0)
    doctor_id: int = Field(..., gt=0)
    prescription_date: date


class PrescriptionItem(Entity):
    """One medication line of a prescription."""

    prescription_id: int = Field(..., gt=0)
    med_id: int = Field(..., gt=0)
    dosage: str | None = Field(None, max_length=255)
