"""Database models."""

from medrecords.models.appointments import appointments
from medrecords.models.base import metadata
from medrecords.models.departments import departments
from medrecords.models.doctors import doctors
from medrecords.models.feedback import patient_feedback
from medrecords.models.medical_inventory import medical_inventory
from medrecords.models.patients import patients
from medrecords.models.prescriptions import prescription_items, prescriptions

__all__ = [
    "appointments",
    "departments",
    "doctors",
    "medical_inventory",
    "metadata",
    "patient_feedback",
    "patients",
    "prescription_items",
    "prescriptions",
]
