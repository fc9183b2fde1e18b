"""Cache-backed services."""

from medrecords.services.appointments import AppointmentService
from medrecords.services.base import CachedRecordService
from medrecords.services.doctors import DoctorService
from medrecords.services.patients import PatientService

__all__ = [
    "AppointmentService",
    "CachedRecordService",
    "DoctorService",
    "PatientService",
]
