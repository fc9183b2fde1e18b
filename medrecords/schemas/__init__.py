"""Entity schemas."""

from medrecords.schemas.appointments import Appointment, AppointmentDetail, AppointmentStatus
from medrecords.schemas.base import Entity
from medrecords.schemas.departments import Department
from medrecords.schemas.doctors import Doctor, DoctorDetail
from medrecords.schemas.feedback import PatientFeedback
from medrecords.schemas.inventory import MedicalInventoryItem
from medrecords.schemas.patients import Patient
from medrecords.schemas.prescriptions import Prescription, PrescriptionItem

__all__ = [
    "Appointment",
    "AppointmentDetail",
    "AppointmentStatus",
    "Department",
    "Doctor",
    "DoctorDetail",
    "Entity",
    "MedicalInventoryItem",
    "Patient",
    "PatientFeedback",
    "Prescription",
    "PrescriptionItem",
]
