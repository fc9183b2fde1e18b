"""Record stores over the relational backing store."""

from medrecords.repositories.appointments import AppointmentStore
from medrecords.repositories.base import RecordStore, UniqueRule
from medrecords.repositories.cascade import PatientCascadeDeleter
from medrecords.repositories.departments import DepartmentStore
from medrecords.repositories.doctors import DoctorStore
from medrecords.repositories.feedback import FeedbackStore
from medrecords.repositories.inventory import InventoryStore
from medrecords.repositories.patients import PatientStore
from medrecords.repositories.prescriptions import PrescriptionItemStore, PrescriptionStore

__all__ = [
    "AppointmentStore",
    "DepartmentStore",
    "DoctorStore",
    "FeedbackStore",
    "InventoryStore",
    "PatientCascadeDeleter",
    "PatientStore",
    "PrescriptionItemStore",
    "PrescriptionStore",
    "RecordStore",
    "UniqueRule",
]
