"""Sample clinic data for fresh databases and tests."""

from datetime import date, datetime

import structlog

from medrecords.dependencies import Services
from medrecords.schemas import (
    Appointment,
    AppointmentStatus,
    Department,
    Doctor,
    MedicalInventoryItem,
    Patient,
    PatientFeedback,
    Prescription,
    PrescriptionItem,
)

logger = structlog.get_logger()

DEPARTMENTS = [
    Department(name="Cardiology", location="Building A, Floor 3"),
    Department(name="Neurology", location="Building A, Floor 2"),
    Department(name="Pediatrics", location="Building B, Floor 1"),
    Department(name="Orthopedics", location="Building C, Floor 1"),
]

# (name, specialization, index into DEPARTMENTS)
DOCTORS = [
    ("John Smith", "Cardiologist", 0),
    ("Emily Davis", "Neurologist", 1),
    ("Sarah Wilson", "Pediatrician", 2),
    ("Michael Brown", "Orthopedic Surgeon", 3),
]

PATIENTS = [
    Patient(name="Alice Johnson", date_of_birth=date(1985, 4, 12), contact="555-1001"),
    Patient(name="Bob Williams", date_of_birth=date(1990, 8, 23), contact="555-1002"),
    Patient(name="Charlie Miller", date_of_birth=date(1978, 11, 30), contact="555-1003"),
]

INVENTORY = [
    MedicalInventoryItem(name="Aspirin 100mg", quantity=500, expiry_date=date(2025, 12, 31)),
    MedicalInventoryItem(name="Amoxicillin 500mg", quantity=200, expiry_date=date(2024, 6, 30)),
    MedicalInventoryItem(name="Ibuprofen 200mg", quantity=400, expiry_date=date(2025, 10, 15)),
]


def _require(created, what: str):
    if created is None:
        raise RuntimeError(f"Could not insert sample {what}")
    return created


def load_sample_data(services: Services) -> dict[str, list[int]]:
    """
    Insert the sample clinic data through the stores and services.

    Args:
        services: Wired services over an empty schema

    Returns:
        Generated ids per entity kind, in insertion order
    """
    department_ids = [_require(services.departments.add(d), "department").id for d in DEPARTMENTS]
    doctor_ids = [
        _require(
            services.doctors.add(
                Doctor(
                    name=name,
                    specialization=specialization,
                    department_id=department_ids[department],
                )
            ),
            "doctor",
        ).id
        for name, specialization, department in DOCTORS
    ]
    patient_ids = [_require(services.patients.add(p), "patient").id for p in PATIENTS]
    med_ids = [_require(services.inventory.add(m), "inventory item").id for m in INVENTORY]

    appointment_ids = [
        _require(
            services.appointments.book(
                Appointment(
                    patient_id=patient_ids[0],
                    doctor_id=doctor_ids[0],
                    status=AppointmentStatus.COMPLETED,
                    appointment_at=datetime(2023, 11, 1, 9, 0),
                )
            ),
            "appointment",
        ).id,
        _require(
            services.appointments.book(
                Appointment(
                    patient_id=patient_ids[1],
                    doctor_id=doctor_ids[1],
                    appointment_at=datetime(2023, 11, 2, 10, 0),
                )
            ),
            "appointment",
        ).id,
    ]

    prescription = _require(
        services.prescriptions.add(
            Prescription(
                patient_id=patient_ids[0],
                doctor_id=doctor_ids[0],
                prescription_date=date(2023, 11, 1),
            )
        ),
        "prescription",
    )
    item = _require(
        services.prescription_items.add(
            PrescriptionItem(
                prescription_id=prescription.id, med_id=med_ids[0], dosage="1 tablet daily"
            )
        ),
        "prescription item",
    )
    feedback = _require(
        services.feedback.add(
            PatientFeedback(
                patient_id=patient_ids[0],
                doctor_id=doctor_ids[0],
                rating=5,
                comments="Dr. Smith was very professional.",
            )
        ),
        "feedback entry",
    )

    ids = {
        "departments": department_ids,
        "doctors": doctor_ids,
        "patients": patient_ids,
        "inventory": med_ids,
        "appointments": appointment_ids,
        "prescriptions": [prescription.id],
        "prescription_items": [item.id],
        "feedback": [feedback.id],
    }
    logger.info("sample_data_loaded", counts={kind: len(v) for kind, v in ids.items()})
    return ids
