"""Prescription tables using SQLAlchemy Core."""

from sqlalchemy import Column, Date, ForeignKey, Integer, String, Table

from medrecords.models.base import metadata

prescriptions = Table(
    "prescriptions",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("patient_id", Integer, ForeignKey("patients.id"), nullable=False, index=True),
    Column("doctor_id", Integer, ForeignKey("doctors.id"), nullable=False, index=True),
    Column("prescription_date", Date, nullable=False, index=True),
)

prescription_items = Table(
    "prescription_items",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column(
        "prescription_id",
        Integer,
        ForeignKey("prescriptions.id"),
        nullable=False,
        index=True,
    ),
    Column("med_id", Integer, ForeignKey("medical_inventory.id"), nullable=False),
    Column("dosage", String(255)),
)
