"""Patient feedback table model using SQLAlchemy Core."""

from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer, String, Table

from medrecords.models.base import metadata

patient_feedback = Table(
    "patient_feedback",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("patient_id", Integer, ForeignKey("patients.id"), nullable=False, index=True),
    Column("doctor_id", Integer, ForeignKey("doctors.id"), nullable=False, index=True),
    Column("rating", Integer),
    Column("comments", String(255)),
    CheckConstraint("rating BETWEEN 1 AND 5", name="patient_feedback_rating_check"),
)
