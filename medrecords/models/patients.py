"""Patient model definition using SQLAlchemy Core."""

from sqlalchemy import Column, Date, Integer, String, Table, UniqueConstraint

from medrecords.models.base import metadata

patients = Table(
    "patients",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(100), nullable=False, index=True),
    Column("date_of_birth", Date, nullable=False, index=True),
    # Optional; NULL never collides
    Column("contact", String(50), nullable=True),
    # Constraints
    UniqueConstraint("contact", name="uq_patients_contact"),
    UniqueConstraint("name", "date_of_birth", name="uq_patients_name_dob"),
)
