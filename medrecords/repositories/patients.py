"""Patient record store."""

from datetime import date

from sqlalchemy import func, select

from medrecords.core.pool import ConnectionPool
from medrecords.models.patients import patients
from medrecords.repositories.base import RecordStore, UniqueRule
from medrecords.repositories.cascade import PatientCascadeDeleter
from medrecords.schemas.patients import Patient


class PatientStore(RecordStore[Patient]):
    """Patients, unique by contact number and by name plus date of birth."""

    table = patients
    entity = Patient
    label = "patient"
    ordering = (patients.c.name,)
    search_columns = ("name",)
    unique_rules = (
        UniqueRule(
            field="contact",
            label="contact number",
            constraint="uq_patients_contact",
            columns=("contact",),
            describe=lambda p: p.contact or "",
        ),
        UniqueRule(
            field="name_and_dob",
            label="name and date of birth",
            constraint="uq_patients_name_dob",
            columns=("name", "date_of_birth"),
            describe=lambda p: f"{p.name} / {p.date_of_birth.isoformat()}",
        ),
    )

    def __init__(self, pool: ConnectionPool, cascade: PatientCascadeDeleter | None = None):
        """Initialize store; deletes go through the cascade deleter."""
        super().__init__(pool)
        self.cascade = cascade or PatientCascadeDeleter(pool)

    def contact_exists(self, contact: str | None, exclude_id: int = -1) -> bool:
        """Check whether another patient already uses this contact number."""
        if contact is None or not contact.strip():
            return False
        stmt = (
            select(func.count())
            .select_from(patients)
            .where(patients.c.contact == contact.strip(), patients.c.id != exclude_id)
        )
        return (self._scalar(stmt, "contact_exists") or 0) > 0

    def name_and_dob_exists(self, name: str, date_of_birth: date, exclude_id: int = -1) -> bool:
        """Check whether another patient has the same name and date of birth."""
        stmt = (
            select(func.count())
            .select_from(patients)
            .where(
                patients.c.name == name.strip(),
                patients.c.date_of_birth == date_of_birth,
                patients.c.id != exclude_id,
            )
        )
        return (self._scalar(stmt, "name_and_dob_exists") or 0) > 0

    def delete(self, entity_id: int) -> bool:
        """Delete a patient and everything that depends on it, atomically."""
        return self.cascade.delete(entity_id)
