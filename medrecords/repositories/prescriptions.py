"""Prescription and prescription item stores."""

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError

from medrecords.models.prescriptions import prescription_items, prescriptions
from medrecords.repositories.base import RecordStore
from medrecords.schemas.prescriptions import Prescription, PrescriptionItem


class PrescriptionStore(RecordStore[Prescription]):
    """Prescriptions, most recent first."""

    table = prescriptions
    entity = Prescription
    label = "prescription"
    ordering = (prescriptions.c.prescription_date.desc(),)

    def get_by_patient(self, patient_id: int) -> list[Prescription]:
        """Get a patient's prescriptions."""
        return self._where(prescriptions.c.patient_id == patient_id, operation="get_by_patient")

    def get_by_doctor(self, doctor_id: int) -> list[Prescription]:
        """Get prescriptions written by a doctor."""
        return self._where(prescriptions.c.doctor_id == doctor_id, operation="get_by_doctor")


class PrescriptionItemStore(RecordStore[PrescriptionItem]):
    """Medication lines of prescriptions."""

    table = prescription_items
    entity = PrescriptionItem
    label = "prescription item"
    search_columns = ("dosage",)

    def get_by_prescription(self, prescription_id: int) -> list[PrescriptionItem]:
        """Get the lines of one prescription."""
        return self._where(
            prescription_items.c.prescription_id == prescription_id,
            operation="get_by_prescription",
        )

    def get_by_medication(self, med_id: int) -> list[PrescriptionItem]:
        """Get every line prescribing a medication."""
        return self._where(prescription_items.c.med_id == med_id, operation="get_by_medication")

    def delete_by_prescription(self, prescription_id: int) -> bool:
        """Delete all lines of one prescription."""
        stmt = delete(prescription_items).where(
            prescription_items.c.prescription_id == prescription_id
        )
        try:
            with self.pool.connection() as conn, conn.begin():
                conn.execute(stmt)
        except SQLAlchemyError as e:
            self._fail("delete_by_prescription", e, prescription_id=prescription_id)
            return False
        return True
