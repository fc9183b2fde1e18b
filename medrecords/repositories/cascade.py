"""All-or-nothing removal of a patient and the records that depend on it."""

from collections.abc import Callable

import structlog
from sqlalchemy import delete, select
from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError

from medrecords.core.pool import ConnectionPool
from medrecords.models.appointments import appointments
from medrecords.models.feedback import patient_feedback
from medrecords.models.patients import patients
from medrecords.models.prescriptions import prescription_items, prescriptions

logger = structlog.get_logger()

Step = Callable[[Connection, int], int]


class PatientCascadeDeleter:
    """Delete a patient together with its prescriptions, appointments and feedback."""

    def __init__(self, pool: ConnectionPool):
        """Initialize with the shared connection pool."""
        self.pool = pool

    def _delete_prescription_items(self, conn: Connection, patient_id: int) -> int:
        owned = select(prescriptions.c.id).where(prescriptions.c.patient_id == patient_id)
        stmt = delete(prescription_items).where(prescription_items.c.prescription_id.in_(owned))
        return conn.execute(stmt).rowcount

    def _delete_prescriptions(self, conn: Connection, patient_id: int) -> int:
        stmt = delete(prescriptions).where(prescriptions.c.patient_id == patient_id)
        return conn.execute(stmt).rowcount

    def _delete_appointments(self, conn: Connection, patient_id: int) -> int:
        stmt = delete(appointments).where(appointments.c.patient_id == patient_id)
        return conn.execute(stmt).rowcount

    def _delete_feedback(self, conn: Connection, patient_id: int) -> int:
        stmt = delete(patient_feedback).where(patient_feedback.c.patient_id == patient_id)
        return conn.execute(stmt).rowcount

    def _delete_patient(self, conn: Connection, patient_id: int) -> int:
        stmt = delete(patients).where(patients.c.id == patient_id)
        return conn.execute(stmt).rowcount

    def steps(self) -> list[tuple[str, Step]]:
        """Deletion steps, grandchildren first and the patient row last."""
        return [
            ("prescription_items", self._delete_prescription_items),
            ("prescriptions", self._delete_prescriptions),
            ("appointments", self._delete_appointments),
            ("feedback", self._delete_feedback),
            ("patient", self._delete_patient),
        ]

    def delete(self, patient_id: int) -> bool:
        """
        Run every step in one transaction.

        Args:
            patient_id: Patient to remove

        Returns:
            True only if every step completed and the patient row existed;
            otherwise nothing is deleted
        """
        deleted: dict[str, int] = {}
        try:
            with self.pool.connection() as conn:
                trans = conn.begin()
                try:
                    for name, step in self.steps():
                        deleted[name] = step(conn, patient_id)
                except BaseException:
                    trans.rollback()
                    raise

                if deleted["patient"] == 0:
                    trans.rollback()
                    logger.info("cascade_delete_patient_not_found", patient_id=patient_id)
                    return False

                trans.commit()
        except SQLAlchemyError as e:
            logger.error(
                "cascade_delete_rolled_back",
                patient_id=patient_id,
                completed_steps=list(deleted),
                error=str(e),
            )
            return False

        logger.info("cascade_delete_completed", patient_id=patient_id, deleted=deleted)
        return True
