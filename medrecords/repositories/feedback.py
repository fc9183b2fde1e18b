"""Patient feedback store."""

from sqlalchemy import func, select

from medrecords.models.feedback import patient_feedback
from medrecords.repositories.base import RecordStore
from medrecords.schemas.feedback import PatientFeedback


class FeedbackStore(RecordStore[PatientFeedback]):
    """Patient feedback, newest first."""

    table = patient_feedback
    entity = PatientFeedback
    label = "feedback entry"
    ordering = (patient_feedback.c.id.desc(),)
    search_columns = ("comments",)

    def get_by_patient(self, patient_id: int) -> list[PatientFeedback]:
        """Get feedback left by a patient."""
        return self._where(patient_feedback.c.patient_id == patient_id, operation="get_by_patient")

    def get_by_doctor(self, doctor_id: int) -> list[PatientFeedback]:
        """Get feedback about a doctor."""
        return self._where(patient_feedback.c.doctor_id == doctor_id, operation="get_by_doctor")

    def get_by_rating(self, rating: int) -> list[PatientFeedback]:
        """Get feedback with an exact rating."""
        return self._where(patient_feedback.c.rating == rating, operation="get_by_rating")

    def average_rating_for_doctor(self, doctor_id: int) -> float:
        """Average rating of a doctor, 0.0 when there is no feedback."""
        stmt = select(func.avg(patient_feedback.c.rating)).where(
            patient_feedback.c.doctor_id == doctor_id
        )
        average = self._scalar(stmt, "average_rating_for_doctor")
        return float(average) if average is not None else 0.0
