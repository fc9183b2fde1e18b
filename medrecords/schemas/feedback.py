"""Patient feedback schemas."""

from pydantic import Field

from medrecords.schemas.base import Entity


class PatientFeedback(Entity):
    """Feedback left by a patient about a doctor."""

    patient_id: int = Field(..., gt=0)
    doctor_id: int = Field(..., gt=0)
    rating: int = Field(..., ge=1, le=5)
    comments: str | None = Field(None, max_length=255)
