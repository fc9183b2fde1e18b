"""Doctor schemas."""

from pydantic import Field

from medrecords.schemas.base import Entity


class Doctor(Entity):
    """Doctor record."""

    name: str = Field(..., min_length=1, max_length=100)
    specialization: str | None = Field(None, max_length=100)
    department_id: int | None = None


class DoctorDetail(Doctor):
    """Doctor joined with its department name, for display."""

    department_name: str | None = None
