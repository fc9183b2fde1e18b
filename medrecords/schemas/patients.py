"""Patient schemas."""

from datetime import date

from pydantic import Field, field_validator

from medrecords.schemas.base import Entity


class Patient(Entity):
    """Patient record."""

    name: str = Field(..., min_length=1, max_length=100)
    date_of_birth: date
    contact: str | None = Field(None, max_length=50)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        """Trim surrounding whitespace from the name."""
        v = v.strip()
        if not v:
            raise ValueError("Name must not be blank")
        return v

    @field_validator("contact")
    @classmethod
    def normalize_contact(cls, v: str | None) -> str | None:
        """Treat a blank contact number as absent."""
        if v is None:
            return None
        v = v.strip()
        return v or None
