"""Medical inventory schemas."""

from datetime import date

from pydantic import Field

from medrecords.schemas.base import Entity


class MedicalInventoryItem(Entity):
    """Stocked medication."""

    name: str = Field(..., min_length=1, max_length=100)
    quantity: int = Field(default=0, ge=0)
    expiry_date: date | None = None
