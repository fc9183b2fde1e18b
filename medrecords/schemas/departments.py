"""Department schemas."""

from pydantic import Field

from medrecords.schemas.base import Entity


class Department(Entity):
    """Hospital department."""

    name: str = Field(..., min_length=1, max_length=100)
    location: str | None = Field(None, max_length=100)
