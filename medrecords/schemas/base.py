"""Base schema shared by every stored entity."""

from typing import Self

from pydantic import BaseModel, ConfigDict, Field


class Entity(BaseModel):
    """
    Immutable record with a store-assigned integer id.

    An id of 0 means the record has not been persisted yet. Entities are
    frozen so instances held by a cache can be handed out without copying.
    """

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: int = Field(default=0, ge=0)

    @property
    def is_persisted(self) -> bool:
        """Whether the backing store has assigned an id."""
        return self.id > 0

    def with_id(self, entity_id: int) -> Self:
        """Return a copy carrying the given id."""
        return self.model_copy(update={"id": entity_id})
