"""Cache-backed service shared by patients, doctors and appointments."""

from enum import Enum
from typing import ClassVar, Generic, TypeVar

from medrecords.core.cache import SnapshotCache
from medrecords.repositories.base import RecordStore
from medrecords.schemas.base import Entity

T = TypeVar("T", bound=Entity)


class CachedRecordService(Generic[T]):
    """
    Read-through cache over a record store.

    Reads are served from a full snapshot that is reloaded lazily after any
    write. Writes go to the store and, on success, mark the snapshot dirty;
    the snapshot itself is never patched.
    """

    text_fields: ClassVar[tuple[str, ...]] = ()

    def __init__(self, store: RecordStore[T]):
        """Initialize service with its record store and an empty cache."""
        self.store = store
        self.cache: SnapshotCache[T] = SnapshotCache(
            store.name,
            loader=store.get_all,
            key=lambda entity: entity.id,
        )

    @property
    def is_dirty(self) -> bool:
        """Whether the next read reloads from the store."""
        return self.cache.is_dirty

    def invalidate(self) -> None:
        """Force the next read to reload."""
        self.cache.invalidate()

    def get_all(self) -> list[T]:
        """Get every record, in display order."""
        return self.cache.all()

    def get_by_id(self, entity_id: int) -> T | None:
        """Get a record by id from the cache."""
        return self.cache.get(entity_id)

    def _matches(self, entity: T, needle: str) -> bool:
        if needle in str(entity.id):
            return True
        for field in self.text_fields:
            value = getattr(entity, field)
            if value is None:
                continue
            text = value.value if isinstance(value, Enum) else str(value)
            if needle in text.lower():
                return True
        return False

    def search(self, query: str) -> list[T]:
        """
        Filter the cached records in memory.

        Args:
            query: Case-insensitive substring matched against the id and the
                service's text fields; empty returns everything

        Returns:
            Matching records in display order
        """
        needle = query.strip().lower()
        if not needle:
            return self.get_all()
        return self.cache.filter(lambda entity: self._matches(entity, needle))

    def add(self, entity: T) -> T | None:
        """
        Insert a record through the store.

        Returns:
            The persisted entity, or None if the store failed

        Raises:
            DuplicateEntry: If a uniqueness rule is violated
        """
        with self.cache.writing():
            created = self.store.add(entity)
            if created is not None:
                self.cache.invalidate()
        return created

    def update(self, entity: T) -> bool:
        """Update a record through the store; True on success."""
        with self.cache.writing():
            updated = self.store.update(entity)
            if updated:
                self.cache.invalidate()
        return updated

    def delete(self, entity_id: int) -> bool:
        """Delete a record through the store; True on success."""
        with self.cache.writing():
            deleted = self.store.delete(entity_id)
            if deleted:
                self.cache.invalidate()
        return deleted
