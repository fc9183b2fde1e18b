"""In-process full-snapshot cache with whole-snapshot invalidation."""

import threading
import time
from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Generic, TypeVar

import structlog

T = TypeVar("T")

logger = structlog.get_logger()


@dataclass(frozen=True)
class Snapshot(Generic[T]):
    """Map and ordered list built from the same reload."""

    by_id: dict[int, T] = field(default_factory=dict)
    items: tuple[T, ...] = ()
    generation: int = 0


class SnapshotCache(Generic[T]):
    """
    Read-through cache of a whole entity collection.

    The snapshot is rebuilt from ``loader`` whenever a read observes the
    dirty flag. Writers never patch the snapshot; they call ``invalidate()``
    and the next read reloads. All state changes happen under one re-entrant
    lock, so a reload, a snapshot read and a write-then-invalidate never
    interleave.
    """

    def __init__(self, name: str, loader: Callable[[], Sequence[T]], key: Callable[[T], int]):
        """
        Initialize an empty, dirty cache.

        Args:
            name: Label used in log events
            loader: Fetches the full ordered collection from the store
            key: Extracts the id of an entity
        """
        self.name = name
        self._loader = loader
        self._key = key
        self._lock = threading.RLock()
        self._snapshot: Snapshot[T] = Snapshot()
        self._dirty = True

    @property
    def is_dirty(self) -> bool:
        """Whether the next read will reload from the store."""
        return self._dirty

    @property
    def generation(self) -> int:
        """Number of completed reloads."""
        return self._snapshot.generation

    def invalidate(self) -> None:
        """Mark the snapshot stale without clearing it."""
        with self._lock:
            self._dirty = True

    @contextmanager
    def writing(self) -> Iterator[None]:
        """Hold the cache lock across a store write and its invalidation."""
        with self._lock:
            yield

    def _refresh(self) -> None:
        logger.debug("cache_refresh_started", cache=self.name)
        start = time.perf_counter()

        entities = list(self._loader())
        by_id = {self._key(entity): entity for entity in entities}

        # One assignment swaps map and list together
        self._snapshot = Snapshot(
            by_id=by_id,
            items=tuple(entities),
            generation=self._snapshot.generation + 1,
        )
        self._dirty = False

        logger.info(
            "cache_refreshed",
            cache=self.name,
            size=len(entities),
            duration_ms=round((time.perf_counter() - start) * 1000, 3),
        )

    def snapshot(self) -> Snapshot[T]:
        """Return the current snapshot, reloading first if dirty."""
        with self._lock:
            if self._dirty:
                self._refresh()
            return self._snapshot

    def all(self) -> list[T]:
        """Return a copy of the cached ordered list."""
        return list(self.snapshot().items)

    def get(self, entity_id: int) -> T | None:
        """Point lookup by id."""
        return self.snapshot().by_id.get(entity_id)

    def filter(self, predicate: Callable[[T], bool]) -> list[T]:
        """Return cached entities matching ``predicate``, in cached order."""
        return [entity for entity in self.snapshot().items if predicate(entity)]
