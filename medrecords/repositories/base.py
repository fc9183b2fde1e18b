"""Generic record store over a pooled relational backing store."""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Generic, TypeVar

import structlog
from sqlalchemy import Table, and_, cast, delete, func, insert, or_, select, update
from sqlalchemy.engine import Connection
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.sql import ColumnElement, Select
from sqlalchemy.types import String

from medrecords.core.exceptions import DuplicateEntry, OperationFailed
from medrecords.core.pool import ConnectionPool
from medrecords.schemas.base import Entity

T = TypeVar("T", bound=Entity)

logger = structlog.get_logger()


@dataclass(frozen=True)
class UniqueRule:
    """A uniqueness invariant owned by a store.

    ``columns`` name both the table columns and the entity attributes.
    ``constraint`` is the backing-store constraint enforcing the same rule,
    used to attribute integrity errors raised by the driver.
    """

    field: str
    label: str
    constraint: str
    columns: tuple[str, ...]
    describe: Callable[[Any], str]


class RecordStore(Generic[T]):
    """
    CRUD and search for one entity type.

    Subclasses set the table, the entity model and the ordering; every
    operation borrows a connection from the pool for its own duration only.
    Write failures are logged and reported as ``None``/``False``; read
    failures raise ``OperationFailed``.
    """

    table: ClassVar[Table]
    entity: ClassVar[type[Entity]]
    label: ClassVar[str] = "record"
    ordering: ClassVar[Sequence[ColumnElement[Any]]] = ()
    search_columns: ClassVar[tuple[str, ...]] = ()
    unique_rules: ClassVar[tuple[UniqueRule, ...]] = ()

    def __init__(self, pool: ConnectionPool):
        """Initialize store with the shared connection pool."""
        self.pool = pool

    @property
    def name(self) -> str:
        """Table name, used in log events."""
        return self.table.name

    # ------------------------------------------------------------------
    # Row mapping
    # ------------------------------------------------------------------

    def _to_entity(self, row: Any, model: type[Entity] | None = None) -> T:
        model = model or self.entity
        return model.model_validate(dict(row._mapping))  # type: ignore[return-value]

    def _values(self, entity: T) -> dict[str, Any]:
        values: dict[str, Any] = {}
        for key, value in entity.model_dump(exclude={"id"}).items():
            if key not in self.table.c:
                continue
            values[key] = value.value if isinstance(value, Enum) else value
        return values

    def _select(self) -> Select[Any]:
        return select(self.table).order_by(*self.ordering, self.table.c.id)

    # ------------------------------------------------------------------
    # Execution helpers
    # ------------------------------------------------------------------

    def _fail(self, operation: str, error: Exception, **context: Any) -> None:
        logger.error(
            "store_operation_failed",
            store=self.name,
            operation=operation,
            error=str(error),
            **context,
        )

    def _fetch(self, stmt: Select[Any], operation: str, model: type[Entity] | None = None) -> list:
        try:
            with self.pool.connection() as conn:
                rows = conn.execute(stmt).fetchall()
        except SQLAlchemyError as e:
            self._fail(operation, e)
            raise OperationFailed(f"Could not load {self.label} records") from e
        return [self._to_entity(row, model) for row in rows]

    def _scalar(self, stmt: Select[Any], operation: str) -> Any:
        try:
            with self.pool.connection() as conn:
                return conn.execute(stmt).scalar()
        except SQLAlchemyError as e:
            self._fail(operation, e)
            raise OperationFailed(f"Could not query {self.label} records") from e

    def _where(self, *conditions: ColumnElement[bool], operation: str) -> list[T]:
        return self._fetch(self._select().where(*conditions), operation)

    # ------------------------------------------------------------------
    # Uniqueness
    # ------------------------------------------------------------------

    def _duplicate(self, rule: UniqueRule, entity: T) -> DuplicateEntry:
        value = rule.describe(entity)
        return DuplicateEntry(
            rule.field,
            value,
            f"A {self.label} with {rule.label} '{value}' already exists.",
        )

    def _exists(
        self,
        conn: Connection,
        values: dict[str, Any],
        exclude_id: int,
    ) -> bool:
        conditions = [self.table.c[column] == value for column, value in values.items()]
        stmt = (
            select(func.count())
            .select_from(self.table)
            .where(and_(*conditions), self.table.c.id != exclude_id)
        )
        return (conn.execute(stmt).scalar() or 0) > 0

    def _check_unique(self, conn: Connection, entity: T, exclude_id: int) -> None:
        row = self._values(entity)
        for rule in self.unique_rules:
            values = {column: row[column] for column in rule.columns}
            if any(value is None for value in values.values()):
                # NULL never collides
                continue
            if self._exists(conn, values, exclude_id):
                raise self._duplicate(rule, entity)

    def _match_integrity_error(self, error: IntegrityError, entity: T) -> DuplicateEntry | None:
        """Attribute a driver-level integrity error to one of the unique rules."""
        message = str(error.orig).lower()
        for rule in self.unique_rules:
            if rule.constraint.lower() in message:
                return self._duplicate(rule, entity)
            qualified = [f"{self.table.name}.{column}".lower() for column in rule.columns]
            if all(name in message for name in qualified):
                return self._duplicate(rule, entity)
        if "unique" in message or "duplicate" in message:
            return DuplicateEntry(
                "unknown",
                "",
                f"Duplicate entry detected. This {self.label} may already exist.",
            )
        return None

    def _raise_if_duplicate(self, operation: str, error: IntegrityError, entity: T) -> None:
        duplicate = self._match_integrity_error(error, entity)
        if duplicate is None:
            self._fail(operation, error)
            return
        logger.info(
            "duplicate_entry_rejected",
            store=self.name,
            field=duplicate.field,
            source="constraint",
        )
        raise duplicate from error

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_all(self) -> list[T]:
        """Full scan in the store's display order."""
        return self._fetch(self._select(), "get_all")

    def get_by_id(self, entity_id: int) -> T | None:
        """Get a record by id."""
        found = self._where(self.table.c.id == entity_id, operation="get_by_id")
        return found[0] if found else None

    def search(self, query: str) -> list[T]:
        """
        Case-insensitive substring search over the id and text columns.

        Args:
            query: Search string, trimmed; empty matches every record

        Returns:
            Matching records in display order
        """
        query = query.strip()
        if not query:
            return self.get_all()
        conditions = [cast(self.table.c.id, String).icontains(query, autoescape=True)]
        conditions.extend(
            self.table.c[column].icontains(query, autoescape=True)
            for column in self.search_columns
        )
        return self._where(or_(*conditions), operation="search")

    def count(self) -> int:
        """Number of stored records."""
        stmt = select(func.count()).select_from(self.table)
        return int(self._scalar(stmt, "count") or 0)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def add(self, entity: T) -> T | None:
        """
        Insert a new record.

        Unique rules are checked and the row inserted in one transaction;
        the backing store's constraints catch anything that slips between.

        Returns:
            The entity carrying its generated id, or None on storage failure

        Raises:
            DuplicateEntry: If a unique rule is violated
        """
        values = self._values(entity)
        try:
            with self.pool.connection() as conn, conn.begin():
                self._check_unique(conn, entity, exclude_id=-1)
                result = conn.execute(insert(self.table).values(**values))
                new_id = result.inserted_primary_key[0]
        except IntegrityError as e:
            self._raise_if_duplicate("add", e, entity)
            return None
        except SQLAlchemyError as e:
            self._fail("add", e)
            return None

        logger.info("record_created", store=self.name, id=new_id)
        return entity.with_id(new_id)

    def update(self, entity: T) -> bool:
        """
        Replace every mutable field of a stored record.

        Unique rules are re-checked against every other record.

        Returns:
            True if a row was updated

        Raises:
            DuplicateEntry: If the new values collide with another record
        """
        if not entity.is_persisted:
            logger.warning("update_without_id", store=self.name)
            return False

        values = self._values(entity)
        try:
            with self.pool.connection() as conn, conn.begin():
                self._check_unique(conn, entity, exclude_id=entity.id)
                result = conn.execute(
                    update(self.table).where(self.table.c.id == entity.id).values(**values)
                )
                updated = result.rowcount > 0
        except IntegrityError as e:
            self._raise_if_duplicate("update", e, entity)
            return False
        except SQLAlchemyError as e:
            self._fail("update", e, id=entity.id)
            return False

        if updated:
            logger.info("record_updated", store=self.name, id=entity.id)
        return updated

    def delete(self, entity_id: int) -> bool:
        """Delete a record by id."""
        try:
            with self.pool.connection() as conn, conn.begin():
                result = conn.execute(delete(self.table).where(self.table.c.id == entity_id))
                deleted = result.rowcount > 0
        except SQLAlchemyError as e:
            self._fail("delete", e, id=entity_id)
            return False

        if deleted:
            logger.info("record_deleted", store=self.name, id=entity_id)
        return deleted
