"""Database engine, schema creation and connectivity check."""

from typing import Any

import structlog
from sqlalchemy import create_engine, event, pool, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from medrecords.config import Settings
from medrecords.models import metadata

logger = structlog.get_logger()


def create_engine_from_settings(settings: Settings) -> Engine:
    """
    Build the engine behind the connection pool.

    SQLAlchemy's own pooling is disabled; ``ConnectionPool`` owns reuse.

    Args:
        settings: Application settings

    Returns:
        Engine that opens a fresh DBAPI connection per connect()
    """
    connect_args: dict[str, Any] = {}
    if settings.is_sqlite:
        connect_args["check_same_thread"] = False

    engine = create_engine(
        settings.database_url,
        echo=settings.debug,
        poolclass=pool.NullPool,
        connect_args=connect_args,
    )

    if settings.is_sqlite:

        @event.listens_for(engine, "connect")
        def set_sqlite_pragma(dbapi_conn: Any, connection_record: Any) -> None:
            """Enforce foreign keys on every SQLite connection."""
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


def init_schema(engine: Engine) -> None:
    """Create every table that does not exist yet."""
    metadata.create_all(engine)
    logger.info("database_schema_ready", tables=sorted(metadata.tables))


def check_database_connection(engine: Engine) -> bool:
    """Check if database connection is healthy."""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError as e:
        logger.error("database_connection_failed", error=str(e))
        return False
