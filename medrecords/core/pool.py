"""Bounded connection pool over a SQLAlchemy engine."""

import threading
import time
from collections import deque
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import structlog
from sqlalchemy import text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from medrecords.core.exceptions import PoolClosed, PoolExhausted

logger = structlog.get_logger()


class ConnectionPool:
    """Thread-safe pool of reusable backing-store connections.

    The engine is expected to be built with ``NullPool`` so that this pool is
    the only pooling layer. Every connection is in exactly one of three
    states: available, in use, or discarded. Connections being opened count
    toward the maximum so the bound holds across concurrent callers.
    """

    def __init__(
        self,
        engine: Engine,
        initial_size: int = 5,
        max_size: int = 10,
        timeout: float = 30.0,
    ):
        """
        Initialize the pool and open the initial connections.

        Args:
            engine: Engine used to open new connections
            initial_size: Connections opened eagerly (clamped to max_size)
            max_size: Upper bound on live connections
            timeout: Seconds acquire() waits before giving up
        """
        if max_size < 1:
            raise ValueError("max_size must be at least 1")

        self.engine = engine
        self.max_size = max_size
        self.timeout = timeout

        self._cond = threading.Condition()
        self._available: deque[Connection] = deque()
        self._in_use: set[Connection] = set()
        self._opening = 0
        self._closed = False

        for _ in range(min(initial_size, max_size)):
            self._available.append(self._open())

        logger.info(
            "connection_pool_initialized",
            initial_size=len(self._available),
            max_size=max_size,
        )

    @property
    def closed(self) -> bool:
        """Whether shutdown() has been called."""
        return self._closed

    def _total(self) -> int:
        return len(self._available) + len(self._in_use) + self._opening

    def _open(self) -> Connection:
        try:
            return self.engine.connect()
        except SQLAlchemyError as e:
            logger.error("connection_open_failed", error=str(e))
            raise

    @staticmethod
    def _close_quietly(conn: Connection) -> None:
        try:
            conn.close()
        except SQLAlchemyError as e:
            logger.warning("connection_close_failed", error=str(e))

    @staticmethod
    def is_alive(conn: Connection) -> bool:
        """Check that a connection can still reach the backing store."""
        if conn.closed or conn.invalidated:
            return False
        try:
            conn.execute(text("SELECT 1"))
            conn.rollback()
            return True
        except SQLAlchemyError as e:
            logger.warning("connection_validation_failed", error=str(e))
            return False

    def _open_reserved(self) -> Connection:
        """Open a connection into a slot already counted in ``_opening``."""
        try:
            conn = self._open()
        except SQLAlchemyError:
            with self._cond:
                self._opening -= 1
                self._cond.notify()
            raise
        with self._cond:
            self._opening -= 1
            if self._closed:
                self._cond.notify()
                self._close_quietly(conn)
                raise PoolClosed()
            self._in_use.add(conn)
        return conn

    def _discard(self, conn: Connection) -> None:
        """Remove an in-use connection from the pool and close it."""
        with self._cond:
            self._in_use.discard(conn)
            self._cond.notify()
        self._close_quietly(conn)
        logger.info("connection_discarded")

    def acquire(self) -> Connection:
        """
        Check a connection out of the pool.

        Returns:
            A validated connection, owned by the caller until release()

        Raises:
            PoolClosed: If the pool has been shut down
            PoolExhausted: If nothing became available within the timeout
        """
        deadline = time.monotonic() + self.timeout

        while True:
            conn: Connection | None = None

            with self._cond:
                while True:
                    if self._closed:
                        raise PoolClosed()
                    if self._available:
                        conn = self._available.popleft()
                        self._in_use.add(conn)
                        break
                    if self._total() < self.max_size:
                        # Reserve the slot; conn stays None
                        self._opening += 1
                        break
                    remaining = deadline - time.monotonic()
                    if remaining <= 0:
                        logger.warning(
                            "pool_exhausted",
                            in_use=len(self._in_use),
                            max_size=self.max_size,
                            timeout=self.timeout,
                        )
                        raise PoolExhausted(self.timeout)
                    self._cond.wait(remaining)

            if conn is None:
                return self._open_reserved()

            if self.is_alive(conn):
                return conn

            # Dead connection: drop it and go around again, which either
            # opens a replacement or waits for a release.
            self._discard(conn)

    def release(self, conn: Connection) -> None:
        """
        Return a connection to the pool.

        Any open transaction is rolled back. A connection that fails its
        liveness check is closed instead of recycled.
        """
        with self._cond:
            if conn not in self._in_use:
                return

        try:
            if not conn.closed and not conn.invalidated and conn.in_transaction():
                conn.rollback()
            healthy = self.is_alive(conn)
        except SQLAlchemyError as e:
            logger.warning("connection_reset_failed", error=str(e))
            healthy = False

        with self._cond:
            if conn not in self._in_use:
                # Shutdown already took care of it
                return
            self._in_use.discard(conn)
            if healthy and not self._closed:
                self._available.append(conn)
                self._cond.notify()
                return
            self._cond.notify()

        self._close_quietly(conn)
        if not healthy:
            logger.info("connection_discarded")

    @contextmanager
    def connection(self) -> Iterator[Connection]:
        """Acquire a connection for the duration of a with-block."""
        conn = self.acquire()
        try:
            yield conn
        finally:
            self.release(conn)

    def shutdown(self) -> None:
        """Close the pool and every connection it owns."""
        with self._cond:
            if self._closed:
                return
            self._closed = True
            to_close = list(self._available) + list(self._in_use)
            self._available.clear()
            self._in_use.clear()
            self._cond.notify_all()

        for conn in to_close:
            self._close_quietly(conn)

        logger.info("connection_pool_shutdown", closed_connections=len(to_close))

    def stats(self) -> dict[str, Any]:
        """
        Get connection pool statistics.

        Returns:
            Dictionary with pool counters
        """
        with self._cond:
            return {
                "available": len(self._available),
                "in_use": len(self._in_use),
                "total": self._total(),
                "max_size": self.max_size,
                "closed": self._closed,
            }
