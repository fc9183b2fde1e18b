"""Tests for the bounded connection pool."""

import threading
import time
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from medrecords.core.exceptions import PoolClosed, PoolExhausted
from medrecords.core.pool import ConnectionPool


class FakeConnection:
    """Connection double that can be made to fail its liveness check."""

    def __init__(self):
        self.closed = False
        self.invalidated = False
        self.alive = True
        self.rollbacks = 0
        self.transaction_open = False

    def execute(self, statement):
        if not self.alive:
            raise OperationalError("SELECT 1", {}, Exception("server closed the connection"))
        return MagicMock()

    def rollback(self):
        self.rollbacks += 1
        self.transaction_open = False

    def in_transaction(self):
        return self.transaction_open

    def close(self):
        self.closed = True


@pytest.fixture
def engine():
    """Engine double handing out fresh fake connections."""
    engine = MagicMock()
    engine.connect.side_effect = FakeConnection
    return engine


def test_pool_opens_initial_connections(engine):
    """Test that the initial connections are opened eagerly."""
    pool = ConnectionPool(engine, initial_size=3, max_size=5, timeout=0.1)

    assert engine.connect.call_count == 3
    assert pool.stats() == {
        "available": 3,
        "in_use": 0,
        "total": 3,
        "max_size": 5,
        "closed": False,
    }


def test_initial_size_is_clamped_to_max(engine):
    """Test that initial_size never exceeds max_size."""
    pool = ConnectionPool(engine, initial_size=10, max_size=2, timeout=0.1)

    assert engine.connect.call_count == 2
    assert pool.stats()["total"] == 2


def test_invalid_max_size_rejected(engine):
    """Test that a pool must allow at least one connection."""
    with pytest.raises(ValueError):
        ConnectionPool(engine, initial_size=0, max_size=0)


def test_acquire_reuses_released_connection(engine):
    """Test that a released connection is handed out again."""
    pool = ConnectionPool(engine, initial_size=1, max_size=1, timeout=0.1)

    conn = pool.acquire()
    pool.release(conn)

    assert pool.acquire() is conn
    assert engine.connect.call_count == 1


def test_pool_grows_on_demand_up_to_max(engine):
    """Test that new connections are opened lazily when none are free."""
    pool = ConnectionPool(engine, initial_size=0, max_size=2, timeout=0.1)

    first = pool.acquire()
    second = pool.acquire()

    assert first is not second
    assert engine.connect.call_count == 2
    assert pool.stats()["in_use"] == 2


def test_acquire_times_out_when_exhausted(engine):
    """Test that acquire gives up after the timeout when the pool is full."""
    pool = ConnectionPool(engine, initial_size=2, max_size=2, timeout=0.05)
    pool.acquire()
    pool.acquire()

    start = time.monotonic()
    with pytest.raises(PoolExhausted) as exc_info:
        pool.acquire()

    assert time.monotonic() - start >= 0.05
    assert exc_info.value.timeout == 0.05
    assert engine.connect.call_count == 2


def test_waiting_acquire_receives_released_connection(engine):
    """Test that a blocked caller is woken by a release."""
    pool = ConnectionPool(engine, initial_size=1, max_size=1, timeout=2.0)
    conn = pool.acquire()
    received = []

    waiter = threading.Thread(target=lambda: received.append(pool.acquire()))
    waiter.start()
    time.sleep(0.05)
    pool.release(conn)
    waiter.join(timeout=2.0)

    assert received == [conn]


def test_dead_connection_replaced_on_checkout(engine):
    """Test that a connection failing validation is discarded, not handed out."""
    pool = ConnectionPool(engine, initial_size=1, max_size=1, timeout=0.1)
    stale = pool.acquire()
    pool.release(stale)
    stale.alive = False

    fresh = pool.acquire()

    assert fresh is not stale
    assert stale.closed
    assert pool.stats()["total"] == 1


def test_release_discards_dead_connection(engine):
    """Test that a dead connection is closed on check-in instead of recycled."""
    pool = ConnectionPool(engine, initial_size=1, max_size=2, timeout=0.1)
    conn = pool.acquire()
    conn.alive = False

    pool.release(conn)

    assert conn.closed
    assert pool.stats()["available"] == 0
    assert pool.stats()["total"] == 0


def test_release_rolls_back_open_transaction(engine):
    """Test that a connection is reset before returning to the pool."""
    pool = ConnectionPool(engine, initial_size=1, max_size=1, timeout=0.1)
    conn = pool.acquire()
    conn.transaction_open = True
    rollbacks = conn.rollbacks

    pool.release(conn)

    assert not conn.in_transaction()
    # one reset plus one after the liveness probe
    assert conn.rollbacks == rollbacks + 2
    assert pool.stats()["available"] == 1


def test_release_of_unknown_connection_is_ignored(engine):
    """Test that releasing a foreign connection does not grow the pool."""
    pool = ConnectionPool(engine, initial_size=1, max_size=1, timeout=0.1)

    pool.release(FakeConnection())

    assert pool.stats()["available"] == 1


def test_connection_context_releases_on_error(engine):
    """Test that the context manager returns the connection on exceptions."""
    pool = ConnectionPool(engine, initial_size=1, max_size=1, timeout=0.1)

    with pytest.raises(RuntimeError):
        with pool.connection():
            raise RuntimeError("boom")

    assert pool.stats()["in_use"] == 0
    assert pool.stats()["available"] == 1


def test_open_failure_frees_reserved_slot(engine):
    """Test that a failed connect does not leak capacity."""
    engine.connect.side_effect = OperationalError("connect", {}, Exception("refused"))
    pool = ConnectionPool(engine, initial_size=0, max_size=1, timeout=0.1)

    with pytest.raises(OperationalError):
        pool.acquire()

    assert pool.stats()["total"] == 0
    engine.connect.side_effect = FakeConnection
    assert isinstance(pool.acquire(), FakeConnection)


def test_shutdown_closes_everything(engine):
    """Test that shutdown closes idle and borrowed connections."""
    pool = ConnectionPool(engine, initial_size=2, max_size=3, timeout=0.1)
    borrowed = pool.acquire()
    idle = pool._available[0]

    pool.shutdown()

    assert pool.closed
    assert borrowed.closed
    assert idle.closed
    with pytest.raises(PoolClosed):
        pool.acquire()

    # Late release after shutdown is harmless
    pool.release(borrowed)
    assert pool.stats()["total"] == 0


def test_shutdown_wakes_waiters(engine):
    """Test that callers blocked in acquire fail fast on shutdown."""
    pool = ConnectionPool(engine, initial_size=1, max_size=1, timeout=5.0)
    pool.acquire()
    errors = []

    def wait_for_connection():
        try:
            pool.acquire()
        except PoolClosed as e:
            errors.append(e)

    waiter = threading.Thread(target=wait_for_connection)
    waiter.start()
    time.sleep(0.05)
    pool.shutdown()
    waiter.join(timeout=2.0)

    assert not waiter.is_alive()
    assert len(errors) == 1


def test_concurrent_callers_never_exceed_max_size(engine):
    """Test the connection bound under contention."""
    max_size = 3
    pool = ConnectionPool(engine, initial_size=1, max_size=max_size, timeout=5.0)
    lock = threading.Lock()
    borrowed: set[int] = set()
    peak = [0]
    failures = []

    def worker():
        for _ in range(25):
            try:
                with pool.connection() as conn:
                    with lock:
                        assert id(conn) not in borrowed
                        borrowed.add(id(conn))
                        peak[0] = max(peak[0], len(borrowed))
                    time.sleep(0.001)
                    with lock:
                        borrowed.discard(id(conn))
            except Exception as e:  # noqa: BLE001
                failures.append(e)

    threads = [threading.Thread(target=worker) for _ in range(10)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert failures == []
    assert 1 <= peak[0] <= max_size
    assert engine.connect.call_count <= max_size
    assert pool.stats()["in_use"] == 0


def test_connection_opened_during_shutdown_is_closed(engine):
    """Test that a connect finishing after shutdown is closed, not handed out."""
    pool = ConnectionPool(engine, initial_size=0, max_size=1, timeout=0.1)
    opened = []

    def connect_then_shutdown():
        conn = FakeConnection()
        opened.append(conn)
        pool.shutdown()
        return conn

    engine.connect.side_effect = connect_then_shutdown

    with pytest.raises(PoolClosed):
        pool.acquire()

    assert opened[0].closed
    assert pool.stats()["total"] == 0
