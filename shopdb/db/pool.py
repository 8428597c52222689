"""Connection pool management."""

import logging
import threading
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import ArgumentError, DisconnectionError, SQLAlchemyError
from sqlalchemy.pool import QueuePool

from ..config import DatabaseConfig
from ..utils.masking import mask_password
from .exceptions import DatabaseConnectionError, PoolClosedError, PoolInitializationError

# Seconds a liveness round trip may take before the connection counts as dead
LIVENESS_TIMEOUT = 5.0

def liveness_timeout_statement(dialect_name: str, timeout: float) -> Optional[str]:
    """Statement that makes the server cancel the liveness query after ``timeout`` seconds.

    Returns None for dialects without a per-statement server timeout.
    """
    if dialect_name == 'postgresql':
        return f"SET LOCAL statement_timeout = {max(1, int(timeout * 1000))}"
    return None

@dataclass(frozen=True)
class PoolStats:
    """Point-in-time connection counts."""

    active: int = 0
    idle: int = 0
    total: int = 0

class ConnectionPool:
    """Owns the SQLAlchemy engine and its pool of live connections.

    The engine is created lazily on first use and torn down by ``shutdown``.
    """

    def __init__(self, config: DatabaseConfig):
        """Initialize pool with connection settings.

        Args:
            config: Database and pool configuration
        """
        self.config = config
        self.logger = logging.getLogger(__name__)
        self._engine: Optional[Engine] = None
        self._closed = False
        self._lock = threading.Lock()

    @property
    def closed(self) -> bool:
        """Whether ``shutdown`` has been called."""
        return self._closed

    @property
    def engine(self) -> Engine:
        """Get the engine, creating it on first access."""
        if self._closed:
            raise PoolClosedError()
        if self._engine is None:
            with self._lock:
                if self._closed:
                    raise PoolClosedError()
                if self._engine is None:
                    self._engine = self._create_engine()
        return self._engine

    def _create_engine(self) -> Engine:
        url = None
        try:
            url = self.config.sqlalchemy_url()
            engine = create_engine(url, poolclass=QueuePool, **self.config.engine_options())
        except (ArgumentError, SQLAlchemyError, ImportError, ValueError) as e:
            self.logger.error(f"Failed to initialize connection pool: {e}")
            shown = url.render_as_string(hide_password=True) if url is not None else "<unparseable>"
            raise PoolInitializationError(
                "Could not initialize the database connection pool",
                url=mask_password(shown),
            ) from e

        if self.config.idle_timeout_ms > 0:
            self._install_idle_timeout(engine, self.config.idle_timeout_ms / 1000)

        self.logger.info("Connection pool initialized")
        self.logger.info(f"Database URL: {mask_password(url.render_as_string(hide_password=True))}")
        return engine

    @staticmethod
    def _install_idle_timeout(engine: Engine, idle_timeout: float) -> None:
        """Discard pooled connections that sat idle longer than ``idle_timeout`` seconds."""

        @event.listens_for(engine.pool, 'checkin')
        def _on_checkin(dbapi_connection, connection_record):
            connection_record.info['checked_in_at'] = time.monotonic()

        @event.listens_for(engine.pool, 'checkout')
        def _on_checkout(dbapi_connection, connection_record, connection_proxy):
            checked_in_at = connection_record.info.pop('checked_in_at', None)
            if checked_in_at is not None and time.monotonic() - checked_in_at > idle_timeout:
                # The pool invalidates this connection and retries with a fresh one
                raise DisconnectionError("Connection exceeded idle timeout")

    @contextmanager
    def acquire(self) -> Iterator[Connection]:
        """Borrow a connection, returning it to the pool on exit.

        Raises:
            PoolClosedError: If the pool was shut down
            DatabaseConnectionError: If no live connection could be obtained
        """
        engine = self.engine
        try:
            connection = engine.connect()
        except SQLAlchemyError as e:
            self.logger.error(f"Could not obtain a database connection: {e}")
            raise DatabaseConnectionError(
                "Could not obtain a database connection",
                detail=str(e),
            ) from e
        try:
            yield connection
        finally:
            connection.close()

    def test_connection(self, timeout: float = LIVENESS_TIMEOUT) -> bool:
        """Check that a live connection can be borrowed and used.

        Args:
            timeout: Seconds the liveness round trip may take

        Returns:
            bool: True if the database answered in time, never raises
        """
        try:
            with self.acquire() as connection:
                bound = liveness_timeout_statement(connection.dialect.name, timeout)
                if bound:
                    connection.execute(text(bound))
                start = time.monotonic()
                connection.execute(text("SELECT 1")).scalar()
                elapsed = time.monotonic() - start
                is_valid = not connection.closed and not connection.invalidated and elapsed <= timeout
        except (DatabaseConnectionError, SQLAlchemyError) as e:
            self.logger.error(f"Connection test failed: {e}")
            return False

        if is_valid:
            self.logger.info("Database connection successful")
        else:
            self.logger.warning("Database connection is not valid")
        return is_valid

    def stats(self) -> PoolStats:
        """Snapshot of active, idle and total connections."""
        engine = self._engine
        if engine is None or self._closed:
            return PoolStats()
        pool = engine.pool
        active = getattr(pool, 'checkedout', lambda: 0)()
        idle = getattr(pool, 'checkedin', lambda: 0)()
        return PoolStats(active=active, idle=idle, total=active + idle)

    def log_stats(self) -> PoolStats:
        """Log the current pool snapshot and return it."""
        stats = self.stats()
        self.logger.info(
            f"Pool status - active connections: {stats.active}, "
            f"idle connections: {stats.idle}, total: {stats.total}"
        )
        return stats

    def shutdown(self) -> None:
        """Close every pooled connection and mark the pool closed. Safe to call twice."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            engine, self._engine = self._engine, None
        if engine is not None:
            engine.dispose()
            self.logger.info("Connection pool closed")

    def __enter__(self) -> 'ConnectionPool':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.shutdown()
