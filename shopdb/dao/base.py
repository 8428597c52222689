"""Base data-access object with reusable statement patterns."""

import logging
import re
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence, Tuple, TypeVar

from sqlalchemy import bindparam, text
from sqlalchemy.engine import Connection, CursorResult, Row
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.sql.elements import TextClause
from sqlalchemy.types import TypeEngine

from ..db.exceptions import InsertIntegrityError, StatementFailedError, TransactionError
from ..db.pool import ConnectionPool

T = TypeVar('T')

RowMapper = Callable[[Row], T]

_PLACEHOLDER = re.compile(r'\?')

def bind_positional(sql: str, params: Sequence[Any]) -> TextClause:
    """Turn ``?`` placeholders into typed bind parameters, in order.

    Args:
        sql: SQL text with ``?`` placeholders
        params: One value per placeholder

    Returns:
        TextClause ready to execute

    Raises:
        ValueError: If the number of values does not match the placeholders
    """
    names: List[str] = []

    def _name(match: 're.Match[str]') -> str:
        names.append(f"p{len(names)}")
        return f":{names[-1]}"

    statement = _PLACEHOLDER.sub(_name, sql)
    if len(names) != len(params):
        raise ValueError(f"Statement expects {len(names)} parameters, got {len(params)}")
    return text(statement).bindparams(*(bindparam(name, value) for name, value in zip(names, params)))

class BaseDAO:
    """Base class for data-access objects.

    Each pattern borrows one connection from the pool for the duration of the
    call and returns it on every exit path. Passing ``conn`` runs the pattern
    on a connection the caller already holds, typically one from
    ``transaction()``; the caller then owns commit and release.
    """

    def __init__(self, pool: ConnectionPool):
        """Initialize DAO.

        Args:
            pool: Connection pool shared by all DAOs
        """
        self.pool = pool
        self.logger = logging.getLogger(self.__class__.__name__)

    @contextmanager
    def _borrow(self, conn: Optional[Connection]) -> Iterator[Tuple[Connection, bool]]:
        """Yield ``(connection, owned)``, borrowing from the pool when ``conn`` is None."""
        if conn is not None:
            yield conn, False
            return
        with self.pool.acquire() as connection:
            yield connection, True

    def _statement_failed(self, operation: str, sql: str, error: SQLAlchemyError) -> StatementFailedError:
        self.logger.error(f"Error executing {operation}: {sql}")
        self.logger.debug(f"Database error: {error}")
        return StatementFailedError(operation, sql, detail=str(getattr(error, 'orig', error)))

    def execute_query(
        self,
        sql: str,
        mapper: RowMapper,
        *params: Any,
        result_types: Optional[Dict[str, TypeEngine]] = None,
        conn: Optional[Connection] = None
    ) -> List[T]:
        """Run a SELECT and map every row.

        Args:
            sql: SELECT statement with ``?`` placeholders
            mapper: Converts one result row into a value
            *params: Values bound to the placeholders in order
            result_types: Optional SQL types for result columns, by name
            conn: Optional connection from a transaction

        Returns:
            Mapped rows in result order, empty when nothing matched

        Raises:
            StatementFailedError: If the database failed the statement
        """
        statement = bind_positional(sql, params)
        if result_types:
            statement = statement.columns(**result_types)

        try:
            with self._borrow(conn) as (connection, _):
                result = connection.execute(statement)
                return [mapper(row) for row in result]
        except SQLAlchemyError as e:
            raise self._statement_failed('query', sql, e) from e

    def execute_update(self, sql: str, *params: Any, conn: Optional[Connection] = None) -> int:
        """Run an INSERT, UPDATE or DELETE.

        Returns:
            Number of affected rows; 0 means nothing matched
        """
        statement = bind_positional(sql, params)
        try:
            with self._borrow(conn) as (connection, owned):
                result = connection.execute(statement)
                affected = result.rowcount
                if owned:
                    connection.commit()
                return affected
        except SQLAlchemyError as e:
            raise self._statement_failed('update', sql, e) from e

    def execute_insert(self, sql: str, *params: Any, conn: Optional[Connection] = None) -> int:
        """Run an INSERT and return the key the database generated.

        The statement should end with ``RETURNING <key>``; drivers that report
        ``lastrowid`` also work without it.

        Raises:
            InsertIntegrityError: If no row was inserted or no key was reported
            StatementFailedError: If the database failed the statement
        """
        statement = bind_positional(sql, params)
        try:
            with self._borrow(conn) as (connection, owned):
                result = connection.execute(statement)
                key = self._generated_key(result, sql)
                if owned:
                    connection.commit()
                return key
        except SQLAlchemyError as e:
            raise self._statement_failed('insert', sql, e) from e

    @staticmethod
    def _generated_key(result: CursorResult, sql: str) -> int:
        if result.returns_rows:
            row = result.first()
            if row is not None and row[0] is not None:
                return int(row[0])
            if row is None and result.rowcount <= 0:
                raise InsertIntegrityError("no rows were affected", sql)
            raise InsertIntegrityError("no generated key was returned", sql)

        if result.rowcount == 0:
            raise InsertIntegrityError("no rows were affected", sql)
        if not result.lastrowid:
            raise InsertIntegrityError("no generated key was returned", sql)
        return int(result.lastrowid)

    @contextmanager
    def transaction(self) -> Iterator[Connection]:
        """Run a block in one transaction on one connection.

        Commits when the block finishes, rolls back when it raises. A failed
        rollback is logged and the original failure is raised as
        ``TransactionError``. The connection always goes back to the pool.

        Raises:
            TransactionError: If the block or the commit failed
        """
        with self.pool.acquire() as connection:
            trans = connection.begin()
            try:
                yield connection
                trans.commit()
            except Exception as e:
                try:
                    trans.rollback()
                except SQLAlchemyError as rollback_error:
                    self.logger.error(f"Error rolling back transaction: {rollback_error}")
                self.logger.error(f"Transaction failed: {e}")
                raise TransactionError("Database transaction failed", error=type(e).__name__) from e

    def execute_in_transaction(self, work: Callable[[Connection], T]) -> T:
        """Call ``work`` with a transactional connection and return its result."""
        with self.transaction() as connection:
            return work(connection)
