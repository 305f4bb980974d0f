"""
Connection session - one live database connection and its transaction state.

A ``ConnectionSession`` owns exactly one DB-API connection opened by a
:class:`~rowspine.core.connection.ConnectionFactory`. It runs parameterized
statements, converts query results into immutable
:class:`~rowspine.core.tabular.TabularResult` snapshots, and reads back
generated keys in the way the configured driver supports.

Manifesto:
    - **No leaked cursors:** every cursor is closed in a guaranteed-cleanup
      block, whether the statement succeeded or not
    - **No silent commits:** a session closed mid-transaction rolls back
    - **Uniform failures:** driver exceptions surface as ``QueryError``
      with the normalized SQL attached

Architecture:
    ::

        ┌───────────────────────────────────────────────────────────────┐
        │ ConnectionSession                                             │
        │   begin()    rollback pending work, auto-commit off           │
        │   commit()   commit, auto-commit on                           │
        │   rollback() rollback, auto-commit on                         │
        │   close()    rollback if in transaction, then close           │
        ├───────────────────────────────────────────────────────────────┤
        │   execute(sql, *params) → rows affected                       │
        │   insert(sql, *params)  → generated key | None                │
        │   query(sql, *params)   → TabularResult                       │
        └───────────────────────────────────────────────────────────────┘

Examples:
    >>> factory = ConnectionFactory(DatabaseConfig(database=":memory:"))
    >>> with factory.create_session() as session:
    ...     session.execute("CREATE TABLE t (id INTEGER PRIMARY KEY, name TEXT)")
    ...     key = session.insert("INSERT INTO t (name) VALUES (?)", "Ada")
    ...     session.query("SELECT * FROM t")[0]["name"]
    'Ada'

Guardrails:
    ❌ DON'T: Share one session between threads
    ✅ DO: Give each unit of work its own session

    ❌ DON'T: Format values into SQL text
    ✅ DO: Pass them as positional parameters

Tags:
    session, connection, transaction, dbapi, rowspine
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import closing, contextmanager
from typing import Any

from rowspine.core.adapters.base import DatabaseAdapter
from rowspine.core.adapters.types import DatabaseType
from rowspine.core.dialect import Dialect, GeneratedKeyStrategy
from rowspine.core.errors import DatabaseError, QueryError, RowSpineError
from rowspine.core.logging import get_logger
from rowspine.core.protocols import DBConnection, DBCursor
from rowspine.core.query import SimpleQuery, resolve_statement
from rowspine.core.tabular import Row, TabularResult

logger = get_logger(__name__)


def normalize_sql(sql: str) -> str:
    """Collapse runs of whitespace so statements log on one line."""
    return " ".join(sql.split())


class ConnectionSession:
    """
    A single live database connection with explicit transaction control.

    Sessions start in auto-commit mode. They are context managers; leaving
    the ``with`` block closes the connection (rolling back first when a
    transaction is still open).
    """

    def __init__(self, connection: DBConnection, adapter: DatabaseAdapter):
        self._connection = connection
        self._adapter = adapter
        self._driver_errors = adapter.driver_errors
        self._autocommit = True
        self._closed = False
        self._last_statement: str | None = None
        self._driver = str(getattr(adapter.db_type, "value", adapter.db_type))

    # -- State ---------------------------------------------------------------

    @property
    def db_type(self) -> DatabaseType:
        return self._adapter.db_type

    @property
    def dialect(self) -> Dialect:
        return self._adapter.dialect

    @property
    def autocommit(self) -> bool:
        """Whether statements are committed as they run."""
        return self._autocommit

    @property
    def is_open(self) -> bool:
        return not self._closed

    @property
    def last_statement(self) -> str | None:
        """Normalized text of the most recently executed statement."""
        return self._last_statement

    @property
    def connection(self) -> DBConnection:
        """The underlying DB-API connection."""
        return self._connection

    # -- Transactions --------------------------------------------------------

    def begin(self) -> None:
        """Discard pending work and start an explicit transaction."""
        self._ensure_open()
        with self._wrap_driver_errors("begin"):
            self._connection.rollback()
            self._adapter.set_autocommit(self._connection, False)
        self._autocommit = False
        logger.debug("transaction_started", driver=self._driver)

    def commit(self) -> None:
        """Commit the open transaction and return to auto-commit."""
        self._ensure_open()
        with self._wrap_driver_errors("commit"):
            self._connection.commit()
            self._adapter.set_autocommit(self._connection, True)
        self._autocommit = True
        logger.debug("transaction_committed", driver=self._driver)

    def rollback(self) -> None:
        """Roll back the open transaction and return to auto-commit."""
        self._ensure_open()
        with self._wrap_driver_errors("rollback"):
            self._connection.rollback()
            self._adapter.set_autocommit(self._connection, True)
        self._autocommit = True
        logger.debug("transaction_rolled_back", driver=self._driver)

    def begin_quietly(self) -> bool:
        return self._quietly(self.begin, "transaction_start_failed")

    def commit_quietly(self) -> bool:
        return self._quietly(self.commit, "transaction_commit_failed")

    def rollback_quietly(self) -> bool:
        return self._quietly(self.rollback, "transaction_rollback_failed")

    @contextmanager
    def transaction(self) -> Iterator[ConnectionSession]:
        """Run a block in a transaction: commit on success, roll back on error."""
        self.begin()
        try:
            yield self
        except BaseException:
            self.rollback_quietly()
            raise
        self.commit()

    # -- Lifecycle -----------------------------------------------------------

    def close(self) -> None:
        """Close the connection, rolling back first if a transaction is open."""
        if self._closed:
            return
        try:
            with self._wrap_driver_errors("close"):
                try:
                    if not self._autocommit:
                        self._connection.rollback()
                        logger.debug("transaction_rolled_back_on_close", driver=self._driver)
                finally:
                    self._connection.close()
        finally:
            self._closed = True
            self._autocommit = True
        logger.debug("session_closed", driver=self._driver)

    def close_quietly(self) -> bool:
        return self._quietly(self.close, "session_close_failed")

    def __enter__(self) -> ConnectionSession:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    # -- Execution primitives ------------------------------------------------

    def execute(self, sql: str | SimpleQuery, *params: Any) -> int:
        """Run a statement and return the number of affected rows."""
        sql, params = self._prepare(sql, params)
        with self._cursor(sql) as cursor:
            cursor.execute(sql, params)
            return cursor.rowcount

    def insert(self, sql: str | SimpleQuery, *params: Any) -> Any | None:
        """Run an INSERT and return the generated key, or None.

        For RETURNING dialects the statement must carry the RETURNING
        clause; the first column of the first returned row is the key.
        """
        sql, params = self._prepare(sql, params)
        with self._cursor(sql) as cursor:
            cursor.execute(sql, params)
            return self._generated_key(cursor)

    def query(self, sql: str | SimpleQuery, *params: Any) -> TabularResult:
        """Run a SELECT and return every row as an immutable snapshot."""
        sql, params = self._prepare(sql, params)
        with self._cursor(sql) as cursor:
            cursor.execute(sql, params)
            labels = [description[0] for description in cursor.description or ()]
            rows = cursor.fetchall() if labels else []
            return TabularResult.from_rows(labels, rows)

    def query_first(self, sql: str | SimpleQuery, *params: Any) -> Row | None:
        """Run a SELECT and return only its first row."""
        return self.query(sql, *params).first()

    # -- Internals -----------------------------------------------------------

    def _prepare(self, sql: str | SimpleQuery, params: tuple[Any, ...]) -> tuple[str, tuple[Any, ...]]:
        self._ensure_open()
        text, params = resolve_statement(sql, params)
        text = normalize_sql(text)
        self._last_statement = text
        logger.info("statement_executed", sql=text, params=len(params), driver=self._driver)
        return text, params

    @contextmanager
    def _cursor(self, sql: str) -> Iterator[DBCursor]:
        try:
            with closing(self._connection.cursor()) as cursor:
                yield cursor
        except self._driver_errors as e:
            raise QueryError(f"Statement failed: {e}", cause=e).with_context(
                sql=sql, driver=self._driver
            ) from e

    @contextmanager
    def _wrap_driver_errors(self, action: str) -> Iterator[None]:
        try:
            yield
        except self._driver_errors as e:
            raise DatabaseError(f"Failed to {action}: {e}", cause=e).with_context(
                driver=self._driver
            ) from e

    def _generated_key(self, cursor: DBCursor) -> Any | None:
        try:
            if self.dialect.generated_keys is GeneratedKeyStrategy.RETURNING:
                # no RETURNING clause, no result set
                if cursor.description is None:
                    return None
                row = cursor.fetchone()
                return row[0] if row else None
            # 0 means the driver generated no key
            return cursor.lastrowid or None
        except self._driver_errors as e:
            logger.warning("generated_key_fetch_failed", error=str(e), driver=self._driver)
            return None

    def _ensure_open(self) -> None:
        if self._closed:
            raise DatabaseError("Session is closed").with_context(driver=self._driver)

    def _quietly(self, action: Any, event: str) -> bool:
        try:
            action()
        except RowSpineError as e:
            logger.warning(event, error=str(e), driver=self._driver)
            return False
        return True


__all__ = ["ConnectionSession", "normalize_sql"]
