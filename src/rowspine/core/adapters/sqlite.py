"""SQLite database adapter."""

from __future__ import annotations

import sqlite3

from rowspine.core.errors import DatabaseConnectionError
from rowspine.core.protocols import DBConnection

from .base import DatabaseAdapter


class SQLiteAdapter(DatabaseAdapter):
    """
    SQLite database adapter.

    Uses the built-in sqlite3 module. ``database`` is a file path or
    ``:memory:``. Auto-commit maps to ``isolation_level=None``; leaving it
    lets sqlite3 open a deferred transaction before the next DML statement.
    """

    @property
    def driver_errors(self) -> tuple[type[Exception], ...]:
        return (sqlite3.Error,)

    def open_connection(self) -> DBConnection:
        """Connect to the SQLite database in auto-commit mode."""
        path = self._config.database or ":memory:"
        uri = path.startswith("file:")

        try:
            conn = sqlite3.connect(
                path,
                timeout=self._config.connect_timeout,
                isolation_level=None,
                check_same_thread=False,
                uri=uri,
            )
        except sqlite3.Error as e:
            raise DatabaseConnectionError(
                f"Failed to connect to SQLite: {e}",
                cause=e,
            ).with_context(driver="sqlite") from e

        conn.execute("PRAGMA foreign_keys = ON")
        return conn

    def set_autocommit(self, connection: DBConnection, enabled: bool) -> None:
        connection.isolation_level = None if enabled else "DEFERRED"  # type: ignore[attr-defined]


__all__ = [
    "SQLiteAdapter",
]
