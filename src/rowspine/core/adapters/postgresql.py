"""PostgreSQL database adapter.

Uses ``psycopg2``. PostgreSQL returns generated keys through an explicit
``RETURNING`` clause, which the dialect supplies.

Install the driver::

    pip install rowspine[postgresql]   # psycopg2-binary

The driver is import-guarded: a missing ``psycopg2`` raises
:class:`~rowspine.core.errors.ConfigError` when a connection is opened,
not when this module is imported.
"""

from __future__ import annotations

from typing import Any

from rowspine.core.errors import ConfigError, DatabaseConnectionError
from rowspine.core.protocols import DBConnection

from .base import DatabaseAdapter


def _import_psycopg2() -> Any:
    try:
        import psycopg2
    except ImportError:
        raise ConfigError(
            "psycopg2 is required for PostgreSQL. Install with: pip install psycopg2-binary"
        ) from None
    return psycopg2


class PostgreSQLAdapter(DatabaseAdapter):
    """PostgreSQL database adapter (one plain connection, no pool)."""

    @property
    def driver_errors(self) -> tuple[type[Exception], ...]:
        return (_import_psycopg2().Error,)

    def open_connection(self) -> DBConnection:
        """Connect to PostgreSQL in auto-commit mode."""
        psycopg2 = _import_psycopg2()

        try:
            conn = psycopg2.connect(
                host=self._config.host,
                port=self._config.port,
                dbname=self._config.database,
                user=self._config.username,
                password=self._config.password_text(),
                connect_timeout=self._config.connect_timeout,
                **self._config.options,
            )
        except psycopg2.Error as e:
            raise DatabaseConnectionError(
                f"Failed to connect to PostgreSQL: {e}",
                cause=e,
            ).with_context(driver="postgresql") from e

        conn.autocommit = True
        return conn

    def set_autocommit(self, connection: DBConnection, enabled: bool) -> None:
        connection.autocommit = enabled  # type: ignore[attr-defined]


__all__ = [
    "PostgreSQLAdapter",
]
