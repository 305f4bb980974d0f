"""MySQL / MariaDB database adapter.

Uses ``mysql.connector`` from the ``mysql-connector-python`` package for
both driver kinds. MySQL uses **format** (``%s``) placeholder style and
reports generated keys through ``cursor.lastrowid``.

Install the driver::

    pip install mysql-connector-python
    # or:  pip install rowspine[mysql]

This adapter is import-guarded: if ``mysql.connector`` is not installed
a clear :class:`~rowspine.core.errors.ConfigError` is raised when a
connection is opened.
"""

from __future__ import annotations

from typing import Any

from rowspine.core.errors import ConfigError, DatabaseConnectionError
from rowspine.core.protocols import DBConnection

from .base import DatabaseAdapter


def _import_connector() -> Any:
    try:
        import mysql.connector
    except ImportError:
        raise ConfigError(
            "mysql-connector-python is required for MySQL/MariaDB. "
            "Install with: pip install mysql-connector-python"
        ) from None
    return mysql.connector


class MySQLAdapter(DatabaseAdapter):
    """MySQL / MariaDB database adapter."""

    @property
    def driver_errors(self) -> tuple[type[Exception], ...]:
        return (_import_connector().Error,)

    def open_connection(self) -> DBConnection:
        """Connect to MySQL/MariaDB in auto-commit mode."""
        connector = _import_connector()
        options = {"charset": "utf8mb4", **self._config.options}

        try:
            conn = connector.connect(
                host=self._config.host,
                port=self._config.port,
                database=self._config.database,
                user=self._config.username,
                password=self._config.password_text(),
                connection_timeout=self._config.connect_timeout,
                autocommit=True,
                **options,
            )
        except connector.Error as e:
            raise DatabaseConnectionError(
                f"Failed to connect to {self.db_type.value}: {e}",
                cause=e,
            ).with_context(driver=self.db_type.value) from e

        return conn

    def set_autocommit(self, connection: DBConnection, enabled: bool) -> None:
        connection.autocommit = enabled  # type: ignore[attr-defined]


__all__ = [
    "MySQLAdapter",
]
