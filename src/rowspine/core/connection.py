"""Connection factory - open sessions from a ``DatabaseConfig``.

This is the **single entry point** for opening database connections in
rowspine. Callers build a :class:`DatabaseConfig` (directly, from
:class:`~rowspine.core.settings.DatabaseSettings`, or from the environment)
and ask the factory for a :class:`~rowspine.core.session.ConnectionSession`.

Supported drivers
-----------------
==============  ==========================================  ====================
Driver          Connection string                           Module
==============  ==========================================  ====================
``sqlite``      ``sqlite:<database>``                       ``sqlite3``
``postgresql``  ``postgresql://<host>:<port>/<database>``   ``psycopg2``
``mysql``       ``mysql://<host>:<port>/<database>``        ``mysql.connector``
``mariadb``     ``mariadb://<host>:<port>/<database>``      ``mysql.connector``
==============  ==========================================  ====================

Usage
-----
::

    from rowspine.core.connection import ConnectionFactory

    factory = ConnectionFactory.from_env()        # ROWSPINE_DB_* variables
    with factory.create_session() as session:
        session.query("SELECT 1")

Every connection is opened with auto-commit enabled. Connections are not
pooled; each ``create_session()`` call opens a new one.
"""

from __future__ import annotations

from rowspine.core.adapters.base import DatabaseAdapter
from rowspine.core.adapters.registry import AdapterRegistry, adapter_registry
from rowspine.core.adapters.types import DatabaseConfig, DatabaseType
from rowspine.core.logging import get_logger
from rowspine.core.protocols import DBConnection
from rowspine.core.session import ConnectionSession
from rowspine.core.settings import DatabaseSettings

logger = get_logger(__name__)


class ConnectionFactory:
    """Opens connections and sessions for one database configuration.

    Raises ``ConfigError`` at construction when no adapter is registered for
    the configured driver.
    """

    def __init__(self, config: DatabaseConfig, registry: AdapterRegistry | None = None):
        self._config = config
        self._adapter = (registry or adapter_registry).create(config)

    @classmethod
    def from_settings(cls, settings: DatabaseSettings) -> ConnectionFactory:
        return cls(DatabaseConfig.from_settings(settings))

    @classmethod
    def from_env(cls) -> ConnectionFactory:
        """Build a factory from ``ROWSPINE_DB_*`` environment variables."""
        return cls.from_settings(DatabaseSettings())

    @property
    def config(self) -> DatabaseConfig:
        return self._config

    @property
    def adapter(self) -> DatabaseAdapter:
        return self._adapter

    @property
    def db_type(self) -> DatabaseType:
        return self._config.db_type

    def connection_string(self) -> str:
        return self._adapter.connection_string()

    def create_connection(self) -> DBConnection:
        """Open a raw DB-API connection with auto-commit enabled.

        Raises:
            ConfigError: The driver module is not installed.
            DatabaseConnectionError: The driver refused the connection.
        """
        target = self.connection_string()
        connection = self._adapter.open_connection()
        logger.debug("connection_opened", target=target)
        return connection

    def create_session(self) -> ConnectionSession:
        """Open a connection and wrap it in a session."""
        return ConnectionSession(self.create_connection(), self._adapter)


__all__ = ["ConnectionFactory"]
