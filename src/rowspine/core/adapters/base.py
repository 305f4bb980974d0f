"""Database adapter base class.

Manifesto:
    Every driver opens connections, toggles auto-commit and raises its own
    exception family in a slightly different way. The adapter hides those
    differences behind one small contract so the session never imports a
    driver module.

Features:
    - Abstract ``open_connection()`` returning a DB-API connection in
      auto-commit mode
    - ``set_autocommit()`` for transaction begin/end
    - ``driver_errors`` naming the driver's exception base classes
    - Dialect lookup from the configured driver kind

Tags:
    rowspine, database, abstract-base, adapter-pattern

Doc-Types:
    api-reference
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from rowspine.core.dialect import Dialect, get_dialect
from rowspine.core.protocols import DBConnection

from .types import DatabaseConfig, DatabaseType


class DatabaseAdapter(ABC):
    """
    Abstract base class for database adapters.

    An adapter is stateless apart from its config: it opens connections but
    does not own them. The session that receives the connection closes it.
    """

    def __init__(self, config: DatabaseConfig):
        self._config = config
        self._dialect: Dialect = get_dialect(config.db_type)

    @property
    def config(self) -> DatabaseConfig:
        """Connection configuration."""
        return self._config

    @property
    def dialect(self) -> Dialect:
        """SQL dialect for this adapter's driver."""
        return self._dialect

    @property
    def db_type(self) -> DatabaseType:
        """Driver kind."""
        return self._config.db_type

    @property
    @abstractmethod
    def driver_errors(self) -> tuple[type[Exception], ...]:
        """Exception base classes raised by the driver."""
        ...

    @abstractmethod
    def open_connection(self) -> DBConnection:
        """Open a new connection with auto-commit enabled."""
        ...

    @abstractmethod
    def set_autocommit(self, connection: DBConnection, enabled: bool) -> None:
        """Switch ``connection`` in or out of auto-commit mode."""
        ...

    def connection_string(self) -> str:
        """Credential-free connection string, for logging."""
        return self._config.to_connection_string()


__all__ = [
    "DatabaseAdapter",
]
