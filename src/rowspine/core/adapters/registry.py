"""Database adapter registry and factory.

Manifesto:
    Consumers should never hard-code adapter class names. The registry
    maps driver kinds to adapter classes and ``get_adapter()`` creates a
    configured instance from a ``DatabaseConfig``.

Features:
    - ``AdapterRegistry`` with pre-registered defaults
    - ``register()`` for custom / third-party adapters
    - ``get_adapter()`` factory: config → adapter

Tags:
    rowspine, database, registry, factory

Doc-Types:
    api-reference
"""

from __future__ import annotations

from rowspine.core.errors import ConfigError

from .base import DatabaseAdapter
from .mysql import MySQLAdapter
from .postgresql import PostgreSQLAdapter
from .sqlite import SQLiteAdapter
from .types import DatabaseConfig, DatabaseType


class AdapterRegistry:
    """
    Registry for database adapter classes.

    Pre-registered adapters:
    - ``sqlite`` — :class:`SQLiteAdapter`
    - ``postgresql`` / ``postgres`` — :class:`PostgreSQLAdapter`
    - ``mysql`` / ``mariadb`` — :class:`MySQLAdapter`
    """

    def __init__(self):
        self._factories: dict[str, type[DatabaseAdapter]] = {}
        self._register_defaults()

    def _register_defaults(self) -> None:
        self._factories["sqlite"] = SQLiteAdapter
        self._factories["postgresql"] = PostgreSQLAdapter
        self._factories["postgres"] = PostgreSQLAdapter  # Alias
        self._factories["mysql"] = MySQLAdapter
        self._factories["mariadb"] = MySQLAdapter

    def register(self, name: str, adapter_class: type[DatabaseAdapter]) -> None:
        """Register an adapter class under ``name``."""
        self._factories[name.lower()] = adapter_class

    def create(self, config: DatabaseConfig) -> DatabaseAdapter:
        """Create the adapter for ``config.db_type``."""
        name = getattr(config.db_type, "value", config.db_type)
        name = str(name).lower()
        if name not in self._factories:
            raise ConfigError(f"Unsupported database driver: {name}").with_context(driver=name)
        return self._factories[name](config)

    def list_adapters(self) -> list[str]:
        """List registered adapter names."""
        return sorted(self._factories.keys())


# Global registry
adapter_registry = AdapterRegistry()


def get_adapter(config: DatabaseConfig) -> DatabaseAdapter:
    """
    Get a database adapter for a connection config.

    Usage:
        adapter = get_adapter(DatabaseConfig(db_type=DatabaseType.SQLITE, database="app.db"))
    """
    return adapter_registry.create(config)


__all__ = [
    "AdapterRegistry",
    "DatabaseType",
    "adapter_registry",
    "get_adapter",
]
