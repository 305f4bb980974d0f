"""Tests for database adapter registration and lookup."""

from __future__ import annotations

import pytest

from rowspine.core.adapters.mysql import MySQLAdapter
from rowspine.core.adapters.postgresql import PostgreSQLAdapter
from rowspine.core.adapters.registry import AdapterRegistry, adapter_registry, get_adapter
from rowspine.core.adapters.sqlite import SQLiteAdapter
from rowspine.core.adapters.types import DatabaseConfig, DatabaseType
from rowspine.core.errors import ConfigError


class TestAdapterRegistry:
    def test_defaults_registered(self) -> None:
        assert adapter_registry.list_adapters() == ["mariadb", "mysql", "postgres", "postgresql", "sqlite"]

    @pytest.mark.parametrize(
        "db_type, adapter_cls",
        [
            (DatabaseType.SQLITE, SQLiteAdapter),
            (DatabaseType.POSTGRESQL, PostgreSQLAdapter),
            (DatabaseType.MYSQL, MySQLAdapter),
            (DatabaseType.MARIADB, MySQLAdapter),
        ],
    )
    def test_create(self, db_type, adapter_cls) -> None:
        adapter = get_adapter(DatabaseConfig(db_type=db_type))
        assert isinstance(adapter, adapter_cls)

    def test_unknown_raises(self) -> None:
        with pytest.raises(ConfigError, match="Unsupported database driver: oracle"):
            get_adapter(DatabaseConfig(db_type="oracle"))  # type: ignore[arg-type]

    def test_register_custom(self) -> None:
        registry = AdapterRegistry()
        registry.register("LiteCopy", SQLiteAdapter)
        assert "litecopy" in registry.list_adapters()
        assert "litecopy" not in adapter_registry.list_adapters()
