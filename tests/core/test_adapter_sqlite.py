"""Tests for ``rowspine.core.adapters.sqlite`` — SQLite adapter."""

from __future__ import annotations

import sqlite3
from unittest.mock import patch

import pytest

from rowspine.core.adapters.sqlite import SQLiteAdapter
from rowspine.core.adapters.types import DatabaseConfig, DatabaseType
from rowspine.core.dialect import GeneratedKeyStrategy
from rowspine.core.errors import DatabaseConnectionError


@pytest.fixture
def adapter() -> SQLiteAdapter:
    return SQLiteAdapter(DatabaseConfig(db_type=DatabaseType.SQLITE, database=":memory:"))


class TestSQLiteAdapterInit:
    def test_db_type(self, adapter):
        assert adapter.db_type.value == "sqlite"

    def test_dialect(self, adapter):
        assert adapter.dialect.name == "sqlite"
        assert adapter.dialect.generated_keys is GeneratedKeyStrategy.LASTROWID

    def test_driver_errors(self, adapter):
        assert adapter.driver_errors == (sqlite3.Error,)

    def test_connection_string(self, adapter):
        assert adapter.connection_string() == "sqlite::memory:"


class TestSQLiteAdapterConnect:
    def test_connect_memory_in_autocommit(self, adapter):
        conn = adapter.open_connection()
        try:
            assert conn.isolation_level is None
        finally:
            conn.close()

    def test_connect_enables_foreign_keys(self, adapter):
        conn = adapter.open_connection()
        try:
            assert conn.execute("PRAGMA foreign_keys").fetchone()[0] == 1
        finally:
            conn.close()

    def test_connect_file(self, tmp_path):
        path = tmp_path / "school.db"
        adapter = SQLiteAdapter(DatabaseConfig(database=str(path)))
        conn = adapter.open_connection()
        conn.execute("CREATE TABLE t (x INTEGER)")
        conn.close()
        assert path.exists()

    @patch("sqlite3.connect", side_effect=sqlite3.OperationalError("unable to open database"))
    def test_connect_failure_raises(self, mock_connect, adapter):
        with pytest.raises(DatabaseConnectionError, match="Failed to connect to SQLite") as exc_info:
            adapter.open_connection()
        assert exc_info.value.context.driver == "sqlite"
        assert isinstance(exc_info.value.cause, sqlite3.OperationalError)


class TestSQLiteAdapterAutocommit:
    def test_toggle(self, adapter):
        conn = adapter.open_connection()
        try:
            adapter.set_autocommit(conn, False)
            assert conn.isolation_level == "DEFERRED"
            adapter.set_autocommit(conn, True)
            assert conn.isolation_level is None
        finally:
            conn.close()

    def test_uncommitted_work_rolls_back(self, adapter):
        conn = adapter.open_connection()
        try:
            conn.execute("CREATE TABLE t (x INTEGER)")
            adapter.set_autocommit(conn, False)
            conn.execute("INSERT INTO t VALUES (1)")
            conn.rollback()
            assert conn.execute("SELECT COUNT(*) FROM t").fetchone()[0] == 0
        finally:
            conn.close()
