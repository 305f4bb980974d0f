"""
Shared pytest fixtures and configuration for rowspine tests.

This module provides:
- Auto-marking of unit / integration tests by location
- An in-memory SQLite session with a ``student`` table
- A fresh ``MetadataCache`` and a ``RecordEngine`` bound to it
- Sample mapped record types

Usage:
    Fixtures are auto-discovered by pytest. Use them as function arguments:

    def test_insert(engine, sqlite_session):
        engine.insert(Student(name="Ada"), sqlite_session)
"""

import sys
from pathlib import Path
from typing import Generator

import pytest

# Ensure rowspine package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from rowspine.core.adapters.types import DatabaseConfig, DatabaseType
from rowspine.core.connection import ConnectionFactory
from rowspine.core.session import ConnectionSession
from rowspine.orm.cache import MetadataCache
from rowspine.orm.engine import RecordEngine

from tests._support.records import STUDENT_DDL


# =============================================================================
# Test Markers Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: fast tests without a real database")
    config.addinivalue_line("markers", "integration: tests that run SQL against SQLite")


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Auto-mark tests based on their location."""
    for item in items:
        test_path = Path(item.fspath).relative_to(Path(__file__).parent)

        if "integration" in str(test_path) or "sqlite_session" in getattr(item, "fixturenames", ()):
            item.add_marker(pytest.mark.integration)

        # Mark all tests without explicit markers as unit tests
        markers = {mark.name for mark in item.iter_markers()}
        if not markers.intersection({"unit", "integration"}):
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture
def sqlite_config() -> DatabaseConfig:
    return DatabaseConfig(db_type=DatabaseType.SQLITE, database=":memory:")


@pytest.fixture
def sqlite_session(sqlite_config: DatabaseConfig) -> Generator[ConnectionSession, None, None]:
    """In-memory SQLite session with the ``student`` table created."""
    session = ConnectionFactory(sqlite_config).create_session()
    session.execute(STUDENT_DDL)
    yield session
    session.close_quietly()


# =============================================================================
# ORM Fixtures
# =============================================================================


@pytest.fixture
def metadata_cache() -> MetadataCache:
    """A fresh cache so tests never share built metadata."""
    return MetadataCache()


@pytest.fixture
def engine(metadata_cache: MetadataCache) -> RecordEngine:
    return RecordEngine(cache=metadata_cache)
