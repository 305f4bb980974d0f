"""RowSpine Core -- connections, sessions, results and the error model.

Manifesto:
    The record engine in ``rowspine.orm`` only ever talks to a
    ``ConnectionSession``. Everything driver-specific (how to connect, how to
    toggle auto-commit, which placeholder to use, how generated keys come
    back) lives in this package behind small protocols, so the mapping code
    never branches on a driver name.

    - **Sync-only primitives:** one blocking connection per session
    - **Protocol-first:** DBConnection, DBCursor and Dialect are protocols
    - **Import-guarded drivers:** psycopg2 and mysql.connector load lazily

Architecture::

    Layer 1 -- Type System & Errors
        errors.py          Structured error hierarchy (RowSpineError)
        protocols.py       DB-API connection / cursor protocols

    Layer 2 -- Database Access
        dialect.py         Placeholders + generated-key strategy per driver
        adapters/          One adapter per driver (SQLite, PostgreSQL, MySQL)
        connection.py      ConnectionFactory (config -> session)
        session.py         ConnectionSession (transactions + execution)
        query.py           SimpleQuery fluent SQL holder
        tabular.py         TabularResult / Row snapshots

    Layer 3 -- Cross-Cutting Concerns
        logging.py         Structured logging (structlog)
        settings.py        DatabaseSettings (pydantic-settings)

Tags:
    rowspine, core, database, sessions, sync-only, protocol-first

Doc-Types:
    package-overview, architecture-map
"""

from rowspine.core.adapters import DatabaseConfig, DatabaseType, get_adapter
from rowspine.core.connection import ConnectionFactory
from rowspine.core.dialect import Dialect, GeneratedKeyStrategy, get_dialect
from rowspine.core.errors import (
    CoercionError,
    ConfigError,
    ConstraintError,
    DatabaseConnectionError,
    DatabaseError,
    ErrorCategory,
    ErrorContext,
    FieldAccessError,
    FieldAccessorError,
    FieldInspectionError,
    FieldNotAccessibleError,
    QueryError,
    RowSpineError,
    UnsupportedCoercionError,
    ValidationError,
)
from rowspine.core.logging import configure_logging, get_logger
from rowspine.core.query import SimpleQuery
from rowspine.core.session import ConnectionSession
from rowspine.core.settings import DatabaseSettings
from rowspine.core.tabular import Row, TabularResult

__all__ = [
    # Connections
    "ConnectionFactory",
    "ConnectionSession",
    "DatabaseConfig",
    "DatabaseSettings",
    "DatabaseType",
    "get_adapter",
    # SQL
    "Dialect",
    "GeneratedKeyStrategy",
    "get_dialect",
    "SimpleQuery",
    # Results
    "Row",
    "TabularResult",
    # Errors
    "ErrorCategory",
    "ErrorContext",
    "RowSpineError",
    "ConfigError",
    "ValidationError",
    "ConstraintError",
    "CoercionError",
    "UnsupportedCoercionError",
    "DatabaseError",
    "QueryError",
    "DatabaseConnectionError",
    "FieldAccessError",
    "FieldInspectionError",
    "FieldNotAccessibleError",
    "FieldAccessorError",
    # Logging
    "configure_logging",
    "get_logger",
]
