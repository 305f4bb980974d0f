"""Database adapters -- one connection contract for four drivers.

Each adapter is **import-guarded**: the database driver is only required
when a connection is opened, not at import time. Install the corresponding
extra::

    pip install rowspine[postgresql]   # psycopg2-binary
    pip install rowspine[mysql]        # mysql-connector-python (MySQL + MariaDB)

Architecture::

    DatabaseAdapter (base.py)        Abstract base: open/autocommit/errors
        |-- SQLiteAdapter            stdlib sqlite3 (always available)
        |-- PostgreSQLAdapter        psycopg2 (optional)
        |-- MySQLAdapter             mysql.connector (optional, MySQL + MariaDB)

    AdapterRegistry (registry.py)    DatabaseType -> adapter class
    DatabaseConfig (types.py)        Connection parameters + password buffer
    DatabaseType (types.py)          Enum of supported drivers

Guardrails:
    ❌ ``adapter = PostgreSQLAdapter(...)`` directly
    ✅ ``adapter = get_adapter(config)``

Tags:
    rowspine, database, adapters, import-guarded, registry-pattern
"""

from .base import DatabaseAdapter
from .mysql import MySQLAdapter
from .postgresql import PostgreSQLAdapter
from .registry import AdapterRegistry, adapter_registry, get_adapter
from .sqlite import SQLiteAdapter
from .types import DEFAULT_PORTS, DatabaseConfig, DatabaseType

__all__ = [
    # Types
    "DatabaseType",
    "DatabaseConfig",
    "DEFAULT_PORTS",
    # Base class
    "DatabaseAdapter",
    # Implementations
    "SQLiteAdapter",
    "PostgreSQLAdapter",
    "MySQLAdapter",
    # Registry
    "AdapterRegistry",
    "adapter_registry",
    "get_adapter",
]
