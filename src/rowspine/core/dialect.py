"""SQL dialect abstraction for generated statements.

Provides a ``Dialect`` protocol and one implementation per supported
driver. The record engine asks the dialect for placeholder text and for the
way generated keys come back from an INSERT, so statement construction never
branches on a driver name.

Architecture::

    ┌────────────────────────────────────────────────────────────────┐
    │  builder.values(dialect)  → "INSERT INTO t (a, b) VALUES (?, ?)"│
    │  dialect.returning_clause("id") → " RETURNING id"               │
    └────────────────────────────────────────────────────────────────┘
                              │
                              ▼
    ┌──────────────┐ ┌──────────────────┐ ┌───────────────────────┐
    │ SQLite       │ │ PostgreSQL       │ │ MySQL / MariaDB       │
    │ ?            │ │ %s               │ │ %s                    │
    │ lastrowid    │ │ RETURNING <col>  │ │ lastrowid             │
    └──────────────┘ └──────────────────┘ └───────────────────────┘

Examples:
    >>> from rowspine.core.dialect import get_dialect
    >>> d = get_dialect("sqlite")
    >>> d.placeholders(3)
    '?, ?, ?'
    >>> d.generated_keys
    <GeneratedKeyStrategy.LASTROWID: 'lastrowid'>

Tags:
    dialect, sql, portability, generated-keys, rowspine
"""

from __future__ import annotations

from enum import Enum
from typing import Protocol, runtime_checkable


class GeneratedKeyStrategy(str, Enum):
    """How a driver hands back the key assigned by an INSERT."""

    LASTROWID = "lastrowid"  # cursor.lastrowid after execute
    RETURNING = "returning"  # explicit RETURNING clause, read as a result row


@runtime_checkable
class Dialect(Protocol):
    """SQL dialect contract.

    Every method returns a **SQL fragment** valid for the target database.
    """

    @property
    def name(self) -> str:
        """Human-readable dialect name (e.g. ``'sqlite'``)."""
        ...

    @property
    def generated_keys(self) -> GeneratedKeyStrategy:
        """Strategy used to read back generated keys."""
        ...

    def placeholder(self, index: int) -> str:
        """Single positional placeholder (0-based index)."""
        ...

    def placeholders(self, count: int) -> str:
        """Comma-separated placeholder list."""
        ...

    def returning_clause(self, column: str) -> str:
        """Suffix appended to an INSERT to return ``column``.

        Empty for dialects that use ``cursor.lastrowid``.
        """
        ...

    def limit_clause(self, count: int) -> str:
        """Suffix limiting a SELECT to ``count`` rows."""
        ...

    def default_values_clause(self) -> str:
        """Suffix for an INSERT that supplies no columns."""
        ...


# =========================================================================
# Concrete Dialect Implementations
# =========================================================================


class SQLiteDialect:
    """SQLite dialect - ``?`` placeholders, ``lastrowid`` keys."""

    @property
    def name(self) -> str:
        return "sqlite"

    @property
    def generated_keys(self) -> GeneratedKeyStrategy:
        return GeneratedKeyStrategy.LASTROWID

    def placeholder(self, index: int) -> str:  # noqa: ARG002
        return "?"

    def placeholders(self, count: int) -> str:
        return ", ".join("?" for _ in range(count))

    def returning_clause(self, column: str) -> str:  # noqa: ARG002
        return ""

    def limit_clause(self, count: int) -> str:
        return f" LIMIT {count}"

    def default_values_clause(self) -> str:
        return " DEFAULT VALUES"


class PostgreSQLDialect:
    """PostgreSQL dialect - ``%s`` placeholders (psycopg2), ``RETURNING`` keys."""

    @property
    def name(self) -> str:
        return "postgresql"

    @property
    def generated_keys(self) -> GeneratedKeyStrategy:
        return GeneratedKeyStrategy.RETURNING

    def placeholder(self, index: int) -> str:  # noqa: ARG002
        return "%s"

    def placeholders(self, count: int) -> str:
        return ", ".join("%s" for _ in range(count))

    def returning_clause(self, column: str) -> str:
        return f" RETURNING {column}"

    def limit_clause(self, count: int) -> str:
        return f" LIMIT {count}"

    def default_values_clause(self) -> str:
        return " DEFAULT VALUES"


class MySQLDialect:
    """MySQL / MariaDB dialect - ``%s`` placeholders (mysql.connector), ``lastrowid`` keys."""

    def __init__(self, name: str = "mysql") -> None:
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    @property
    def generated_keys(self) -> GeneratedKeyStrategy:
        return GeneratedKeyStrategy.LASTROWID

    def placeholder(self, index: int) -> str:  # noqa: ARG002
        return "%s"

    def placeholders(self, count: int) -> str:
        return ", ".join("%s" for _ in range(count))

    def returning_clause(self, column: str) -> str:  # noqa: ARG002
        return ""

    def limit_clause(self, count: int) -> str:
        return f" LIMIT {count}"

    def default_values_clause(self) -> str:
        return " () VALUES ()"


# =========================================================================
# Registry / Factory
# =========================================================================

# Pre-instantiated singletons (dialects are stateless)
_DIALECTS: dict[str, Dialect] = {
    "sqlite": SQLiteDialect(),
    "postgresql": PostgreSQLDialect(),
    "postgres": PostgreSQLDialect(),  # alias
    "mysql": MySQLDialect(),
    "mariadb": MySQLDialect("mariadb"),
}


def get_dialect(db_type: str) -> Dialect:
    """Get a dialect by driver name.

    Args:
        db_type: One of ``'sqlite'``, ``'postgresql'``, ``'postgres'``,
                 ``'mysql'``, ``'mariadb'`` (or a ``DatabaseType``).

    Raises:
        ValueError: If ``db_type`` is not recognised.
    """
    key = getattr(db_type, "value", db_type).lower()
    if key not in _DIALECTS:
        raise ValueError(
            f"Unknown dialect '{db_type}'. "
            f"Supported: {sorted(set(_DIALECTS) - {'postgres'})}"
        )
    return _DIALECTS[key]


def register_dialect(name: str, dialect: Dialect) -> None:
    """Register a custom dialect implementation (third-party drivers, test doubles)."""
    _DIALECTS[name.lower()] = dialect


__all__ = [
    "GeneratedKeyStrategy",
    "Dialect",
    "SQLiteDialect",
    "PostgreSQLDialect",
    "MySQLDialect",
    "get_dialect",
    "register_dialect",
]
