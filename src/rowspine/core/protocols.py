"""
Canonical protocol definitions for rowspine.

The session talks to drivers only through these two structural protocols,
which are the subset of PEP 249 (DB-API 2.0) that ``sqlite3``, ``psycopg2``
and ``mysql.connector`` all implement. Tests can hand the session any
object of the right shape.

Architecture:
    ::

        DBConnection                     DBCursor
        ┌───────────────────────┐        ┌──────────────────────────────┐
        │ cursor()   → DBCursor │        │ execute(sql, params)         │
        │ commit()              │        │ fetchone() / fetchall()      │
        │ rollback()            │        │ description, rowcount        │
        │ close()               │        │ lastrowid                    │
        └───────────────────────┘        │ close()                      │
                                         └──────────────────────────────┘

Guardrails:
    ❌ DON'T: Import sqlite3 or psycopg2 outside the adapters
    ✅ DO: Type against DBConnection / DBCursor

Tags:
    protocol, connection, cursor, dbapi, rowspine
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class DBCursor(Protocol):
    """Minimal DB-API cursor used by the session."""

    @property
    def description(self) -> Sequence[Sequence[Any]] | None:
        """Column descriptions of the last query; item 0 is the label."""
        ...

    @property
    def rowcount(self) -> int:
        """Rows affected by the last statement (-1 when unknown)."""
        ...

    @property
    def lastrowid(self) -> Any:
        """Row id generated by the last INSERT, if the driver tracks one."""
        ...

    def execute(self, sql: str, params: Sequence[Any] = ()) -> Any:
        """Execute one statement with positional parameters."""
        ...

    def fetchone(self) -> Any:
        """Fetch the next row, or None."""
        ...

    def fetchall(self) -> list:
        """Fetch all remaining rows."""
        ...

    def close(self) -> None:
        """Release the cursor."""
        ...


@runtime_checkable
class DBConnection(Protocol):
    """Minimal SYNCHRONOUS DB-API connection used by the session."""

    def cursor(self) -> DBCursor:
        """Open a new cursor."""
        ...

    def commit(self) -> None:
        """Commit current transaction."""
        ...

    def rollback(self) -> None:
        """Rollback current transaction."""
        ...

    def close(self) -> None:
        """Close the connection."""
        ...


__all__ = [
    "DBCursor",
    "DBConnection",
]
