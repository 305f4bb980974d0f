"""Statement builder - column/value pairs in, SQL text and parameters out.

The record engine walks a record's columns, adds each column it wants to
write to a :class:`StatementBuilder`, and renders the final statement once
at the end. Placeholders come from the session's dialect, so the same
builder produces ``?`` for SQLite and ``%s`` for PostgreSQL and MySQL.

Examples:
    >>> builder = StatementBuilder("student", get_dialect("sqlite"))
    >>> builder.add("name", "Ada").add("grade", 91)
    StatementBuilder('student', columns=['name', 'grade'])
    >>> builder.insert().sql
    'INSERT INTO student (name, grade) VALUES (?, ?)'
    >>> builder.update("id", 7)
    Statement(sql='UPDATE student SET name = ?, grade = ? WHERE id = ?', parameters=('Ada', 91, 7))
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from rowspine.core.dialect import Dialect


@dataclass(frozen=True)
class Statement:
    """Rendered SQL text with its positional parameters."""

    sql: str
    parameters: tuple[Any, ...] = ()


class StatementBuilder:
    """Accumulates column/value pairs for one table."""

    def __init__(self, table: str, dialect: Dialect):
        self._table = table
        self._dialect = dialect
        self._columns: list[str] = []
        self._values: list[Any] = []

    def add(self, column: str, value: Any) -> StatementBuilder:
        self._columns.append(column)
        self._values.append(value)
        return self

    @property
    def columns(self) -> tuple[str, ...]:
        return tuple(self._columns)

    @property
    def values(self) -> tuple[Any, ...]:
        return tuple(self._values)

    def is_empty(self) -> bool:
        return not self._columns

    def insert(self, returning: str | None = None) -> Statement:
        """``INSERT INTO t (...) VALUES (...)``, or the dialect default-values form when empty."""
        if self._columns:
            sql = (
                f"INSERT INTO {self._table} ({', '.join(self._columns)}) "
                f"VALUES ({self._dialect.placeholders(len(self._columns))})"
            )
        else:
            sql = f"INSERT INTO {self._table}{self._dialect.default_values_clause()}"
        if returning:
            sql += self._dialect.returning_clause(returning)
        return Statement(sql, self.values)

    def update(self, identity_column: str, identity_value: Any) -> Statement:
        """``UPDATE t SET c = ?, ... WHERE id = ?`` with the identity bound last."""
        if not self._columns:
            raise ValueError(f"No columns to update in {self._table}")
        assignments = ", ".join(
            f"{column} = {self._dialect.placeholder(index)}" for index, column in enumerate(self._columns)
        )
        where = self._dialect.placeholder(len(self._columns))
        sql = f"UPDATE {self._table} SET {assignments} WHERE {identity_column} = {where}"
        return Statement(sql, (*self._values, identity_value))

    def delete(self, identity_column: str, identity_value: Any) -> Statement:
        sql = f"DELETE FROM {self._table} WHERE {identity_column} = {self._dialect.placeholder(0)}"
        return Statement(sql, (identity_value,))

    def select(self, column: str, value: Any, limit: int | None = None) -> Statement:
        """``SELECT * FROM t WHERE column = ?`` with an optional row limit."""
        sql = f"SELECT * FROM {self._table} WHERE {column} = {self._dialect.placeholder(0)}"
        if limit is not None:
            sql += self._dialect.limit_clause(limit)
        return Statement(sql, (value,))

    def __repr__(self) -> str:
        return f"StatementBuilder({self._table!r}, columns={self._columns!r})"


__all__ = ["Statement", "StatementBuilder"]
