"""Fluent holder for hand-written SQL and its positional parameters.

``SimpleQuery`` lets callers assemble a statement piece by piece while
keeping each fragment next to the parameters it binds. The session and
record engine accept it anywhere they accept ``(sql, *params)``.

Examples:
    >>> q = (
    ...     SimpleQuery()
    ...     .add_statement("SELECT * FROM student")
    ...     .add_statement_with_parameter("WHERE grade >= ?", 90)
    ...     .add_statement_with_parameter("AND section = ?", "B")
    ... )
    >>> q.sql
    'SELECT * FROM student WHERE grade >= ? AND section = ?'
    >>> q.parameters
    (90, 'B')
"""

from __future__ import annotations

from typing import Any


class SimpleQuery:
    """Accumulates SQL fragments and positional parameters in order."""

    def __init__(self, statement: str | None = None, *parameters: Any) -> None:
        self._fragments: list[str] = []
        self._parameters: list[Any] = []
        if statement:
            self.add_statement_with_parameter(statement, *parameters)

    def add_statement(self, statement: str) -> SimpleQuery:
        self._fragments.append(statement.strip())
        return self

    def add_parameter(self, *values: Any) -> SimpleQuery:
        self._parameters.extend(values)
        return self

    def add_statement_with_parameter(self, statement: str, *values: Any) -> SimpleQuery:
        return self.add_statement(statement).add_parameter(*values)

    @property
    def sql(self) -> str:
        return " ".join(fragment for fragment in self._fragments if fragment)

    @property
    def parameters(self) -> tuple[Any, ...]:
        return tuple(self._parameters)

    def __repr__(self) -> str:
        return f"SimpleQuery({self.sql!r}, parameters={len(self._parameters)})"


def resolve_statement(sql: str | SimpleQuery, params: tuple[Any, ...]) -> tuple[str, tuple[Any, ...]]:
    """Normalize ``(sql, *params)`` or ``(SimpleQuery,)`` call forms."""
    if isinstance(sql, SimpleQuery):
        if params:
            raise TypeError("Parameters must be added to the SimpleQuery, not passed separately")
        return sql.sql, sql.parameters
    return sql, params


__all__ = ["SimpleQuery", "resolve_statement"]
