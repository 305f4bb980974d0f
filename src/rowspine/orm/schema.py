"""Declarative schema attributes for mapped records.

A mapped record is a plain ``dataclass``. ``@table`` names the table it
maps to and ``column()`` declares which fields are columns and how they
are constrained. Nothing here touches the database; the metadata reader
turns these attributes into a frozen :class:`TableMetadata` once per type.

Examples:
    >>> from dataclasses import dataclass
    >>> from rowspine.orm.coercion import Int32
    >>> @table("student")
    ... @dataclass
    ... class Student:
    ...     id: Int32 | None = column("id", identity=True)
    ...     name: str | None = column("name", nullable=False, length=40, truncate=True)
    >>> table_name_of(Student)
    'student'

Guardrails:
    ❌ DON'T: Give a column field a non-None default
    ✅ DO: Let ``column()`` default it to None so sparse inserts omit it

Tags:
    orm, schema, declarative, dataclass, rowspine
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Callable, TypeVar

T = TypeVar("T", bound=type)

TABLE_ATTRIBUTE = "__rowspine_table__"
_COLUMN_KEY = "__rowspine_column__"


@dataclass(frozen=True)
class ColumnSpec:
    """Column attributes exactly as declared on a field."""

    name: str
    identity: bool = False
    nullable: bool = True
    length: int = 0
    truncate: bool = False
    read_only: bool = False


def column(
    name: str,
    *,
    identity: bool = False,
    nullable: bool = True,
    length: int = 0,
    truncate: bool = False,
    read_only: bool = False,
) -> Any:
    """Declare a dataclass field as a mapped column.

    Args:
        name: Column name in the table.
        identity: Marks the table's identity (generated key) column.
        nullable: ``False`` rejects None on insert and update.
        length: Maximum string length; 0 means unlimited.
        truncate: Trim overlong strings instead of rejecting them.
        read_only: Never written by insert or update (generated columns).
    """
    if not name:
        raise ValueError("Column name must not be empty")
    if length < 0:
        raise ValueError(f"Column length must be >= 0, got {length}")
    spec = ColumnSpec(
        name=name,
        identity=identity,
        nullable=nullable,
        length=length,
        truncate=truncate,
        read_only=read_only,
    )
    return dataclasses.field(default=None, metadata={_COLUMN_KEY: spec})


def table(name: str) -> Callable[[T], T]:
    """Class decorator naming the table a record type maps to."""
    if not name:
        raise ValueError("Table name must not be empty")

    def decorate(cls: T) -> T:
        setattr(cls, TABLE_ATTRIBUTE, name)
        return cls

    return decorate


def table_name_of(record_type: type) -> str | None:
    return getattr(record_type, TABLE_ATTRIBUTE, None)


def column_spec(field: dataclasses.Field) -> ColumnSpec | None:
    """Declared column attributes of a dataclass field, if it is a column."""
    return field.metadata.get(_COLUMN_KEY)


__all__ = [
    "ColumnSpec",
    "column",
    "column_spec",
    "table",
    "table_name_of",
    "TABLE_ATTRIBUTE",
]
