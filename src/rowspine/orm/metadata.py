"""Metadata reader - derive a table shape from a declared record type.

``read_metadata()`` inspects a ``@table``-decorated dataclass exactly once
and returns an immutable :class:`TableMetadata`. The record engine never
looks at annotations or field metadata again; it goes through
:mod:`rowspine.orm.cache`, which calls this module on a miss.

Examples:
    >>> metadata = read_metadata(Student)
    >>> metadata.table_name
    'student'
    >>> [c.column_name for c in metadata.columns]
    ['id', 'name', 'grade']
    >>> metadata.identity.field_type
    <class 'rowspine.orm.coercion.Int32'>

Tags:
    orm, metadata, reflection, dataclass, rowspine
"""

from __future__ import annotations

import dataclasses
import typing
from dataclasses import dataclass
from typing import Any

from rowspine.core.errors import ConfigError, FieldInspectionError
from rowspine.core.logging import get_logger
from rowspine.orm.coercion import widen
from rowspine.orm.schema import column_spec, table_name_of

logger = get_logger(__name__)


@dataclass(frozen=True)
class ColumnDescriptor:
    """One mapped field and the constraints of its column."""

    field_name: str
    field_type: Any
    column_name: str
    identity: bool = False
    null_restricted: bool = False
    max_length: int = 0
    truncate: bool = False
    read_only: bool = False


@dataclass(frozen=True)
class TableMetadata:
    """Table shape of a record type: name, ordered columns and identity."""

    record_type: type
    table_name: str
    columns: tuple[ColumnDescriptor, ...]
    identity: ColumnDescriptor | None = None

    @property
    def record_name(self) -> str:
        return self.record_type.__qualname__

    @property
    def column_names(self) -> tuple[str, ...]:
        return tuple(c.column_name for c in self.columns)

    def column(self, column_name: str) -> ColumnDescriptor | None:
        for descriptor in self.columns:
            if descriptor.column_name == column_name:
                return descriptor
        return None


def read_metadata(record_type: type) -> TableMetadata:
    """Inspect ``record_type`` and build its table metadata.

    Raises:
        ConfigError: Not a dataclass, no ``@table`` name, or more than one
            identity column.
        FieldInspectionError: Field annotations cannot be resolved.
    """
    record_name = getattr(record_type, "__qualname__", repr(record_type))

    if not (isinstance(record_type, type) and dataclasses.is_dataclass(record_type)):
        raise ConfigError(f"{record_name} is not a dataclass").with_context(record_type=record_name)

    table_name = table_name_of(record_type)
    if not table_name:
        raise ConfigError(f"{record_name} has no table name; decorate it with @table").with_context(
            record_type=record_name
        )

    try:
        hints = typing.get_type_hints(record_type, include_extras=True)
    except Exception as e:
        raise FieldInspectionError(
            f"Cannot inspect fields of {record_name}: {e}",
            cause=e,
        ).with_context(record_type=record_name, table=table_name) from e

    columns: list[ColumnDescriptor] = []
    for field in dataclasses.fields(record_type):
        spec = column_spec(field)
        if spec is None:
            continue
        columns.append(
            ColumnDescriptor(
                field_name=field.name,
                field_type=widen(hints.get(field.name, Any)),
                column_name=spec.name,
                identity=spec.identity,
                null_restricted=not spec.nullable,
                max_length=spec.length,
                truncate=spec.truncate,
                read_only=spec.read_only,
            )
        )

    identities = [c for c in columns if c.identity]
    if len(identities) > 1:
        names = ", ".join(c.field_name for c in identities)
        raise ConfigError(f"{record_name} declares more than one identity column: {names}").with_context(
            record_type=record_name, table=table_name
        )

    metadata = TableMetadata(
        record_type=record_type,
        table_name=table_name,
        columns=tuple(columns),
        identity=identities[0] if identities else None,
    )
    logger.info(
        "table_metadata_built",
        record_type=record_name,
        table=table_name,
        columns=len(columns),
        identity=metadata.identity.column_name if metadata.identity else None,
    )
    return metadata


__all__ = ["ColumnDescriptor", "TableMetadata", "read_metadata"]
