"""
Mapped record engine - insert, update, delete and fetch typed records.

The engine is the only part of rowspine that touches both a record and a
session. It looks up the record type's metadata in a
:class:`~rowspine.orm.cache.MetadataCache`, validates field values against
the declared column constraints, renders a statement with a
:class:`~rowspine.orm.statements.StatementBuilder`, runs it through a
:class:`~rowspine.core.session.ConnectionSession`, and writes fetched or
generated values back into record fields through :func:`coerce`.

Manifesto:
    - **Fail before I/O:** null, length and identity violations raise while
      the statement is being built; nothing is sent to the database
    - **Sparse writes:** None in a nullable column is left out of INSERT (and
      UPDATE unless ``include_null=True``) so column defaults apply
    - **Typed round trip:** values read back are coerced into the declared
      field type, including the generated key after an insert
    - **No raw reflection errors:** field access failures surface as
      ``FieldAccessError`` subclasses

Architecture:
    ::

        engine.insert(record, session)
          │
          ├── cache.get(type(record)) ───────→ TableMetadata
          ├── for column: read → check null/length → builder.add()
          ├── builder.insert(returning=identity?) → Statement
          ├── session.insert(sql, *params) ───→ generated key
          └── coerce(key, identity type) → write identity field

        engine.fetch(Student, session, sql, *params)
          │
          ├── session.query() ───────────────→ TabularResult
          └── for row: Student() → coerce + write each column → FetchResult

Examples:
    >>> student = Student(name="Ada", grade=91)
    >>> insert(student, session)
    True
    >>> student.id
    Int32(1)
    >>> find(Student, session, 1).name
    'Ada'

Guardrails:
    ❌ DON'T: Build SQL from record values by hand
    ✅ DO: Let the engine bind every value as a parameter

    ❌ DON'T: Expect update/delete to work without an identity column
    ✅ DO: Mark exactly one field with ``column(..., identity=True)``

Tags:
    orm, engine, insert, update, delete, fetch, rowspine

Doc-Types:
    - API Reference
    - Technical Design
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from rowspine.core.dialect import GeneratedKeyStrategy
from rowspine.core.errors import (
    CoercionError,
    ConfigError,
    ConstraintError,
    FieldAccessorError,
    FieldInspectionError,
    FieldNotAccessibleError,
    RowSpineError,
)
from rowspine.core.logging import LogContext, get_logger
from rowspine.core.query import SimpleQuery
from rowspine.core.session import ConnectionSession
from rowspine.core.tabular import Row
from rowspine.orm.cache import MetadataCache, default_cache
from rowspine.orm.coercion import coerce
from rowspine.orm.metadata import ColumnDescriptor, TableMetadata
from rowspine.orm.statements import StatementBuilder

logger = get_logger(__name__)

R = TypeVar("R")


@dataclass(frozen=True)
class FetchResult(Generic[R]):
    """Records materialized by a fetch. Empty means the query matched no rows."""

    records: tuple[R, ...] = ()

    @property
    def has_rows(self) -> bool:
        return bool(self.records)

    def first(self) -> R | None:
        return self.records[0] if self.records else None

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[R]:
        return iter(self.records)

    def __bool__(self) -> bool:
        return self.has_rows


# =============================================================================
# FIELD ACCESS
# =============================================================================


def _context(metadata: TableMetadata, descriptor: ColumnDescriptor | None = None) -> dict[str, Any]:
    context = {"record_type": metadata.record_name, "table": metadata.table_name}
    if descriptor is not None:
        context["column"] = descriptor.column_name
    return context


def read_field(record: Any, metadata: TableMetadata, descriptor: ColumnDescriptor) -> Any:
    try:
        return getattr(record, descriptor.field_name)
    except AttributeError as e:
        raise FieldNotAccessibleError(
            f"Field not accessible: {metadata.record_name}.{descriptor.field_name}",
            field=descriptor.field_name,
            cause=e,
        ).with_context(**_context(metadata, descriptor)) from e
    except Exception as e:
        raise FieldAccessorError(
            f"Field accessor threw: {metadata.record_name}.{descriptor.field_name}: {e}",
            field=descriptor.field_name,
            cause=e,
        ).with_context(**_context(metadata, descriptor)) from e


def write_field(record: Any, metadata: TableMetadata, descriptor: ColumnDescriptor, value: Any) -> None:
    try:
        setattr(record, descriptor.field_name, value)
    except AttributeError as e:
        # includes dataclasses.FrozenInstanceError
        raise FieldNotAccessibleError(
            f"Field not accessible: {metadata.record_name}.{descriptor.field_name}",
            field=descriptor.field_name,
            cause=e,
        ).with_context(**_context(metadata, descriptor)) from e
    except Exception as e:
        raise FieldAccessorError(
            f"Field accessor threw: {metadata.record_name}.{descriptor.field_name}: {e}",
            field=descriptor.field_name,
            cause=e,
        ).with_context(**_context(metadata, descriptor)) from e


def _instantiate(record_type: type[R], metadata: TableMetadata) -> R:
    try:
        return record_type()
    except Exception as e:
        raise FieldInspectionError(
            f"Cannot instantiate {metadata.record_name} without arguments: {e}",
            cause=e,
        ).with_context(**_context(metadata)) from e


# =============================================================================
# ENGINE
# =============================================================================


class RecordEngine:
    """Runs record-level statements against a session.

    Args:
        cache: Metadata cache to use. Defaults to the process-wide cache.
    """

    def __init__(self, cache: MetadataCache | None = None):
        self._cache = cache if cache is not None else default_cache

    @property
    def cache(self) -> MetadataCache:
        return self._cache

    def metadata(self, record_type: type) -> TableMetadata:
        return self._cache.get(record_type)

    # -- Writes ----------------------------------------------------------------

    def insert(self, record: Any, session: ConnectionSession) -> bool:
        """Insert ``record`` and write the generated key back into it.

        Returns:
            True when the table has an identity column and a generated key
            was obtained and written, False otherwise.
        """
        metadata = self.metadata(type(record))
        with LogContext(**_context(metadata)):
            builder = StatementBuilder(metadata.table_name, session.dialect)

            for descriptor in metadata.columns:
                if descriptor.read_only:
                    continue
                value = read_field(record, metadata, descriptor)
                if value is None:
                    if descriptor.null_restricted:
                        raise self._null_restricted(metadata, descriptor)
                    continue
                builder.add(descriptor.column_name, self._check_length(metadata, descriptor, value))

            identity = metadata.identity
            returning = None
            if identity is not None and session.dialect.generated_keys is GeneratedKeyStrategy.RETURNING:
                returning = identity.column_name

            statement = builder.insert(returning=returning)
            key = session.insert(statement.sql, *statement.parameters)

            if identity is None or key is None:
                return False
            self._assign(record, metadata, identity, key)
            return True

    def update(self, record: Any, session: ConnectionSession, *, include_null: bool = False) -> bool:
        """Update the row whose identity matches ``record``.

        Args:
            include_null: Write None values as NULL instead of skipping them.

        Returns:
            True when at least one row was affected.
        """
        metadata = self.metadata(type(record))
        with LogContext(**_context(metadata)):
            identity = self._require_identity(metadata, "update")
            identity_value = read_field(record, metadata, identity)
            if identity_value is None:
                raise ConstraintError(
                    f"{metadata.record_name}.{identity.field_name} must not be null for update",
                    field=identity.field_name,
                    constraint="identity",
                ).with_context(**_context(metadata, identity))

            builder = StatementBuilder(metadata.table_name, session.dialect)
            for descriptor in metadata.columns:
                if descriptor.identity or descriptor.read_only:
                    continue
                value = read_field(record, metadata, descriptor)
                if value is None:
                    if descriptor.null_restricted:
                        raise self._null_restricted(metadata, descriptor)
                    if not include_null:
                        continue
                else:
                    value = self._check_length(metadata, descriptor, value)
                builder.add(descriptor.column_name, value)

            if builder.is_empty():
                logger.debug("update_skipped_no_columns", **_context(metadata))
                return False

            statement = builder.update(identity.column_name, identity_value)
            return session.execute(statement.sql, *statement.parameters) > 0

    def delete(self, record: Any, session: ConnectionSession) -> bool:
        """Delete the row whose identity matches ``record``."""
        metadata = self.metadata(type(record))
        with LogContext(**_context(metadata)):
            identity = self._require_identity(metadata, "delete")
            identity_value = read_field(record, metadata, identity)
            if identity_value is None:
                raise ConstraintError(
                    f"{metadata.record_name}.{identity.field_name} must not be null for delete",
                    field=identity.field_name,
                    constraint="identity",
                ).with_context(**_context(metadata, identity))

            statement = StatementBuilder(metadata.table_name, session.dialect).delete(
                identity.column_name, identity_value
            )
            return session.execute(statement.sql, *statement.parameters) > 0

    # -- Reads -----------------------------------------------------------------

    def fetch(
        self, record_type: type[R], session: ConnectionSession, sql: str | SimpleQuery, *params: Any
    ) -> FetchResult[R]:
        """Run a query and materialize one ``record_type`` instance per row."""
        metadata = self.metadata(record_type)
        with LogContext(**_context(metadata)):
            result = session.query(sql, *params)
            if result.is_empty():
                return FetchResult()
            records = tuple(self._materialize(record_type, metadata, row) for row in result if len(row))
            return FetchResult(records)

    def fetch_first(
        self, record_type: type[R], session: ConnectionSession, sql: str | SimpleQuery, *params: Any
    ) -> R | None:
        return self.fetch(record_type, session, sql, *params).first()

    def find(self, record_type: type[R], session: ConnectionSession, identity_value: Any) -> R | None:
        """Load the record with the given identity, or None."""
        metadata = self.metadata(record_type)
        identity = self._require_identity(metadata, "find")
        if identity_value is None:
            raise ConstraintError(
                f"{metadata.record_name}.{identity.field_name} must not be null for find",
                field=identity.field_name,
                constraint="identity",
            ).with_context(**_context(metadata, identity))

        statement = StatementBuilder(metadata.table_name, session.dialect).select(
            identity.column_name, identity_value, limit=1
        )
        return self.fetch_first(record_type, session, statement.sql, *statement.parameters)

    # -- Internals -------------------------------------------------------------

    def _materialize(self, record_type: type[R], metadata: TableMetadata, row: Row) -> R:
        record = _instantiate(record_type, metadata)
        # Drivers differ in label case (PostgreSQL folds to lower case)
        labels = {label.lower(): label for label in row}
        for descriptor in metadata.columns:
            label = descriptor.column_name
            if label not in row:
                label = labels.get(label.lower())
            if label is None:
                write_field(record, metadata, descriptor, None)
            else:
                self._assign(record, metadata, descriptor, row[label])
        return record

    def _assign(self, record: Any, metadata: TableMetadata, descriptor: ColumnDescriptor, value: Any) -> None:
        if value is not None and descriptor.field_type is not Any and type(value) is not descriptor.field_type:
            logger.warning(
                "type_mismatch_coerced",
                record_type=metadata.record_name,
                column=descriptor.column_name,
                value_type=type(value).__name__,
                field_type=getattr(descriptor.field_type, "__name__", repr(descriptor.field_type)),
            )
            try:
                value = coerce(value, descriptor.field_type)
            except CoercionError as e:
                e.with_context(**_context(metadata, descriptor))
                raise
        write_field(record, metadata, descriptor, value)

    def _check_length(self, metadata: TableMetadata, descriptor: ColumnDescriptor, value: Any) -> Any:
        if not isinstance(value, str) or not descriptor.max_length or len(value) <= descriptor.max_length:
            return value
        if descriptor.truncate:
            logger.debug(
                "value_truncated",
                record_type=metadata.record_name,
                column=descriptor.column_name,
                length=len(value),
                max_length=descriptor.max_length,
            )
            return value[: descriptor.max_length]
        raise ConstraintError(
            f"{metadata.record_name}.{descriptor.field_name} exceeds max length "
            f"{descriptor.max_length} (got {len(value)})",
            field=descriptor.field_name,
            value=value,
            constraint="max_length",
        ).with_context(**_context(metadata, descriptor))

    def _null_restricted(self, metadata: TableMetadata, descriptor: ColumnDescriptor) -> RowSpineError:
        return ConstraintError(
            f"{metadata.record_name}.{descriptor.field_name} IS NULL RESTRICTED",
            field=descriptor.field_name,
            constraint="not_null",
        ).with_context(**_context(metadata, descriptor))

    def _require_identity(self, metadata: TableMetadata, operation: str) -> ColumnDescriptor:
        if metadata.identity is None:
            raise ConfigError(
                f"{metadata.record_name} has no identity column; cannot {operation}"
            ).with_context(**_context(metadata))
        return metadata.identity


# =============================================================================
# MODULE-LEVEL API
# =============================================================================

default_engine = RecordEngine()


def insert(record: Any, session: ConnectionSession) -> bool:
    return default_engine.insert(record, session)


def update(record: Any, session: ConnectionSession, *, include_null: bool = False) -> bool:
    return default_engine.update(record, session, include_null=include_null)


def delete(record: Any, session: ConnectionSession) -> bool:
    return default_engine.delete(record, session)


def fetch(record_type: type[R], session: ConnectionSession, sql: str | SimpleQuery, *params: Any) -> FetchResult[R]:
    return default_engine.fetch(record_type, session, sql, *params)


def fetch_first(record_type: type[R], session: ConnectionSession, sql: str | SimpleQuery, *params: Any) -> R | None:
    return default_engine.fetch_first(record_type, session, sql, *params)


def find(record_type: type[R], session: ConnectionSession, identity_value: Any) -> R | None:
    return default_engine.find(record_type, session, identity_value)


__all__ = [
    "FetchResult",
    "RecordEngine",
    "default_engine",
    "delete",
    "fetch",
    "fetch_first",
    "find",
    "insert",
    "read_field",
    "update",
    "write_field",
]
