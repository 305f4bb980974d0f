"""Metadata-driven record mapping for rowspine.

Manifesto:
    A record type is declared once, as a dataclass with ``@table`` and
    ``column()`` attributes. From that single declaration the engine derives
    every INSERT, UPDATE, DELETE and SELECT it needs, enforces the declared
    column constraints before any I/O, and coerces values coming back from
    the driver into the declared field types.

Modules
-------
schema      @table decorator and column() field factory
metadata    ColumnDescriptor / TableMetadata + read_metadata()
cache       MetadataCache (thread-safe, build-once) + metadata_for()
coercion    ScalarKind, sized scalar types, coerce()
statements  StatementBuilder -> Statement (sql, parameters)
engine      RecordEngine + module-level insert/update/delete/fetch/find

Tags:
    rowspine, orm, declarative, dataclass, metadata-driven

Doc-Types:
    package-overview, module-index
"""

from __future__ import annotations

from rowspine.core.query import SimpleQuery
from rowspine.orm.cache import MetadataCache, default_cache, metadata_for
from rowspine.orm.coercion import (
    Char,
    Float32,
    Float64,
    Int8,
    Int16,
    Int32,
    Int64,
    ScalarKind,
    coerce,
    widen,
)
from rowspine.orm.engine import (
    FetchResult,
    RecordEngine,
    default_engine,
    delete,
    fetch,
    fetch_first,
    find,
    insert,
    update,
)
from rowspine.orm.metadata import ColumnDescriptor, TableMetadata, read_metadata
from rowspine.orm.schema import column, table
from rowspine.orm.statements import Statement, StatementBuilder

__all__ = [
    # Declaration
    "table",
    "column",
    # Metadata
    "ColumnDescriptor",
    "TableMetadata",
    "read_metadata",
    "MetadataCache",
    "default_cache",
    "metadata_for",
    # Coercion
    "ScalarKind",
    "Char",
    "Float32",
    "Float64",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "coerce",
    "widen",
    # Statements
    "SimpleQuery",
    "Statement",
    "StatementBuilder",
    # Engine
    "FetchResult",
    "RecordEngine",
    "default_engine",
    "insert",
    "update",
    "delete",
    "fetch",
    "fetch_first",
    "find",
]
