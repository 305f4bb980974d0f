"""rowspine -- metadata-driven record mapping over DB-API drivers.

Declare a record once as a dataclass, open a session, and let the engine
write the SQL::

    from dataclasses import dataclass

    from rowspine import ConnectionFactory, DatabaseConfig, Int32, column, table
    from rowspine import orm

    @table("student")
    @dataclass
    class Student:
        id: Int32 | None = column("id", identity=True)
        name: str | None = column("name", nullable=False, length=40)

    factory = ConnectionFactory(DatabaseConfig(database="school.db"))
    with factory.create_session() as session:
        student = Student(name="Ada")
        orm.insert(student, session)
        orm.find(Student, session, student.id)

Packages
--------
rowspine.core   Connections, sessions, dialects, results, errors, logging
rowspine.orm    Declarations, metadata cache, coercion, record engine
"""

from rowspine.core import (
    ConfigError,
    ConnectionFactory,
    ConnectionSession,
    ConstraintError,
    DatabaseConfig,
    DatabaseSettings,
    DatabaseType,
    Row,
    RowSpineError,
    SimpleQuery,
    TabularResult,
)
from rowspine.orm import (
    Char,
    FetchResult,
    Float32,
    Float64,
    Int8,
    Int16,
    Int32,
    Int64,
    MetadataCache,
    RecordEngine,
    coerce,
    column,
    table,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Connections
    "ConnectionFactory",
    "ConnectionSession",
    "DatabaseConfig",
    "DatabaseSettings",
    "DatabaseType",
    "SimpleQuery",
    "Row",
    "TabularResult",
    # Mapping
    "table",
    "column",
    "MetadataCache",
    "RecordEngine",
    "FetchResult",
    "coerce",
    "Char",
    "Float32",
    "Float64",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    # Errors
    "RowSpineError",
    "ConfigError",
    "ConstraintError",
]
