"""
Structured error types for rowspine.

Every failure the mapper can surface is a ``RowSpineError`` subclass that
carries a category, a retry hint, structured context and the chained driver
or Python exception that caused it. Callers never have to catch raw
``sqlite3.Error``, ``psycopg2.Error`` or ``AttributeError`` coming out of a
mapping operation.

Manifesto:
    - **Typed hierarchy:** one subclass per failure family
    - **Fail before I/O:** constraint violations are raised while the
      statement is being built, never after it was sent
    - **Rich context:** record type, table and column travel with the error
    - **Error chaining:** the original exception is preserved as ``cause``

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────────┐
        │                        RowSpineError                            │
        │  (category, retryable, context, cause)                          │
        ├─────────────────────────────────────────────────────────────────┤
        │                                                                 │
        │  ConfigError        ValidationError       CoercionError         │
        │  (CONFIG)           (VALIDATION)          (COERCION)            │
        │                          │                      │               │
        │                     ConstraintError   UnsupportedCoercionError  │
        │                                                                 │
        │  DatabaseError      DatabaseConnectionError                     │
        │  (DATABASE)         (DATABASE, retryable)                       │
        │       │                                                         │
        │  QueryError                                                     │
        │                                                                 │
        │  FieldAccessError (MAPPING)                                     │
        │       ├── FieldInspectionError     cannot inspect field         │
        │       ├── FieldNotAccessibleError  field not accessible         │
        │       └── FieldAccessorError       field accessor threw         │
        └─────────────────────────────────────────────────────────────────┘

Examples:
    >>> error = ConstraintError(
    ...     "Student.name IS NULL RESTRICTED", field="name", constraint="not_null"
    ... )
    >>> error.retryable
    False
    >>> error.with_context(table="student").context.table
    'student'

Guardrails:
    ❌ DON'T: Raise bare ``RuntimeError`` from mapping code
    ✅ DO: Raise the matching RowSpineError subclass

    ❌ DON'T: Swallow the driver exception
    ✅ DO: Pass it as ``cause=`` so the traceback keeps the root cause

Tags:
    error-handling, exception-hierarchy, orm, rowspine

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """
    Standard error categories for classification and routing.

    Attributes:
        CONFIG: Missing table name, duplicate identity, unsupported driver
        VALIDATION: Null/length/identity constraint violations
        COERCION: Value could not be converted to the declared field type
        DATABASE: Connection and statement failures from the driver
        MAPPING: Reflective field access failures
        INTERNAL: Bugs, unexpected state
        UNKNOWN: Uncategorized errors
    """

    CONFIG = "CONFIG"
    VALIDATION = "VALIDATION"
    COERCION = "COERCION"
    DATABASE = "DATABASE"
    MAPPING = "MAPPING"

    INTERNAL = "INTERNAL"
    UNKNOWN = "UNKNOWN"


@dataclass
class ErrorContext:
    """
    Structured metadata attached to an error.

    Only fields that are set end up in ``to_dict()``; anything that has no
    dedicated field goes into ``metadata``.

    Attributes:
        record_type: Qualified name of the mapped record class
        table: Table name from the ``@table`` attribute
        column: Column name involved in the failure
        sql: Normalized statement text, when one was built
        driver: Driver kind of the session
        metadata: Additional key-value pairs
    """

    record_type: str | None = None
    table: str | None = None
    column: str | None = None
    sql: str | None = None
    driver: str | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["record_type", "table", "column", "sql", "driver"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class RowSpineError(Exception):
    """
    Base exception for all rowspine errors.

    Subclasses set ``default_category`` and ``default_retryable`` so call
    sites only pass what differs from the family default.

    Examples:
        >>> error = RowSpineError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>
        >>> error.to_dict()["retryable"]
        False
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL
    default_retryable: bool = False

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        retryable: bool | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.retryable = retryable if retryable is not None else self.default_retryable
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> RowSpineError:
        """
        Add context to this error (fluent API).

        Usage:
            raise ConfigError("No table name").with_context(record_type="Student")
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
            "retryable": self.retryable,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================


class ConfigError(RowSpineError):
    """
    Configuration error.

    Raised at metadata-build or connection-build time. Never retryable:
    the record declaration or the connection settings must be fixed.
    """

    default_category = ErrorCategory.CONFIG
    default_retryable = False


# =============================================================================
# VALIDATION ERRORS
# =============================================================================


class ValidationError(RowSpineError):
    """
    Data validation error.

    Never retryable - the record must be fixed.
    """

    default_category = ErrorCategory.VALIDATION
    default_retryable = False

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        value: Any = None,
        constraint: str | None = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.field = field
        self.value = value
        self.constraint = constraint

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.field:
            result["field"] = self.field
        if self.value is not None:
            result["value"] = repr(self.value)
        if self.constraint:
            result["constraint"] = self.constraint
        return result


class ConstraintError(ValidationError):
    """Null, length or identity constraint violation."""

    pass


# =============================================================================
# COERCION ERRORS
# =============================================================================


class CoercionError(RowSpineError):
    """A value could not be converted to the requested type."""

    default_category = ErrorCategory.COERCION
    default_retryable = False

    def __init__(self, message: str, *, value: Any = None, target: Any = None, **kwargs: Any):
        super().__init__(message, **kwargs)
        self.value = value
        self.target = target


class UnsupportedCoercionError(CoercionError):
    """The requested target type is outside the supported conversions."""

    pass


# =============================================================================
# DATABASE ERRORS
# =============================================================================


class DatabaseError(RowSpineError):
    """Database statement or transaction error."""

    default_category = ErrorCategory.DATABASE
    default_retryable = False


class QueryError(DatabaseError):
    """SQL statement failed in the driver."""

    pass


class DatabaseConnectionError(DatabaseError):
    """Opening the database connection failed."""

    default_retryable = True


# =============================================================================
# FIELD ACCESS ERRORS
# =============================================================================


class FieldAccessError(RowSpineError):
    """Reading or writing a mapped record field failed."""

    default_category = ErrorCategory.MAPPING
    default_retryable = False

    def __init__(self, message: str, *, field: str | None = None, **kwargs: Any):
        super().__init__(message, **kwargs)
        self.field = field


class FieldInspectionError(FieldAccessError):
    """The field or its record type cannot be inspected."""

    pass


class FieldNotAccessibleError(FieldAccessError):
    """The field cannot be read or written (missing or read-only attribute)."""

    pass


class FieldAccessorError(FieldAccessError):
    """The field's getter or setter raised an exception."""

    pass


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def is_retryable(error: Exception) -> bool:
    """Check if an error is retryable."""
    if isinstance(error, RowSpineError):
        return error.retryable
    return isinstance(error, (ConnectionError, OSError))


def categorize_error(error: Exception) -> ErrorCategory:
    """Get the category of an error."""
    if isinstance(error, RowSpineError):
        return error.category
    if isinstance(error, (ConnectionError, OSError)):
        return ErrorCategory.DATABASE
    if isinstance(error, (TypeError, ValueError)):
        return ErrorCategory.COERCION
    if isinstance(error, AttributeError):
        return ErrorCategory.MAPPING
    return ErrorCategory.UNKNOWN


__all__ = [
    # Category enum
    "ErrorCategory",
    # Context
    "ErrorContext",
    # Base
    "RowSpineError",
    # Config
    "ConfigError",
    # Validation
    "ValidationError",
    "ConstraintError",
    # Coercion
    "CoercionError",
    "UnsupportedCoercionError",
    # Database
    "DatabaseError",
    "QueryError",
    "DatabaseConnectionError",
    # Field access
    "FieldAccessError",
    "FieldInspectionError",
    "FieldNotAccessibleError",
    "FieldAccessorError",
    # Utilities
    "is_retryable",
    "categorize_error",
]
