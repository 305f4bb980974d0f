"""Tests for rowspine.core.errors module."""

import sqlite3

import pytest

from rowspine.core.errors import (
    CoercionError,
    ConfigError,
    ConstraintError,
    DatabaseConnectionError,
    DatabaseError,
    ErrorCategory,
    ErrorContext,
    FieldAccessError,
    FieldAccessorError,
    FieldInspectionError,
    FieldNotAccessibleError,
    QueryError,
    RowSpineError,
    UnsupportedCoercionError,
    ValidationError,
    categorize_error,
    is_retryable,
)


class TestErrorContext:
    """Test ErrorContext dataclass."""

    def test_create_empty_context(self):
        ctx = ErrorContext()
        assert ctx.to_dict() == {}

    def test_to_dict_excludes_none(self):
        ctx = ErrorContext(table="student", column="name")
        assert ctx.to_dict() == {"table": "student", "column": "name"}

    def test_metadata_merged(self):
        ctx = ErrorContext(record_type="Student", metadata={"attempt": 2})
        assert ctx.to_dict() == {"record_type": "Student", "attempt": 2}


class TestRowSpineError:
    """Test base error behaviour."""

    def test_defaults(self):
        error = RowSpineError("boom")
        assert error.message == "boom"
        assert error.category == ErrorCategory.INTERNAL
        assert error.retryable is False
        assert error.cause is None

    def test_cause_is_chained(self):
        cause = ValueError("inner")
        error = RowSpineError("outer", cause=cause)
        assert error.cause is cause
        assert error.__cause__ is cause

    def test_with_context_known_and_extra_keys(self):
        error = ConfigError("no table").with_context(record_type="Student", hint="use @table")
        assert error.context.record_type == "Student"
        assert error.context.metadata == {"hint": "use @table"}

    def test_with_context_returns_same_instance(self):
        error = QueryError("bad sql")
        assert error.with_context(sql="SELECT") is error

    def test_to_dict(self):
        error = QueryError("bad sql", cause=sqlite3.OperationalError("no such table")).with_context(
            sql="SELECT * FROM nope"
        )
        data = error.to_dict()
        assert data["error_type"] == "QueryError"
        assert data["category"] == "DATABASE"
        assert data["context"] == {"sql": "SELECT * FROM nope"}
        assert data["cause"] == "no such table"

    def test_repr(self):
        assert repr(ConfigError("x")) == "ConfigError('x', category=CONFIG)"


class TestErrorFamilies:
    """Each family carries its category and retry default."""

    @pytest.mark.parametrize(
        "error_cls, category",
        [
            (ConfigError, ErrorCategory.CONFIG),
            (ValidationError, ErrorCategory.VALIDATION),
            (ConstraintError, ErrorCategory.VALIDATION),
            (CoercionError, ErrorCategory.COERCION),
            (UnsupportedCoercionError, ErrorCategory.COERCION),
            (DatabaseError, ErrorCategory.DATABASE),
            (QueryError, ErrorCategory.DATABASE),
            (DatabaseConnectionError, ErrorCategory.DATABASE),
            (FieldInspectionError, ErrorCategory.MAPPING),
            (FieldNotAccessibleError, ErrorCategory.MAPPING),
            (FieldAccessorError, ErrorCategory.MAPPING),
        ],
    )
    def test_category(self, error_cls, category):
        assert error_cls("x").category == category

    def test_only_connection_errors_retry(self):
        assert DatabaseConnectionError("refused").retryable is True
        assert QueryError("syntax").retryable is False
        assert ConstraintError("null").retryable is False

    def test_field_errors_share_base(self):
        for error_cls in (FieldInspectionError, FieldNotAccessibleError, FieldAccessorError):
            assert issubclass(error_cls, FieldAccessError)
            assert issubclass(error_cls, RowSpineError)

    def test_constraint_error_fields(self):
        error = ConstraintError("too long", field="name", value="x" * 50, constraint="max_length")
        data = error.to_dict()
        assert data["field"] == "name"
        assert data["constraint"] == "max_length"
        assert "value" in data

    def test_coercion_error_fields(self):
        error = CoercionError("nope", value="ab", target=str)
        assert error.value == "ab"
        assert error.target is str


class TestUtilities:
    def test_is_retryable(self):
        assert is_retryable(DatabaseConnectionError("x")) is True
        assert is_retryable(ConfigError("x")) is False
        assert is_retryable(ConnectionError("reset")) is True
        assert is_retryable(ValueError("x")) is False

    def test_categorize_error(self):
        assert categorize_error(ConstraintError("x")) == ErrorCategory.VALIDATION
        assert categorize_error(OSError("disk")) == ErrorCategory.DATABASE
        assert categorize_error(ValueError("x")) == ErrorCategory.COERCION
        assert categorize_error(AttributeError("x")) == ErrorCategory.MAPPING
        assert categorize_error(KeyError("x")) == ErrorCategory.UNKNOWN
