"""Tests for ``rowspine.orm.metadata`` — reading table metadata from declarations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import pytest
from structlog.testing import capture_logs

from rowspine.core.errors import ConfigError, FieldInspectionError
from rowspine.orm.coercion import Char, Float32, Int16, Int32
from rowspine.orm.metadata import ColumnDescriptor, TableMetadata, read_metadata
from rowspine.orm.schema import column, table

from tests._support.records import AuditEntry, Student, TwoIdentities, Undecorated


class TestReadMetadata:
    def test_table_name_and_order(self):
        metadata = read_metadata(Student)
        assert metadata.table_name == "student"
        assert metadata.record_type is Student
        assert metadata.column_names == (
            "id",
            "name",
            "nickname",
            "grade",
            "average",
            "section",
            "active",
            "created",
        )

    def test_identity(self):
        metadata = read_metadata(Student)
        assert metadata.identity is not None
        assert metadata.identity.column_name == "id"
        assert metadata.identity.field_type is Int32

    def test_descriptor_attributes(self):
        name = read_metadata(Student).column("name")
        assert name == ColumnDescriptor(
            field_name="name",
            field_type=str,
            column_name="name",
            null_restricted=True,
            max_length=10,
            truncate=True,
        )

    def test_field_types_widened(self):
        metadata = read_metadata(Student)
        types = {c.field_name: c.field_type for c in metadata.columns}
        assert types["nickname"] is str  # Optional[str]
        assert types["grade"] is Int16  # Int16 | None
        assert types["average"] is Float32  # Annotated[Float32 | None, ...]
        assert types["section"] is Char
        assert types["active"] is bool

    def test_read_only(self):
        assert read_metadata(Student).column("created").read_only is True

    def test_non_column_fields_skipped(self):
        assert read_metadata(Student).column("note") is None

    def test_no_identity(self):
        assert read_metadata(AuditEntry).identity is None

    def test_unknown_column_lookup(self):
        assert read_metadata(Student).column("missing") is None

    def test_metadata_is_frozen(self):
        metadata = read_metadata(Student)
        with pytest.raises(AttributeError):
            metadata.table_name = "other"  # type: ignore[misc]

    def test_logs_build(self):
        with capture_logs() as logs:
            read_metadata(AuditEntry)
        assert logs[0]["event"] == "table_metadata_built"
        assert logs[0]["table"] == "audit_log"
        assert logs[0]["columns"] == 2


class TestReadMetadataFailures:
    def test_two_identities(self):
        with pytest.raises(ConfigError, match="more than one identity") as exc_info:
            read_metadata(TwoIdentities)
        assert exc_info.value.context.table == "broken"

    def test_missing_table_name(self):
        with pytest.raises(ConfigError, match="no table name"):
            read_metadata(Undecorated)

    def test_not_a_dataclass(self):
        @table("plain")
        class Plain:
            value = None

        with pytest.raises(ConfigError, match="not a dataclass"):
            read_metadata(Plain)

    def test_instance_rejected(self):
        with pytest.raises(ConfigError):
            read_metadata(Student())  # type: ignore[arg-type]

    def test_unresolvable_annotation(self):
        @table("ghost")
        @dataclass
        class Ghost:
            value: "MissingType | None" = column("value")  # noqa: F821

        with pytest.raises(FieldInspectionError, match="Cannot inspect fields of"):
            read_metadata(Ghost)


class TestTableMetadata:
    def test_record_name(self):
        metadata = TableMetadata(record_type=Student, table_name="student", columns=())
        assert metadata.record_name == "Student"

    def test_any_typed_column(self):
        @table("loose")
        @dataclass
        class Loose:
            payload: Any = column("payload")

        assert read_metadata(Loose).column("payload").field_type is Any
