"""Tests for ``rowspine.core.adapters.types`` — driver kinds and DatabaseConfig."""

from __future__ import annotations

import pytest
from pydantic import SecretStr

from rowspine.core.adapters.types import DEFAULT_PORTS, DatabaseConfig, DatabaseType
from rowspine.core.errors import ConfigError
from rowspine.core.settings import DatabaseSettings


class TestDatabaseType:
    def test_values(self):
        assert [t.value for t in DatabaseType] == ["sqlite", "postgresql", "mysql", "mariadb"]

    def test_default_ports(self):
        assert DEFAULT_PORTS[DatabaseType.POSTGRESQL] == 5432
        assert DEFAULT_PORTS[DatabaseType.MYSQL] == 3306
        assert DEFAULT_PORTS[DatabaseType.MARIADB] == 3306
        assert DatabaseType.SQLITE not in DEFAULT_PORTS


class TestDatabaseConfig:
    def test_defaults(self):
        config = DatabaseConfig()
        assert config.db_type is DatabaseType.SQLITE
        assert config.database == ":memory:"
        assert config.port is None
        assert config.password is None

    def test_port_defaults_per_driver(self):
        assert DatabaseConfig(db_type=DatabaseType.POSTGRESQL).port == 5432
        assert DatabaseConfig(db_type=DatabaseType.MYSQL, port=3307).port == 3307

    def test_password_becomes_bytearray(self):
        config = DatabaseConfig(password="s3cret")
        assert isinstance(config.password, bytearray)
        assert config.password_text() == "s3cret"

    def test_password_not_in_repr(self):
        assert "s3cret" not in repr(DatabaseConfig(password="s3cret"))

    def test_wipe_password_zeroes_buffer(self):
        config = DatabaseConfig(password="s3cret")
        buffer = config.password
        config.wipe_password()
        assert config.password is None
        assert config.password_text() is None
        assert bytes(buffer) == b"\x00" * 6

    def test_wipe_without_password(self):
        config = DatabaseConfig()
        config.wipe_password()
        assert config.password is None


class TestConnectionString:
    @pytest.mark.parametrize(
        "db_type, expected",
        [
            (DatabaseType.SQLITE, "sqlite:school"),
            (DatabaseType.POSTGRESQL, "postgresql://db:5432/school"),
            (DatabaseType.MYSQL, "mysql://db:3306/school"),
            (DatabaseType.MARIADB, "mariadb://db:3306/school"),
        ],
    )
    def test_templates(self, db_type, expected):
        config = DatabaseConfig(db_type=db_type, host="db", database="school", username="u", password="p")
        assert config.to_connection_string() == expected

    def test_unsupported_driver(self):
        config = DatabaseConfig(db_type="oracle")  # type: ignore[arg-type]
        with pytest.raises(ConfigError, match="not supported"):
            config.to_connection_string()


class TestFromSettings:
    def test_copies_fields(self):
        settings = DatabaseSettings(
            driver=DatabaseType.MYSQL,
            host="mysql.local",
            database="school",
            username="root",
            password=SecretStr("pw"),
        )
        config = DatabaseConfig.from_settings(settings)
        assert config.db_type is DatabaseType.MYSQL
        assert config.host == "mysql.local"
        assert config.port == 3306
        assert config.username == "root"
        assert config.password == bytearray(b"pw")

    def test_no_password(self):
        config = DatabaseConfig.from_settings(DatabaseSettings(_env_file=None))
        assert config.password is None
