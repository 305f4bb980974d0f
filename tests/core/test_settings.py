"""Tests for core.settings module.

Covers:
- DatabaseSettings defaults
- ROWSPINE_DB_* environment overrides
- Port resolution per driver
- Validation of bad values
"""

import pytest
from pydantic import ValidationError

from rowspine.core.adapters.types import DatabaseType
from rowspine.core.settings import DatabaseSettings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("DRIVER", "HOST", "PORT", "DATABASE", "USERNAME", "PASSWORD", "LOG_LEVEL"):
        monkeypatch.delenv(f"ROWSPINE_DB_{name}", raising=False)


class TestDatabaseSettingsDefaults:
    def test_defaults(self):
        s = DatabaseSettings(_env_file=None)
        assert s.driver is DatabaseType.SQLITE
        assert s.host == "localhost"
        assert s.port is None
        assert s.database == ":memory:"
        assert s.username is None
        assert s.password is None
        assert s.log_level == "INFO"

    def test_sqlite_has_no_port(self):
        assert DatabaseSettings(_env_file=None).resolved_port() is None


class TestDatabaseSettingsEnvOverride:
    def test_env_vars(self, monkeypatch):
        monkeypatch.setenv("ROWSPINE_DB_DRIVER", "postgresql")
        monkeypatch.setenv("ROWSPINE_DB_HOST", "db.internal")
        monkeypatch.setenv("ROWSPINE_DB_DATABASE", "school")
        monkeypatch.setenv("ROWSPINE_DB_USERNAME", "app")
        monkeypatch.setenv("ROWSPINE_DB_PASSWORD", "hunter2")

        s = DatabaseSettings(_env_file=None)

        assert s.driver is DatabaseType.POSTGRESQL
        assert s.host == "db.internal"
        assert s.database == "school"
        assert s.username == "app"
        assert s.password.get_secret_value() == "hunter2"
        assert s.resolved_port() == 5432

    def test_explicit_port_wins(self, monkeypatch):
        monkeypatch.setenv("ROWSPINE_DB_DRIVER", "mariadb")
        monkeypatch.setenv("ROWSPINE_DB_PORT", "3307")
        assert DatabaseSettings(_env_file=None).resolved_port() == 3307

    def test_password_hidden_in_repr(self, monkeypatch):
        monkeypatch.setenv("ROWSPINE_DB_PASSWORD", "hunter2")
        assert "hunter2" not in repr(DatabaseSettings(_env_file=None))

    def test_env_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("ROWSPINE_DB_DRIVER=mysql\nROWSPINE_DB_DATABASE=from_file\n")
        s = DatabaseSettings(_env_file=env_file)
        assert s.driver is DatabaseType.MYSQL
        assert s.database == "from_file"


class TestDatabaseSettingsValidation:
    def test_unknown_driver(self, monkeypatch):
        monkeypatch.setenv("ROWSPINE_DB_DRIVER", "oracle")
        with pytest.raises(ValidationError):
            DatabaseSettings(_env_file=None)

    def test_port_out_of_range(self):
        with pytest.raises(ValidationError):
            DatabaseSettings(_env_file=None, port=70000)
