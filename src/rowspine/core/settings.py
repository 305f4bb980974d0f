"""Environment-driven connection settings.

``DatabaseSettings`` reads the connection parameters a
:class:`~rowspine.core.adapters.types.DatabaseConfig` needs from
``ROWSPINE_DB_*`` environment variables or a ``.env`` file, validates them
at startup, and keeps the password as a ``SecretStr`` until it is copied
into the config's wipeable buffer.

Examples:
    >>> import os
    >>> os.environ["ROWSPINE_DB_DRIVER"] = "postgresql"
    >>> os.environ["ROWSPINE_DB_DATABASE"] = "school"
    >>> settings = DatabaseSettings()
    >>> settings.resolved_port()
    5432

Tags:
    settings, configuration, pydantic, environment, rowspine
"""

from __future__ import annotations

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from rowspine.core.adapters.types import DEFAULT_PORTS, DatabaseType


class DatabaseSettings(BaseSettings):
    """Connection settings for one database.

    Fields
    ──────
    driver     : Driver kind (sqlite, postgresql, mysql, mariadb)
    host       : Server host (ignored by sqlite)
    port       : Server port; ``None`` picks the driver default
    database   : Database name, or file path for sqlite
    username   : Login name
    password   : Login password
    log_level  : Structlog log level
    """

    model_config = SettingsConfigDict(
        env_prefix="ROWSPINE_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    driver: DatabaseType = DatabaseType.SQLITE
    host: str = "localhost"
    port: int | None = Field(default=None, ge=1, le=65535)
    database: str = ":memory:"
    username: str | None = None
    password: SecretStr | None = None

    log_level: str = "INFO"

    def resolved_port(self) -> int | None:
        """Configured port, or the driver's conventional default."""
        if self.port is not None:
            return self.port
        return DEFAULT_PORTS.get(self.driver)


__all__ = ["DatabaseSettings"]
