"""Database types and configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

from rowspine.core.errors import ConfigError

if TYPE_CHECKING:
    from rowspine.core.settings import DatabaseSettings


class DatabaseType(str, Enum):
    """Supported database drivers."""

    SQLITE = "sqlite"
    POSTGRESQL = "postgresql"
    MYSQL = "mysql"
    MARIADB = "mariadb"


DEFAULT_PORTS: dict[DatabaseType, int] = {
    DatabaseType.POSTGRESQL: 5432,
    DatabaseType.MYSQL: 3306,
    DatabaseType.MARIADB: 3306,
}


@dataclass
class DatabaseConfig:
    """
    Configuration for one database connection.

    The password is held in a mutable ``bytearray`` so the caller can wipe
    it once the connection is open; it is never rendered into the
    connection string.
    """

    db_type: DatabaseType = DatabaseType.SQLITE

    host: str = "localhost"
    port: int | None = None
    database: str = ":memory:"
    username: str | None = None
    password: bytearray | None = field(default=None, repr=False)

    connect_timeout: int = 10

    # Extra options (driver-specific keyword arguments)
    options: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if isinstance(self.password, (str, bytes)):
            raw = self.password.encode("utf-8") if isinstance(self.password, str) else self.password
            self.password = bytearray(raw)
        if self.port is None:
            self.port = DEFAULT_PORTS.get(self.db_type)

    @classmethod
    def from_settings(cls, settings: DatabaseSettings) -> DatabaseConfig:
        """Build a config from environment-loaded settings."""
        secret = settings.password
        return cls(
            db_type=settings.driver,
            host=settings.host,
            port=settings.resolved_port(),
            database=settings.database,
            username=settings.username,
            password=bytearray(secret.get_secret_value().encode("utf-8")) if secret else None,
        )

    def password_text(self) -> str | None:
        """Decode the password buffer for handing to a driver."""
        if self.password is None:
            return None
        return self.password.decode("utf-8")

    def wipe_password(self) -> None:
        """Overwrite the password buffer with zeros and drop it."""
        if self.password is not None:
            for index in range(len(self.password)):
                self.password[index] = 0
            self.password = None

    def to_connection_string(self) -> str:
        """Generate the credential-free connection string for the driver."""
        match self.db_type:
            case DatabaseType.SQLITE:
                return f"sqlite:{self.database}"
            case DatabaseType.POSTGRESQL:
                return f"postgresql://{self.host}:{self.port}/{self.database}"
            case DatabaseType.MYSQL:
                return f"mysql://{self.host}:{self.port}/{self.database}"
            case DatabaseType.MARIADB:
                return f"mariadb://{self.host}:{self.port}/{self.database}"
            case _:
                raise ConfigError(f"Connection string not supported for: {self.db_type}")


__all__ = [
    "DEFAULT_PORTS",
    "DatabaseType",
    "DatabaseConfig",
]
