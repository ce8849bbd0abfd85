"""Configuration for the RBAC Admin API, read from the environment.

Defaults target a local PostgreSQL. Set ``RBAC_DB_DRIVER=sqlite+aiosqlite``
and ``RBAC_DB_DATABASE=<path>`` for a file-backed development database.
"""

from functools import lru_cache

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Database connection settings.

    Environment variables:
        RBAC_DB_DRIVER: SQLAlchemy async driver (default: postgresql+asyncpg)
        RBAC_DB_HOST: Database host (default: localhost)
        RBAC_DB_PORT: Database port (default: 5432)
        RBAC_DB_DATABASE: Database name, or file path for SQLite (default: rbac)
        RBAC_DB_USERNAME: Database user (default: rbac)
        RBAC_DB_PASSWORD: Database password (required in production)
        RBAC_DB_POOL_SIZE: Connections kept in the pool (default: 10)
        RBAC_DB_ECHO: Log emitted SQL (default: false)
        RBAC_DB_CREATE_SCHEMA: Create tables on startup (default: false)
    """

    model_config = SettingsConfigDict(
        env_prefix="RBAC_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    driver: str = Field(
        default="postgresql+asyncpg",
        description="SQLAlchemy async driver name",
    )
    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    database: str = Field(default="rbac", description="Database name")
    username: str = Field(default="rbac", description="Database username")
    password: SecretStr = Field(
        default=SecretStr(""),
        description="Database password",
    )
    pool_size: int = Field(
        default=10,
        description="Connections kept in the pool",
        ge=1,
        le=100,
    )
    echo: bool = Field(default=False, description="Log emitted SQL")
    create_schema: bool = Field(
        default=False,
        description="Create tables at startup instead of running migrations",
    )

    @property
    def is_sqlite(self) -> bool:
        """Whether the configured driver targets SQLite."""
        return self.driver.startswith("sqlite")

    @property
    def connection_string(self) -> str:
        """Connection target for log events; never includes the password."""
        if self.is_sqlite:
            return f"sqlite:///{self.database}"
        return f"postgresql://{self.username}@{self.host}:{self.port}/{self.database}"


class Settings(BaseSettings):
    """Application-wide settings (``APP_NAME``, ``DEBUG``)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = Field(default="RBAC Admin API", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")

    @property
    def database(self) -> DatabaseSettings:
        """Get database settings."""
        return get_database_settings()


@lru_cache
def get_settings() -> Settings:
    return Settings()


@lru_cache
def get_database_settings() -> DatabaseSettings:
    """Database settings, loaded once per process.

    Call ``get_database_settings.cache_clear()`` after changing ``RBAC_DB_*``
    variables at runtime.
    """
    return DatabaseSettings()
