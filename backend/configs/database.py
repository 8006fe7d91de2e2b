"""
Database configuration settings.

Manages PostgreSQL connection parameters for the pgvector backend.
A full DSN in DATABASE_URL takes precedence over the discrete fields.

Dependencies: pydantic, pydantic_settings
System role: Database connection configuration for the persistent vector store
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DRIVER_SCHEME = "postgresql+psycopg"


class DatabaseSettings(BaseSettings):
    """PostgreSQL database configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="DATABASE_",
        case_sensitive=False,
        extra="ignore",
    )

    url: str | None = Field(default=None, description="Full PostgreSQL DSN (e.g. Neon URL)")
    host: str = Field(default="localhost", description="PostgreSQL host")
    port: int = Field(default=5432, description="PostgreSQL port")
    user: str = Field(default="postgres", description="PostgreSQL user")
    password: str = Field(default="", description="PostgreSQL password")
    name: str = Field(default="rag_chat_api", description="PostgreSQL database name")
    sslmode: str = Field(default="require", description="SSL mode (require for hosted Postgres)")

    pool_size: int = Field(default=5, description="Connection pool size")
    max_overflow: int = Field(default=10, description="Maximum overflow connections")
    pool_timeout: int = Field(default=30, description="Connection pool checkout timeout in seconds")
    connect_timeout: int = Field(default=10, description="Connect timeout in seconds")
    echo_sql: bool = Field(default=False, description="Echo SQL statements to logs")

    @property
    def database_url(self) -> str:
        """
        Construct SQLAlchemy connection URL using the psycopg driver.

        Returns:
            str: SQLAlchemy-compatible database URL
        """
        if self.url:
            scheme, sep, rest = self.url.partition("://")
            if sep and scheme in ("postgres", "postgresql"):
                return f"{DRIVER_SCHEME}://{rest}"
            return self.url
        return (
            f"{DRIVER_SCHEME}://{self.user}:{self.password}"
            f"@{self.host}:{self.port}/{self.name}?sslmode={self.sslmode}"
        )

    @property
    def is_configured(self) -> bool:
        """Whether enough connection info exists to attempt a connection."""
        return bool(self.url) or bool(self.password)
