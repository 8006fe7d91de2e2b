"""
HTTP API configuration.

Dependencies: pydantic_settings
System role: Request validation limits and CORS settings
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ApiSettings(BaseSettings):
    """HTTP layer settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="API_",
        case_sensitive=False,
        extra="ignore",
    )

    cors_origins: list[str] = Field(default=["*"], description="Allowed CORS origins")
    max_message_length: int = Field(default=5000, description="Maximum chat message length")
    max_query_length: int = Field(default=1000, description="Maximum search query length")
