"""
Service-wide settings for the RAG chat API.

Holds the identity of the running service and the knobs every layer reads:
deployment environment, debug mode and the root log level.

Dependencies: pydantic_settings
System role: Root of the aggregated Settings class
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class ServiceSettings(BaseSettings):
    """Settings shared by the API process and the schema CLI."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(default="RAG Chat API", description="Title reported by the API")
    app_version: str = Field(default="0.1.0")
    environment: Literal["development", "test", "staging", "production"] = Field(
        default="development",
        description="Deployment environment",
    )
    debug: bool = Field(default=False, description="FastAPI debug mode; forces DEBUG logging")
    log_level: str = Field(default="INFO", description="Root log level name")

    @field_validator("environment", mode="before")
    @classmethod
    def normalize_environment(cls, value: str) -> str:
        return value.strip().lower() if isinstance(value, str) else value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {value}")
        return level

    @property
    def effective_log_level(self) -> str:
        """Log level actually applied at startup."""
        return "DEBUG" if self.debug else self.log_level
