"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides the cached factory used when building the application context.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from backend.configs.api import ApiSettings
from backend.configs.base import ServiceSettings
from backend.configs.blob_storage import BlobStorageSettings
from backend.configs.database import DatabaseSettings
from backend.configs.llm import LLMSettings
from backend.configs.vector_store import VectorStoreSettings
from backend.core.document_processing.configs import DocumentPipelineSettings


class Settings(ServiceSettings):
    """Unified application settings aggregating all config modules."""

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    vector_store: VectorStoreSettings = Field(default_factory=VectorStoreSettings)
    pipeline: DocumentPipelineSettings = Field(default_factory=DocumentPipelineSettings)
    llm: LLMSettings = Field(default_factory=LLMSettings)
    blob_storage: BlobStorageSettings = Field(default_factory=BlobStorageSettings)
    api: ApiSettings = Field(default_factory=ApiSettings)


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for the process lifetime.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from backend.configs import get_settings
        settings = get_settings()
    """
    return Settings()
