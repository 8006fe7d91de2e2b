"""
Tests for configuration classes.
"""

import pytest
from pydantic import ValidationError

from backend.configs.base import ServiceSettings
from backend.configs.blob_storage import BlobStorageSettings
from backend.configs.database import DatabaseSettings
from backend.configs.vector_store import VectorStoreSettings
from backend.core.document_processing.configs import DocumentPipelineSettings


class TestDatabaseSettings:
    def test_hosted_url_uses_psycopg_driver(self):
        settings = DatabaseSettings(url="postgres://u:p@db.example.com/app?sslmode=require")

        assert settings.database_url == "postgresql+psycopg://u:p@db.example.com/app?sslmode=require"
        assert settings.is_configured is True

    def test_url_built_from_fields(self):
        settings = DatabaseSettings(
            url=None, host="db", port=5433, user="rag", password="secret", name="chat", sslmode="disable"
        )

        assert settings.database_url == "postgresql+psycopg://rag:secret@db:5433/chat?sslmode=disable"

    def test_unconfigured(self):
        assert DatabaseSettings(url=None, password="").is_configured is False

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "postgresql://x:y@h/d")

        assert DatabaseSettings().url == "postgresql://x:y@h/d"


class TestVectorStoreSettings:
    def test_defaults(self):
        settings = VectorStoreSettings()

        assert settings.dimensions == 1536
        assert (settings.default_top_k, settings.default_score_threshold) == (5, 0.7)
        assert (settings.rag_top_k, settings.rag_score_threshold) == (3, 0.6)

    @pytest.mark.parametrize("name", ["bad-name", "1starts_with_digit", "drop table;"])
    def test_table_name_must_be_identifier(self, name):
        with pytest.raises(ValidationError):
            VectorStoreSettings(table_name=name)


class TestPipelineSettings:
    def test_overlap_must_be_smaller_than_size(self):
        with pytest.raises(ValidationError):
            DocumentPipelineSettings(chunk_size=100, chunk_overlap=100)

    def test_supported_types_include_pdf(self):
        assert "application/pdf" in DocumentPipelineSettings().supported_media_types


class TestBlobStorageSettings:
    def test_disabled_without_bucket(self):
        assert BlobStorageSettings(bucket=None).enabled is False
        assert BlobStorageSettings(bucket="docs").enabled is True


class TestServiceSettings:
    """Service identity, environment and log level."""

    def test_defaults(self, monkeypatch):
        for name in ("APP_NAME", "ENVIRONMENT", "DEBUG", "LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)

        settings = ServiceSettings(_env_file=None)

        assert settings.app_name == "RAG Chat API"
        assert settings.environment == "development"
        assert settings.effective_log_level == "INFO"

    def test_log_level_is_normalized(self):
        assert ServiceSettings(log_level=" warning ").log_level == "WARNING"

    def test_unknown_log_level_rejected(self):
        with pytest.raises(ValidationError):
            ServiceSettings(log_level="LOUD")

    def test_environment_read_case_insensitively(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "Production")

        assert ServiceSettings().environment == "production"

    def test_unknown_environment_rejected(self):
        with pytest.raises(ValidationError):
            ServiceSettings(environment="qa")

    def test_debug_forces_debug_logging(self):
        settings = ServiceSettings(debug=True, log_level="ERROR")

        assert settings.log_level == "ERROR"
        assert settings.effective_log_level == "DEBUG"
