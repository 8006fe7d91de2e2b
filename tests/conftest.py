"""
Shared test fixtures and configuration for entire test suite.

Provides: deterministic fake embeddings and chat model, settings without a
database, and an in-memory vector store coordinator.
Dependencies: pytest, langchain_core
System role: Test infrastructure and fixture management
"""

import pytest
from langchain_core.embeddings import DeterministicFakeEmbedding
from langchain_core.language_models.fake_chat_models import FakeListChatModel

from backend.boundary.vdb.memory_store import InMemoryVectorStore
from backend.boundary.vdb.vector_store_coordinator import VectorStoreCoordinator
from backend.configs.blob_storage import BlobStorageSettings
from backend.configs.database import DatabaseSettings
from backend.configs.settings import Settings
from backend.configs.vector_store import VectorStoreSettings
from backend.core.document_processing.configs import DocumentPipelineSettings
from backend.core.document_processing.tasks import EmbeddingTask
from backend.core.exceptions import BackendUnavailableError

TEST_DIMENSIONS = 64


def unavailable_backend():
    raise BackendUnavailableError("Database is not configured", backend="PostgreSQL")


@pytest.fixture
def fake_embeddings() -> DeterministicFakeEmbedding:
    """Same text always maps to the same vector."""
    return DeterministicFakeEmbedding(size=TEST_DIMENSIONS)


@pytest.fixture
def fake_chat_model() -> FakeListChatModel:
    return FakeListChatModel(responses=["This is a test reply."])


@pytest.fixture
def vector_settings() -> VectorStoreSettings:
    return VectorStoreSettings(
        dimensions=TEST_DIMENSIONS,
        use_memory_fallback=True,
        allow_destructive_migration=True,
        verify_embedding_dimensions=False,
    )


@pytest.fixture
def pipeline_settings() -> DocumentPipelineSettings:
    return DocumentPipelineSettings(chunk_size=1000, chunk_overlap=200)


@pytest.fixture
def test_settings(vector_settings, pipeline_settings) -> Settings:
    """Settings with no database and no blob bucket configured."""
    return Settings(
        database=DatabaseSettings(url=None, password=""),
        vector_store=vector_settings,
        pipeline=pipeline_settings,
        blob_storage=BlobStorageSettings(bucket=None),
    )


@pytest.fixture
def embedding_task(fake_embeddings) -> EmbeddingTask:
    return EmbeddingTask(fake_embeddings, dimensions=TEST_DIMENSIONS)


@pytest.fixture
def memory_coordinator(vector_settings, embedding_task) -> VectorStoreCoordinator:
    """Initialized coordinator that has fallen back to the in-memory store."""
    coordinator = VectorStoreCoordinator(
        settings=vector_settings,
        embedding_task=embedding_task,
        persistent_factory=unavailable_backend,
        fallback_factory=lambda: InMemoryVectorStore(TEST_DIMENSIONS),
    )
    coordinator.initialize()
    yield coordinator
    coordinator.close()
