"""
Vector store factory.

Builds the persistent (pgvector) and ephemeral (in-memory) backends from
settings and wires them into a VectorStoreCoordinator.

Dependencies: backend.boundary.vdb, backend.boundary.db, backend.configs
System role: Vector store instantiation and selection
"""

import logging

from backend.boundary.db.connection import get_engine
from backend.boundary.vdb.memory_store import InMemoryVectorStore
from backend.boundary.vdb.pgvector_store import PgVectorStore
from backend.boundary.vdb.vector_store_coordinator import VectorStoreCoordinator
from backend.configs.settings import Settings
from backend.core.document_processing.tasks import EmbeddingTask
from backend.core.exceptions import BackendUnavailableError

logger = logging.getLogger(__name__)


def create_pgvector_store(settings: Settings) -> PgVectorStore:
    """
    Build the pgvector backend (no connection is opened until initialize()).

    Raises:
        BackendUnavailableError: No database URL or password is configured
    """
    if not settings.database.is_configured:
        raise BackendUnavailableError(
            "Database is not configured (set DATABASE_URL or DATABASE_PASSWORD)",
            backend="PostgreSQL",
        )

    logger.info(
        f"{__name__}:create_pgvector_store - Creating pgvector store",
        extra={"table": settings.vector_store.table_name},
    )
    return PgVectorStore(get_engine(settings.database), settings.vector_store)


def create_memory_store(settings: Settings) -> InMemoryVectorStore:
    """Build the in-memory backend."""
    return InMemoryVectorStore(dimensions=settings.vector_store.dimensions)


def create_coordinator(settings: Settings, embedding_task: EmbeddingTask) -> VectorStoreCoordinator:
    """Wire both backends into a coordinator (call initialize() before use)."""
    return VectorStoreCoordinator(
        settings=settings.vector_store,
        embedding_task=embedding_task,
        persistent_factory=lambda: create_pgvector_store(settings),
        fallback_factory=lambda: create_memory_store(settings),
    )
