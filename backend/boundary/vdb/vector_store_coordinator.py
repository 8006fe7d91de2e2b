"""
Vector store coordinator.

Owns the single active vector backend. `initialize()` tries the persistent
(pgvector) backend and, when that fails and the deployment allows it,
falls back to the in-memory backend, recording the fact in every stats
response. Callers embed and store, search, delete and count through this
one interface and never see which backend is active.

Dependencies: backend.boundary.vdb, backend.core.document_processing
System role: Backend selection and fallback policy for the vector index
"""

import logging
import threading
from typing import Callable, Sequence

from backend.boundary.vdb.base import VectorIndex
from backend.boundary.vdb.vector_schemas import (
    BackendHealth,
    DeleteResult,
    VectorSearchResult,
    VectorStoreStats,
)
from backend.configs.vector_store import VectorStoreSettings
from backend.core.document_processing.models import ChunkRecord
from backend.core.document_processing.tasks import EmbeddingTask
from backend.core.exceptions import (
    BackendUnavailableError,
    ConfigurationError,
    RagChatException,
)
from backend.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)

BackendFactory = Callable[[], VectorIndex]


class VectorStoreCoordinator:
    """Single entry point to whichever vector backend is active."""

    def __init__(
        self,
        settings: VectorStoreSettings,
        embedding_task: EmbeddingTask,
        persistent_factory: BackendFactory,
        fallback_factory: BackendFactory,
    ) -> None:
        """
        Initialize coordinator (no backend is selected yet).

        Args:
            settings: Vector store settings (fallback policy, retrieval defaults)
            embedding_task: Embeds chunk texts and queries
            persistent_factory: Builds the persistent backend
            fallback_factory: Builds the ephemeral backend
        """
        self._settings = settings
        self._embedding_task = embedding_task
        self._persistent_factory = persistent_factory
        self._fallback_factory = fallback_factory
        self._backend: VectorIndex | None = None
        self._init_lock = threading.Lock()

    @property
    def is_initialized(self) -> bool:
        return self._backend is not None

    @property
    def using_memory_fallback(self) -> bool:
        return self._backend is not None and self._backend.is_ephemeral

    @property
    def backend(self) -> VectorIndex:
        if self._backend is None:
            return self.initialize()
        return self._backend

    def initialize(self) -> VectorIndex:
        """
        Select the active backend. Idempotent.

        Returns:
            VectorIndex: The active backend

        Raises:
            ConfigurationError: Schema or embedding dimension drift that may not be migrated
            BackendUnavailableError: Persistent backend failed and fallback is disabled
        """
        with self._init_lock:
            if self._backend is not None:
                return self._backend

            if self._settings.verify_embedding_dimensions:
                self._embedding_task.embed_query("dimension check")

            try:
                self._backend = self._start(self._persistent_factory)
                logger.info(
                    f"{__name__}:initialize - Using {self._backend.backend_type} vector store"
                )
                return self._backend
            except ConfigurationError:
                raise
            except Exception as e:
                if not self._settings.use_memory_fallback:
                    log_exception_with_context(
                        logger,
                        f"{__name__}:initialize - Persistent vector store unavailable",
                        e,
                    )
                    raise BackendUnavailableError(
                        f"Persistent vector store unavailable: {e}",
                        backend="PostgreSQL",
                    ) from e

                logger.warning(
                    f"{__name__}:initialize - Persistent vector store unavailable, "
                    f"falling back to in-memory store: {e}",
                    extra={"error_type": type(e).__name__},
                )

            self._backend = self._start(self._fallback_factory)
            return self._backend

    def reinitialize(self) -> VectorIndex:
        """Drop the active backend and select one again."""
        self.close()
        return self.initialize()

    def add_documents(self, records: Sequence[ChunkRecord]) -> list[str]:
        """
        Embed and store chunk records.

        The whole batch is reported as failed if embedding or insertion
        fails. The persistent backend inserts in one transaction; other
        backends may keep chunks written before the failure.

        Args:
            records: Records for one document, in chunk order

        Returns:
            list[str]: Assigned chunk ids in input order

        Raises:
            ProviderError: Embedding provider failed
            ConfigurationError: Vector length does not match the backend
            VectorStoreError: Backend insert failed
        """
        if not records:
            return []

        backend = self.backend
        pending = [index for index, record in enumerate(records) if record.vector is None]
        vectors = self._embedding_task.embed_texts([records[i].text for i in pending])
        embedded = list(records)
        for index, vector in zip(pending, vectors):
            embedded[index] = records[index].model_copy(update={"vector": vector})

        try:
            ids = backend.add(embedded)
        except RagChatException as e:
            e.details.setdefault(
                "document_ids", sorted({r.document_id for r in records if r.document_id})
            )
            e.details.setdefault("stage", "store")
            raise

        logger.debug(
            f"{__name__}:add_documents - Stored {len(ids)} chunks",
            extra={"backend": backend.backend_type},
        )
        return ids

    def search(
        self,
        query_vector: Sequence[float],
        k: int | None = None,
        score_threshold: float | None = None,
    ) -> list[VectorSearchResult]:
        """Rank stored chunks by cosine similarity to query_vector."""
        return self.backend.search(
            query_vector,
            self._settings.default_top_k if k is None else k,
            self._settings.default_score_threshold if score_threshold is None else score_threshold,
        )

    def search_by_text(
        self,
        query: str,
        k: int | None = None,
        score_threshold: float | None = None,
    ) -> list[VectorSearchResult]:
        """Embed query and search."""
        backend = self.backend
        query_vector = self._embedding_task.embed_query(query)
        return backend.search(
            query_vector,
            self._settings.default_top_k if k is None else k,
            self._settings.default_score_threshold if score_threshold is None else score_threshold,
        )

    def delete_by_document_id(self, document_id: str) -> DeleteResult:
        """Remove every chunk of a document (always 0 on the in-memory store)."""
        return DeleteResult(deleted_chunks=self.backend.delete_by_document_id(document_id))

    def stats(self, document_id: str | None = None) -> VectorStoreStats:
        """Document and chunk counts tagged with the active backend."""
        backend = self.backend
        counts = backend.stats(document_id)
        return VectorStoreStats(
            total_documents=counts.total_documents,
            total_chunks=counts.total_chunks,
            using_memory_fallback=backend.is_ephemeral,
            vector_store_type=backend.backend_type,
        )

    def health(self) -> BackendHealth:
        backend = self.backend
        return BackendHealth(
            vector_store_type=backend.backend_type,
            using_memory_fallback=backend.is_ephemeral,
            healthy=backend.health_check(),
        )

    def close(self) -> None:
        with self._init_lock:
            if self._backend is not None:
                self._backend.close()
                self._backend = None

    def _start(self, factory: BackendFactory) -> VectorIndex:
        backend = factory()
        try:
            backend.initialize()
        except Exception:
            backend.close()
            raise
        return backend
