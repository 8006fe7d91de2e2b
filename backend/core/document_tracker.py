"""
Document lifecycle tracking.

Registry of uploaded documents keyed by document ID. Chunk records carry
the same ID in their metadata, so whole-document deletion and
per-document chunk counts go through the vector store coordinator with
that key. The registry lives in process memory.

Dependencies: backend.boundary.vdb, backend.models
System role: Document registry and per-document vector bookkeeping
"""

import logging
import threading
from typing import TYPE_CHECKING

from backend.boundary.vdb.vector_schemas import DeleteResult
from backend.core.exceptions import DocumentNotFoundError
from backend.models.document import DocumentInfo, StorageStats

if TYPE_CHECKING:
    from backend.boundary.vdb.vector_store_coordinator import VectorStoreCoordinator

logger = logging.getLogger(__name__)


class DocumentLifecycleTracker:
    """Uploaded document registry bound to the vector store."""

    def __init__(self, coordinator: "VectorStoreCoordinator") -> None:
        self._coordinator = coordinator
        self._documents: dict[str, DocumentInfo] = {}
        self._inline_content: dict[str, bytes] = {}
        self._lock = threading.Lock()

    def register(self, info: DocumentInfo, content: bytes | None = None) -> DocumentInfo:
        """
        Add a document to the registry.

        Args:
            info: Registry entry
            content: Original bytes, kept for inline-stored documents
        """
        with self._lock:
            self._documents[info.id] = info
            if content is not None and info.storage_type == "inline":
                self._inline_content[info.id] = content
        logger.info(
            f"{__name__}:register - Registered document {info.id}",
            extra={"document_id": info.id, "storage_type": info.storage_type},
        )
        return info

    def get(self, document_id: str) -> DocumentInfo:
        info = self._documents.get(document_id)
        if info is None:
            raise DocumentNotFoundError(document_id)
        return info

    def get_inline_content(self, document_id: str) -> bytes | None:
        return self._inline_content.get(document_id)

    def list_documents(self) -> list[DocumentInfo]:
        return list(self._documents.values())

    def update(self, document_id: str, **changes) -> DocumentInfo:
        with self._lock:
            updated = self.get(document_id).model_copy(update=changes)
            self._documents[document_id] = updated
        return updated

    def remove(self, document_id: str) -> DocumentInfo:
        """Drop a registry entry (and any inline bytes) without touching chunks."""
        with self._lock:
            info = self._documents.pop(document_id, None)
            self._inline_content.pop(document_id, None)
        if info is None:
            raise DocumentNotFoundError(document_id)
        logger.info(
            f"{__name__}:remove - Removed document {document_id}",
            extra={"document_id": document_id},
        )
        return info

    def chunk_count(self, document_id: str) -> int:
        """Chunks currently indexed for a document."""
        return self._coordinator.stats(document_id).total_chunks

    def delete_chunks(self, document_id: str) -> DeleteResult:
        """Delete every indexed chunk of a document."""
        result = self._coordinator.delete_by_document_id(document_id)
        if self._coordinator.using_memory_fallback:
            logger.warning(
                f"{__name__}:delete_chunks - In-memory store kept chunks of {document_id}",
                extra={"document_id": document_id},
            )
        return result

    def storage_stats(self) -> StorageStats:
        documents = self.list_documents()
        blob_docs = [doc for doc in documents if doc.storage_type == "blob"]
        inline_docs = [doc for doc in documents if doc.storage_type == "inline"]
        return StorageStats(
            total=len(documents),
            blob=len(blob_docs),
            inline=len(inline_docs),
            total_size=sum(doc.size for doc in documents),
            blob_size=sum(doc.size for doc in blob_docs),
            inline_size=sum(doc.size for doc in inline_docs),
        )
