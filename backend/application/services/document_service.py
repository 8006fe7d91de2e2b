"""
Document service orchestrator.

Coordinates document upload, processing, search, statistics, download and
deletion. Blocking pipeline, vector store and S3 calls run in the
threadpool so request handlers stay async.

Dependencies: backend.boundary.vdb, backend.boundary.aws, backend.core
System role: Document management orchestration
"""

import logging
import uuid

from fastapi.concurrency import run_in_threadpool

from backend.boundary.aws.s3_client import S3BlobStore
from backend.boundary.vdb.vector_schemas import (
    DeleteResult,
    VectorSearchResult,
    VectorStoreStats,
)
from backend.boundary.vdb.vector_store_coordinator import VectorStoreCoordinator
from backend.core.document_processing import (
    DocumentPipeline,
    DocumentPipelineSettings,
    PipelineResult,
)
from backend.core.document_tracker import DocumentLifecycleTracker
from backend.core.exceptions import (
    DocumentNotFoundError,
    RagChatException,
    UnsupportedMediaTypeError,
    ValidationError,
)
from backend.models.document import (
    DeletedDocumentResponse,
    DocumentDetailResponse,
    DocumentInfo,
    DocumentStatsResponse,
)
from backend.observability.log_utils import log_exception_with_context, log_with_context

logger = logging.getLogger(__name__)


def new_document_id() -> str:
    return f"doc_{uuid.uuid4().hex}"


class DocumentService:
    """
    Document service orchestrator.

    Uses DocumentPipeline for ingestion, the vector store coordinator for
    search and deletion, and the lifecycle tracker as document registry.
    """

    def __init__(
        self,
        pipeline: DocumentPipeline,
        coordinator: VectorStoreCoordinator,
        tracker: DocumentLifecycleTracker,
        settings: DocumentPipelineSettings,
        blob_store: S3BlobStore | None = None,
        search_top_k: int = 5,
        search_score_threshold: float = 0.7,
    ) -> None:
        """
        Initialize document service.

        Args:
            pipeline: Document ingestion pipeline
            coordinator: Vector store coordinator
            tracker: Document registry
            settings: Upload limits and accepted media types
            blob_store: S3 store for original files (bytes kept in memory if None)
            search_top_k: Default result count for similarity search
            search_score_threshold: Default minimum similarity for search
        """
        self.pipeline = pipeline
        self.coordinator = coordinator
        self.tracker = tracker
        self.settings = settings
        self.blob_store = blob_store
        self.search_top_k = search_top_k
        self.search_score_threshold = search_score_threshold

    async def upload_document(
        self,
        content: bytes,
        original_name: str,
        media_type: str,
    ) -> DocumentInfo:
        """
        Store, process and register an uploaded document.

        Processing failures do not fail the upload; the registry entry
        records processed=False and the error message instead.

        Args:
            content: Uploaded bytes
            original_name: Client file name
            media_type: Declared media type

        Returns:
            DocumentInfo: Registry entry

        Raises:
            ValidationError: Empty or oversized upload
            UnsupportedMediaTypeError: Media type is not accepted
            BlobStorageError: Storing the original file failed
        """
        self._validate_upload(content, media_type)
        document_id = new_document_id()

        if self.blob_store is not None:
            stored = await run_in_threadpool(self.blob_store.put, content, original_name, media_type)
            storage = {
                "filename": stored.key.rsplit("/", 1)[-1],
                "path": stored.url,
                "storage_type": "blob",
            }
        else:
            storage = {"filename": original_name, "path": None, "storage_type": "inline"}

        info = DocumentInfo(
            id=document_id,
            original_name=original_name,
            media_type=media_type,
            size=len(content),
            **storage,
        )

        try:
            result = await self.process_document(document_id, content, original_name, media_type)
            info = info.model_copy(update={"processed": True, "processing": result})
        except RagChatException as e:
            logger.warning(
                f"{__name__}:upload_document - Document processing failed: {e.message}",
                extra={"document_id": document_id, "stage": e.details.get("stage")},
            )
            info = info.model_copy(update={"processed": False, "processing_error": e.message})

        registered = self.tracker.register(info, content)
        log_with_context(
            logger,
            logging.INFO,
            f"{__name__}:upload_document - Uploaded {original_name}",
            document_id=document_id,
            storage_type=info.storage_type,
            processed=info.processed,
            size=info.size,
        )
        return registered

    async def process_document(
        self,
        document_id: str,
        content: bytes,
        original_name: str,
        media_type: str,
    ) -> PipelineResult:
        """Extract, chunk, embed and store one document."""
        return await run_in_threadpool(
            self.pipeline.process, document_id, content, original_name, media_type
        )

    async def search_similar_documents(
        self,
        query: str,
        k: int | None = None,
        threshold: float | None = None,
    ) -> list[VectorSearchResult]:
        """
        Similarity search over stored chunks.

        Args:
            query: Search text
            k: Maximum results (default search_top_k)
            threshold: Minimum similarity (default search_score_threshold)

        Returns:
            list[VectorSearchResult]: Best matches first
        """
        return await run_in_threadpool(
            self.coordinator.search_by_text,
            query,
            self.search_top_k if k is None else k,
            self.search_score_threshold if threshold is None else threshold,
        )

    async def get_document_stats(self) -> VectorStoreStats:
        """Vector store counts; zeros with the backend flag when the query fails."""
        try:
            return await run_in_threadpool(self.coordinator.stats)
        except Exception as e:
            log_exception_with_context(logger, f"{__name__}:get_document_stats - Stats failed", e)
            fallback = self.coordinator.using_memory_fallback
            return VectorStoreStats(
                total_documents=0,
                total_chunks=0,
                using_memory_fallback=fallback,
                vector_store_type="Memory" if fallback else "PostgreSQL",
            )

    async def delete_document_from_vector_store(self, document_id: str) -> DeleteResult:
        return await run_in_threadpool(self.tracker.delete_chunks, document_id)

    async def get_overview_stats(self) -> DocumentStatsResponse:
        return DocumentStatsResponse(
            vector_store=await self.get_document_stats(),
            storage=self.tracker.storage_stats(),
            blob_storage_configured=self.blob_store is not None,
        )

    async def list_documents(self) -> list[DocumentInfo]:
        return self.tracker.list_documents()

    async def get_document(self, document_id: str) -> DocumentDetailResponse:
        """
        Registry entry with its current chunk count.

        Raises:
            DocumentNotFoundError: Unknown document ID
        """
        info = self.tracker.get(document_id)
        try:
            chunk_count = await run_in_threadpool(self.tracker.chunk_count, document_id)
        except RagChatException as e:
            logger.warning(f"{__name__}:get_document - Chunk count unavailable: {e.message}")
            chunk_count = None
        return DocumentDetailResponse(**info.model_dump(), chunk_count=chunk_count)

    async def download_document(self, document_id: str) -> tuple[DocumentInfo, bytes]:
        """
        Original bytes of an uploaded document.

        Raises:
            DocumentNotFoundError: Unknown document ID or content no longer held
            BlobStorageError: S3 download failed
        """
        info = self.tracker.get(document_id)
        if info.storage_type == "blob" and self.blob_store is not None and info.path:
            content = await run_in_threadpool(self.blob_store.get, info.path)
        else:
            content = self.tracker.get_inline_content(document_id)
        if content is None:
            raise DocumentNotFoundError(document_id, {"reason": "content not available"})
        return info, content

    async def delete_document(self, document_id: str) -> DeletedDocumentResponse:
        """
        Delete a document's chunks, stored file and registry entry.

        Chunk and file deletion failures are logged and do not stop the
        registry entry from being removed.

        Raises:
            DocumentNotFoundError: Unknown document ID
        """
        info = self.tracker.get(document_id)

        deleted_chunks = 0
        try:
            deleted_chunks = (await self.delete_document_from_vector_store(document_id)).deleted_chunks
        except RagChatException as e:
            logger.warning(
                f"{__name__}:delete_document - Failed to delete from vector store: {e.message}",
                extra={"document_id": document_id},
            )

        if info.storage_type == "blob" and self.blob_store is not None and info.path:
            try:
                await run_in_threadpool(self.blob_store.delete, info.path)
            except RagChatException as e:
                logger.warning(
                    f"{__name__}:delete_document - Failed to delete stored file: {e.message}",
                    extra={"document_id": document_id},
                )

        self.tracker.remove(document_id)
        return DeletedDocumentResponse(
            id=document_id,
            filename=info.filename,
            deleted_chunks=deleted_chunks,
        )

    def _validate_upload(self, content: bytes, media_type: str) -> None:
        if not content:
            raise ValidationError("No file uploaded", field="document")
        if len(content) > self.settings.max_file_size_bytes:
            raise ValidationError(
                f"File too large (max {self.settings.max_file_size_bytes} bytes)",
                field="document",
                details={"size": len(content)},
            )
        if media_type not in self.settings.supported_media_types:
            raise UnsupportedMediaTypeError(media_type)
