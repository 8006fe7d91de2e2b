"""
Document pipeline orchestrator.

Runs extract -> chunk -> embed+store for one document. Embedding and
storage both happen inside VectorStoreCoordinator.add_documents, so the
pipeline only sees "store" succeed or fail as a whole for the document.

Dependencies: All task modules, configs
System role: Pipeline orchestration (coordinates only)
"""

import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from backend.core.exceptions import (
    DocumentProcessingError,
    ProviderError,
    RagChatException,
)
from backend.observability.log_utils import log_exception_with_context

from .configs import DocumentPipelineSettings, get_pipeline_settings
from .models import ChunkRecord, PipelineResult
from .tasks import ChunkingTask, ParsingTask

if TYPE_CHECKING:
    from backend.boundary.vdb.vector_store_coordinator import VectorStoreCoordinator

logger = logging.getLogger(__name__)


class DocumentPipeline:
    """Orchestrate document ingestion: extract -> chunk -> embed+store."""

    def __init__(
        self,
        coordinator: "VectorStoreCoordinator",
        settings: DocumentPipelineSettings | None = None,
        parsing_task: ParsingTask | None = None,
    ) -> None:
        """
        Initialize pipeline.

        Args:
            coordinator: Vector store coordinator that embeds and stores chunks
            settings: Pipeline settings (uses defaults if None)
            parsing_task: Text extractor (default ParsingTask)
        """
        self._settings = settings or get_pipeline_settings()
        self._coordinator = coordinator
        self._parsing_task = parsing_task or ParsingTask()
        self._chunking_task = ChunkingTask(
            chunk_size=self._settings.chunk_size,
            chunk_overlap=self._settings.chunk_overlap,
        )

    def process(
        self,
        document_id: str,
        content: bytes,
        original_name: str,
        media_type: str,
        extra_metadata: dict[str, Any] | None = None,
    ) -> PipelineResult:
        """
        Process one document through the full pipeline.

        Args:
            document_id: Document identity shared by all of its chunks
            content: Raw document bytes
            original_name: Uploaded file name
            media_type: Declared media type
            extra_metadata: Caller keys merged into every chunk's metadata

        Returns:
            PipelineResult: documentId, chunksCreated, totalCharacters, processedAt

        Raises:
            ExtractionError: Extraction failed or produced no text
            UnsupportedMediaTypeError: No extractor for media_type
            ProviderError: Embedding provider failed
            ConfigurationError: Vector length does not match the schema
            VectorStoreError: Backend insert failed
            DocumentProcessingError: Any other stage failure
        """
        stage = "extract"
        try:
            text = self._parsing_task.extract(content, media_type, document_id=document_id)

            stage = "chunk"
            segments = self._chunking_task.split(text, document_id=document_id)
            processed_at = datetime.now(timezone.utc)
            records = self._build_records(
                segments, document_id, original_name, processed_at, extra_metadata
            )

            stage = "store"
            self._coordinator.add_documents(records)
        except RagChatException as e:
            if isinstance(e, ProviderError):
                stage = "embed"
            e.details.setdefault("document_id", document_id)
            e.details.setdefault("stage", stage)
            log_exception_with_context(
                logger,
                f"{__name__}:process - Document processing failed",
                e,
                original_name=original_name,
            )
            raise
        except Exception as e:
            log_exception_with_context(
                logger,
                f"{__name__}:process - Document processing failed",
                e,
                document_id=document_id,
                stage=stage,
            )
            raise DocumentProcessingError(
                f"Failed to process document: {e}",
                document_id=document_id,
                stage=stage,
            ) from e

        logger.info(
            f"{__name__}:process - Processed document {document_id}",
            extra={
                "document_id": document_id,
                "chunks_created": len(records),
                "total_characters": len(text),
            },
        )
        return PipelineResult(
            document_id=document_id,
            chunks_created=len(records),
            total_characters=len(text),
            processed_at=processed_at,
        )

    @staticmethod
    def _build_records(
        segments: list[str],
        document_id: str,
        original_name: str,
        processed_at: datetime,
        extra_metadata: dict[str, Any] | None,
    ) -> list[ChunkRecord]:
        timestamp = processed_at.isoformat()
        return [
            ChunkRecord(
                text=segment,
                metadata={
                    **(extra_metadata or {}),
                    "documentId": document_id,
                    "originalName": original_name,
                    "chunkIndex": index,
                    "totalChunks": len(segments),
                    "processedAt": timestamp,
                },
            )
            for index, segment in enumerate(segments)
        ]
