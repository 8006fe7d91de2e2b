"""
Tests for DocumentService.

Uses the real pipeline over an in-memory vector store; the blob store is
mocked where S3 behaviour matters.
"""

from unittest.mock import MagicMock

import pytest

from backend.application.services.document_service import DocumentService
from backend.boundary.aws.s3_client import StoredBlob
from backend.core.document_processing import DocumentPipeline, DocumentPipelineSettings
from backend.core.document_tracker import DocumentLifecycleTracker
from backend.core.exceptions import (
    BlobStorageError,
    DocumentNotFoundError,
    UnsupportedMediaTypeError,
    ValidationError,
    VectorStoreError,
)

TEXT = (
    "Retrieval augmented generation grounds model answers in stored documents. "
    "Each document is split into overlapping chunks before embedding."
)


def make_service(coordinator, pipeline_settings, blob_store=None) -> DocumentService:
    return DocumentService(
        pipeline=DocumentPipeline(coordinator, settings=pipeline_settings),
        coordinator=coordinator,
        tracker=DocumentLifecycleTracker(coordinator),
        settings=pipeline_settings,
        blob_store=blob_store,
    )


@pytest.fixture
def service(memory_coordinator, pipeline_settings) -> DocumentService:
    """Service with inline storage and an in-memory vector store."""
    return make_service(memory_coordinator, pipeline_settings)


@pytest.fixture
def blob_store() -> MagicMock:
    store = MagicMock()
    store.put.return_value = StoredBlob(
        url="s3://docs-bucket/documents/abc123-notes.txt",
        key="documents/abc123-notes.txt",
        size=len(TEXT),
    )
    return store


class TestUpload:
    """Upload validation, storage and processing outcome."""

    @pytest.mark.asyncio
    async def test_inline_upload_is_processed(self, service):
        # Act
        info = await service.upload_document(TEXT.encode(), "notes.txt", "text/plain")

        # Assert
        assert info.id.startswith("doc_")
        assert info.storage_type == "inline"
        assert info.filename == "notes.txt"
        assert info.path is None
        assert info.size == len(TEXT)
        assert info.processed is True
        assert info.processing.chunks_created == 1
        assert info.processing_error is None

    @pytest.mark.asyncio
    async def test_blob_upload(self, memory_coordinator, pipeline_settings, blob_store):
        service = make_service(memory_coordinator, pipeline_settings, blob_store)

        info = await service.upload_document(TEXT.encode(), "notes.txt", "text/plain")

        blob_store.put.assert_called_once_with(TEXT.encode(), "notes.txt", "text/plain")
        assert info.storage_type == "blob"
        assert info.path == "s3://docs-bucket/documents/abc123-notes.txt"
        assert info.filename == "abc123-notes.txt"

    @pytest.mark.asyncio
    async def test_empty_upload(self, service):
        with pytest.raises(ValidationError) as exc_info:
            await service.upload_document(b"", "empty.txt", "text/plain")

        assert exc_info.value.message == "No file uploaded"

    @pytest.mark.asyncio
    async def test_oversized_upload(self, memory_coordinator):
        settings = DocumentPipelineSettings(max_file_size_bytes=10)
        service = make_service(memory_coordinator, settings)

        with pytest.raises(ValidationError):
            await service.upload_document(b"x" * 11, "big.txt", "text/plain")

    @pytest.mark.asyncio
    async def test_unsupported_type_not_registered(self, service):
        with pytest.raises(UnsupportedMediaTypeError):
            await service.upload_document(b"\x89PNG", "pic.png", "image/png")

        assert await service.list_documents() == []

    @pytest.mark.asyncio
    async def test_processing_failure_recorded(self, service):
        info = await service.upload_document(b"{broken", "data.json", "application/json")

        assert info.processed is False
        assert info.processing_error.startswith("Failed to extract text from file:")
        assert (await service.list_documents())[0].id == info.id

    @pytest.mark.asyncio
    async def test_blob_failure_fails_upload(self, memory_coordinator, pipeline_settings, blob_store):
        blob_store.put.side_effect = BlobStorageError("upload failed", operation="put")
        service = make_service(memory_coordinator, pipeline_settings, blob_store)

        with pytest.raises(BlobStorageError):
            await service.upload_document(TEXT.encode(), "notes.txt", "text/plain")


class TestSearchAndStats:
    @pytest.mark.asyncio
    async def test_search_finds_uploaded_text(self, service):
        await service.upload_document(TEXT.encode(), "notes.txt", "text/plain")

        results = await service.search_similar_documents(TEXT, k=3, threshold=0.7)

        assert len(results) == 1
        assert results[0].metadata["originalName"] == "notes.txt"

    @pytest.mark.asyncio
    async def test_stats_track_uploads(self, service):
        await service.upload_document(TEXT.encode(), "a.txt", "text/plain")
        await service.upload_document(TEXT.encode(), "b.txt", "text/plain")

        overview = await service.get_overview_stats()

        assert overview.vector_store.total_documents == 2
        assert overview.vector_store.total_chunks == 2
        assert overview.vector_store.using_memory_fallback is True
        assert overview.storage.inline == 2
        assert overview.blob_storage_configured is False

    @pytest.mark.asyncio
    async def test_stats_never_raise(self, pipeline_settings):
        coordinator = MagicMock()
        coordinator.stats.side_effect = VectorStoreError("Stats query failed", operation="stats")
        coordinator.using_memory_fallback = False
        service = make_service(coordinator, pipeline_settings)

        stats = await service.get_document_stats()

        assert (stats.total_documents, stats.total_chunks) == (0, 0)
        assert stats.vector_store_type == "PostgreSQL"
        assert stats.using_memory_fallback is False


class TestGetAndDownload:
    @pytest.mark.asyncio
    async def test_get_document_includes_chunk_count(self, service):
        info = await service.upload_document(TEXT.encode(), "notes.txt", "text/plain")

        detail = await service.get_document(info.id)

        assert detail.chunk_count == 1
        assert detail.original_name == "notes.txt"

    @pytest.mark.asyncio
    async def test_get_unknown_document(self, service):
        with pytest.raises(DocumentNotFoundError):
            await service.get_document("doc_missing")

    @pytest.mark.asyncio
    async def test_download_inline(self, service):
        info = await service.upload_document(TEXT.encode(), "notes.txt", "text/plain")

        returned_info, content = await service.download_document(info.id)

        assert returned_info.id == info.id
        assert content == TEXT.encode()

    @pytest.mark.asyncio
    async def test_download_blob(self, memory_coordinator, pipeline_settings, blob_store):
        blob_store.get.return_value = b"from s3"
        service = make_service(memory_coordinator, pipeline_settings, blob_store)
        info = await service.upload_document(TEXT.encode(), "notes.txt", "text/plain")

        _, content = await service.download_document(info.id)

        assert content == b"from s3"
        blob_store.get.assert_called_once_with(info.path)


class TestDelete:
    @pytest.mark.asyncio
    async def test_delete_removes_registry_entry(self, service):
        info = await service.upload_document(TEXT.encode(), "notes.txt", "text/plain")

        deleted = await service.delete_document(info.id)

        assert deleted.id == info.id
        assert deleted.filename == "notes.txt"
        # In-memory store cannot delete chunks
        assert deleted.deleted_chunks == 0
        assert await service.list_documents() == []

    @pytest.mark.asyncio
    async def test_delete_unknown(self, service):
        with pytest.raises(DocumentNotFoundError):
            await service.delete_document("doc_missing")

    @pytest.mark.asyncio
    async def test_delete_removes_blob(self, memory_coordinator, pipeline_settings, blob_store):
        service = make_service(memory_coordinator, pipeline_settings, blob_store)
        info = await service.upload_document(TEXT.encode(), "notes.txt", "text/plain")

        await service.delete_document(info.id)

        blob_store.delete.assert_called_once_with(info.path)

    @pytest.mark.asyncio
    async def test_delete_survives_backend_failures(self, pipeline_settings, blob_store):
        coordinator = MagicMock()
        coordinator.delete_by_document_id.side_effect = VectorStoreError("down", operation="delete")
        coordinator.add_documents.return_value = ["id"]
        blob_store.delete.side_effect = BlobStorageError("denied", operation="delete")
        service = make_service(coordinator, pipeline_settings, blob_store)
        info = await service.upload_document(TEXT.encode(), "notes.txt", "text/plain")

        deleted = await service.delete_document(info.id)

        assert deleted.deleted_chunks == 0
        assert await service.list_documents() == []
