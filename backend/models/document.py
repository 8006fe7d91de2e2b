"""
Document domain models and schemas.

Registry entries for uploaded documents and request/response schemas for
document operations.

Dependencies: pydantic
System role: Document API contracts
"""

from datetime import datetime
from typing import Literal

from pydantic import Field, field_validator

from backend.boundary.vdb.vector_schemas import VectorSearchResult, VectorStoreStats
from backend.core.document_processing.models import PipelineResult
from backend.models.common import CamelModel, utc_now

StorageType = Literal["blob", "inline"]


class DocumentInfo(CamelModel):
    """Registry entry for one uploaded document."""

    id: str
    original_name: str
    filename: str = Field(description="Stored object name")
    media_type: str
    size: int = Field(description="Size in bytes")
    path: str | None = Field(default=None, description="Blob URL when stored in S3")
    storage_type: StorageType
    uploaded_at: datetime = Field(default_factory=utc_now)
    processed: bool = False
    processing: PipelineResult | None = None
    processing_error: str | None = None


class StorageStats(CamelModel):
    """Counts and sizes of registered documents by storage type."""

    total: int = 0
    blob: int = 0
    inline: int = 0
    total_size: int = 0
    blob_size: int = 0
    inline_size: int = 0


class DocumentStatsResponse(CamelModel):
    vector_store: VectorStoreStats
    storage: StorageStats
    blob_storage_configured: bool


class DocumentDetailResponse(DocumentInfo):
    """Registry entry plus the chunks currently indexed for it."""

    chunk_count: int | None = None


class DeletedDocumentResponse(CamelModel):
    id: str
    filename: str
    deleted_chunks: int


class SearchRequest(CamelModel):
    """Request schema for similarity search."""

    query: str = Field(min_length=1, description="Search text")
    k: int = Field(default=5, ge=1, le=50)
    threshold: float = Field(default=0.7, ge=0.0, le=1.0)

    @field_validator("query")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Search query is required")
        return value


class SearchResponse(CamelModel):
    query: str
    results: list[VectorSearchResult]
    total: int

