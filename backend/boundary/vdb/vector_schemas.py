"""
Vector database schemas.

Pydantic models returned by every vector backend and by the coordinator.
Field aliases are camelCase so the models serialize straight into API
payloads.

Dependencies: pydantic
System role: Type definitions for vector operations
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

BackendType = Literal["PostgreSQL", "Memory"]


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class VectorSearchResult(_CamelModel):
    """Single ranked neighbor from a similarity search."""

    chunk_id: str = Field(description="Chunk identifier")
    content: str = Field(description="Chunk text content")
    metadata: dict[str, Any] = Field(default_factory=dict, description="Chunk metadata")
    similarity: float = Field(description="Cosine similarity, higher is more similar")


class IndexStats(_CamelModel):
    """Counts reported by a single backend."""

    total_documents: int = Field(default=0, description="Distinct documentId values")
    total_chunks: int = Field(default=0, description="Chunk records")


class VectorStoreStats(IndexStats):
    """Counts plus which backend produced them."""

    using_memory_fallback: bool = Field(description="True when the ephemeral backend is active")
    vector_store_type: BackendType = Field(description="Active backend type")


class DeleteResult(_CamelModel):
    """Outcome of a document-level delete."""

    deleted_chunks: int = Field(default=0, description="Chunk records removed")


class BackendHealth(_CamelModel):
    """Health of the active backend."""

    vector_store_type: BackendType = Field(description="Active backend type")
    using_memory_fallback: bool = Field(description="True when the ephemeral backend is active")
    healthy: bool = Field(description="Backend answered a liveness probe")
