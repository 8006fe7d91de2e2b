"""
Chunk record model for the vector index.

A chunk record is the atomic unit stored by every vector backend. Records are
created in bulk when a document is processed and never mutated afterwards.

Dependencies: pydantic
System role: Data structure shared by the pipeline and vector backends
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ChunkRecord(BaseModel):
    """Chunk text with metadata and (once embedded) its vector."""

    model_config = ConfigDict(frozen=True)

    id: str | None = Field(default=None, description="Backend-assigned identifier")
    text: str = Field(description="Literal chunk content")
    metadata: dict[str, Any] = Field(
        default_factory=dict,
        description="documentId, originalName, chunkIndex, totalChunks, processedAt and caller keys",
    )
    vector: list[float] | None = Field(default=None, description="Embedding vector")

    @property
    def document_id(self) -> str | None:
        return self.metadata.get("documentId")
