"""
Vector index interface.

Both backends implement this capability set; the coordinator holds one
instance and never branches on its concrete type.

Dependencies: abc
System role: Backend contract for the vector store coordinator
"""

from abc import ABC, abstractmethod
from typing import Sequence

from backend.boundary.vdb.vector_schemas import BackendType, IndexStats, VectorSearchResult
from backend.core.document_processing.models import ChunkRecord


class VectorIndex(ABC):
    """Storage and similarity search over embedded chunk records."""

    backend_type: BackendType
    is_ephemeral: bool = False

    @abstractmethod
    def initialize(self) -> None:
        """Prepare the backend (schema bootstrap, connectivity check)."""

    @abstractmethod
    def add(self, records: Sequence[ChunkRecord]) -> list[str]:
        """
        Store embedded records.

        Args:
            records: Records whose vector is already set

        Returns:
            list[str]: Backend-assigned ids in input order
        """

    @abstractmethod
    def search(
        self,
        query_vector: Sequence[float],
        k: int,
        score_threshold: float,
    ) -> list[VectorSearchResult]:
        """Return up to k records with similarity >= score_threshold, best first."""

    @abstractmethod
    def delete_by_document_id(self, document_id: str) -> int:
        """Remove every record of a document; return the number removed."""

    @abstractmethod
    def stats(self, document_id: str | None = None) -> IndexStats:
        """Count distinct documents and chunks, optionally for one document."""

    def health_check(self) -> bool:
        return True

    def close(self) -> None:
        """Release backend resources."""
