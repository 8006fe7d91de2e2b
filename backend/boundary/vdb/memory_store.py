"""
In-memory vector store.

Keeps records and a float32 matrix of their vectors in process memory.
Used when Postgres is unavailable; contents are lost on restart and
document deletion is not supported.

Dependencies: numpy
System role: Ephemeral fallback backend for the vector store coordinator
"""

import logging
import threading
import uuid
from typing import Sequence

import numpy as np

from backend.boundary.vdb.base import VectorIndex
from backend.boundary.vdb.vector_schemas import IndexStats, VectorSearchResult
from backend.core.document_processing.models import ChunkRecord
from backend.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class InMemoryVectorStore(VectorIndex):
    """Cosine-similarity search over an in-process list of records."""

    backend_type = "Memory"
    is_ephemeral = True

    def __init__(self, dimensions: int) -> None:
        self.dimensions = dimensions
        # Records and their matrix rows are replaced together as one tuple.
        self._snapshot: tuple[tuple[ChunkRecord, ...], np.ndarray] = (
            (),
            np.empty((0, dimensions), dtype=np.float32),
        )
        self._lock = threading.Lock()

    def initialize(self) -> None:
        logger.info(
            f"{__name__}:initialize - Using in-memory vector store",
            extra={"dimensions": self.dimensions},
        )

    def add(self, records: Sequence[ChunkRecord]) -> list[str]:
        if not records:
            return []

        for record in records:
            if record.vector is None or len(record.vector) != self.dimensions:
                raise ConfigurationError(
                    "Embedding dimension mismatch",
                    {
                        "expected": self.dimensions,
                        "actual": None if record.vector is None else len(record.vector),
                    },
                )

        stored = [record.model_copy(update={"id": uuid.uuid4().hex}) for record in records]
        block = np.array([record.vector for record in stored], dtype=np.float32)

        # Appends are serialized; readers see either the old or the new snapshot.
        with self._lock:
            records, matrix = self._snapshot
            self._snapshot = (records + tuple(stored), np.vstack([matrix, block]))

        return [record.id for record in stored]

    def search(
        self,
        query_vector: Sequence[float],
        k: int,
        score_threshold: float,
    ) -> list[VectorSearchResult]:
        if len(query_vector) != self.dimensions:
            raise ConfigurationError(
                "Query vector dimension mismatch",
                {"expected": self.dimensions, "actual": len(query_vector)},
            )

        records, matrix = self._snapshot
        if not records or k <= 0:
            return []

        query = np.asarray(query_vector, dtype=np.float32)
        query_norm = np.linalg.norm(query)
        row_norms = np.linalg.norm(matrix, axis=1)
        denominators = row_norms * query_norm
        scores = np.divide(
            matrix @ query,
            denominators,
            out=np.zeros(len(records), dtype=np.float32),
            where=denominators != 0,
        )

        # Stable sort keeps insertion order among equal scores.
        order = np.argsort(-scores, kind="stable")
        results: list[VectorSearchResult] = []
        for index in order[:k]:
            score = float(scores[index])
            if score < score_threshold:
                break
            record = records[index]
            results.append(
                VectorSearchResult(
                    chunk_id=record.id,
                    content=record.text,
                    metadata=dict(record.metadata),
                    similarity=score,
                )
            )
        return results

    def delete_by_document_id(self, document_id: str) -> int:
        logger.warning(
            f"{__name__}:delete_by_document_id - Delete not supported by in-memory store",
            extra={"document_id": document_id},
        )
        return 0

    def stats(self, document_id: str | None = None) -> IndexStats:
        document_ids = [record.document_id for record in self._snapshot[0]]
        if document_id is not None:
            document_ids = [d for d in document_ids if d == document_id]
        else:
            document_ids = [d for d in document_ids if d is not None]
        return IndexStats(total_documents=len(set(document_ids)), total_chunks=len(document_ids))
