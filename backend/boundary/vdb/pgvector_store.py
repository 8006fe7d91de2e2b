"""
PostgreSQL/pgvector vector store.

Stores chunk records in the table managed by PgVectorSchema and runs
cosine-similarity search with the `<=>` operator. Each operation leases a
pooled connection for a single statement or transaction.

Dependencies: sqlalchemy, psycopg, backend.configs
System role: Persistent backend for the vector store coordinator
"""

import json
import logging
import uuid
from typing import Sequence

from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from backend.boundary.db.connection import ping
from backend.boundary.vdb.base import VectorIndex
from backend.boundary.vdb.pgvector_schema import BootstrapReport, PgVectorSchema
from backend.boundary.vdb.vector_schemas import IndexStats, VectorSearchResult
from backend.configs.vector_store import VectorStoreSettings
from backend.core.document_processing.models import ChunkRecord
from backend.core.exceptions import ConfigurationError, VectorStoreError

logger = logging.getLogger(__name__)


def to_vector_literal(vector: Sequence[float]) -> str:
    """Render a vector in pgvector's text input format."""
    return "[" + ",".join(repr(float(v)) for v in vector) + "]"


class PgVectorStore(VectorIndex):
    """Chunk records in Postgres with pgvector similarity search."""

    backend_type = "PostgreSQL"
    is_ephemeral = False

    def __init__(self, engine: Engine, settings: VectorStoreSettings) -> None:
        self._engine = engine
        self._settings = settings
        self._schema = PgVectorSchema(engine, settings)
        self.table = settings.table_name
        self.collection = settings.collection_name
        self.dimensions = settings.dimensions
        self.bootstrap_report: BootstrapReport | None = None

    def initialize(self) -> None:
        self.bootstrap_report = self._schema.bootstrap()

    def reset(self) -> BootstrapReport:
        self.bootstrap_report = self._schema.reset()
        return self.bootstrap_report

    def add(self, records: Sequence[ChunkRecord]) -> list[str]:
        """
        Insert records in one transaction.

        Raises:
            ConfigurationError: A record vector has the wrong length
            VectorStoreError: The insert failed; nothing from this batch is committed
        """
        if not records:
            return []

        rows = []
        for record in records:
            self._check_dimensions(record.vector)
            chunk_id = str(uuid.uuid4())
            rows.append(
                {
                    "uuid": chunk_id,
                    "collection_name": self.collection,
                    "embedding": to_vector_literal(record.vector),
                    "text": record.text,
                    "metadata": json.dumps(record.metadata),
                    "custom_id": self._custom_id(record),
                }
            )

        statement = text(
            f"INSERT INTO {self.table} "
            "(uuid, collection_name, embedding, text, metadata, custom_id) "
            "VALUES (CAST(:uuid AS uuid), :collection_name, CAST(:embedding AS vector), "
            ":text, CAST(:metadata AS jsonb), :custom_id)"
        )
        try:
            with self._engine.begin() as conn:
                conn.execute(statement, rows)
        except SQLAlchemyError as e:
            raise VectorStoreError(
                f"Failed to insert {len(rows)} chunks: {e}", operation="add"
            ) from e

        return [row["uuid"] for row in rows]

    def search(
        self,
        query_vector: Sequence[float],
        k: int,
        score_threshold: float,
    ) -> list[VectorSearchResult]:
        """
        Top-k by cosine similarity, then filtered by threshold.

        Ties on distance fall back to processing time and chunk index,
        which follow insertion order.
        """
        self._check_dimensions(query_vector)
        if k <= 0:
            return []

        statement = text(
            f"SELECT uuid, text, metadata, "
            f"1 - (embedding <=> CAST(:query AS vector)) AS similarity "
            f"FROM {self.table} "
            f"WHERE (collection_name IS NULL OR collection_name = :collection) "
            f"ORDER BY embedding <=> CAST(:query AS vector), "
            f"metadata->>'processedAt', "
            f"CASE WHEN metadata->>'chunkIndex' ~ '^[0-9]{{1,9}}$' "
            f"THEN (metadata->>'chunkIndex')::int END, "
            f"metadata->>'chunkIndex' "
            f"LIMIT :k"
        )
        try:
            with self._engine.connect() as conn:
                rows = conn.execute(
                    statement,
                    {
                        "query": to_vector_literal(query_vector),
                        "collection": self.collection,
                        "k": k,
                    },
                ).mappings().all()
        except SQLAlchemyError as e:
            raise VectorStoreError(f"Similarity search failed: {e}", operation="search") from e

        results = []
        for row in rows:
            similarity = float(row["similarity"])
            if similarity < score_threshold:
                break
            results.append(
                VectorSearchResult(
                    chunk_id=str(row["uuid"]),
                    content=row["text"] or "",
                    metadata=row["metadata"] or {},
                    similarity=similarity,
                )
            )
        return results

    def delete_by_document_id(self, document_id: str) -> int:
        statement = text(
            f"DELETE FROM {self.table} "
            "WHERE (collection_name IS NULL OR collection_name = :collection) "
            "AND metadata @> CAST(:filter AS jsonb)"
        )
        try:
            with self._engine.begin() as conn:
                result = conn.execute(
                    statement,
                    {
                        "collection": self.collection,
                        "filter": json.dumps({"documentId": document_id}),
                    },
                )
        except SQLAlchemyError as e:
            raise VectorStoreError(
                f"Failed to delete chunks for {document_id}: {e}", operation="delete"
            ) from e

        logger.info(
            f"{__name__}:delete_by_document_id - Deleted {result.rowcount} chunks",
            extra={"document_id": document_id, "deleted_chunks": result.rowcount},
        )
        return result.rowcount

    def stats(self, document_id: str | None = None) -> IndexStats:
        sql = (
            "SELECT COUNT(DISTINCT (metadata->>'documentId')) AS total_documents, "
            "COUNT(*) AS total_chunks "
            f"FROM {self.table} "
            "WHERE (collection_name IS NULL OR collection_name = :collection) "
            "AND metadata->>'documentId' IS NOT NULL"
        )
        params = {"collection": self.collection}
        if document_id is not None:
            sql += " AND metadata->>'documentId' = :document_id"
            params["document_id"] = document_id

        try:
            with self._engine.connect() as conn:
                row = conn.execute(text(sql), params).mappings().one()
        except SQLAlchemyError as e:
            raise VectorStoreError(f"Stats query failed: {e}", operation="stats") from e

        return IndexStats(
            total_documents=int(row["total_documents"] or 0),
            total_chunks=int(row["total_chunks"] or 0),
        )

    def health_check(self) -> bool:
        try:
            return ping(self._engine)
        except SQLAlchemyError as e:
            logger.warning(f"{__name__}:health_check - Ping failed: {e}")
            return False

    def close(self) -> None:
        self._engine.dispose()

    def _check_dimensions(self, vector: Sequence[float] | None) -> None:
        if vector is None or len(vector) != self.dimensions:
            raise ConfigurationError(
                "Embedding dimension mismatch",
                {
                    "expected": self.dimensions,
                    "actual": None if vector is None else len(vector),
                },
            )

    @staticmethod
    def _custom_id(record: ChunkRecord) -> str | None:
        document_id = record.document_id
        if document_id is None:
            return None
        return f"{document_id}:{record.metadata.get('chunkIndex', 0)}"
