"""
Tests for PgVectorStore SQL and result handling.

Statements are checked against a mocked connection; Postgres itself is
not required.
"""

import json
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from backend.boundary.vdb.pgvector_store import PgVectorStore, to_vector_literal
from backend.configs.vector_store import VectorStoreSettings
from backend.core.document_processing.models import ChunkRecord
from backend.core.exceptions import ConfigurationError, VectorStoreError

DIMENSIONS = 3


@pytest.fixture
def conn() -> MagicMock:
    return MagicMock()


@pytest.fixture
def store(conn, engine_for) -> PgVectorStore:
    settings = VectorStoreSettings(table_name="chunks", collection_name="documents", dimensions=DIMENSIONS)
    return PgVectorStore(engine_for(conn), settings)


def record(index: int, vector=(1.0, 0.0, 0.0)) -> ChunkRecord:
    return ChunkRecord(
        text=f"chunk {index}",
        metadata={"documentId": "doc_1", "chunkIndex": index, "originalName": "a.txt"},
        vector=list(vector),
    )


def sql_of(mock_call) -> str:
    return " ".join(str(mock_call.args[0]).split())


class TestVectorLiteral:
    def test_format(self):
        assert to_vector_literal([1, 0.5, -2.25]) == "[1.0,0.5,-2.25]"


class TestAdd:
    def test_inserts_all_rows_in_one_statement(self, store, conn):
        # Act
        ids = store.add([record(0), record(1)])

        # Assert
        assert len(ids) == 2
        assert len(set(ids)) == 2
        conn.execute.assert_called_once()
        rows = conn.execute.call_args.args[1]
        assert [row["uuid"] for row in rows] == ids
        assert rows[0]["embedding"] == "[1.0,0.0,0.0]"
        assert rows[1]["custom_id"] == "doc_1:1"
        assert rows[0]["collection_name"] == "documents"
        assert json.loads(rows[0]["metadata"])["chunkIndex"] == 0
        assert "CAST(:embedding AS vector)" in sql_of(conn.execute.call_args)

    def test_wrong_dimension_rejected_before_insert(self, store, conn):
        with pytest.raises(ConfigurationError):
            store.add([record(0, vector=(1.0, 0.0))])

        conn.execute.assert_not_called()

    def test_database_error_wrapped(self, store, conn):
        conn.execute.side_effect = OperationalError("INSERT", {}, Exception("connection lost"))

        with pytest.raises(VectorStoreError) as exc_info:
            store.add([record(0)])

        assert exc_info.value.details["operation"] == "add"


class TestSearch:
    def test_filters_rows_below_threshold(self, store, conn):
        conn.execute.return_value.mappings.return_value.all.return_value = [
            {"uuid": "u1", "text": "best", "metadata": {"documentId": "doc_1"}, "similarity": 0.95},
            {"uuid": "u2", "text": "good", "metadata": {"documentId": "doc_1"}, "similarity": 0.71},
            {"uuid": "u3", "text": "weak", "metadata": {"documentId": "doc_2"}, "similarity": 0.4},
        ]

        results = store.search([1.0, 0.0, 0.0], k=5, score_threshold=0.7)

        assert [r.chunk_id for r in results] == ["u1", "u2"]
        assert results[0].content == "best"
        params = conn.execute.call_args.args[1]
        assert params == {"query": "[1.0,0.0,0.0]", "collection": "documents", "k": 5}
        sql = sql_of(conn.execute.call_args)
        assert "ORDER BY embedding <=> CAST(:query AS vector)" in sql
        assert "LIMIT :k" in sql

    def test_chunk_index_tie_break_tolerates_non_integer_values(self, store, conn):
        """Only digit-only chunkIndex values are cast; others sort by their text."""
        conn.execute.return_value.mappings.return_value.all.return_value = [
            {"uuid": "u1", "text": "a", "metadata": {"chunkIndex": "intro"}, "similarity": 0.9},
        ]

        results = store.search([1.0, 0.0, 0.0], k=5, score_threshold=0.0)

        assert results[0].metadata == {"chunkIndex": "intro"}
        sql = sql_of(conn.execute.call_args)
        assert "CASE WHEN metadata->>'chunkIndex' ~ '^[0-9]{1,9}$'" in sql
        assert "THEN (metadata->>'chunkIndex')::int END" in sql
        assert sql.count("::int") == 1

    def test_wrong_query_dimension(self, store):
        with pytest.raises(ConfigurationError):
            store.search([1.0], k=5, score_threshold=0.0)

    def test_zero_k(self, store, conn):
        assert store.search([1.0, 0.0, 0.0], k=0, score_threshold=0.0) == []
        conn.execute.assert_not_called()


class TestDeleteAndStats:
    def test_delete_by_metadata_containment(self, store, conn):
        conn.execute.return_value.rowcount = 4

        deleted = store.delete_by_document_id("doc_1")

        assert deleted == 4
        params = conn.execute.call_args.args[1]
        assert json.loads(params["filter"]) == {"documentId": "doc_1"}
        assert "metadata @> CAST(:filter AS jsonb)" in sql_of(conn.execute.call_args)

    def test_stats_for_all_documents(self, store, conn):
        conn.execute.return_value.mappings.return_value.one.return_value = {
            "total_documents": 2,
            "total_chunks": 7,
        }

        stats = store.stats()

        assert (stats.total_documents, stats.total_chunks) == (2, 7)
        assert "document_id" not in conn.execute.call_args.args[1]

    def test_stats_for_one_document(self, store, conn):
        conn.execute.return_value.mappings.return_value.one.return_value = {
            "total_documents": 1,
            "total_chunks": 3,
        }

        stats = store.stats("doc_1")

        assert stats.total_chunks == 3
        assert conn.execute.call_args.args[1]["document_id"] == "doc_1"

    def test_stats_error_wrapped(self, store, conn):
        conn.execute.side_effect = OperationalError("SELECT", {}, Exception("timeout"))

        with pytest.raises(VectorStoreError):
            store.stats()


class TestHealth:
    def test_ping_ok(self, store, conn):
        conn.execute.return_value.scalar.return_value = 1

        assert store.health_check() is True

    def test_ping_failure(self, store, conn):
        conn.execute.side_effect = OperationalError("SELECT 1", {}, Exception("down"))

        assert store.health_check() is False
