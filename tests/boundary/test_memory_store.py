"""
Tests for InMemoryVectorStore.
"""

import threading

import pytest

from backend.boundary.vdb.memory_store import InMemoryVectorStore
from backend.core.document_processing.models import ChunkRecord
from backend.core.exceptions import ConfigurationError


def record(text: str, vector, document_id: str | None = "doc_1", index: int = 0) -> ChunkRecord:
    metadata = {"chunkIndex": index}
    if document_id:
        metadata["documentId"] = document_id
    return ChunkRecord(text=text, metadata=metadata, vector=list(vector))


@pytest.fixture
def store() -> InMemoryVectorStore:
    store = InMemoryVectorStore(dimensions=3)
    store.initialize()
    return store


class TestAdd:
    def test_assigns_unique_ids(self, store):
        ids = store.add([record("a", (1, 0, 0)), record("b", (0, 1, 0))])

        assert len(ids) == 2
        assert ids[0] != ids[1]

    def test_wrong_dimension_adds_nothing(self, store):
        with pytest.raises(ConfigurationError) as exc_info:
            store.add([record("a", (1, 0, 0)), record("b", (1, 0))])

        assert exc_info.value.details == {"expected": 3, "actual": 2}
        assert store.stats().total_chunks == 0

    def test_missing_vector_rejected(self, store):
        with pytest.raises(ConfigurationError):
            store.add([ChunkRecord(text="a", metadata={"documentId": "doc_1"})])


class TestSearch:
    """Cosine ranking, threshold and ties."""

    def test_ranked_by_cosine_similarity(self, store):
        # Arrange
        store.add(
            [
                record("orthogonal", (0, 1, 0), index=0),
                record("exact", (2, 0, 0), index=1),
                record("close", (1, 0.2, 0), index=2),
            ]
        )

        # Act
        results = store.search([1, 0, 0], k=3, score_threshold=-1.0)

        # Assert
        assert [r.content for r in results] == ["exact", "close", "orthogonal"]
        assert results[0].similarity == pytest.approx(1.0)
        assert results[2].similarity == pytest.approx(0.0)

    def test_threshold_filters_after_ranking(self, store):
        store.add([record("exact", (1, 0, 0)), record("orthogonal", (0, 1, 0))])

        results = store.search([1, 0, 0], k=5, score_threshold=0.7)

        assert [r.content for r in results] == ["exact"]

    def test_k_limits_results(self, store):
        store.add([record(f"c{i}", (1, i * 0.1, 0), index=i) for i in range(5)])

        assert len(store.search([1, 0, 0], k=2, score_threshold=0.0)) == 2

    def test_ties_keep_insertion_order(self, store):
        store.add([record(f"same{i}", (0, 0, 1), index=i) for i in range(4)])

        results = store.search([0, 0, 1], k=4, score_threshold=0.0)

        assert [r.content for r in results] == ["same0", "same1", "same2", "same3"]

    def test_zero_vector_scores_zero(self, store):
        store.add([record("zero", (0, 0, 0))])

        results = store.search([1, 0, 0], k=1, score_threshold=0.0)

        assert results[0].similarity == 0.0

    def test_empty_store(self, store):
        assert store.search([1, 0, 0], k=3, score_threshold=0.0) == []

    def test_query_dimension_mismatch(self, store):
        with pytest.raises(ConfigurationError):
            store.search([1, 0], k=3, score_threshold=0.0)

    def test_result_metadata_is_a_copy(self, store):
        store.add([record("a", (1, 0, 0))])

        store.search([1, 0, 0], k=1, score_threshold=0.0)[0].metadata["documentId"] = "changed"

        assert store.search([1, 0, 0], k=1, score_threshold=0.0)[0].metadata["documentId"] == "doc_1"


class TestDeleteAndStats:
    def test_delete_is_unsupported(self, store):
        store.add([record("a", (1, 0, 0))])

        assert store.delete_by_document_id("doc_1") == 0
        assert store.stats().total_chunks == 1

    def test_stats_count_distinct_documents(self, store):
        store.add(
            [
                record("a", (1, 0, 0), "doc_1", 0),
                record("b", (1, 0, 0), "doc_1", 1),
                record("c", (1, 0, 0), "doc_2", 0),
                record("orphan", (1, 0, 0), None),
            ]
        )

        stats = store.stats()

        assert stats.total_documents == 2
        assert stats.total_chunks == 3

    def test_stats_for_one_document(self, store):
        store.add([record("a", (1, 0, 0), "doc_1"), record("c", (1, 0, 0), "doc_2")])

        stats = store.stats("doc_2")

        assert (stats.total_documents, stats.total_chunks) == (1, 1)

    def test_memory_store_flags(self, store):
        assert store.is_ephemeral is True
        assert store.backend_type == "Memory"
        assert store.health_check() is True


class TestConcurrentAccess:
    """Searches running alongside uploads."""

    def test_search_during_adds_sees_consistent_snapshot(self, store):
        # Arrange
        errors: list[Exception] = []
        writer_done = threading.Event()

        def writer():
            try:
                for i in range(300):
                    store.add([record(f"chunk {i}", (1, i % 3, 0), f"doc_{i}")])
            finally:
                writer_done.set()

        def reader():
            while not writer_done.is_set():
                try:
                    results = store.search([1, 0, 0], k=3, score_threshold=0.0)
                    assert len(results) <= 3
                except Exception as exc:
                    errors.append(exc)
                    return

        threads = [threading.Thread(target=writer)] + [
            threading.Thread(target=reader) for _ in range(3)
        ]

        # Act
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=30)

        # Assert
        assert errors == []
        assert store.stats().total_chunks == 300
        assert len(store.search([1, 0, 0], k=300, score_threshold=-1.0)) == 300
