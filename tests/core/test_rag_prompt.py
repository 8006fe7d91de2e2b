"""
Tests for RAG prompt construction.
"""

from backend.boundary.vdb.vector_schemas import VectorSearchResult
from backend.core.rag_query import GENERIC_SYSTEM_PROMPT, build_rag_system_prompt, format_context


def result(content: str, name: str | None) -> VectorSearchResult:
    metadata = {"documentId": "doc_1"}
    if name:
        metadata["originalName"] = name
    return VectorSearchResult(chunk_id="c", content=content, metadata=metadata, similarity=0.9)


class TestFormatContext:
    def test_numbered_blocks_with_sources(self):
        # Arrange
        results = [result("First chunk.", "a.pdf"), result("Second chunk.", "b.txt")]

        # Act
        context = format_context(results)

        # Assert
        assert context == (
            "Context 1:\nFirst chunk.\n(Source: a.pdf)\n\n"
            "Context 2:\nSecond chunk.\n(Source: b.txt)"
        )

    def test_missing_source_name(self):
        assert "(Source: unknown)" in format_context([result("text", None)])


class TestSystemPrompts:
    def test_rag_prompt_embeds_context_and_fallback_instruction(self):
        prompt = build_rag_system_prompt([result("Pgvector supports HNSW.", "pg.md")])

        assert "Context 1:\nPgvector supports HNSW.\n(Source: pg.md)" in prompt
        assert "general knowledge" in prompt
        assert "{context}" not in prompt

    def test_generic_prompt(self):
        assert GENERIC_SYSTEM_PROMPT.startswith("You are a helpful AI assistant.")
