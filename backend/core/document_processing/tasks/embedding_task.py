"""
Embedding generation task.

Wraps a LangChain Embeddings provider so that every vector is checked
against the configured dimensionality and provider failures surface as
ProviderError. Output order always matches input order.

Dependencies: langchain_core
System role: Third stage of document ingestion pipeline
"""

import logging

from langchain_core.embeddings import Embeddings

from backend.core.exceptions import ConfigurationError, ProviderError

logger = logging.getLogger(__name__)


class EmbeddingTask:
    """Generate fixed-length embeddings through a LangChain provider."""

    def __init__(
        self,
        embeddings: Embeddings,
        dimensions: int,
        batch_size: int = 100,
        provider: str = "google_genai",
    ) -> None:
        """
        Initialize embedding task.

        Args:
            embeddings: LangChain embeddings provider
            dimensions: Expected length of every vector
            batch_size: Number of texts sent per provider call
            provider: Provider name used in error context
        """
        self._embeddings = embeddings
        self.dimensions = dimensions
        self._batch_size = batch_size
        self._provider = provider

    def embed_texts(self, texts: list[str]) -> list[list[float]]:
        """
        Embed texts in order.

        Args:
            texts: Chunk texts

        Returns:
            list[list[float]]: One vector per text, same order

        Raises:
            ProviderError: When the provider call fails or returns the wrong count
            ConfigurationError: When a vector length differs from dimensions
        """
        if not texts:
            return []

        vectors: list[list[float]] = []
        for start in range(0, len(texts), self._batch_size):
            batch = texts[start : start + self._batch_size]
            try:
                batch_vectors = self._embeddings.embed_documents(batch)
            except Exception as e:
                logger.error(
                    f"{__name__}:embed_texts - Provider call failed",
                    extra={"batch_start": start, "batch_size": len(batch), "error": str(e)},
                )
                raise ProviderError(
                    f"Embedding request failed: {e}", provider=self._provider
                ) from e

            if len(batch_vectors) != len(batch):
                raise ProviderError(
                    f"Embedding provider returned {len(batch_vectors)} vectors for {len(batch)} texts",
                    provider=self._provider,
                )
            vectors.extend(self.check_dimensions(v) for v in batch_vectors)

        return vectors

    def embed_query(self, text: str) -> list[float]:
        """Embed a single query text."""
        try:
            vector = self._embeddings.embed_query(text)
        except Exception as e:
            logger.error(
                f"{__name__}:embed_query - Provider call failed",
                extra={"error": str(e)},
            )
            raise ProviderError(
                f"Embedding request failed: {e}", provider=self._provider
            ) from e
        return self.check_dimensions(vector)

    def check_dimensions(self, vector: list[float]) -> list[float]:
        if len(vector) != self.dimensions:
            raise ConfigurationError(
                "Embedding dimension mismatch",
                {"expected": self.dimensions, "actual": len(vector)},
            )
        return list(vector)
