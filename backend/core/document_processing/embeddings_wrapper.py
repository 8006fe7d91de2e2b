"""
Google Generative AI embeddings pinned to one output dimensionality.

The pgvector column is created with a fixed width, so every embed call
must request the same number of dimensions. The base class only applies
output_dimensionality when it is passed per call; this wrapper always
passes the configured value.

Dependencies: langchain_google_genai
System role: Embedding provider for document and query vectors
"""

import logging
from typing import List

from langchain_google_genai import GoogleGenerativeAIEmbeddings

logger = logging.getLogger(__name__)


class FixedDimensionEmbeddings(GoogleGenerativeAIEmbeddings):
    """GoogleGenerativeAIEmbeddings that always returns vectors of one length."""

    _output_dimensionality: int = 1536

    def __init__(
        self,
        model: str = "models/gemini-embedding-001",
        output_dimensionality: int = 1536,
        **kwargs,
    ) -> None:
        """
        Initialize embeddings with fixed output dimensionality.

        Args:
            model: Google embedding model ID
            output_dimensionality: Length of every returned vector
            **kwargs: Additional arguments for GoogleGenerativeAIEmbeddings
        """
        super().__init__(model=model, **kwargs)
        self._output_dimensionality = output_dimensionality
        logger.info(
            f"{__name__}:__init__ - Initialized with model={model}, "
            f"output_dimensionality={output_dimensionality}"
        )

    def embed_documents(
        self,
        texts: List[str],
        *,
        batch_size: int = 100,
        task_type: str | None = None,
        titles: List[str] | None = None,
        output_dimensionality: int | None = None,
    ) -> List[List[float]]:
        return super().embed_documents(
            texts,
            batch_size=batch_size,
            task_type=task_type or "RETRIEVAL_DOCUMENT",
            titles=titles,
            output_dimensionality=output_dimensionality or self._output_dimensionality,
        )

    def embed_query(
        self,
        text: str,
        task_type: str | None = None,
        title: str | None = None,
        output_dimensionality: int | None = None,
    ) -> List[float]:
        return super().embed_query(
            text,
            task_type=task_type or "RETRIEVAL_QUERY",
            title=title,
            output_dimensionality=output_dimensionality or self._output_dimensionality,
        )


def create_embeddings(model: str, dimensions: int) -> FixedDimensionEmbeddings:
    """Build the production embeddings provider."""
    return FixedDimensionEmbeddings(model=model, output_dimensionality=dimensions)
