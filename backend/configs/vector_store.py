"""
Vector store configuration settings.

Manages pgvector table layout, embedding dimensionality, fallback policy,
and retrieval defaults.

Dependencies: pydantic, pydantic_settings
System role: Vector database configuration for RAG retrieval
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class VectorStoreSettings(BaseSettings):
    """Vector store configuration (pgvector with in-memory fallback)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="VECTOR_STORE_",
        case_sensitive=False,
        extra="ignore",
    )

    table_name: str = Field(
        default="langchain_pg_embedding",
        pattern=r"^[A-Za-z_][A-Za-z0-9_]{0,62}$",
        description="Table holding chunk vectors",
    )
    collection_name: str = Field(default="documents", description="Collection name stamped on rows")
    dimensions: int = Field(default=1536, ge=1, description="Embedding vector dimension")

    use_memory_fallback: bool = Field(
        default=True,
        description="Fall back to the in-memory store when Postgres is unavailable",
    )
    allow_destructive_migration: bool = Field(
        default=True,
        description="Drop and recreate the table when its layout or dimension drifted",
    )
    verify_embedding_dimensions: bool = Field(
        default=False,
        description="Probe the embedding provider at startup and compare vector length",
    )

    embedding_model: str = Field(
        default="models/gemini-embedding-001",
        description="Google embedding model ID",
    )

    ivfflat_lists: int = Field(default=100, description="IVFFlat list count")
    hnsw_m: int = Field(default=16, description="HNSW max connections per layer")
    hnsw_ef_construction: int = Field(default=64, description="HNSW build-time candidate list size")

    default_top_k: int = Field(default=5, description="Number of results for document search")
    default_score_threshold: float = Field(
        default=0.7,
        ge=0.0,
        le=1.0,
        description="Minimum similarity score for document search",
    )
    rag_top_k: int = Field(default=3, description="Number of chunks injected into RAG prompts")
    rag_score_threshold: float = Field(
        default=0.6,
        ge=0.0,
        le=1.0,
        description="Minimum similarity score for RAG context",
    )
