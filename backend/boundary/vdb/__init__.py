"""
Vector database boundary layer.

Provides the vector index backends and the coordinator that selects one.
- PgVectorStore: Postgres/pgvector backend with schema bootstrap
- InMemoryVectorStore: numpy fallback backend
- VectorStoreCoordinator: backend selection and fallback policy

Dependencies: sqlalchemy, numpy
System role: Vector store adapter for RAG retrieval
"""

from backend.boundary.vdb.vector_schemas import (
    BackendHealth,
    DeleteResult,
    IndexStats,
    VectorSearchResult,
    VectorStoreStats,
)

__all__ = [
    "BackendHealth",
    "DeleteResult",
    "IndexStats",
    "VectorSearchResult",
    "VectorStoreStats",
]
