"""
Database boundary layer: pooled engine for the pgvector backend.

Exports:
  - get_engine(): QueuePool engine built from DatabaseSettings
  - ping(): SELECT 1 health probe

Dependencies: sqlalchemy, backend.configs
System role: Database adapter for the persistent vector index
"""

from backend.boundary.db.connection import get_engine, ping

__all__ = ["get_engine", "ping"]
