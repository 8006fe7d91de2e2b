"""
Database connection management.

Provides the pooled SQLAlchemy engine used by the pgvector backend. Every
operation leases a connection with `engine.begin()` (or `engine.connect()`)
for one query or small transaction; the context manager returns it to the
pool on every exit path.

Dependencies: sqlalchemy, psycopg, backend.configs
System role: Database connection lifecycle management
"""

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.pool import QueuePool

from backend.configs.database import DatabaseSettings


def get_engine(db_config: DatabaseSettings | None = None) -> Engine:
    """
    Create SQLAlchemy engine with connection pooling and health checks.

    pool_pre_ping=True verifies connections before use so stale
    connections are replaced instead of failing the caller.

    Args:
        db_config: Database settings (loaded from the environment if None)

    Returns:
        Engine: Configured SQLAlchemy engine. No connection is opened yet.

    Raises:
        ArgumentError: If the database URL is invalid
    """
    db_config = db_config or DatabaseSettings()

    return create_engine(
        db_config.database_url,
        echo=db_config.echo_sql,
        poolclass=QueuePool,
        pool_size=db_config.pool_size,
        max_overflow=db_config.max_overflow,
        pool_timeout=db_config.pool_timeout,
        pool_pre_ping=True,
        connect_args={"connect_timeout": db_config.connect_timeout},
    )


def ping(engine: Engine) -> bool:
    """Run SELECT 1 on a leased connection."""
    with engine.connect() as conn:
        return conn.execute(text("SELECT 1")).scalar() == 1
