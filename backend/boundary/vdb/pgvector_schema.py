"""
pgvector schema bootstrap and migration.

Ensures the vector extension, the chunk table and its indexes exist and
match the configured embedding dimension. A table whose text/metadata
columns or vector width drifted from the expected layout is dropped and
recreated when destructive migration is allowed; otherwise startup fails
with ConfigurationError. Every statement is idempotent, so running the
bootstrap twice leaves the schema unchanged.

Usage:
    python -m backend.boundary.vdb.pgvector_schema            # bootstrap
    python -m backend.boundary.vdb.pgvector_schema --reset    # drop + bootstrap

Dependencies: sqlalchemy, backend.configs
System role: Persistent backend schema management
"""

import argparse
import logging
from dataclasses import dataclass

from sqlalchemy import text
from sqlalchemy.engine import Connection, Engine

from backend.configs.vector_store import VectorStoreSettings
from backend.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# pgvector ivfflat/hnsw indexes support at most 2000 dimensions.
IVFFLAT_MAX_DIMENSIONS = 1000
HNSW_MAX_DIMENSIONS = 2000

REQUIRED_COLUMNS = ("text", "metadata")


@dataclass
class BootstrapReport:
    """What a bootstrap run found and did."""

    table: str
    table_existed: bool
    migrated: bool = False
    drift_reason: str | None = None
    vector_index: str | None = None


def choose_vector_index(dimensions: int) -> str | None:
    """Pick the ANN index family for a vector width (None = skip)."""
    if dimensions <= IVFFLAT_MAX_DIMENSIONS:
        return "ivfflat"
    if dimensions <= HNSW_MAX_DIMENSIONS:
        return "hnsw"
    return None


def detect_drift(
    columns: set[str],
    existing_dimensions: int | None,
    expected_dimensions: int,
) -> str | None:
    """
    Compare an existing table against the expected layout.

    Args:
        columns: Column names of the existing table (empty if absent)
        existing_dimensions: Declared width of the embedding column, if any
        expected_dimensions: Configured embedding dimension

    Returns:
        str | None: Human-readable drift reason, None when the table is absent or current
    """
    if not columns:
        return None

    missing = [name for name in REQUIRED_COLUMNS if name not in columns]
    if missing:
        legacy = sorted(columns & {"document", "cmetadata"})
        return f"missing columns {missing} (legacy columns {legacy})"

    if existing_dimensions is None:
        return "missing embedding column"
    if existing_dimensions != expected_dimensions:
        return f"embedding dimension {existing_dimensions} != configured {expected_dimensions}"
    return None


class PgVectorSchema:
    """Bootstrap, migrate and reset the pgvector chunk table."""

    def __init__(self, engine: Engine, settings: VectorStoreSettings) -> None:
        self._engine = engine
        self._settings = settings
        self.table = settings.table_name

    def bootstrap(self) -> BootstrapReport:
        """
        Create or migrate the chunk table and its indexes.

        Returns:
            BootstrapReport: Drift and index decisions taken

        Raises:
            ConfigurationError: Layout or dimension drift with destructive migration disabled
            sqlalchemy.exc.SQLAlchemyError: Connection or DDL failure
        """
        dimensions = self._settings.dimensions

        with self._engine.begin() as conn:
            conn.execute(text("CREATE EXTENSION IF NOT EXISTS vector"))

            columns = self._existing_columns(conn)
            existing_dimensions = self._existing_dimensions(conn) if columns else None
            report = BootstrapReport(table=self.table, table_existed=bool(columns))

            drift = detect_drift(columns, existing_dimensions, dimensions)
            if drift:
                report.drift_reason = drift
                if not self._settings.allow_destructive_migration:
                    logger.error(
                        f"{__name__}:bootstrap - Schema drift with destructive migration disabled",
                        extra={"table": self.table, "reason": drift},
                    )
                    raise ConfigurationError(
                        f"Table {self.table} does not match the expected layout: {drift}",
                        {"table": self.table, "expected_dimensions": dimensions},
                    )

                logger.warning(
                    f"{__name__}:bootstrap - Dropping {self.table} for schema migration",
                    extra={"table": self.table, "reason": drift},
                )
                conn.execute(text(f"DROP TABLE IF EXISTS {self.table} CASCADE"))
                report.migrated = True

            self._create_table(conn, dimensions)
            report.vector_index = self._create_indexes(conn, dimensions)

        logger.info(
            f"{__name__}:bootstrap - Table {self.table} ready",
            extra={
                "table": self.table,
                "dimensions": dimensions,
                "migrated": report.migrated,
                "vector_index": report.vector_index,
            },
        )
        return report

    def reset(self) -> BootstrapReport:
        """Drop the chunk table and bootstrap it from scratch."""
        logger.warning(f"{__name__}:reset - Dropping {self.table}", extra={"table": self.table})
        with self._engine.begin() as conn:
            conn.execute(text(f"DROP TABLE IF EXISTS {self.table} CASCADE"))
        return self.bootstrap()

    def _existing_columns(self, conn: Connection) -> set[str]:
        result = conn.execute(
            text(
                "SELECT column_name FROM information_schema.columns "
                "WHERE table_schema = current_schema() AND table_name = :table"
            ),
            {"table": self.table},
        )
        return set(result.scalars().all())

    def _existing_dimensions(self, conn: Connection) -> int | None:
        # pgvector stores the declared width as the column typmod (-1 when undeclared).
        return conn.execute(
            text(
                "SELECT a.atttypmod FROM pg_attribute a "
                "WHERE a.attrelid = to_regclass(:table) "
                "AND a.attname = 'embedding' AND NOT a.attisdropped"
            ),
            {"table": self.table},
        ).scalar()

    def _create_table(self, conn: Connection, dimensions: int) -> None:
        conn.execute(
            text(
                f"""
                CREATE TABLE IF NOT EXISTS {self.table} (
                    uuid UUID PRIMARY KEY DEFAULT gen_random_uuid(),
                    collection_name VARCHAR(255),
                    embedding VECTOR({dimensions}),
                    text TEXT,
                    metadata JSONB,
                    custom_id VARCHAR(255)
                )
                """
            )
        )

    def _create_indexes(self, conn: Connection, dimensions: int) -> str | None:
        table = self.table
        index_family = choose_vector_index(dimensions)

        if index_family == "ivfflat":
            conn.execute(
                text(
                    f"CREATE INDEX IF NOT EXISTS {table}_embedding_idx ON {table} "
                    f"USING ivfflat (embedding vector_cosine_ops) "
                    f"WITH (lists = {self._settings.ivfflat_lists})"
                )
            )
        elif index_family == "hnsw":
            conn.execute(
                text(
                    f"CREATE INDEX IF NOT EXISTS {table}_embedding_idx ON {table} "
                    f"USING hnsw (embedding vector_cosine_ops) "
                    f"WITH (m = {self._settings.hnsw_m}, "
                    f"ef_construction = {self._settings.hnsw_ef_construction})"
                )
            )
        else:
            logger.warning(
                f"{__name__}:_create_indexes - Skipping vector index, "
                f"{dimensions} dimensions exceeds {HNSW_MAX_DIMENSIONS}; searches use exact scans",
                extra={"table": table, "dimensions": dimensions},
            )

        conn.execute(
            text(f"CREATE INDEX IF NOT EXISTS {table}_collection_name_idx ON {table} (collection_name)")
        )
        conn.execute(
            text(f"CREATE INDEX IF NOT EXISTS {table}_custom_id_idx ON {table} (custom_id)")
        )
        conn.execute(
            text(f"CREATE INDEX IF NOT EXISTS {table}_metadata_idx ON {table} USING gin (metadata)")
        )
        return index_family


def main(argv: list[str] | None = None) -> None:
    """Bootstrap (or reset) the pgvector schema from environment settings."""
    from backend.boundary.db.connection import get_engine
    from backend.configs import get_settings
    from backend.observability.logger import configure_logging

    parser = argparse.ArgumentParser(description="Bootstrap the pgvector chunk table")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Drop the table (deleting every stored chunk) before bootstrapping",
    )
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(settings.effective_log_level)

    engine = get_engine(settings.database)
    try:
        schema = PgVectorSchema(engine, settings.vector_store)
        report = schema.reset() if args.reset else schema.bootstrap()
        logger.info(f"{__name__}:main - {report}")
    finally:
        engine.dispose()


if __name__ == "__main__":
    main()
