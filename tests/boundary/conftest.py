"""
Fixtures for boundary tests.

RecordingConnection stands in for a SQLAlchemy connection: it records
every statement and simulates the catalog queries the pgvector schema
bootstrap issues, so DDL decisions can be checked without Postgres.
"""

import re
from unittest.mock import MagicMock

import pytest

FULL_LAYOUT = ["uuid", "collection_name", "embedding", "text", "metadata", "custom_id"]


class RecordingConnection:
    """Minimal stateful stand-in for a Postgres connection."""

    def __init__(self, columns=(), dimensions=None):
        self.columns = list(columns)
        self.dimensions = dimensions
        self.statements: list[tuple[str, object]] = []

    def execute(self, statement, params=None):
        sql = " ".join(str(statement).split())
        self.statements.append((sql, params))
        result = MagicMock()

        if "information_schema.columns" in sql:
            result.scalars.return_value.all.return_value = list(self.columns)
        elif "pg_attribute" in sql:
            result.scalar.return_value = self.dimensions
        elif sql.startswith("DROP TABLE"):
            self.columns = []
            self.dimensions = None
        elif sql.startswith("CREATE TABLE IF NOT EXISTS") and not self.columns:
            self.columns = list(FULL_LAYOUT)
            self.dimensions = int(re.search(r"VECTOR\((\d+)\)", sql).group(1))
        return result

    def sql(self) -> list[str]:
        return [statement for statement, _ in self.statements]


def make_engine(conn) -> MagicMock:
    """Engine mock whose begin()/connect() context managers yield conn."""
    engine = MagicMock()
    for method in (engine.begin, engine.connect):
        method.return_value.__enter__.return_value = conn
        method.return_value.__exit__.return_value = False
    return engine


@pytest.fixture
def recording_connection() -> RecordingConnection:
    return RecordingConnection()


@pytest.fixture
def recording_engine(recording_connection) -> MagicMock:
    return make_engine(recording_connection)


@pytest.fixture
def existing_table():
    """Factory: connection and engine for a database that already holds a table."""

    def build(columns=FULL_LAYOUT, dimensions=None):
        conn = RecordingConnection(columns=columns, dimensions=dimensions)
        return conn, make_engine(conn)

    return build


@pytest.fixture
def engine_for():
    return make_engine
