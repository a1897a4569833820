"""SQLite database engine and schema via SQLAlchemy Core."""

from taskctl.infrastructure.database.engine import create_db_engine, init_database
from taskctl.infrastructure.database.schema import metadata, tasks

__all__ = [
    "create_db_engine",
    "init_database",
    "metadata",
    "tasks",
]
