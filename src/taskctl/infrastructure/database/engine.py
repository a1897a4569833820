"""SQLite engine construction and schema bootstrap.

The database file defaults to ``{root}/.taskctl/taskctl.db``. Every new
connection switches the journal to WAL and waits on a locked database
instead of failing immediately, since the HTTP server serves requests from
a thread pool and the CLI may write to the same file concurrently.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine

from taskctl.infrastructure.database.schema import metadata

DEFAULT_DB_PATH = Path(".taskctl") / "taskctl.db"
BUSY_TIMEOUT_MS = 5000

_CONNECT_PRAGMAS = (
    "PRAGMA journal_mode=WAL",
    f"PRAGMA busy_timeout={BUSY_TIMEOUT_MS}",
)


def _apply_pragmas(dbapi_conn: Any, _record: Any) -> None:
    cursor = dbapi_conn.cursor()
    try:
        for pragma in _CONNECT_PRAGMAS:
            cursor.execute(pragma)
    finally:
        cursor.close()


def create_db_engine(db_path: Path) -> Engine:
    engine = create_engine(
        f"sqlite:///{db_path}",
        connect_args={"check_same_thread": False},
    )
    event.listen(engine, "connect", _apply_pragmas)
    return engine


def init_database(root: Path, db_path: Path | None = None) -> Engine:
    """Open (creating if needed) the task database for the project at *root*.

    A relative *db_path* is taken relative to *root*. Missing parent
    directories and the ``tasks`` table are created; running this against
    an existing database changes nothing.
    """
    path = db_path or DEFAULT_DB_PATH
    if not path.is_absolute():
        path = root / path
    path.parent.mkdir(parents=True, exist_ok=True)

    engine = create_db_engine(path)
    metadata.create_all(engine)
    return engine
