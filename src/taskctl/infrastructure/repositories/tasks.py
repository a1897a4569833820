"""TaskRepository: persistence of Task aggregates in the ``tasks`` table.

Rows are keyed by the unique ``task_id`` column. ``save`` is an upsert:
a second save with the same identifier overwrites title, status and
timestamp of the existing row. Concurrent creations that allocate the same
identifier therefore end in last-write-wins, not in a detected collision.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC
from typing import TYPE_CHECKING, Any

from sqlalchemy import delete, select, update
from sqlalchemy.dialects.sqlite import insert
from sqlalchemy.exc import SQLAlchemyError

from taskctl import mappers
from taskctl.domain.errors import StorageError
from taskctl.domain.ids import DEFAULT_PREFIX
from taskctl.infrastructure.database.schema import tasks

if TYPE_CHECKING:
    from sqlalchemy import Connection
    from sqlalchemy.engine import Engine

    from taskctl.domain.task import Task

logger = logging.getLogger(__name__)


def _row_to_record(row: Any) -> dict[str, Any] | None:
    if row is None:
        return None
    return {
        "task_id": row["task_id"],
        "title": row["title"],
        "status": row["status"],
        "date_created": row["date_created"],
    }


@contextmanager
def _storage_errors(operation: str, task_id: str | None = None) -> Iterator[None]:
    """Log database failures with context and re-raise them as StorageError."""
    try:
        yield
    except SQLAlchemyError as exc:
        logger.error("Error %s (task_id=%s): %s", operation, task_id, exc)
        raise StorageError(str(exc)) from exc


class TaskRepository:
    """Encapsulates SQL for task reads and writes."""

    def __init__(self, engine: Engine, *, prefix: str = DEFAULT_PREFIX) -> None:
        self._engine = engine
        self._prefix = prefix

    def _to_domain(self, row: Any) -> Task | None:
        return mappers.to_domain(_row_to_record(row), prefix=self._prefix)

    def _fetch_row(self, conn: Connection, task_id: str) -> Any:
        stmt = select(tasks).where(tasks.c.task_id == task_id)
        return conn.execute(stmt).mappings().first()

    def find_all(self) -> list[Task]:
        """Every valid task, newest first. Rows that fail mapping are skipped."""
        stmt = select(tasks).order_by(tasks.c.date_created.desc(), tasks.c.id.desc())
        with _storage_errors("fetching tasks"), self._engine.connect() as conn:
            rows = conn.execute(stmt).mappings().all()
        mapped = (self._to_domain(row) for row in rows)
        return [task for task in mapped if task is not None]

    def find_by_identifier(self, task_id: str) -> Task | None:
        """Fetch one task by its identifier string."""
        with _storage_errors("fetching task", task_id), self._engine.connect() as conn:
            row = self._fetch_row(conn, task_id)
        return self._to_domain(row)

    def save(self, task: Task) -> Task:
        """Insert *task*, or overwrite the row already holding its identifier.

        Returns the stored row re-mapped to a Task.

        Raises:
            StorageError: On database failure, or if the stored row cannot be
                mapped back to a valid Task.
        """
        record = mappers.to_persistence(task)
        values = {
            "title": record["title"],
            "status": record["status"],
            "date_created": record["date_created"].astimezone(UTC).isoformat(),
        }
        stmt = (
            insert(tasks)
            .values(task_id=record["task_id"], **values)
            .on_conflict_do_update(index_elements=[tasks.c.task_id], set_=values)
        )
        with _storage_errors("saving task", record["task_id"]), self._engine.begin() as conn:
            conn.execute(stmt)
            row = self._fetch_row(conn, record["task_id"])

        saved = self._to_domain(row)
        if saved is None:
            msg = "Failed to map persisted task to domain"
            logger.error("%s (task_id=%s)", msg, record["task_id"])
            raise StorageError(msg)
        return saved

    def toggle_status(self, task_id: str) -> Task | None:
        """Flip the status of *task_id*. Returns None if no row matches.

        The read and the write share one transaction.
        """
        with _storage_errors("toggling status", task_id), self._engine.begin() as conn:
            current = self._fetch_row(conn, task_id)
            if current is None:
                return None
            conn.execute(
                update(tasks)
                .where(tasks.c.task_id == task_id)
                .values(status=not bool(current["status"]))
            )
            row = self._fetch_row(conn, task_id)
        return self._to_domain(row)

    def delete(self, task_id: str) -> bool:
        """Remove *task_id*. True iff exactly one row was deleted."""
        with _storage_errors("deleting task", task_id), self._engine.begin() as conn:
            result = conn.execute(delete(tasks).where(tasks.c.task_id == task_id))
        return result.rowcount == 1
