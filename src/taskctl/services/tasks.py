"""TaskService: list, create, toggle, delete and import tasks.

Pipeline per operation: VALIDATE → (ALLOCATE) → PERSIST → MAP → RESPOND.

Every operation returns a :class:`ServiceResult`. Repository exceptions are
logged and turned into ``STORAGE`` failures; nothing from the repository
escapes as a raw exception.

Identifier allocation reads every stored task and advances past the
highest sequence number. The read and the following upsert are separate
statements, so two concurrent creations can pick the same identifier and
the later write silently replaces the earlier task.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Protocol

from taskctl import mappers
from taskctl.domain.errors import ErrorKind, TaskError
from taskctl.domain.ids import DEFAULT_PREFIX, allocate_next_id
from taskctl.domain.task import Task
from taskctl.domain.values import Identifier, Title
from taskctl.services.contracts import (
    DeleteTaskData,
    ImportTasksData,
    TaskListData,
    dump_validated,
)
from taskctl.services.result import ServiceResult

logger = logging.getLogger(__name__)

TASK_NOT_FOUND = "Task not found"


class TaskStore(Protocol):
    """Persistence operations the service relies on."""

    def find_all(self) -> list[Task]: ...

    def find_by_identifier(self, task_id: str) -> Task | None: ...

    def save(self, task: Task) -> Task: ...

    def toggle_status(self, task_id: str) -> Task | None: ...

    def delete(self, task_id: str) -> bool: ...


def _error_message(exc: BaseException, fallback: str) -> str:
    return str(exc) or fallback


class TaskService:
    """Orchestrates validation, ID allocation and persistence for tasks."""

    def __init__(self, repository: TaskStore, *, prefix: str = DEFAULT_PREFIX) -> None:
        self._repo = repository
        self._prefix = prefix

    # ------------------------------------------------------------------
    # Input validation
    # ------------------------------------------------------------------

    @staticmethod
    def _validate_title(title: object) -> str | None:
        """Return an error message, or None if *title* is acceptable."""
        if not isinstance(title, str):
            return "title must be a string"
        if not title.strip():
            return "title is required"
        result = Title.create(title)
        return result.error

    def _validate_task_id(self, task_id: object) -> str | None:
        if not isinstance(task_id, str):
            return "taskId must be a string"
        if not task_id.strip():
            return "taskId is required"
        result = Identifier.create(task_id, self._prefix)
        return result.error

    def _storage_failure(
        self,
        op: str,
        exc: Exception,
        task_id: str | None = None,
    ) -> ServiceResult:
        logger.error("Error in %s (task_id=%s): %s", op, task_id, exc, exc_info=True)
        code = exc.kind if isinstance(exc, TaskError) else ErrorKind.STORAGE
        fallback = f"Error in {op}"
        return ServiceResult.fail(op, _error_message(exc, fallback), code)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def list_tasks(self) -> ServiceResult:
        """All stored tasks, newest first."""
        op = "list_tasks"
        logger.debug("Listing tasks")
        try:
            tasks = self._repo.find_all()
        except Exception as exc:
            return self._storage_failure(op, exc)

        items = [mappers.to_dto(task).to_wire() for task in tasks]
        data = dump_validated(TaskListData, {"count": len(items), "items": items})
        return ServiceResult.success(op, data)

    def create_task(self, title: object) -> ServiceResult:
        """Validate *title*, allocate the next identifier and persist a new task."""
        op = "create_task"
        logger.debug("Creating task")

        error = self._validate_title(title)
        if error is not None:
            return ServiceResult.fail(op, error)
        assert isinstance(title, str)

        try:
            existing = self._repo.find_all()
            new_id = allocate_next_id((t.task_id.value for t in existing), self._prefix)
            built = Task.from_raw(new_id, title, prefix=self._prefix)
            if not built.ok:
                kind = built.kind or ErrorKind.VALIDATION
                return ServiceResult.fail(op, built.error or "invalid task", kind)
            saved = self._repo.save(built.unwrap())
        except Exception as exc:
            return self._storage_failure(op, exc)

        logger.debug("Task created: %s", saved.task_id)
        return ServiceResult.success(op, mappers.to_dto(saved).to_wire())

    def toggle_task_status(self, task_id: object) -> ServiceResult:
        """Flip the completion status of *task_id*."""
        op = "toggle_task_status"
        logger.debug("Toggling task status: %s", task_id)

        error = self._validate_task_id(task_id)
        if error is not None:
            return ServiceResult.fail(op, error)
        assert isinstance(task_id, str)

        try:
            updated = self._repo.toggle_status(task_id.strip())
        except Exception as exc:
            return self._storage_failure(op, exc, task_id)

        if updated is None:
            return ServiceResult.fail(op, TASK_NOT_FOUND, ErrorKind.NOT_FOUND, id=task_id)
        return ServiceResult.success(op, mappers.to_dto(updated).to_wire())

    def delete_task(self, task_id: object) -> ServiceResult:
        """Remove *task_id* from storage."""
        op = "delete_task"
        logger.debug("Deleting task: %s", task_id)

        error = self._validate_task_id(task_id)
        if error is not None:
            return ServiceResult.fail(op, error)
        assert isinstance(task_id, str)

        identifier = task_id.strip()
        try:
            deleted = self._repo.delete(identifier)
        except Exception as exc:
            return self._storage_failure(op, exc, task_id)

        if not deleted:
            return ServiceResult.fail(op, TASK_NOT_FOUND, ErrorKind.NOT_FOUND, id=task_id)
        data = dump_validated(DeleteTaskData, {"id": identifier, "deleted": True})
        return ServiceResult.success(op, data)

    def import_tasks(self, entries: Iterable[Mapping[str, Any]]) -> ServiceResult:
        """Upsert tasks given in their transport shape, keeping their identifiers.

        Entries that do not describe a valid task are skipped with a warning.
        Entries whose identifier is already stored overwrite that task.
        """
        op = "import_tasks"
        warnings: list[str] = []
        imported: list[dict[str, Any]] = []
        skipped = 0

        for index, entry in enumerate(entries):
            task = None
            if isinstance(entry, Mapping):
                task = mappers.dto_to_domain(entry, prefix=self._prefix)
            if task is None:
                skipped += 1
                warnings.append(f"Entry {index} is not a valid task; skipped")
                continue
            try:
                if self._repo.find_by_identifier(task.task_id.value) is not None:
                    warnings.append(f"{task.task_id} already existed; overwritten")
                saved = self._repo.save(task)
            except Exception as exc:
                return self._storage_failure(op, exc, task.task_id.value)
            imported.append(mappers.to_dto(saved).to_wire())

        data = dump_validated(
            ImportTasksData,
            {"imported": len(imported), "skipped": skipped, "items": imported},
        )
        return ServiceResult.success(op, data, warnings)
