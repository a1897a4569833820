"""Task aggregate root.

A Task exclusively owns one Identifier, one Title and one Status plus its
creation timestamp. It is immutable: a status toggle happens in storage
and comes back as a freshly reconstructed Task.

Two construction paths exist:

- :meth:`Task.create` for already-validated value objects (mapper, service).
- :meth:`Task.from_raw` for untrusted primitives, coerced through the
  value object factories.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime

from taskctl.domain.ids import DEFAULT_PREFIX
from taskctl.domain.result import Result
from taskctl.domain.values import Identifier, Status, Title


@dataclass(frozen=True)
class Task:
    """To-do item keyed by a sequential identifier."""

    task_id: Identifier
    title: Title
    status: Status
    date_created: datetime

    @classmethod
    def create(
        cls,
        task_id: Identifier | None,
        title: Title | None,
        status: Status | None = None,
        date_created: datetime | None = None,
    ) -> Result[Task]:
        """Assemble a Task from validated value objects.

        Status defaults to pending and the timestamp to the current UTC time.
        """
        for argument, name in ((task_id, "taskId"), (title, "title")):
            if argument is None:
                return Result.failure(f"{name} is null or undefined")
        assert task_id is not None and title is not None

        if status is None:
            status = Status.create(False).unwrap()
        return Result.success(
            cls(
                task_id=task_id,
                title=title,
                status=status,
                date_created=date_created or datetime.now(UTC),
            )
        )

    @classmethod
    def from_raw(
        cls,
        task_id: str | None,
        title: str | None,
        status: bool | None = None,
        date_created: datetime | None = None,
        *,
        prefix: str = DEFAULT_PREFIX,
    ) -> Result[Task]:
        """Validate raw primitives and assemble a Task."""
        id_result = Identifier.create(task_id, prefix)
        if not id_result.ok:
            return Result.failure(id_result.error or "invalid taskId")

        title_result = Title.create(title)
        if not title_result.ok:
            return Result.failure(title_result.error or "invalid title")

        status_vo: Status | None = None
        if status is not None:
            status_vo = Status.create(status).unwrap()

        return cls.create(id_result.value, title_result.value, status_vo, date_created)
