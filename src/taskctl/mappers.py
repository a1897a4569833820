"""Conversions between domain, persistence, and transport representations.

Every conversion is total: ``to_domain`` and ``dto_to_domain`` return None
for records they cannot turn into a valid Task instead of raising.

Persistence record shape::

    {"task_id": "T-001", "title": "Buy milk", "status": False,
     "date_created": datetime(...)}

Older records may carry the timestamp under ``dateCreated`` or
``DateCreated``; both are accepted.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

from taskctl.domain.ids import DEFAULT_PREFIX
from taskctl.domain.task import Task
from taskctl.domain.values import Identifier, Status, Title
from taskctl.dto import TaskDTO

logger = logging.getLogger(__name__)

_DATE_KEYS = ("date_created", "dateCreated", "DateCreated")


def format_timestamp(value: datetime) -> str:
    """Render *value* as UTC ISO-8601 with milliseconds, e.g. ``2025-01-01T10:00:00.000Z``."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: Any) -> datetime | None:
    """Coerce a stored timestamp to an aware datetime; None if unparseable."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value)
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def _raw_date(raw: Mapping[str, Any]) -> Any:
    for key in _DATE_KEYS:
        value = raw.get(key)
        if value:
            return value
    return None


def _build(
    task_id: Any,
    title: Any,
    status: Any,
    date_value: Any,
    prefix: str,
) -> Task | None:
    if not isinstance(task_id, str) or not isinstance(title, str):
        return None

    id_result = Identifier.create(task_id, prefix)
    if not id_result.ok:
        return None
    title_result = Title.create(title)
    if not title_result.ok:
        return None
    status_result = Status.create(bool(status))
    if not status_result.ok:
        return None

    if date_value is None:
        date_created = datetime.now(UTC)
    else:
        parsed = parse_timestamp(date_value)
        if parsed is None:
            return None
        date_created = parsed

    task = Task.create(id_result.value, title_result.value, status_result.value, date_created)
    return task.value if task.ok else None


def to_domain(raw: Mapping[str, Any] | None, *, prefix: str = DEFAULT_PREFIX) -> Task | None:
    """Rebuild a Task from a persisted record, or None if the record is invalid."""
    if not raw:
        return None
    task = _build(raw.get("task_id"), raw.get("title"), raw.get("status"), _raw_date(raw), prefix)
    if task is None:
        logger.debug("Skipping invalid task record: %r", raw.get("task_id"))
    return task


def to_persistence(task: Task) -> dict[str, Any]:
    """Project a Task into the persisted record shape."""
    return {
        "task_id": task.task_id.value,
        "title": task.title.value,
        "status": task.status.value,
        "date_created": task.date_created,
    }


def to_dto(task: Task) -> TaskDTO:
    """Project a Task into its transport shape."""
    return TaskDTO(
        id=task.task_id.value,
        title=task.title.value,
        status=task.status.value,
        date_created=format_timestamp(task.date_created),
    )


def dto_to_domain(
    dto: TaskDTO | Mapping[str, Any] | None,
    *,
    prefix: str = DEFAULT_PREFIX,
) -> Task | None:
    """Rebuild a Task from its transport shape, or None if it is invalid."""
    if dto is None:
        return None
    if isinstance(dto, TaskDTO):
        return _build(dto.id, dto.title, dto.status, dto.date_created, prefix)
    if not dto:
        return None
    return _build(dto.get("id"), dto.get("title"), dto.get("status"), _raw_date(dto), prefix)
