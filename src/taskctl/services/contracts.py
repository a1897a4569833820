"""Typed payload contracts for service and adapter boundaries.

These models validate operation payload shapes before they leave the
service layer so key regressions (for example ``items`` vs ``tasks``)
fail fast in tests and during development.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

from taskctl.dto import TaskDTO


def dump_validated[T: BaseModel](model_cls: type[T], data: dict[str, Any]) -> dict[str, Any]:
    """Validate *data* against *model_cls* and return a normalized wire payload dict."""
    model = model_cls.model_validate(data)
    return model.model_dump(mode="json", by_alias=True)


class TaskListData(BaseModel):
    """Payload contract for ``TaskService.list_tasks``."""

    count: int
    items: list[TaskDTO]


class DeleteTaskData(BaseModel):
    """Payload contract for ``TaskService.delete_task``."""

    id: str
    deleted: bool


class ImportTasksData(BaseModel):
    """Payload contract for ``TaskService.import_tasks``."""

    imported: int
    skipped: int
    items: list[TaskDTO]
