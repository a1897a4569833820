"""TaskController: translates HTTP requests to TaskService calls.

| Method | Path        | Success      | Failure                        |
|--------|-------------|--------------|--------------------------------|
| GET    | /tasks      | 200, [DTO]   | 500                            |
| POST   | /tasks      | 201, DTO     | 400                            |
| PATCH  | /tasks/{id} | 200, DTO     | 404 not found, 400 otherwise   |
| DELETE | /tasks/{id} | 204          | 404 not found, 400 otherwise   |

Failure bodies are ``{"error": "<message>"}``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fastapi import APIRouter, Body, Response, status
from fastapi.responses import JSONResponse

from taskctl.domain.errors import ErrorKind

if TYPE_CHECKING:
    from taskctl.services.tasks import TaskService

ID_REQUIRED = "ID is required"


def failure_status(kind: ErrorKind | None) -> int:
    """HTTP status for a failed mutation on a single task."""
    match kind:
        case ErrorKind.NOT_FOUND:
            return status.HTTP_404_NOT_FOUND
        case ErrorKind.VALIDATION | ErrorKind.OVERFLOW | ErrorKind.STORAGE | None:
            return status.HTTP_400_BAD_REQUEST


def error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


class TaskController:
    """HTTP handlers for the ``/tasks`` resource."""

    def __init__(self, service: TaskService) -> None:
        self._service = service

    def list(self) -> Response:
        result = self._service.list_tasks()
        if not result.ok:
            return error_response(result.error_message, status.HTTP_500_INTERNAL_SERVER_ERROR)
        return JSONResponse(result.data["items"], status_code=status.HTTP_200_OK)

    def create(self, payload: Any) -> Response:
        title = payload.get("title") if isinstance(payload, dict) else None
        result = self._service.create_task(title)
        if not result.ok:
            return error_response(result.error_message, status.HTTP_400_BAD_REQUEST)
        return JSONResponse(result.data, status_code=status.HTTP_201_CREATED)

    def toggle(self, task_id: str | None) -> Response:
        if not task_id:
            return error_response(ID_REQUIRED, status.HTTP_400_BAD_REQUEST)
        result = self._service.toggle_task_status(task_id)
        if not result.ok:
            return error_response(result.error_message, failure_status(result.error_kind))
        return JSONResponse(result.data, status_code=status.HTTP_200_OK)

    def delete(self, task_id: str | None) -> Response:
        if not task_id:
            return error_response(ID_REQUIRED, status.HTTP_400_BAD_REQUEST)
        result = self._service.delete_task(task_id)
        if not result.ok:
            return error_response(result.error_message, failure_status(result.error_kind))
        return Response(status_code=status.HTTP_204_NO_CONTENT)


def build_router(controller: TaskController) -> APIRouter:
    """Routes for the ``/tasks`` resource bound to *controller*."""
    router = APIRouter(prefix="/tasks", tags=["Tasks"])

    @router.get("", summary="List all tasks")
    def list_tasks() -> Response:
        return controller.list()

    @router.post("", summary="Create a new task", status_code=status.HTTP_201_CREATED)
    def create_task(payload: Any = Body(default=None)) -> Response:  # noqa: B008
        return controller.create(payload)

    @router.patch("", include_in_schema=False)
    def toggle_without_id() -> Response:
        return controller.toggle(None)

    @router.patch("/{task_id}", summary="Toggle a task status")
    def toggle_task(task_id: str) -> Response:
        return controller.toggle(task_id)

    @router.delete("", include_in_schema=False)
    def delete_without_id() -> Response:
        return controller.delete(None)

    @router.delete(
        "/{task_id}",
        summary="Delete a task",
        status_code=status.HTTP_204_NO_CONTENT,
    )
    def delete_task(task_id: str) -> Response:
        return controller.delete(task_id)

    return router
