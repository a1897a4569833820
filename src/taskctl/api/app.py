"""FastAPI application factory.

Collaborators are built explicitly here (engine → repository → service →
controller) and handed down through constructors; there is no global
service registry.

Routes:
- ``GET|HEAD /status``: liveness probe, empty 200.
- ``{api_prefix}/tasks``: see :mod:`taskctl.api.controller`.
- ``/docs``: interactive OpenAPI documentation.
"""

from __future__ import annotations

import logging
import time
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import structlog
from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from taskctl import __version__
from taskctl.api.controller import TaskController, build_router, error_response
from taskctl.config.settings import TaskSettings
from taskctl.infrastructure.database.engine import init_database
from taskctl.infrastructure.repositories.tasks import TaskRepository
from taskctl.services.tasks import TaskService

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)

API_DESCRIPTION = """Mini to-do API for managing simple tasks.

- POST /tasks → Create a new task
- GET /tasks → List all tasks
- PATCH /tasks/{id} → Toggle a task's completion status
- DELETE /tasks/{id} → Remove a task
"""


def _install_request_logging(app: FastAPI) -> None:
    @app.middleware("http")
    async def _request_context(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        started = time.perf_counter()
        with structlog.contextvars.bound_contextvars(
            method=request.method, path=request.url.path
        ):
            response = await call_next(request)
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.debug("Request handled: %d in %.1fms", response.status_code, elapsed_ms)
        return response


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def _http_error(_request: Request, exc: StarletteHTTPException) -> Response:
        return error_response(str(exc.detail), exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def _invalid_request(_request: Request, exc: RequestValidationError) -> Response:
        logger.debug("Rejected request body: %s", exc.errors())
        return error_response("Invalid request body", status.HTTP_400_BAD_REQUEST)

    @app.exception_handler(Exception)
    async def _unhandled(request: Request, exc: Exception) -> Response:
        logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        message = str(exc) or "Internal Server Error"
        return error_response(message, status.HTTP_500_INTERNAL_SERVER_ERROR)


def create_app(
    settings: TaskSettings | None = None,
    *,
    service: TaskService | None = None,
) -> FastAPI:
    """Build the HTTP application.

    Args:
        settings: Resolved settings; discovered from the CWD when omitted.
        service: Prebuilt service. When given, no database is opened and
            *settings* only supplies the server options.
    """
    settings = settings or TaskSettings.from_cli()
    engine: Engine | None = None
    if service is None:
        engine = init_database(settings.root, settings.db_path)
        repository = TaskRepository(engine, prefix=settings.ids.prefix)
        service = TaskService(repository, prefix=settings.ids.prefix)

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        try:
            yield
        finally:
            if engine is not None:
                engine.dispose()

    app = FastAPI(
        title="taskctl API",
        version=__version__,
        description=API_DESCRIPTION,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.service = service

    if settings.server.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.server.cors_origins,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.api_route("/status", methods=["GET", "HEAD"], tags=["System"])
    def app_status() -> Response:
        return Response(status_code=status.HTTP_200_OK)

    app.include_router(build_router(TaskController(service)), prefix=settings.server.api_prefix)
    _install_request_logging(app)
    _register_error_handlers(app)
    return app
