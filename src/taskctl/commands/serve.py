"""serve: run the HTTP API with uvicorn."""

from __future__ import annotations

import click
import uvicorn

from taskctl.commands._base import TaskCommand
from taskctl.commands._context import AppContext


@click.command(
    cls=TaskCommand,
    examples="""\
  # Serve on the configured address (default 127.0.0.1:3000)
  taskctl serve

  # Listen on all interfaces
  taskctl serve --host 0.0.0.0 --port 8080""",
)
@click.option("--host", default=None, help="Bind address (default: [server] host).")
@click.option("--port", default=None, type=int, help="Listen port (default: [server] port).")
@click.pass_obj
def serve(app: AppContext, host: str | None, port: int | None) -> None:
    """Start the task HTTP API."""
    from taskctl.api.app import create_app

    settings = app.settings
    uvicorn.run(
        create_app(settings),
        host=host if host is not None else settings.server.host,
        port=port if port is not None else settings.server.port,
        log_config=None,
    )
