"""Per-invocation state shared by the CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from taskctl.config.logging import configure_logging
from taskctl.infrastructure.database.engine import init_database
from taskctl.infrastructure.repositories.tasks import TaskRepository
from taskctl.output.formatters import OutputSettings, format_result
from taskctl.services.tasks import TaskService

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

    from taskctl.config.settings import TaskSettings
    from taskctl.services.result import ServiceResult


class AppContext:
    """Settings plus a lazily opened task service.

    Lives in ``ctx.obj`` for the duration of one ``taskctl`` run. The
    database is only opened when a command first touches :attr:`service`,
    so ``--help``, ``--examples`` and ``serve`` never create it here.
    """

    def __init__(self, settings: TaskSettings) -> None:
        self.settings = settings
        self.output = OutputSettings(json_output=settings.json_output)
        self._engine: Engine | None = None
        self._service: TaskService | None = None
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def service(self) -> TaskService:
        if self._service is None:
            prefix = self.settings.ids.prefix
            self._engine = init_database(self.settings.root, self.settings.db_path)
            self._service = TaskService(TaskRepository(self._engine, prefix=prefix), prefix=prefix)
        return self._service

    def close(self) -> None:
        if self._engine is None:
            return
        self._engine.dispose()
        self._engine = None
        self._service = None

    def emit(self, result: ServiceResult) -> None:
        """Print *result* and set the exit status.

        Successes go to stdout. In human mode their warnings follow on
        stderr; JSON output already carries them. Failures go to stderr
        and exit with status 1.
        """
        text = format_result(result, settings=self.output)
        if not result.ok:
            click.echo(text, err=True)
            raise SystemExit(1)

        click.echo(text)
        if self.output.json_output:
            return
        for warning in result.warnings:
            click.secho(f"WARNING: {warning}", fg="yellow", err=True)
