"""Task commands: list, add, toggle, delete, import."""

from __future__ import annotations

import json
from pathlib import Path

import click

from taskctl.commands._base import TaskCommand
from taskctl.commands._context import AppContext
from taskctl.domain.errors import ErrorKind
from taskctl.services.result import ServiceResult


@click.command("list", cls=TaskCommand, examples="""\
  taskctl list
  taskctl --json list""")
@click.pass_obj
def list_cmd(app: AppContext) -> None:
    """List all tasks, newest first."""
    app.emit(app.service.list_tasks())


@click.command(cls=TaskCommand, examples="""\
  taskctl add "Buy milk"
  taskctl --json add 'Write report'""")
@click.argument("title")
@click.pass_obj
def add(app: AppContext, title: str) -> None:
    """Create a task with the next free identifier."""
    app.emit(app.service.create_task(title))


@click.command(cls=TaskCommand, examples="""\
  taskctl toggle T-001""")
@click.argument("task_id")
@click.pass_obj
def toggle(app: AppContext, task_id: str) -> None:
    """Flip a task between pending and completed."""
    app.emit(app.service.toggle_task_status(task_id))


@click.command(cls=TaskCommand, examples="""\
  taskctl delete T-003""")
@click.argument("task_id")
@click.pass_obj
def delete(app: AppContext, task_id: str) -> None:
    """Delete a task.

    New identifiers continue after the highest one still stored, so gaps
    left by deletions are never filled.
    """
    app.emit(app.service.delete_task(task_id))


@click.command("import", cls=TaskCommand, examples="""\
  # Restore tasks from a previous JSON listing
  taskctl --json list | jq '.data.items' > tasks.json
  taskctl import tasks.json""")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_obj
def import_cmd(app: AppContext, path: Path) -> None:
    """Import tasks from a JSON array of {id, title, status, dateCreated}."""
    try:
        entries = json.loads(path.read_text(encoding="utf-8"))
    except ValueError as exc:
        app.emit(ServiceResult.fail("import_tasks", f"Invalid JSON in {path}: {exc}"))
        return
    if not isinstance(entries, list):
        app.emit(
            ServiceResult.fail(
                "import_tasks",
                "Expected a JSON array of tasks",
                ErrorKind.VALIDATION,
            )
        )
        return
    app.emit(app.service.import_tasks(entries))
