"""Human-readable rendering of ServiceResult payloads.

Task collections (``list_tasks``, ``import_tasks``) become a table; every
other success prints its payload as ``key: value`` lines. Failures are a
single ``ERROR: <op> - <message>`` line.
"""

from __future__ import annotations

import json
from collections.abc import Iterator, Mapping
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from taskctl.output.console import render_text, status_style

if TYPE_CHECKING:
    from rich.console import RenderableType

    from taskctl.services.result import ServiceResult

TABLE_OPS = frozenset({"list_tasks", "import_tasks"})


def render_result(result: ServiceResult, *, no_color: bool = False) -> str:
    """Render *result* for a terminal."""
    if not result.ok:
        parts: list[RenderableType] = [_error_line(result)]
    elif result.op in TABLE_OPS:
        parts = [_ok_line(result.op), *_task_collection(result.data)]
    else:
        parts = [_ok_line(result.op), *_fields(result.data)]
    return render_text(*parts, no_color=no_color)


def _ok_line(op: str) -> Text:
    return Text.assemble(("OK", "task.ok"), ": ", (op, "task.op"))


def _error_line(result: ServiceResult) -> Text:
    message = result.error.message if result.error else "Unknown error"
    return Text.assemble(("ERROR", "task.error"), f": {result.op} - ", message)


def _fields(data: Mapping[str, Any]) -> Iterator[Text]:
    for key, value in data.items():
        if isinstance(value, dict | list):
            value = json.dumps(value, separators=(",", ":"))
        yield Text.assemble("  ", (f"{key}: ", "task.key"), str(value))


def _task_collection(data: Mapping[str, Any]) -> Iterator[RenderableType]:
    items: list[dict[str, Any]] = data.get("items", [])
    if "imported" in data:
        yield Text(f"  imported: {data['imported']}  skipped: {data['skipped']}", style="task.key")
    if not items:
        yield Text("  (no tasks)", style="task.key")
        return
    yield task_table(items)


def task_table(items: list[dict[str, Any]]) -> Table:
    """Table of task DTOs in wire shape."""
    table = Table(header_style="bold")
    table.add_column("ID", style="task.id", no_wrap=True)
    table.add_column("Title", style="task.title")
    table.add_column("Status")
    table.add_column("Created", style="task.key")
    for item in items:
        done = bool(item["status"])
        table.add_row(
            item["id"],
            item["title"],
            Text("done" if done else "pending", style=status_style(done)),
            item["dateCreated"],
        )
    return table
