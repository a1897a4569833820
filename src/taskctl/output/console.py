"""Rich theme and off-screen rendering for CLI output.

Renderables are printed into an in-memory console and returned as a
string, so callers decide where the text goes (stdout or stderr).
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console, RenderableType
from rich.theme import Theme

DEFAULT_WIDTH = 100

TASK_THEME = Theme(
    {
        "task.ok": "bold green",
        "task.error": "bold red",
        "task.warning": "bold yellow",
        "task.op": "bold cyan",
        "task.key": "dim",
        "task.id": "bold blue",
        "task.title": "bold",
        "task.done": "green",
        "task.pending": "yellow",
    }
)


def render_text(
    *renderables: RenderableType,
    no_color: bool = False,
    width: int = DEFAULT_WIDTH,
) -> str:
    """Render *renderables* one per line; the result has no trailing newline."""
    buffer = StringIO()
    console = Console(
        file=buffer,
        theme=TASK_THEME,
        no_color=no_color,
        highlight=False,
        width=width,
    )
    for renderable in renderables:
        console.print(renderable)
    return buffer.getvalue().rstrip("\n")


def status_style(completed: bool) -> str:
    """Theme style for a task's completion state."""
    return "task.done" if completed else "task.pending"
