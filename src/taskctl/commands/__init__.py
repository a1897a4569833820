"""taskctl subcommands."""

from __future__ import annotations

import click

from taskctl.commands.serve import serve
from taskctl.commands.tasks import add, delete, import_cmd, list_cmd, toggle

COMMANDS: tuple[click.Command, ...] = (list_cmd, add, toggle, delete, import_cmd, serve)


def register_commands(group: click.Group) -> None:
    """Attach every subcommand to *group*."""
    for command in COMMANDS:
        group.add_command(command)
