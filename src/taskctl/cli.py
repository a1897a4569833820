"""Command-line entry point: ``taskctl``.

Global options are resolved into a :class:`TaskSettings` once, wrapped in an
:class:`AppContext` and handed to every subcommand through ``ctx.obj``.
"""

from __future__ import annotations

from pathlib import Path

import click

from taskctl import __version__
from taskctl.commands import register_commands
from taskctl.commands._context import AppContext
from taskctl.config.settings import TaskSettings

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.group(context_settings=CONTEXT_SETTINGS, invoke_without_command=True)
@click.version_option(__version__, "-V", "--version", prog_name="taskctl")
@click.option("--json", "json_output", is_flag=True, help="Print results as JSON.")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging on stderr.")
@click.option("--log-json", is_flag=True, help="Emit log lines as JSON objects.")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Use this taskctl.toml instead of discovering one.",
)
@click.option(
    "--root",
    type=click.Path(file_okay=False, path_type=Path),
    help="Project directory holding the task database.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    verbose: bool,
    log_json: bool,
    config_path: Path | None,
    root: Path | None,
) -> None:
    """Manage sequentially numbered to-do tasks (T-001, T-002, ...).

    Run ``taskctl serve`` for the HTTP API, or use the task commands to work
    on the same database from the shell.
    """
    settings = TaskSettings.from_cli(
        config_path=config_path,
        root=root,
        json_output=json_output,
        verbose=verbose,
        log_json=log_json,
    )
    app = AppContext(settings)
    ctx.obj = app
    ctx.call_on_close(app.close)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
