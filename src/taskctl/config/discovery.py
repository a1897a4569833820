"""Locate ``taskctl.toml``.

Lookup order: an explicit ``--config`` path, then ``$TASKCTL_CONFIG``, then
the first ``taskctl.toml`` found walking from the start directory up to the
filesystem root.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

CONFIG_FILENAME = "taskctl.toml"
CONFIG_ENV_VAR = "TASKCTL_CONFIG"


class ConfigNotFoundError(FileNotFoundError):
    """An explicitly requested config file does not exist."""


def _ancestors(start: Path) -> Iterator[Path]:
    here = start.resolve()
    yield here
    yield from here.parents


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file governing *start* (default: CWD), or None.

    A set but dangling ``$TASKCTL_CONFIG`` disables walk-up discovery.
    """
    from_env = os.environ.get(CONFIG_ENV_VAR)
    if from_env:
        env_path = Path(from_env)
        return env_path if env_path.is_file() else None

    for directory in _ancestors(start or Path.cwd()):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def resolve_config(explicit: str | Path | None, start: Path | None = None) -> Path | None:
    """Resolve the config file for a run.

    Raises:
        ConfigNotFoundError: *explicit* was given but is not a file.
    """
    if explicit is None:
        return find_config(start)
    path = Path(explicit)
    if not path.is_file():
        raise ConfigNotFoundError(f"Config file not found: {path}")
    return path
