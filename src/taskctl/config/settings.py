"""Settings for the CLI and the HTTP server.

Sources, highest priority first: keyword arguments (CLI flags),
``TASKCTL_*`` environment variables (``__`` separates nested keys, e.g.
``TASKCTL_SERVER__PORT=8080``), the discovered ``taskctl.toml``, then the
defaults in :mod:`taskctl.config.models`. The TOML file only needs to list
overrides.
"""

from __future__ import annotations

import tomllib
from contextvars import ContextVar
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from taskctl.config.discovery import ConfigNotFoundError, resolve_config
from taskctl.config.models import DatabaseConfig, IdsConfig, ServerConfig

# TOML contents for the settings object currently being built.
_pending_toml: ContextVar[dict[str, Any] | None] = ContextVar("_pending_toml", default=None)


def load_toml(path: Path) -> dict[str, Any]:
    """Parse *path*, surfacing syntax errors as a CLI error."""
    try:
        with path.open("rb") as fh:
            return tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise click.ClickException(msg) from exc


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Settings source backed by an already-parsed TOML mapping."""

    def __init__(self, settings_cls: type[BaseSettings], data: dict[str, Any] | None) -> None:
        super().__init__(settings_cls)
        self._data = data or {}

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._data.get(field_name), field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        fields = self.settings_cls.model_fields
        return {key: value for key, value in self._data.items() if key in fields}


class TaskSettings(BaseSettings):
    """Resolved configuration for one taskctl process.

    ``root`` is the directory relative database paths resolve against: the
    directory holding ``taskctl.toml`` when one was found, else the CWD.
    """

    model_config = SettingsConfigDict(
        frozen=True,
        env_prefix="TASKCTL_",
        env_nested_delimiter="__",
    )

    root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    json_output: bool = False
    verbose: bool = False
    log_json: bool = False

    server: ServerConfig = Field(default_factory=ServerConfig)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    ids: IdsConfig = Field(default_factory=IdsConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, _pending_toml.get()),
        )

    @property
    def db_path(self) -> Path:
        """Database file, resolved against :attr:`root` when relative."""
        path = Path(self.database.path)
        return path if path.is_absolute() else self.root / path

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | Path | None = None,
        root: Path | None = None,
        **cli_flags: Any,
    ) -> TaskSettings:
        """Build settings for a CLI invocation or server start-up.

        Raises:
            click.ClickException: *config_path* does not exist or the
                config file is not valid TOML.
        """
        try:
            toml_path = resolve_config(config_path, root)
        except ConfigNotFoundError as exc:
            raise click.ClickException(str(exc)) from exc

        if root is None:
            root = toml_path.parent if toml_path is not None else Path.cwd()

        token = _pending_toml.set(load_toml(toml_path) if toml_path is not None else None)
        try:
            return cls(root=root, config_path=toml_path, **cli_flags)
        finally:
            _pending_toml.reset(token)
