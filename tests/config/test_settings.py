"""Tests for TaskSettings: defaults, TOML overrides, env vars and CLI flags."""

from pathlib import Path

import click
import pytest

from taskctl.config.settings import TaskSettings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("TASKCTL_CONFIG", "TASKCTL_VERBOSE", "TASKCTL_SERVER__PORT"):
        monkeypatch.delenv(name, raising=False)


class TestDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        settings = TaskSettings.from_cli(root=tmp_path)
        assert settings.root == tmp_path
        assert settings.config_path is None
        assert settings.json_output is False
        assert settings.server.host == "127.0.0.1"
        assert settings.server.port == 3000
        assert settings.server.api_prefix == "/api"
        assert settings.ids.prefix == "T"
        assert settings.db_path == tmp_path / ".taskctl" / "taskctl.db"

    def test_frozen(self, tmp_path: Path) -> None:
        settings = TaskSettings.from_cli(root=tmp_path)
        with pytest.raises(Exception):
            settings.verbose = True  # type: ignore[misc]


class TestTomlSource:
    def test_sparse_override(self, tmp_path: Path) -> None:
        (tmp_path / "taskctl.toml").write_text("[server]\nport = 8080\n")
        settings = TaskSettings.from_cli(root=tmp_path)
        assert settings.server.port == 8080
        assert settings.server.host == "127.0.0.1"

    def test_database_and_ids_sections(self, tmp_path: Path) -> None:
        (tmp_path / "taskctl.toml").write_text(
            '[database]\npath = "data/tasks.db"\n[ids]\nprefix = "OPS"\n'
        )
        settings = TaskSettings.from_cli(root=tmp_path)
        assert settings.db_path == tmp_path / "data" / "tasks.db"
        assert settings.ids.prefix == "OPS"

    def test_root_from_config_location(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "taskctl.toml").write_text("")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)
        settings = TaskSettings.from_cli()
        assert settings.root == tmp_path.resolve()
        assert settings.config_path == (tmp_path / "taskctl.toml").resolve()

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "conf" / "mine.toml"
        custom.parent.mkdir()
        custom.write_text("[server]\nport = 9000\n")
        settings = TaskSettings.from_cli(config_path=custom, root=tmp_path)
        assert settings.server.port == 9000
        assert settings.config_path == custom

    def test_missing_explicit_config(self, tmp_path: Path) -> None:
        with pytest.raises(click.ClickException, match="Config file not found"):
            TaskSettings.from_cli(config_path=tmp_path / "nope.toml", root=tmp_path)

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / "taskctl.toml").write_text("[server\nport = ")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            TaskSettings.from_cli(root=tmp_path)

    def test_unknown_keys_ignored(self, tmp_path: Path) -> None:
        (tmp_path / "taskctl.toml").write_text('[extras]\nfoo = "bar"\n')
        assert TaskSettings.from_cli(root=tmp_path).server.port == 3000

    def test_api_prefix_normalized(self, tmp_path: Path) -> None:
        (tmp_path / "taskctl.toml").write_text('[server]\napi_prefix = "v1/"\n')
        assert TaskSettings.from_cli(root=tmp_path).server.api_prefix == "/v1"


class TestPriority:
    def test_cli_flags(self, tmp_path: Path) -> None:
        settings = TaskSettings.from_cli(root=tmp_path, json_output=True, verbose=True)
        assert settings.json_output is True
        assert settings.verbose is True

    def test_env_over_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "taskctl.toml").write_text("[server]\nport = 8080\n")
        monkeypatch.setenv("TASKCTL_SERVER__PORT", "9090")
        assert TaskSettings.from_cli(root=tmp_path).server.port == 9090

    def test_env_flag(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TASKCTL_VERBOSE", "true")
        assert TaskSettings.from_cli(root=tmp_path).verbose is True

    def test_cli_over_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TASKCTL_VERBOSE", "true")
        assert TaskSettings.from_cli(root=tmp_path, verbose=False).verbose is False

    def test_toml_not_leaked_between_builds(self, tmp_path: Path) -> None:
        project = tmp_path / "project"
        project.mkdir()
        (project / "taskctl.toml").write_text('[ids]\nprefix = "OPS"\n')
        assert TaskSettings.from_cli(root=project).ids.prefix == "OPS"
        assert TaskSettings().ids.prefix == "T"
