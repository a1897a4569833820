"""Shared pytest fixtures and test helpers for taskctl tests."""

from __future__ import annotations

from collections.abc import Iterator
from datetime import UTC, datetime
from pathlib import Path

import pytest
from click.testing import CliRunner
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine

from taskctl.api.app import create_app
from taskctl.config.settings import TaskSettings
from taskctl.domain.task import Task
from taskctl.infrastructure.database.engine import init_database
from taskctl.infrastructure.repositories.tasks import TaskRepository
from taskctl.services.tasks import TaskService


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def db_engine(tmp_path: Path) -> Iterator[Engine]:
    """Initialized SQLite engine with the tasks table created."""
    engine = init_database(tmp_path)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def repository(db_engine: Engine) -> TaskRepository:
    return TaskRepository(db_engine)


@pytest.fixture
def service(repository: TaskRepository) -> TaskService:
    return TaskService(repository)


@pytest.fixture
def settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> TaskSettings:
    """Settings rooted at a temp directory with no TOML and no env overrides."""
    monkeypatch.delenv("TASKCTL_CONFIG", raising=False)
    return TaskSettings.from_cli(root=tmp_path)


@pytest.fixture
def client(settings: TaskSettings) -> Iterator[TestClient]:
    """HTTP client against an app backed by a temp database."""
    app = create_app(settings)
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture
def _isolated_project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp directory so the CLI creates an isolated database.

    Use via ``@pytest.mark.usefixtures("_isolated_project")`` on command test
    classes.
    """
    monkeypatch.delenv("TASKCTL_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def make_task(
    task_id: str,
    title: str = "Task",
    *,
    status: bool = False,
    date_created: datetime | None = None,
) -> Task:
    """Build a valid Task, asserting success."""
    result = Task.from_raw(
        task_id,
        title,
        status,
        date_created or datetime(2025, 1, 1, 12, 0, tzinfo=UTC),
    )
    assert result.ok, result.error
    return result.unwrap()


def seed_tasks(repository: TaskRepository, *task_ids: str) -> list[Task]:
    """Persist one task per identifier, each a minute newer than the last."""
    saved: list[Task] = []
    for minute, task_id in enumerate(task_ids):
        created = datetime(2025, 1, 1, 12, minute, tzinfo=UTC)
        saved.append(repository.save(make_task(task_id, f"Task {task_id}", date_created=created)))
    return saved
