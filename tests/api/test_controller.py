"""Tests for the /api/tasks HTTP surface."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from taskctl.api.controller import failure_status
from taskctl.domain.errors import ErrorKind


def _create(client: TestClient, title: object) -> dict:
    response = client.post("/api/tasks", json={"title": title})
    assert response.status_code == 201, response.text
    return response.json()


class TestListTasks:
    def test_empty(self, client: TestClient) -> None:
        response = client.get("/api/tasks")
        assert response.status_code == 200
        assert response.json() == []

    def test_newest_first(self, client: TestClient) -> None:
        _create(client, "First")
        _create(client, "Second")
        ids = [item["id"] for item in client.get("/api/tasks").json()]
        assert ids == ["T-002", "T-001"]


class TestCreateTask:
    def test_first_task(self, client: TestClient) -> None:
        body = _create(client, "Buy milk")
        assert body["id"] == "T-001"
        assert body["title"] == "Buy milk"
        assert body["status"] is False
        assert body["dateCreated"].endswith("Z")

    def test_missing_title(self, client: TestClient) -> None:
        response = client.post("/api/tasks", json={})
        assert response.status_code == 400
        assert response.json() == {"error": "title must be a string"}

    def test_blank_title(self, client: TestClient) -> None:
        response = client.post("/api/tasks", json={"title": "   "})
        assert response.status_code == 400
        assert response.json() == {"error": "title is required"}

    def test_non_string_title(self, client: TestClient) -> None:
        response = client.post("/api/tasks", json={"title": 12})
        assert response.status_code == 400
        assert response.json()["error"] == "title must be a string"

    def test_non_object_body(self, client: TestClient) -> None:
        response = client.post("/api/tasks", json=["Buy milk"])
        assert response.status_code == 400

    def test_malformed_json(self, client: TestClient) -> None:
        response = client.post(
            "/api/tasks",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid request body"}


class TestToggleTask:
    def test_toggles(self, client: TestClient) -> None:
        _create(client, "Buy milk")
        response = client.patch("/api/tasks/T-001")
        assert response.status_code == 200
        assert response.json()["status"] is True

    def test_not_found(self, client: TestClient) -> None:
        response = client.patch("/api/tasks/T-999")
        assert response.status_code == 404
        assert response.json() == {"error": "Task not found"}

    def test_invalid_id(self, client: TestClient) -> None:
        response = client.patch("/api/tasks/INVALID")
        assert response.status_code == 400
        assert response.json() == {"error": "taskId must match pattern T-###"}

    def test_missing_id(self, client: TestClient) -> None:
        response = client.patch("/api/tasks")
        assert response.status_code == 400
        assert response.json() == {"error": "ID is required"}


class TestDeleteTask:
    def test_deletes(self, client: TestClient) -> None:
        _create(client, "Buy milk")
        response = client.delete("/api/tasks/T-001")
        assert response.status_code == 204
        assert response.content == b""
        assert client.get("/api/tasks").json() == []

    def test_gap_preserved(self, client: TestClient) -> None:
        for title in ("a", "b", "c"):
            _create(client, title)
        client.delete("/api/tasks/T-002")
        assert _create(client, "d")["id"] == "T-004"

    def test_not_found(self, client: TestClient) -> None:
        response = client.delete("/api/tasks/T-001")
        assert response.status_code == 404
        assert response.json() == {"error": "Task not found"}

    def test_invalid_id(self, client: TestClient) -> None:
        response = client.delete("/api/tasks/INVALID")
        assert response.status_code == 400

    def test_missing_id(self, client: TestClient) -> None:
        response = client.delete("/api/tasks")
        assert response.status_code == 400
        assert response.json() == {"error": "ID is required"}


class TestFailureStatus:
    @pytest.mark.parametrize(
        ("kind", "expected"),
        [
            (ErrorKind.NOT_FOUND, 404),
            (ErrorKind.VALIDATION, 400),
            (ErrorKind.OVERFLOW, 400),
            (ErrorKind.STORAGE, 400),
            (None, 400),
        ],
    )
    def test_mapping(self, kind: ErrorKind | None, expected: int) -> None:
        assert failure_status(kind) == expected
