"""Tests for ServiceResult and ServiceError."""

import json

import pytest
from pydantic import ValidationError

from taskctl.domain.errors import ErrorKind
from taskctl.services.result import ServiceError, ServiceResult


class TestServiceResult:
    def test_success_construction(self) -> None:
        result = ServiceResult(ok=True, op="create_task", data={"id": "T-001"})
        assert result.ok is True
        assert result.op == "create_task"
        assert result.data == {"id": "T-001"}
        assert result.warnings == []
        assert result.error is None

    def test_fail_shorthand(self) -> None:
        result = ServiceResult.fail(
            "toggle_task_status", "Task not found", ErrorKind.NOT_FOUND, id="T-9"
        )
        assert result.ok is False
        assert result.error is not None
        assert result.error.code is ErrorKind.NOT_FOUND
        assert result.error.message == "Task not found"
        assert result.error.detail == {"id": "T-9"}

    def test_fail_defaults_to_validation(self) -> None:
        result = ServiceResult.fail("create_task", "title is required")
        assert result.error is not None
        assert result.error.code is ErrorKind.VALIDATION

    def test_json_serialization(self) -> None:
        result = ServiceResult.fail("delete_task", "Task not found", ErrorKind.NOT_FOUND)
        parsed = json.loads(result.model_dump_json())
        assert parsed["ok"] is False
        assert parsed["error"]["code"] == "NOT_FOUND"
        assert parsed["error"]["message"] == "Task not found"

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="test")
        with pytest.raises(ValidationError):
            result.ok = False  # type: ignore[misc]


class TestServiceError:
    def test_default_detail(self) -> None:
        error = ServiceError(code=ErrorKind.STORAGE, message="disk full")
        assert error.detail == {}

    def test_code_accepts_string_value(self) -> None:
        error = ServiceError(code="OVERFLOW", message="ID sequence overflow: exceeds 999")
        assert error.code is ErrorKind.OVERFLOW
