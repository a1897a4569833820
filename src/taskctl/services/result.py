"""Outcome type shared by every TaskService operation.

A :class:`ServiceResult` is what both adapters consume: the HTTP controller
picks a status code from :attr:`ServiceResult.error_kind`, the CLI renders
it as text or JSON.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from taskctl.domain.errors import ErrorKind


class ServiceError(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: ErrorKind
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Result of one service call.

    Attributes:
        ok: False when :attr:`error` is set.
        op: Operation name, e.g. ``"toggle_task_status"``.
        data: Wire-shaped payload of a successful call.
        warnings: Non-fatal notes, such as skipped import entries.
        error: Classified failure.
    """

    model_config = ConfigDict(frozen=True)

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None

    @classmethod
    def success(
        cls,
        op: str,
        data: dict[str, Any],
        warnings: list[str] | None = None,
    ) -> ServiceResult:
        return cls(ok=True, op=op, data=data, warnings=warnings or [])

    @classmethod
    def fail(
        cls,
        op: str,
        message: str,
        code: ErrorKind = ErrorKind.VALIDATION,
        **detail: Any,
    ) -> ServiceResult:
        error = ServiceError(code=code, message=message, detail=detail)
        return cls(ok=False, op=op, error=error)

    @property
    def error_kind(self) -> ErrorKind | None:
        return self.error.code if self.error else None

    @property
    def error_message(self) -> str:
        """The failure message, or ``""`` for a successful result."""
        return self.error.message if self.error else ""
