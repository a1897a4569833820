"""Validated value objects: Title, Status, Identifier.

Each type is built through its ``create`` classmethod, which returns a
:class:`~taskctl.domain.result.Result` instead of raising. Instances are
frozen once constructed.
"""

from __future__ import annotations

from dataclasses import dataclass

from taskctl.domain.ids import DEFAULT_PREFIX, create_id_pattern
from taskctl.domain.result import Result


def _null_message(argument_name: str) -> str:
    return f"{argument_name} is null or undefined"


@dataclass(frozen=True)
class Title:
    """Non-empty task title with surrounding whitespace stripped."""

    value: str

    @classmethod
    def create(cls, raw: str | None) -> Result[Title]:
        if raw is None:
            return Result.failure(_null_message("title"))
        trimmed = raw.strip()
        if not trimmed:
            return Result.failure("Task title cannot be empty")
        return Result.success(cls(trimmed))

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Status:
    """Completion flag: False while pending, True once completed."""

    value: bool

    @classmethod
    def create(cls, raw: bool | None) -> Result[Status]:
        if raw is None:
            return Result.failure(_null_message("status"))
        return Result.success(cls(raw))


@dataclass(frozen=True)
class Identifier:
    """Business-facing task key of the form ``{prefix}-NNN``."""

    value: str
    prefix: str = DEFAULT_PREFIX

    @classmethod
    def create(cls, raw: str | None, prefix: str = DEFAULT_PREFIX) -> Result[Identifier]:
        if raw is None:
            return Result.failure(_null_message("taskId"))
        trimmed = raw.strip()
        if create_id_pattern(prefix).match(trimmed) is None:
            return Result.failure(f"taskId must match pattern {prefix}-###")
        return Result.success(cls(trimmed, prefix))

    def __str__(self) -> str:
        return self.value
