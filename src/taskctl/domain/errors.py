"""Error kinds and domain exceptions.

Every failure that leaves the domain or service layer carries an
:class:`ErrorKind`. The HTTP layer picks a status code by matching on the
kind, never on the message text.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorKind(StrEnum):
    """Classification of task operation failures."""

    VALIDATION = "VALIDATION"
    NOT_FOUND = "NOT_FOUND"
    OVERFLOW = "OVERFLOW"
    STORAGE = "STORAGE"


class TaskError(Exception):
    """Base class for exceptions raised by taskctl layers."""

    kind: ErrorKind = ErrorKind.VALIDATION


class NotFoundError(TaskError):
    """An operation targeted an identifier absent from storage."""

    kind = ErrorKind.NOT_FOUND


class SequenceOverflowError(TaskError):
    """The identifier sequence for a prefix is exhausted."""

    kind = ErrorKind.OVERFLOW


class StorageError(TaskError):
    """The persistence layer failed."""

    kind = ErrorKind.STORAGE
