"""Result: success-or-failure value returned by domain factories.

Value objects and the Task aggregate never raise on bad input. They return
a :class:`Result` and leave it to the caller to decide what a failure means.
"""

from __future__ import annotations

from dataclasses import dataclass

from taskctl.domain.errors import ErrorKind


@dataclass(frozen=True)
class Result[T]:
    """Either a value or an error message with its kind."""

    value: T | None = None
    error: str | None = None
    kind: ErrorKind | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> Result[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, message: str, kind: ErrorKind = ErrorKind.VALIDATION) -> Result[T]:
        return cls(error=message, kind=kind)

    def unwrap(self) -> T:
        """Return the value, raising ``ValueError`` if this is a failure."""
        if self.error is not None or self.value is None:
            msg = f"Cannot unwrap failed result: {self.error}"
            raise ValueError(msg)
        return self.value
