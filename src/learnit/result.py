"""Explicit success/failure return value for operations that never raise."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of a store operation.

    ``ok`` is True when the operation completed; ``value`` then holds its
    payload. On failure ``error`` holds the exception that was logged.
    """

    ok: bool
    value: T | None = None
    error: Exception | None = None

    @classmethod
    def success(cls, value: T | None = None) -> Result[T]:
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: Exception) -> Result[T]:
        return cls(ok=False, error=error)

    def unwrap(self) -> T | None:
        """Return the payload, re-raising the captured error on failure."""
        if not self.ok:
            if self.error is None:
                raise RuntimeError("failed Result carries no error")
            raise self.error
        return self.value
