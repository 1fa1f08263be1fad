"""Errors raised by the API client."""

from __future__ import annotations


class ApiError(Exception):
    """Base class for every failure talking to the LearnIT backend."""

    def __init__(self, message: str, *, path: str = "") -> None:
        super().__init__(message)
        self.message = message
        self.path = path


class ApiUnavailableError(ApiError):
    """The request never produced a response (connect error, timeout, DNS)."""


class ApiResponseError(ApiError):
    """The backend answered, but with an error status or a failed envelope."""

    def __init__(self, message: str, *, status_code: int, path: str = "") -> None:
        super().__init__(message, path=path)
        self.status_code = status_code

    def __str__(self) -> str:
        return f"{self.status_code}: {self.message}"
