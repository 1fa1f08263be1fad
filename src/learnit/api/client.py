"""Async REST client for the LearnIT backend.

Every endpoint answers with the same envelope::

    {"success": true, "data": {...}}
    {"success": false, "message": "Quiz not found"}

``ApiClient`` unwraps successful envelopes into their ``data`` payload and
turns everything else into an ``ApiError``.
"""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from learnit.api.exceptions import ApiResponseError, ApiUnavailableError
from learnit.config import Settings
from learnit.middleware import EventHooks, default_event_hooks

logger = structlog.get_logger()


def unwrap_envelope(response: httpx.Response) -> Any:
    """Return the ``data`` payload of a successful envelope or raise."""
    path = response.request.url.path
    try:
        body = response.json()
    except ValueError:
        raise ApiResponseError(
            "Response body is not JSON",
            status_code=response.status_code,
            path=path,
        ) from None

    if not isinstance(body, dict):
        raise ApiResponseError("Unexpected response shape", status_code=response.status_code, path=path)

    if response.is_error or not body.get("success", False):
        message = body.get("message") or response.reason_phrase or "Request failed"
        raise ApiResponseError(message, status_code=response.status_code, path=path)

    return body.get("data")


class ApiClient:
    """Thin wrapper around ``httpx.AsyncClient`` with bearer auth and envelope handling."""

    def __init__(
        self,
        settings: Settings,
        token: str | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        event_hooks: EventHooks | None = None,
    ) -> None:
        self._http = httpx.AsyncClient(
            base_url=settings.api_base_url,
            timeout=settings.api_timeout_seconds,
            transport=transport,
            event_hooks=event_hooks if event_hooks is not None else default_event_hooks(),
        )
        if token:
            self.set_token(token)

    @property
    def token(self) -> str | None:
        header = self._http.headers.get("Authorization")
        if header is None:
            return None
        return header.removeprefix("Bearer ")

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    def set_token(self, token: str) -> None:
        self._http.headers["Authorization"] = f"Bearer {token}"

    def clear_token(self) -> None:
        self._http.headers.pop("Authorization", None)

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        """Send a request and return the unwrapped ``data`` payload."""
        try:
            response = await self._http.request(method, path, params=params, json=json)
        except httpx.HTTPError as exc:
            logger.debug("api_unavailable", method=method, path=path, error=str(exc))
            raise ApiUnavailableError(str(exc) or type(exc).__name__, path=path) from exc
        return unwrap_envelope(response)

    async def get(self, path: str, *, params: dict[str, Any] | None = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, *, json: Any = None) -> Any:
        return await self.request("POST", path, json=json)

    async def patch(self, path: str, *, json: Any = None) -> Any:
        return await self.request("PATCH", path, json=json)

    async def delete(self, path: str) -> Any:
        return await self.request("DELETE", path)

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> ApiClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
