"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import AsyncGenerator, Callable
from typing import Any

import httpx
import pytest
import pytest_asyncio

from learnit.api.client import ApiClient
from learnit.config import Settings
from learnit.gamification.service import GamificationAPI
from learnit.gamification.store import GamificationStore

API_BASE = "http://testserver/api"


def envelope(data: Any = None, *, success: bool = True, message: str | None = None) -> dict:
    body: dict[str, Any] = {"success": success}
    if data is not None:
        body["data"] = data
    if message is not None:
        body["message"] = message
    return body


def badge(badge_id: str, name: str | None = None) -> dict:
    return {
        "id": badge_id,
        "name": name or badge_id.replace("_", " ").title(),
        "description": f"Description of {badge_id}",
        "icon": "*",
    }


class FakeBackend:
    """Routes requests by (method, path) to canned envelopes or exceptions."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Callable[[httpx.Request], httpx.Response]] = {}
        self.calls: list[tuple[str, str]] = []
        self.requests: list[httpx.Request] = []

    def on(
        self,
        method: str,
        path: str,
        data: Any = None,
        *,
        status: int = 200,
        success: bool = True,
        message: str | None = None,
    ) -> None:
        body = envelope(data, success=success, message=message)
        self.routes[(method, path)] = lambda request: httpx.Response(status, json=body)

    def fail(self, method: str, path: str) -> None:
        """Make ``path`` fail at the transport level, as if the backend were down."""

        def _raise(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        self.routes[(method, path)] = _raise

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path.removeprefix("/api")
        self.calls.append((request.method, path))
        self.requests.append(request)
        route = self.routes.get((request.method, path))
        if route is None:
            return httpx.Response(404, json=envelope(success=False, message="Not found"))
        return route(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


class FakeHandle:
    def __init__(self, when_ms: int, callback: Callable[..., object], args: tuple) -> None:
        self.when_ms = when_ms
        self.callback = callback
        self.args = args
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeScheduler:
    """Manual clock with ``call_later`` semantics, in whole milliseconds."""

    def __init__(self) -> None:
        self.now_ms = 0
        self.handles: list[FakeHandle] = []

    def call_later(self, delay: float, callback: Callable[..., object], *args: object) -> FakeHandle:
        handle = FakeHandle(self.now_ms + round(delay * 1000), callback, args)
        self.handles.append(handle)
        return handle

    def advance(self, ms: int) -> None:
        target = self.now_ms + ms
        while True:
            due = [h for h in self.handles if not h.cancelled and not h.fired and h.when_ms <= target]
            if not due:
                break
            handle = min(due, key=lambda h: h.when_ms)
            self.now_ms = handle.when_ms
            handle.fired = True
            handle.callback(*handle.args)
        self.now_ms = target

    @property
    def live(self) -> int:
        return sum(1 for h in self.handles if not h.cancelled and not h.fired)


@pytest.fixture
def settings() -> Settings:
    return Settings(api_base_url=API_BASE, _env_file=None)


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest_asyncio.fixture
async def client(settings: Settings, backend: FakeBackend) -> AsyncGenerator[ApiClient, None]:
    api_client = ApiClient(settings, "test-token", transport=backend.transport)
    yield api_client
    await api_client.aclose()


@pytest.fixture
def store(client: ApiClient, settings: Settings, scheduler: FakeScheduler) -> GamificationStore:
    return GamificationStore(GamificationAPI(client), settings, scheduler=scheduler)
