"""HTTP client hooks: request id propagation and response logging."""

from __future__ import annotations

import httpx
import pytest
import structlog
from structlog.testing import capture_logs

from learnit.middleware import default_event_hooks
from learnit.middleware.logging import log_response
from learnit.middleware.request_id import attach_request_id


class TestRequestIdHook:
    @pytest.mark.asyncio
    async def test_generates_id(self):
        request = httpx.Request("GET", "http://testserver/api/gamification/stats")
        await attach_request_id(request)
        assert len(request.headers["X-Request-Id"]) == 36

    @pytest.mark.asyncio
    async def test_propagates_existing_id(self):
        request = httpx.Request("GET", "http://testserver/api", headers={"X-Request-Id": "abc-123"})
        await attach_request_id(request)
        assert request.headers["X-Request-Id"] == "abc-123"

    @pytest.mark.asyncio
    async def test_does_not_leak_into_logging_context(self):
        structlog.contextvars.clear_contextvars()
        for _ in range(2):
            await attach_request_id(httpx.Request("GET", "http://testserver/api/gamification/stats"))
        assert "request_id" not in structlog.contextvars.get_contextvars()


class TestResponseLogging:
    @pytest.mark.asyncio
    async def test_logs_round_trip(self):
        request = httpx.Request("POST", "http://testserver/api/gamification/lesson-complete", headers={"X-Request-Id": "r1"})
        response = httpx.Response(200, request=request)
        with capture_logs() as logs:
            await log_response(response)
        assert logs == [
            {
                "event": "api_response",
                "log_level": "debug",
                "method": "POST",
                "path": "/api/gamification/lesson-complete",
                "status": 200,
                "request_id": "r1",
            }
        ]


class TestDefaultHooks:
    def test_hook_order(self):
        hooks = default_event_hooks()
        assert hooks["request"] == [attach_request_id]
        assert hooks["response"] == [log_response]
