"""Request ID hook: generates or propagates X-Request-Id on outgoing calls."""

import uuid

import httpx


async def attach_request_id(request: httpx.Request) -> None:
    """Generate UUID if no X-Request-Id header.

    The id travels on the request itself; ``log_response`` reads it back from
    the headers, so nothing leaks into the caller's logging context.
    """
    request.headers["X-Request-Id"] = request.headers.get("X-Request-Id") or str(uuid.uuid4())
