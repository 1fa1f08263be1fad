"""HTTP client middleware registration."""

from collections.abc import Awaitable, Callable
from typing import Any

from learnit.config import Settings
from learnit.middleware.logging import log_response, setup_logging
from learnit.middleware.request_id import attach_request_id

EventHooks = dict[str, list[Callable[[Any], Awaitable[None]]]]


def default_event_hooks() -> EventHooks:
    """Request and response hooks, without touching logging configuration."""
    return {
        "request": [attach_request_id],
        "response": [log_response],
    }


def setup_middleware(settings: Settings) -> EventHooks:
    """Configure logging and return the httpx event hooks for the API client.

    Request hooks run before the request is sent, response hooks as soon as
    the response headers arrive (before the body is read).
    """
    setup_logging(settings)
    return default_event_hooks()
