"""Learner session: wires the per-login objects together.

Everything that lives for one authenticated session (API client,
gamification store, notification poller) is built here and handed to
consumers explicitly. Leaving the context is the logout: timers and the
poller are cancelled, the store is reset and the HTTP client closed.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass

import httpx
import structlog

from learnit.api.client import ApiClient
from learnit.auth.schemas import AuthSession, User
from learnit.config import Settings
from learnit.gamification.events import Scheduler
from learnit.gamification.service import GamificationAPI
from learnit.gamification.store import GamificationStore
from learnit.middleware import default_event_hooks, setup_middleware
from learnit.notifications.poller import UnreadCountPoller
from learnit.notifications.service import NotificationFeed, NotificationsAPI

logger = structlog.get_logger()


@dataclass
class LearnerSession:
    user: User
    client: ApiClient
    gamification: GamificationStore
    notifications: NotificationsAPI
    unread: UnreadCountPoller
    settings: Settings

    def notification_feed(self) -> NotificationFeed:
        """Fresh panel model, created each time the panel opens."""
        return NotificationFeed(self.notifications, limit=self.settings.notification_panel_limit)


@asynccontextmanager
async def open_session(
    settings: Settings,
    auth: AuthSession,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
    scheduler: Scheduler | None = None,
    configure_logging: bool = True,
) -> AsyncGenerator[LearnerSession, None]:
    """Start the session-scoped services for ``auth`` and tear them down on exit."""
    hooks = setup_middleware(settings) if configure_logging else default_event_hooks()
    client = ApiClient(settings, auth.token, transport=transport, event_hooks=hooks)
    store = GamificationStore(GamificationAPI(client), settings, scheduler=scheduler)
    notifications = NotificationsAPI(client)
    poller = UnreadCountPoller(notifications, interval=settings.notification_poll_interval_seconds)

    structlog.contextvars.bind_contextvars(user_id=auth.user.id)
    logger.info("session_started", role=auth.user.role)
    try:
        await store.start()
        poller.start()
        yield LearnerSession(
            user=auth.user,
            client=client,
            gamification=store,
            notifications=notifications,
            unread=poller,
            settings=settings,
        )
    finally:
        await poller.stop()
        await store.close()
        await client.aclose()
        logger.info("session_ended")
        structlog.contextvars.unbind_contextvars("user_id")
