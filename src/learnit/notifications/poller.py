"""Background polling of the unread-notification badge count."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable

import structlog

from learnit.notifications.service import NotificationsAPI

logger = structlog.get_logger()


class UnreadCountPoller:
    """Fetch the unread count immediately and then every ``interval`` seconds.

    Runs on its own asyncio task; failures are logged and the previous count
    is kept. ``stop()`` cancels the task.
    """

    def __init__(
        self,
        api: NotificationsAPI,
        interval: float = 30.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.api = api
        self.interval = interval
        self.unread_count = 0
        self.polls = 0
        self._sleep = sleep
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._poll_loop(), name="unread-count-poller")

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def poll_once(self) -> int:
        try:
            self.unread_count = await self.api.unread_count()
        except Exception as exc:
            logger.warning("notifications_unread_count_failed", error=str(exc))
        self.polls += 1
        return self.unread_count

    async def _poll_loop(self) -> None:
        while True:
            await self.poll_once()
            await self._sleep(self.interval)
