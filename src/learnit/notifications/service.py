"""Notification endpoints and the panel model built on them."""

from __future__ import annotations

from datetime import datetime, timezone

import structlog

from learnit.api.client import ApiClient
from learnit.notifications.schemas import Notification, NotificationPage

logger = structlog.get_logger()


class NotificationsAPI:
    def __init__(self, client: ApiClient) -> None:
        self.client = client

    async def list_recent(self, limit: int = 20, unread_only: bool = False) -> NotificationPage:
        params: dict[str, str | int] = {"limit": limit}
        if unread_only:
            params["unreadOnly"] = "true"
        data = await self.client.get("/notifications", params=params)
        return NotificationPage.model_validate(data)

    async def unread_count(self) -> int:
        data = await self.client.get("/notifications/unread-count")
        return int(data["unreadCount"])

    async def mark_as_read(self, notification_id: str) -> None:
        await self.client.patch(f"/notifications/{notification_id}/read")

    async def mark_all_as_read(self) -> None:
        await self.client.patch("/notifications/read-all")

    async def delete(self, notification_id: str) -> None:
        await self.client.delete(f"/notifications/{notification_id}")

    async def clear(self) -> None:
        await self.client.delete("/notifications")


class NotificationFeed:
    """State behind the notification drop-down panel.

    Failures are logged and leave the local list as it was.
    """

    def __init__(self, api: NotificationsAPI, limit: int = 10) -> None:
        self.api = api
        self.limit = limit
        self.notifications: list[Notification] = []
        self.loading = True

    @property
    def has_unread(self) -> bool:
        return any(not n.is_read for n in self.notifications)

    async def load(self) -> bool:
        try:
            page = await self.api.list_recent(limit=self.limit)
        except Exception as exc:
            logger.warning("notifications_fetch_failed", error=str(exc))
            return False
        finally:
            self.loading = False
        self.notifications = page.notifications
        return True

    async def mark_as_read(self, notification_id: str) -> bool:
        try:
            await self.api.mark_as_read(notification_id)
        except Exception as exc:
            logger.warning("notification_mark_read_failed", notification_id=notification_id, error=str(exc))
            return False
        self.notifications = [
            n.model_copy(update={"is_read": True}) if n.id == notification_id else n
            for n in self.notifications
        ]
        return True

    async def mark_all_as_read(self) -> bool:
        try:
            await self.api.mark_all_as_read()
        except Exception as exc:
            logger.warning("notification_mark_all_read_failed", error=str(exc))
            return False
        self.notifications = [n.model_copy(update={"is_read": True}) for n in self.notifications]
        return True


def format_relative_time(created_at: datetime, now: datetime | None = None) -> str:
    """Compact age label: 'Just now', '5m ago', '3h ago', '2d ago'."""
    if now is None:
        now = datetime.now(timezone.utc)
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    seconds = (now - created_at).total_seconds()
    mins = int(seconds // 60)
    hours = int(seconds // 3600)
    days = int(seconds // 86400)

    if mins < 1:
        return "Just now"
    if mins < 60:
        return f"{mins}m ago"
    if hours < 24:
        return f"{hours}h ago"
    return f"{days}d ago"
