"""Pydantic models for notification payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Notification(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(alias="_id")
    type: str
    title: str
    message: str
    icon: str = "\U0001f514"
    link: str | None = None
    action_text: str | None = None
    is_read: bool = False
    created_at: datetime


class NotificationPage(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    notifications: list[Notification] = []
    unread_count: int = 0
