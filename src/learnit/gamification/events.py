"""Transient UI events and the timers that expire them.

XP popups and badge-unlock toasts live for a fixed window and then clear
themselves. Every expiry timer is registered in a ``TimerRegistry`` owned by
the store, so tearing the store down cancels anything still pending.
"""

from __future__ import annotations

import asyncio
import itertools
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol

import structlog

from learnit.gamification.schemas import Badge

logger = structlog.get_logger()

XP_POPUP_TTL_MS = 2000
BADGE_TOAST_TTL_MS = 4000

_toast_ids = itertools.count(1)


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Anything with ``asyncio.AbstractEventLoop.call_later`` semantics."""

    def call_later(self, delay: float, callback: Callable[..., object], *args: object) -> TimerHandle: ...


@dataclass(frozen=True)
class XPPopup:
    amount: int
    ttl_ms: int = XP_POPUP_TTL_MS


@dataclass(frozen=True)
class BadgeToast:
    badge: Badge
    ttl_ms: int = BADGE_TOAST_TTL_MS
    toast_id: int = field(default_factory=lambda: next(_toast_ids))


class TimerRegistry:
    """Keyed registry of pending expiry timers.

    Scheduling under a key that is still pending cancels the old timer first.
    Timers deregister themselves when they fire.
    """

    def __init__(self, scheduler: Scheduler | None = None) -> None:
        self._scheduler = scheduler
        self._handles: dict[str, TimerHandle] = {}

    @property
    def pending(self) -> int:
        return len(self._handles)

    def is_pending(self, key: str) -> bool:
        return key in self._handles

    def resolve_scheduler(self) -> Scheduler:
        """Injected scheduler, else the running loop.

        Raises ``RuntimeError`` when neither is available.
        """
        return self._scheduler or asyncio.get_running_loop()

    def schedule(self, key: str, delay_ms: int, callback: Callable[[], None]) -> None:
        """Run ``callback`` after ``delay_ms`` unless cancelled first."""
        scheduler = self.resolve_scheduler()
        self.cancel(key)
        self._handles[key] = scheduler.call_later(delay_ms / 1000, self._fire, key, callback)

    def cancel(self, key: str) -> bool:
        handle = self._handles.pop(key, None)
        if handle is None:
            return False
        handle.cancel()
        return True

    def cancel_all(self) -> int:
        """Cancel every pending timer. Returns how many were cancelled."""
        count = len(self._handles)
        for handle in self._handles.values():
            handle.cancel()
        self._handles.clear()
        if count:
            logger.debug("transient_timers_cancelled", count=count)
        return count

    def _fire(self, key: str, callback: Callable[[], None]) -> None:
        self._handles.pop(key, None)
        callback()
