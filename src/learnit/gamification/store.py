"""Session-scoped gamification store.

Holds the learner's ``GamificationStats`` plus the transient UI state (XP
popup, badge toasts) for the lifetime of an authenticated session. The store
is the only writer of the stats; consumers read ``store.stats`` and mutate
through the operations below.

Lifecycle::

    UNINITIALIZED --start()--> LOADING --stats fetched / failed--> READY
          ^                                                         |
          +------------------------ close() ------------------------+

Server values are authoritative. ``add_xp`` applies an optimistic estimate
that the next round-trip overwrites.

None of the operations raise. Each returns a ``Result``; failures are logged
and leave the stats untouched.

``close()`` starts a new lifecycle generation. A server response that was in
flight when the store closed belongs to the old generation and is dropped
without touching stats or scheduling timers.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import structlog

from learnit.config import Settings, get_settings
from learnit.gamification.badges import dedupe_badges, merge_badges
from learnit.gamification.events import BadgeToast, Scheduler, TimerRegistry, XPPopup
from learnit.gamification.level import compute_level
from learnit.gamification.schemas import (
    Badge,
    GamificationStats,
    LessonCompletion,
    StreakUpdate,
)
from learnit.gamification.service import GamificationAPI
from learnit.result import Result

logger = structlog.get_logger()

XP_POPUP_TIMER = "xp_popup"


class StoreState(str, Enum):
    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"


@dataclass(frozen=True)
class StoreEvent:
    """Notification fanned out to subscribers after every state change."""

    kind: str
    payload: dict[str, Any] = field(default_factory=dict)


Listener = Callable[[StoreEvent], None]


class StoreClosedError(Exception):
    """A server response arrived after the store it was meant for closed."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"store closed while {operation} was in flight")


class GamificationStore:
    """Single writer of a learner's gamification stats."""

    def __init__(
        self,
        api: GamificationAPI,
        settings: Settings | None = None,
        scheduler: Scheduler | None = None,
    ) -> None:
        settings = settings or get_settings()
        self.api = api
        self._xp_popup_ttl_ms = settings.xp_popup_ttl_ms
        self._badge_toast_ttl_ms = settings.badge_toast_ttl_ms
        self._timers = TimerRegistry(scheduler)
        self._listeners: list[Listener] = []
        self._generation = 0

        self._state = StoreState.UNINITIALIZED
        self._stats = GamificationStats()
        self._show_xp_popup = False
        self._xp_gained = 0
        self._new_badge: Badge | None = None
        self._toasts: dict[int, BadgeToast] = {}

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def state(self) -> StoreState:
        return self._state

    @property
    def loading(self) -> bool:
        return self._state is not StoreState.READY

    @property
    def stats(self) -> GamificationStats:
        return self._stats

    @property
    def show_xp_popup(self) -> bool:
        return self._show_xp_popup

    @property
    def xp_gained(self) -> int:
        return self._xp_gained

    @property
    def new_badge(self) -> Badge | None:
        """Most recently unlocked badge while its toast is on screen."""
        return self._new_badge

    @property
    def active_toasts(self) -> list[BadgeToast]:
        return list(self._toasts.values())

    @property
    def pending_timers(self) -> int:
        return self._timers.pending

    # ------------------------------------------------------------------
    # Subscribers
    # ------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` for store events. Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, kind: str, **payload: Any) -> None:
        event = StoreEvent(kind=kind, payload=payload)
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception("gamification_listener_failed", kind=kind)

    def _set_state(self, state: StoreState) -> None:
        if state is not self._state:
            self._state = state
            self._emit("state", state=state.value)

    def _set_stats(self, **changes: Any) -> None:
        self._stats = self._stats.model_copy(update=changes)
        self._emit("stats", stats=self._stats)

    def _closed_since(self, generation: int, operation: str) -> StoreClosedError | None:
        if generation == self._generation:
            return None
        logger.info("gamification_stale_response_dropped", operation=operation)
        return StoreClosedError(operation)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def start(self) -> Result[GamificationStats]:
        """Bootstrap after login: load stats, then register today's streak activity.

        A failed stats fetch still ends in READY with default stats.
        """
        generation = self._generation
        self._set_state(StoreState.LOADING)
        result = await self.fetch_stats()
        if generation == self._generation:
            await self.update_streak()
        return result

    async def close(self) -> None:
        """Tear down on logout: cancel timers and reset to defaults."""
        self._generation += 1
        self._timers.cancel_all()
        self._stats = GamificationStats()
        self._show_xp_popup = False
        self._xp_gained = 0
        self._new_badge = None
        self._toasts.clear()
        self._set_state(StoreState.UNINITIALIZED)
        self._listeners.clear()
        logger.info("gamification_store_closed")

    # ------------------------------------------------------------------
    # Server-backed operations
    # ------------------------------------------------------------------

    async def fetch_stats(self) -> Result[GamificationStats]:
        generation = self._generation
        try:
            stats = await self.api.get_stats()
        except Exception as exc:
            if closed := self._closed_since(generation, "fetch_stats"):
                return Result.failure(closed)
            logger.warning("gamification_stats_fetch_failed", error=str(exc))
            self._set_state(StoreState.READY)
            return Result.failure(exc)

        if closed := self._closed_since(generation, "fetch_stats"):
            return Result.failure(closed)
        self._stats = stats.model_copy(update={"badges": dedupe_badges(stats.badges)})
        self._emit("stats", stats=self._stats)
        self._set_state(StoreState.READY)
        return Result.success(self._stats)

    async def refresh_stats(self) -> Result[GamificationStats]:
        """Unconditional re-fetch, e.g. after a quiz finished elsewhere."""
        return await self.fetch_stats()

    async def update_streak(self) -> Result[StreakUpdate]:
        generation = self._generation
        try:
            update = await self.api.update_streak()
        except Exception as exc:
            logger.warning("gamification_streak_update_failed", error=str(exc))
            return Result.failure(exc)

        if closed := self._closed_since(generation, "update_streak"):
            return Result.failure(closed)
        changes: dict[str, Any] = {"current_streak": update.current_streak}
        if update.longest_streak is not None:
            changes["longest_streak"] = update.longest_streak
        if update.new_badges:
            changes["badges"] = merge_badges(self._stats.badges, update.new_badges)
        self._set_stats(**changes)

        for badge in dedupe_badges(update.new_badges):
            self.show_badge_unlock(badge)
        return Result.success(update)

    async def record_lesson_complete(self) -> Result[LessonCompletion]:
        """Report a finished lesson and merge the awarded XP and badges."""
        generation = self._generation
        try:
            completion = await self.api.record_lesson_complete()
        except Exception as exc:
            logger.warning("gamification_lesson_complete_failed", error=str(exc))
            return Result.failure(exc)

        if closed := self._closed_since(generation, "record_lesson_complete"):
            return Result.failure(closed)
        self._set_stats(
            xp=completion.total_xp,
            level=completion.level,
            total_lessons_completed=self._stats.total_lessons_completed + 1,
            badges=merge_badges(self._stats.badges, completion.new_badges),
        )
        self._announce(completion.xp_earned, completion.new_badges)
        return Result.success(completion)

    # ------------------------------------------------------------------
    # Local operations
    # ------------------------------------------------------------------

    def add_xp(self, amount: int, new_badges: Iterable[Badge] = ()) -> Result[GamificationStats]:
        """Optimistically add XP awarded by a server response handled elsewhere."""
        new_badges = list(new_badges)
        try:
            xp = self._stats.xp + amount
            level = compute_level(xp)
            self._timers.resolve_scheduler()
        except (TypeError, ValueError, RuntimeError) as exc:
            logger.warning("gamification_add_xp_rejected", amount=amount, error=str(exc))
            return Result.failure(exc)

        self._set_stats(
            xp=xp,
            level=level,
            badges=merge_badges(self._stats.badges, new_badges),
        )
        self._announce(amount, new_badges)
        return Result.success(self._stats)

    def show_xp_gain(self, amount: int) -> None:
        """Show the +XP popup; a newer popup restarts the window."""
        self._xp_gained = amount
        self._show_xp_popup = True
        self._emit("xp_popup_shown", popup=XPPopup(amount, self._xp_popup_ttl_ms))
        self._timers.schedule(XP_POPUP_TIMER, self._xp_popup_ttl_ms, self._hide_xp_popup)

    def show_badge_unlock(self, badge: Badge) -> BadgeToast:
        """Show a badge toast. Concurrent toasts expire independently."""
        toast = BadgeToast(badge, self._badge_toast_ttl_ms)
        self._toasts[toast.toast_id] = toast
        self._new_badge = badge
        self._emit("badge_unlocked", toast=toast)
        self._timers.schedule(
            f"badge_toast:{toast.toast_id}",
            toast.ttl_ms,
            lambda: self._expire_toast(toast.toast_id),
        )
        return toast

    def _announce(self, xp_earned: int, new_badges: Iterable[Badge]) -> None:
        self.show_xp_gain(xp_earned)
        for badge in dedupe_badges(new_badges):
            self.show_badge_unlock(badge)

    def _hide_xp_popup(self) -> None:
        self._show_xp_popup = False
        self._emit("xp_popup_hidden")

    def _expire_toast(self, toast_id: int) -> None:
        toast = self._toasts.pop(toast_id, None)
        if toast is None:
            return
        remaining = list(self._toasts.values())
        self._new_badge = remaining[-1].badge if remaining else None
        self._emit("badge_toast_expired", toast=toast)
