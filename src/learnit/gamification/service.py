"""Typed wrappers over the /gamification endpoints."""

from __future__ import annotations

from learnit.api.client import ApiClient
from learnit.gamification.schemas import (
    BadgeCatalogEntry,
    GamificationStats,
    LessonCompletion,
    Leaderboard,
    StreakUpdate,
)


class GamificationAPI:
    def __init__(self, client: ApiClient) -> None:
        self.client = client

    async def get_stats(self) -> GamificationStats:
        data = await self.client.get("/gamification/stats")
        return GamificationStats.model_validate(data)

    async def update_streak(self) -> StreakUpdate:
        """Register today's activity; the backend decides whether the streak grows."""
        data = await self.client.post("/gamification/update-streak")
        return StreakUpdate.model_validate(data)

    async def record_lesson_complete(self) -> LessonCompletion:
        data = await self.client.post("/gamification/lesson-complete")
        return LessonCompletion.model_validate(data)

    async def get_leaderboard(self) -> Leaderboard:
        data = await self.client.get("/gamification/leaderboard")
        return Leaderboard.model_validate(data)

    async def get_badge_catalog(self) -> list[BadgeCatalogEntry]:
        """Every badge the platform offers, flagged with whether the user has it."""
        data = await self.client.get("/gamification/badges")
        return [BadgeCatalogEntry.model_validate(entry) for entry in data or []]
