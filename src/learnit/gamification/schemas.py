"""Pydantic models for gamification payloads.

Wire keys are camelCase (``currentStreak``, ``newBadges``); Python code uses
the snake_case field names.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Badge ---


class Badge(CamelModel):
    """An unlocked achievement. Identity is ``id``."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str = ""
    icon: str = ""
    earned_at: datetime | None = None


class BadgeCatalogEntry(Badge):
    earned: bool = False


# --- Stats ---


class GamificationStats(CamelModel):
    xp: int = Field(default=0, ge=0)
    level: int = Field(default=1, ge=1)
    current_streak: int = Field(default=0, ge=0)
    longest_streak: int = Field(default=0, ge=0)
    badges: list[Badge] = []
    total_lessons_completed: int = Field(default=0, ge=0)
    total_quizzes_taken: int = Field(default=0, ge=0)
    has_completed_assessment: bool = False
    xp_for_next_level: int = 100
    progress_to_next_level: float = 0.0
    activity_dates: list[datetime] = []


# --- Mutation responses ---


class StreakUpdate(CamelModel):
    current_streak: int = Field(ge=0)
    longest_streak: int | None = None
    streak_updated: bool = False
    new_badges: list[Badge] = []


class LessonCompletion(CamelModel):
    xp_earned: int
    total_xp: int = Field(alias="totalXP", ge=0)
    level: int = Field(ge=1)
    total_lessons_completed: int | None = None
    new_badges: list[Badge] = []


# --- Leaderboard ---


class LeaderboardEntry(CamelModel):
    rank: int
    user_id: str | None = None
    name: str = "Anonymous"
    xp: int = 0
    level: int = 1
    badge_count: int = 0


class LeaderboardUserStats(CamelModel):
    xp: int
    level: int


class Leaderboard(CamelModel):
    leaderboard: list[LeaderboardEntry] = []
    user_rank: int | None = None
    user_stats: LeaderboardUserStats | None = None
