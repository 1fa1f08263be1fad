"""View-models for the widgets that read the gamification store."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from learnit.gamification.badges import dedupe_badges
from learnit.gamification.level import progress_to_next_level
from learnit.gamification.schemas import Badge, BadgeCatalogEntry, Leaderboard, LeaderboardEntry
from learnit.gamification.store import GamificationStore

LOCKED_ICON = "\U0001f512"

# (minimum streak, glyph, colour), highest first
STREAK_TIERS: list[tuple[int, str, str]] = [
    (30, "\U0001f525\U0001f525\U0001f525", "#ef4444"),
    (14, "\U0001f525\U0001f525", "#f97316"),
    (7, "\U0001f525", "#eab308"),
    (3, "⚡", "#a855f7"),
    (0, "✨", "#6366f1"),
]


@dataclass(frozen=True)
class XPBarView:
    level: int
    xp: int
    progress: float
    popup_label: str | None


@dataclass(frozen=True)
class StreakFlair:
    glyph: str
    color: str
    animated: bool


@dataclass(frozen=True)
class BadgeGridView:
    badges: list[Badge]
    locked_slots: int

    @property
    def unlocked_count(self) -> int:
        return len(self.badges)


@dataclass(frozen=True)
class BadgeTile:
    badge_id: str
    name: str
    icon: str
    earned: bool


@dataclass(frozen=True)
class LeaderboardRow:
    rank: int
    name: str
    xp: int
    level: int
    badge_count: int
    is_current_user: bool


def xp_bar(store: GamificationStore) -> XPBarView:
    stats = store.stats
    return XPBarView(
        level=stats.level,
        xp=stats.xp,
        progress=progress_to_next_level(stats.xp),
        popup_label=f"+{store.xp_gained} XP" if store.show_xp_popup else None,
    )


def streak_flair(current_streak: int) -> StreakFlair:
    for minimum, glyph, color in STREAK_TIERS:
        if current_streak >= minimum:
            return StreakFlair(glyph=glyph, color=color, animated=current_streak >= 7)
    return StreakFlair(glyph=STREAK_TIERS[-1][1], color=STREAK_TIERS[-1][2], animated=False)


def streak_label(current_streak: int) -> str:
    return f"{current_streak} day{'' if current_streak == 1 else 's'}"


def badge_grid(badges: Iterable[Badge], min_slots: int = 8) -> BadgeGridView:
    """Unique badges for the profile/progress grids, padded with locked slots."""
    unique = dedupe_badges(badges)
    return BadgeGridView(badges=unique, locked_slots=max(0, min_slots - len(unique)))


def badge_catalog(entries: Iterable[BadgeCatalogEntry]) -> list[BadgeTile]:
    """Catalog tiles; badges not yet earned show a lock instead of their icon."""
    return [
        BadgeTile(
            badge_id=entry.id,
            name=entry.name,
            icon=entry.icon if entry.earned else LOCKED_ICON,
            earned=entry.earned,
        )
        for entry in entries
    ]


def leaderboard_rows(leaderboard: Leaderboard, current_user_id: str | None = None) -> list[LeaderboardRow]:
    def _row(entry: LeaderboardEntry) -> LeaderboardRow:
        return LeaderboardRow(
            rank=entry.rank,
            name=entry.name,
            xp=entry.xp,
            level=entry.level,
            badge_count=entry.badge_count,
            is_current_user=current_user_id is not None and entry.user_id == current_user_id,
        )

    return [_row(entry) for entry in leaderboard.leaderboard]
