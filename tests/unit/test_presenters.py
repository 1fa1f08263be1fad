"""View-models for the XP bar, streak counter, badge grids and leaderboard."""

from __future__ import annotations

import pytest

from learnit.gamification.presenters import (
    LOCKED_ICON,
    badge_catalog,
    badge_grid,
    leaderboard_rows,
    streak_flair,
    streak_label,
    xp_bar,
)
from learnit.gamification.schemas import Badge, BadgeCatalogEntry, GamificationStats, Leaderboard
from learnit.gamification.store import StoreState


class TestXPBar:
    @pytest.mark.asyncio
    async def test_reflects_store(self, store, scheduler):
        store._stats = GamificationStats(xp=90, level=1)
        store._state = StoreState.READY

        store.add_xp(160)
        view = xp_bar(store)

        assert view.level == 2
        assert view.xp == 250
        assert view.progress == pytest.approx(50.0)
        assert view.popup_label == "+160 XP"

        scheduler.advance(2000)
        assert xp_bar(store).popup_label is None

    @pytest.mark.asyncio
    async def test_defaults_before_login(self, store):
        view = xp_bar(store)
        assert (view.level, view.xp, view.progress, view.popup_label) == (1, 0, 0.0, None)


class TestStreak:
    @pytest.mark.parametrize(
        "streak,color,animated",
        [
            (0, "#6366f1", False),
            (2, "#6366f1", False),
            (3, "#a855f7", False),
            (7, "#eab308", True),
            (14, "#f97316", True),
            (29, "#f97316", True),
            (30, "#ef4444", True),
            (365, "#ef4444", True),
        ],
    )
    def test_tiers(self, streak, color, animated):
        flair = streak_flair(streak)
        assert flair.color == color
        assert flair.animated is animated

    def test_glyph_intensifies(self):
        assert streak_flair(30).glyph.count("\U0001f525") == 3
        assert streak_flair(14).glyph.count("\U0001f525") == 2
        assert streak_flair(7).glyph.count("\U0001f525") == 1

    @pytest.mark.parametrize("streak,label", [(0, "0 days"), (1, "1 day"), (12, "12 days")])
    def test_label(self, streak, label):
        assert streak_label(streak) == label


class TestBadgeGrid:
    def test_dedupes_and_pads(self):
        badges = [Badge(id=i, name=i) for i in ["a", "b", "a", "c"]]
        grid = badge_grid(badges, min_slots=8)
        assert [b.id for b in grid.badges] == ["a", "b", "c"]
        assert grid.unlocked_count == 3
        assert grid.locked_slots == 5

    def test_no_padding_when_full(self):
        badges = [Badge(id=str(i), name=str(i)) for i in range(10)]
        assert badge_grid(badges, min_slots=8).locked_slots == 0


class TestBadgeCatalog:
    def test_locked_badges_hide_icon(self):
        entries = [
            BadgeCatalogEntry(id="first_lesson", name="First Steps", icon="F", earned=True),
            BadgeCatalogEntry(id="scholar", name="Scholar", icon="S", earned=False),
        ]
        tiles = badge_catalog(entries)
        assert [t.icon for t in tiles] == ["F", LOCKED_ICON]
        assert [t.earned for t in tiles] == [True, False]


class TestLeaderboardRows:
    def test_flags_current_user(self):
        board = Leaderboard.model_validate(
            {
                "leaderboard": [
                    {"rank": 1, "userId": "u1", "name": "Ada", "xp": 900, "level": 4, "badgeCount": 5},
                    {"rank": 2, "userId": "u2", "name": "Linus", "xp": 400, "level": 3, "badgeCount": 2},
                ],
                "userRank": 2,
                "userStats": {"xp": 400, "level": 3},
            }
        )
        rows = leaderboard_rows(board, current_user_id="u2")
        assert [r.is_current_user for r in rows] == [False, True]
        assert rows[0].name == "Ada"
        assert rows[1].badge_count == 2

    def test_no_current_user(self):
        board = Leaderboard.model_validate({"leaderboard": [{"rank": 1, "userId": None, "xp": 5}]})
        rows = leaderboard_rows(board)
        assert rows[0].name == "Anonymous"
        assert rows[0].is_current_user is False
