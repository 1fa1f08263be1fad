"""Badge deduplication: one badge per id, first occurrence wins."""

from learnit.gamification.badges import dedupe_badges, merge_badges
from learnit.gamification.schemas import Badge


def _badge(badge_id: str, name: str | None = None) -> Badge:
    return Badge(id=badge_id, name=name or badge_id, description="", icon="*")


class TestDedupeBadges:
    def test_preserves_first_occurrence_order(self):
        a, b, c = _badge("a"), _badge("b"), _badge("c")
        result = dedupe_badges([a, b, a, c])
        assert [x.id for x in result] == ["a", "b", "c"]

    def test_first_occurrence_wins(self):
        first = _badge("streak_3", "On Fire")
        repeat = _badge("streak_3", "On Fire (again)")
        assert dedupe_badges([first, repeat]) == [first]

    def test_idempotent(self):
        badges = [_badge("a"), _badge("b"), _badge("a"), _badge("c"), _badge("b")]
        once = dedupe_badges(badges)
        assert dedupe_badges(once) == once

    def test_empty(self):
        assert dedupe_badges([]) == []

    def test_accepts_generators(self):
        result = dedupe_badges(_badge(i) for i in ["x", "y", "x"])
        assert [b.id for b in result] == ["x", "y"]


class TestMergeBadges:
    def test_appends_new_badges(self):
        merged = merge_badges([_badge("a")], [_badge("b")])
        assert [b.id for b in merged] == ["a", "b"]

    def test_existing_badge_not_duplicated(self):
        merged = merge_badges([_badge("a"), _badge("b")], [_badge("b"), _badge("c"), _badge("c")])
        assert [b.id for b in merged] == ["a", "b", "c"]
