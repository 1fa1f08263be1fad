"""Badge deduplication.

The backend may report the same badge more than once (repeated streak or
lesson pushes). Display and storage both work on a unique set keyed by
badge id, first occurrence wins.
"""

from __future__ import annotations

from collections import OrderedDict
from collections.abc import Iterable

from learnit.gamification.schemas import Badge


def dedupe_badges(badges: Iterable[Badge]) -> list[Badge]:
    """Return one badge per id, in order of first occurrence."""
    seen: OrderedDict[str, Badge] = OrderedDict()
    for badge in badges:
        if badge.id not in seen:
            seen[badge.id] = badge
    return list(seen.values())


def merge_badges(existing: Iterable[Badge], incoming: Iterable[Badge]) -> list[Badge]:
    """Append ``incoming`` to ``existing`` and deduplicate the result."""
    return dedupe_badges([*existing, *incoming])
