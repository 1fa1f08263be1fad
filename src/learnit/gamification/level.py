"""XP to level computation.

The backend stores ``level = floor(sqrt(xp / 100)) + 1``; the client uses the
same curve for optimistic updates between server round-trips:

    level 1 at 0 XP, level 2 at 100, level 3 at 400, level 4 at 900, ...
"""

from __future__ import annotations

import math
from dataclasses import dataclass

XP_PER_LEVEL_UNIT = 100


@dataclass(frozen=True)
class LevelInfo:
    level: int
    xp: int
    current_level_xp: int
    next_level_xp: int
    progress_to_next_level: float


def _check_xp(xp: int) -> None:
    if xp < 0:
        raise ValueError(f"xp must be non-negative, got {xp}")


def compute_level(xp: int) -> int:
    """Level for a non-negative XP total."""
    _check_xp(xp)
    # isqrt(xp // 100) == floor(sqrt(xp / 100)) for integers, without float error
    return math.isqrt(xp // XP_PER_LEVEL_UNIT) + 1


def xp_for_level(level: int) -> int:
    """Cumulative XP at which ``level`` starts."""
    if level < 1:
        raise ValueError(f"level must be >= 1, got {level}")
    return (level - 1) ** 2 * XP_PER_LEVEL_UNIT


def progress_to_next_level(xp: int) -> float:
    """Percentage of the way from the current level to the next, in [0, 100]."""
    level = compute_level(xp)
    floor_xp = xp_for_level(level)
    ceiling_xp = xp_for_level(level + 1)
    progress = 100 * (xp - floor_xp) / (ceiling_xp - floor_xp)
    return min(max(progress, 0.0), 100.0)


def level_info(xp: int) -> LevelInfo:
    """Level, thresholds and progress for ``xp`` in one call."""
    level = compute_level(xp)
    return LevelInfo(
        level=level,
        xp=xp,
        current_level_xp=xp_for_level(level),
        next_level_xp=xp_for_level(level + 1),
        progress_to_next_level=progress_to_next_level(xp),
    )
