"""Quiz submission flows.

Submitting a quiz is a form flow: errors propagate to the caller, who shows
them. On success the awarded XP and badges are forwarded to the
gamification store.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from learnit.api.client import ApiClient
from learnit.gamification.store import GamificationStore
from learnit.quizzes.schemas import AssessmentResult, QuizResult

logger = logging.getLogger(__name__)


def _award(store: GamificationStore, result: QuizResult) -> None:
    if result.xp_earned:
        store.add_xp(result.xp_earned, result.new_badges)


async def submit_lesson_quiz(
    client: ApiClient,
    store: GamificationStore,
    lesson_id: str,
    quiz_id: str,
    answers: Sequence[int | None],
) -> QuizResult:
    """Grade a lesson quiz server-side and credit the result."""
    data = await client.post(
        f"/quiz/lesson/{lesson_id}/submit",
        json={"quizId": quiz_id, "answers": list(answers)},
    )
    result = QuizResult.model_validate(data)
    logger.info("Lesson quiz %s scored %d%% (+%d XP)", quiz_id, result.score, result.xp_earned)
    _award(store, result)
    return result


async def submit_assessment(
    client: ApiClient,
    store: GamificationStore,
    quiz_id: str,
    answers: Sequence[object],
) -> AssessmentResult:
    """Grade the placement assessment and credit the result."""
    data = await client.post(
        "/quiz/assessment/submit",
        json={"quizId": quiz_id, "answers": list(answers)},
    )
    result = AssessmentResult.model_validate(data)
    logger.info("Assessment %s scored %d%% (skill level %s)", quiz_id, result.score, result.skill_level)
    _award(store, result)
    return result
