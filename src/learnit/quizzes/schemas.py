"""Pydantic models for quiz and assessment results."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from learnit.gamification.schemas import Badge


class QuizResult(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    score: int
    passed: bool | None = None
    correct_count: int = 0
    total_questions: int = 0
    xp_earned: int = 0
    new_badges: list[Badge] = []


class AssessmentResult(QuizResult):
    skill_level: str | None = None
    results: list[dict] = []
