"""
Profile Scorer - reduces questionnaire answers into a LearnerProfile.

Scoring rules:
- Skill points from every single-choice option are summed per tier
- Pace, session time, technical comfort, motivation and confidence are
  overwritten by the last option that sets them
- Multi-choice answers become profile tags without scoring
- Unanswered or unknown questions leave the defaults in place
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from ..models.learner_profile import LearnerProfile, Pace, SessionLength, Tier
from ..utils.log import get_logger
from .questionnaire import (
    QUESTIONS,
    AnswerRecord,
    Question,
    QuestionType,
    find_option,
    find_question,
)

logger = get_logger(__name__)

# Multi-choice question id → profile tag field
TAG_QUESTIONS = {
    "primary_goals": "goals",
    "learning_challenges": "challenges",
    "content_preferences": "preferences",
    "tool_interests": "interests",
    "learning_priorities": "priorities",
}

# Single-choice question id → profile field copied verbatim
VALUE_QUESTIONS = {
    "professional_context": "domain",
    "success_definition": "success_definition",
}

DEFAULT_PACE_SCORE = 3
DEFAULT_TIME_SCORE = 2
DEFAULT_SESSION_MINUTES = 35
DEFAULT_TECH_LEVEL = 0
DEFAULT_MOTIVATION = 3
DEFAULT_CONFIDENCE = 3


def resolve_skill_level(skill_points: Mapping[str, int]) -> Tier:
    """
    Pick the tier with the most points. Ties go to the higher tier, and a
    tier needs at least one point to win over beginner.
    """
    beginner = skill_points.get("beginner", 0)
    intermediate = skill_points.get("intermediate", 0)
    advanced = skill_points.get("advanced", 0)
    top = max(beginner, intermediate, advanced)

    if top == advanced and advanced > 0:
        return Tier.ADVANCED
    if top == intermediate and intermediate > 0:
        return Tier.INTERMEDIATE
    return Tier.BEGINNER


def pace_from_score(pace_score: int) -> Pace:
    if pace_score <= 2:
        return Pace.SLOW
    if pace_score >= 4:
        return Pace.FAST
    return Pace.MODERATE


def session_length_from_score(time_score: int) -> SessionLength:
    if time_score <= 1:
        return SessionLength.SHORT
    if time_score >= 3:
        return SessionLength.LONG
    return SessionLength.MEDIUM


def score_answers(
    answers: Iterable[AnswerRecord],
    catalog: tuple[Question, ...] = QUESTIONS,
) -> LearnerProfile:
    """
    Score a list of answer records into a learner profile.

    Args:
        answers: Submitted answers, in submission order
        catalog: Question catalog the answers refer to

    Returns:
        LearnerProfile
    """
    skill_points = {tier.value: 0 for tier in Tier}
    pace_score = DEFAULT_PACE_SCORE
    time_score = DEFAULT_TIME_SCORE
    session_minutes = DEFAULT_SESSION_MINUTES
    tech_level = DEFAULT_TECH_LEVEL
    motivation = DEFAULT_MOTIVATION
    confidence = DEFAULT_CONFIDENCE
    tags: dict[str, tuple[str, ...]] = {}
    values: dict[str, str] = {}

    for answer in answers:
        question = find_question(answer.question_id, catalog)
        if question is None:
            logger.debug("Ignoring answer to unknown question '%s'", answer.question_id)
            continue

        if answer.type is QuestionType.MULTI_CHOICE:
            if answer.question_id in TAG_QUESTIONS:
                tags[TAG_QUESTIONS[answer.question_id]] = answer.values
            continue

        if answer.type is not QuestionType.SINGLE_CHOICE:
            continue

        if answer.question_id in VALUE_QUESTIONS and isinstance(answer.value, str):
            values[VALUE_QUESTIONS[answer.question_id]] = answer.value

        option = find_option(question, answer.value)
        if option is None:
            continue

        if option.skill_points:
            for tier, points in option.skill_points.items():
                skill_points[tier] = skill_points.get(tier, 0) + points

        # Last writer wins for each profile field
        if option.pace_score is not None:
            pace_score = option.pace_score
        if option.time_score is not None:
            time_score = option.time_score
        if option.session_minutes is not None:
            session_minutes = option.session_minutes
        if option.tech_level is not None:
            tech_level = option.tech_level
        if option.motivation is not None:
            motivation = option.motivation
        if option.confidence is not None:
            confidence = option.confidence

    profile = LearnerProfile(
        skill_level=resolve_skill_level(skill_points),
        pace=pace_from_score(pace_score),
        session_length=session_length_from_score(time_score),
        tech_level=tech_level,
        motivation=motivation,
        confidence=confidence,
        session_minutes=session_minutes,
        **tags,
        **values,
    )
    logger.debug("Scored skill points %s → %r", skill_points, profile)
    return profile


def answers_from_mapping(
    answers: Mapping[str, Any],
    catalog: tuple[Question, ...] = QUESTIONS,
) -> list[AnswerRecord]:
    """
    Convert the ``{question_id: value}`` mapping submitted by the quiz UI
    into answer records, typed from the catalog. Unknown ids are dropped.
    """
    records = []
    for question_id, value in answers.items():
        question = find_question(question_id, catalog)
        if question is None:
            continue
        records.append(AnswerRecord(question_id=question_id, type=question.type, value=value))
    return records


def score_answer_map(
    answers: Mapping[str, Any],
    catalog: tuple[Question, ...] = QUESTIONS,
) -> LearnerProfile:
    """Score the raw ``{question_id: value}`` mapping from the quiz UI."""
    return score_answers(answers_from_mapping(answers, catalog), catalog)
