"""
Unit tests for the questionnaire catalog and the Profile Scorer.

Tests:
- Catalog shape and answer normalization
- Skill tier resolution and tie-breaking
- Last-writer-wins scoring fields
- Multi-choice answers as profile tags
- Raw answer mappings from the quiz UI
"""

import pytest

from src.engine.profile_scorer import (
    pace_from_score,
    resolve_skill_level,
    score_answer_map,
    score_answers,
    session_length_from_score,
)
from src.engine.questionnaire import (
    QUESTIONS,
    AnswerRecord,
    QuestionType,
    find_option,
    find_question,
)
from src.models.learner_profile import LearnerProfile, Pace, SessionLength, Tier


def single(question_id, value):
    return AnswerRecord(question_id=question_id, type=QuestionType.SINGLE_CHOICE, value=value)


def multi(question_id, *values):
    return AnswerRecord(question_id=question_id, type=QuestionType.MULTI_CHOICE, value=list(values))


class TestQuestionnaire:
    """Test suite for the static question catalog."""

    def test_catalog_has_fourteen_questions_and_a_welcome_slide(self):
        questions = [q for q in QUESTIONS if q.type is not QuestionType.INFO_SLIDE]
        assert len(questions) == 14
        assert QUESTIONS[0].id == "welcome"
        assert QUESTIONS[0].type is QuestionType.INFO_SLIDE

    def test_question_ids_are_unique(self):
        ids = [q.id for q in QUESTIONS]
        assert len(ids) == len(set(ids))

    def test_find_question_and_option(self):
        question = find_question("ai_experience")
        assert question is not None
        option = find_option(question, "expert")
        assert option.skill_points == {"beginner": 0, "intermediate": 0, "advanced": 4}
        assert find_option(question, "wizard") is None
        assert find_question("nope") is None

    def test_multi_choice_answer_is_ordered_and_unique(self):
        answer = multi("primary_goals", "content_creation", "work_productivity", "content_creation")
        assert answer.values == ("content_creation", "work_productivity")

    def test_multi_choice_answer_accepts_single_string(self):
        answer = multi("primary_goals")
        assert answer.values == ()
        answer = AnswerRecord("primary_goals", "multi-choice", "content_creation")
        assert answer.values == ("content_creation",)

    def test_single_choice_answer_has_no_values(self):
        assert single("learning_pace", "fast").values == ()


class TestResolveSkillLevel:
    """Test suite for tier resolution from skill points."""

    def test_no_points_is_beginner(self):
        assert resolve_skill_level({}) is Tier.BEGINNER
        assert resolve_skill_level({"beginner": 0, "intermediate": 0, "advanced": 0}) is Tier.BEGINNER

    def test_highest_total_wins(self):
        assert resolve_skill_level({"beginner": 5, "intermediate": 2, "advanced": 1}) is Tier.BEGINNER
        assert resolve_skill_level({"beginner": 1, "intermediate": 3, "advanced": 1}) is Tier.INTERMEDIATE

    def test_ties_favour_higher_tier(self):
        assert resolve_skill_level({"beginner": 2, "intermediate": 2, "advanced": 0}) is Tier.INTERMEDIATE
        assert resolve_skill_level({"beginner": 3, "intermediate": 3, "advanced": 3}) is Tier.ADVANCED


@pytest.mark.parametrize(
    "score, pace",
    [(1, Pace.SLOW), (2, Pace.SLOW), (3, Pace.MODERATE), (4, Pace.FAST), (5, Pace.FAST)],
)
def test_pace_from_score(score, pace):
    assert pace_from_score(score) is pace


@pytest.mark.parametrize(
    "score, length",
    [(1, SessionLength.SHORT), (2, SessionLength.MEDIUM), (3, SessionLength.LONG), (4, SessionLength.LONG)],
)
def test_session_length_from_score(score, length):
    assert session_length_from_score(score) is length


class TestScoreAnswers:
    """Test suite for score_answers."""

    def test_no_answers_gives_defaults(self):
        profile = score_answers([])
        assert profile.skill_level is Tier.BEGINNER
        assert profile.pace is Pace.MODERATE
        assert profile.session_length is SessionLength.MEDIUM
        assert profile.tech_level == 0
        assert profile.motivation == 3
        assert profile.confidence == 3
        assert profile.session_minutes == 35
        assert profile.goals == ()

    def test_expert_is_advanced(self):
        assert score_answers([single("ai_experience", "expert")]).skill_level is Tier.ADVANCED

    def test_occasional_user_tie_goes_to_intermediate(self):
        profile = score_answers([single("ai_experience", "occasional")])
        assert profile.skill_level is Tier.INTERMEDIATE

    def test_scoring_fields(self):
        profile = score_answers(
            [
                single("learning_pace", "accelerated"),
                single("time_availability", "short"),
                single("technical_comfort", "proficient"),
                single("motivation_level", "urgent"),
                single("learning_confidence", "supported"),
            ]
        )
        assert profile.pace is Pace.FAST
        assert profile.session_length is SessionLength.SHORT
        assert profile.session_minutes == 18
        assert profile.tech_level == 2
        assert profile.motivation == 5
        assert profile.confidence == 2

    def test_last_writer_wins(self):
        profile = score_answers(
            [single("learning_pace", "slow"), single("learning_pace", "fast")]
        )
        assert profile.pace is Pace.FAST

    def test_multi_choice_answers_become_tags(self):
        profile = score_answers(
            [
                multi("primary_goals", "work_productivity", "content_creation", "work_productivity"),
                multi("learning_challenges", "jargon", "time"),
                multi("content_preferences", "interactive"),
                multi("tool_interests", "chat_tools"),
                multi("learning_priorities", "practical", "simple"),
            ]
        )
        assert profile.goals == ("work_productivity", "content_creation")
        assert profile.challenges == ("jargon", "time")
        assert profile.preferences == ("interactive",)
        assert profile.interests == ("chat_tools",)
        assert profile.priorities == ("practical", "simple")

    def test_context_answers_are_copied(self):
        profile = score_answers(
            [single("professional_context", "educator"), single("success_definition", "teach_others")]
        )
        assert profile.domain == "educator"
        assert profile.success_definition == "teach_others"

    def test_unknown_questions_options_and_slides_are_ignored(self):
        profile = score_answers(
            [
                single("favourite_colour", "blue"),
                single("ai_experience", "wizard"),
                AnswerRecord("welcome", QuestionType.INFO_SLIDE),
            ]
        )
        assert profile == LearnerProfile(created_at=profile.created_at)

    def test_multi_choice_answers_are_not_scored(self):
        """Tag questions never move skill points, whatever their values."""
        profile = score_answers([multi("primary_goals", "expert")])
        assert profile.skill_level is Tier.BEGINNER


class TestScoreAnswerMap:
    """Test suite for the raw ``{question_id: value}`` mapping."""

    def test_answer_map(self):
        profile = score_answer_map(
            {
                "welcome": None,
                "ai_experience": "daily",
                "learning_pace": "guided",
                "primary_goals": ["prompt_engineering"],
                "unknown": "ignored",
            }
        )
        assert profile.skill_level is Tier.ADVANCED
        assert profile.pace is Pace.SLOW
        assert profile.goals == ("prompt_engineering",)

    def test_complete_beginner(self):
        profile = score_answer_map(
            {
                "ai_experience": "none",
                "learning_pace": "slow",
                "time_availability": "medium",
                "primary_goals": ["understand_basics"],
                "technical_comfort": "basic",
                "motivation_level": "casual",
                "learning_confidence": "observational",
                "learning_challenges": ["jargon", "overwhelm"],
            }
        )
        assert profile.skill_level is Tier.BEGINNER
        assert profile.pace is Pace.SLOW
        assert profile.session_length is SessionLength.MEDIUM
        assert profile.motivation == 2
        assert profile.confidence == 1
        assert profile.challenges == ("jargon", "overwhelm")
