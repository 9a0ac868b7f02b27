"""
Adaptive learning engine.

Pure, synchronous components:
- questionnaire: Static assessment question catalog
- profile_scorer: Answers → LearnerProfile
- path_synthesizer: LearnerProfile → LearningPath
- content_adapter: LessonDocument + tier → AdaptedLessonView
- performance: Completion result → 0-1 performance score
- difficulty: Current tier + performance → next tier
"""

from .questionnaire import (
    QUESTIONS,
    AnswerRecord,
    Question,
    QuestionOption,
    QuestionType,
    find_option,
    find_question,
)
from .profile_scorer import answers_from_mapping, score_answer_map, score_answers
from .path_synthesizer import (
    BASE_PATHS,
    get_learning_path_template_catalog,
    synthesize_path,
)
from .content_adapter import adapt_lesson, configure_sandbox, resolve_tier_variant
from .performance import evaluate_performance
from .difficulty import resolve_next_tier

__all__ = [
    "QUESTIONS",
    "AnswerRecord",
    "Question",
    "QuestionOption",
    "QuestionType",
    "find_option",
    "find_question",
    "answers_from_mapping",
    "score_answers",
    "score_answer_map",
    "BASE_PATHS",
    "get_learning_path_template_catalog",
    "synthesize_path",
    "adapt_lesson",
    "configure_sandbox",
    "resolve_tier_variant",
    "evaluate_performance",
    "resolve_next_tier",
]
