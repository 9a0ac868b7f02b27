"""
Data models for adaptive learning paths.

This module contains core data models:
- LearnerProfile: Scored questionnaire outcome (tier, pace, goals...)
- LearningPath / LessonStub: Ordered lesson sequence with progress cursor
- LessonDocument / AdaptedLessonView: Tiered lesson content and its projection
- CompletionResult: One lesson attempt reported by the UI
"""

from .learner_profile import TIER_ORDER, LearnerProfile, Pace, SessionLength, Tier
from .learning_path import (
    CompletionOutcome,
    LearningPath,
    LessonPosition,
    LessonStub,
    PathProgress,
)
from .lesson import AdaptedLessonView, LessonDocument
from .completion import CompletionResult

__all__ = [
    "Tier",
    "TIER_ORDER",
    "Pace",
    "SessionLength",
    "LearnerProfile",
    "LessonStub",
    "LearningPath",
    "PathProgress",
    "LessonPosition",
    "CompletionOutcome",
    "LessonDocument",
    "AdaptedLessonView",
    "CompletionResult",
]
