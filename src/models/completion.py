"""
Lesson completion results reported by the UI when a learner finishes a lesson.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Mapping, Optional


def _optional_float(value: Any) -> Optional[float]:
    """Read a numeric field, treating junk and non-finite values as missing."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _flag(value: Any) -> bool:
    """Read a boolean field. Only True, False, 1 and 0 count."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    return False


@dataclass(frozen=True)
class CompletionResult:
    """
    Outcome of one lesson attempt.

    Numeric fields that are not finite numbers are stored as None, and a
    sandbox flag that is not a real boolean reads as not completed.

    Attributes:
        assessment_score: Fraction of the assessment answered correctly (0-1)
        sandbox_completed: Whether the sandbox exercise was finished
        time_spent: Minutes the learner actually spent
        estimated_time: Minutes the lesson was expected to take
        difficulty: Tier the lesson was taken at
    """

    assessment_score: Optional[float] = None
    sandbox_completed: bool = False
    time_spent: Optional[float] = None
    estimated_time: Optional[float] = None
    difficulty: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "assessment_score", _optional_float(self.assessment_score))
        object.__setattr__(self, "sandbox_completed", _flag(self.sandbox_completed))
        object.__setattr__(self, "time_spent", _optional_float(self.time_spent))
        object.__setattr__(self, "estimated_time", _optional_float(self.estimated_time))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CompletionResult:
        """Build from the camelCase record the UI sends."""
        return cls(
            assessment_score=data.get("assessmentScore"),
            sandbox_completed=data.get("sandboxCompleted", False),
            time_spent=data.get("timeSpent"),
            estimated_time=data.get("estimatedTime"),
            difficulty=data.get("difficulty"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "assessmentScore": self.assessment_score,
            "sandboxCompleted": self.sandbox_completed,
            "timeSpent": self.time_spent,
            "estimatedTime": self.estimated_time,
            "difficulty": self.difficulty,
        }
