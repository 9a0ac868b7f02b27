"""
Learner Profile: the scored outcome of the assessment questionnaire.

This module provides:
- Closed enums for tier, pace and session length
- An immutable LearnerProfile snapshot with document (de)serialization
- Derived insights shown on the results screen (confidence, completion
  estimate, recommendations, next steps)
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Iterable, Optional

from ..utils.validation import validate_learner_profile


class Tier(str, Enum):
    """Content-difficulty tier, ordered from easiest to hardest."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"

    @classmethod
    def parse(cls, value: Tier | str) -> Tier:
        """
        Coerce a tier name into a Tier.

        Raises:
            ValueError: If value is not a known tier
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(
                f"Unknown tier '{value}'. Expected one of: {[t.value for t in cls]}"
            ) from None

    @property
    def rank(self) -> int:
        return TIER_ORDER.index(self)

    def __str__(self) -> str:
        return self.value


TIER_ORDER: tuple[Tier, ...] = (Tier.BEGINNER, Tier.INTERMEDIATE, Tier.ADVANCED)


class Pace(str, Enum):
    SLOW = "slow"
    MODERATE = "moderate"
    FAST = "fast"

    def __str__(self) -> str:
        return self.value


class SessionLength(str, Enum):
    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"

    def __str__(self) -> str:
        return self.value


# Minutes per session used for completion estimates
SESSION_MINUTES = {
    SessionLength.SHORT: 20,
    SessionLength.MEDIUM: 35,
    SessionLength.LONG: 50,
}

# Total course minutes the completion estimate is based on
COURSE_MINUTES = 300

SCHEMA_VERSION = 1


def _utc_now() -> str:
    """Get current UTC timestamp in ISO 8601 format."""
    return datetime.now(timezone.utc).isoformat()


def _tags(values: Optional[Iterable[str]]) -> tuple[str, ...]:
    """Normalize a tag collection: keep first-seen order, drop duplicates."""
    if values is None:
        return ()
    if isinstance(values, str):
        values = [values]
    return tuple(dict.fromkeys(v for v in values if v))


@dataclass(frozen=True)
class LearnerProfile:
    """
    Versioned, read-only learner profile.

    Created when the assessment is completed and replaced only when the
    learner retakes it (or when a tier change is applied with
    ``with_skill_level``).
    """

    skill_level: Tier = Tier.BEGINNER
    pace: Pace = Pace.MODERATE
    session_length: SessionLength = SessionLength.MEDIUM
    tech_level: int = 0
    motivation: int = 3
    confidence: int = 3
    goals: tuple[str, ...] = ()
    challenges: tuple[str, ...] = ()
    preferences: tuple[str, ...] = ()
    interests: tuple[str, ...] = ()
    priorities: tuple[str, ...] = ()
    domain: Optional[str] = None
    success_definition: Optional[str] = None
    session_minutes: int = 35
    version: int = SCHEMA_VERSION
    created_at: str = field(default_factory=_utc_now)

    def __post_init__(self):
        # Frozen: normalize through object.__setattr__
        object.__setattr__(self, "skill_level", Tier.parse(self.skill_level))
        object.__setattr__(self, "pace", Pace(self.pace))
        object.__setattr__(self, "session_length", SessionLength(self.session_length))
        for name in ("goals", "challenges", "preferences", "interests", "priorities"):
            object.__setattr__(self, name, _tags(getattr(self, name)))

        if not 0 <= self.tech_level <= 4:
            raise ValueError(f"tech_level must be in [0, 4], got {self.tech_level}")
        if not 1 <= self.motivation <= 5:
            raise ValueError(f"motivation must be in [1, 5], got {self.motivation}")
        if not 1 <= self.confidence <= 5:
            raise ValueError(f"confidence must be in [1, 5], got {self.confidence}")

    # ==================== Tier feedback ====================

    def with_skill_level(self, tier: Tier | str) -> LearnerProfile:
        """Return a copy of this profile at a different tier."""
        return replace(self, skill_level=Tier.parse(tier))

    # ==================== Derived insights ====================

    def assessment_confidence(self) -> int:
        """
        Confidence (percent) that the generated path fits this learner.

        Starts at 50 and adds points for motivation, learning confidence,
        technical comfort, absence of overwhelm and a fast pace. Capped at 95.
        """
        score = 50
        if self.motivation >= 4:
            score += 20
        if self.confidence >= 4:
            score += 15
        if self.tech_level >= 2:
            score += 10
        if "overwhelm" not in self.challenges:
            score += 10
        if self.pace is Pace.FAST:
            score += 5
        return min(score, 95)

    def estimated_completion_weeks(self) -> int:
        """Estimate weeks to finish the course from session habits."""
        if self.motivation >= 4:
            sessions_per_week = 4
        elif self.motivation >= 3:
            sessions_per_week = 3
        else:
            sessions_per_week = 2
        minutes = SESSION_MINUTES.get(self.session_length, 35)
        return math.ceil(COURSE_MINUTES / (sessions_per_week * minutes))

    def recommendations(self) -> list[str]:
        """Study recommendations derived from pace, goals and challenges."""
        recommendations = []

        if self.pace is Pace.SLOW:
            recommendations.append(
                "Take your time with each concept - understanding is more important than speed"
            )
        if "jargon" in self.challenges:
            recommendations.append(
                "We'll use simple language and explain technical terms clearly"
            )
        if "work_productivity" in self.goals:
            recommendations.append(
                "Focus on practical AI tools you can use immediately in your work"
            )
        if "time" in self.challenges:
            recommendations.append(
                "Lessons are designed for your time constraints with flexible pacing"
            )

        return recommendations

    def next_steps(self) -> list[str]:
        steps = ["Complete your personalized welcome lesson"]
        if self.skill_level is Tier.BEGINNER:
            steps.append("Start with 'Understanding AI Basics' to build foundation")
        else:
            steps.append("Jump into practical AI tool mastery")
        steps.append("Practice with real AI tools in guided exercises")
        return steps

    # ==================== Persistence ====================

    def to_dict(self) -> dict[str, Any]:
        """Export as a plain document (camelCase keys, enums as strings)."""
        return {
            "version": self.version,
            "createdAt": self.created_at,
            "skillLevel": self.skill_level.value,
            "pace": self.pace.value,
            "sessionLength": self.session_length.value,
            "sessionMinutes": self.session_minutes,
            "techLevel": self.tech_level,
            "motivation": self.motivation,
            "confidence": self.confidence,
            "goals": list(self.goals),
            "challenges": list(self.challenges),
            "preferences": list(self.preferences),
            "interests": list(self.interests),
            "priorities": list(self.priorities),
            "domain": self.domain,
            "successDefinition": self.success_definition,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any], validate: bool = True) -> LearnerProfile:
        """
        Build a profile from a stored document.

        Raises:
            ValidationError: If validate is True and the document is invalid
        """
        if validate:
            validate_learner_profile(data).raise_for_errors()

        return cls(
            skill_level=data["skillLevel"],
            pace=data["pace"],
            session_length=data["sessionLength"],
            tech_level=data["techLevel"],
            motivation=data["motivation"],
            confidence=data["confidence"],
            goals=data.get("goals"),
            challenges=data.get("challenges"),
            preferences=data.get("preferences"),
            interests=data.get("interests"),
            priorities=data.get("priorities"),
            domain=data.get("domain"),
            success_definition=data.get("successDefinition"),
            session_minutes=data.get("sessionMinutes", 35),
            version=data.get("version", SCHEMA_VERSION),
            created_at=data.get("createdAt") or _utc_now(),
        )

    def __repr__(self) -> str:
        return (
            f"LearnerProfile(skill={self.skill_level.value}, "
            f"pace={self.pace.value}, "
            f"session={self.session_length.value}, "
            f"goals={list(self.goals)})"
        )
