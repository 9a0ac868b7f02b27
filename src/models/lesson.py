"""
Lesson documents and their per-tier adapted views.

A LessonDocument is authored content, read-only to the engine. It may carry
parallel ``content`` / ``sandbox`` / ``assessment`` variants keyed by tier,
plus tier-keyed ``xpRewards`` and ``estimatedTime``. An AdaptedLessonView is
the single-tier projection served to the UI; it is recomputed on every read
and never stored.
"""

from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping, Optional

from ..utils.validation import validate_lesson_document
from .learner_profile import Tier

VARIANT_FIELDS = ("content", "sandbox", "assessment")


class LessonDocument:
    """Read-only wrapper around a stored lesson mapping."""

    def __init__(self, data: Mapping[str, Any]):
        self._data = MappingProxyType(deepcopy(dict(data)))

    @classmethod
    def from_dict(cls, data: Any, validate: bool = True) -> LessonDocument:
        """
        Wrap a stored lesson document.

        Raises:
            ValidationError: If validate is True and data is not a lesson object
        """
        if validate:
            validate_lesson_document(data).raise_for_errors()
        return cls(data)

    @property
    def data(self) -> Mapping[str, Any]:
        return self._data

    @property
    def id(self) -> Optional[str]:
        return self._data.get("id")

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    @property
    def has_tier_variants(self) -> bool:
        """True when all three variant sets are present."""
        return all(self._data.get(name) is not None for name in VARIANT_FIELDS)

    def to_dict(self) -> dict[str, Any]:
        return deepcopy(dict(self._data))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LessonDocument):
            return NotImplemented
        return dict(self._data) == dict(other._data)

    def __repr__(self) -> str:
        return f"LessonDocument(id={self.id!r}, tiered={self.has_tier_variants})"


@dataclass(frozen=True)
class AdaptedLessonView:
    """
    One lesson document resolved against one tier.

    Attributes:
        content: Content payload for the tier
        sandbox: Sandbox payload for the tier
        assessment: Assessment payload for the tier
        xp_reward: XP awarded on completion
        estimated_time: Minutes the lesson is expected to take
        difficulty: The requested tier
    """

    content: Any
    sandbox: Any
    assessment: Any
    xp_reward: float
    estimated_time: float
    difficulty: Tier

    def to_dict(self) -> dict[str, Any]:
        return {
            "content": deepcopy(self.content),
            "sandbox": deepcopy(self.sandbox),
            "assessment": deepcopy(self.assessment),
            "xpReward": self.xp_reward,
            "estimatedTime": self.estimated_time,
            "difficulty": self.difficulty.value,
        }
