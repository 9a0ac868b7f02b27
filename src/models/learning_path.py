"""
Learning Path: the ordered lesson sequence assigned to a learner.

A path is an immutable value. Progress changes (completing a lesson,
merging completions written concurrently) return a new path, so the
cursor invariants are checked in one place:
- next_lesson_index never decreases and never exceeds len(lessons)
- completed_lessons only grows
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Iterable, Optional

from ..utils.validation import validate_learning_path
from .learner_profile import Tier


@dataclass(frozen=True)
class LessonStub:
    """Lesson reference as listed in a learning path."""

    id: str
    title: str
    duration_minutes: int
    difficulty: Tier

    def __post_init__(self):
        object.__setattr__(self, "difficulty", Tier.parse(self.difficulty))
        if self.duration_minutes <= 0:
            raise ValueError(
                f"Lesson '{self.id}' duration must be > 0, got {self.duration_minutes}"
            )

    def with_duration(self, minutes: int) -> LessonStub:
        return replace(self, duration_minutes=minutes)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "durationMinutes": self.duration_minutes,
            "difficulty": self.difficulty.value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LessonStub:
        return cls(
            id=data["id"],
            title=data["title"],
            duration_minutes=data["durationMinutes"],
            difficulty=data["difficulty"],
        )


@dataclass(frozen=True)
class PathProgress:
    """Snapshot of where a learner is in their path."""

    current_index: int
    total_lessons: int
    completed_count: int
    next_lesson: Optional[LessonStub]
    progress_percentage: int


@dataclass(frozen=True)
class LessonPosition:
    """Where a single lesson sits relative to the cursor."""

    position: int
    total: int
    is_next: bool
    is_completed: bool
    is_locked: bool


@dataclass(frozen=True)
class CompletionOutcome:
    """Result of marking a lesson complete."""

    completed: bool
    is_path_complete: bool = False
    next_lesson: Optional[LessonStub] = None


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class LearningPath:
    """
    Persisted, ordered lesson sequence with a progress cursor.

    Attributes:
        title: Display title, e.g. "Beginner AI Learning Path"
        skill_level: Tier the path was generated for
        lessons: Ordered lesson stubs
        next_lesson_index: Cursor into lessons (0 = nothing completed)
        completed_lessons: Ids of completed lessons in completion order
        personalized_for: Profile document the path was generated from
        created_at: ISO-8601 creation timestamp
    """

    title: str
    skill_level: Tier
    lessons: tuple[LessonStub, ...]
    next_lesson_index: int = 0
    completed_lessons: tuple[str, ...] = ()
    personalized_for: Optional[dict[str, Any]] = field(default=None, compare=False)
    created_at: str = field(default_factory=_utc_now, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "skill_level", Tier.parse(self.skill_level))
        object.__setattr__(self, "lessons", tuple(self.lessons))
        object.__setattr__(
            self, "completed_lessons", tuple(dict.fromkeys(self.completed_lessons))
        )
        if not 0 <= self.next_lesson_index <= len(self.lessons):
            raise ValueError(
                f"next_lesson_index {self.next_lesson_index} outside [0, {len(self.lessons)}]"
            )

    @property
    def estimated_duration(self) -> int:
        """Total minutes across all lessons."""
        return sum(lesson.duration_minutes for lesson in self.lessons)

    @property
    def is_complete(self) -> bool:
        return self.next_lesson_index >= len(self.lessons)

    def index_of(self, lesson_id: str) -> int:
        """Index of a lesson in the path, or -1 if absent."""
        for i, lesson in enumerate(self.lessons):
            if lesson.id == lesson_id:
                return i
        return -1

    # ==================== Progress queries ====================

    def next_lesson(self) -> Optional[LessonStub]:
        """Lesson at the cursor, or None when the path is finished."""
        if self.next_lesson_index < len(self.lessons):
            return self.lessons[self.next_lesson_index]
        return None

    def progress(self) -> PathProgress:
        total = len(self.lessons)
        return PathProgress(
            current_index=self.next_lesson_index,
            total_lessons=total,
            completed_count=self.next_lesson_index,
            next_lesson=self.next_lesson(),
            progress_percentage=round(self.next_lesson_index / total * 100) if total else 0,
        )

    def lesson_position(self, lesson_id: str) -> Optional[LessonPosition]:
        """Position of a lesson relative to the cursor, or None if not in path."""
        index = self.index_of(lesson_id)
        if index == -1:
            return None
        return LessonPosition(
            position=index + 1,
            total=len(self.lessons),
            is_next=index == self.next_lesson_index,
            is_completed=index < self.next_lesson_index,
            is_locked=index > self.next_lesson_index,
        )

    # ==================== Progress updates ====================

    def mark_lesson_complete(self, lesson_id: str) -> tuple[LearningPath, CompletionOutcome]:
        """
        Complete the lesson at the cursor and advance.

        Only the lesson the cursor points at can be completed; any other id
        leaves the path unchanged.

        Returns:
            Tuple of (updated path, outcome)
        """
        index = self.index_of(lesson_id)
        if index == -1 or index != self.next_lesson_index:
            return self, CompletionOutcome(completed=False)

        updated = replace(
            self,
            next_lesson_index=index + 1,
            completed_lessons=self.completed_lessons + (lesson_id,),
        )
        if updated.is_complete:
            return updated, CompletionOutcome(completed=True, is_path_complete=True)
        return updated, CompletionOutcome(
            completed=True, is_path_complete=False, next_lesson=updated.next_lesson()
        )

    def merge_completed(self, lesson_ids: Iterable[str]) -> LearningPath:
        """
        Union completed ids into this path and advance the cursor over the
        unbroken run of completed lessons starting at it. A lesson completed
        ahead of an unfinished one is recorded but does not move the cursor.
        Ids not in the path are ignored.
        """
        known = [lesson_id for lesson_id in lesson_ids if self.index_of(lesson_id) != -1]
        completed = tuple(dict.fromkeys(self.completed_lessons + tuple(known)))
        cursor = self.next_lesson_index
        while cursor < len(self.lessons) and self.lessons[cursor].id in completed:
            cursor += 1
        return replace(self, completed_lessons=completed, next_lesson_index=cursor)

    # ==================== Persistence ====================

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "skillLevel": self.skill_level.value,
            "lessons": [lesson.to_dict() for lesson in self.lessons],
            "estimatedDuration": self.estimated_duration,
            "nextLessonIndex": self.next_lesson_index,
            "completedLessons": list(self.completed_lessons),
            "personalizedFor": self.personalized_for,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any], validate: bool = True) -> LearningPath:
        """
        Build a path from a stored document.

        Raises:
            ValidationError: If validate is True and the document is invalid
        """
        if validate:
            validate_learning_path(data).raise_for_errors()

        return cls(
            title=data["title"],
            skill_level=data["skillLevel"],
            lessons=tuple(LessonStub.from_dict(lesson) for lesson in data["lessons"]),
            next_lesson_index=data.get("nextLessonIndex", 0),
            completed_lessons=tuple(data.get("completedLessons", [])),
            personalized_for=data.get("personalizedFor"),
            created_at=data.get("createdAt") or _utc_now(),
        )

    def __repr__(self) -> str:
        return (
            f"LearningPath(title='{self.title}', "
            f"lessons={len(self.lessons)}, "
            f"next={self.next_lesson_index}, "
            f"duration={self.estimated_duration}min)"
        )
