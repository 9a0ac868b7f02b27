"""
Adaptive Lesson Service - the async boundary between the engine and storage.

Orchestrates the adaptive learning cycle:
1. Assessment answers → learner profile → generated learning path
2. Lesson documents adapted to the learner's current tier at read time
3. Lesson completions scored, tier changes proposed and recorded
4. Catalog seeding with atomic batch writes

The engine components are pure; every read and write happens here.
Document layout:
    users/{userId}                                   profile + current tier
    users/{userId}/learningPath/active               active learning path
    users/{userId}/completions/{lessonId}            completion records
    learningPaths/{pathId}                           catalog path
    learningPaths/{pathId}/modules/{moduleId}        catalog module
    learningPaths/{pathId}/modules/{moduleId}/lessons/{lessonId}
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Iterable, Mapping, Optional, Union

from .config import config
from .engine.content_adapter import adapt_lesson, configure_sandbox
from .engine.difficulty import resolve_next_tier
from .engine.path_synthesizer import get_learning_path_template_catalog, synthesize_path
from .engine.performance import evaluate_performance
from .engine.profile_scorer import answers_from_mapping, score_answers
from .engine.questionnaire import AnswerRecord
from .models.completion import CompletionResult
from .models.learner_profile import LearnerProfile, Tier
from .models.learning_path import LearningPath, LessonStub
from .models.lesson import LessonDocument
from .utils.document_store import (
    ArrayUnion,
    DocumentNotFoundError,
    DocumentStore,
    JsonFileDocumentStore,
    LessonNotFoundError,
)
from .utils.log import get_logger
from .utils.validation import validate_learner_profile, validate_learning_path

logger = get_logger(__name__)

Answers = Union[Iterable[AnswerRecord], Mapping[str, Any]]


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _log_repairs(kind: str, user_id: str, repairs: list[str]) -> None:
    for repair in repairs:
        logger.warning("Stored %s for user %s: %s", kind, user_id, repair)


# ==================== Document paths ====================


def user_doc(user_id: str) -> str:
    return f"users/{user_id}"


def active_path_doc(user_id: str) -> str:
    return f"users/{user_id}/learningPath/active"


def completion_doc(user_id: str, lesson_id: str) -> str:
    return f"users/{user_id}/completions/{lesson_id}"


def catalog_path_doc(path_id: str) -> str:
    return f"learningPaths/{path_id}"


def module_doc(path_id: str, module_id: str) -> str:
    return f"learningPaths/{path_id}/modules/{module_id}"


def lesson_doc(path_id: str, module_id: str, lesson_id: str) -> str:
    return f"learningPaths/{path_id}/modules/{module_id}/lessons/{lesson_id}"


class AdaptiveLessonService:
    """
    Async service wrapping the adaptive engine around a document store.

    Reads of different lessons are independent and can run concurrently
    (e.g. with ``asyncio.gather``). Completion writes append to the
    path's completed lessons with a union transform, never overwriting.
    """

    def __init__(self, store: Optional[DocumentStore] = None):
        """
        Initialize the service.

        Args:
            store: Document store (defaults to JSON files under data/store)
        """
        self.store = store or JsonFileDocumentStore(config.paths.store_dir)

    # ==================== Catalog reads ====================

    async def get_lesson_document(
        self, path_id: str, module_id: str, lesson_id: str
    ) -> LessonDocument:
        """
        Fetch a catalog lesson.

        Raises:
            LessonNotFoundError: If the lesson doesn't exist
        """
        path = lesson_doc(path_id, module_id, lesson_id)
        data = await self.store.get(path)
        if data is None:
            raise LessonNotFoundError(path)
        return LessonDocument.from_dict(data)

    @staticmethod
    def get_learning_path_template_catalog(tier: Tier | str) -> list[LessonStub]:
        """Static base lesson templates for a tier."""
        return get_learning_path_template_catalog(tier)

    async def get_adapted_lesson(
        self,
        path_id: str,
        module_id: str,
        lesson_id: str,
        skill_level: Tier | str = Tier.INTERMEDIATE,
    ) -> dict[str, Any]:
        """
        Fetch a lesson and adapt it to a tier.

        Returns:
            The stored lesson fields plus ``adaptedContent``,
            ``userSkillLevel`` and ``adaptationApplied``

        Raises:
            LessonNotFoundError: If the lesson doesn't exist
        """
        tier = Tier.parse(skill_level)
        document = await self.get_lesson_document(path_id, module_id, lesson_id)
        view = adapt_lesson(document, tier)
        return {
            **document.to_dict(),
            "adaptedContent": view.to_dict(),
            "userSkillLevel": tier.value,
            "adaptationApplied": True,
        }

    async def get_lesson_with_sandbox(
        self,
        path_id: str,
        module_id: str,
        lesson_id: str,
        skill_level: Tier | str = Tier.INTERMEDIATE,
    ) -> dict[str, Any]:
        """Adapted lesson plus its sandbox configuration (``sandboxConfig``)."""
        tier = Tier.parse(skill_level)
        document = await self.get_lesson_document(path_id, module_id, lesson_id)
        view = adapt_lesson(document, tier)
        return {
            **document.to_dict(),
            "adaptedContent": view.to_dict(),
            "userSkillLevel": tier.value,
            "adaptationApplied": True,
            "sandboxConfig": configure_sandbox(document, view),
        }

    async def get_adapted_learning_path(
        self,
        path_id: str,
        skill_level: Tier | str = Tier.INTERMEDIATE,
    ) -> dict[str, Any]:
        """
        Fetch a catalog path with every lesson adapted to a tier.

        Modules and lessons are sorted by their ``order`` field.

        Raises:
            DocumentNotFoundError: If the catalog path doesn't exist
        """
        tier = Tier.parse(skill_level)
        path_data = await self.store.get(catalog_path_doc(path_id))
        if path_data is None:
            raise DocumentNotFoundError(catalog_path_doc(path_id))

        modules = []
        for module_id, module_data in await self.store.list(f"{catalog_path_doc(path_id)}/modules"):
            lessons = []
            for _, lesson_data in await self.store.list(f"{module_doc(path_id, module_id)}/lessons"):
                document = LessonDocument.from_dict(lesson_data)
                lessons.append(
                    {**lesson_data, "adaptedContent": adapt_lesson(document, tier).to_dict()}
                )
            lessons.sort(key=lambda lesson: lesson.get("order") or 0)
            modules.append({**module_data, "id": module_id, "lessons": lessons})

        modules.sort(key=lambda module: module.get("order") or 0)
        return {
            **path_data,
            "modules": modules,
            "adaptedForTier": tier.value,
            "totalLessons": sum(len(module["lessons"]) for module in modules),
        }

    # ==================== Assessment → path ====================

    async def complete_assessment(
        self, user_id: str, answers: Answers
    ) -> tuple[LearnerProfile, LearningPath]:
        """
        Score the assessment, generate the path and persist both.

        Retaking the assessment replaces the previous profile and path.

        Args:
            user_id: User identifier
            answers: Answer records, or the raw ``{question_id: value}`` mapping

        Returns:
            Tuple of (profile, path)
        """
        if isinstance(answers, Mapping):
            answers = answers_from_mapping(answers)
        profile = score_answers(answers)
        path = synthesize_path(profile)

        batch = self.store.batch()
        batch.set(
            user_doc(user_id),
            {"learnerProfile": profile.to_dict(), "skillLevel": profile.skill_level.value},
            merge=True,
        )
        batch.set(active_path_doc(user_id), path.to_dict())
        await batch.commit()

        logger.info(
            "User %s assessed as %s; path '%s' with %d lessons",
            user_id,
            profile.skill_level.value,
            path.title,
            len(path.lessons),
        )
        return profile, path

    async def persist_learning_path(self, user_id: str, path: LearningPath) -> None:
        """Store a learning path as the user's active path."""
        await self.store.set(active_path_doc(user_id), path.to_dict())
        logger.info("Persisted learning path '%s' for user %s", path.title, user_id)

    async def load_learning_path(self, user_id: str) -> Optional[LearningPath]:
        """
        Load the user's active path, with the cursor moved past the run of
        lessons recorded as completed.

        Keys that older writers stored but the schema no longer knows are
        dropped and logged.
        """
        data = await self.store.get(active_path_doc(user_id))
        if data is None:
            return None
        result = validate_learning_path(data, auto_repair=True)
        result.raise_for_errors()
        _log_repairs("learning path", user_id, result.repairs)
        path = LearningPath.from_dict(result.data, validate=False)
        return path.merge_completed(path.completed_lessons)

    async def load_profile(self, user_id: str) -> Optional[LearnerProfile]:
        data = await self.store.get(user_doc(user_id))
        if not data or "learnerProfile" not in data:
            return None
        result = validate_learner_profile(data["learnerProfile"], auto_repair=True)
        result.raise_for_errors()
        _log_repairs("learner profile", user_id, result.repairs)
        return LearnerProfile.from_dict(result.data, validate=False)

    async def get_current_tier(self, user_id: str) -> Tier:
        """
        The tier lessons should be adapted to for this user: the latest
        recorded tier, else the assessed tier, else intermediate.
        """
        data = await self.store.get(user_doc(user_id)) or {}
        tier = data.get("skillLevel") or data.get("learnerProfile", {}).get("skillLevel")
        return Tier.parse(tier or config.adaptation.default_tier)

    # ==================== Completion ====================

    async def record_lesson_completion(
        self,
        user_id: str,
        lesson_id: str,
        result: Any,
        path_id: Optional[str] = None,
        module_id: Optional[str] = None,
    ) -> dict[str, Any]:
        """
        Score a lesson attempt, propose a tier and record the completion.

        The completion record is written under the user; if the lesson is
        part of the user's active path its id is unioned into the path's
        completed lessons, and a tier change is stored on the user.

        Args:
            user_id: User identifier
            lesson_id: Completed lesson
            result: CompletionResult, camelCase mapping, or None
            path_id: Catalog path the lesson belongs to (optional)
            module_id: Catalog module the lesson belongs to (optional)

        Returns:
            Completion record
        """
        if isinstance(result, Mapping):
            result = CompletionResult.from_dict(result)
        performance = evaluate_performance(result)

        current = None
        if isinstance(result, CompletionResult) and result.difficulty is not None:
            try:
                current = Tier.parse(result.difficulty)
            except ValueError:
                logger.warning(
                    "Ignoring unknown difficulty %r on completion of %s by %s",
                    result.difficulty,
                    lesson_id,
                    user_id,
                )
        if current is None:
            current = await self.get_current_tier(user_id)
        recommended = resolve_next_tier(current, performance)

        record = {
            "userId": user_id,
            "pathId": path_id,
            "moduleId": module_id,
            "lessonId": lesson_id,
            "completedAt": _utc_now(),
            "performance": performance,
            "currentDifficulty": current.value,
            "recommendedDifficulty": recommended.value,
            "adaptationSuggestion": recommended is not current,
            "results": result.to_dict() if isinstance(result, CompletionResult) else None,
        }

        batch = self.store.batch()
        batch.set(completion_doc(user_id, lesson_id), record)

        path = await self.load_learning_path(user_id)
        if path is not None and path.index_of(lesson_id) != -1:
            batch.update(
                active_path_doc(user_id),
                {"completedLessons": ArrayUnion([lesson_id])},
            )

        if recommended is not current:
            batch.set(user_doc(user_id), {"skillLevel": recommended.value}, merge=True)

        await batch.commit()
        logger.info(
            "User %s completed %s: performance=%.2f, %s → %s",
            user_id,
            lesson_id,
            performance,
            current.value,
            recommended.value,
        )
        return record

    # ==================== Catalog seeding ====================

    async def seed_lessons(
        self,
        path: Mapping[str, Any],
        modules: Iterable[Mapping[str, Any]],
        lessons: Mapping[str, Iterable[Mapping[str, Any]]],
    ) -> int:
        """
        Write a catalog path, its modules and their lessons in one batch.

        Args:
            path: Catalog path document (must have ``id``)
            modules: Module documents (each must have ``id``)
            lessons: Lesson documents keyed by module id

        Returns:
            Number of documents written

        Raises:
            ValidationError: If a lesson document is not a valid lesson
        """
        path_id = path["id"]
        now = _utc_now()

        batch = self.store.batch()
        batch.set(catalog_path_doc(path_id), {**path, "createdAt": now, "updatedAt": now})

        for module in modules:
            module_id = module["id"]
            batch.set(module_doc(path_id, module_id), {**module, "pathId": path_id, "createdAt": now})

            for lesson in lessons.get(module_id, []):
                document = LessonDocument.from_dict(
                    {**lesson, "pathId": path_id, "moduleId": module_id, "createdAt": now}
                )
                batch.set(lesson_doc(path_id, module_id, lesson["id"]), document.to_dict())

        written = await batch.commit()
        logger.info("Seeded %d catalog document(s) for path %s", written, path_id)
        return written
