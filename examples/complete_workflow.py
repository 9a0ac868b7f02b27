"""
Complete workflow example: Assessment → Path → Adapted Lessons → Tier Update

Demonstrates end-to-end integration of all system components:
1. Score a learner's assessment answers into a profile
2. Generate and persist their learning path
3. Seed a small lesson catalog
4. Serve a lesson adapted to the learner's tier
5. Record a completion and apply the recommended tier
6. Serve the next lesson at the new tier
"""

import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.orchestrator import AdaptiveLessonService
from src.utils.document_store import InMemoryDocumentStore
from src.utils.log import configure_logging

ANSWERS = {
    "ai_experience": "minimal",
    "learning_pace": "guided",
    "time_availability": "short",
    "primary_goals": ["work_productivity", "understand_basics"],
    "technical_comfort": "comfortable",
    "professional_context": "business",
    "learning_challenges": ["jargon", "time"],
    "content_preferences": ["tutorials", "interactive"],
    "motivation_level": "important",
    "learning_confidence": "guided_exploration",
}

CATALOG_PATH = {"id": "ai-foundations", "title": "AI Foundations"}
CATALOG_MODULES = [{"id": "m01-basics", "title": "AI Basics", "order": 1}]
CATALOG_LESSONS = {
    "m01-basics": [
        {
            "id": "ai-welcome",
            "title": "Welcome to AI Learning",
            "order": 1,
            "coreConcept": "AI systems learn patterns from examples",
            "content": {
                "beginner": {"introduction": "AI is software that learns from examples."},
                "intermediate": {"introduction": "Models generalise from training data."},
                "advanced": {"introduction": "Inductive bias shapes what a model can learn."},
            },
            "sandbox": {
                "type": "vocabulary_practice",
                "required": False,
                "beginner": {"instructions": "Match each term to its meaning", "items": ["model", "prompt"]},
                "intermediate": {"instructions": "Define each term in your own words", "items": ["token", "context"]},
            },
            "assessment": {
                "beginner": {"questions": [{"id": "q1", "text": "What does AI learn from?"}], "passingScore": 60},
                "intermediate": {"questions": [{"id": "q1", "text": "What is training data?"}], "passingScore": 70},
            },
            "xpRewards": {"beginner": 30, "intermediate": 50, "advanced": 80},
            "estimatedTime": {"beginner": 15, "intermediate": 12},
        },
        {
            "id": "what-is-ai",
            "title": "Understanding AI Basics",
            "order": 2,
            "coreConcept": "Narrow AI solves specific tasks",
        },
    ]
}


async def main():
    configure_logging()
    service = AdaptiveLessonService(InMemoryDocumentStore())

    # ==================== Step 1-2: Assessment and Path ====================
    print("=" * 60)
    print("STEP 1: Scoring Assessment and Generating Path")
    print("=" * 60)

    profile, path = await service.complete_assessment("alice", ANSWERS)

    print(f"✓ Skill level: {profile.skill_level}  Pace: {profile.pace}  Sessions: {profile.session_length}")
    print(f"  Assessment confidence: {profile.assessment_confidence()}%")
    print(f"  Estimated completion: {profile.estimated_completion_weeks()} week(s)")
    for recommendation in profile.recommendations():
        print(f"  • {recommendation}")
    print()
    print(f"✓ {path.title} ({path.estimated_duration} min)")
    for i, lesson in enumerate(path.lessons, 1):
        print(f"  {i}. {lesson.title} [{lesson.difficulty}] {lesson.duration_minutes} min")
    print()

    # ==================== Step 3: Catalog ====================
    print("=" * 60)
    print("STEP 2: Seeding Lesson Catalog")
    print("=" * 60)

    written = await service.seed_lessons(CATALOG_PATH, CATALOG_MODULES, CATALOG_LESSONS)
    print(f"✓ Wrote {written} catalog documents in one batch")
    print()

    # ==================== Step 4: Adapted Lesson ====================
    print("=" * 60)
    print("STEP 3: Serving Adapted Lesson")
    print("=" * 60)

    tier = await service.get_current_tier("alice")
    lesson = await service.get_lesson_with_sandbox("ai-foundations", "m01-basics", "ai-welcome", tier)
    adapted = lesson["adaptedContent"]

    print(f"✓ {lesson['title']} at {lesson['userSkillLevel']}")
    print(f"  Intro: {adapted['content']['introduction']}")
    print(f"  XP: {adapted['xpReward']}  Time: {adapted['estimatedTime']} min")
    print(f"  Sandbox: {lesson['sandboxConfig']['type']} → {lesson['sandboxConfig']['terms']}")
    print()

    # ==================== Step 5: Completion ====================
    print("=" * 60)
    print("STEP 4: Recording Completion")
    print("=" * 60)

    record = await service.record_lesson_completion(
        "alice",
        "ai-welcome",
        {"assessmentScore": 1.0, "sandboxCompleted": True, "timeSpent": 12, "estimatedTime": 15},
        path_id="ai-foundations",
        module_id="m01-basics",
    )
    print(f"✓ Performance: {record['performance']:.2f}")
    print(f"  {record['currentDifficulty']} → {record['recommendedDifficulty']}")

    progress = (await service.load_learning_path("alice")).progress()
    print(f"  Progress: {progress.progress_percentage}% (next: {progress.next_lesson.title})")
    print()

    # ==================== Step 6: Next Lesson ====================
    print("=" * 60)
    print("STEP 5: Same Lesson at the New Tier")
    print("=" * 60)

    tier = await service.get_current_tier("alice")
    lesson = await service.get_adapted_lesson("ai-foundations", "m01-basics", "ai-welcome", tier)
    print(f"✓ {lesson['title']} at {lesson['userSkillLevel']}")
    print(f"  Intro: {lesson['adaptedContent']['content']['introduction']}")
    print(f"  XP: {lesson['adaptedContent']['xpReward']}")


if __name__ == "__main__":
    asyncio.run(main())
