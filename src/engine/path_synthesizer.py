"""
Path Synthesizer - builds a learner's lesson sequence from their profile.

The path is produced by a fixed pipeline of pure steps over a tuple of
lesson stubs:

1. base_lessons      - the four template lessons for the profile's tier
2. add_goal_lessons  - one bonus lesson per recognised goal
3. adjust_for_pace   - fast: keep at most 6 lessons; slow: insert a review
4. fit_session       - short sessions: clamp durations to 25 minutes

Step order matters. A fast learner with many goals can lose goal bonuses
to the truncation in step 3; this follows from the fixed order.
The same profile always yields the same path.
"""

from __future__ import annotations

from typing import Callable, Sequence

from ..config import config
from ..models.learner_profile import LearnerProfile, Pace, SessionLength, Tier
from ..models.learning_path import LearningPath, LessonStub
from ..utils.log import get_logger

logger = get_logger(__name__)

Lessons = tuple[LessonStub, ...]
PipelineStep = Callable[[Lessons, LearnerProfile], Lessons]


def _template(tier: Tier, *lessons: tuple[str, str, int]) -> Lessons:
    return tuple(
        LessonStub(id=lesson_id, title=title, duration_minutes=minutes, difficulty=tier)
        for lesson_id, title, minutes in lessons
    )


BASE_PATHS: dict[Tier, Lessons] = {
    Tier.BEGINNER: _template(
        Tier.BEGINNER,
        ("ai-welcome", "Welcome to AI Learning", 15),
        ("what-is-ai", "Understanding AI Basics", 25),
        ("ai-in-daily-life", "AI in Your Daily Life", 20),
        ("first-ai-conversation", "Your First AI Conversation", 30),
    ),
    Tier.INTERMEDIATE: _template(
        Tier.INTERMEDIATE,
        ("ai-fundamentals", "AI Fundamentals", 30),
        ("prompt-engineering", "Prompt Engineering Mastery", 40),
        ("ai-tools-landscape", "AI Tools Landscape", 35),
        ("workflow-integration", "AI Workflow Integration", 45),
    ),
    Tier.ADVANCED: _template(
        Tier.ADVANCED,
        ("advanced-ai-concepts", "Advanced AI Concepts", 40),
        ("ai-optimization", "AI Optimization Techniques", 50),
        ("ai-strategy", "AI Strategy and Planning", 45),
        ("ai-future-trends", "AI Future and Trends", 40),
    ),
}

# Goal tag → (lesson id, title, minutes). Order is the order bonuses are appended.
GOAL_LESSONS: tuple[tuple[str, tuple[str, str, int]], ...] = (
    ("content_creation", ("ai-content-mastery", "AI Content Creation Mastery", 40)),
    ("work_productivity", ("ai-productivity-tools", "AI Productivity Tools", 35)),
    ("prompt_engineering", ("advanced-prompting", "Advanced Prompting Techniques", 45)),
)

REVIEW_LESSON = ("ai-concepts-review", "AI Concepts Review", 20)


def get_learning_path_template_catalog(tier: Tier | str) -> list[LessonStub]:
    """Base lesson templates for a tier (static catalog)."""
    return list(BASE_PATHS[Tier.parse(tier)])


# ==================== Pipeline steps ====================


def base_lessons(_: Lessons, profile: LearnerProfile) -> Lessons:
    return BASE_PATHS[profile.skill_level]


def add_goal_lessons(lessons: Lessons, profile: LearnerProfile) -> Lessons:
    """Append one bonus lesson per recognised goal, at the learner's tier."""
    bonuses = tuple(
        LessonStub(
            id=lesson_id,
            title=title,
            duration_minutes=minutes,
            difficulty=profile.skill_level,
        )
        for goal, (lesson_id, title, minutes) in GOAL_LESSONS
        if goal in profile.goals
    )
    return lessons + bonuses


def adjust_for_pace(lessons: Lessons, profile: LearnerProfile) -> Lessons:
    """Fast learners get a shorter path; slow learners get a review lesson."""
    synthesis = config.synthesis

    if profile.pace is Pace.FAST and len(lessons) > synthesis.fast_pace_max_lessons:
        dropped = [lesson.id for lesson in lessons[synthesis.fast_pace_max_lessons:]]
        logger.debug("Fast pace: dropping %s", dropped)
        return lessons[: synthesis.fast_pace_max_lessons]

    if profile.pace is Pace.SLOW:
        lesson_id, title, minutes = REVIEW_LESSON
        review = LessonStub(
            id=lesson_id,
            title=title,
            duration_minutes=minutes,
            difficulty=profile.skill_level,
        )
        index = synthesis.review_insert_index
        return lessons[:index] + (review,) + lessons[index:]

    return lessons


def fit_session(lessons: Lessons, profile: LearnerProfile) -> Lessons:
    """Short sessions cap every lesson's duration. Nothing is dropped."""
    if profile.session_length is not SessionLength.SHORT:
        return lessons
    cap = config.synthesis.short_session_max_minutes
    return tuple(lesson.with_duration(min(lesson.duration_minutes, cap)) for lesson in lessons)


PIPELINE: tuple[PipelineStep, ...] = (
    base_lessons,
    add_goal_lessons,
    adjust_for_pace,
    fit_session,
)


def run_pipeline(
    profile: LearnerProfile,
    steps: Sequence[PipelineStep] = PIPELINE,
) -> Lessons:
    """Run the synthesis steps in order and return the lesson list."""
    lessons: Lessons = ()
    for step in steps:
        lessons = step(lessons, profile)
    return lessons


def path_title(tier: Tier) -> str:
    return f"{tier.value.capitalize()} AI Learning Path"


def synthesize_path(profile: LearnerProfile) -> LearningPath:
    """
    Generate the learning path for a profile.

    Args:
        profile: Scored learner profile

    Returns:
        LearningPath with the cursor at the first lesson
    """
    lessons = run_pipeline(profile)
    path = LearningPath(
        title=path_title(profile.skill_level),
        skill_level=profile.skill_level,
        lessons=lessons,
        next_lesson_index=0,
        completed_lessons=(),
        personalized_for=profile.to_dict(),
    )
    logger.debug(
        "Synthesized %s: %s (%d min)",
        path.title,
        [lesson.id for lesson in path.lessons],
        path.estimated_duration,
    )
    return path
