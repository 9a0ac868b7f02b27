"""
Assessment questionnaire: the static question catalog and answer records.

Each single-choice option may carry scoring fields that the profile scorer
reads (skill points, pace, session time, technical comfort, motivation,
learning confidence). Multi-choice questions are not scored; their selected
values become profile tags.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union


class QuestionType(str, Enum):
    SINGLE_CHOICE = "single-choice"
    MULTI_CHOICE = "multi-choice"
    INFO_SLIDE = "info-slide"


@dataclass(frozen=True)
class QuestionOption:
    """One selectable answer and the scores it contributes."""

    value: str
    text: str
    skill_points: Optional[dict[str, int]] = None
    pace_score: Optional[int] = None
    time_score: Optional[int] = None
    session_minutes: Optional[int] = None
    tech_level: Optional[int] = None
    motivation: Optional[int] = None
    confidence: Optional[int] = None


@dataclass(frozen=True)
class Question:
    id: str
    type: QuestionType
    prompt: str
    options: tuple[QuestionOption, ...] = field(default_factory=tuple)


AnswerValue = Union[str, tuple[str, ...]]


@dataclass(frozen=True)
class AnswerRecord:
    """
    A submitted answer. Single-choice answers hold one option value,
    multi-choice answers hold the selected values as an ordered set
    (selection order kept, duplicates dropped).
    """

    question_id: str
    type: QuestionType
    value: Optional[AnswerValue] = None

    def __post_init__(self):
        object.__setattr__(self, "type", QuestionType(self.type))
        if self.type is QuestionType.MULTI_CHOICE:
            selected = [self.value] if isinstance(self.value, str) else list(self.value or ())
            object.__setattr__(self, "value", tuple(dict.fromkeys(selected)))

    @property
    def values(self) -> tuple[str, ...]:
        """Selected values of a multi-choice answer."""
        if self.type is QuestionType.MULTI_CHOICE:
            return self.value
        return ()


def _opt(value: str, text: str, **scores) -> QuestionOption:
    return QuestionOption(value=value, text=text, **scores)


def _skill(beginner: int, intermediate: int, advanced: int) -> dict[str, int]:
    return {"beginner": beginner, "intermediate": intermediate, "advanced": advanced}


QUESTIONS: tuple[Question, ...] = (
    Question(
        id="welcome",
        type=QuestionType.INFO_SLIDE,
        prompt="Let's personalize your AI learning journey",
    ),
    Question(
        id="ai_experience",
        type=QuestionType.SINGLE_CHOICE,
        prompt="What's your current experience with AI tools?",
        options=(
            _opt("none", "Complete beginner - never used AI tools", skill_points=_skill(4, 0, 0)),
            _opt("minimal", "Tried ChatGPT or similar once or twice", skill_points=_skill(3, 1, 0)),
            _opt("occasional", "Use AI tools occasionally (few times a month)", skill_points=_skill(2, 2, 0)),
            _opt("regular", "Use AI tools regularly (weekly)", skill_points=_skill(1, 3, 1)),
            _opt("daily", "AI tools are part of my daily routine", skill_points=_skill(0, 2, 3)),
            _opt("expert", "I'm advanced with AI tools and techniques", skill_points=_skill(0, 0, 4)),
        ),
    ),
    Question(
        id="learning_pace",
        type=QuestionType.SINGLE_CHOICE,
        prompt="How do you prefer to learn new concepts?",
        options=(
            _opt("slow", "Very slowly with lots of detailed explanation", pace_score=1),
            _opt("guided", "Step-by-step with clear examples", pace_score=2),
            _opt("moderate", "At a steady, moderate pace", pace_score=3),
            _opt("fast", "Quickly with concise explanations", pace_score=4),
            _opt("accelerated", "Jump to advanced concepts rapidly", pace_score=5),
        ),
    ),
    Question(
        id="time_availability",
        type=QuestionType.SINGLE_CHOICE,
        prompt="How much time can you typically dedicate per learning session?",
        options=(
            _opt("short", "15-20 minutes (quick sessions)", time_score=1, session_minutes=18),
            _opt("medium", "25-35 minutes (focused sessions)", time_score=2, session_minutes=30),
            _opt("long", "40-60 minutes (deep learning)", time_score=3, session_minutes=50),
            _opt("extended", "1+ hours when I have time", time_score=4, session_minutes=75),
            _opt("flexible", "Varies - prefer flexible timing", time_score=2, session_minutes=35),
        ),
    ),
    Question(
        id="primary_goals",
        type=QuestionType.MULTI_CHOICE,
        prompt="What do you want to achieve with AI? (Select all that apply)",
        options=(
            _opt("understand_basics", "Understand AI basics and how it works"),
            _opt("prompt_engineering", "Master prompt engineering techniques"),
            _opt("work_productivity", "Use AI for work productivity and efficiency"),
            _opt("content_creation", "Create content with AI (writing, images, videos)"),
            _opt("stay_current", "Stay current with AI trends and developments"),
            _opt("ethics_safety", "Understand AI ethics and responsible use"),
            _opt("personal_use", "Use AI for personal tasks and organization"),
            _opt("teach_others", "Teach others about AI tools and concepts"),
        ),
    ),
    Question(
        id="technical_comfort",
        type=QuestionType.SINGLE_CHOICE,
        prompt="How comfortable are you with technology in general?",
        options=(
            _opt("basic", "Prefer simple, non-technical explanations", tech_level=0),
            _opt("comfortable", "Comfortable with basic tech concepts", tech_level=1),
            _opt("proficient", "Good with technology, enjoy learning new tools", tech_level=2),
            _opt("advanced", "Very tech-savvy, like understanding how things work", tech_level=3),
            _opt("expert", "Expert level - interested in technical details", tech_level=4),
        ),
    ),
    Question(
        id="professional_context",
        type=QuestionType.SINGLE_CHOICE,
        prompt="Which best describes your professional situation?",
        options=(
            _opt("student", "Student or recent graduate"),
            _opt("creative", "Marketing, creative, or content professional"),
            _opt("business", "Business, management, or consulting"),
            _opt("educator", "Education, training, or teaching"),
            _opt("tech", "Technology or software industry"),
            _opt("healthcare", "Healthcare or medical field"),
            _opt("finance", "Finance, legal, or professional services"),
            _opt("other", "Retired, career transition, or other"),
        ),
    ),
    Question(
        id="learning_challenges",
        type=QuestionType.MULTI_CHOICE,
        prompt="What might make learning AI challenging for you? (Select all that apply)",
        options=(
            _opt("jargon", "Technical jargon and complex terminology"),
            _opt("time", "Finding consistent time to practice and learn"),
            _opt("pace", "Keeping up with rapidly changing AI landscape"),
            _opt("practical", "Understanding real-world applications"),
            _opt("overwhelm", "Feeling overwhelmed by too much information"),
            _opt("practice", "Lack of hands-on practice opportunities"),
            _opt("none", "None - I'm confident about learning AI"),
        ),
    ),
    Question(
        id="content_preferences",
        type=QuestionType.MULTI_CHOICE,
        prompt="What type of learning content works best for you? (Select all that apply)",
        options=(
            _opt("tutorials", "Step-by-step tutorials with clear examples"),
            _opt("interactive", "Interactive exercises and hands-on practice"),
            _opt("case_studies", "Real-world case studies and use cases"),
            _opt("quick_tips", "Quick tips and practical shortcuts"),
            _opt("detailed", "In-depth explanations and background theory"),
            _opt("visual", "Visual diagrams and infographics"),
            _opt("reference", "Lists, summaries, and reference materials"),
        ),
    ),
    Question(
        id="immediate_interests",
        type=QuestionType.SINGLE_CHOICE,
        prompt="Which AI topic interests you most right now?",
        options=(
            _opt("chat_ai", "ChatGPT and conversational AI assistants"),
            _opt("image_ai", "AI image generation (DALL-E, Midjourney, etc.)"),
            _opt("writing_ai", "AI for writing, editing, and content creation"),
            _opt("business_ai", "AI for business productivity and automation"),
            _opt("ethics_ai", "AI ethics, safety, and societal impact"),
            _opt("technical_ai", "Understanding how AI actually works (technical)"),
            _opt("future_ai", "Future of AI and emerging trends"),
        ),
    ),
    Question(
        id="success_definition",
        type=QuestionType.SINGLE_CHOICE,
        prompt="How will you know you've succeeded in learning AI?",
        options=(
            _opt("daily_use", "I can confidently use AI tools for daily tasks"),
            _opt("understand_explain", "I understand AI concepts and can explain them"),
            _opt("work_application", "I can effectively use AI for my work or studies"),
            _opt("stay_informed", "I stay informed about AI developments"),
            _opt("teach_others", "I can help others learn about AI"),
            _opt("confidence", "I'm no longer intimidated or confused by AI"),
        ),
    ),
    Question(
        id="motivation_level",
        type=QuestionType.SINGLE_CHOICE,
        prompt="How urgent is learning AI for you right now?",
        options=(
            _opt("urgent", "Very urgent - critical for my career/studies", motivation=5),
            _opt("important", "Important - I see clear benefits", motivation=4),
            _opt("moderate", "Moderately interested - seems useful", motivation=3),
            _opt("casual", "Casually curious - just exploring", motivation=2),
            _opt("low", "Low priority - learning when convenient", motivation=1),
        ),
    ),
    Question(
        id="tool_interests",
        type=QuestionType.MULTI_CHOICE,
        prompt="Which AI tools are you most interested in mastering? (Select all that apply)",
        options=(
            _opt("chat_tools", "ChatGPT, Claude, and text-based AI assistants"),
            _opt("image_tools", "Midjourney, DALL-E, and AI image generators"),
            _opt("writing_tools", "AI writing assistants and content tools"),
            _opt("productivity_tools", "AI productivity tools for work"),
            _opt("design_tools", "AI presentation and design tools"),
            _opt("research_tools", "AI for research and data analysis"),
            _opt("voice_tools", "Voice AI and transcription tools"),
            _opt("specialized_tools", "Specialized AI tools for my industry"),
        ),
    ),
    Question(
        id="learning_confidence",
        type=QuestionType.SINGLE_CHOICE,
        prompt="How do you typically approach learning new technologies?",
        options=(
            _opt("experimental", "Jump right in and learn by experimenting", confidence=5),
            _opt("guided_exploration", "Like guided learning with some exploration", confidence=4),
            _opt("structured", "Prefer clear instructions before trying", confidence=3),
            _opt("supported", "Need detailed explanations and support", confidence=2),
            _opt("observational", "Learn best by watching others first", confidence=1),
        ),
    ),
    Question(
        id="learning_priorities",
        type=QuestionType.MULTI_CHOICE,
        prompt="What's most important for your AI learning experience? (Select all that apply)",
        options=(
            _opt("practical", "Practical examples I can use immediately"),
            _opt("simple", "Clear, simple explanations without jargon"),
            _opt("comprehensive", "Comprehensive understanding of concepts"),
            _opt("quick_wins", "Quick wins and immediate progress"),
            _opt("relevant", "Relevant to my work or personal interests"),
            _opt("supportive", "Encouragement and confidence building"),
            _opt("current", "Staying current with latest developments"),
        ),
    ),
)


def find_question(question_id: str, catalog: tuple[Question, ...] = QUESTIONS) -> Optional[Question]:
    return next((q for q in catalog if q.id == question_id), None)


def find_option(question: Question, value: str) -> Optional[QuestionOption]:
    return next((opt for opt in question.options if opt.value == value), None)
