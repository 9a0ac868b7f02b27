"""
Content Adapter - projects a tiered lesson document onto one tier.

Each variant set resolves through an ordered fallback:
requested tier → intermediate → the raw field itself. XP rewards and
estimated time resolve independently of the content, since a lesson can
have tier-specific rewards without tier-specific content.
"""

from __future__ import annotations

from collections.abc import Mapping
from copy import deepcopy
from typing import Any, Optional

from ..config import config
from ..models.learner_profile import Tier
from ..models.lesson import VARIANT_FIELDS, AdaptedLessonView, LessonDocument
from ..utils.log import get_logger

logger = get_logger(__name__)

FALLBACK_TIER = Tier.INTERMEDIATE

_MISSING = object()


def resolve_tier_variant(value: Any, tier: Tier, default: Any = _MISSING) -> Any:
    """
    Resolve a tier-keyed value.

    Tries ``value[tier]`` then ``value['intermediate']``. When neither is
    set, returns ``default`` if given, otherwise ``value`` itself.
    """
    if isinstance(value, Mapping):
        for key in (tier.value, FALLBACK_TIER.value):
            if value.get(key) is not None:
                return value[key]
    if default is not _MISSING:
        return default
    return value


def _synthetic_variants(document: LessonDocument) -> tuple[dict, dict, dict]:
    """Minimal content for lessons authored without tier variants."""
    core_concept = document.get("coreConcept")
    content = {
        "introduction": core_concept or "Introduction content",
        "mainContent": core_concept or "Main content",
        "examples": [],
        "keyPoints": [],
    }
    sandbox = {
        "instructions": "Interactive exercise instructions",
        "exercises": [],
        "hints": [],
    }
    assessment = {
        "questions": [],
        "passingScore": config.adaptation.default_passing_score,
    }
    return content, sandbox, assessment


def adapt_lesson(document: LessonDocument | Mapping[str, Any], tier: Tier | str) -> AdaptedLessonView:
    """
    Adapt a lesson document to a tier.

    Args:
        document: Lesson document (or its raw mapping)
        tier: Learner's current tier

    Returns:
        AdaptedLessonView; never None for a structurally valid document
    """
    if not isinstance(document, LessonDocument):
        document = LessonDocument.from_dict(document)
    tier = Tier.parse(tier)
    adaptation = config.adaptation

    if document.has_tier_variants:
        content, sandbox, assessment = (
            deepcopy(resolve_tier_variant(document.get(name), tier)) for name in VARIANT_FIELDS
        )
    else:
        logger.debug("Lesson %r has no tier variants; using synthetic view", document.id)
        content, sandbox, assessment = _synthetic_variants(document)

    return AdaptedLessonView(
        content=content,
        sandbox=sandbox,
        assessment=assessment,
        xp_reward=resolve_tier_variant(
            document.get("xpRewards"), tier, default=adaptation.default_xp_reward
        ),
        estimated_time=resolve_tier_variant(
            document.get("estimatedTime"), tier, default=adaptation.default_estimated_time
        ),
        difficulty=tier,
    )


# ==================== Sandbox configuration ====================


def _sandbox_extras(sandbox_type: Optional[str], variant: Mapping[str, Any]) -> dict[str, Any]:
    """Type-specific sandbox settings."""
    if sandbox_type == "ai_tool_matcher":
        return {
            "scenarios": variant.get("scenarios") or [],
            "options": variant.get("options") or [],
            "allowMultipleAttempts": True,
        }
    if sandbox_type == "prompt_builder":
        return {
            "framework": variant.get("framework") or {},
            "templates": variant.get("templates") or [],
            "realTimeValidation": True,
        }
    if sandbox_type == "creative_prompt_lab":
        return {
            "tools": ["text", "image", "voice"],
            "previewMode": True,
            "shareResults": True,
        }
    if sandbox_type == "vocabulary_practice":
        return {
            "terms": variant.get("items") or [],
            "gameified": True,
            "progressTracking": True,
        }
    return {}


def configure_sandbox(
    document: LessonDocument | Mapping[str, Any],
    view: AdaptedLessonView,
) -> Optional[dict[str, Any]]:
    """
    Build the sandbox configuration for an adapted lesson.

    The sandbox type and ``required`` flag come from the document's
    top-level sandbox; instructions and exercises come from the adapted
    tier variant.

    Returns:
        Sandbox config dict, or None if the lesson has no sandbox
    """
    if not isinstance(document, LessonDocument):
        document = LessonDocument.from_dict(document)

    sandbox = document.get("sandbox")
    variant = view.sandbox
    if not isinstance(sandbox, Mapping) or not isinstance(variant, Mapping):
        return None

    sandbox_type = sandbox.get("type")
    sandbox_config = {
        "type": sandbox_type,
        "required": sandbox.get("required"),
        "instructions": variant.get("instructions"),
        "exercises": variant.get("exercises") or [],
        "hints": variant.get("hints") or [],
        "evaluation": variant.get("evaluation") or "completion",
    }
    sandbox_config.update(_sandbox_extras(sandbox_type, variant))
    return sandbox_config
