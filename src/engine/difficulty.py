"""
Difficulty Resolver - proposes the next tier from one performance score.

Every call is independent: a single excellent attempt promotes, a single
poor attempt demotes, anything in between holds the tier.
"""

from __future__ import annotations

from ..config import config
from ..models.learner_profile import TIER_ORDER, Tier

PROMOTE_THRESHOLD = config.adaptation.promote_threshold
DEMOTE_THRESHOLD = config.adaptation.demote_threshold


def promote(tier: Tier) -> Tier:
    """One tier up, capped at advanced."""
    return TIER_ORDER[min(tier.rank + 1, len(TIER_ORDER) - 1)]


def demote(tier: Tier) -> Tier:
    """One tier down, floored at beginner."""
    return TIER_ORDER[max(tier.rank - 1, 0)]


def resolve_next_tier(current: Tier | str, performance: float) -> Tier:
    """
    Decide the recommended tier after a lesson attempt.

    Args:
        current: Tier the lesson was taken at
        performance: Performance score in [0, 1]

    Returns:
        Promoted tier if performance >= 0.9, demoted tier if < 0.5,
        otherwise the current tier

    Raises:
        ValueError: If current is not a known tier
    """
    tier = Tier.parse(current)

    if performance >= PROMOTE_THRESHOLD:
        return promote(tier)
    if performance < DEMOTE_THRESHOLD:
        return demote(tier)
    return tier
