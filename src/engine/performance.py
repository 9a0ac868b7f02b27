"""
Performance Evaluator - turns one lesson attempt into a 0-1 score.

score = 0.6 * assessment + 0.3 * sandbox completed + 0.1 * time efficiency

Missing timing data counts as neutral (0.5), and a missing or unreadable
result is neutral overall so absent telemetry never demotes a learner.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional

import numpy as np

from ..config import config
from ..models.completion import CompletionResult
from ..utils.log import get_logger

logger = get_logger(__name__)

PRECISION = 6


def time_efficiency(time_spent: Optional[float], estimated_time: Optional[float]) -> float:
    """
    Ratio of expected to actual time, clipped to [0, 1].

    Finishing at or under the estimate scores 1; taking twice as long
    scores 0.5. Without both values the score is neutral.
    """
    if not time_spent or not estimated_time or time_spent <= 0:
        return config.adaptation.neutral_time_score
    return float(np.clip(estimated_time / time_spent, 0.0, 1.0))


def evaluate_performance(result: Any) -> float:
    """
    Score a lesson attempt.

    Args:
        result: CompletionResult, a camelCase completion mapping, or None

    Returns:
        Performance score in [0, 1]
    """
    adaptation = config.adaptation

    if result is None:
        return adaptation.neutral_performance

    if isinstance(result, Mapping):
        result = CompletionResult.from_dict(result)
    elif not isinstance(result, CompletionResult):
        logger.warning(
            "Unreadable completion result of type %s; using neutral performance",
            type(result).__name__,
        )
        return adaptation.neutral_performance

    assessment = float(np.clip(result.assessment_score or 0.0, 0.0, 1.0))
    sandbox = 1.0 if result.sandbox_completed else 0.0
    timing = time_efficiency(result.time_spent, result.estimated_time)

    score = (
        assessment * adaptation.assessment_weight
        + sandbox * adaptation.sandbox_weight
        + timing * adaptation.time_weight
    )
    # 0.6 + 0.3 must compare equal to the 0.9 promote threshold
    return round(score, PRECISION)
