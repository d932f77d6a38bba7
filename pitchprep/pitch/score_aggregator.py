"""
Score Aggregator

Turns the pitch oracle's raw sub-scores into a validated ScoreBreakdown.

The oracle's arithmetic is never trusted:
- each of the six category scores is clamped to [0, 20]
- the total is the sum of the clamped scores; any reported total is ignored
- reasons are passed through unmodified

Pure and deterministic: same input, same output, no side effects.
"""

import logging
import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Mapping, Optional, Tuple

from pitchprep.common.types import (
    MAX_MATCH_SCORE,
    MAX_SUB_SCORE,
    SCORE_CATEGORIES,
    SCORE_CATEGORY_LABELS,
    ScoreBreakdown,
    SubScore,
)

logger = logging.getLogger(__name__)

MISSING_REASON = "No assessment provided."


def _coerce_score(value: Any) -> Optional[float]:
    """Best-effort numeric reading of an oracle score; None if unusable."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip().split("/")[0])
        except ValueError:
            return None
    else:
        return None
    if math.isnan(number):
        return None
    return number


def clamp_score(value: Any) -> int:
    """
    Clamp a raw score into [0, 20] as an integer.

    Floats round half-up; unusable values (None, NaN, booleans, text) score 0.
    """
    number = _coerce_score(value)
    if number is None:
        return 0
    if math.isinf(number):
        return MAX_SUB_SCORE if number > 0 else 0
    rounded = int(Decimal(str(number)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    return max(0, min(MAX_SUB_SCORE, rounded))


def _split_entry(raw: Any) -> Tuple[Any, str]:
    """Read (score, reason) from either {score, reason} or a bare number."""
    if isinstance(raw, Mapping):
        reason = raw.get("reason")
        return raw.get("score"), reason if isinstance(reason, str) else ""
    return raw, ""


class ScoreAggregator:
    """Validates sub-scores and computes the match score and reasoning."""

    def compute(self, raw_sub_scores: Optional[Mapping[str, Any]]) -> ScoreBreakdown:
        """
        Build a ScoreBreakdown from the oracle's raw scoreBreakdown mapping.

        Args:
            raw_sub_scores: {"location": {"score": 18, "reason": "..."}, ...}.
                Missing categories score 0; unknown categories are ignored.

        Returns:
            ScoreBreakdown whose match_score is the sum of six values in [0, 20]
        """
        raw_sub_scores = raw_sub_scores or {}
        sub_scores: Dict[str, SubScore] = {}

        for category in SCORE_CATEGORIES:
            if category not in raw_sub_scores:
                logger.warning(f"Sub-score '{category}' missing from oracle output")
                sub_scores[category] = SubScore(score=0, reason=MISSING_REASON)
                continue

            raw_score, reason = _split_entry(raw_sub_scores[category])
            score = clamp_score(raw_score)
            if _coerce_score(raw_score) != score:
                logger.debug(f"Sub-score '{category}' adjusted from {raw_score!r} to {score}")
            sub_scores[category] = SubScore(score=score, reason=reason)

        breakdown = ScoreBreakdown(
            location=sub_scores["location"],
            work_authorization=sub_scores["workAuthorization"],
            major=sub_scores["major"],
            job_type=sub_scores["jobType"],
            skills=sub_scores["skills"],
            resume=sub_scores["resume"],
            reasoning=self.describe(sub_scores),
        )
        return breakdown

    @staticmethod
    def describe(sub_scores: Mapping[str, SubScore]) -> str:
        """
        Human-readable summary of a breakdown.

        Example:
            "Match score 96/120. Location 20/20: Same city. Major 18/20: ..."
        """
        total = sum(sub.score for sub in sub_scores.values())
        parts = [f"Match score {total}/{MAX_MATCH_SCORE}."]
        for category in SCORE_CATEGORIES:
            sub = sub_scores[category]
            label = SCORE_CATEGORY_LABELS[category]
            reason = sub.reason.strip()
            if reason:
                parts.append(f"{label} {sub.score}/{MAX_SUB_SCORE}: {reason}")
            else:
                parts.append(f"{label} {sub.score}/{MAX_SUB_SCORE}.")
        return " ".join(parts)
