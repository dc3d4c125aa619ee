"""
Aggregator & Classifier

Sums response scores, floors the total at zero and maps it to a risk level
with the illness type's threshold ladder.

NOTE: glaucoma/cancer ladders compare with >= while the generic quartile
ladder uses strict >. Kept as-is; displays depend on the exact labels at
boundary scores.
"""

from typing import Iterable, Tuple

from .models import ScoredResponse
from .strategies import Comparison, IllnessStrategy

SCORE_FLOOR = 0.0


def aggregate_total(responses: Iterable[ScoredResponse]) -> Tuple[float, float]:
    """
    Returns:
        (raw_total, total_score). No upper bound is applied: misconfigured
        weights can push total_score past the 0-10 display scale.
    """
    raw_total = sum(r.score for r in responses)
    return raw_total, max(SCORE_FLOOR, raw_total)


def _passes(score: float, threshold: float, comparison: Comparison) -> bool:
    if comparison is Comparison.AT_LEAST:
        return score >= threshold
    return score > threshold


def find_band(strategy: IllnessStrategy, total_score: float):
    """Return the matching RiskBand, or None for the floor level."""
    score = total_score
    if strategy.classification_range is not None:
        low, high = strategy.classification_range
        score = max(low, min(score, high))

    for band in strategy.bands:
        if _passes(score, band.threshold, strategy.comparison):
            return band
    return None


def classify_risk(strategy: IllnessStrategy, total_score: float) -> str:
    band = find_band(strategy, total_score)
    return band.label if band else strategy.floor_label
