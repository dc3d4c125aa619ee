"""
Recommendation Generator

Advisory text only: the bracket text for the risk level, profile-driven
addenda, and the general advice line that is always present.
"""

from typing import List

from app.profile.models import ProfileFacts
from .autopopulate import fact_is_true
from .strategies import GENERAL_ADVICE, IllnessStrategy


def bracket_recommendation(strategy: IllnessStrategy, risk_level: str) -> str:
    for band in strategy.bands:
        if band.label == risk_level:
            return band.recommendation
    if risk_level != strategy.floor_label:
        raise ValueError(
            f"Unknown risk level '{risk_level}' for {strategy.illness_type.value}"
        )
    return strategy.floor_recommendation


def generate_recommendations(
    strategy: IllnessStrategy,
    risk_level: str,
    facts: ProfileFacts,
) -> List[str]:
    recommendations = [bracket_recommendation(strategy, risk_level)]

    for fact, addendum in strategy.fact_addenda.items():
        if fact_is_true(fact, facts):
            recommendations.append(addendum)

    recommendations.append(GENERAL_ADVICE)
    return recommendations
