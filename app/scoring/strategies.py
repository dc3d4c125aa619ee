"""
Illness-Type Strategy Table

One record per illness type holding everything that differs between types:
- auto-population rules (question id -> profile fact)
- answer overrides (question-specific scoring)
- the risk threshold ladder
- recommendation texts per risk level and profile addenda

Illness types outside the table resolve to GENERIC_STRATEGY.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple

from app.questions.resolver import normalize_illness_type


class IllnessType(str, Enum):
    GLAUCOMA = "glaucoma"
    CANCER = "cancer"
    GENERIC = "generic"

    @classmethod
    def resolve(cls, illness_type: str) -> "IllnessType":
        """Map a raw key to a known type; anything unrecognized is GENERIC."""
        key = normalize_illness_type(illness_type)
        for member in cls:
            if member is not cls.GENERIC and member.value == key:
                return member
        return cls.GENERIC


class ProfileFact(str, Enum):
    HAS_DIABETES = "has_diabetes"
    AGE_OVER_40 = "age_over_40"


class Comparison(str, Enum):
    AT_LEAST = ">="
    GREATER_THAN = ">"


AGE_THRESHOLD_YEARS = 40


@dataclass(frozen=True)
class AutoPopulationRule:
    question_id: str
    fact: ProfileFact


@dataclass(frozen=True)
class AnswerOverride:
    """Fixed scores for one question id, replacing the weight rule entirely."""
    question_id: str
    scores: Tuple[Tuple[str, float], ...]
    default_score: float = 0.0

    def score_for(self, answer: str) -> float:
        for expected, score in self.scores:
            if answer == expected:
                return score
        return self.default_score


@dataclass(frozen=True)
class RiskBand:
    threshold: float
    label: str
    recommendation: str


@dataclass(frozen=True)
class IllnessStrategy:
    illness_type: IllnessType
    auto_rules: Tuple[AutoPopulationRule, ...]
    overrides: Tuple[AnswerOverride, ...]
    # Highest threshold first
    bands: Tuple[RiskBand, ...]
    comparison: Comparison
    floor_label: str
    floor_recommendation: str
    # Classification clamps into this range; the stored total is never capped
    classification_range: Optional[Tuple[float, float]] = None
    fact_addenda: Dict[ProfileFact, str] = field(default_factory=dict)

    @property
    def auto_question_ids(self) -> frozenset:
        return frozenset(rule.question_id for rule in self.auto_rules)

    def override_for(self, question_id: str) -> Optional[AnswerOverride]:
        for override in self.overrides:
            if override.question_id == question_id:
                return override
        return None

    @property
    def labels(self) -> Tuple[str, ...]:
        return tuple(band.label for band in self.bands) + (self.floor_label,)


DIABETES_ADDENDUM = (
    "Your profile indicates diabetes. Keep your blood sugar well controlled "
    "and mention this risk factor at your next check-up."
)

GLAUCOMA_AGE_ADDENDUM = (
    "Glaucoma risk increases after age 40. A comprehensive dilated eye exam "
    "every one to two years is advised."
)

GENERAL_ADVICE = "Consult with a healthcare professional for personalized advice."


GLAUCOMA_STRATEGY = IllnessStrategy(
    illness_type=IllnessType.GLAUCOMA,
    auto_rules=(
        AutoPopulationRule("G7", ProfileFact.HAS_DIABETES),
        AutoPopulationRule("G11", ProfileFact.AGE_OVER_40),
    ),
    overrides=(),
    bands=(
        RiskBand(8, "Critical", "Your glaucoma risk is very high. Seek immediate medical attention."),
        RiskBand(5, "High", "Your glaucoma risk is high. Please consult an ophthalmologist soon."),
        RiskBand(2.1, "Moderate", "Your glaucoma risk is moderate. Consider seeing an eye specialist."),
    ),
    comparison=Comparison.AT_LEAST,
    floor_label="Low",
    floor_recommendation="Your glaucoma risk is low. Regular eye check-ups are recommended.",
    fact_addenda={
        ProfileFact.HAS_DIABETES: DIABETES_ADDENDUM,
        ProfileFact.AGE_OVER_40: GLAUCOMA_AGE_ADDENDUM,
    },
)

CANCER_STRATEGY = IllnessStrategy(
    illness_type=IllnessType.CANCER,
    auto_rules=(
        AutoPopulationRule("C5", ProfileFact.HAS_DIABETES),
    ),
    overrides=(
        # "Screening already performed" lowers risk
        AnswerOverride("C6", scores=(("Yes", -1.0), ("No", 1.0))),
    ),
    bands=(
        RiskBand(9, "Very High", "Your cancer risk is extremely high. Urgent medical consultation is necessary."),
        RiskBand(7, "High", "Your cancer risk is very high. Seek medical attention immediately."),
        RiskBand(5, "Localized", "Your cancer risk is high. Please consult a doctor as soon as possible."),
        RiskBand(3, "Moderate", "Your cancer risk is moderate. Consider consulting a doctor for further evaluation."),
    ),
    comparison=Comparison.AT_LEAST,
    floor_label="Low",
    floor_recommendation="Your cancer risk is low. Continue with regular check-ups.",
    fact_addenda={
        ProfileFact.HAS_DIABETES: DIABETES_ADDENDUM,
    },
)

GENERIC_STRATEGY = IllnessStrategy(
    illness_type=IllnessType.GENERIC,
    auto_rules=(),
    overrides=(),
    bands=(
        RiskBand(7.5, "Very high risk", "Urgent medical consultation is advised. This indicates a Very high risk."),
        RiskBand(5, "High risk", "Consult a specialist for further evaluation. This indicates a High risk."),
        RiskBand(2.5, "Moderate risk", "Monitor symptoms and consider a follow-up with a healthcare provider. This indicates a Moderate risk."),
    ),
    comparison=Comparison.GREATER_THAN,
    floor_label="Low risk",
    floor_recommendation="Maintain a healthy lifestyle and regular check-ups. This indicates a Low risk.",
    classification_range=(0.0, 10.0),
)

STRATEGY_TABLE: Dict[IllnessType, IllnessStrategy] = {
    IllnessType.GLAUCOMA: GLAUCOMA_STRATEGY,
    IllnessType.CANCER: CANCER_STRATEGY,
    IllnessType.GENERIC: GENERIC_STRATEGY,
}


def get_strategy(illness_type: str) -> IllnessStrategy:
    """Resolve the scoring strategy for a raw illness type key."""
    return STRATEGY_TABLE[IllnessType.resolve(illness_type)]
