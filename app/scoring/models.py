"""
Scoring Models

Inputs and outputs of the assessment scoring engine.
"""

from typing import List
from pydantic import BaseModel, Field

from app.shared.warnings import ScoringWarning, WarningCode


class AnswerInput(BaseModel):
    """One client-submitted answer."""
    question_id: str
    answer: str = Field(description="'Yes', 'No' or free text")


class ScoredResponse(BaseModel):
    """Per-question engine output. Immutable once produced."""
    question_id: str
    answer: str
    score: float
    auto_populated: bool = False

    class Config:
        frozen = True
        extra = "forbid"


class ScoringResult(BaseModel):
    """
    Pure scoring output, before persistence.

    total_score is raw_total floored at zero (never capped).
    """
    illness_type: str
    responses: List[ScoredResponse]
    raw_total: float
    total_score: float
    risk_level: str
    recommendations: List[str]
    warnings: List[ScoringWarning] = Field(default_factory=list)

    def responses_for(self, question_id: str) -> List[ScoredResponse]:
        return [r for r in self.responses if r.question_id == question_id]


__all__ = [
    "AnswerInput",
    "ScoredResponse",
    "ScoringResult",
    "ScoringWarning",
    "WarningCode",
]
