"""
Assessment History Models

Assessment is the immutable record of one completed questionnaire.
Resubmission creates a new Assessment; records are never updated.
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field

from app.scoring.models import ScoredResponse, ScoringResult
from app.shared.hashing import content_hash, verify_content_hash
from app.shared.warnings import ScoringWarning


class Assessment(BaseModel):
    assessment_id: str
    user_id: str
    illness_type: str
    responses: List[ScoredResponse]
    total_score: float
    risk_level: str
    recommendations: List[str]
    warnings: List[ScoringWarning] = Field(default_factory=list)
    assessment_hash: str = Field(description="sha256 of the scored content")
    created_at: datetime

    class Config:
        frozen = True
        extra = "forbid"

    @staticmethod
    def compute_hash(content: Dict[str, Any]) -> str:
        return content_hash(content)

    def content(self) -> Dict[str, Any]:
        """Hashed fields: everything except ids and timestamps."""
        return self.model_dump(mode="json")

    def verify(self) -> bool:
        """True if the stored content still matches assessment_hash."""
        return verify_content_hash(self.content(), self.assessment_hash)

    @classmethod
    def from_scoring(
        cls,
        user_id: str,
        result: ScoringResult,
        assessment_id: Optional[str] = None,
        created_at: Optional[datetime] = None,
    ) -> "Assessment":
        assessment = cls(
            assessment_id=assessment_id or str(uuid.uuid4()),
            user_id=user_id,
            illness_type=result.illness_type,
            responses=list(result.responses),
            total_score=result.total_score,
            risk_level=result.risk_level,
            recommendations=list(result.recommendations),
            warnings=list(result.warnings),
            assessment_hash="",
            created_at=created_at or datetime.now(timezone.utc),
        )
        return assessment.model_copy(
            update={"assessment_hash": cls.compute_hash(assessment.content())}
        )


class TrendPoint(BaseModel):
    assessment_id: str
    illness_type: str
    total_score: float
    risk_level: str
    created_at: datetime


# Response models for API endpoints

class AssessmentHistoryResponse(BaseModel):
    user_id: str
    count: int
    assessments: List[Assessment]


class TrendResponse(BaseModel):
    user_id: str
    illness_type: Optional[str] = None
    count: int
    points: List[TrendPoint]
