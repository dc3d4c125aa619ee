"""
Question Bank Models

Pydantic models for question bank items and the per-type catalog the
scoring engine reads.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterator, List, Optional
from pydantic import BaseModel, Field


class QuestionBankItem(BaseModel):
    """
    One weighted yes/no question.

    Read-only to the scoring engine. Weights are taken as stored.
    """
    illness_type: str
    question_id: str = Field(description="e.g. 'G1', 'C6'")
    text: str
    weight: float
    auto_populate: bool = False
    auto_populate_from: Optional[str] = Field(
        default=None,
        description="Profile source for auto-population (e.g. 'profile.has_diabetes')"
    )

    class Config:
        extra = "ignore"


@dataclass
class QuestionCatalog:
    """All question bank items of one illness type, indexed by question_id."""
    illness_type: str
    items: Dict[str, QuestionBankItem] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.items

    def get(self, question_id: str) -> Optional[QuestionBankItem]:
        return self.items.get(question_id)

    def __contains__(self, question_id: str) -> bool:
        return question_id in self.items

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[QuestionBankItem]:
        return iter(self.items.values())


# Admin request/response models

class QuestionCreateRequest(BaseModel):
    """Request to add a question to an illness type."""
    question_id: str = Field(min_length=1)
    text: str = Field(min_length=1)
    weight: float = Field(gt=0, description="Score added for a 'Yes' answer")
    auto_populate: bool = False
    auto_populate_from: Optional[str] = None

    class Config:
        extra = "forbid"


class QuestionUpdateRequest(BaseModel):
    """Partial update; question_id itself is immutable."""
    text: Optional[str] = Field(default=None, min_length=1)
    weight: Optional[float] = Field(default=None, gt=0)
    auto_populate: Optional[bool] = None
    auto_populate_from: Optional[str] = None

    class Config:
        extra = "forbid"


class QuestionListResponse(BaseModel):
    illness_type: str
    count: int
    questions: List[QuestionBankItem]
    generated_at: datetime = Field(default_factory=datetime.utcnow)
