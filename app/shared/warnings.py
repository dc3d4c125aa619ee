"""
Scoring Warnings

Degraded-but-successful outcomes attached to a scoring result, so callers
and tests can assert on them instead of reading logs.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel


class WarningCode(str, Enum):
    UNKNOWN_QUESTION = "UNKNOWN_QUESTION"
    PROFILE_NOT_FOUND = "PROFILE_NOT_FOUND"
    PROFILE_LOOKUP_FAILED = "PROFILE_LOOKUP_FAILED"
    AUTO_QUESTION_NOT_CONFIGURED = "AUTO_QUESTION_NOT_CONFIGURED"
    AUTO_QUESTION_TYPE_MISMATCH = "AUTO_QUESTION_TYPE_MISMATCH"
    CLIENT_ANSWER_FOR_AUTO_QUESTION = "CLIENT_ANSWER_FOR_AUTO_QUESTION"
    DUPLICATE_ANSWER = "DUPLICATE_ANSWER"


class ScoringWarning(BaseModel):
    code: WarningCode
    question_id: Optional[str] = None
    message: str

    class Config:
        frozen = True
