"""
Assessment Submission Endpoint

POST /api/v1/assessments/{illness_type}
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from app.history.store import PostgresAssessmentStore
from app.profile.store import PostgresProfileStore
from app.questions.store import PostgresQuestionBankStore
from app.shared.errors import AssessmentError
from .engine import AssessmentEngine, SubmissionRequest, SubmissionResult
from .models import AnswerInput

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/v1/assessments",
    tags=["assessments"],
)


class SubmitAssessmentRequest(BaseModel):
    """Request body; the illness type comes from the path."""
    user_id: str = Field(min_length=1)
    answers: List[AnswerInput] = Field(
        default_factory=list,
        description="Manual answers. Answers for auto-populated questions are ignored."
    )


def get_engine() -> AssessmentEngine:
    return AssessmentEngine(
        question_store=PostgresQuestionBankStore(),
        profile_store=PostgresProfileStore(),
        assessment_store=PostgresAssessmentStore(),
    )


@router.post(
    "/{illness_type}",
    response_model=SubmissionResult,
    status_code=status.HTTP_201_CREATED,
)
def submit_assessment(
    illness_type: str,
    body: SubmitAssessmentRequest,
    engine: AssessmentEngine = Depends(get_engine),
):
    """
    Score and persist one questionnaire.

    - 201: assessment created
    - 400 NO_QUESTIONS_CONFIGURED: no question bank for this type
    - 503 STORAGE_UNAVAILABLE: nothing was saved; resubmit
    """
    try:
        return engine.submit(SubmissionRequest(
            user_id=body.user_id,
            illness_type=illness_type,
            answers=body.answers,
        ))
    except AssessmentError as e:
        logger.warning(f"Assessment submission failed for {illness_type}: {e}")
        raise HTTPException(status_code=e.http_code, detail=e.to_detail())
