"""
Assessment Engine
=================
Submission flow for one completed questionnaire:

    resolve catalog -> load profile facts -> score -> build record -> insert

FATAL (nothing persisted, caller must resubmit):
- no questions configured for the type = ConfigurationError (400)
- catalog read or assessment write failure = StorageError (503)

TOLERATED (reported as warnings):
- unknown question ids, missing profile, misconfigured auto-questions

Stateless: each submission is independent. Retrying a submission creates a
second Assessment.
"""

import logging
from datetime import date, datetime
from typing import Callable, List, Optional

from pydantic import BaseModel, Field

from app.history.models import Assessment
from app.profile.extract import load_profile_facts
from app.questions.resolver import resolve_catalog
from app.shared.errors import AssessmentError, ConfigurationError, StorageError
from app.shared.warnings import ScoringWarning
from .models import AnswerInput
from .pipeline import score_assessment

logger = logging.getLogger(__name__)


class SubmissionRequest(BaseModel):
    user_id: str = Field(min_length=1)
    illness_type: str = Field(min_length=1)
    answers: List[AnswerInput] = Field(default_factory=list)


class SubmissionResult(BaseModel):
    assessment_id: str
    illness_type: str
    total_score: float
    risk_level: str
    recommendations: List[str]
    warnings: List[ScoringWarning] = Field(default_factory=list)


class AssessmentEngine:
    """
    Wires the scoring pipeline to its stores.

    Args:
        question_store: find_by_type(illness_type) -> List[QuestionBankItem]
        profile_store: find_user(user_id) -> Optional[ProfileRecord]
        assessment_store: insert(Assessment) -> assessment_id
        today: Reference date provider for age calculation
    """

    def __init__(
        self,
        question_store,
        profile_store,
        assessment_store,
        today: Optional[Callable[[], date]] = None,
    ):
        self.question_store = question_store
        self.profile_store = profile_store
        self.assessment_store = assessment_store
        self._today = today or date.today

    def submit(self, request: SubmissionRequest, created_at: Optional[datetime] = None) -> SubmissionResult:
        """
        Score and persist one submission.

        Raises:
            InvalidInputError: Empty illness type
            ConfigurationError: No questions configured for the illness type
            StorageError: Catalog unreadable or assessment not persisted
        """
        try:
            catalog = resolve_catalog(self.question_store, request.illness_type)
        except AssessmentError:
            raise
        except Exception as e:
            logger.error(f"Failed to load questions for {request.illness_type}: {e}")
            raise StorageError(f"Question bank unavailable: {e}") from e

        if catalog.is_empty:
            raise ConfigurationError(
                f"No questions configured for assessment type: {catalog.illness_type}"
            )

        facts, profile_warnings = load_profile_facts(
            self.profile_store, request.user_id, today=self._today()
        )
        result = score_assessment(catalog, facts, request.answers, warnings=profile_warnings)
        assessment = Assessment.from_scoring(request.user_id, result, created_at=created_at)

        try:
            assessment_id = self.assessment_store.insert(assessment)
        except AssessmentError:
            raise
        except Exception as e:
            logger.error(f"Error saving assessment for user {request.user_id}: {e}")
            raise StorageError(f"Error saving assessment: {e}") from e

        logger.info(
            f"Assessment {assessment_id} saved: user={request.user_id} type={catalog.illness_type} "
            f"total={result.total_score} risk={result.risk_level}"
        )

        return SubmissionResult(
            assessment_id=assessment_id,
            illness_type=catalog.illness_type,
            total_score=result.total_score,
            risk_level=result.risk_level,
            recommendations=result.recommendations,
            warnings=result.warnings,
        )
