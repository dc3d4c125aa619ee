"""
Assessment History Endpoints

- GET /api/v1/history/assessments/{assessment_id}
- GET /api/v1/history/users/{user_id}
- GET /api/v1/history/users/{user_id}/trends
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from app.questions.resolver import normalize_illness_type
from app.shared.errors import AssessmentError
from .models import Assessment, AssessmentHistoryResponse, TrendResponse
from .store import DEFAULT_HISTORY_LIMIT, DEFAULT_TREND_LIMIT, PostgresAssessmentStore

router = APIRouter(
    prefix="/api/v1/history",
    tags=["history"],
)


def get_assessment_store() -> PostgresAssessmentStore:
    return PostgresAssessmentStore()


def _type_filter(illness_type: Optional[str]) -> Optional[str]:
    return normalize_illness_type(illness_type) if illness_type else None


@router.get("/assessments/{assessment_id}", response_model=Assessment)
def get_assessment(assessment_id: str, store=Depends(get_assessment_store)):
    try:
        assessment = store.get(assessment_id)
    except AssessmentError as e:
        raise HTTPException(status_code=e.http_code, detail=e.to_detail())
    if assessment is None:
        raise HTTPException(status_code=404, detail=f"Assessment {assessment_id} not found")
    return assessment


@router.get("/users/{user_id}", response_model=AssessmentHistoryResponse)
def get_user_history(
    user_id: str,
    illness_type: Optional[str] = Query(default=None),
    limit: int = Query(default=DEFAULT_HISTORY_LIMIT, ge=1, le=500),
    start_date: Optional[date] = Query(default=None),
    end_date: Optional[date] = Query(default=None),
    store=Depends(get_assessment_store),
):
    """Newest first."""
    if start_date and end_date and start_date > end_date:
        raise HTTPException(status_code=400, detail="start_date must not be after end_date")
    try:
        assessments = store.list_for_user(
            user_id,
            illness_type=_type_filter(illness_type),
            limit=limit,
            start_date=start_date,
            end_date=end_date,
        )
    except AssessmentError as e:
        raise HTTPException(status_code=e.http_code, detail=e.to_detail())
    return AssessmentHistoryResponse(
        user_id=user_id,
        count=len(assessments),
        assessments=assessments,
    )


@router.get("/users/{user_id}/trends", response_model=TrendResponse)
def get_user_trends(
    user_id: str,
    illness_type: Optional[str] = Query(default=None),
    limit: int = Query(default=DEFAULT_TREND_LIMIT, ge=1, le=500),
    store=Depends(get_assessment_store),
):
    """Oldest first, for trend charts."""
    try:
        type_key = _type_filter(illness_type)
        points = store.trends(user_id, illness_type=type_key, limit=limit)
    except AssessmentError as e:
        raise HTTPException(status_code=e.http_code, detail=e.to_detail())
    return TrendResponse(
        user_id=user_id,
        illness_type=type_key,
        count=len(points),
        points=points,
    )
