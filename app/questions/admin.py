"""
Question Bank Admin Endpoints

Manage the weighted questions of each illness type.

Security: write endpoints require X-Admin-API-Key when ADMIN_API_KEY is
set; listing is public.
"""

import os
import logging

from fastapi import APIRouter, Depends, Header, HTTPException, Response, status

from app.shared.errors import AssessmentError
from .models import (
    QuestionBankItem,
    QuestionCreateRequest,
    QuestionListResponse,
    QuestionUpdateRequest,
)
from .resolver import normalize_illness_type
from .store import PostgresQuestionBankStore

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/v1/questions",
    tags=["questions"],
)


def get_question_store() -> PostgresQuestionBankStore:
    return PostgresQuestionBankStore()


def verify_admin_key(x_admin_api_key: str = Header(None, alias="X-Admin-API-Key")) -> str:
    """Verify admin API key from header."""
    expected_key = os.environ.get("ADMIN_API_KEY")

    if not expected_key:
        return "dev_mode"

    if not x_admin_api_key:
        raise HTTPException(status_code=401, detail="Missing X-Admin-API-Key header")

    if x_admin_api_key != expected_key:
        raise HTTPException(status_code=401, detail="Invalid admin API key")

    return x_admin_api_key


def _illness_type(illness_type: str) -> str:
    try:
        return normalize_illness_type(illness_type)
    except AssessmentError as e:
        raise HTTPException(status_code=e.http_code, detail=e.to_detail())


@router.get("/{illness_type}", response_model=QuestionListResponse)
def list_questions(illness_type: str, store=Depends(get_question_store)):
    key = _illness_type(illness_type)
    try:
        questions = store.find_by_type(key)
    except AssessmentError as e:
        raise HTTPException(status_code=e.http_code, detail=e.to_detail())
    return QuestionListResponse(
        illness_type=key,
        count=len(questions),
        questions=questions,
    )


@router.post(
    "/{illness_type}",
    response_model=QuestionBankItem,
    status_code=status.HTTP_201_CREATED,
)
def create_question(
    illness_type: str,
    request: QuestionCreateRequest,
    store=Depends(get_question_store),
    admin_key: str = Depends(verify_admin_key),
):
    """409 if the question id already exists for this illness type."""
    item = QuestionBankItem(illness_type=_illness_type(illness_type), **request.model_dump())
    try:
        return store.create(item)
    except AssessmentError as e:
        raise HTTPException(status_code=e.http_code, detail=e.to_detail())


@router.put("/{illness_type}/{question_id}", response_model=QuestionBankItem)
def update_question(
    illness_type: str,
    question_id: str,
    request: QuestionUpdateRequest,
    store=Depends(get_question_store),
    admin_key: str = Depends(verify_admin_key),
):
    key = _illness_type(illness_type)
    try:
        existing = store.get(key, question_id)
        if existing is None:
            raise HTTPException(status_code=404, detail=f"Question {question_id} not found for {key}")

        changes = {
            k: v for k, v in request.model_dump(exclude_unset=True).items()
            if v is not None or k == "auto_populate_from"
        }
        updated = store.update(existing.model_copy(update=changes))
    except AssessmentError as e:
        raise HTTPException(status_code=e.http_code, detail=e.to_detail())

    if updated is None:
        raise HTTPException(status_code=404, detail=f"Question {question_id} not found for {key}")
    return updated


@router.delete("/{illness_type}/{question_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_question(
    illness_type: str,
    question_id: str,
    store=Depends(get_question_store),
    admin_key: str = Depends(verify_admin_key),
):
    key = _illness_type(illness_type)
    try:
        deleted = store.delete(key, question_id)
    except AssessmentError as e:
        raise HTTPException(status_code=e.http_code, detail=e.to_detail())
    if not deleted:
        raise HTTPException(status_code=404, detail=f"Question {question_id} not found for {key}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
