"""
User Profile Endpoints

- GET /api/v1/profiles/{user_id}
- PUT /api/v1/profiles/{user_id}

The stored has_diabetes / date_of_birth feed the auto-populated questions.
Writes require X-Admin-API-Key when ADMIN_API_KEY is set.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from app.questions.admin import verify_admin_key
from app.shared.errors import AssessmentError
from .models import ProfileRecord, ProfileUpdateRequest
from .store import PostgresProfileStore

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/v1/profiles",
    tags=["profiles"],
)


def get_profile_store() -> PostgresProfileStore:
    return PostgresProfileStore()


@router.get("/{user_id}", response_model=ProfileRecord)
def get_profile(user_id: str, store=Depends(get_profile_store)):
    try:
        record = store.find_user(user_id)
    except AssessmentError as e:
        raise HTTPException(status_code=e.http_code, detail=e.to_detail())
    if record is None:
        raise HTTPException(status_code=404, detail=f"Profile for user {user_id} not found")
    return record


@router.put("/{user_id}", response_model=ProfileRecord)
def update_profile(
    user_id: str,
    request: ProfileUpdateRequest,
    store=Depends(get_profile_store),
    admin_key: str = Depends(verify_admin_key),
):
    """Creates the profile on first write."""
    try:
        existing = store.find_user(user_id) or ProfileRecord(user_id=user_id, has_diabetes=False)
        changes = request.model_dump(exclude_unset=True)
        return store.upsert(existing.model_copy(update=changes))
    except AssessmentError as e:
        raise HTTPException(status_code=e.http_code, detail=e.to_detail())
