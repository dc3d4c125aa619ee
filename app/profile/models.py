"""
Profile Models

ProfileRecord is what the profile store returns. ProfileFacts is derived
from it for every scoring request and never cached.
"""

from datetime import date
from typing import Any, Optional, Union
from pydantic import BaseModel, Field, field_validator


class ProfileRecord(BaseModel):
    user_id: str
    # Stored as-is; only a literal True counts as diabetic
    has_diabetes: Any = None
    date_of_birth: Optional[date] = None

    class Config:
        extra = "ignore"


class ProfileFacts(BaseModel):
    has_diabetes: bool = False
    age_years: int = 0
    profile_found: bool = False

    class Config:
        extra = "forbid"
        frozen = True


class ProfileUpdateRequest(BaseModel):
    """Partial update; omitted fields keep their stored value."""
    has_diabetes: Optional[Union[bool, str]] = Field(
        default=None,
        description="Boolean, or the form value 'true'/'false'"
    )
    date_of_birth: Optional[date] = None

    class Config:
        extra = "forbid"

    @field_validator('has_diabetes', mode='before')
    @classmethod
    def coerce_form_boolean(cls, v):
        # Select inputs post strings; only 'true' means yes
        if isinstance(v, str):
            return v.strip().lower() == 'true'
        return v
