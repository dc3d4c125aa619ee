"""
Profile Module

Derives has_diabetes / age_years facts from stored user profiles for
auto-populated questions.
"""

from .models import ProfileRecord, ProfileFacts, ProfileUpdateRequest
from .extract import calculate_age, extract_profile_facts, load_profile_facts
from .store import PostgresProfileStore

__all__ = [
    "ProfileRecord",
    "ProfileFacts",
    "ProfileUpdateRequest",
    "calculate_age",
    "extract_profile_facts",
    "load_profile_facts",
    "PostgresProfileStore",
]
