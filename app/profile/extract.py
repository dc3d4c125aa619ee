"""
Profile Fact Extractor

Derives the facts auto-population needs (has_diabetes, age_years) from a
stored profile. Missing data degrades to zero-valued facts; it never fails
the scoring request.
"""

import logging
from datetime import date
from typing import List, Optional, Tuple

from app.shared.warnings import ScoringWarning, WarningCode
from .models import ProfileFacts, ProfileRecord

logger = logging.getLogger(__name__)

EMPTY_FACTS = ProfileFacts()


def calculate_age(date_of_birth: Optional[date], today: Optional[date] = None) -> int:
    """
    Full years elapsed since date_of_birth.

    Calendar-year difference, minus one when today's month/day precedes the
    birth month/day. No date of birth -> 0.
    """
    if date_of_birth is None:
        return 0
    today = today or date.today()
    age = today.year - date_of_birth.year
    if (today.month, today.day) < (date_of_birth.month, date_of_birth.day):
        age -= 1
    return age


def extract_profile_facts(record: Optional[ProfileRecord], today: Optional[date] = None) -> ProfileFacts:
    if record is None:
        return EMPTY_FACTS
    return ProfileFacts(
        has_diabetes=record.has_diabetes is True,
        age_years=calculate_age(record.date_of_birth, today),
        profile_found=True,
    )


def load_profile_facts(
    store,
    user_id: str,
    today: Optional[date] = None,
) -> Tuple[ProfileFacts, List[ScoringWarning]]:
    """
    Fetch a user's profile and derive facts.

    Args:
        store: Anything with find_user(user_id) -> Optional[ProfileRecord]
        user_id: User identifier
        today: Reference date for age (defaults to today)

    Returns:
        (facts, warnings). Lookup failures degrade to empty facts.
    """
    try:
        record = store.find_user(user_id)
    except Exception as e:
        logger.error(f"Error fetching profile for user {user_id}: {e}")
        return EMPTY_FACTS, [ScoringWarning(
            code=WarningCode.PROFILE_LOOKUP_FAILED,
            message=f"Profile lookup failed for user {user_id}; auto-populated answers default to 'No'",
        )]

    if record is None:
        logger.warning(f"User {user_id} not found; using empty profile facts")
        return EMPTY_FACTS, [ScoringWarning(
            code=WarningCode.PROFILE_NOT_FOUND,
            message=f"User {user_id} not found; auto-populated answers default to 'No'",
        )]

    facts = extract_profile_facts(record, today)
    logger.debug(
        f"User {user_id} profile: raw has_diabetes={record.has_diabetes!r}, "
        f"has_diabetes={facts.has_diabetes}, age_years={facts.age_years}"
    )
    return facts, []
