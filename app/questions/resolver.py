"""
Question Catalog Resolver

Loads every question bank entry of one illness type and indexes it by
question_id. An unknown illness type resolves to an empty catalog; deciding
that an empty catalog is fatal belongs to the caller.
"""

import logging
from typing import Dict

from app.shared.errors import InvalidInputError
from .models import QuestionBankItem, QuestionCatalog

logger = logging.getLogger(__name__)


def normalize_illness_type(illness_type) -> str:
    """
    Trim and lower-case an illness type key.

    Raises:
        InvalidInputError: If the value is not a non-empty string
    """
    if not isinstance(illness_type, str) or not illness_type.strip():
        raise InvalidInputError("Illness type must be a non-empty string")
    return illness_type.strip().lower()


def resolve_catalog(store, illness_type: str) -> QuestionCatalog:
    """
    Resolve the question catalog for an illness type.

    Args:
        store: Anything with find_by_type(illness_type) -> List[QuestionBankItem]
        illness_type: Illness type key (normalized here)

    Returns:
        QuestionCatalog, possibly empty
    """
    key = normalize_illness_type(illness_type)
    items: Dict[str, QuestionBankItem] = {}

    for item in store.find_by_type(key):
        if item.question_id in items:
            logger.warning(
                f"Duplicate question bank entry {item.question_id} for type {key}; last one wins"
            )
        items[item.question_id] = item

    if not items:
        logger.info(f"No questions configured for illness type '{key}'")

    return QuestionCatalog(illness_type=key, items=items)
