"""
Question Bank Module

Weighted yes/no questions per illness type, the catalog resolver used by
the scoring engine, and admin endpoints.
"""

from .models import QuestionBankItem, QuestionCatalog
from .resolver import normalize_illness_type, resolve_catalog

__all__ = [
    "QuestionBankItem",
    "QuestionCatalog",
    "normalize_illness_type",
    "resolve_catalog",
]
