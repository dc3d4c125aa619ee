"""
Assessment History Module

Immutable assessment records, append-only storage and history/trend reads.
"""

from .models import Assessment, TrendPoint
from .store import PostgresAssessmentStore

__all__ = [
    "Assessment",
    "TrendPoint",
    "PostgresAssessmentStore",
]
