"""
Assessment Scoring Module

Turns a question catalog, profile facts and client answers into a score,
risk level and recommendations.

Per-type behaviour lives in one strategy table (strategies.py):
- glaucoma: G7 (diabetes) and G11 (age > 40) auto-populated
- cancer: C5 (diabetes) auto-populated, C6 inverted (screening done lowers risk)
- anything else: generic quartile ladder

Submission with persistence lives in engine.py.
"""

from .models import (
    AnswerInput,
    ScoredResponse,
    ScoringResult,
    ScoringWarning,
    WarningCode,
)
from .strategies import (
    IllnessType,
    IllnessStrategy,
    STRATEGY_TABLE,
    get_strategy,
)
from .pipeline import score_assessment

__all__ = [
    # Models
    "AnswerInput",
    "ScoredResponse",
    "ScoringResult",
    "ScoringWarning",
    "WarningCode",
    # Strategies
    "IllnessType",
    "IllnessStrategy",
    "STRATEGY_TABLE",
    "get_strategy",
    # Functions
    "score_assessment",
]
