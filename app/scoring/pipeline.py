"""
Scoring Pipeline

Pure composition of the scoring steps:
auto-populate -> score manual answers -> aggregate -> classify -> recommend

No I/O. Same catalog, facts and answers always produce the same result.
"""

import logging
from typing import Iterable, List, Sequence

from app.profile.models import ProfileFacts
from app.questions.models import QuestionCatalog
from app.shared.warnings import ScoringWarning
from .autopopulate import auto_populate
from .classify import aggregate_total, classify_risk
from .manual import score_manual_answers
from .models import AnswerInput, ScoringResult
from .recommend import generate_recommendations
from .strategies import get_strategy

logger = logging.getLogger(__name__)


def score_assessment(
    catalog: QuestionCatalog,
    facts: ProfileFacts,
    answers: Sequence[AnswerInput],
    warnings: Iterable[ScoringWarning] = (),
) -> ScoringResult:
    """
    Score one questionnaire submission.

    Args:
        catalog: Resolved catalog; its illness_type selects the strategy
        facts: Profile facts of the submitting user
        answers: Client answers, unordered, possibly with duplicates
        warnings: Warnings raised before scoring (e.g. missing profile)

    Returns:
        ScoringResult with auto-populated responses listed first
    """
    strategy = get_strategy(catalog.illness_type)
    all_warnings: List[ScoringWarning] = list(warnings)

    auto_responses, auto_warnings = auto_populate(strategy, catalog, facts)
    manual_responses, manual_warnings = score_manual_answers(strategy, catalog, answers)
    all_warnings.extend(auto_warnings)
    all_warnings.extend(manual_warnings)

    responses = auto_responses + manual_responses
    raw_total, total_score = aggregate_total(responses)
    risk_level = classify_risk(strategy, total_score)

    logger.info(
        f"Scored {catalog.illness_type}: {len(auto_responses)} auto + {len(manual_responses)} manual "
        f"responses, raw_total={raw_total}, total={total_score}, risk={risk_level}, "
        f"warnings={len(all_warnings)}"
    )

    return ScoringResult(
        illness_type=catalog.illness_type,
        responses=responses,
        raw_total=raw_total,
        total_score=total_score,
        risk_level=risk_level,
        recommendations=generate_recommendations(strategy, risk_level, facts),
        warnings=all_warnings,
    )
