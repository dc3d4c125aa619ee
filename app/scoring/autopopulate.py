"""
Auto-Population Rule Set

Answers profile-linked questions on the server (diabetes, age) instead of
trusting client input. A rule applies only when the catalog holds its
question id under the illness type being scored; otherwise it is skipped
without falling back to manual scoring.
"""

import logging
from typing import List, Tuple

from app.profile.models import ProfileFacts
from app.questions.models import QuestionCatalog
from app.shared.warnings import ScoringWarning, WarningCode
from .models import ScoredResponse
from .strategies import AGE_THRESHOLD_YEARS, IllnessStrategy, ProfileFact

logger = logging.getLogger(__name__)


def fact_is_true(fact: ProfileFact, facts: ProfileFacts) -> bool:
    if fact is ProfileFact.HAS_DIABETES:
        return facts.has_diabetes
    if fact is ProfileFact.AGE_OVER_40:
        return facts.age_years > AGE_THRESHOLD_YEARS
    raise ValueError(f"Unsupported profile fact: {fact}")


def auto_populate(
    strategy: IllnessStrategy,
    catalog: QuestionCatalog,
    facts: ProfileFacts,
) -> Tuple[List[ScoredResponse], List[ScoringWarning]]:
    """
    Produce server-derived responses for the strategy's auto rules.

    Args:
        strategy: Strategy of the illness type being scored
        catalog: Resolved catalog of that illness type
        facts: Profile facts of the submitting user

    Returns:
        (responses, warnings); every response has auto_populated=True
    """
    responses: List[ScoredResponse] = []
    warnings: List[ScoringWarning] = []

    for rule in strategy.auto_rules:
        question = catalog.get(rule.question_id)

        if question is None:
            logger.info(
                f"Skipping auto-question {rule.question_id}: not configured for type {catalog.illness_type}"
            )
            warnings.append(ScoringWarning(
                code=WarningCode.AUTO_QUESTION_NOT_CONFIGURED,
                question_id=rule.question_id,
                message=f"Auto-populated question {rule.question_id} is not configured",
            ))
            continue

        if question.illness_type != catalog.illness_type:
            logger.info(
                f"Skipping auto-question {rule.question_id}: its type ({question.illness_type}) "
                f"does not match assessment type ({catalog.illness_type})"
            )
            warnings.append(ScoringWarning(
                code=WarningCode.AUTO_QUESTION_TYPE_MISMATCH,
                question_id=rule.question_id,
                message=f"Question {rule.question_id} belongs to {question.illness_type}",
            ))
            continue

        applies = fact_is_true(rule.fact, facts)
        score = question.weight if applies else 0.0
        logger.debug(
            f"Auto-question {rule.question_id} ({rule.fact.value}) for type {catalog.illness_type}: "
            f"applies={applies}, score={score}"
        )
        responses.append(ScoredResponse(
            question_id=rule.question_id,
            answer="Yes" if applies else "No",
            score=score,
            auto_populated=True,
        ))

    return responses, warnings
