"""
Manual Answer Scorer

Scores client answers against catalog weights:
- "Yes" -> weight, anything else -> 0
- question-specific overrides (cancer C6) replace the weight rule
- unknown question ids score 0 and are reported, not rejected
- answers for auto-populated questions are discarded (server value wins)
- duplicate question ids: the last answer wins
"""

import logging
from typing import Dict, List, Sequence, Tuple

from app.questions.models import QuestionCatalog
from app.shared.warnings import ScoringWarning, WarningCode
from .models import AnswerInput, ScoredResponse
from .strategies import IllnessStrategy

logger = logging.getLogger(__name__)

YES = "Yes"


def dedupe_answers(answers: Sequence[AnswerInput]) -> Tuple[List[AnswerInput], List[ScoringWarning]]:
    """Keep the last answer per question id, at the position of its first occurrence."""
    latest: Dict[str, AnswerInput] = {}
    warnings: List[ScoringWarning] = []

    for answer in answers:
        if answer.question_id in latest:
            warnings.append(ScoringWarning(
                code=WarningCode.DUPLICATE_ANSWER,
                question_id=answer.question_id,
                message=(
                    f"Question {answer.question_id} answered more than once; "
                    f"keeping the last answer '{answer.answer}'"
                ),
            ))
        latest[answer.question_id] = answer

    return list(latest.values()), warnings


def score_answer(strategy: IllnessStrategy, catalog: QuestionCatalog, answer: AnswerInput) -> float:
    question = catalog.get(answer.question_id)
    if question is None:
        return 0.0

    override = strategy.override_for(answer.question_id)
    if override is not None:
        return override.score_for(answer.answer)

    return question.weight if answer.answer == YES else 0.0


def score_manual_answers(
    strategy: IllnessStrategy,
    catalog: QuestionCatalog,
    answers: Sequence[AnswerInput],
) -> Tuple[List[ScoredResponse], List[ScoringWarning]]:
    """
    Score client-submitted answers.

    Returns:
        (responses, warnings); every response has auto_populated=False
    """
    unique_answers, warnings = dedupe_answers(answers)
    auto_ids = strategy.auto_question_ids
    responses: List[ScoredResponse] = []

    for answer in unique_answers:
        question = catalog.get(answer.question_id)

        if answer.question_id in auto_ids or (question is not None and question.auto_populate):
            logger.warning(
                f"Question {answer.question_id} is auto-populated but was received from client. Skipping."
            )
            warnings.append(ScoringWarning(
                code=WarningCode.CLIENT_ANSWER_FOR_AUTO_QUESTION,
                question_id=answer.question_id,
                message=f"Client answer for auto-populated question {answer.question_id} ignored",
            ))
            continue

        if question is None:
            logger.warning(
                f"Question ID {answer.question_id} not found for type {catalog.illness_type}. Scoring 0."
            )
            warnings.append(ScoringWarning(
                code=WarningCode.UNKNOWN_QUESTION,
                question_id=answer.question_id,
                message=f"Question {answer.question_id} is not configured for {catalog.illness_type}",
            ))

        responses.append(ScoredResponse(
            question_id=answer.question_id,
            answer=answer.answer,
            score=score_answer(strategy, catalog, answer),
            auto_populated=False,
        ))

    return responses, warnings
