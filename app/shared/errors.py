"""
Assessment Error Types
======================
Fatal errors raised by the assessment service.

Fatal (request fails, nothing persisted):
- NO_QUESTIONS_CONFIGURED = 400 (illness type has no question bank entries)
- INVALID_INPUT = 400 (malformed illness type / request)
- STORAGE_UNAVAILABLE = 503 (catalog read or assessment write failed)
- DUPLICATE_QUESTION = 409 (question bank admin only)

Tolerated degradations (unknown question ids, missing profiles) are NOT
errors. They are reported as warnings on the scoring result.
"""

from enum import Enum


class AssessmentErrorCode(Enum):
    NO_QUESTIONS_CONFIGURED = "NO_QUESTIONS_CONFIGURED"
    INVALID_INPUT = "INVALID_INPUT"
    STORAGE_UNAVAILABLE = "STORAGE_UNAVAILABLE"
    DUPLICATE_QUESTION = "DUPLICATE_QUESTION"
    NOT_FOUND = "NOT_FOUND"


class AssessmentError(Exception):
    """Base exception for assessment failures."""

    def __init__(self, error_code: AssessmentErrorCode, message: str, http_code: int = 500):
        self.error_code = error_code
        self.message = message
        self.http_code = http_code
        super().__init__(f"{error_code.value}: {message}")

    def to_detail(self) -> dict:
        """Payload used for HTTPException.detail."""
        return {
            "error_code": self.error_code.value,
            "message": self.message,
        }


class ConfigurationError(AssessmentError):
    """Illness type cannot be scored because no questions are configured."""

    def __init__(self, message: str):
        super().__init__(AssessmentErrorCode.NO_QUESTIONS_CONFIGURED, message, http_code=400)


class InvalidInputError(AssessmentError):
    def __init__(self, message: str):
        super().__init__(AssessmentErrorCode.INVALID_INPUT, message, http_code=400)


class StorageError(AssessmentError):
    """A store read or write failed. The caller must resubmit."""

    def __init__(self, message: str):
        super().__init__(AssessmentErrorCode.STORAGE_UNAVAILABLE, message, http_code=503)


class DuplicateQuestionError(AssessmentError):
    def __init__(self, illness_type: str, question_id: str):
        super().__init__(
            AssessmentErrorCode.DUPLICATE_QUESTION,
            f"Question ID {question_id} already exists for {illness_type}",
            http_code=409,
        )
