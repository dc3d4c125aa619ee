"""Shared utilities: hashing, database access, error types."""

from .hashing import (
    canonical_content,
    content_hash,
    verify_content_hash,
)
from .errors import (
    AssessmentError,
    AssessmentErrorCode,
    ConfigurationError,
    InvalidInputError,
    StorageError,
    DuplicateQuestionError,
)

__all__ = [
    "canonical_content",
    "content_hash",
    "verify_content_hash",
    "AssessmentError",
    "AssessmentErrorCode",
    "ConfigurationError",
    "InvalidInputError",
    "StorageError",
    "DuplicateQuestionError",
]
