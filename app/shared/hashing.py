"""
Assessment Content Hashing
Single source of truth for assessment_hash.

An assessment is hashed over its scored content only: identifiers and
timestamps are volatile and never part of the digest, so a record re-read
from storage can be verified without rescoring it.
"""

import hashlib
import json
from typing import Any, Dict

# Volatile/generated fields excluded from content hashes
VOLATILE_FIELDS = frozenset([
    "assessment_id",
    "assessment_hash",
    "created_at",
    "id",
])

HASH_PREFIX = "sha256:"

# Scores are sums of decimal weights (0.91 + 0.27 + 3); round away float noise
SCORE_DECIMALS = 6


def _normalize(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: _normalize(v) for k, v in value.items() if k not in VOLATILE_FIELDS}
    if isinstance(value, (list, tuple)):
        return [_normalize(v) for v in value]
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        # 1 and 1.0 must hash the same (JSONB round trip)
        return round(float(value), SCORE_DECIMALS)
    return value


def canonical_content(content: Dict[str, Any]) -> str:
    """Sorted-key compact JSON of the non-volatile content."""
    return json.dumps(_normalize(content), sort_keys=True, separators=(',', ':'), ensure_ascii=True)


def content_hash(content: Dict[str, Any]) -> str:
    """Returns: "sha256:<64-char-hex>" """
    digest = hashlib.sha256(canonical_content(content).encode('utf-8')).hexdigest()
    return f"{HASH_PREFIX}{digest}"


def verify_content_hash(content: Dict[str, Any], expected_hash: str) -> bool:
    return content_hash(content) == expected_hash
