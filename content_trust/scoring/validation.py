"""Pure validators for claim submissions.

The scoring engine trusts its input; these checks run on the submission path
before a claim is persisted. Each returns a ValidationResult instead of
raising so the caller can surface the message on the form.
"""

import re
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from content_trust.config.scoring import MAX_RATING, MIN_RATING
from content_trust.schemas import ClaimData

CLAIM_CONTENT_MIN = 100
CLAIM_CONTENT_MAX = 2000
COMMENT_CONTENT_MIN = 10
COMMENT_CONTENT_MAX = 1000
SOURCE_NAME_MAX = 200

UUID_PATTERN = "[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}"
UUID_REGEX = re.compile(f"^{UUID_PATTERN}$", re.IGNORECASE)


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    error: Optional[str] = None


VALID = ValidationResult(valid=True)


def _is_rating(value: Any) -> bool:
    # bool is an int subclass but never a rating
    return (
        isinstance(value, int)
        and not isinstance(value, bool)
        and MIN_RATING <= value <= MAX_RATING
    )


def is_uuid(value: str) -> bool:
    return bool(UUID_REGEX.match(value))


def validate_impact(impact: Any) -> ValidationResult:
    """Impact measures how much AI usage affects the content's integrity."""
    if not _is_rating(impact):
        return ValidationResult(False, f"Impact must be between {MIN_RATING} and {MAX_RATING}")
    return VALID


def validate_confidence(confidence: Any) -> ValidationResult:
    """Confidence measures how certain the claimant is that content is AI-generated."""
    if not _is_rating(confidence):
        return ValidationResult(
            False, f"Confidence must be between {MIN_RATING} and {MAX_RATING}"
        )
    return VALID


def validate_helpful_votes(helpful_votes: Any) -> ValidationResult:
    if isinstance(helpful_votes, bool) or not isinstance(helpful_votes, int) or helpful_votes < 0:
        return ValidationResult(False, "Helpful votes must be a non-negative integer")
    return VALID


def validate_claim(claim: Union[ClaimData, Mapping[str, Any]]) -> ValidationResult:
    """
    Check every scoring field of a claim.

    Returns the first failure, in field order impact, confidence, helpful votes.
    """
    if isinstance(claim, ClaimData):
        fields = claim.model_dump()
    else:
        fields = dict(claim)
        if "helpfulVotes" in fields:
            fields.setdefault("helpful_votes", fields["helpfulVotes"])

    for result in (
        validate_impact(fields.get("impact")),
        validate_confidence(fields.get("confidence")),
        validate_helpful_votes(fields.get("helpful_votes", 0)),
    ):
        if not result.valid:
            return result
    return VALID


def validate_claim_content(content: str) -> ValidationResult:
    if len(content) < CLAIM_CONTENT_MIN:
        return ValidationResult(False, f"Claim must be at least {CLAIM_CONTENT_MIN} characters")
    if len(content) > CLAIM_CONTENT_MAX:
        return ValidationResult(False, f"Claim must be at most {CLAIM_CONTENT_MAX} characters")
    return VALID


def validate_comment_content(content: str) -> ValidationResult:
    if len(content) < COMMENT_CONTENT_MIN:
        return ValidationResult(
            False, f"Comment must be at least {COMMENT_CONTENT_MIN} characters"
        )
    if len(content) > COMMENT_CONTENT_MAX:
        return ValidationResult(
            False, f"Comment must be at most {COMMENT_CONTENT_MAX} characters"
        )
    return VALID


def validate_source_name(name: Optional[str]) -> ValidationResult:
    if not name or not name.strip():
        return ValidationResult(False, "Source name is required")
    if len(name) > SOURCE_NAME_MAX:
        return ValidationResult(
            False, f"Source name must be at most {SOURCE_NAME_MAX} characters"
        )
    return VALID


__all__ = [
    "ValidationResult",
    "is_uuid",
    "validate_impact",
    "validate_confidence",
    "validate_helpful_votes",
    "validate_claim",
    "validate_claim_content",
    "validate_comment_content",
    "validate_source_name",
]
