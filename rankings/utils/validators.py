"""Validators for caller input at the handler boundary.

Each raises ``InvalidArgument`` with the message shown to the caller, except
the id range check, which reports ids no row can have as ``NotFound``.
"""

from typing import Optional

from rankings.config import settings
from rankings.core.exceptions import InvalidArgument, NotFound
from rankings.utils.constants import (
    ALL_CATEGORIES,
    MAX_RATING_SCORE,
    MAX_SESSION_ID_LENGTH,
    MAX_STORE_ID,
    MIN_RATING_SCORE,
    MIN_STORE_ID,
    RATING_CRITERIA,
)


def validate_distinct_companies(winner_id: int, loser_id: int) -> None:
    """A company cannot beat itself."""
    if winner_id == loser_id:
        raise InvalidArgument("Winner and loser must be different")


def validate_score(score: int) -> None:
    """Validate a criterion score."""
    if score < MIN_RATING_SCORE or score > MAX_RATING_SCORE:
        raise InvalidArgument(f"Score must be between {MIN_RATING_SCORE} and {MAX_RATING_SCORE}")


def validate_criterion(criterion: str) -> None:
    """Validate a criterion against the closed set."""
    if criterion not in RATING_CRITERIA:
        raise InvalidArgument("Invalid criterion")


def clean_comment_content(content: str) -> str:
    """Strip surrounding whitespace and enforce the length bound."""
    cleaned = content.strip()
    if not cleaned:
        raise InvalidArgument("Content is required")
    if len(cleaned) > settings.MAX_COMMENT_LENGTH:
        raise InvalidArgument(
            f"Content too long (max {settings.MAX_COMMENT_LENGTH} characters)"
        )
    return cleaned


def is_storable_id(value: int) -> bool:
    """Whether ``value`` fits the integer identity columns."""
    return MIN_STORE_ID <= value <= MAX_STORE_ID


def require_storable_id(value: int, not_found_message: str) -> None:
    """Ids no row can have are reported as missing without querying."""
    if not is_storable_id(value):
        raise NotFound(not_found_message)


def validate_session_id(session_id: Optional[str]) -> None:
    """Bound the client-supplied session token to its column width."""
    if session_id is not None and len(session_id) > MAX_SESSION_ID_LENGTH:
        raise InvalidArgument(f"Session ID too long (max {MAX_SESSION_ID_LENGTH} characters)")


def parse_comment_id(raw: str) -> int:
    """Parse a comment id path segment."""
    try:
        comment_id = int(raw)
    except (TypeError, ValueError):
        raise InvalidArgument("Invalid comment ID")
    require_storable_id(comment_id, "Comment not found")
    return comment_id


def normalize_category(category: Optional[str]) -> Optional[str]:
    """Map the "no restriction" spellings (missing, empty, "all") to None."""
    if not category or category == ALL_CATEGORIES:
        return None
    return category
