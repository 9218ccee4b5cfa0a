"""Error taxonomy shared by every endpoint.

Handlers raise these; the application-level exception handlers in
``rankings.main`` render them as an ``ErrorResponse`` in whichever wire
format the caller negotiated.
"""

from contextlib import contextmanager
from typing import Iterator

from fastapi import status
from sqlalchemy.exc import SQLAlchemyError


class RankingsError(Exception):
    """Base class for errors that map onto a status classification."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidArgument(RankingsError):
    """Malformed or out-of-range caller input."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFound(RankingsError):
    """Referenced company or comment does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class InsufficientCandidates(NotFound):
    """Fewer than two companies satisfy a matchup filter."""


class Internal(RankingsError):
    """Store or encoding failure."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


@contextmanager
def store_errors(message: str) -> Iterator[None]:
    """Re-raise store failures inside the block as ``Internal(message)``."""
    try:
        yield
    except SQLAlchemyError as exc:
        raise Internal(message) from exc
