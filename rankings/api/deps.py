"""
API Dependencies
Shared dependencies for API endpoints (store session, services, caller identity).
"""

from rankings.core.security import get_optional_user
from rankings.db.session import get_db
from rankings.services.matchup_service import MatchupSelector, matchup_selector
from rankings.services.vote_service import VoteService, vote_service

__all__ = ["get_db", "get_optional_user", "get_matchup_selector", "get_vote_service"]


def get_matchup_selector() -> MatchupSelector:
    """Process-wide selector; override in tests to seed or stub the generators."""
    return matchup_selector


def get_vote_service() -> VoteService:
    return vote_service
