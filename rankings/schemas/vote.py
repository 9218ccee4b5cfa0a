"""Vote schemas."""

from typing import List, Optional

from pydantic import BaseModel, Field

from rankings.schemas.company import CompanyResponse


class VoteRequest(BaseModel):
    """Vote submission body."""
    winner_id: int
    loser_id: int
    session_id: Optional[str] = None


class VoteResponse(BaseModel):
    """Both companies after the vote and the rating change each received."""
    winner: CompanyResponse
    loser: CompanyResponse
    winner_elo_diff: int
    loser_elo_diff: int


class UserLeaderboardEntry(BaseModel):
    """A signed-in voter and how many votes they have cast."""
    user_id: str
    total_votes: int
    rank: int


class UserLeaderboardResponse(BaseModel):
    """One page of the voter leaderboard."""
    users: List[UserLeaderboardEntry] = Field(default_factory=list)
    total_count: int
    page: int
    page_size: int
