"""Company schemas for API responses."""

from typing import Any, List, Optional

from pydantic import BaseModel, Field, RootModel, field_validator

from rankings.schemas.common import UTCDateTime


class CompanyResponse(BaseModel):
    """
    A company as exposed on the wire.

    Every optional attribute is always serialized; ``None`` means absent.
    ``rank`` is computed per request and only set where the endpoint
    defines an ordering (lists, leaderboard, detail).
    """
    id: int
    name: str
    slug: str
    logo_url: Optional[str] = None
    description: Optional[str] = None
    website: Optional[str] = None
    category: str
    tags: List[str] = Field(default_factory=list)
    founded_year: Optional[int] = None
    hq_location: Optional[str] = None
    employee_range: Optional[str] = None
    funding_stage: Optional[str] = None
    elo_rating: int
    total_votes: int = 0
    wins: int = 0
    losses: int = 0
    rank: Optional[int] = None
    created_at: UTCDateTime
    updated_at: UTCDateTime

    @field_validator("tags", mode="before")
    @classmethod
    def tags_never_null(cls, v: Any) -> Any:
        """Unset tags become an empty list."""
        return [] if v is None else v

    @classmethod
    def from_row(cls, company: Any, rank: Optional[int] = None) -> "CompanyResponse":
        """Build from an ORM row, attaching a computed rank."""
        response = cls.model_validate(company)
        response.rank = rank
        return response

    class Config:
        from_attributes = True


class CompanyListResponse(RootModel[List[CompanyResponse]]):
    """Companies in ranking order."""


class MatchupResponse(BaseModel):
    """Two companies to compare, in presentation order."""
    company1: CompanyResponse
    company2: CompanyResponse


class LeaderboardResponse(BaseModel):
    """One page of the leaderboard."""
    companies: List[CompanyResponse] = Field(default_factory=list)
    total_count: int
    page: int
    page_size: int
