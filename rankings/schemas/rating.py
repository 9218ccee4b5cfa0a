"""Criterion rating schemas."""

from typing import List, Optional

from pydantic import BaseModel, RootModel

from rankings.schemas.common import UTCDateTime


class RatingRequest(BaseModel):
    """Rating submission body. Range and criterion checks happen in the handler."""
    company_id: int
    criterion: str
    score: int
    session_id: Optional[str] = None


class RatingResponse(BaseModel):
    """A stored rating."""
    id: int
    company_id: int
    criterion: str
    score: int
    session_id: Optional[str] = None
    created_at: UTCDateTime

    class Config:
        from_attributes = True


class AggregatedRatingResponse(BaseModel):
    """Average score and rating count for one criterion."""
    criterion: str
    average_score: float
    total_ratings: int


class AggregatedRatingListResponse(RootModel[List[AggregatedRatingResponse]]):
    """Per-criterion aggregates for one company."""
