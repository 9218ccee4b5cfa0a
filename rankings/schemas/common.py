"""Shared schema types and small response payloads."""

from datetime import datetime, timezone
from typing import Annotated, List

from pydantic import AfterValidator, BaseModel, PlainSerializer, RootModel


def ensure_utc(value: datetime) -> datetime:
    """Treat naive timestamps from the store as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def format_timestamp(value: datetime) -> str:
    """ISO-8601 with microseconds always written out."""
    return value.isoformat(timespec="microseconds")


UTCDateTime = Annotated[
    datetime,
    AfterValidator(ensure_utc),
    PlainSerializer(format_timestamp, return_type=str, when_used="json"),
]


class ErrorResponse(BaseModel):
    """Error payload: one message, status carried by the HTTP status code."""
    error: str


class HealthResponse(BaseModel):
    """Store connectivity status."""
    status: str
    database: str


class StatsResponse(BaseModel):
    """Platform-wide counters."""
    total_companies: int
    total_votes: int
    total_ratings: int
    total_comments: int
    categories: List[str] = []


class CategoryCountResponse(BaseModel):
    """Number of companies in one category."""
    category: str
    count: int


class CategoryListResponse(RootModel[List[CategoryCountResponse]]):
    """Categories ordered by company count."""
