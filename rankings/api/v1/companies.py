"""Company listing, detail, and per-company feedback reads."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from rankings.api.deps import get_db
from rankings.core.codec import respond
from rankings.core.exceptions import NotFound, store_errors
from rankings.schemas.comment import CommentListResponse, CommentResponse
from rankings.schemas.company import CompanyListResponse, CompanyResponse
from rankings.schemas.rating import AggregatedRatingListResponse, AggregatedRatingResponse
from rankings.services import company_service, feedback_service
from rankings.utils.validators import normalize_category

router = APIRouter()


async def _company_id_for(db: AsyncSession, slug: str) -> int:
    with store_errors("Failed to get company"):
        company_id = await company_service.get_company_id_by_slug(db, slug)
    if company_id is None:
        raise NotFound("Company not found")
    return company_id


@router.get("")
async def list_companies(
    request: Request,
    category: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db),
):
    """
    Companies in ranking order.

    ``rank`` is the position within the returned list, so it restarts at
    1 under any filter.
    """
    with store_errors("Failed to get companies"):
        companies = await company_service.list_companies(
            db, category=normalize_category(category), search=search or None
        )

    return respond(
        request,
        CompanyListResponse(
            [CompanyResponse.from_row(company, rank=i + 1) for i, company in enumerate(companies)]
        ),
    )


@router.get("/{slug}")
async def get_company(request: Request, slug: str, db: AsyncSession = Depends(get_db)):
    """One company with its global rank."""
    with store_errors("Failed to get company"):
        company = await company_service.get_company_by_slug(db, slug)
        if company is None:
            raise NotFound("Company not found")
        rank = await company_service.get_company_rank(db, company)

    return respond(request, CompanyResponse.from_row(company, rank=rank))


@router.get("/{slug}/ratings")
async def get_company_ratings(request: Request, slug: str, db: AsyncSession = Depends(get_db)):
    """Average score per rated criterion."""
    company_id = await _company_id_for(db, slug)

    with store_errors("Failed to get ratings"):
        aggregates = await feedback_service.aggregate_ratings(db, company_id)

    return respond(
        request,
        AggregatedRatingListResponse(
            [
                AggregatedRatingResponse(criterion=criterion, average_score=average, total_ratings=total)
                for criterion, average, total in aggregates
            ]
        ),
    )


@router.get("/{slug}/comments")
async def get_company_comments(request: Request, slug: str, db: AsyncSession = Depends(get_db)):
    company_id = await _company_id_for(db, slug)

    with store_errors("Failed to get comments"):
        comments = await feedback_service.list_comments(db, company_id)

    return respond(
        request,
        CommentListResponse([CommentResponse.model_validate(comment) for comment in comments]),
    )
