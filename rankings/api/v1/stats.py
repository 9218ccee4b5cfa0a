"""Platform counters and category listing."""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from rankings.api.deps import get_db
from rankings.core.codec import respond
from rankings.core.exceptions import store_errors
from rankings.schemas.common import CategoryCountResponse, CategoryListResponse, StatsResponse
from rankings.services import company_service

router = APIRouter()


@router.get("/stats")
async def get_stats(request: Request, db: AsyncSession = Depends(get_db)):
    """Totals across the platform and the distinct category names."""
    with store_errors("Failed to get stats"):
        companies, votes, ratings, comments = await company_service.get_platform_counts(db)
        categories = await company_service.list_category_names(db)

    return respond(
        request,
        StatsResponse(
            total_companies=companies,
            total_votes=votes,
            total_ratings=ratings,
            total_comments=comments,
            categories=categories,
        ),
    )


@router.get("/categories")
async def list_categories(request: Request, db: AsyncSession = Depends(get_db)):
    """Categories with their company counts, largest first."""
    with store_errors("Failed to get categories"):
        counts = await company_service.list_category_counts(db)

    return respond(
        request,
        CategoryListResponse(
            [CategoryCountResponse(category=category, count=count) for category, count in counts]
        ),
    )
