"""Company and voter leaderboards."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from rankings.api.deps import get_db
from rankings.core.codec import respond
from rankings.core.exceptions import store_errors
from rankings.schemas.company import CompanyResponse, LeaderboardResponse
from rankings.schemas.vote import UserLeaderboardEntry, UserLeaderboardResponse
from rankings.services import leaderboard_service
from rankings.utils.validators import normalize_category

router = APIRouter()


# page and page_size are taken as raw strings: bad values fall back to defaults instead of 422
@router.get("")
async def get_leaderboard(
    request: Request,
    category: Optional[str] = Query(None),
    page: Optional[str] = Query(None),
    page_size: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db),
):
    """One page of companies in ranking order."""
    with store_errors("Failed to get leaderboard"):
        result = await leaderboard_service.paginate(
            db, category=normalize_category(category), page=page, page_size=page_size
        )

    return respond(
        request,
        LeaderboardResponse(
            companies=[CompanyResponse.from_row(entry.company, rank=entry.rank) for entry in result.entries],
            total_count=result.total_count,
            page=result.page,
            page_size=result.page_size,
        ),
    )


@router.get("/users")
async def get_user_leaderboard(
    request: Request,
    page: Optional[str] = Query(None),
    page_size: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db),
):
    """Signed-in voters ranked by votes cast."""
    with store_errors("Failed to get user leaderboard"):
        result = await leaderboard_service.paginate_voters(db, page=page, page_size=page_size)

    return respond(
        request,
        UserLeaderboardResponse(
            users=[
                UserLeaderboardEntry(user_id=row.user_id, total_votes=row.total_votes, rank=row.rank)
                for row in result.entries
            ],
            total_count=result.total_count,
            page=result.page,
            page_size=result.page_size,
        ),
    )
