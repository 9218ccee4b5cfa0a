"""Matchup and vote endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from rankings.api.deps import get_db, get_matchup_selector, get_optional_user, get_vote_service
from rankings.core.codec import read_body, respond
from rankings.core.exceptions import store_errors
from rankings.core.security import VerifiedUser
from rankings.schemas.company import CompanyResponse, MatchupResponse
from rankings.schemas.vote import VoteRequest, VoteResponse
from rankings.services.matchup_service import MatchupSelector
from rankings.services.vote_service import VoteService
from rankings.utils.validators import normalize_category

router = APIRouter()


@router.get("/matchup")
async def get_matchup(
    request: Request,
    category: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db),
    selector: MatchupSelector = Depends(get_matchup_selector),
):
    """Two distinct companies to compare, in random presentation order."""
    with store_errors("Failed to get companies"):
        first, second = await selector.select_matchup(db, normalize_category(category))

    return respond(
        request,
        MatchupResponse(
            company1=CompanyResponse.from_row(first),
            company2=CompanyResponse.from_row(second),
        ),
    )


@router.post("")
async def submit_vote(
    request: Request,
    db: AsyncSession = Depends(get_db),
    service: VoteService = Depends(get_vote_service),
    user: Optional[VerifiedUser] = Depends(get_optional_user),
):
    """
    Record that ``winner_id`` beat ``loser_id``.

    Signed-in voters have the vote attributed to their token subject.
    """
    body = await read_body(request, VoteRequest)

    outcome = await service.submit_vote(
        db,
        winner_id=body.winner_id,
        loser_id=body.loser_id,
        session_id=body.session_id,
        user_id=user.sub if user else None,
    )

    return respond(
        request,
        VoteResponse(
            winner=CompanyResponse.from_row(outcome.winner),
            loser=CompanyResponse.from_row(outcome.loser),
            winner_elo_diff=outcome.update.winner_delta,
            loser_elo_diff=outcome.update.loser_delta,
        ),
    )
