"""Criterion rating submission."""

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from rankings.api.deps import get_db
from rankings.core.codec import read_body, respond
from rankings.schemas.rating import RatingRequest, RatingResponse
from rankings.services import feedback_service

router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED)
async def submit_rating(request: Request, db: AsyncSession = Depends(get_db)):
    body = await read_body(request, RatingRequest)

    rating = await feedback_service.submit_rating(
        db,
        company_id=body.company_id,
        criterion=body.criterion,
        score=body.score,
        session_id=body.session_id,
    )

    return respond(request, RatingResponse.model_validate(rating), status_code=status.HTTP_201_CREATED)
