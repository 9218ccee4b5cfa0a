"""Comment submission and upvotes."""

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from rankings.api.deps import get_db
from rankings.core.codec import read_body, respond
from rankings.schemas.comment import CommentRequest, CommentResponse
from rankings.services import feedback_service
from rankings.utils.validators import parse_comment_id

router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED)
async def submit_comment(request: Request, db: AsyncSession = Depends(get_db)):
    body = await read_body(request, CommentRequest)

    comment = await feedback_service.submit_comment(
        db,
        company_id=body.company_id,
        content=body.content,
        is_current_employee=body.is_current_employee,
        session_id=body.session_id,
    )

    return respond(request, CommentResponse.model_validate(comment), status_code=status.HTTP_201_CREATED)


@router.post("/{comment_id}/upvote")
async def upvote_comment(request: Request, comment_id: str, db: AsyncSession = Depends(get_db)):
    """Add one upvote and return the updated comment."""
    comment = await feedback_service.upvote_comment(db, parse_comment_id(comment_id))
    return respond(request, CommentResponse.model_validate(comment))
