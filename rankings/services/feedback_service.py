"""Criterion ratings and comments attached to a company."""

from typing import List, Optional, Tuple

import structlog
from sqlalchemy import Float, cast, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from rankings.config import settings
from rankings.core.exceptions import NotFound, store_errors
from rankings.models.company_comment import CompanyComment
from rankings.models.company_rating import CompanyRating
from rankings.services.company_service import company_exists
from rankings.utils.validators import (
    clean_comment_content,
    require_storable_id,
    validate_criterion,
    validate_score,
    validate_session_id,
)

logger = structlog.get_logger(__name__)


async def _require_company(db: AsyncSession, company_id: int) -> None:
    require_storable_id(company_id, "Company not found")
    with store_errors("Failed to look up company"):
        found = await company_exists(db, company_id)
    if not found:
        raise NotFound("Company not found")


async def submit_rating(
    db: AsyncSession,
    company_id: int,
    criterion: str,
    score: int,
    session_id: Optional[str] = None,
) -> CompanyRating:
    """Validate and store one criterion rating."""
    validate_score(score)
    validate_criterion(criterion)
    validate_session_id(session_id)
    await _require_company(db, company_id)

    rating = CompanyRating(
        company_id=company_id,
        criterion=criterion,
        score=score,
        session_id=session_id,
    )
    db.add(rating)
    with store_errors("Failed to submit rating"):
        await db.commit()

    logger.info("rating_submitted", company_id=company_id, criterion=criterion, score=score)
    return rating


async def aggregate_ratings(db: AsyncSession, company_id: int) -> List[Tuple[str, float, int]]:
    """(criterion, average score, number of ratings) for each rated criterion."""
    result = await db.execute(
        select(
            CompanyRating.criterion,
            cast(func.avg(CompanyRating.score), Float),
            func.count(CompanyRating.id),
        )
        .where(CompanyRating.company_id == company_id)
        .group_by(CompanyRating.criterion)
        .order_by(CompanyRating.criterion)
    )
    return [(criterion, float(average), int(total)) for criterion, average, total in result.all()]


async def submit_comment(
    db: AsyncSession,
    company_id: int,
    content: str,
    is_current_employee: bool = False,
    session_id: Optional[str] = None,
) -> CompanyComment:
    """Validate and store a comment; surrounding whitespace is stripped."""
    cleaned = clean_comment_content(content)
    validate_session_id(session_id)
    await _require_company(db, company_id)

    comment = CompanyComment(
        company_id=company_id,
        content=cleaned,
        is_current_employee=is_current_employee,
        session_id=session_id,
        upvotes=0,
    )
    db.add(comment)
    with store_errors("Failed to submit comment"):
        await db.commit()

    logger.info("comment_submitted", company_id=company_id, comment_id=comment.id)
    return comment


async def list_comments(db: AsyncSession, company_id: int) -> List[CompanyComment]:
    """Most upvoted first, newest first within ties."""
    result = await db.execute(
        select(CompanyComment)
        .where(CompanyComment.company_id == company_id)
        .order_by(
            CompanyComment.upvotes.desc(),
            CompanyComment.created_at.desc(),
            CompanyComment.id.desc(),
        )
        .limit(settings.COMMENTS_LIST_LIMIT)
    )
    return list(result.scalars().all())


async def upvote_comment(db: AsyncSession, comment_id: int) -> CompanyComment:
    """Increment upvotes by one in a single statement."""
    with store_errors("Failed to upvote comment"):
        result = await db.execute(
            update(CompanyComment)
            .where(CompanyComment.id == comment_id)
            .values(upvotes=CompanyComment.upvotes + 1)
            .returning(CompanyComment)
            .execution_options(synchronize_session=False, populate_existing=True)
        )
        comment = result.scalar_one_or_none()

    if comment is None:
        raise NotFound("Comment not found")

    with store_errors("Failed to upvote comment"):
        await db.commit()

    return comment
