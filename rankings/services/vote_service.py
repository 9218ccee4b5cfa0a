"""Vote submission: lock, rate, commit, then record the audit row."""

from typing import Dict, NamedTuple, Optional

import structlog
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from rankings.core.exceptions import NotFound, store_errors
from rankings.db.base import utcnow
from rankings.models.company import Company
from rankings.models.vote import Vote
from rankings.services.elo import EloUpdate, compute_update
from rankings.utils.validators import (
    require_storable_id,
    validate_distinct_companies,
    validate_session_id,
)

logger = structlog.get_logger(__name__)


class VoteOutcome(NamedTuple):
    winner: Company
    loser: Company
    update: EloUpdate


class VoteService:
    """
    Applies a single head-to-head vote.

    Both company rows are locked in ascending id order before their
    ratings are read, so concurrent votes on the same company serialize
    in the store instead of overwriting each other's deltas. The rating
    change is committed first; the vote row is a separate best-effort
    insert whose failure is logged and does not undo the ratings.
    """

    async def submit_vote(
        self,
        db: AsyncSession,
        winner_id: int,
        loser_id: int,
        session_id: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> VoteOutcome:
        validate_distinct_companies(winner_id, loser_id)
        validate_session_id(session_id)
        require_storable_id(winner_id, "Winner company not found")
        require_storable_id(loser_id, "Loser company not found")

        with store_errors("Failed to fetch companies"):
            locked = await self._lock_companies(db, winner_id, loser_id)

        winner = locked.get(winner_id)
        if winner is None:
            raise NotFound("Winner company not found")
        loser = locked.get(loser_id)
        if loser is None:
            raise NotFound("Loser company not found")

        update = compute_update(winner.elo_rating, loser.elo_rating)
        now = utcnow()

        winner.elo_rating = update.new_winner_rating
        winner.total_votes += 1
        winner.wins += 1
        winner.updated_at = now

        loser.elo_rating = update.new_loser_rating
        loser.total_votes += 1
        loser.losses += 1
        loser.updated_at = now

        with store_errors("Failed to update ratings"):
            await db.commit()

        logger.info(
            "vote_applied",
            winner_id=winner_id,
            loser_id=loser_id,
            winner_elo=update.new_winner_rating,
            loser_elo=update.new_loser_rating,
            winner_delta=update.winner_delta,
            loser_delta=update.loser_delta,
        )

        await self._record_vote(db, winner_id, loser_id, session_id, user_id)

        with store_errors("Failed to fetch updated companies"):
            await db.refresh(winner)
            await db.refresh(loser)

        return VoteOutcome(winner=winner, loser=loser, update=update)

    async def _lock_companies(self, db: AsyncSession, *company_ids: int) -> Dict[int, Company]:
        result = await db.execute(
            select(Company)
            .where(Company.id.in_(company_ids))
            .order_by(Company.id)
            .with_for_update()
        )
        return {company.id: company for company in result.scalars().all()}

    async def _record_vote(
        self,
        db: AsyncSession,
        winner_id: int,
        loser_id: int,
        session_id: Optional[str],
        user_id: Optional[str],
    ) -> None:
        try:
            await self._insert_vote(db, winner_id, loser_id, session_id, user_id)
        except SQLAlchemyError as e:
            await db.rollback()
            logger.warning(
                "vote_audit_insert_failed",
                winner_id=winner_id,
                loser_id=loser_id,
                error=str(e),
            )

    async def _insert_vote(
        self,
        db: AsyncSession,
        winner_id: int,
        loser_id: int,
        session_id: Optional[str],
        user_id: Optional[str],
    ) -> None:
        db.add(
            Vote(
                winner_id=winner_id,
                loser_id=loser_id,
                session_id=session_id,
                user_id=user_id,
            )
        )
        await db.commit()


vote_service = VoteService()
