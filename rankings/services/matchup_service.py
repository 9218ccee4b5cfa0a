"""Matchup selection.

Two independent random decisions: which two companies are drawn, and
which of them is shown first. Each has its own generator so either can
be seeded or stubbed on its own.
"""

import random
from typing import Optional, Sequence, Tuple, TypeVar

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from rankings.core.exceptions import InsufficientCandidates
from rankings.models.company import Company
from rankings.services.company_service import get_companies_by_ids, list_candidate_ids

logger = structlog.get_logger(__name__)

T = TypeVar("T")

SWAP_PROBABILITY = 0.5


class MatchupSelector:
    """Draws two distinct companies uniformly and randomizes their order."""

    def __init__(
        self,
        draw_rng: Optional[random.Random] = None,
        order_rng: Optional[random.Random] = None,
    ):
        self.draw_rng = draw_rng or random.Random()
        self.order_rng = order_rng or random.Random()

    def draw(self, candidates: Sequence[T]) -> Tuple[T, T]:
        """Two distinct candidates, uniformly at random."""
        if len(candidates) < 2:
            raise InsufficientCandidates("Not enough companies for matchup")
        first, second = self.draw_rng.sample(list(candidates), 2)
        return first, second

    def order(self, pair: Tuple[T, T]) -> Tuple[T, T]:
        """Swap the pair with probability 1/2, independently of the draw."""
        first, second = pair
        if self.order_rng.random() < SWAP_PROBABILITY:
            return second, first
        return first, second

    def select_pair(self, candidates: Sequence[T]) -> Tuple[T, T]:
        return self.order(self.draw(candidates))

    async def select_matchup(
        self, db: AsyncSession, category: Optional[str] = None
    ) -> Tuple[Company, Company]:
        """Two companies from ``category`` (or all) in presentation order."""
        candidate_ids = await list_candidate_ids(db, category)
        first_id, second_id = self.select_pair(candidate_ids)

        companies = await get_companies_by_ids(db, (first_id, second_id))
        if first_id not in companies or second_id not in companies:
            # Deleted between the id scan and the row fetch
            logger.warning("matchup_candidate_vanished", first_id=first_id, second_id=second_id)
            raise InsufficientCandidates("Not enough companies for matchup")

        return companies[first_id], companies[second_id]


matchup_selector = MatchupSelector()
