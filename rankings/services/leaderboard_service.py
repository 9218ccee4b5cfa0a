"""Leaderboard pagination.

Offsets are computed from a 1-based page number. Out-of-range paging
parameters are clamped to defaults rather than rejected, and a page past
the end is simply empty while ``total_count`` still reports the size of
the filtered set.
"""

from typing import Any, List, NamedTuple, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from rankings.config import settings
from rankings.models.company import Company
from rankings.models.vote import Vote
from rankings.services.company_service import RANKING_ORDER, count_companies

DEFAULT_PAGE = 1


class PageRequest(NamedTuple):
    page: int
    page_size: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    def rank_at(self, position: int) -> int:
        """Rank of the row at 0-based ``position`` within this page."""
        return self.offset + position + 1


class RankedCompany(NamedTuple):
    company: Company
    rank: int


class LeaderboardPage(NamedTuple):
    entries: List[RankedCompany]
    total_count: int
    page: int
    page_size: int


class VoterRow(NamedTuple):
    user_id: str
    total_votes: int
    rank: int


class VoterPage(NamedTuple):
    entries: List[VoterRow]
    total_count: int
    page: int
    page_size: int


def _positive_int(raw: Any) -> Optional[int]:
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return None
    return value if value > 0 else None


def normalize_page(raw: Any) -> int:
    """Page number, defaulting to 1 when missing, unparseable or non-positive."""
    value = _positive_int(raw)
    return value if value is not None else DEFAULT_PAGE


def normalize_page_size(raw: Any) -> int:
    """Page size in [1, MAX_PAGE_SIZE], defaulting when outside it."""
    value = _positive_int(raw)
    if value is None or value > settings.MAX_PAGE_SIZE:
        return settings.DEFAULT_PAGE_SIZE
    return value


def page_request(page: Any = None, page_size: Any = None) -> PageRequest:
    return PageRequest(page=normalize_page(page), page_size=normalize_page_size(page_size))


async def paginate(
    db: AsyncSession,
    category: Optional[str] = None,
    page: Any = None,
    page_size: Any = None,
) -> LeaderboardPage:
    """One window of companies in ranking order, plus the filtered total."""
    window = page_request(page, page_size)

    query = select(Company)
    if category:
        query = query.where(Company.category == category)
    query = query.order_by(*RANKING_ORDER).limit(window.page_size).offset(window.offset)

    result = await db.execute(query)
    companies = result.scalars().all()
    total_count = await count_companies(db, category)

    return LeaderboardPage(
        entries=[RankedCompany(company, window.rank_at(i)) for i, company in enumerate(companies)],
        total_count=total_count,
        page=window.page,
        page_size=window.page_size,
    )


async def paginate_voters(db: AsyncSession, page: Any = None, page_size: Any = None) -> VoterPage:
    """Signed-in voters ranked by number of votes cast."""
    window = page_request(page, page_size)

    vote_count = func.count(Vote.id).label("total_votes")
    result = await db.execute(
        select(Vote.user_id, vote_count)
        .where(Vote.user_id.isnot(None))
        .group_by(Vote.user_id)
        .order_by(vote_count.desc(), Vote.user_id.asc())
        .limit(window.page_size)
        .offset(window.offset)
    )
    rows = result.all()

    total_count = await db.scalar(
        select(func.count(func.distinct(Vote.user_id))).where(Vote.user_id.isnot(None))
    )

    return VoterPage(
        entries=[
            VoterRow(user_id=user_id, total_votes=int(total), rank=window.rank_at(i))
            for i, (user_id, total) in enumerate(rows)
        ],
        total_count=total_count or 0,
        page=window.page,
        page_size=window.page_size,
    )
