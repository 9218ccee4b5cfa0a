"""Company reads and platform counters against the store."""

from typing import Dict, Iterable, List, Optional, Tuple

from sqlalchemy import and_, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from rankings.models.company import Company
from rankings.models.company_comment import CompanyComment
from rankings.models.company_rating import CompanyRating
from rankings.models.vote import Vote

# Descending rating, then descending comparisons; id keeps the order total.
RANKING_ORDER = (Company.elo_rating.desc(), Company.total_votes.desc(), Company.id.asc())


LIKE_ESCAPE = "\\"


def _substring_pattern(search: str) -> str:
    """LIKE pattern matching the lower-cased ``search`` literally anywhere."""
    escaped = (
        search.lower()
        .replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


def _category_filter(query, category: Optional[str]):
    if category:
        return query.where(Company.category == category)
    return query


async def list_companies(
    db: AsyncSession,
    category: Optional[str] = None,
    search: Optional[str] = None,
) -> List[Company]:
    """Companies in ranking order, optionally filtered by category and name/description substring."""
    query = _category_filter(select(Company), category)

    if search:
        pattern = _substring_pattern(search)
        query = query.where(
            or_(
                func.lower(Company.name).like(pattern, escape=LIKE_ESCAPE),
                func.lower(Company.description).like(pattern, escape=LIKE_ESCAPE),
            )
        )

    result = await db.execute(query.order_by(*RANKING_ORDER))
    return list(result.scalars().all())


async def get_company_by_slug(db: AsyncSession, slug: str) -> Optional[Company]:
    result = await db.execute(select(Company).where(Company.slug == slug))
    return result.scalar_one_or_none()


async def get_company_id_by_slug(db: AsyncSession, slug: str) -> Optional[int]:
    return await db.scalar(select(Company.id).where(Company.slug == slug))


async def company_exists(db: AsyncSession, company_id: int) -> bool:
    found = await db.scalar(select(Company.id).where(Company.id == company_id))
    return found is not None


async def get_company_rank(db: AsyncSession, company: Company) -> int:
    """1-based position of ``company`` in the global ranking order."""
    ahead = await db.scalar(
        select(func.count())
        .select_from(Company)
        .where(
            or_(
                Company.elo_rating > company.elo_rating,
                and_(
                    Company.elo_rating == company.elo_rating,
                    Company.total_votes > company.total_votes,
                ),
            )
        )
    )
    return (ahead or 0) + 1


async def list_candidate_ids(db: AsyncSession, category: Optional[str] = None) -> List[int]:
    """Ids eligible for a matchup, in a stable order so seeded draws are reproducible."""
    query = _category_filter(select(Company.id), category).order_by(Company.id)
    result = await db.execute(query)
    return list(result.scalars().all())


async def get_companies_by_ids(db: AsyncSession, company_ids: Iterable[int]) -> Dict[int, Company]:
    result = await db.execute(select(Company).where(Company.id.in_(list(company_ids))))
    return {company.id: company for company in result.scalars().all()}


async def count_companies(db: AsyncSession, category: Optional[str] = None) -> int:
    query = _category_filter(select(func.count()).select_from(Company), category)
    return await db.scalar(query) or 0


async def get_platform_counts(db: AsyncSession) -> Tuple[int, int, int, int]:
    """(companies, votes, ratings, comments) read in one round trip."""
    row = (
        await db.execute(
            select(
                select(func.count()).select_from(Company).scalar_subquery(),
                select(func.count()).select_from(Vote).scalar_subquery(),
                select(func.count()).select_from(CompanyRating).scalar_subquery(),
                select(func.count()).select_from(CompanyComment).scalar_subquery(),
            )
        )
    ).one()
    return tuple(int(value or 0) for value in row)


async def list_category_names(db: AsyncSession) -> List[str]:
    result = await db.execute(select(Company.category).distinct().order_by(Company.category))
    return list(result.scalars().all())


async def list_category_counts(db: AsyncSession) -> List[Tuple[str, int]]:
    """(category, company count) ordered by count desc, then name."""
    company_count = func.count(Company.id).label("count")
    result = await db.execute(
        select(Company.category, company_count)
        .group_by(Company.category)
        .order_by(company_count.desc(), Company.category.asc())
    )
    return [(category, count) for category, count in result.all()]
