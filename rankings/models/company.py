"""Company model."""

from sqlalchemy import Column, DateTime, Index, Integer, String, Text, JSON
from sqlalchemy.dialects.postgresql import JSONB

from rankings.config import settings
from rankings.db.base import Base, utcnow


class Company(Base):
    """A ranked company and its rating state."""

    __tablename__ = "companies"

    name = Column(String(255), nullable=False)
    slug = Column(String(255), nullable=False, unique=True, index=True)
    logo_url = Column(String(500))
    description = Column(Text)
    website = Column(String(500))
    category = Column(String(100), nullable=False, index=True)
    tags = Column(JSON().with_variant(JSONB(), "postgresql"), nullable=False, default=list)

    # Profile
    founded_year = Column(Integer)
    hq_location = Column(String(255))
    employee_range = Column(String(50))  # 1-10, 11-50, 100-500, ...
    funding_stage = Column(String(50))  # Seed, Series A, Public, ...

    # Rating state
    elo_rating = Column(Integer, nullable=False, default=settings.DEFAULT_ELO_RATING)
    total_votes = Column(Integer, nullable=False, default=0)
    wins = Column(Integer, nullable=False, default=0)
    losses = Column(Integer, nullable=False, default=0)

    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    __table_args__ = (
        Index("idx_companies_leaderboard", "elo_rating", "total_votes"),
        Index("idx_companies_category_leaderboard", "category", "elo_rating", "total_votes"),
    )

    def __repr__(self):
        return f"<Company {self.slug} elo={self.elo_rating}>"
