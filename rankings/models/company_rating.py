"""Per-criterion company rating model."""

from sqlalchemy import CheckConstraint, Column, ForeignKey, Index, Integer, String

from rankings.db.base import Base


class CompanyRating(Base):
    """A 1-5 score for one criterion of one company."""

    __tablename__ = "company_ratings"

    company_id = Column(Integer, ForeignKey("companies.id", ondelete="CASCADE"), nullable=False)
    criterion = Column(String(50), nullable=False)
    score = Column(Integer, nullable=False)
    session_id = Column(String(255))

    __table_args__ = (
        CheckConstraint("score >= 1 AND score <= 5", name="ck_company_ratings_score"),
        Index("idx_company_ratings_company_criterion", "company_id", "criterion"),
    )

    def __repr__(self):
        return f"<CompanyRating company={self.company_id} {self.criterion}={self.score}>"
