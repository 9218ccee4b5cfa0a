"""Company comment model."""

from sqlalchemy import Boolean, Column, ForeignKey, Index, Integer, String, Text

from rankings.db.base import Base


class CompanyComment(Base):
    """
    Free-text review of a company.

    Only the upvote counter ever changes after insert.
    """

    __tablename__ = "company_comments"

    company_id = Column(Integer, ForeignKey("companies.id", ondelete="CASCADE"), nullable=False)
    content = Column(Text, nullable=False)
    is_current_employee = Column(Boolean, nullable=False, default=False)
    session_id = Column(String(255))
    upvotes = Column(Integer, nullable=False, default=0)

    __table_args__ = (
        Index("idx_company_comments_company_upvotes", "company_id", "upvotes"),
    )

    def __repr__(self):
        return f"<CompanyComment {self.id} company={self.company_id}>"
