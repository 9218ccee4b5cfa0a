"""Vote model."""

from sqlalchemy import CheckConstraint, Column, ForeignKey, Index, Integer, String

from rankings.db.base import Base


class Vote(Base):
    """
    Append-only record of a head-to-head outcome.

    Rating deltas are applied to the companies at submission time; this
    row is the audit trail and is never updated.
    """

    __tablename__ = "votes"

    winner_id = Column(Integer, ForeignKey("companies.id", ondelete="CASCADE"), nullable=False)
    loser_id = Column(Integer, ForeignKey("companies.id", ondelete="CASCADE"), nullable=False)
    session_id = Column(String(255))
    user_id = Column(String(255))  # Verified token subject, when the voter was signed in

    __table_args__ = (
        CheckConstraint("winner_id <> loser_id", name="ck_votes_distinct_companies"),
        Index("idx_votes_user", "user_id"),
        Index("idx_votes_winner", "winner_id"),
        Index("idx_votes_loser", "loser_id"),
    )

    def __repr__(self):
        return f"<Vote winner={self.winner_id} loser={self.loser_id}>"
