"""Database models."""

# Import all models in dependency order to ensure proper relationship initialization
from rankings.models.company import Company
from rankings.models.vote import Vote
from rankings.models.company_rating import CompanyRating
from rankings.models.company_comment import CompanyComment

# Export all models
__all__ = [
    "Company",
    "Vote",
    "CompanyRating",
    "CompanyComment",
]
