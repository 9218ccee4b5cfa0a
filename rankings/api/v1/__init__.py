"""API v1 routes."""

from fastapi import APIRouter

from rankings.api.v1 import comments, companies, leaderboard, ratings, stats, vote

api_router = APIRouter()

api_router.include_router(stats.router, tags=["Platform"])
api_router.include_router(companies.router, prefix="/companies", tags=["Companies"])
api_router.include_router(vote.router, prefix="/vote", tags=["Vote"])
api_router.include_router(leaderboard.router, prefix="/leaderboard", tags=["Leaderboard"])
api_router.include_router(ratings.router, prefix="/ratings", tags=["Feedback"])
api_router.include_router(comments.router, prefix="/comments", tags=["Feedback"])

__all__ = ["api_router"]
