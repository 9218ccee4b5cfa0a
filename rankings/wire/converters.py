"""
Schema <-> protobuf conversion, one pair of functions per payload type.

Nullable scalars travel as wrapper messages: a set wrapper means present
(even when it holds "" or 0), an unset wrapper means ``None``. Repeated
fields always decode to a list, never ``None``.
"""

from datetime import datetime, timezone
from typing import Any, Callable, Dict, NamedTuple, Optional, Type

from google.protobuf.message import Message

from rankings.schemas.comment import CommentListResponse, CommentRequest, CommentResponse
from rankings.schemas.common import (
    CategoryCountResponse,
    CategoryListResponse,
    ErrorResponse,
    HealthResponse,
    StatsResponse,
)
from rankings.schemas.company import (
    CompanyListResponse,
    CompanyResponse,
    LeaderboardResponse,
    MatchupResponse,
)
from rankings.schemas.rating import (
    AggregatedRatingListResponse,
    AggregatedRatingResponse,
    RatingRequest,
    RatingResponse,
)
from rankings.schemas.vote import (
    UserLeaderboardEntry,
    UserLeaderboardResponse,
    VoteRequest,
    VoteResponse,
)
from rankings.wire import messages as pb


# --- optional-field helpers -------------------------------------------------

def _set_optional(message: Message, field: str, value: Optional[Any]) -> None:
    if value is None:
        message.ClearField(field)
        return
    wrapper = getattr(message, field)
    wrapper.SetInParent()
    wrapper.value = value


def _get_optional(message: Message, field: str) -> Optional[Any]:
    if message.HasField(field):
        return getattr(message, field).value
    return None


def _set_timestamp(message: Message, field: str, value: datetime) -> None:
    getattr(message, field).FromDatetime(value)


def _get_timestamp(message: Message, field: str) -> datetime:
    return getattr(message, field).ToDatetime(tzinfo=timezone.utc)


# --- companies ----------------------------------------------------------------

COMPANY_OPTIONAL_FIELDS = (
    "logo_url",
    "description",
    "website",
    "founded_year",
    "hq_location",
    "employee_range",
    "funding_stage",
    "rank",
)


def company_to_proto(company: CompanyResponse) -> Message:
    message = pb.Company(
        id=company.id,
        name=company.name,
        slug=company.slug,
        category=company.category,
        tags=list(company.tags or []),
        elo_rating=company.elo_rating,
        total_votes=company.total_votes,
        wins=company.wins,
        losses=company.losses,
    )
    for field in COMPANY_OPTIONAL_FIELDS:
        _set_optional(message, field, getattr(company, field))
    _set_timestamp(message, "created_at", company.created_at)
    _set_timestamp(message, "updated_at", company.updated_at)
    return message


def company_from_proto(message: Message) -> CompanyResponse:
    return CompanyResponse(
        id=message.id,
        name=message.name,
        slug=message.slug,
        category=message.category,
        tags=list(message.tags),
        elo_rating=message.elo_rating,
        total_votes=message.total_votes,
        wins=message.wins,
        losses=message.losses,
        created_at=_get_timestamp(message, "created_at"),
        updated_at=_get_timestamp(message, "updated_at"),
        **{field: _get_optional(message, field) for field in COMPANY_OPTIONAL_FIELDS},
    )


def company_list_to_proto(companies: CompanyListResponse) -> Message:
    return pb.CompanyList(companies=[company_to_proto(c) for c in companies.root])


def company_list_from_proto(message: Message) -> CompanyListResponse:
    return CompanyListResponse([company_from_proto(c) for c in message.companies])


def matchup_to_proto(matchup: MatchupResponse) -> Message:
    return pb.MatchupPair(
        company1=company_to_proto(matchup.company1),
        company2=company_to_proto(matchup.company2),
    )


def matchup_from_proto(message: Message) -> MatchupResponse:
    return MatchupResponse(
        company1=company_from_proto(message.company1),
        company2=company_from_proto(message.company2),
    )


def leaderboard_to_proto(leaderboard: LeaderboardResponse) -> Message:
    return pb.LeaderboardResponse(
        companies=[company_to_proto(c) for c in leaderboard.companies],
        total_count=leaderboard.total_count,
        page=leaderboard.page,
        page_size=leaderboard.page_size,
    )


def leaderboard_from_proto(message: Message) -> LeaderboardResponse:
    return LeaderboardResponse(
        companies=[company_from_proto(c) for c in message.companies],
        total_count=message.total_count,
        page=message.page,
        page_size=message.page_size,
    )


# --- votes --------------------------------------------------------------------

def vote_request_to_proto(request: VoteRequest) -> Message:
    message = pb.VoteRequest(winner_id=request.winner_id, loser_id=request.loser_id)
    _set_optional(message, "session_id", request.session_id)
    return message


def vote_request_from_proto(message: Message) -> VoteRequest:
    return VoteRequest(
        winner_id=message.winner_id,
        loser_id=message.loser_id,
        session_id=_get_optional(message, "session_id"),
    )


def vote_response_to_proto(response: VoteResponse) -> Message:
    return pb.VoteResponse(
        winner=company_to_proto(response.winner),
        loser=company_to_proto(response.loser),
        winner_elo_diff=response.winner_elo_diff,
        loser_elo_diff=response.loser_elo_diff,
    )


def vote_response_from_proto(message: Message) -> VoteResponse:
    return VoteResponse(
        winner=company_from_proto(message.winner),
        loser=company_from_proto(message.loser),
        winner_elo_diff=message.winner_elo_diff,
        loser_elo_diff=message.loser_elo_diff,
    )


def user_leaderboard_to_proto(leaderboard: UserLeaderboardResponse) -> Message:
    return pb.UserLeaderboardResponse(
        users=[
            pb.UserLeaderboardEntry(user_id=u.user_id, total_votes=u.total_votes, rank=u.rank)
            for u in leaderboard.users
        ],
        total_count=leaderboard.total_count,
        page=leaderboard.page,
        page_size=leaderboard.page_size,
    )


def user_leaderboard_from_proto(message: Message) -> UserLeaderboardResponse:
    return UserLeaderboardResponse(
        users=[
            UserLeaderboardEntry(user_id=u.user_id, total_votes=u.total_votes, rank=u.rank)
            for u in message.users
        ],
        total_count=message.total_count,
        page=message.page,
        page_size=message.page_size,
    )


# --- ratings ------------------------------------------------------------------

def rating_request_to_proto(request: RatingRequest) -> Message:
    message = pb.RatingRequest(
        company_id=request.company_id,
        criterion=request.criterion,
        score=request.score,
    )
    _set_optional(message, "session_id", request.session_id)
    return message


def rating_request_from_proto(message: Message) -> RatingRequest:
    return RatingRequest(
        company_id=message.company_id,
        criterion=message.criterion,
        score=message.score,
        session_id=_get_optional(message, "session_id"),
    )


def rating_to_proto(rating: RatingResponse) -> Message:
    message = pb.CompanyRating(
        id=rating.id,
        company_id=rating.company_id,
        criterion=rating.criterion,
        score=rating.score,
    )
    _set_optional(message, "session_id", rating.session_id)
    _set_timestamp(message, "created_at", rating.created_at)
    return message


def rating_from_proto(message: Message) -> RatingResponse:
    return RatingResponse(
        id=message.id,
        company_id=message.company_id,
        criterion=message.criterion,
        score=message.score,
        session_id=_get_optional(message, "session_id"),
        created_at=_get_timestamp(message, "created_at"),
    )


def aggregated_ratings_to_proto(ratings: AggregatedRatingListResponse) -> Message:
    return pb.AggregatedRatingList(
        ratings=[
            pb.AggregatedRating(
                criterion=r.criterion,
                average_score=r.average_score,
                total_ratings=r.total_ratings,
            )
            for r in ratings.root
        ]
    )


def aggregated_ratings_from_proto(message: Message) -> AggregatedRatingListResponse:
    return AggregatedRatingListResponse(
        [
            AggregatedRatingResponse(
                criterion=r.criterion,
                average_score=r.average_score,
                total_ratings=r.total_ratings,
            )
            for r in message.ratings
        ]
    )


# --- comments -----------------------------------------------------------------

def comment_request_to_proto(request: CommentRequest) -> Message:
    message = pb.CommentRequest(
        company_id=request.company_id,
        content=request.content,
        is_current_employee=request.is_current_employee,
    )
    _set_optional(message, "session_id", request.session_id)
    return message


def comment_request_from_proto(message: Message) -> CommentRequest:
    return CommentRequest(
        company_id=message.company_id,
        content=message.content,
        is_current_employee=message.is_current_employee,
        session_id=_get_optional(message, "session_id"),
    )


def comment_to_proto(comment: CommentResponse) -> Message:
    message = pb.CompanyComment(
        id=comment.id,
        company_id=comment.company_id,
        content=comment.content,
        is_current_employee=comment.is_current_employee,
        upvotes=comment.upvotes,
    )
    _set_optional(message, "session_id", comment.session_id)
    _set_timestamp(message, "created_at", comment.created_at)
    return message


def comment_from_proto(message: Message) -> CommentResponse:
    return CommentResponse(
        id=message.id,
        company_id=message.company_id,
        content=message.content,
        is_current_employee=message.is_current_employee,
        session_id=_get_optional(message, "session_id"),
        upvotes=message.upvotes,
        created_at=_get_timestamp(message, "created_at"),
    )


def comment_list_to_proto(comments: CommentListResponse) -> Message:
    return pb.CommentList(comments=[comment_to_proto(c) for c in comments.root])


def comment_list_from_proto(message: Message) -> CommentListResponse:
    return CommentListResponse([comment_from_proto(c) for c in message.comments])


# --- platform -----------------------------------------------------------------

def categories_to_proto(categories: CategoryListResponse) -> Message:
    return pb.CategoryCountList(
        categories=[pb.CategoryCount(category=c.category, count=c.count) for c in categories.root]
    )


def categories_from_proto(message: Message) -> CategoryListResponse:
    return CategoryListResponse(
        [CategoryCountResponse(category=c.category, count=c.count) for c in message.categories]
    )


def stats_to_proto(stats: StatsResponse) -> Message:
    return pb.StatsResponse(
        total_companies=stats.total_companies,
        total_votes=stats.total_votes,
        total_ratings=stats.total_ratings,
        total_comments=stats.total_comments,
        categories=list(stats.categories),
    )


def stats_from_proto(message: Message) -> StatsResponse:
    return StatsResponse(
        total_companies=message.total_companies,
        total_votes=message.total_votes,
        total_ratings=message.total_ratings,
        total_comments=message.total_comments,
        categories=list(message.categories),
    )


def health_to_proto(health: HealthResponse) -> Message:
    return pb.HealthResponse(status=health.status, database=health.database)


def health_from_proto(message: Message) -> HealthResponse:
    return HealthResponse(status=message.status, database=message.database)


def error_to_proto(error: ErrorResponse) -> Message:
    return pb.ErrorResponse(error=error.error)


def error_from_proto(message: Message) -> ErrorResponse:
    return ErrorResponse(error=message.error)


# --- registry -----------------------------------------------------------------

class Converter(NamedTuple):
    message: Type[Message]
    to_proto: Callable[[Any], Message]
    from_proto: Callable[[Message], Any]


CONVERTERS: Dict[type, Converter] = {
    CompanyResponse: Converter(pb.Company, company_to_proto, company_from_proto),
    CompanyListResponse: Converter(pb.CompanyList, company_list_to_proto, company_list_from_proto),
    MatchupResponse: Converter(pb.MatchupPair, matchup_to_proto, matchup_from_proto),
    LeaderboardResponse: Converter(pb.LeaderboardResponse, leaderboard_to_proto, leaderboard_from_proto),
    VoteRequest: Converter(pb.VoteRequest, vote_request_to_proto, vote_request_from_proto),
    VoteResponse: Converter(pb.VoteResponse, vote_response_to_proto, vote_response_from_proto),
    UserLeaderboardResponse: Converter(
        pb.UserLeaderboardResponse, user_leaderboard_to_proto, user_leaderboard_from_proto
    ),
    RatingRequest: Converter(pb.RatingRequest, rating_request_to_proto, rating_request_from_proto),
    RatingResponse: Converter(pb.CompanyRating, rating_to_proto, rating_from_proto),
    AggregatedRatingListResponse: Converter(
        pb.AggregatedRatingList, aggregated_ratings_to_proto, aggregated_ratings_from_proto
    ),
    CommentRequest: Converter(pb.CommentRequest, comment_request_to_proto, comment_request_from_proto),
    CommentResponse: Converter(pb.CompanyComment, comment_to_proto, comment_from_proto),
    CommentListResponse: Converter(pb.CommentList, comment_list_to_proto, comment_list_from_proto),
    CategoryListResponse: Converter(pb.CategoryCountList, categories_to_proto, categories_from_proto),
    StatsResponse: Converter(pb.StatsResponse, stats_to_proto, stats_from_proto),
    HealthResponse: Converter(pb.HealthResponse, health_to_proto, health_from_proto),
    ErrorResponse: Converter(pb.ErrorResponse, error_to_proto, error_from_proto),
}


def converter_for(schema: type) -> Converter:
    try:
        return CONVERTERS[schema]
    except KeyError:
        raise TypeError(f"No protobuf mapping for {schema.__name__}") from None
