"""End-to-end tests for matchups and vote submission."""

import pytest
from jose import jwt
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError

from rankings.api.deps import get_matchup_selector
from rankings.main import app
from rankings.models import Vote
from rankings.services.matchup_service import MatchupSelector
from rankings.services.vote_service import VoteService
from rankings.utils.constants import CONTENT_TYPE_PROTOBUF
from rankings.wire import messages as pb


async def count_votes(session_factory) -> int:
    async with session_factory() as session:
        return await session.scalar(select(func.count()).select_from(Vote))


async def test_equal_ratings_move_sixteen_points(client, make_company, fetch_company):
    a = await make_company()
    b = await make_company()

    response = await client.post("/api/v1/vote", json={"winner_id": a.id, "loser_id": b.id})

    assert response.status_code == 200
    body = response.json()
    assert body["winner_elo_diff"] == 16
    assert body["loser_elo_diff"] == -16
    assert body["winner"]["elo_rating"] == 1516
    assert body["loser"]["elo_rating"] == 1484
    assert body["winner"]["rank"] is None

    winner = await fetch_company(a.id)
    loser = await fetch_company(b.id)
    assert (winner.elo_rating, winner.wins, winner.losses, winner.total_votes) == (1516, 1, 0, 1)
    assert (loser.elo_rating, loser.wins, loser.losses, loser.total_votes) == (1484, 0, 1, 1)


async def test_consecutive_votes_build_on_committed_ratings(client, make_company, fetch_company):
    a = await make_company()
    b = await make_company()

    await client.post("/api/v1/vote", json={"winner_id": a.id, "loser_id": b.id})
    response = await client.post("/api/v1/vote", json={"winner_id": a.id, "loser_id": b.id})

    # 1516 vs 1484 -> +14 / -14 after truncation
    assert response.json()["winner"]["elo_rating"] == 1530
    assert (await fetch_company(a.id)).total_votes == 2


async def test_vote_against_self_is_rejected_without_writes(client, make_company, fetch_company, session_factory):
    a = await make_company()

    response = await client.post("/api/v1/vote", json={"winner_id": a.id, "loser_id": a.id})

    assert response.status_code == 400
    assert response.json() == {"error": "Winner and loser must be different"}
    company = await fetch_company(a.id)
    assert (company.elo_rating, company.total_votes) == (1500, 0)
    assert await count_votes(session_factory) == 0


@pytest.mark.parametrize("missing, message", [("winner", "Winner company not found"), ("loser", "Loser company not found")])
async def test_vote_for_unknown_company(client, make_company, fetch_company, missing, message):
    a = await make_company()
    ids = {"winner_id": 9999, "loser_id": a.id} if missing == "winner" else {"winner_id": a.id, "loser_id": 9999}

    response = await client.post("/api/v1/vote", json=ids)

    assert response.status_code == 404
    assert response.json() == {"error": message}
    assert (await fetch_company(a.id)).elo_rating == 1500


async def test_malformed_vote_body(client):
    response = await client.post("/api/v1/vote", content=b"{oops", headers={"Content-Type": "application/json"})
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid request body"}


async def test_audit_insert_failure_still_applies_ratings(client, make_company, fetch_company, session_factory, monkeypatch):
    async def failing_insert(self, *args, **kwargs):
        raise SQLAlchemyError("votes table unavailable")

    monkeypatch.setattr(VoteService, "_insert_vote", failing_insert)
    a = await make_company()
    b = await make_company()

    response = await client.post("/api/v1/vote", json={"winner_id": a.id, "loser_id": b.id})

    assert response.status_code == 200
    assert response.json()["winner"]["elo_rating"] == 1516
    assert (await fetch_company(a.id)).elo_rating == 1516
    assert await count_votes(session_factory) == 0


async def test_vote_is_recorded_with_session_and_user(client, make_company, session_factory):
    a = await make_company()
    b = await make_company()
    token = jwt.encode({"sub": "auth0|alice", "email": "alice@example.com"}, "test-secret", algorithm="HS256")

    response = await client.post(
        "/api/v1/vote",
        json={"winner_id": a.id, "loser_id": b.id, "session_id": "sess-1"},
        headers={"Authorization": f"Bearer {token}"},
    )

    assert response.status_code == 200
    async with session_factory() as session:
        vote = (await session.execute(select(Vote))).scalar_one()
    assert (vote.winner_id, vote.loser_id, vote.session_id, vote.user_id) == (a.id, b.id, "sess-1", "auth0|alice")


async def test_invalid_token_votes_anonymously(client, make_company, session_factory):
    a = await make_company()
    b = await make_company()

    response = await client.post(
        "/api/v1/vote",
        json={"winner_id": a.id, "loser_id": b.id},
        headers={"Authorization": "Bearer not-a-jwt"},
    )

    assert response.status_code == 200
    async with session_factory() as session:
        vote = (await session.execute(select(Vote))).scalar_one()
    assert vote.user_id is None


async def test_protobuf_vote(client, make_company):
    a = await make_company()
    b = await make_company()
    request = pb.VoteRequest(winner_id=a.id, loser_id=b.id)

    response = await client.post(
        "/api/v1/vote",
        content=request.SerializeToString(),
        headers={"Content-Type": CONTENT_TYPE_PROTOBUF, "Accept": CONTENT_TYPE_PROTOBUF},
    )

    assert response.status_code == 200
    assert response.headers["content-type"].startswith(CONTENT_TYPE_PROTOBUF)
    message = pb.VoteResponse.FromString(response.content)
    assert (message.winner_elo_diff, message.loser_elo_diff) == (16, -16)
    assert not message.winner.HasField("rank")


async def test_matchup_returns_two_distinct_companies(client, make_company):
    for _ in range(3):
        await make_company()

    response = await client.get("/api/v1/vote/matchup")

    assert response.status_code == 200
    body = response.json()
    assert body["company1"]["id"] != body["company2"]["id"]


async def test_matchup_needs_two_companies_in_category(client, make_company):
    await make_company(category="ai")
    await make_company(category="fintech")

    response = await client.get("/api/v1/vote/matchup", params={"category": "ai"})

    assert response.status_code == 404
    assert response.json() == {"error": "Not enough companies for matchup"}


async def test_matchup_category_all_means_unfiltered(client, make_company):
    await make_company(category="ai")
    await make_company(category="fintech")

    response = await client.get("/api/v1/vote/matchup", params={"category": "all"})

    assert response.status_code == 200


async def test_matchup_selector_can_be_overridden(client, make_company):
    class FirstTwo(MatchupSelector):
        def select_pair(self, candidates):
            return candidates[1], candidates[0]

    a = await make_company()
    b = await make_company()
    app.dependency_overrides[get_matchup_selector] = lambda: FirstTwo()

    response = await client.get("/api/v1/vote/matchup")

    body = response.json()
    assert (body["company1"]["id"], body["company2"]["id"]) == (b.id, a.id)


@pytest.mark.parametrize(
    "side, bad_id, message",
    [
        ("winner", 2**70, "Winner company not found"),
        ("winner", 2**31, "Winner company not found"),
        ("loser", 2**70, "Loser company not found"),
        ("loser", 0, "Loser company not found"),
    ],
)
async def test_vote_with_id_outside_store_range(
    client, make_company, fetch_company, session_factory, side, bad_id, message
):
    a = await make_company()
    if side == "winner":
        ids = {"winner_id": bad_id, "loser_id": a.id}
    else:
        ids = {"winner_id": a.id, "loser_id": bad_id}

    response = await client.post("/api/v1/vote", json=ids)

    assert response.status_code == 404
    assert response.json() == {"error": message}
    assert (await fetch_company(a.id)).elo_rating == 1500
    assert await count_votes(session_factory) == 0


async def test_vote_with_overlong_session_id(client, make_company, fetch_company, session_factory):
    a = await make_company()
    b = await make_company()

    response = await client.post(
        "/api/v1/vote",
        json={"winner_id": a.id, "loser_id": b.id, "session_id": "s" * 256},
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Session ID too long (max 255 characters)"}
    assert (await fetch_company(a.id)).total_votes == 0
    assert await count_votes(session_factory) == 0
