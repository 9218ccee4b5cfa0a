"""End-to-end tests for company listing, detail and leaderboards."""

from jose import jwt

from rankings.utils.constants import CONTENT_TYPE_PROTOBUF
from rankings.wire import messages as pb


async def test_list_companies_in_ranking_order(client, make_company):
    low = await make_company(elo_rating=1400)
    high = await make_company(elo_rating=1600)

    response = await client.get("/api/v1/companies")

    assert response.status_code == 200
    body = response.json()
    assert [c["id"] for c in body] == [high.id, low.id]
    assert [c["rank"] for c in body] == [1, 2]


async def test_list_companies_search_matches_name_or_description(client, make_company):
    await make_company(name="OpenThing", description=None)
    await make_company(name="Other", description="An OPEN platform")
    await make_company(name="Unrelated", description="nothing here")

    response = await client.get("/api/v1/companies", params={"search": "open"})

    assert sorted(c["name"] for c in response.json()) == ["OpenThing", "Other"]


async def test_search_treats_wildcards_literally(client, make_company):
    await make_company(name="100% Remote")
    await make_company(name="Anything")

    response = await client.get("/api/v1/companies", params={"search": "%"})

    assert [c["name"] for c in response.json()] == ["100% Remote"]


async def test_list_companies_by_category(client, make_company):
    await make_company(category="ai")
    await make_company(category="fintech")

    response = await client.get("/api/v1/companies", params={"category": "fintech"})

    body = response.json()
    assert len(body) == 1
    assert body[0]["rank"] == 1


async def test_get_company_with_global_rank(client, make_company):
    await make_company(elo_rating=1600)
    await make_company(elo_rating=1500, total_votes=9)
    target = await make_company(elo_rating=1500, total_votes=3, slug="target", tags=["remote"])

    response = await client.get("/api/v1/companies/target")

    assert response.status_code == 200
    body = response.json()
    assert body["id"] == target.id
    assert body["rank"] == 3
    assert body["tags"] == ["remote"]
    assert body["logo_url"] is None


async def test_get_unknown_company(client):
    response = await client.get("/api/v1/companies/nope")
    assert response.status_code == 404
    assert response.json() == {"error": "Company not found"}


async def test_unknown_company_in_protobuf(client):
    response = await client.get("/api/v1/companies/nope", headers={"Accept": CONTENT_TYPE_PROTOBUF})

    assert response.status_code == 404
    assert pb.ErrorResponse.FromString(response.content).error == "Company not found"


async def test_leaderboard_page(client, make_company):
    for i in range(5):
        await make_company(elo_rating=1500 + i)

    response = await client.get("/api/v1/leaderboard", params={"page": "2", "page_size": "2"})

    body = response.json()
    assert (body["page"], body["page_size"], body["total_count"]) == (2, 2, 5)
    assert [c["rank"] for c in body["companies"]] == [3, 4]


async def test_leaderboard_clamps_bad_paging(client, make_company):
    await make_company()

    response = await client.get("/api/v1/leaderboard", params={"page": "zero", "page_size": "500"})

    assert response.status_code == 200
    body = response.json()
    assert (body["page"], body["page_size"]) == (1, 25)


async def test_leaderboard_past_the_end(client, make_company):
    for _ in range(10):
        await make_company()

    response = await client.get("/api/v1/leaderboard", params={"page": "1000"})

    body = response.json()
    assert body["companies"] == []
    assert body["total_count"] == 10


async def test_leaderboard_protobuf(client, make_company):
    await make_company()

    response = await client.get("/api/v1/leaderboard", headers={"Accept": CONTENT_TYPE_PROTOBUF})

    message = pb.LeaderboardResponse.FromString(response.content)
    assert message.total_count == 1
    assert message.companies[0].rank.value == 1


async def test_user_leaderboard(client, make_company):
    a = await make_company()
    b = await make_company()
    token = jwt.encode({"sub": "auth0|carol"}, "test-secret", algorithm="HS256")
    for _ in range(2):
        await client.post(
            "/api/v1/vote",
            json={"winner_id": a.id, "loser_id": b.id},
            headers={"Authorization": f"Bearer {token}"},
        )
    await client.post("/api/v1/vote", json={"winner_id": b.id, "loser_id": a.id})

    response = await client.get("/api/v1/leaderboard/users")

    body = response.json()
    assert body["users"] == [{"user_id": "auth0|carol", "total_votes": 2, "rank": 1}]
    assert body["total_count"] == 1


async def test_reads_are_repeatable(client, make_company):
    for i in range(4):
        await make_company(elo_rating=1500, total_votes=i % 2)

    for path in ("/api/v1/companies", "/api/v1/leaderboard", "/api/v1/companies/company-2"):
        first = await client.get(path)
        second = await client.get(path)
        assert first.json() == second.json()
