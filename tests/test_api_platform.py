"""End-to-end tests for health, stats and categories."""

import asyncio

from sqlalchemy.exc import OperationalError

from rankings.config import settings
from rankings.db.session import get_db
from rankings.main import app


async def test_health_connected(client):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "database": "connected"}


async def test_health_disconnected(client):
    class UnreachableSession:
        async def execute(self, *args, **kwargs):
            raise OperationalError("SELECT 1", {}, ConnectionRefusedError("refused"))

    async def unreachable_db():
        yield UnreachableSession()

    app.dependency_overrides[get_db] = unreachable_db

    response = await client.get("/health")

    assert response.status_code == 503
    assert response.json() == {"status": "unhealthy", "database": "disconnected"}


async def test_request_id_is_echoed(client):
    response = await client.get("/health", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"


async def test_unknown_route_uses_error_payload(client):
    response = await client.get("/api/v1/nothing-here")
    assert response.status_code == 404
    assert set(response.json()) == {"error"}


async def test_stats(client, make_company):
    a = await make_company(category="fintech")
    b = await make_company(category="ai")
    await make_company(category="ai")
    await client.post("/api/v1/vote", json={"winner_id": a.id, "loser_id": b.id})
    await client.post("/api/v1/ratings", json={"company_id": a.id, "criterion": "growth", "score": 5})
    await client.post("/api/v1/comments", json={"company_id": a.id, "content": "ok"})

    response = await client.get("/api/v1/stats")

    assert response.json() == {
        "total_companies": 3,
        "total_votes": 1,
        "total_ratings": 1,
        "total_comments": 1,
        "categories": ["ai", "fintech"],
    }


async def test_stats_on_empty_store(client):
    response = await client.get("/api/v1/stats")
    assert response.json()["total_companies"] == 0
    assert response.json()["categories"] == []


async def test_categories_by_count(client, make_company):
    await make_company(category="fintech")
    await make_company(category="ai")
    await make_company(category="ai")
    await make_company(category="devtools")

    response = await client.get("/api/v1/categories")

    assert response.json() == [
        {"category": "ai", "count": 2},
        {"category": "devtools", "count": 1},
        {"category": "fintech", "count": 1},
    ]


async def test_health_ping_timeout(client, monkeypatch):
    class HangingSession:
        async def execute(self, *args, **kwargs):
            await asyncio.sleep(5)

    async def hanging_db():
        yield HangingSession()

    monkeypatch.setattr(settings, "HEALTH_CHECK_TIMEOUT_SECONDS", 0.05)
    app.dependency_overrides[get_db] = hanging_db

    response = await client.get("/health")

    assert response.status_code == 503
    assert response.json() == {"status": "unhealthy", "database": "disconnected"}
