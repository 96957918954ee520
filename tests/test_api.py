"""Tests for the FastAPI API endpoints."""

import random
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from zeitgeist.api.app import create_app
from zeitgeist.entity.service import EntityService
from zeitgeist.models import (
    AgeReading,
    City,
    CoinQuote,
    CryptoReading,
    MaturityLevel,
    RawDataBundle,
    SourceOutcome,
    SourceStatus,
    WeatherMood,
    WeatherReading,
)
from zeitgeist.scoring.engine import ScoringEngine
from zeitgeist.sources.registry import default_registry

CITY = City(name="Cairo", lat=30.0444, lon=31.2357, timezone="Africa/Cairo")


class StubFetcher:
    def __init__(self):
        self.registry = default_registry()
        self.calls = 0

    async def fetch_all(self, current_time=None):
        self.calls += 1
        return RawDataBundle(
            entries={
                "weather": WeatherReading(city="Cairo", temperature=31.0, mood=WeatherMood.SUNNY),
                "crypto": CryptoReading(bitcoin=CoinQuote(price=60000.0, change_24h=-5.0)),
                "age": AgeReading(predicted_age=30, maturity_level=MaturityLevel.MATURE),
                "nasa": None,
            },
            outcomes={
                "weather": SourceOutcome(status=SourceStatus.OK),
                "crypto": SourceOutcome(status=SourceStatus.OK),
                "age": SourceOutcome(status=SourceStatus.FALLBACK, error="HTTP 429"),
                "nasa": SourceOutcome(status=SourceStatus.FAILED, error="timed out after 5000 ms"),
            },
            city=CITY,
            fetched_at=current_time or datetime.now(timezone.utc),
        )


class ExplodingScoring(ScoringEngine):
    """Scores fine but cannot combine interactions."""

    def apply_interactions(self, base_score, interactions):
        raise ZeroDivisionError("vibes undefined")


class BrokenBreakdown(ScoringEngine):
    def breakdown(self, bundle):
        raise ZeroDivisionError("scoring bug")


@pytest.fixture
def fetcher():
    return StubFetcher()


@pytest.fixture
def client(fetcher):
    """Create a test client around a stubbed entity service."""
    service = EntityService(fetcher=fetcher, rng=random.Random(5))
    with TestClient(create_app(service=service)) as test_client:
        yield test_client


class TestEntityEndpoints:
    def test_get_entity(self, client):
        response = client.get("/api/entity")
        assert response.status_code == 200
        data = response.json()
        # 50 + 15 (sunny) - 10 (BTC -5%) + 0 (mature)
        assert data["base_vibe_score"] == 55
        assert data["vibe_score"] == 55
        assert data["mood"]["name"] == "Curious"
        assert data["current_city"] == "Cairo"
        assert data["user_interactions"]["comfort"] == 0
        assert data["avatar_url"].startswith("https://robohash.org/")

    def test_entity_is_cached(self, client, fetcher):
        client.get("/api/entity")
        client.get("/api/entity")
        assert fetcher.calls == 1

    def test_entity_failure_returns_500(self, fetcher):
        service = EntityService(fetcher=fetcher, scoring=ExplodingScoring())
        with TestClient(create_app(service=service)) as client:
            response = client.get("/api/entity")
        assert response.status_code == 500
        assert response.json() == {"error": "The entity is having an existential crisis..."}

    def test_scoring_failure_returns_500(self, fetcher):
        service = EntityService(fetcher=fetcher, scoring=BrokenBreakdown())
        with TestClient(create_app(service=service)) as client:
            for path in ("/api/entity", "/api/mood-card", "/api/brain-scan"):
                response = client.get(path)
                assert response.status_code == 500
                assert response.json() == {"error": "The entity is having an existential crisis..."}

    def test_brain_scan(self, client):
        response = client.get("/api/brain-scan")
        assert response.status_code == 200
        data = response.json()
        assert data["raw_inputs"]["city"]["name"] == "Cairo"
        assert data["raw_inputs"]["entries"]["nasa"] is None
        assert sorted(data["failed_sources"]) == ["age", "nasa"]
        assert "neural pathways" in data["message"]

    def test_brain_scan_refresh(self, client, fetcher):
        client.get("/api/brain-scan")
        client.get("/api/brain-scan", params={"refresh": "true"})
        assert fetcher.calls == 2

    def test_mood_card(self, client):
        response = client.get("/api/mood-card")
        assert response.status_code == 200
        data = response.json()
        assert data["mood"] == "Curious"
        assert data["vibe_score"] == 55
        assert "Curious" in data["share_text"]

    def test_history_placeholder(self, client):
        response = client.get("/api/history/2026-10-19")
        assert response.status_code == 200
        assert response.json()["date"] == "2026-10-19"


class TestInteractionEndpoints:
    def test_comfort(self, client):
        response = client.post("/api/interact", json={"action": "comfort"})
        assert response.status_code == 200
        data = response.json()
        assert data["total_comfort"] == 1
        assert data["total_agitate"] == 0
        assert data["message"] == "You gently comfort the entity..."

    def test_agitate(self, client):
        client.post("/api/interact", json={"action": "agitate"})
        response = client.post("/api/interact", json={"action": "agitate"})
        assert response.json()["total_agitate"] == 2

    def test_invalid_action(self, client):
        response = client.post("/api/interact", json={"action": "tickle"})
        assert response.status_code == 400
        assert client.get("/api/interactions").json()["comfort"] == 0

    def test_interactions(self, client):
        client.post("/api/interact", json={"action": "comfort"})
        data = client.get("/api/interactions").json()
        assert data["comfort"] == 1
        assert data["agitate"] == 0
        assert "last_reset" in data

    def test_interaction_moves_entity(self, client, fetcher):
        for _ in range(20):
            client.post("/api/interact", json={"action": "comfort"})
        data = client.get("/api/entity").json()
        assert data["base_vibe_score"] == 55
        assert data["vibe_score"] == 65
        assert fetcher.calls == 1


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "sources": 16}
