"""Tests for the per-source adapters against canned provider payloads."""

import json
from datetime import datetime, timezone

import httpx
import pytest

from zeitgeist.context.selector import DailyContextSelector
from zeitgeist.fetcher.fanout import FanoutFetcher
from zeitgeist.models import (
    CosmicMood,
    MaturityLevel,
    SolarPhase,
    SourceStatus,
    WeatherMood,
)
from zeitgeist.models.config import ApiKeys, ZeitgeistConfig
from zeitgeist.scoring.engine import ScoringEngine
from zeitgeist.sources.culture import maturity_for
from zeitgeist.sources.registry import default_registry
from zeitgeist.sources.senses import (
    anxiety_from_headlines,
    cosmic_mood_from_title,
    crypto_sentiment,
    extract_keywords,
    nervousness_for,
    solar_phase_for,
    weather_to_mood,
)
from zeitgeist.sources.voice import is_prime, local_number_fact

NOW = datetime(2026, 10, 19, 14, 0, tzinfo=timezone.utc)

PAYLOADS = {
    "api.open-meteo.com": {
        "current_weather": {"temperature": 22.0, "weathercode": 1, "windspeed": 5.0, "is_day": 1},
    },
    "api.coingecko.com": {
        "bitcoin": {"usd": 60000, "usd_24h_change": 6.0},
        "ethereum": {"usd": 3000, "usd_24h_change": 1.0},
    },
    "api.nasa.gov": {
        "title": "The Crab Nebula",
        "url": "https://apod.nasa.gov/crab.jpg",
        "explanation": "x" * 300,
        "date": "2026-10-19",
    },
    "api.sunrise-sunset.org": {
        "results": {
            "sunrise": "2026-10-19T05:00:00+00:00",
            "sunset": "2026-10-19T17:00:00+00:00",
            "day_length": 43200,
        },
        "status": "OK",
    },
    "earthquake.usgs.gov": {
        "features": [
            {"properties": {"mag": 3.5, "place": "Somewhere quiet", "time": 1}},
            {"properties": {"mag": 2.1, "place": "Elsewhere", "time": 2}},
        ],
    },
    "v2.jokeapi.dev": {"type": "twopart", "setup": "Why?", "delivery": "Because.", "category": "Pun"},
    "dummyjson.com": {"id": 1, "quote": "Stay curious.", "author": "Someone"},
    "api.dictionaryapi.dev": [
        {
            "phonetic": "/ˈzɛnɪθ/",
            "meanings": [{"partOfSpeech": "noun", "definitions": [{"definition": "The highest point."}]}],
        }
    ],
    "numbersapi.com": {"text": "7 is the number of days in a week.", "type": "trivia"},
    "pokeapi.co": {
        "name": "pikachu",
        "id": 25,
        "sprites": {"front_default": "https://img/pikachu.png"},
        "types": [{"type": {"name": "electric"}}],
    },
    "openlibrary.org": {
        "works": [{"title": "Dune", "authors": [{"name": "Frank Herbert"}], "cover_id": 42}],
    },
    "www.thecocktaildb.com": {
        "drinks": [{"strDrink": "Mojito", "strAlcoholic": "Alcoholic", "strInstructions": "Muddle."}],
    },
    "archive.org": {
        "archived_snapshots": {"closest": {"url": "http://web.archive.org/x", "timestamp": "20161019", "available": True}},
    },
    "api.agify.io": {"name": "Zeitgeist", "age": 45, "count": 10},
}


def _provider(request: httpx.Request) -> httpx.Response:
    host = request.url.host
    if host == "hacker-news.firebaseio.com":
        if request.url.path.endswith("topstories.json"):
            return httpx.Response(200, json=[11, 12, 13, 14, 15, 16])
        return httpx.Response(200, json={"title": "Innovation in orbit", "score": 100})
    if host == "api.adviceslip.com":
        return httpx.Response(
            200,
            text=json.dumps({"slip": {"id": 7, "advice": "Drink water."}}),
            headers={"content-type": "text/html"},
        )
    if host in PAYLOADS:
        return httpx.Response(200, json=PAYLOADS[host])
    return httpx.Response(404)


def _fetcher(handler, config=None) -> FanoutFetcher:
    return FanoutFetcher(
        registry=default_registry(config),
        selector=DailyContextSelector(),
        client_factory=lambda: httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )


class TestDefaultRegistry:
    def test_sixteen_unique_sources(self):
        registry = default_registry()
        assert len(registry) == 16
        assert len(set(registry.ids)) == 16

    def test_short_timeouts(self):
        registry = default_registry()
        assert registry.get("quote").timeout_ms == 3000
        assert registry.get("number_fact").timeout_ms == 2000
        assert registry.get("weather").timeout_ms == 5000

    def test_default_timeout_from_config(self):
        registry = default_registry(ZeitgeistConfig(default_timeout_ms=1500))
        assert registry.get("weather").timeout_ms == 1500
        assert registry.get("quote").timeout_ms == 3000


class TestAdaptersEndToEnd:
    @pytest.mark.asyncio
    async def test_all_sources_parse(self):
        bundle = await _fetcher(_provider).fetch_all(NOW)

        assert bundle.failed_sources == []
        weather = bundle.get("weather")
        assert weather.mood == WeatherMood.SUNNY
        assert weather.city == bundle.city.name
        assert bundle.get("crypto").bitcoin.change_24h == 6.0
        assert bundle.get("crypto").overall_sentiment == "bullish"
        assert bundle.get("news").anxiety_level == 40
        assert len(bundle.get("news").top_stories) == 5
        assert bundle.get("nasa").cosmic_mood == CosmicMood.CREATIVE
        assert len(bundle.get("nasa").explanation) == 203
        assert bundle.get("sunrise_sunset").solar_phase == SolarPhase.AFTERNOON
        assert bundle.get("sunrise_sunset").is_daytime is True
        assert bundle.get("earthquakes").max_magnitude == 3.5
        assert bundle.get("earthquakes").nervousness == "stable"
        assert bundle.get("joke").joke == "Why? ... Because."
        assert bundle.get("quote").author == "Someone"
        assert bundle.get("advice").advice == "Drink water."
        assert bundle.get("word_of_day").definition == "The highest point."
        assert bundle.get("number_fact").fact.startswith("7 is")
        assert bundle.get("pokemon").color == "electric"
        assert bundle.get("book").cover_url == "https://covers.openlibrary.org/b/id/42-M.jpg"
        assert bundle.get("cocktail").is_alcoholic is True
        assert bundle.get("wayback").available is True
        assert bundle.get("age").maturity_level == MaturityLevel.WISE

    @pytest.mark.asyncio
    async def test_score_from_canned_payloads(self):
        bundle = await _fetcher(_provider).fetch_all(NOW)
        # 50 + 15 (sunny) + 12 (BTC +6%) + 3.003 (anxiety 40) + 0 (afternoon) + 5 (nebula) + 3 (wise)
        assert ScoringEngine().base_score(bundle) == 88

    @pytest.mark.asyncio
    async def test_nasa_key_is_sent(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.host == "api.nasa.gov":
                seen.append(request.url.params.get("api_key"))
            return _provider(request)

        config = ZeitgeistConfig(api_keys=ApiKeys(nasa="secret"))
        await _fetcher(handler, config).fetch_all(NOW)
        assert seen == ["secret"]

    @pytest.mark.asyncio
    async def test_wrong_shape_degrades(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"unexpected": True})

        bundle = await _fetcher(handler).fetch_all(NOW)
        assert len(bundle.entries) == 16
        assert bundle.outcomes["weather"].status == SourceStatus.FALLBACK
        assert bundle.outcomes["nasa"].status == SourceStatus.FAILED
        assert bundle.get("nasa") is None


class TestParsingRules:
    @pytest.mark.parametrize(
        "code,mood",
        [
            (None, WeatherMood.NEUTRAL),
            (0, WeatherMood.SUNNY),
            (2, WeatherMood.SUNNY),
            (45, WeatherMood.FOGGY),
            (61, WeatherMood.RAINY),
            (71, WeatherMood.SNOWY),
            (95, WeatherMood.STORMY),
            (120, WeatherMood.NEUTRAL),
        ],
    )
    def test_weather_to_mood(self, code, mood):
        assert weather_to_mood(code) == mood

    def test_anxiety_is_bounded(self):
        assert anxiety_from_headlines("war crash crisis death fear collapse panic") == 100
        assert anxiety_from_headlines("peace growth success breakthrough innovation hope") == 0
        assert anxiety_from_headlines("a quiet day") == 50

    def test_keywords(self):
        assert extract_keywords("bitcoin climate summit") == ["bitcoin", "climate"]

    def test_cosmic_mood(self):
        assert cosmic_mood_from_title("Into the Black Hole") == CosmicMood.NIHILISTIC
        assert cosmic_mood_from_title("Supernova Remnant") == CosmicMood.INTENSE
        assert cosmic_mood_from_title("Moon over a Nebula") == CosmicMood.GROUNDED
        assert cosmic_mood_from_title("Galaxy Cluster") == CosmicMood.WONDER

    @pytest.mark.parametrize(
        "hour,phase",
        [(5, SolarPhase.DAWN), (9, SolarPhase.MORNING), (13, SolarPhase.AFTERNOON),
         (18, SolarPhase.DUSK), (22, SolarPhase.NIGHT), (2, SolarPhase.NIGHT)],
    )
    def test_solar_phase(self, hour, phase):
        assert solar_phase_for(NOW.replace(hour=hour)) == phase

    def test_crypto_sentiment(self):
        assert crypto_sentiment(8.0, 4.0) == "euphoric"
        assert crypto_sentiment(None, None) == "neutral"
        assert crypto_sentiment(-10.0, -2.0) == "panicked"

    def test_nervousness(self):
        assert nervousness_for(6.5) == "very nervous"
        assert nervousness_for(4.5) == "slightly nervous"
        assert nervousness_for(2.0) == "stable"

    def test_maturity(self):
        assert maturity_for(41) == MaturityLevel.WISE
        assert maturity_for(26) == MaturityLevel.MATURE
        assert maturity_for(25) == MaturityLevel.YOUTHFUL

    def test_local_number_facts(self):
        assert "Ultimate Question" in local_number_fact(42)
        assert local_number_fact(30) == "30 is a round number, divisible by 10."
        assert local_number_fact(49) == "49 is divisible by the lucky number 7."
        assert local_number_fact(97) == "97 is a prime number, divisible only by 1 and itself."
        assert local_number_fact(88) == "88 is an even number."
        assert local_number_fact(81) == "81 is an odd number with its own unique properties."
        assert is_prime(2) and not is_prime(1)
