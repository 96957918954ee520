"""
The senses: world-input sources: weather, markets, news, sky and ground.

Each adapter turns one provider payload into a typed reading. Shape problems
raise SourceFetchError (or a pydantic ValidationError); the fan-out fetcher
absorbs both and substitutes the fallback declared here.
"""

import asyncio
from datetime import datetime
from typing import List, Optional

import httpx

from zeitgeist.context.selector import DailyContext
from zeitgeist.models.sources import (
    ApodReading,
    CoinQuote,
    CosmicMood,
    CryptoReading,
    NewsReading,
    Quake,
    SeismicReading,
    SolarPhase,
    SolarReading,
    Story,
    WeatherMood,
    WeatherReading,
)
from zeitgeist.sources.http import SourceFetchError, get_json, truncate
from zeitgeist.sources.urls import endpoint

ANXIOUS_WORDS = ["war", "crash", "crisis", "death", "fear", "collapse", "panic", "disaster", "attack", "threat"]
CALM_WORDS = ["peace", "growth", "success", "breakthrough", "innovation", "hope", "recovery"]
KEYWORDS = ["ai", "crypto", "bitcoin", "tech", "war", "peace", "climate", "space", "health"]
TOP_STORY_COUNT = 5

# Fallbacks are plausible neutral readings: they count as present data.
WEATHER_FALLBACK = WeatherReading(
    city="The Void", temperature=20.0, weather_code=None, wind_speed=10.0, mood=WeatherMood.NEUTRAL,
)
CRYPTO_FALLBACK = CryptoReading(
    bitcoin=CoinQuote(price=50000.0, change_24h=0.0),
    overall_sentiment="neutral",
)
NEWS_FALLBACK = NewsReading(source="Hacker News", top_stories=[], anxiety_level=50, keywords=[])
SEISMIC_FALLBACK = SeismicReading(count=0, max_magnitude=0.0, recent=[], nervousness="stable")


# --- Weather (Open-Meteo) ---

def weather_to_mood(code: Optional[int]) -> WeatherMood:
    """Map a WMO weather code onto a weather mood."""
    if code is None:
        return WeatherMood.NEUTRAL
    if code <= 3:
        return WeatherMood.SUNNY
    if code <= 49:
        return WeatherMood.FOGGY
    if code <= 69:
        return WeatherMood.RAINY
    if code <= 79:
        return WeatherMood.SNOWY
    if code <= 99:
        return WeatherMood.STORMY
    return WeatherMood.NEUTRAL


async def fetch_weather(client: httpx.AsyncClient, ctx: DailyContext) -> WeatherReading:
    params = {
        "latitude": ctx.city.lat,
        "longitude": ctx.city.lon,
        "current_weather": "true",
    }
    data = await get_json(client, endpoint("weather"), params=params)
    current = data.get("current_weather")
    if not isinstance(current, dict):
        raise SourceFetchError("weather", "missing current_weather")

    code = current.get("weathercode")
    return WeatherReading(
        city=ctx.city.name,
        temperature=current.get("temperature"),
        weather_code=code,
        wind_speed=current.get("windspeed"),
        is_day=current.get("is_day") == 1,
        mood=weather_to_mood(code),
    )


# --- Crypto (CoinGecko) ---

def crypto_sentiment(btc_change: Optional[float], eth_change: Optional[float]) -> str:
    avg = ((btc_change or 0) + (eth_change or 0)) / 2
    if avg > 5:
        return "euphoric"
    if avg > 2:
        return "bullish"
    if avg > -2:
        return "neutral"
    if avg > -5:
        return "bearish"
    return "panicked"


async def fetch_crypto(client: httpx.AsyncClient, ctx: DailyContext) -> CryptoReading:
    params = {
        "ids": "bitcoin,ethereum,dogecoin",
        "vs_currencies": "usd",
        "include_24hr_change": "true",
    }
    data = await get_json(client, endpoint("crypto"), params=params)
    if not isinstance(data, dict) or "bitcoin" not in data:
        raise SourceFetchError("crypto", "bitcoin quote missing")

    def quote(coin: str) -> CoinQuote:
        raw = data.get(coin) or {}
        return CoinQuote(price=raw.get("usd"), change_24h=raw.get("usd_24h_change"))

    bitcoin, ethereum = quote("bitcoin"), quote("ethereum")
    return CryptoReading(
        bitcoin=bitcoin,
        ethereum=ethereum,
        dogecoin=quote("dogecoin"),
        overall_sentiment=crypto_sentiment(bitcoin.change_24h, ethereum.change_24h),
    )


# --- News (Hacker News) ---

def anxiety_from_headlines(text: str) -> int:
    """Score 0-100: each anxious word adds 10, each calm word removes 10."""
    anxiety = 50
    for word in ANXIOUS_WORDS:
        if word in text:
            anxiety += 10
    for word in CALM_WORDS:
        if word in text:
            anxiety -= 10
    return max(0, min(100, anxiety))


def extract_keywords(text: str) -> List[str]:
    return [word for word in KEYWORDS if word in text]


async def fetch_news(client: httpx.AsyncClient, ctx: DailyContext) -> NewsReading:
    story_ids = await get_json(client, endpoint("news_top"))
    if not isinstance(story_ids, list):
        raise SourceFetchError("news", "top stories is not a list")

    items = await asyncio.gather(*(
        get_json(client, endpoint("news_item", item_id=story_id))
        for story_id in story_ids[:TOP_STORY_COUNT]
    ))
    stories = [
        Story(title=item.get("title"), score=item.get("score"))
        for item in items
        if isinstance(item, dict)
    ]
    titles = " ".join(s.title or "" for s in stories).lower()

    return NewsReading(
        source="Hacker News",
        top_stories=stories,
        anxiety_level=anxiety_from_headlines(titles),
        keywords=extract_keywords(titles),
    )


# --- Astronomy (NASA APOD) ---

def cosmic_mood_from_title(title: str) -> CosmicMood:
    """Later matches win, so 'Moon over a Nebula' reads as grounded."""
    title = title.lower()
    mood = CosmicMood.WONDER
    if "black hole" in title or "void" in title:
        mood = CosmicMood.NIHILISTIC
    if "supernova" in title or "explosion" in title:
        mood = CosmicMood.INTENSE
    if "nebula" in title or "birth" in title:
        mood = CosmicMood.CREATIVE
    if "earth" in title or "moon" in title:
        mood = CosmicMood.GROUNDED
    return mood


async def fetch_apod(
    client: httpx.AsyncClient, ctx: DailyContext, api_key: str = "DEMO_KEY"
) -> ApodReading:
    data = await get_json(client, endpoint("apod"), params={"api_key": api_key or "DEMO_KEY"})
    if not isinstance(data, dict) or "title" not in data:
        raise SourceFetchError("nasa", "APOD payload has no title")

    title = data.get("title") or ""
    return ApodReading(
        title=title,
        explanation=truncate(data.get("explanation"), 200),
        image_url=data.get("url"),
        date=data.get("date"),
        cosmic_mood=cosmic_mood_from_title(title),
    )


# --- Sunrise / sunset ---

def solar_phase_for(now: datetime) -> SolarPhase:
    """Bucket the UTC hour into a phase of the day."""
    hour = now.hour
    if 5 <= hour < 8:
        return SolarPhase.DAWN
    if 8 <= hour < 12:
        return SolarPhase.MORNING
    if 12 <= hour < 17:
        return SolarPhase.AFTERNOON
    if 17 <= hour < 20:
        return SolarPhase.DUSK
    return SolarPhase.NIGHT


def _parse_instant(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return None


async def fetch_sunrise_sunset(client: httpx.AsyncClient, ctx: DailyContext) -> SolarReading:
    params = {"lat": ctx.city.lat, "lng": ctx.city.lon, "formatted": 0}
    data = await get_json(client, endpoint("sun"), params=params)
    results = data.get("results") if isinstance(data, dict) else None
    if not isinstance(results, dict):
        raise SourceFetchError("sunrise_sunset", "missing results")

    sunrise = _parse_instant(results.get("sunrise"))
    sunset = _parse_instant(results.get("sunset"))
    is_daytime = True
    if sunrise and sunset and ctx.now.tzinfo is not None:
        is_daytime = sunrise < ctx.now < sunset

    return SolarReading(
        city=ctx.city.name,
        sunrise=results.get("sunrise"),
        sunset=results.get("sunset"),
        day_length=results.get("day_length"),
        is_daytime=is_daytime,
        solar_phase=solar_phase_for(ctx.now),
    )


# --- Earthquakes (USGS) ---

def nervousness_for(max_magnitude: float) -> str:
    if max_magnitude > 6:
        return "very nervous"
    if max_magnitude > 4:
        return "slightly nervous"
    return "stable"


async def fetch_earthquakes(client: httpx.AsyncClient, ctx: DailyContext) -> SeismicReading:
    data = await get_json(client, endpoint("earthquakes"))
    features = data.get("features") if isinstance(data, dict) else None
    if not isinstance(features, list):
        raise SourceFetchError("earthquakes", "missing features")

    props = [f.get("properties") or {} for f in features]
    max_magnitude = max((p.get("mag") or 0 for p in props), default=0.0)

    return SeismicReading(
        count=len(features),
        max_magnitude=max_magnitude,
        recent=[
            Quake(place=p.get("place"), magnitude=p.get("mag"), time=p.get("time"))
            for p in props[:3]
        ],
        nervousness=nervousness_for(max_magnitude),
    )
