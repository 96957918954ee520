"""Source readings: normalized fields extracted from each provider response."""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class WeatherMood(str, Enum):
    SUNNY = "sunny"
    NEUTRAL = "neutral"
    FOGGY = "foggy"
    RAINY = "rainy"
    SNOWY = "snowy"
    STORMY = "stormy"


class SolarPhase(str, Enum):
    DAWN = "dawn"
    MORNING = "morning"
    AFTERNOON = "afternoon"
    DUSK = "dusk"
    NIGHT = "night"


class CosmicMood(str, Enum):
    NIHILISTIC = "nihilistic"
    INTENSE = "intense"
    CREATIVE = "creative"
    GROUNDED = "grounded"
    WONDER = "wonder"


class MaturityLevel(str, Enum):
    YOUTHFUL = "youthful"
    MATURE = "mature"
    WISE = "wise"
    ETERNAL = "eternal"


class City(BaseModel):
    name: str
    lat: float
    lon: float
    timezone: str


# --- The senses (world input) ---

class WeatherReading(BaseModel):
    city: str
    temperature: Optional[float] = None     # Celsius
    weather_code: Optional[int] = None      # WMO code
    wind_speed: Optional[float] = None
    is_day: bool = True
    mood: WeatherMood = WeatherMood.NEUTRAL


class CoinQuote(BaseModel):
    price: Optional[float] = None           # USD
    change_24h: Optional[float] = None      # Percent


class CryptoReading(BaseModel):
    bitcoin: CoinQuote
    ethereum: CoinQuote = CoinQuote()
    dogecoin: CoinQuote = CoinQuote()
    overall_sentiment: str = "neutral"


class Story(BaseModel):
    title: Optional[str] = None
    score: Optional[int] = None


class NewsReading(BaseModel):
    source: str = "Hacker News"
    top_stories: List[Story] = []
    anxiety_level: int = Field(ge=0, le=100, default=50)   # Lower = calmer
    keywords: List[str] = []


class ApodReading(BaseModel):
    """NASA Astronomy Picture of the Day."""

    title: Optional[str] = None
    explanation: Optional[str] = None
    image_url: Optional[str] = None
    date: Optional[str] = None
    cosmic_mood: CosmicMood = CosmicMood.WONDER


class SolarReading(BaseModel):
    city: str
    sunrise: Optional[str] = None
    sunset: Optional[str] = None
    day_length: Optional[int] = None        # Seconds
    is_daytime: bool = True
    solar_phase: SolarPhase


class Quake(BaseModel):
    place: Optional[str] = None
    magnitude: Optional[float] = None
    time: Optional[int] = None              # Epoch millis


class SeismicReading(BaseModel):
    count: int = 0
    max_magnitude: float = 0.0
    recent: List[Quake] = []
    nervousness: str = "stable"


# --- The voice (communication) ---

class JokeReading(BaseModel):
    joke: str
    category: Optional[str] = None
    type: Optional[str] = None


class QuoteReading(BaseModel):
    content: str
    author: str
    tags: List[str] = []


class AdviceReading(BaseModel):
    advice: str
    id: Optional[int] = None


class WordReading(BaseModel):
    word: str
    definition: Optional[str] = None
    part_of_speech: Optional[str] = None
    phonetic: Optional[str] = None


class NumberFactReading(BaseModel):
    number: int
    fact: str
    type: str = "trivia"


# --- The culture (fluff and fun) ---

class PokemonReading(BaseModel):
    name: str
    id: int
    sprite: Optional[str] = None
    types: List[str] = []
    color: Optional[str] = None


class BookReading(BaseModel):
    title: str
    author: Optional[str] = None
    subject: Optional[str] = None
    cover_id: Optional[int] = None
    cover_url: Optional[str] = None


class CocktailReading(BaseModel):
    name: str
    category: Optional[str] = None
    glass: Optional[str] = None
    instructions: Optional[str] = None
    image: Optional[str] = None
    is_alcoholic: bool = False


class WaybackReading(BaseModel):
    original_site: str
    archive_url: Optional[str] = None
    archive_date: Optional[str] = None
    available: bool = False


class AgeReading(BaseModel):
    """Agify age prediction for the entity's name of the day."""

    name: Optional[str] = None
    predicted_age: int = 25
    maturity_level: MaturityLevel = MaturityLevel.ETERNAL


# --- Aggregation ---

class SourceStatus(str, Enum):
    OK = "ok"
    FALLBACK = "fallback"   # Fetch failed, static fallback substituted
    FAILED = "failed"       # Fetch failed, no fallback: entry is None


class SourceOutcome(BaseModel):
    status: SourceStatus
    error: Optional[str] = None
    elapsed_ms: float = 0.0


class RawDataBundle(BaseModel):
    """
    The output of one aggregation cycle.

    Holds exactly one entry per registered source; None marks a source that
    failed without a fallback. Built once, then treated as immutable.
    """

    entries: Dict[str, Optional[Any]]
    outcomes: Dict[str, SourceOutcome] = {}
    city: City
    fetched_at: datetime

    def get(self, source_id: str) -> Optional[Any]:
        """Get a source's reading, or None if missing/failed."""
        return self.entries.get(source_id)

    @property
    def failed_sources(self) -> List[str]:
        return [
            sid for sid, outcome in self.outcomes.items()
            if outcome.status != SourceStatus.OK
        ]
