"""Zeitgeist Pet data models."""

from zeitgeist.models.config import (
    ApiKeys,
    CacheConfig,
    InteractionConfig,
    ScoringConfig,
    ZeitgeistConfig,
)
from zeitgeist.models.entity import EntityState, MoodBand, ScoreBreakdown
from zeitgeist.models.interaction import InteractionKind, InteractionState
from zeitgeist.models.sources import (
    AdviceReading,
    AgeReading,
    ApodReading,
    BookReading,
    City,
    CocktailReading,
    CoinQuote,
    CosmicMood,
    CryptoReading,
    JokeReading,
    MaturityLevel,
    NewsReading,
    NumberFactReading,
    PokemonReading,
    Quake,
    QuoteReading,
    RawDataBundle,
    SeismicReading,
    SolarPhase,
    SolarReading,
    SourceOutcome,
    SourceStatus,
    Story,
    WaybackReading,
    WeatherMood,
    WeatherReading,
    WordReading,
)

__all__ = [
    "AdviceReading",
    "AgeReading",
    "ApiKeys",
    "ApodReading",
    "BookReading",
    "CacheConfig",
    "City",
    "CocktailReading",
    "CoinQuote",
    "CosmicMood",
    "CryptoReading",
    "EntityState",
    "InteractionConfig",
    "InteractionKind",
    "InteractionState",
    "JokeReading",
    "MaturityLevel",
    "MoodBand",
    "NewsReading",
    "NumberFactReading",
    "PokemonReading",
    "Quake",
    "QuoteReading",
    "RawDataBundle",
    "ScoreBreakdown",
    "ScoringConfig",
    "SeismicReading",
    "SolarPhase",
    "SolarReading",
    "SourceOutcome",
    "SourceStatus",
    "Story",
    "WaybackReading",
    "WeatherMood",
    "WeatherReading",
    "WordReading",
    "ZeitgeistConfig",
]
