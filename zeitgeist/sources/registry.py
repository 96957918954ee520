"""
Data Source Registry: the fixed list of external data sources.

Every descriptor pairs an async fetch function with a timeout and an optional
fallback. Registries are immutable and validated at construction: an empty or
ambiguous registry is a configuration error and fails fast.
"""

from dataclasses import dataclass
from functools import partial
from typing import Awaitable, Callable, Dict, Iterator, List, Optional, Sequence, Type, Union

import httpx
from pydantic import BaseModel

from zeitgeist.context.selector import DailyContext
from zeitgeist.models.config import ZeitgeistConfig
from zeitgeist.models.sources import (
    AdviceReading,
    AgeReading,
    ApodReading,
    BookReading,
    CocktailReading,
    CryptoReading,
    JokeReading,
    NewsReading,
    NumberFactReading,
    PokemonReading,
    QuoteReading,
    SeismicReading,
    SolarReading,
    WaybackReading,
    WeatherReading,
    WordReading,
)
from zeitgeist.sources import culture, senses, voice

FetchFn = Callable[[httpx.AsyncClient, DailyContext], Awaitable[BaseModel]]
Fallback = Union[BaseModel, Callable[[DailyContext], BaseModel], None]


class AggregationError(Exception):
    """Raised when the source registry is empty or misconfigured."""
    pass


@dataclass(frozen=True)
class SourceDescriptor:
    """One named external data source."""

    id: str
    fetch: FetchFn
    result_model: Type[BaseModel]
    timeout_ms: int = 5000
    fallback: Fallback = None

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000.0

    def resolve_fallback(self, context: DailyContext) -> Optional[BaseModel]:
        """Return the fallback reading for this cycle, if the source has one."""
        if self.fallback is None:
            return None
        if isinstance(self.fallback, BaseModel):
            return self.fallback.model_copy(deep=True)
        return self.fallback(context)


class SourceRegistry:
    """An ordered, validated collection of source descriptors."""

    def __init__(self, descriptors: Sequence[SourceDescriptor]):
        if not descriptors:
            raise AggregationError("Source registry is empty")

        seen: Dict[str, SourceDescriptor] = {}
        for descriptor in descriptors:
            if not descriptor.id:
                raise AggregationError("Source descriptor without an id")
            if descriptor.id in seen:
                raise AggregationError(f"Duplicate source id: {descriptor.id}")
            if descriptor.timeout_ms <= 0:
                raise AggregationError(
                    f"Source {descriptor.id} has a non-positive timeout"
                )
            seen[descriptor.id] = descriptor

        self._descriptors = tuple(descriptors)
        self._by_id = seen

    def __iter__(self) -> Iterator[SourceDescriptor]:
        return iter(self._descriptors)

    def __len__(self) -> int:
        return len(self._descriptors)

    def __contains__(self, source_id: str) -> bool:
        return source_id in self._by_id

    @property
    def ids(self) -> List[str]:
        return [d.id for d in self._descriptors]

    def get(self, source_id: str) -> Optional[SourceDescriptor]:
        return self._by_id.get(source_id)


def default_registry(config: Optional[ZeitgeistConfig] = None) -> SourceRegistry:
    """The sixteen sources the pet listens to."""
    config = config or ZeitgeistConfig()
    timeout = config.default_timeout_ms

    def source(
        source_id: str,
        fetch: FetchFn,
        result_model: Type[BaseModel],
        fallback: Fallback = None,
        timeout_ms: Optional[int] = None,
    ) -> SourceDescriptor:
        return SourceDescriptor(
            id=source_id,
            fetch=fetch,
            result_model=result_model,
            timeout_ms=timeout_ms or timeout,
            fallback=fallback,
        )

    descriptors: List[SourceDescriptor] = [
        # The senses
        source("weather", senses.fetch_weather, WeatherReading, senses.WEATHER_FALLBACK),
        source("crypto", senses.fetch_crypto, CryptoReading, senses.CRYPTO_FALLBACK),
        source("news", senses.fetch_news, NewsReading, senses.NEWS_FALLBACK),
        source(
            "nasa",
            partial(senses.fetch_apod, api_key=config.api_keys.nasa),
            ApodReading,
        ),
        source("sunrise_sunset", senses.fetch_sunrise_sunset, SolarReading),
        source("earthquakes", senses.fetch_earthquakes, SeismicReading, senses.SEISMIC_FALLBACK),
        # The voice
        source("joke", voice.fetch_joke, JokeReading, voice.JOKE_FALLBACK),
        source("quote", voice.fetch_quote, QuoteReading, voice.quote_fallback, timeout_ms=3000),
        source("advice", voice.fetch_advice, AdviceReading, voice.ADVICE_FALLBACK),
        source("word_of_day", voice.fetch_word, WordReading, voice.word_fallback),
        source("number_fact", voice.fetch_number_fact, NumberFactReading,
               voice.number_fact_fallback, timeout_ms=2000),
        # The culture
        source("pokemon", culture.fetch_pokemon, PokemonReading),
        source("book", culture.fetch_book, BookReading, culture.BOOK_FALLBACK),
        source("cocktail", culture.fetch_cocktail, CocktailReading, culture.COCKTAIL_FALLBACK),
        source("wayback", culture.fetch_wayback, WaybackReading),
        source("age", culture.fetch_age, AgeReading, culture.AGE_FALLBACK),
    ]
    return SourceRegistry(descriptors)

