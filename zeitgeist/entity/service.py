"""
Entity Service: the inbound surface of the kernel.

Wires the fetcher, scoring engine, mood mapper and interaction store, and
memoizes the last bundle + base score for a short TTL. Between refreshes only
the vibe score is recomputed from the cached base score and the current
interaction counters; recording an interaction never refetches sources.
"""

import asyncio
import logging
import random
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
from urllib.parse import quote

from pydantic import BaseModel

from zeitgeist.context.selector import DailyContextSelector
from zeitgeist.fetcher.fanout import FanoutFetcher, default_client_factory
from zeitgeist.interaction.store import InteractionStore
from zeitgeist.models.config import ZeitgeistConfig
from zeitgeist.models.entity import EntityState, ScoreBreakdown
from zeitgeist.models.interaction import InteractionState
from zeitgeist.models.sources import (
    AgeReading,
    ApodReading,
    CryptoReading,
    NewsReading,
    RawDataBundle,
    SeismicReading,
    SolarReading,
)
from zeitgeist.mood.mapper import MoodMapper
from zeitgeist.scoring.engine import ScoringEngine
from zeitgeist.sources.registry import default_registry
from zeitgeist.sources.urls import endpoint

logger = logging.getLogger(__name__)


UNAVAILABLE_MESSAGE = "The entity is having an existential crisis..."


class EntityUnavailableError(Exception):
    """Raised when the entity state cannot be computed for reasons outside the fetch layer."""
    pass


@dataclass
class _CachedCycle:
    bundle: RawDataBundle
    base_score: int
    breakdown: ScoreBreakdown
    expires_at: datetime


def _dump(reading: Optional[BaseModel]) -> Optional[Dict[str, Any]]:
    return reading.model_dump(mode="json") if reading is not None else None


def next_update_time(current_time: datetime) -> datetime:
    """Top of the next hour."""
    return current_time.replace(minute=0, second=0, microsecond=0) + timedelta(hours=1)


def avatar_set_for(vibe_score: int) -> int:
    """Robohash set: monsters when anxious, kittens when happy, robots otherwise."""
    if vibe_score < 20:
        return 2
    if vibe_score > 80:
        return 4
    return 1


class EntityService:
    """Serves entity state, raw bundles and interactions."""

    def __init__(
        self,
        fetcher: Optional[FanoutFetcher] = None,
        scoring: Optional[ScoringEngine] = None,
        mood_mapper: Optional[MoodMapper] = None,
        interactions: Optional[InteractionStore] = None,
        selector: Optional[DailyContextSelector] = None,
        config: Optional[ZeitgeistConfig] = None,
        rng: Optional[random.Random] = None,
    ):
        self.config = config or ZeitgeistConfig()
        rng = rng or random.Random()
        self.selector = selector or DailyContextSelector()
        self.fetcher = fetcher or FanoutFetcher(
            registry=default_registry(self.config),
            selector=self.selector,
            client_factory=default_client_factory(self.config.user_agent),
        )
        self.scoring = scoring or ScoringEngine(self.config, rng=rng)
        self.mood_mapper = mood_mapper or MoodMapper(rng=rng)
        self.interactions = interactions or InteractionStore(
            reset_interval_seconds=self.config.cache.interaction_reset_seconds,
        )

        self._cache: Optional[_CachedCycle] = None
        self._refresh_lock = asyncio.Lock()

    @property
    def source_count(self) -> int:
        return len(self.fetcher.registry)

    # === CACHE ===

    def invalidate(self) -> None:
        """Drop the cached cycle; the next read refetches every source."""
        self._cache = None

    def _fresh_cache(self, current_time: datetime) -> Optional[_CachedCycle]:
        if self._cache and current_time < self._cache.expires_at:
            return self._cache
        return None

    async def _cycle(self, current_time: datetime, force: bool = False) -> _CachedCycle:
        cached = None if force else self._fresh_cache(current_time)
        if cached:
            return cached

        async with self._refresh_lock:
            # Another request may have refreshed while we waited.
            cached = None if force else self._fresh_cache(current_time)
            if cached:
                return cached

            logger.info("Fetching fresh data from all %d sources", self.source_count)
            bundle = await self.fetcher.fetch_all(current_time)
            try:
                breakdown = self.scoring.breakdown(bundle)
                base_score = self.scoring.score(breakdown)
            except Exception as e:
                logger.exception("Failed to score the fetched bundle")
                raise EntityUnavailableError(UNAVAILABLE_MESSAGE) from e
            self._cache = _CachedCycle(
                bundle=bundle,
                base_score=base_score,
                breakdown=breakdown,
                expires_at=current_time + timedelta(seconds=self.config.cache.entity_ttl_seconds),
            )
            return self._cache

    # === INBOUND OPERATIONS ===

    async def get_raw_bundle(
        self, refresh: bool = False, current_time: Optional[datetime] = None
    ) -> RawDataBundle:
        """The bundle behind the current state (diagnostics / brain scan)."""
        current_time = current_time or datetime.now(timezone.utc)
        cycle = await self._cycle(current_time, force=refresh)
        return cycle.bundle

    async def get_current_entity_state(
        self, current_time: Optional[datetime] = None
    ) -> EntityState:
        current_time = current_time or datetime.now(timezone.utc)
        cycle = await self._cycle(current_time)
        try:
            return self._build_state(cycle, current_time)
        except Exception as e:
            logger.exception("Failed to compute entity state")
            raise EntityUnavailableError(UNAVAILABLE_MESSAGE) from e

    def record_interaction(self, kind: str) -> InteractionState:
        """Record comfort/agitate. Raises InteractionValidationError on anything else."""
        state = self.interactions.record(kind)
        logger.debug("Interaction %s recorded: %s", kind, state.model_dump(mode="json"))
        return state

    def get_interaction_state(self) -> InteractionState:
        return self.interactions.snapshot()

    async def get_mood_card(self, current_time: Optional[datetime] = None) -> dict:
        """Shareable summary of today's mood."""
        state = await self.get_current_entity_state(current_time)
        return {
            "date": state.last_updated.date().isoformat(),
            "vibe_score": state.vibe_score,
            "mood": state.mood.name,
            "mood_emoji": state.mood.emoji,
            "thought": state.thought,
            "word_of_day": state.word_of_day,
            "background_prompt": state.mood.background_prompt,
            "share_text": (
                f"The Zeitgeist Pet is feeling {state.mood.name} today "
                f"({state.vibe_score}/100). {state.thought}"
            ),
        }

    # === STATE ASSEMBLY ===

    def _build_state(self, cycle: _CachedCycle, current_time: datetime) -> EntityState:
        bundle = cycle.bundle
        interactions = self.interactions.snapshot(current_time)
        vibe_score = self.scoring.apply_interactions(cycle.base_score, interactions)
        mood = self.mood_mapper.band_for(vibe_score)

        age = bundle.get("age")
        sun = bundle.get("sunrise_sunset")
        crypto = bundle.get("crypto")
        nasa = bundle.get("nasa")
        quakes = bundle.get("earthquakes")
        news = bundle.get("news")
        joke = bundle.get("joke")
        advice = bundle.get("advice")

        avatar_seed = f"{current_time.date().isoformat()}-{bundle.city.name}-{mood.name}-{vibe_score}"
        avatar_url = (
            endpoint("robohash", seed=quote(avatar_seed))
            + f"?set=set{avatar_set_for(vibe_score)}&size=300x300"
        )

        return EntityState(
            base_vibe_score=cycle.base_score,
            vibe_score=vibe_score,
            mood=mood,
            thought=self.mood_mapper.thought_for(mood.name),
            score_factors=cycle.breakdown.factors,
            volatile=self.scoring.is_volatile(interactions),
            chaos_mode=self.scoring.is_chaos(interactions),
            name=self.selector.entity_name(current_time),
            age=age.predicted_age if isinstance(age, AgeReading) else 25,
            maturity=age.maturity_level.value if isinstance(age, AgeReading) else "mysterious",
            avatar_seed=avatar_seed,
            avatar_url=avatar_url,
            current_city=bundle.city.name,
            weather=_dump(bundle.get("weather")),
            solar_phase=sun.solar_phase.value if isinstance(sun, SolarReading) else "eternal",
            is_daytime=sun.is_daytime if isinstance(sun, SolarReading) else True,
            crypto_sentiment=(
                crypto.overall_sentiment if isinstance(crypto, CryptoReading) else "unknown"
            ),
            bitcoin_change=crypto.bitcoin.change_24h if isinstance(crypto, CryptoReading) else None,
            cosmic_mood=nasa.cosmic_mood.value if isinstance(nasa, ApodReading) else "wonder",
            nasa_title=nasa.title if isinstance(nasa, ApodReading) else None,
            nasa_image=nasa.image_url if isinstance(nasa, ApodReading) else None,
            earthquake_nervousness=(
                quakes.nervousness if isinstance(quakes, SeismicReading) else "stable"
            ),
            recent_quakes=(
                [q.model_dump(mode="json") for q in quakes.recent]
                if isinstance(quakes, SeismicReading) else []
            ),
            should_shake=isinstance(quakes, SeismicReading) and quakes.max_magnitude > 5,
            joke=joke.joke if joke is not None else None,
            quote=_dump(bundle.get("quote")),
            advice=advice.advice if advice is not None else None,
            word_of_day=_dump(bundle.get("word_of_day")),
            number_fact=_dump(bundle.get("number_fact")),
            spirit_pokemon=_dump(bundle.get("pokemon")),
            book_recommendation=_dump(bundle.get("book")),
            drink_recommendation=_dump(bundle.get("cocktail")),
            past_life=_dump(bundle.get("wayback")),
            news_anxiety=news.anxiety_level if isinstance(news, NewsReading) else 50,
            news_keywords=news.keywords if isinstance(news, NewsReading) else [],
            top_stories=(
                [s.model_dump(mode="json") for s in news.top_stories]
                if isinstance(news, NewsReading) else []
            ),
            user_interactions=interactions,
            last_updated=current_time,
            next_update=next_update_time(current_time),
        )
