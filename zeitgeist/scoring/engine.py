"""
Scoring Engine: RawDataBundle -> base vibe score -> vibe score.

The base score starts at the neutral midpoint and adds one independent
contribution per present source. Sources that are None contribute nothing;
fallback readings count as present data.

User influence is applied on top of the base score and never stored in it.
Above the volatile threshold agitation flips a coin, and above the chaos
threshold the score is replaced by a uniform draw. Both paths draw from the
injected random source, so only their bounds are stable across calls.
"""

import logging
import math
import random
from typing import Dict, Optional

from zeitgeist.models.config import InteractionConfig, ScoringConfig, ZeitgeistConfig
from zeitgeist.models.entity import ScoreBreakdown
from zeitgeist.models.interaction import InteractionState
from zeitgeist.models.sources import (
    AgeReading,
    ApodReading,
    CryptoReading,
    NewsReading,
    RawDataBundle,
    SeismicReading,
    SolarReading,
    WeatherReading,
)
from zeitgeist.scoring.weights import (
    COSMIC_DELTAS,
    MATURITY_DELTAS,
    SOLAR_DELTAS,
    WEATHER_DELTAS,
)

logger = logging.getLogger(__name__)

MIN_SCORE = 0
MAX_SCORE = 100


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def clamp_score(value: float) -> int:
    """Round, then clamp to the [0, 100] integer range."""
    return int(clamp(round_half_up(value), MIN_SCORE, MAX_SCORE))


class ScoringEngine:
    """Turns raw source data and interaction counters into a vibe score."""

    def __init__(
        self,
        config: Optional[ZeitgeistConfig] = None,
        rng: Optional[random.Random] = None,
    ):
        config = config or ZeitgeistConfig()
        self.scoring: ScoringConfig = config.scoring
        self.interactions: InteractionConfig = config.interactions
        self.rng = rng or random.Random()

    # === BASE SCORE ===

    def weather_contribution(self, reading: WeatherReading) -> float:
        return WEATHER_DELTAS[reading.mood]

    def crypto_contribution(self, reading: CryptoReading) -> Optional[float]:
        change = reading.bitcoin.change_24h
        if change is None:
            return None
        cap = self.scoring.crypto_cap
        return clamp(change * self.scoring.crypto_multiplier, -cap, cap)

    def news_contribution(self, reading: NewsReading) -> float:
        return (self.scoring.news_midpoint - reading.anxiety_level) / self.scoring.news_divisor

    def earthquake_contribution(self, reading: SeismicReading) -> float:
        if reading.max_magnitude <= self.scoring.quake_threshold:
            return 0.0
        excess = reading.max_magnitude - self.scoring.quake_threshold
        return -min(self.scoring.quake_cap, excess * self.scoring.quake_multiplier)

    def solar_contribution(self, reading: SolarReading) -> float:
        return SOLAR_DELTAS[reading.solar_phase]

    def cosmic_contribution(self, reading: ApodReading) -> float:
        return COSMIC_DELTAS[reading.cosmic_mood]

    def maturity_contribution(self, reading: AgeReading) -> float:
        return MATURITY_DELTAS[reading.maturity_level]

    def breakdown(self, bundle: RawDataBundle) -> ScoreBreakdown:
        """Compute each present source's contribution, unrounded."""
        contributions: Dict[str, float] = {}
        factors = []

        weather = bundle.get("weather")
        if isinstance(weather, WeatherReading):
            contributions["weather"] = self.weather_contribution(weather)
            factors.append(f"Weather ({weather.mood.value}): {contributions['weather']:+.0f}")

        crypto = bundle.get("crypto")
        if isinstance(crypto, CryptoReading):
            delta = self.crypto_contribution(crypto)
            if delta is not None:
                contributions["crypto"] = delta
                factors.append(f"Bitcoin {crypto.bitcoin.change_24h:+.1f}%: {delta:+.0f}")

        news = bundle.get("news")
        if isinstance(news, NewsReading):
            contributions["news"] = self.news_contribution(news)
            factors.append(f"News anxiety ({news.anxiety_level}): {contributions['news']:+.0f}")

        quakes = bundle.get("earthquakes")
        if isinstance(quakes, SeismicReading):
            delta = self.earthquake_contribution(quakes)
            contributions["earthquakes"] = delta
            if delta:
                factors.append(f"Seismic activity: {delta:+.0f}")

        sun = bundle.get("sunrise_sunset")
        if isinstance(sun, SolarReading):
            contributions["sunrise_sunset"] = self.solar_contribution(sun)
            factors.append(
                f"Solar phase ({sun.solar_phase.value}): {contributions['sunrise_sunset']:+.0f}"
            )

        nasa = bundle.get("nasa")
        if isinstance(nasa, ApodReading):
            contributions["nasa"] = self.cosmic_contribution(nasa)
            factors.append(f"Cosmic alignment ({nasa.cosmic_mood.value}): {contributions['nasa']:+.0f}")

        age = bundle.get("age")
        if isinstance(age, AgeReading):
            contributions["age"] = self.maturity_contribution(age)
            factors.append(f"Maturity ({age.maturity_level.value}): {contributions['age']:+.0f}")

        return ScoreBreakdown(
            baseline=self.scoring.baseline,
            contributions=contributions,
            factors=factors,
        )

    def base_score(self, bundle: RawDataBundle) -> int:
        """round(clamp(50 + contributions, 0, 100))."""
        return self.score(self.breakdown(bundle))

    def score(self, breakdown: ScoreBreakdown) -> int:
        """Base score of an already computed breakdown."""
        score = clamp_score(breakdown.raw_total)
        logger.info("Vibe score calculation: %s = %d", ", ".join(breakdown.factors) or "neutral", score)
        return score

    # === USER INFLUENCE ===

    def is_chaos(self, interactions: InteractionState) -> bool:
        return interactions.agitate > self.interactions.chaos_threshold

    def is_volatile(self, interactions: InteractionState) -> bool:
        return interactions.agitate > self.interactions.volatile_threshold

    def comfort_bonus(self, comfort: int) -> float:
        return min(self.interactions.max_comfort_bonus, comfort * self.interactions.comfort_per_click)

    def agitate_bonus(self, agitate: int) -> float:
        return min(self.interactions.max_agitate_bonus, agitate * self.interactions.agitate_per_click)

    def apply_interactions(
        self, base_score: int, interactions: Optional[InteractionState]
    ) -> int:
        """Combine the base score with the current interaction counters."""
        if interactions is None:
            return clamp_score(base_score)

        if self.is_chaos(interactions):
            return self.rng.randint(MIN_SCORE, MAX_SCORE)

        agitate_bonus = self.agitate_bonus(interactions.agitate)
        if self.is_volatile(interactions):
            agitation_effect = agitate_bonus if self.rng.random() < 0.5 else -agitate_bonus
        else:
            agitation_effect = -agitate_bonus / 2

        return clamp_score(
            base_score + self.comfort_bonus(interactions.comfort) + agitation_effect
        )
