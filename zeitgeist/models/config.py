"""Kernel configuration: read-only inputs to scoring, caching and interactions."""

import os
from typing import Optional

from pydantic import BaseModel, Field


class ScoringConfig(BaseModel):
    """Numeric parameters of the continuous scoring rules."""

    baseline: float = 50.0
    crypto_multiplier: float = 2.0
    crypto_cap: float = 20.0                # -20 to +20
    news_midpoint: float = 50.0
    news_divisor: float = 3.33              # -15 to +15
    quake_threshold: float = 4.0
    quake_multiplier: float = 3.0
    quake_cap: float = 10.0                 # -10 to 0


class InteractionConfig(BaseModel):
    """How comfort/agitate clicks perturb the vibe score."""

    comfort_per_click: float = 0.5
    agitate_per_click: float = 0.8
    max_comfort_bonus: float = 20.0
    max_agitate_bonus: float = 30.0
    volatile_threshold: int = 100           # Above this, agitation flips a coin
    chaos_threshold: int = 10000            # Above this, the score is pure noise


class CacheConfig(BaseModel):
    entity_ttl_seconds: int = Field(ge=0, default=3600)
    interaction_reset_seconds: Optional[int] = 3600   # None = never auto-reset


class ApiKeys(BaseModel):
    """Optional provider keys. A missing key degrades to demo mode."""

    nasa: str = "DEMO_KEY"
    news: Optional[str] = None


class ZeitgeistConfig(BaseModel):
    """Top-level configuration for the Zeitgeist Pet kernel."""

    scoring: ScoringConfig = ScoringConfig()
    interactions: InteractionConfig = InteractionConfig()
    cache: CacheConfig = CacheConfig()
    api_keys: ApiKeys = ApiKeys()
    default_timeout_ms: int = Field(gt=0, default=5000)
    user_agent: str = "zeitgeist-pet/0.1"

    @classmethod
    def from_env(cls, environ: Optional[dict] = None) -> "ZeitgeistConfig":
        """Build a config from environment variables, falling back to defaults."""
        env = os.environ if environ is None else environ

        cache = CacheConfig()
        if env.get("ZEITGEIST_ENTITY_TTL"):
            cache.entity_ttl_seconds = int(env["ZEITGEIST_ENTITY_TTL"])
        if env.get("ZEITGEIST_RESET_INTERVAL"):
            reset = int(env["ZEITGEIST_RESET_INTERVAL"])
            cache.interaction_reset_seconds = reset if reset > 0 else None

        interactions = InteractionConfig()
        if env.get("ZEITGEIST_CHAOS_THRESHOLD"):
            interactions.chaos_threshold = int(env["ZEITGEIST_CHAOS_THRESHOLD"])

        api_keys = ApiKeys(
            nasa=env.get("NASA_API_KEY") or "DEMO_KEY",
            news=env.get("NEWS_API_KEY") or None,
        )

        config = cls(cache=cache, interactions=interactions, api_keys=api_keys)
        if env.get("ZEITGEIST_TIMEOUT_MS"):
            config.default_timeout_ms = int(env["ZEITGEIST_TIMEOUT_MS"])
        return config
