"""Entity State: the derived, displayable personality of the pet."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from zeitgeist.models.interaction import InteractionState


class MoodBand(BaseModel):
    """One of the fixed, contiguous score ranges covering [0, 100]."""

    min: int = Field(ge=0, le=100)
    max: int = Field(ge=0, le=100)
    name: str
    emoji: str
    color: str                              # Hex color
    background_prompt: str                  # Background theme descriptor

    def contains(self, score: int) -> bool:
        return self.min <= score <= self.max


class ScoreBreakdown(BaseModel):
    """Per-source contributions that make up the base vibe score."""

    baseline: float
    contributions: Dict[str, float] = {}    # source_id -> delta (unrounded)
    factors: List[str] = []                 # Human-readable explanation

    @property
    def raw_total(self) -> float:
        return self.baseline + sum(self.contributions.values())


class EntityState(BaseModel):
    """
    The pet as seen by clients. Recomputed from a RawDataBundle plus the
    current InteractionState; never persisted beyond the short-TTL cache.
    """

    # Core stats
    base_vibe_score: int = Field(ge=0, le=100)
    vibe_score: int = Field(ge=0, le=100)
    mood: MoodBand
    thought: str
    score_factors: List[str] = []
    volatile: bool = False
    chaos_mode: bool = False

    # Identity
    name: str
    age: int = 25
    maturity: str = "mysterious"
    avatar_seed: str
    avatar_url: str

    # Location context
    current_city: str = "The Void"
    weather: Optional[Dict[str, Any]] = None
    solar_phase: str = "eternal"
    is_daytime: bool = True

    # Financial vibes
    crypto_sentiment: str = "unknown"
    bitcoin_change: Optional[float] = None

    # Cosmic alignment
    cosmic_mood: str = "wonder"
    nasa_title: Optional[str] = None
    nasa_image: Optional[str] = None

    # Seismic state
    earthquake_nervousness: str = "stable"
    recent_quakes: List[Dict[str, Any]] = []
    should_shake: bool = False

    # Communication
    joke: Optional[str] = None
    quote: Optional[Dict[str, Any]] = None
    advice: Optional[str] = None
    word_of_day: Optional[Dict[str, Any]] = None
    number_fact: Optional[Dict[str, Any]] = None

    # Culture
    spirit_pokemon: Optional[Dict[str, Any]] = None
    book_recommendation: Optional[Dict[str, Any]] = None
    drink_recommendation: Optional[Dict[str, Any]] = None
    past_life: Optional[Dict[str, Any]] = None

    # News context
    news_anxiety: int = 50
    news_keywords: List[str] = []
    top_stories: List[Dict[str, Any]] = []

    user_interactions: InteractionState
    last_updated: datetime
    next_update: datetime
