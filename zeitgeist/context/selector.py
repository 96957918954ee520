"""
Deterministic Context Selector: the pet's "random" choices of the day.

Each choice indexes a fixed candidate list with ``seed % len(list)``, where the
seed is a projection of the current date (or date + hour). Daily rotations use
a continuous day number, so consecutive days walk the list in order even across
month and year ends. Results are stable
within the window and vary across windows. This is not randomness and must not
be used where unpredictability matters.
"""

from datetime import datetime, timezone
from typing import List, Optional, Sequence, TypeVar

from pydantic import BaseModel

from zeitgeist.models.sources import City

T = TypeVar("T")


WORLD_CAPITALS: List[City] = [
    City(name="Tokyo", lat=35.6762, lon=139.6503, timezone="Asia/Tokyo"),
    City(name="London", lat=51.5074, lon=-0.1278, timezone="Europe/London"),
    City(name="New York", lat=40.7128, lon=-74.0060, timezone="America/New_York"),
    City(name="Sydney", lat=-33.8688, lon=151.2093, timezone="Australia/Sydney"),
    City(name="Paris", lat=48.8566, lon=2.3522, timezone="Europe/Paris"),
    City(name="Berlin", lat=52.5200, lon=13.4050, timezone="Europe/Berlin"),
    City(name="Mumbai", lat=19.0760, lon=72.8777, timezone="Asia/Kolkata"),
    City(name="Cairo", lat=30.0444, lon=31.2357, timezone="Africa/Cairo"),
    City(name="Rio de Janeiro", lat=-22.9068, lon=-43.1729, timezone="America/Sao_Paulo"),
    City(name="Moscow", lat=55.7558, lon=37.6173, timezone="Europe/Moscow"),
    City(name="Singapore", lat=1.3521, lon=103.8198, timezone="Asia/Singapore"),
    City(name="Dubai", lat=25.2048, lon=55.2708, timezone="Asia/Dubai"),
]

MOOD_WORDS = [
    "serendipity", "melancholy", "ephemeral", "luminous", "ethereal",
    "resilient", "enigmatic", "nostalgic", "euphoria", "solitude",
    "wanderlust", "sublime", "tranquil", "tempest", "zenith",
]

AGIFY_NAMES = ["Zeitgeist", "Data", "Pixel", "Binary", "Cloud", "Cyber", "Neo"]

BOOK_SUBJECTS = ["philosophy", "science_fiction", "poetry", "psychology", "adventure"]

WAYBACK_SITES = ["google.com", "twitter.com", "reddit.com", "youtube.com", "amazon.com"]

NAME_PREFIXES = ["Zei", "Geo", "Neo", "Axi", "Lux", "Nox", "Pix", "Qua"]
NAME_SUFFIXES = ["tron", "mos", "byte", "flux", "wave", "core", "link", "sync"]

POKEDEX_SIZE = 898
LUCKY_NUMBER_RANGE = 101                    # 0..100, same range as the vibe score


class DailyContext(BaseModel):
    """Everything a cycle's fetchers need that is derived from the clock."""

    now: datetime
    city: City
    word_of_day: str
    agify_name: str
    book_subject: str
    wayback_site: str
    entity_name: str
    pokemon_id: int
    lucky_number: int
    quote_index: int                        # Seeded by day + hour


def date_seed(current_time: datetime) -> int:
    """year*10000 + month*100 + day, e.g. 20261019."""
    return current_time.year * 10000 + current_time.month * 100 + current_time.day


def day_number(current_time: datetime) -> int:
    """Days since 0001-01-01; consecutive dates give consecutive numbers."""
    return current_time.date().toordinal()


def pick(candidates: Sequence[T], seed: int) -> T:
    """Index a non-empty list with a seed of any magnitude."""
    if not candidates:
        raise ValueError("Cannot select from an empty candidate list")
    return candidates[seed % len(candidates)]


class DailyContextSelector:
    """Derives the day's context from an injected (or current) time."""

    def __init__(
        self,
        cities: Optional[Sequence[City]] = None,
        words: Optional[Sequence[str]] = None,
        names: Optional[Sequence[str]] = None,
        subjects: Optional[Sequence[str]] = None,
        sites: Optional[Sequence[str]] = None,
        quote_pool_size: int = 15,
    ):
        self.cities = list(cities if cities is not None else WORLD_CAPITALS)
        self.words = list(words if words is not None else MOOD_WORDS)
        self.names = list(names if names is not None else AGIFY_NAMES)
        self.subjects = list(subjects if subjects is not None else BOOK_SUBJECTS)
        self.sites = list(sites if sites is not None else WAYBACK_SITES)
        self.quote_pool_size = quote_pool_size

        for label, values in (
            ("cities", self.cities),
            ("words", self.words),
            ("names", self.names),
            ("subjects", self.subjects),
            ("sites", self.sites),
        ):
            if not values:
                raise ValueError(f"Candidate list '{label}' must not be empty")
        if quote_pool_size <= 0:
            raise ValueError("quote_pool_size must be positive")

    def city_of_the_day(self, current_time: Optional[datetime] = None) -> City:
        current_time = current_time or datetime.now(timezone.utc)
        return pick(self.cities, day_number(current_time))

    def word_of_the_day(self, current_time: Optional[datetime] = None) -> str:
        current_time = current_time or datetime.now(timezone.utc)
        return pick(self.words, day_number(current_time))

    def entity_name(self, current_time: Optional[datetime] = None) -> str:
        current_time = current_time or datetime.now(timezone.utc)
        return (
            pick(NAME_PREFIXES, current_time.day)
            + pick(NAME_SUFFIXES, current_time.month)
        )

    def context_for(self, current_time: Optional[datetime] = None) -> DailyContext:
        """Build the full context for one aggregation cycle."""
        if current_time is None:
            current_time = datetime.now(timezone.utc)

        seed = date_seed(current_time)
        day = day_number(current_time)
        return DailyContext(
            now=current_time,
            city=self.city_of_the_day(current_time),
            word_of_day=self.word_of_the_day(current_time),
            agify_name=pick(self.names, day),
            book_subject=pick(self.subjects, current_time.weekday()),
            wayback_site=pick(self.sites, day),
            entity_name=self.entity_name(current_time),
            pokemon_id=seed % POKEDEX_SIZE + 1,
            lucky_number=seed % LUCKY_NUMBER_RANGE,
            quote_index=(day + current_time.hour) % self.quote_pool_size,
        )
