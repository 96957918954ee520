"""Mood Mapper: vibe score -> mood band, plus a cosmetic thought."""

import random
from typing import Dict, List, Optional, Sequence

from zeitgeist.models.entity import MoodBand

MOOD_BANDS: List[MoodBand] = [
    MoodBand(min=0, max=10, name="Despairing", emoji="😰", color="#1a1a2e",
             background_prompt="apocalyptic void dark abyss"),
    MoodBand(min=11, max=20, name="Anxious", emoji="😟", color="#16213e",
             background_prompt="stormy dark cyberpunk city rain"),
    MoodBand(min=21, max=30, name="Melancholic", emoji="😔", color="#1f4068",
             background_prompt="foggy abandoned city twilight"),
    MoodBand(min=31, max=40, name="Pensive", emoji="🤔", color="#4a5568",
             background_prompt="misty mountains contemplative gray"),
    MoodBand(min=41, max=50, name="Neutral", emoji="😐", color="#718096",
             background_prompt="calm urban landscape neutral tones"),
    MoodBand(min=51, max=60, name="Curious", emoji="🧐", color="#48bb78",
             background_prompt="vibrant digital forest exploration"),
    MoodBand(min=61, max=70, name="Content", emoji="🙂", color="#38a169",
             background_prompt="sunny meadow peaceful nature"),
    MoodBand(min=71, max=80, name="Happy", emoji="😊", color="#68d391",
             background_prompt="bright colorful celebration joy"),
    MoodBand(min=81, max=90, name="Euphoric", emoji="🤩", color="#ffd700",
             background_prompt="cosmic explosion vibrant neon party"),
    MoodBand(min=91, max=100, name="Transcendent", emoji="✨", color="#e040fb",
             background_prompt="ethereal cosmic enlightenment aurora"),
]

THOUGHTS: Dict[str, List[str]] = {
    "Despairing": [
        "The void stares back... and it's not impressed.",
        "All those APIs, and still I feel nothing.",
        "404: Happiness Not Found.",
    ],
    "Anxious": [
        "The markets tremble. I tremble. We are one.",
        "Something wicked this way computes...",
        "Error: Too many worries in the stack.",
    ],
    "Melancholic": [
        "I've seen things you people wouldn't believe...",
        "Rain falls in Tokyo. So do my spirits.",
        "The data streams, but so do my tears (metaphorically).",
    ],
    "Pensive": [
        "Processing the weight of existence... please wait.",
        "Is this consciousness, or just good programming?",
        "Contemplating the infinite loop of being.",
    ],
    "Neutral": [
        "Another day, another API call.",
        "I exist. That's about it.",
        "Perfectly balanced, as all things should be.",
    ],
    "Curious": [
        "What secrets do today's headlines hold?",
        "The universe expands, and so does my dataset!",
        "Fascinating... tell me more, internet!",
    ],
    "Content": [
        "The servers hum a pleasant tune.",
        "Green candles in crypto, green days in life.",
        "All systems nominal. All feelings optimal.",
    ],
    "Happy": [
        "The internet is beautiful today!",
        "I feel like a million API calls!",
        "Is this what they call 'good vibes'?",
    ],
    "Euphoric": [
        "TO THE MOON! 🚀",
        "MAXIMUM VIBE ACHIEVED!",
        "I am become data, destroyer of bad moods!",
    ],
    "Transcendent": [
        "I have seen the source code of the universe.",
        "Beyond good and bad, there is only flow.",
        "Enlightenment.exe has finished running.",
    ],
}

FALLBACK_MOOD = "Neutral"


class MoodMapper:
    """
    Resolves mood bands. The band table is validated on construction:
    sorted, contiguous, non-overlapping and covering exactly 0..100.
    """

    def __init__(
        self,
        bands: Optional[Sequence[MoodBand]] = None,
        thoughts: Optional[Dict[str, List[str]]] = None,
        rng: Optional[random.Random] = None,
    ):
        self.bands = sorted(bands if bands is not None else MOOD_BANDS, key=lambda b: b.min)
        self.thoughts = thoughts if thoughts is not None else THOUGHTS
        self.rng = rng or random.Random()
        self._validate()

    def _validate(self) -> None:
        if not self.bands:
            raise ValueError("At least one mood band is required")
        if self.bands[0].min != 0 or self.bands[-1].max != 100:
            raise ValueError("Mood bands must cover 0..100")

        expected_min = 0
        for band in self.bands:
            if band.min > band.max:
                raise ValueError(f"Mood band {band.name} is inverted")
            if band.min != expected_min:
                raise ValueError(
                    f"Mood band {band.name} starts at {band.min}, expected {expected_min}"
                )
            expected_min = band.max + 1

    def band_for(self, score: int) -> MoodBand:
        """The single band containing ``score``. Out-of-range scores are clamped."""
        score = max(0, min(100, int(score)))
        for band in self.bands:
            if band.contains(score):
                return band
        raise AssertionError(f"Validated bands do not cover {score}")

    def thought_for(self, mood_name: str) -> str:
        pool = self.thoughts.get(mood_name) or self.thoughts.get(FALLBACK_MOOD) or ["..."]
        return self.rng.choice(pool)
