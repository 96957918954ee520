"""
Canonical constants table for the vibe score.

Categorical sources map a closed enum onto a fixed delta. Every table must
cover its enum exactly; this is checked at import time so a new enum member
without a delta fails loudly instead of silently scoring 0.
"""

from enum import Enum
from typing import Dict, Type

from zeitgeist.models.sources import CosmicMood, MaturityLevel, SolarPhase, WeatherMood

WEATHER_DELTAS: Dict[WeatherMood, int] = {
    WeatherMood.SUNNY: 15,
    WeatherMood.SNOWY: 5,
    WeatherMood.NEUTRAL: 0,
    WeatherMood.FOGGY: -5,
    WeatherMood.RAINY: -10,
    WeatherMood.STORMY: -15,
}

SOLAR_DELTAS: Dict[SolarPhase, int] = {
    SolarPhase.DAWN: 5,
    SolarPhase.MORNING: 3,
    SolarPhase.AFTERNOON: 0,
    SolarPhase.DUSK: -2,
    SolarPhase.NIGHT: -5,
}

COSMIC_DELTAS: Dict[CosmicMood, int] = {
    CosmicMood.CREATIVE: 5,
    CosmicMood.WONDER: 4,
    CosmicMood.GROUNDED: 3,
    CosmicMood.INTENSE: 0,
    CosmicMood.NIHILISTIC: -5,
}

MATURITY_DELTAS: Dict[MaturityLevel, int] = {
    MaturityLevel.WISE: 3,
    MaturityLevel.ETERNAL: 2,
    MaturityLevel.MATURE: 0,
    MaturityLevel.YOUTHFUL: -3,
}

def _check_exhaustive(table: Dict, enum_type: Type[Enum]) -> None:
    missing = set(enum_type) - set(table)
    if missing:
        names = ", ".join(sorted(m.value for m in missing))
        raise RuntimeError(f"{enum_type.__name__} deltas missing: {names}")


_check_exhaustive(WEATHER_DELTAS, WeatherMood)
_check_exhaustive(SOLAR_DELTAS, SolarPhase)
_check_exhaustive(COSMIC_DELTAS, CosmicMood)
_check_exhaustive(MATURITY_DELTAS, MaturityLevel)
