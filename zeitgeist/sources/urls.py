"""Provider endpoint table. Base URLs can be overridden through the environment."""

import os
from typing import Dict, Final

OPEN_METEO_BASE: Final[str] = os.getenv("ZEITGEIST_OPEN_METEO_BASE", "https://api.open-meteo.com")
COINGECKO_BASE: Final[str] = os.getenv("ZEITGEIST_COINGECKO_BASE", "https://api.coingecko.com")
HACKER_NEWS_BASE: Final[str] = "https://hacker-news.firebaseio.com"
NASA_BASE: Final[str] = "https://api.nasa.gov"
SUNRISE_SUNSET_BASE: Final[str] = "https://api.sunrise-sunset.org"
USGS_BASE: Final[str] = "https://earthquake.usgs.gov"
JOKE_BASE: Final[str] = "https://v2.jokeapi.dev"
QUOTE_BASE: Final[str] = "https://dummyjson.com"
ADVICE_BASE: Final[str] = "https://api.adviceslip.com"
DICTIONARY_BASE: Final[str] = "https://api.dictionaryapi.dev"
NUMBERS_BASE: Final[str] = "http://numbersapi.com"
POKEAPI_BASE: Final[str] = "https://pokeapi.co"
OPEN_LIBRARY_BASE: Final[str] = "https://openlibrary.org"
COCKTAIL_BASE: Final[str] = "https://www.thecocktaildb.com"
WAYBACK_BASE: Final[str] = "https://archive.org"
AGIFY_BASE: Final[str] = "https://api.agify.io"

ENDPOINTS: Dict[str, str] = {
    "weather": f"{OPEN_METEO_BASE}/v1/forecast",
    "crypto": f"{COINGECKO_BASE}/api/v3/simple/price",
    "news_top": f"{HACKER_NEWS_BASE}/v0/topstories.json",
    "news_item": f"{HACKER_NEWS_BASE}/v0/item/{{item_id}}.json",
    "apod": f"{NASA_BASE}/planetary/apod",
    "sun": f"{SUNRISE_SUNSET_BASE}/json",
    "earthquakes": f"{USGS_BASE}/earthquakes/feed/v1.0/summary/significant_week.geojson",
    "joke": f"{JOKE_BASE}/joke/Programming,Pun",
    "quote": f"{QUOTE_BASE}/quotes/random",
    "advice": f"{ADVICE_BASE}/advice",
    "dictionary": f"{DICTIONARY_BASE}/api/v2/entries/en/{{word}}",
    "number": f"{NUMBERS_BASE}/{{number}}",
    "pokemon": f"{POKEAPI_BASE}/api/v2/pokemon/{{pokemon_id}}",
    "book": f"{OPEN_LIBRARY_BASE}/subjects/{{subject}}.json",
    "book_cover": "https://covers.openlibrary.org/b/id/{cover_id}-M.jpg",
    "cocktail": f"{COCKTAIL_BASE}/api/json/v1/1/random.php",
    "wayback": f"{WAYBACK_BASE}/wayback/available",
    "agify": AGIFY_BASE,
    "robohash": "https://robohash.org/{seed}",
}


def endpoint(key: str, **params) -> str:
    """
    Build a provider URL.
    ex) endpoint("pokemon", pokemon_id=25) -> "https://pokeapi.co/api/v2/pokemon/25"
    """
    template = ENDPOINTS[key]
    return template.format(**params) if params else template
