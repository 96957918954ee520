"""The culture: spirit Pokemon, books, drinks, past lives and apparent age."""

from datetime import date

import httpx

from zeitgeist.context.selector import DailyContext
from zeitgeist.models.sources import (
    AgeReading,
    BookReading,
    CocktailReading,
    MaturityLevel,
    PokemonReading,
    WaybackReading,
)
from zeitgeist.sources.http import SourceFetchError, get_json, truncate
from zeitgeist.sources.urls import endpoint

BOOK_FALLBACK = BookReading(title="The Hitchhiker's Guide to the Galaxy", author="Douglas Adams")
COCKTAIL_FALLBACK = CocktailReading(name="Water", instructions="Pour. Drink. Hydrate.")
AGE_FALLBACK = AgeReading(predicted_age=30, maturity_level=MaturityLevel.MATURE)

WAYBACK_YEARS = 10


async def fetch_pokemon(client: httpx.AsyncClient, ctx: DailyContext) -> PokemonReading:
    data = await get_json(client, endpoint("pokemon", pokemon_id=ctx.pokemon_id))
    types = [t["type"]["name"] for t in data.get("types") or []]
    return PokemonReading(
        name=data["name"],
        id=data["id"],
        sprite=(data.get("sprites") or {}).get("front_default"),
        types=types,
        color=types[0] if types else None,
    )


async def fetch_book(client: httpx.AsyncClient, ctx: DailyContext) -> BookReading:
    data = await get_json(
        client, endpoint("book", subject=ctx.book_subject), params={"limit": 10}
    )
    works = data.get("works") or []
    if not works:
        raise SourceFetchError("book", f"no works for subject {ctx.book_subject}")

    # Same book for the whole day.
    work = works[ctx.lucky_number % len(works)]
    authors = work.get("authors") or [{}]
    cover_id = work.get("cover_id")
    return BookReading(
        title=work["title"],
        author=authors[0].get("name"),
        subject=ctx.book_subject,
        cover_id=cover_id,
        cover_url=endpoint("book_cover", cover_id=cover_id) if cover_id else None,
    )


async def fetch_cocktail(client: httpx.AsyncClient, ctx: DailyContext) -> CocktailReading:
    data = await get_json(client, endpoint("cocktail"))
    drinks = data.get("drinks") or []
    if not drinks:
        raise SourceFetchError("cocktail", "no drinks")

    drink = drinks[0]
    return CocktailReading(
        name=drink["strDrink"],
        category=drink.get("strCategory"),
        glass=drink.get("strGlass"),
        instructions=truncate(drink.get("strInstructions"), 150),
        image=drink.get("strDrinkThumb"),
        is_alcoholic=drink.get("strAlcoholic") == "Alcoholic",
    )


def _years_ago(day: date, years: int) -> date:
    try:
        return day.replace(year=day.year - years)
    except ValueError:                      # Feb 29
        return day.replace(year=day.year - years, day=28)


async def fetch_wayback(client: httpx.AsyncClient, ctx: DailyContext) -> WaybackReading:
    timestamp = _years_ago(ctx.now.date(), WAYBACK_YEARS).strftime("%Y%m%d")
    data = await get_json(
        client, endpoint("wayback"), params={"url": ctx.wayback_site, "timestamp": timestamp}
    )
    closest = (data.get("archived_snapshots") or {}).get("closest") or {}
    return WaybackReading(
        original_site=ctx.wayback_site,
        archive_url=closest.get("url"),
        archive_date=closest.get("timestamp"),
        available=bool(closest.get("available")),
    )


def maturity_for(age: int) -> MaturityLevel:
    if age > 40:
        return MaturityLevel.WISE
    if age > 25:
        return MaturityLevel.MATURE
    return MaturityLevel.YOUTHFUL


async def fetch_age(client: httpx.AsyncClient, ctx: DailyContext) -> AgeReading:
    data = await get_json(client, endpoint("agify"), params={"name": ctx.agify_name})
    age = data.get("age")
    if not isinstance(age, int):
        raise SourceFetchError("age", f"no prediction for {ctx.agify_name}")
    return AgeReading(name=data.get("name"), predicted_age=age, maturity_level=maturity_for(age))
