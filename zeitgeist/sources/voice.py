"""The voice: jokes, quotes, advice, the word of the day and number trivia."""

import json
import math

import httpx

from zeitgeist.context.selector import DailyContext
from zeitgeist.models.sources import (
    AdviceReading,
    JokeReading,
    NumberFactReading,
    QuoteReading,
    WordReading,
)
from zeitgeist.sources.http import SourceFetchError, get_json
from zeitgeist.sources.urls import endpoint

JOKE_FALLBACK = JokeReading(
    joke="Why did the API fail? Because it had too many requests!",
    category="Programming",
    type="single",
)
ADVICE_FALLBACK = AdviceReading(advice="Trust the process.")

CURATED_QUOTES = [
    ("The only true wisdom is in knowing you know nothing.", "Socrates"),
    ("In the middle of difficulty lies opportunity.", "Albert Einstein"),
    ("We are what we repeatedly do. Excellence is not an act, but a habit.", "Aristotle"),
    ("The unexamined life is not worth living.", "Socrates"),
    ("Happiness is not something ready made. It comes from your own actions.", "Dalai Lama"),
    ("The only way to do great work is to love what you do.", "Steve Jobs"),
    ("In three words I can sum up everything I've learned about life: it goes on.", "Robert Frost"),
    ("The mind is everything. What you think you become.", "Buddha"),
    ("Life is what happens when you're busy making other plans.", "John Lennon"),
    ("The future belongs to those who believe in the beauty of their dreams.", "Eleanor Roosevelt"),
    ("It is during our darkest moments that we must focus to see the light.", "Aristotle"),
    ("The only impossible journey is the one you never begin.", "Tony Robbins"),
    ("Everything you've ever wanted is on the other side of fear.", "George Addair"),
    ("Believe you can and you're halfway there.", "Theodore Roosevelt"),
    ("The best time to plant a tree was 20 years ago. The second best time is now.", "Chinese Proverb"),
]

NUMBER_FACTS = {
    0: "0 is the only number that cannot be represented in Roman numerals.",
    1: "1 is the only number that is neither prime nor composite.",
    7: "7 is considered a lucky number in many cultures around the world.",
    10: "10 is the base of our decimal system, inspired by our 10 fingers.",
    12: "12 is a highly composite number, divisible by 1, 2, 3, 4, 6, and 12.",
    13: "13 is considered unlucky in Western cultures but lucky in Italy.",
    21: "21 is the sum of the first six natural numbers (1+2+3+4+5+6).",
    23: "23 is the smallest prime number that consists of consecutive digits.",
    42: "42 is the Answer to the Ultimate Question of Life, the Universe, and Everything.",
    50: "50 is the smallest number that can be written as the sum of two squares in two ways.",
    64: "64 is the number of squares on a chess board.",
    73: "73 is considered the best number by Sheldon Cooper in The Big Bang Theory.",
    99: "99 is the largest two-digit number in the decimal system.",
    100: "100 is a perfect square and the basis of percentages.",
}


# --- Joke (JokeAPI) ---

async def fetch_joke(client: httpx.AsyncClient, ctx: DailyContext) -> JokeReading:
    data = await get_json(client, endpoint("joke"), params={"safe-mode": ""})
    if data.get("error"):
        raise SourceFetchError("joke", "provider reported an error")

    if data.get("type") == "single":
        text = data.get("joke")
    else:
        text = f"{data.get('setup')} ... {data.get('delivery')}"
    return JokeReading(joke=text, category=data.get("category"), type=data.get("type"))


# --- Quote (DummyJSON) ---

def quote_fallback(ctx: DailyContext) -> QuoteReading:
    """A curated quote, rotated by day and hour."""
    content, author = CURATED_QUOTES[ctx.quote_index % len(CURATED_QUOTES)]
    return QuoteReading(content=content, author=author, tags=["wisdom"])


async def fetch_quote(client: httpx.AsyncClient, ctx: DailyContext) -> QuoteReading:
    data = await get_json(client, endpoint("quote"))
    if not data.get("quote") or not data.get("author"):
        raise SourceFetchError("quote", "invalid response")
    return QuoteReading(content=data["quote"], author=data["author"], tags=["wisdom"])


# --- Advice (Advice Slip) ---

async def fetch_advice(client: httpx.AsyncClient, ctx: DailyContext) -> AdviceReading:
    # Served as text/html, so decode the body ourselves.
    r = await client.get(endpoint("advice"))
    r.raise_for_status()
    data = json.loads(r.text)
    slip = data.get("slip") or {}
    if not slip.get("advice"):
        raise SourceFetchError("advice", "empty slip")
    return AdviceReading(advice=slip["advice"], id=slip.get("id"))


# --- Word of the day (Free Dictionary) ---

def word_fallback(ctx: DailyContext) -> WordReading:
    return WordReading(
        word=ctx.word_of_day,
        definition="A beautiful word awaiting discovery",
        part_of_speech="noun",
    )


async def fetch_word(client: httpx.AsyncClient, ctx: DailyContext) -> WordReading:
    data = await get_json(client, endpoint("dictionary", word=ctx.word_of_day))
    if not isinstance(data, list) or not data:
        raise SourceFetchError("word_of_day", "no dictionary entries")

    entry = data[0]
    meanings = entry.get("meanings") or [{}]
    definitions = meanings[0].get("definitions") or [{}]
    return WordReading(
        word=ctx.word_of_day,
        definition=definitions[0].get("definition"),
        part_of_speech=meanings[0].get("partOfSpeech"),
        phonetic=entry.get("phonetic"),
    )


# --- Number fact (Numbers API) ---

def is_prime(n: int) -> bool:
    if n < 2:
        return False
    for i in range(2, math.isqrt(n) + 1):
        if n % i == 0:
            return False
    return True


def local_number_fact(n: int) -> str:
    if n in NUMBER_FACTS:
        return NUMBER_FACTS[n]
    if n % 10 == 0:
        return f"{n} is a round number, divisible by 10."
    if n % 7 == 0:
        return f"{n} is divisible by the lucky number 7."
    if is_prime(n):
        return f"{n} is a prime number, divisible only by 1 and itself."
    if n % 2 == 0:
        return f"{n} is an even number."
    return f"{n} is an odd number with its own unique properties."


def number_fact_fallback(ctx: DailyContext) -> NumberFactReading:
    return NumberFactReading(number=ctx.lucky_number, fact=local_number_fact(ctx.lucky_number))


async def fetch_number_fact(client: httpx.AsyncClient, ctx: DailyContext) -> NumberFactReading:
    number = ctx.lucky_number
    data = await get_json(client, endpoint("number", number=number), params={"json": ""})
    return NumberFactReading(
        number=number,
        fact=data.get("text") or local_number_fact(number),
        type=data.get("type") or "trivia",
    )
