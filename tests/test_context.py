"""Tests for the Deterministic Context Selector."""

from datetime import datetime, timedelta, timezone

import pytest

from zeitgeist.context.selector import (
    MOOD_WORDS,
    WORLD_CAPITALS,
    DailyContextSelector,
    date_seed,
    day_number,
    pick,
)
from zeitgeist.models import City


def _at(year=2026, month=10, day=19, hour=12) -> datetime:
    return datetime(year, month, day, hour, tzinfo=timezone.utc)


class TestPick:
    def test_date_seed(self):
        assert date_seed(_at()) == 20261019

    def test_day_number_is_continuous(self):
        assert day_number(_at(month=3, day=1)) - day_number(_at(month=2, day=28)) == 1
        assert day_number(_at(year=2027, month=1, day=1)) - day_number(_at(month=12, day=31)) == 1

    def test_modulo_keeps_index_in_bounds(self):
        assert pick(["a", "b", "c"], 10**12 + 1) == "c"

    def test_empty_list_rejected(self):
        with pytest.raises(ValueError):
            pick([], 3)


class TestDailyContextSelector:
    def setup_method(self):
        self.selector = DailyContextSelector()

    def test_same_day_same_context(self):
        morning = self.selector.context_for(_at(hour=1))
        evening = self.selector.context_for(_at(hour=23))
        assert morning.city == evening.city
        assert morning.word_of_day == evening.word_of_day
        assert morning.agify_name == evening.agify_name
        assert morning.entity_name == evening.entity_name
        assert morning.pokemon_id == evening.pokemon_id

    def test_repeatable(self):
        assert self.selector.context_for(_at()) == self.selector.context_for(_at())

    def test_city_matches_day_number(self):
        assert self.selector.city_of_the_day(_at()) == WORLD_CAPITALS[day_number(_at()) % 12]

    def test_cities_cycle_over_consecutive_days(self):
        start = _at(day=1)
        seen = {
            self.selector.city_of_the_day(start + timedelta(days=i)).name
            for i in range(len(WORLD_CAPITALS))
        }
        assert seen == {c.name for c in WORLD_CAPITALS}

    def test_words_cycle_over_consecutive_days(self):
        start = _at(day=1)
        seen = {
            self.selector.word_of_the_day(start + timedelta(days=i))
            for i in range(len(MOOD_WORDS))
        }
        assert seen == set(MOOD_WORDS)

    @pytest.mark.parametrize("start", [_at(month=1, day=25), _at(month=2, day=20), _at(month=12, day=26)])
    def test_rotation_crosses_month_and_year_ends(self, start):
        cities = {
            self.selector.city_of_the_day(start + timedelta(days=i)).name
            for i in range(len(WORLD_CAPITALS))
        }
        words = {
            self.selector.word_of_the_day(start + timedelta(days=i))
            for i in range(len(MOOD_WORDS))
        }
        assert len(cities) == len(WORLD_CAPITALS)
        assert words == set(MOOD_WORDS)

    def test_different_days_can_differ(self):
        assert self.selector.city_of_the_day(_at(day=19)) != self.selector.city_of_the_day(_at(day=20))

    def test_quote_index_rotates_by_hour(self):
        assert self.selector.context_for(_at(hour=3)).quote_index != (
            self.selector.context_for(_at(hour=4)).quote_index
        )

    def test_ranges(self):
        ctx = self.selector.context_for(_at())
        assert 1 <= ctx.pokemon_id <= 898
        assert 0 <= ctx.lucky_number <= 100
        assert 0 <= ctx.quote_index < 15

    def test_entity_name(self):
        # day 19 -> "Axi" (19 % 8 = 3), month 10 -> "byte" (10 % 8 = 2)
        assert self.selector.entity_name(_at()) == "Axibyte"

    def test_custom_single_city(self):
        city = City(name="Reykjavik", lat=64.1, lon=-21.9, timezone="Atlantic/Reykjavik")
        selector = DailyContextSelector(cities=[city])
        assert selector.context_for(_at()).city == city

    def test_empty_candidates_rejected(self):
        with pytest.raises(ValueError):
            DailyContextSelector(cities=[])
        with pytest.raises(ValueError):
            DailyContextSelector(words=[])
