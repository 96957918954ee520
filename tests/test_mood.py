"""Tests for the Mood Mapper."""

import random

import pytest

from zeitgeist.models import MoodBand
from zeitgeist.mood.mapper import MOOD_BANDS, THOUGHTS, MoodMapper


def _band(lo: int, hi: int, name: str) -> MoodBand:
    return MoodBand(min=lo, max=hi, name=name, emoji="?", color="#000000", background_prompt="")


class TestMoodBands:
    def test_ten_bands(self):
        assert len(MOOD_BANDS) == 10
        assert len({b.name for b in MOOD_BANDS}) == 10

    def test_every_score_has_exactly_one_band(self):
        for score in range(0, 101):
            matches = [b for b in MOOD_BANDS if b.contains(score)]
            assert len(matches) == 1, score

    def test_every_band_has_thoughts(self):
        for band in MOOD_BANDS:
            assert THOUGHTS[band.name]


class TestMoodMapper:
    def setup_method(self):
        self.mapper = MoodMapper(rng=random.Random(1))

    @pytest.mark.parametrize(
        "score,name",
        [
            (0, "Despairing"),
            (10, "Despairing"),
            (11, "Anxious"),
            (50, "Neutral"),
            (51, "Curious"),
            (90, "Euphoric"),
            (91, "Transcendent"),
            (100, "Transcendent"),
        ],
    )
    def test_boundaries(self, score, name):
        assert self.mapper.band_for(score).name == name

    def test_out_of_range_is_clamped(self):
        assert self.mapper.band_for(-5).name == "Despairing"
        assert self.mapper.band_for(150).name == "Transcendent"

    def test_thought_comes_from_mood_pool(self):
        for _ in range(20):
            assert self.mapper.thought_for("Happy") in THOUGHTS["Happy"]

    def test_unknown_mood_uses_neutral_thoughts(self):
        assert self.mapper.thought_for("Bewildered") in THOUGHTS["Neutral"]

    def test_seeded_thoughts_are_repeatable(self):
        a = MoodMapper(rng=random.Random(9))
        b = MoodMapper(rng=random.Random(9))
        assert [a.thought_for("Pensive") for _ in range(5)] == [
            b.thought_for("Pensive") for _ in range(5)
        ]

    def test_gap_rejected(self):
        with pytest.raises(ValueError):
            MoodMapper(bands=[_band(0, 40, "Low"), _band(42, 100, "High")])

    def test_overlap_rejected(self):
        with pytest.raises(ValueError):
            MoodMapper(bands=[_band(0, 50, "Low"), _band(50, 100, "High")])

    def test_partial_coverage_rejected(self):
        with pytest.raises(ValueError):
            MoodMapper(bands=[_band(0, 50, "Low"), _band(51, 99, "High")])

    def test_two_band_table(self):
        mapper = MoodMapper(bands=[_band(51, 100, "High"), _band(0, 50, "Low")])
        assert mapper.band_for(50).name == "Low"
        assert mapper.band_for(51).name == "High"
