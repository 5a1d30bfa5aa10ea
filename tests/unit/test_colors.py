"""
Unit tests for color classification and color harmony scoring.
"""

import itertools

import pytest

from outfits.colors import (
    SCORE_CROSS_TEMPERATURE,
    SCORE_EMPTY,
    SCORE_FALLBACK,
    SCORE_NEUTRAL,
    SCORE_SAME,
    SCORE_SAME_TEMPERATURE,
    classify_color,
    color_score,
)
from outfits.models import ColorBucket


SAMPLE_COLORS = [
    "", None, "Black", "White", "Navy Blue", "Beige", "Red", "Maroon", "Mustard",
    "Blue", "Olive", "Teal", "Magenta", "Lilac", "#ff0000", "#0000ff", "#777777",
]


class TestClassifyColor:
    """Word-list membership by substring, case-insensitive."""

    @pytest.mark.parametrize("color, bucket", [
        ("Black", ColorBucket.NEUTRAL),
        ("navy blue", ColorBucket.NEUTRAL),
        ("Off-White", ColorBucket.NEUTRAL),
        ("Charcoal Grey", ColorBucket.NEUTRAL),
        ("Red", ColorBucket.WARM),
        ("Burgundy", ColorBucket.WARM),
        ("Rose Gold", ColorBucket.WARM),
        ("Light Blue", ColorBucket.COOL),
        ("Olive", ColorBucket.COOL),
        ("Teal", ColorBucket.COOL),
        ("Magenta", ColorBucket.UNCLASSIFIED),
        ("Multi", ColorBucket.UNCLASSIFIED),
    ])
    def test_named_colors(self, color, bucket):
        assert classify_color(color) is bucket

    def test_empty_is_unclassified(self):
        assert classify_color("") is ColorBucket.UNCLASSIFIED
        assert classify_color("   ") is ColorBucket.UNCLASSIFIED
        assert classify_color(None) is ColorBucket.UNCLASSIFIED

    def test_navy_is_neutral_not_cool(self):
        """Neutral list is checked before the cool list."""
        assert classify_color("Navy") is ColorBucket.NEUTRAL

    @pytest.mark.parametrize("color, bucket", [
        ("#000000", ColorBucket.NEUTRAL),
        ("#FFFFFF", ColorBucket.NEUTRAL),
        ("#808080", ColorBucket.NEUTRAL),
        ("#ff0000", ColorBucket.WARM),
        ("#f80", ColorBucket.WARM),
        ("#0000ff", ColorBucket.COOL),
        ("#00ff00", ColorBucket.COOL),
    ])
    def test_hex_colors(self, color, bucket):
        assert classify_color(color) is bucket

    def test_hex_requires_hash(self):
        """Plain words made of hex digits are not parsed as hex."""
        assert classify_color("fab") is ColorBucket.UNCLASSIFIED


class TestColorScore:
    """Bucket-based harmony score."""

    def test_empty_side_scores_zero(self):
        assert color_score("", "Red") == SCORE_EMPTY
        assert color_score("Red", "") == SCORE_EMPTY
        assert color_score(None, None) == SCORE_EMPTY

    def test_colorless_base_ties_neutral_candidates(self):
        """An empty base scores 0 even against a neutral candidate."""
        assert color_score("", "Black") == SCORE_EMPTY
        assert color_score("Black", "") == SCORE_EMPTY

    def test_neutral_scores_two(self):
        assert color_score("Black", "Red") == SCORE_NEUTRAL == 2
        assert color_score("Red", "Black") == SCORE_NEUTRAL
        assert color_score("Magenta", "White") == SCORE_NEUTRAL

    def test_neutral_with_itself(self):
        assert color_score("Navy", "Navy") == 2
        assert color_score("Black", "White") == 2

    def test_same_literal_non_neutral(self):
        assert color_score("Red", "red ") == SCORE_SAME == 0.5

    def test_same_temperature(self):
        assert color_score("Red", "Orange") == SCORE_SAME_TEMPERATURE == 1.5
        assert color_score("Blue", "Green") == SCORE_SAME_TEMPERATURE

    def test_cross_temperature(self):
        assert color_score("Red", "Blue") == SCORE_CROSS_TEMPERATURE == 0.8
        assert color_score("Teal", "Mustard") == SCORE_CROSS_TEMPERATURE

    def test_fallback(self):
        assert color_score("Magenta", "Lilac") == SCORE_FALLBACK == 1
        assert color_score("Magenta", "Red") == SCORE_FALLBACK

    def test_symmetric(self):
        for a, b in itertools.product(SAMPLE_COLORS, repeat=2):
            assert color_score(a, b) == color_score(b, a), (a, b)

    def test_neutral_always_two_when_other_side_present(self):
        for other in SAMPLE_COLORS:
            if other:
                assert color_score("Grey", other) == 2, other
