"""
Color classification and deterministic color harmony.

A color descriptor is bucketed into Neutral / Warm / Cool / Unclassified
by substring membership in fixed word lists ("navy blue" matches "navy").
Hex descriptors ("#1f2a44") are bucketed from their HSV values.
"""

import colorsys
import re
from typing import Optional

from core.utils import normalize_text
from outfits.models import ColorBucket


NEUTRAL_COLORS = (
    "black", "white", "grey", "gray", "navy", "beige", "cream", "ivory",
    "charcoal", "off-white", "khaki", "taupe", "silver",
)
WARM_COLORS = (
    "red", "orange", "copper", "maroon", "burgundy", "mustard", "coral",
    "yellow", "gold", "rust", "peach", "pink", "brown", "wine",
)
COOL_COLORS = (
    "blue", "green", "teal", "aqua", "turquoise", "purple", "lavender",
    "olive", "mint", "violet", "cyan",
)

_HEX_RE = re.compile(r"^#([0-9a-f]{6}|[0-9a-f]{3})$")

# Harmony scores
SCORE_EMPTY = 0.0
SCORE_NEUTRAL = 2.0
SCORE_SAME = 0.5
SCORE_SAME_TEMPERATURE = 1.5
SCORE_CROSS_TEMPERATURE = 0.8
SCORE_FALLBACK = 1.0


def _hex_bucket(value: str) -> ColorBucket:
    digits = _HEX_RE.match(value).group(1)
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    r, g, b = (int(digits[i:i + 2], 16) / 255.0 for i in (0, 2, 4))
    hue, sat, val = colorsys.rgb_to_hsv(r, g, b)

    if sat < 0.18 or val < 0.15 or (val > 0.92 and sat < 0.25):
        return ColorBucket.NEUTRAL
    degrees = hue * 360
    if degrees < 70 or degrees >= 290:
        return ColorBucket.WARM
    if 80 <= degrees < 270:
        return ColorBucket.COOL
    return ColorBucket.UNCLASSIFIED


def classify_color(color: Optional[str]) -> ColorBucket:
    """Bucket a color name or hex string. Never raises."""
    c = normalize_text(color)
    if not c:
        return ColorBucket.UNCLASSIFIED
    if _HEX_RE.match(c):
        return _hex_bucket(c)
    # Neutral first: "navy" is also listed as cool
    if any(n in c for n in NEUTRAL_COLORS):
        return ColorBucket.NEUTRAL
    if any(w in c for w in WARM_COLORS):
        return ColorBucket.WARM
    if any(k in c for k in COOL_COLORS):
        return ColorBucket.COOL
    return ColorBucket.UNCLASSIFIED


def color_score(base_color: Optional[str], candidate_color: Optional[str]) -> float:
    """
    Harmony score of a candidate color against the base color (higher is better).

    - either side empty               -> 0 (a colorless base ties every
                                         candidate, neutrals included)
    - either side Neutral             -> 2
    - same literal (non-neutral)      -> 0.5
    - both Warm / both Cool           -> 1.5
    - one Warm, one Cool              -> 0.8
    - anything else                   -> 1
    Symmetric in its two arguments.
    """
    base = normalize_text(base_color)
    cand = normalize_text(candidate_color)
    if not base or not cand:
        return SCORE_EMPTY

    base_bucket = classify_color(base)
    cand_bucket = classify_color(cand)

    if ColorBucket.NEUTRAL in (base_bucket, cand_bucket):
        return SCORE_NEUTRAL
    if base == cand:
        return SCORE_SAME
    if base_bucket == cand_bucket and base_bucket in (ColorBucket.WARM, ColorBucket.COOL):
        return SCORE_SAME_TEMPERATURE
    if {base_bucket, cand_bucket} == {ColorBucket.WARM, ColorBucket.COOL}:
        return SCORE_CROSS_TEMPERATURE
    return SCORE_FALLBACK
