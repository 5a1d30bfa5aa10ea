"""
Compatibility scoring for candidate items.

Pure functions, no I/O. The ranked policy orders candidates by
ScoredCandidate.sort_key:

    color_score desc -> style_weight desc -> price asc -> rating desc

with the product id as a final tie-break so the order is total.
"""

from typing import Iterable, List, Optional

from core.utils import normalize_text
from outfits.colors import color_score
from outfits.models import CatalogItem, ScoredCandidate
from outfits.rules import STYLE_VIBE_CATEGORY_PREFS, accessory_priority, normalize_vibe


def style_weight(category: Optional[str], vibe: Optional[str]) -> int:
    """
    Vibe preference weight of a category.

    max(0, len(prefs) - index) when the category is in the vibe's list,
    else 0. No vibe means 0 for everything.
    """
    key = normalize_vibe(vibe)
    if not key or not category:
        return 0
    prefs = [normalize_text(c) for c in STYLE_VIBE_CATEGORY_PREFS.get(key, [])]
    wanted = normalize_text(category)
    if wanted not in prefs:
        return 0
    return max(0, len(prefs) - prefs.index(wanted))


def score_candidate(
    base: CatalogItem,
    candidate: CatalogItem,
    vibe: Optional[str] = None,
) -> ScoredCandidate:
    weight = style_weight(candidate.sub_category, vibe)
    if not weight:
        weight = style_weight(candidate.category, vibe)
    return ScoredCandidate(
        item=candidate,
        color_score=color_score(base.color_label, candidate.color_label),
        style_weight=weight,
    )


def score_candidates(
    base: CatalogItem,
    candidates: Iterable[CatalogItem],
    vibe: Optional[str] = None,
) -> List[ScoredCandidate]:
    return [score_candidate(base, c, vibe) for c in candidates]


def rank_candidates(candidates: Iterable[ScoredCandidate]) -> List[ScoredCandidate]:
    """Best first."""
    return sorted(candidates, key=lambda c: c.sort_key)


def prioritize_accessories(
    ranked: Iterable[ScoredCandidate],
    gender: Optional[str],
) -> List[ScoredCandidate]:
    """
    Group ranked accessories by ACCESSORY_PRIORITY, best group first.

    The sort is stable, so sort_key order holds inside each group.
    Accessories matching no group follow every matched one.
    """
    ranked = list(ranked)
    if not gender:
        return ranked

    def group(candidate: ScoredCandidate) -> float:
        item = candidate.item
        index = accessory_priority(
            gender, item.name, item.category, item.sub_category, item.master_category,
        )
        return float("inf") if index is None else index

    return sorted(ranked, key=group)
