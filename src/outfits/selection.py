"""
Selection policies.

One pipeline, two strategies. A policy decides how many items a slot may
take and which of the retrieved candidates to keep:

  RankedPolicy   deterministic; score, sort, take the top N per slot,
                 with a cap on the whole outfit
  SampledPolicy  uniform random draw from the filtered pool, capped per
                 role only; the random source is injected for tests

Both keep at most one item per classified category within a slot.
"""

import random
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Protocol, Set

from config.constants import DEFAULT_OUTFIT_LIMITS, OutfitLimits
from outfits.models import CatalogItem, Role, SelectionMode
from outfits.scoring import prioritize_accessories, rank_candidates, score_candidates


@dataclass(frozen=True)
class SelectionContext:
    base: CatalogItem
    role: Role
    vibe: Optional[str] = None
    gender: Optional[str] = None


def one_per_category(items: Iterable[CatalogItem], limit: int) -> List[CatalogItem]:
    """First item of each classified category, in input order, up to limit."""
    picks: List[CatalogItem] = []
    seen: Set[str] = set()
    for item in items:
        if len(picks) >= limit:
            break
        category = item.classified_category
        if category and category in seen:
            continue
        if category:
            seen.add(category)
        picks.append(item)
    return picks


class SelectionPolicy(Protocol):
    mode: SelectionMode
    samples_catalog: bool
    max_items: Optional[int]

    def slot_limit(self, role: Role, selected_so_far: int) -> int:
        ...

    def select(
        self,
        candidates: List[CatalogItem],
        limit: int,
        context: SelectionContext,
    ) -> List[CatalogItem]:
        ...


# =============================================================================
# Ranked
# =============================================================================

class RankedPolicy:
    """
    Score by color harmony and vibe, then take the best N.

    Accessory slots are first grouped by the gender's ACCESSORY_PRIORITY
    (watches before belts for Men, earrings first for Women); the usual
    sort key orders each group.
    """

    mode = SelectionMode.RANKED
    samples_catalog = False

    def __init__(self, items_per_slot: int = 1, max_items: Optional[int] = 3):
        self.items_per_slot = items_per_slot
        self.max_items = max_items

    def slot_limit(self, role: Role, selected_so_far: int) -> int:
        if self.max_items is None:
            return self.items_per_slot
        return max(0, min(self.items_per_slot, self.max_items - selected_so_far))

    def select(
        self,
        candidates: List[CatalogItem],
        limit: int,
        context: SelectionContext,
    ) -> List[CatalogItem]:
        if limit <= 0:
            return []
        ranked = rank_candidates(score_candidates(context.base, candidates, context.vibe))
        if context.role is Role.ACCESSORY:
            ranked = prioritize_accessories(ranked, context.gender)
        return one_per_category((c.item for c in ranked), limit)


# =============================================================================
# Sampled
# =============================================================================

class SampledPolicy:
    """
    Uniform random draw, capped per role.

    Items are drawn one at a time; a drawn item's category leaves the pool,
    so five Jeans in the pool still give at most one Jeans pick.
    """

    mode = SelectionMode.SAMPLED
    samples_catalog = True

    def __init__(
        self,
        role_limits: Optional[Dict[str, int]] = None,
        rng: Optional[random.Random] = None,
        max_items: Optional[int] = None,
        default_limit: int = DEFAULT_OUTFIT_LIMITS.SAMPLED_DEFAULT_LIMIT,
    ):
        self.role_limits = dict(role_limits or DEFAULT_OUTFIT_LIMITS.SAMPLED_ROLE_LIMITS)
        self.rng = rng or random.Random()
        self.max_items = max_items
        self.default_limit = default_limit

    def slot_limit(self, role: Role, selected_so_far: int) -> int:
        limit = self.role_limits.get(role.value, self.default_limit)
        if self.max_items is not None:
            limit = min(limit, self.max_items - selected_so_far)
        return max(0, limit)

    def select(
        self,
        candidates: List[CatalogItem],
        limit: int,
        context: SelectionContext,
    ) -> List[CatalogItem]:
        if limit <= 0 or not candidates:
            return []
        # Stable input order keeps a seeded rng reproducible
        pool = sorted(candidates, key=lambda c: c.product_id)
        return one_per_category(self.rng.sample(pool, len(pool)), limit)


def build_policy(
    mode: SelectionMode,
    limits: OutfitLimits = DEFAULT_OUTFIT_LIMITS,
    rng: Optional[random.Random] = None,
) -> SelectionPolicy:
    """Factory used by the engine; one policy per request."""
    if mode is SelectionMode.SAMPLED:
        return SampledPolicy(
            role_limits=limits.SAMPLED_ROLE_LIMITS,
            rng=rng,
            default_limit=limits.SAMPLED_DEFAULT_LIMIT,
        )
    return RankedPolicy(
        items_per_slot=limits.RANKED_ITEMS_PER_SLOT,
        max_items=limits.RANKED_MAX_ITEMS,
    )
