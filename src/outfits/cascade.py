"""
Fallback Cascade.

Per slot, progressively relaxed retrieval, stopping at the first stage
that yields at least one pick:

  1. STRICT             accepted categories narrowed by vibe and base
                        category, mood keyword filter, full exclusions
                        (applied to every match, not a truncated prefix)
  2. MOOD_RELAXED       no vibe/mood/base-category narrowing, full exclusions
  3. EXCLUSION_RELAXED  caller-supplied ids dropped; this outfit's picks,
                        its categories and the base product still excluded;
                        slightly larger pool

Picks are folded into the running ExclusionState before the next slot is
processed. A RetrievalError leaves the slot unfilled.
"""

import random
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Set

from core.logging import get_logger
from outfits.exceptions import RetrievalError
from outfits.models import CatalogItem, ExclusionState, Role, Slot
from outfits.retrieval import CandidateRetriever, Deadline
from outfits.selection import SelectionContext, SelectionPolicy

logger = get_logger(__name__)


class CascadeStage(str, Enum):
    STRICT = "strict"
    MOOD_RELAXED = "mood_relaxed"
    EXCLUSION_RELAXED = "exclusion_relaxed"


ALL_STAGES = (CascadeStage.STRICT, CascadeStage.MOOD_RELAXED, CascadeStage.EXCLUSION_RELAXED)


@dataclass
class OutfitContext:
    """Per-outfit inputs shared by every slot of one compose call."""

    base: CatalogItem
    base_role: Role
    base_category: Optional[str]
    gender: Optional[str]
    state: ExclusionState
    vibe: Optional[str] = None
    mood: Optional[str] = None
    rng: Optional[random.Random] = None
    deadline: Deadline = field(default_factory=Deadline.unbounded)
    # ids picked for this outfit only (subset of state.used_product_ids)
    outfit_ids: Set[str] = field(default_factory=set)

    def record(self, items: List[CatalogItem]) -> None:
        for item in items:
            self.state.add(item)
            self.outfit_ids.add(item.product_id)


@dataclass(frozen=True)
class SlotFill:
    slot: Slot
    items: List[CatalogItem] = field(default_factory=list)
    stage: Optional[CascadeStage] = None
    failed: bool = False

    @property
    def filled(self) -> bool:
        return bool(self.items)


class FallbackCascade:
    def __init__(
        self,
        retriever: CandidateRetriever,
        policy: SelectionPolicy,
        fallback_extra: int = 2,
        stages=ALL_STAGES,
    ):
        self.retriever = retriever
        self.policy = policy
        self.fallback_extra = fallback_extra
        self.stages = tuple(stages)

    def _fetch(self, stage: CascadeStage, slot: Slot, ctx: OutfitContext, limit: int) -> List[CatalogItem]:
        # Ranking sorts every match; only sampling draws from a bounded pool
        pool = self.retriever.pool_size if self.policy.samples_catalog else None
        common = dict(
            gender=ctx.gender,
            base_product_id=ctx.base.product_id,
            excluded_categories=set(ctx.state.used_categories),
            base_role=ctx.base_role,
            sample=self.policy.samples_catalog,
            rng=ctx.rng,
            deadline=ctx.deadline,
        )
        if stage is CascadeStage.STRICT:
            return self.retriever.fetch(
                slot,
                excluded_ids=set(ctx.state.used_product_ids),
                limit=pool,
                mood=ctx.mood,
                vibe=ctx.vibe,
                base_category=ctx.base_category,
                **common,
            )
        if stage is CascadeStage.MOOD_RELAXED:
            return self.retriever.fetch(
                slot, excluded_ids=set(ctx.state.used_product_ids), limit=pool, **common,
            )
        return self.retriever.fetch(
            slot,
            excluded_ids=set(ctx.outfit_ids),
            limit=None if pool is None else pool + max(self.fallback_extra, limit),
            **common,
        )

    def fill(self, slot: Slot, ctx: OutfitContext, limit: int) -> SlotFill:
        """Fill one slot, record its picks in ctx, and report the stage used."""
        if limit <= 0:
            return SlotFill(slot=slot)

        selection = SelectionContext(
            base=ctx.base, role=slot.role, vibe=ctx.vibe, gender=ctx.gender,
        )
        for stage in self.stages:
            try:
                candidates = self._fetch(stage, slot, ctx, limit)
            except RetrievalError as e:
                logger.warning(
                    "Slot retrieval failed",
                    role=slot.role.value, stage=stage.value, error=str(e),
                )
                return SlotFill(slot=slot, failed=True)

            # Catalog adapters may over-return; exclusions are re-checked here
            candidates = [
                c for c in candidates
                if c.product_id not in ctx.outfit_ids
                and c.classified_category not in ctx.state.used_categories
            ]
            picks = self.policy.select(candidates, limit, selection)
            if picks:
                ctx.record(picks)
                logger.debug(
                    "Slot filled", role=slot.role.value, stage=stage.value, picked=len(picks),
                )
                return SlotFill(slot=slot, items=picks, stage=stage)

        logger.debug("Slot unfilled", role=slot.role.value)
        return SlotFill(slot=slot)
