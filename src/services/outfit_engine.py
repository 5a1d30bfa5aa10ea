"""
Outfit Composition Engine
=========================

Production service behind "Complete the Look". Given a base product it
assembles a small outfit (top / bottom / footwear / accessory) from the
catalog using static rule tables, a color-harmony model, style-vibe
weighting and a per-slot fallback cascade.

Pipeline (one compose() call):
  1. Base lookup           - InvalidInput if missing / not found
  2. Role + plan           - pure; non-outfit bases and missing rules are
                             normal results (blocked / no_plan)
  3. Per slot, in order    - retrieval -> selection policy -> cascade;
                             picks are folded into the ExclusionState
                             before the next slot
  4. Assembly              - reasons, placeholders, item cap

Two policies share the pipeline:
  ranked   deterministic "recommended" look (color, vibe, price, rating)
  sampled  random "shuffle" collection; callers resubmit product_ids as
           excluded_ids so successive calls surface new items
"""

import random
import threading
from typing import List, Optional

from config.constants import OutfitLimits
from config.settings import Settings
from core.logging import get_logger, logging_context
from core.utils import normalize_gender
from outfits.assembler import assemble_outfit, blocked_result, no_plan_result
from outfits.cascade import FallbackCascade, OutfitContext, SlotFill
from outfits.catalog import CatalogQuery
from outfits.exceptions import BaseProductNotFoundError, InvalidInputError
from outfits.models import (
    CatalogItem,
    ExclusionState,
    OutfitRequest,
    OutfitResult,
    Role,
    SelectionMode,
)
from outfits.planner import resolve_plan
from outfits.retrieval import CandidateRetriever, Deadline
from outfits.roles import classify_item_role, classify_role
from outfits.rules import is_non_outfit_category
from outfits.selection import build_policy

logger = get_logger(__name__)


def limits_from_settings(settings: Settings) -> OutfitLimits:
    return OutfitLimits(
        RANKED_MAX_ITEMS=settings.outfit_ranked_max_items,
        RANKED_ITEMS_PER_SLOT=settings.outfit_ranked_items_per_slot,
        SAMPLED_ROLE_LIMITS=dict(settings.outfit_sampled_role_limits),
        CANDIDATE_POOL_SIZE=settings.outfit_candidate_pool_size,
        FALLBACK_EXTRA=settings.outfit_fallback_extra,
        REQUEST_TIMEOUT_SECONDS=settings.outfit_request_timeout_seconds,
    )


class OutfitEngine:
    """
    Stateless between calls. The only mutable input is the optional
    ExclusionState, which the caller owns and may persist across shuffles.
    """

    def __init__(
        self,
        catalog: CatalogQuery,
        limits: Optional[OutfitLimits] = None,
        rng: Optional[random.Random] = None,
    ):
        self.limits = limits or OutfitLimits()
        self.catalog = catalog
        self.rng = rng or random.Random()
        self.retriever = CandidateRetriever(catalog, pool_size=self.limits.CANDIDATE_POOL_SIZE)

    @classmethod
    def from_settings(cls, settings: Settings, catalog: Optional[CatalogQuery] = None) -> "OutfitEngine":
        limits = limits_from_settings(settings)
        if catalog is None:
            from config.database import get_supabase_client
            from outfits.catalog import SupabaseCatalog
            catalog = SupabaseCatalog(
                get_supabase_client(),
                table=settings.catalog_table,
                sample_pool_size=limits.CANDIDATE_POOL_SIZE,
            )
        return cls(catalog, limits=limits)

    # ------------------------------------------------------------------
    # Public
    # ------------------------------------------------------------------

    def compose(
        self,
        request: OutfitRequest,
        exclusions: Optional[ExclusionState] = None,
        rng: Optional[random.Random] = None,
    ) -> OutfitResult:
        """
        Compose one outfit.

        Raises:
            InvalidInputError: base_product_id missing
            BaseProductNotFoundError: base product not in the catalog
            RetrievalError: the base product lookup itself failed
        """
        product_id = str(request.base_product_id or "").strip()
        if not product_id:
            raise InvalidInputError("base_product_id is required")

        mode = SelectionMode(request.policy)
        with logging_context(base_product_id=product_id, policy=mode.value):
            deadline = Deadline(self.limits.REQUEST_TIMEOUT_SECONDS)
            base = self.retriever.get_item(product_id, deadline)
            if base is None:
                raise BaseProductNotFoundError(product_id)
            return self._compose_for_base(base, request, mode, exclusions, rng or self.rng, deadline)

    def catalog_status(self) -> str:
        """
        "connected" if the catalog returns a row within the request budget,
        "empty" if it answers with none.

        Raises:
            RetrievalError: the catalog failed or timed out
        """
        deadline = Deadline(self.limits.REQUEST_TIMEOUT_SECONDS)
        return "connected" if self.retriever.catalog_has_rows(deadline) else "empty"

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _base_role(self, base: CatalogItem, base_category: Optional[str]) -> Role:
        if base_category:
            role = classify_role(base_category)
            if role is not Role.OTHER:
                return role
        return classify_item_role(base)

    def _compose_for_base(
        self,
        base: CatalogItem,
        request: OutfitRequest,
        mode: SelectionMode,
        exclusions: Optional[ExclusionState],
        rng: random.Random,
        deadline: Deadline,
    ) -> OutfitResult:
        base_category = (request.base_category or "").strip() or base.sub_category or base.category

        if is_non_outfit_category(
            request.base_category, base.category, base.sub_category, base.master_category,
        ):
            logger.info("Outfit blocked for non-outfit product", base_category=base_category)
            return blocked_result(base, mode, base_category)

        gender = normalize_gender(request.gender) or normalize_gender(base.gender)
        base_role = self._base_role(base, request.base_category)
        plan = resolve_plan(
            mode, gender, base_role,
            [request.base_category, base.sub_category, base.category],
        )
        if not plan:
            logger.info(
                "No outfit plan", gender=gender, base_category=base_category, base_role=base_role.value,
            )
            return no_plan_result(base, mode, base_category)

        state = exclusions if exclusions is not None else ExclusionState()
        state.used_product_ids.update(str(i) for i in request.excluded_ids if i)
        # Category memory is per outfit; id memory spans the session
        state.used_categories = set()
        state.add_category(base_category)
        state.add_category(base.classified_category)

        policy = build_policy(mode, self.limits, rng)
        cascade = FallbackCascade(self.retriever, policy, fallback_extra=self.limits.FALLBACK_EXTRA)
        ctx = OutfitContext(
            base=base,
            base_role=base_role,
            base_category=base_category,
            gender=gender,
            state=state,
            vibe=request.vibe,
            mood=request.mood or request.vibe,
            rng=rng,
            deadline=deadline,
        )

        fills: List[SlotFill] = []
        selected = 0
        for slot in plan:
            limit = policy.slot_limit(slot.role, selected)
            if limit <= 0:
                break
            fill = cascade.fill(slot, ctx, limit)
            selected += len(fill.items)
            fills.append(fill)

        result = assemble_outfit(base, fills, mode, base_category, max_items=policy.max_items)
        logger.info(
            "Outfit composed",
            plan=plan.key,
            status=result.status.value,
            filled=sum(1 for f in fills if f.filled),
            slots=len(plan),
            items=len(result.product_ids),
        )
        return result


# =============================================================================
# SINGLETON
# =============================================================================

_engine: Optional[OutfitEngine] = None
_engine_lock = threading.Lock()


def get_outfit_engine() -> OutfitEngine:
    """Get or create OutfitEngine singleton (thread-safe)."""
    global _engine
    if _engine is None:
        with _engine_lock:
            if _engine is None:
                from config.settings import get_settings
                _engine = OutfitEngine.from_settings(get_settings())
    return _engine
