"""
Outfit composition domain.

Pure pieces (roles, colors, rules, planner, scoring, selection) plus the
catalog adapters and the retrieval / cascade / assembly steps that the
OutfitEngine service wires together.
"""

from outfits.catalog import CatalogFilter, CatalogQuery, InMemoryCatalog, SupabaseCatalog
from outfits.colors import classify_color, color_score
from outfits.exceptions import (
    BaseProductNotFoundError,
    InvalidInputError,
    OutfitEngineError,
    RetrievalError,
)
from outfits.models import (
    CatalogItem,
    ColorBucket,
    ExclusionState,
    OutfitItem,
    OutfitPlan,
    OutfitRequest,
    OutfitResult,
    OutfitStatus,
    Role,
    ScoredCandidate,
    SelectionMode,
    Slot,
)
from outfits.planner import resolve_category_plan, resolve_plan, resolve_role_plan
from outfits.roles import classify_item_role, classify_role
from outfits.scoring import rank_candidates, score_candidates, style_weight
from outfits.selection import RankedPolicy, SampledPolicy, SelectionPolicy, build_policy

__all__ = [
    "BaseProductNotFoundError",
    "CatalogFilter",
    "CatalogItem",
    "CatalogQuery",
    "ColorBucket",
    "ExclusionState",
    "InMemoryCatalog",
    "InvalidInputError",
    "OutfitEngineError",
    "OutfitItem",
    "OutfitPlan",
    "OutfitRequest",
    "OutfitResult",
    "OutfitStatus",
    "RankedPolicy",
    "RetrievalError",
    "Role",
    "SampledPolicy",
    "ScoredCandidate",
    "SelectionMode",
    "SelectionPolicy",
    "Slot",
    "SupabaseCatalog",
    "build_policy",
    "classify_color",
    "classify_item_role",
    "classify_role",
    "color_score",
    "rank_candidates",
    "resolve_category_plan",
    "resolve_plan",
    "resolve_role_plan",
    "score_candidates",
    "style_weight",
]
