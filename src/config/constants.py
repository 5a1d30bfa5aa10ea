"""
Outfit engine constants.

These are values that don't change based on environment but may need
to be tuned or referenced across the codebase. Environment-specific
overrides live in config.settings and default to the values below.
"""

from dataclasses import dataclass, field
from typing import Dict


# =============================================================================
# Outfit Composition Limits
# =============================================================================

@dataclass(frozen=True)
class OutfitLimits:
    """Slot and pool limits for the outfit composition pipeline."""

    # Ranked ("recommended") outfits: one pick per slot, three items total
    RANKED_MAX_ITEMS: int = 3
    RANKED_ITEMS_PER_SLOT: int = 1

    # Sampled ("shuffle" / "surprise me") outfits: capped per role only
    SAMPLED_ROLE_LIMITS: Dict[str, int] = field(default_factory=lambda: {
        "Top": 3,
        "Bottom": 3,
        "Footwear": 2,
        "Accessory": 2,
    })
    SAMPLED_DEFAULT_LIMIT: int = 2

    # Sampled candidate pool; ranked retrieval is uncapped
    CANDIDATE_POOL_SIZE: int = 200
    FALLBACK_EXTRA: int = 2

    # Request-scoped budget for all catalog calls made by one compose()
    REQUEST_TIMEOUT_SECONDS: float = 5.0


# Default limits instance
DEFAULT_OUTFIT_LIMITS = OutfitLimits()


# =============================================================================
# Catalog Columns
# =============================================================================

# Columns projected from the catalog table. Kept narrow so outfit responses
# carry everything the storefront renders without a second lookup.
CATALOG_SELECT = (
    "id, name, slug, brand, gender, category, sub_category, master_category, "
    "dominant_color_name, dominant_color_hex, price, rating, is_published, "
    "stock, images, variants, style_tags"
)
