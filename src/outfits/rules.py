"""
Static outfit rule tables.

Everything here is plain keyed data: adding a category, a gender rule or
a vibe is an edit to a mapping, never to control flow.

Tables:
  CATEGORY_PLANS            gender -> base category -> ordered slots (ranked path)
  ROLE_PLANS                base role -> ordered slots (sampled path)
  CATEGORY_ALIASES          storefront sub-category -> CATEGORY_PLANS key
  NON_OUTFIT_CATEGORIES     bases that never get an outfit
  STYLE_VIBE_CATEGORY_PREFS vibe -> preferred categories, best first
  STYLE_VIBE_CATEGORY_EXCLUSIONS / BASE_CATEGORY_EXCLUSIONS
                            categories dropped in the strict cascade stage
  STYLE_VIBE_KEYWORDS       vibe -> mood keywords for the strict stage
  ACCESSORY_PRIORITY        gender -> accessory keyword groups, best first
"""

from typing import Dict, List, Optional, Tuple

from core.utils import normalize_text
from outfits.models import Role


_T, _B, _F, _A = Role.TOP, Role.BOTTOM, Role.FOOTWEAR, Role.ACCESSORY

PlanSpec = List[Tuple[Role, List[str]]]


# =============================================================================
# Category plans (fine, per gender)
# =============================================================================

# fmt: off
CATEGORY_PLANS: Dict[str, Dict[str, PlanSpec]] = {
    "Men": {
        # Shirts lean office; Shorts is dropped in the strict stage
        "Shirts":   [(_B, ["Pants", "Trousers", "Jeans", "Shorts"]),
                     (_F, ["Shoes", "Sneakers"]),
                     (_A, ["Watches", "Belts"])],
        "T-Shirts": [(_B, ["Jeans", "Pants", "Shorts"]),
                     (_F, ["Sneakers"]),
                     (_A, ["Watches", "Belts"])],
        "Tops":     [(_B, ["Jeans", "Pants", "Trousers", "Shorts"]),
                     (_F, ["Sneakers", "Shoes"]),
                     (_A, ["Watches", "Belts"])],
        "Jeans":    [(_T, ["Shirts", "T-Shirts", "Tops"]),
                     (_F, ["Sneakers"]),
                     (_A, ["Watches", "Belts"])],
        "Pants":    [(_T, ["Shirts", "T-Shirts", "Tops"]),
                     (_F, ["Sneakers", "Shoes"]),
                     (_A, ["Watches", "Belts"])],
        "Trousers": [(_T, ["Shirts", "T-Shirts", "Tops"]),
                     (_F, ["Sneakers", "Shoes"]),
                     (_A, ["Watches", "Belts"])],
        "Shorts":   [(_T, ["T-Shirts", "Tops"]),
                     (_F, ["Sneakers"]),
                     (_A, ["Watches"])],
        "Watches":  [(_T, ["Shirts", "T-Shirts", "Tops"]),
                     (_B, ["Jeans", "Pants", "Trousers", "Shorts"])],
        "Belts":    [(_T, ["Shirts", "T-Shirts", "Tops"]),
                     (_B, ["Jeans", "Pants", "Trousers", "Shorts"])],
        "Shoes":    [(_T, ["Shirts", "T-Shirts", "Tops"]),
                     (_B, ["Jeans", "Pants", "Trousers", "Shorts"]),
                     (_A, ["Watches", "Belts"])],
        "Sneakers": [(_T, ["Shirts", "T-Shirts", "Tops"]),
                     (_B, ["Jeans", "Pants", "Trousers", "Shorts"]),
                     (_A, ["Watches", "Belts"])],
    },
    "Women": {
        "Dresses":   [(_F, ["Flats", "Heels", "Sandals", "Footwear"]),
                      (_A, ["Earrings", "Handbags", "Bangles", "Necklaces"])],
        "Kurtis":    [(_B, ["Leggings", "Jeans", "Pants"]),
                      (_F, ["Flats", "Sandals"]),
                      (_A, ["Bangles", "Earrings", "Handbags"])],
        "Tops":      [(_B, ["Leggings", "Jeans", "Pants", "Skirts"]),
                      (_F, ["Flats", "Sandals", "Footwear"]),
                      (_A, ["Bangles", "Earrings", "Handbags", "Watches"])],
        "Skirts":    [(_T, ["Tops", "Kurtis"]),
                      (_F, ["Flats", "Sandals", "Footwear"]),
                      (_A, ["Earrings", "Handbags", "Bangles"])],
        "Jeans":     [(_T, ["Tops", "Kurtis"]),
                      (_F, ["Flats", "Sandals", "Footwear"]),
                      (_A, ["Handbags", "Watches"])],
        "Pants":     [(_T, ["Tops", "Kurtis"]),
                      (_F, ["Flats", "Sandals", "Footwear"]),
                      (_A, ["Handbags", "Watches"])],
        "Leggings":  [(_T, ["Kurtis", "Tops"]),
                      (_F, ["Flats", "Sandals", "Footwear"]),
                      (_A, ["Bangles", "Earrings", "Handbags"])],
        "Watches":   [(_T, ["Tops", "Kurtis", "Dresses"]),
                      (_B, ["Jeans", "Pants", "Leggings", "Skirts"])],
        "Bangles":   [(_T, ["Kurtis", "Dresses", "Tops"]),
                      (_F, ["Flats", "Sandals", "Footwear"])],
        "Earrings":  [(_T, ["Kurtis", "Dresses", "Tops"]),
                      (_F, ["Flats", "Sandals", "Footwear"])],
        "Necklaces": [(_T, ["Kurtis", "Dresses", "Tops"]),
                      (_F, ["Flats", "Sandals", "Footwear"])],
        "Handbags":  [(_T, ["Kurtis", "Dresses", "Tops"]),
                      (_B, ["Jeans", "Pants", "Leggings", "Skirts"])],
        "Footwear":  [(_T, ["Kurtis", "Dresses", "Tops"]),
                      (_B, ["Jeans", "Pants", "Leggings", "Skirts"]),
                      (_A, ["Handbags", "Bangles", "Earrings"])],
        "Shoes":     [(_T, ["Kurtis", "Dresses", "Tops"]),
                      (_B, ["Jeans", "Pants", "Leggings", "Skirts"]),
                      (_A, ["Handbags", "Bangles", "Earrings"])],
        "Sandals":   [(_T, ["Kurtis", "Dresses", "Tops"]),
                      (_B, ["Jeans", "Pants", "Leggings", "Skirts"]),
                      (_A, ["Handbags", "Bangles", "Earrings"])],
        "Heels":     [(_T, ["Kurtis", "Dresses", "Tops"]),
                      (_B, ["Jeans", "Pants", "Leggings", "Skirts"]),
                      (_A, ["Handbags", "Earrings"])],
        "Flats":     [(_T, ["Kurtis", "Dresses", "Tops"]),
                      (_B, ["Jeans", "Pants", "Leggings", "Skirts"]),
                      (_A, ["Handbags", "Bangles", "Earrings"])],
    },
    "Kids": {
        "Tops":        [(_B, ["Bottoms"]),
                        (_F, ["Shoes", "Footwear"]),
                        (_A, ["Accessories"])],
        "Bottoms":     [(_T, ["Tops"]),
                        (_F, ["Shoes", "Footwear"]),
                        (_A, ["Accessories"])],
        "Dresses":     [(_F, ["Shoes", "Footwear"]),
                        (_A, ["Accessories"])],
        "Shoes":       [(_T, ["Tops"]),
                        (_B, ["Bottoms"]),
                        (_A, ["Accessories"])],
        "Accessories": [(_T, ["Tops"]),
                        (_B, ["Bottoms"]),
                        (_F, ["Shoes", "Footwear"])],
    },
}
# fmt: on

CATEGORY_ALIASES: Dict[str, str] = {
    "topwear": "Tops",
    "topper": "Tops",
    "bottomwear": "Pants",
    "footwear": "Shoes",
    "accessories": "Watches",
}


# =============================================================================
# Role plans (coarse, gender-independent)
# =============================================================================

ROLE_CATEGORIES: Dict[Role, List[str]] = {
    Role.TOP: ["Topwear", "Tops", "Shirts", "T-Shirts", "Sweatshirts", "Jackets",
               "Blazers", "Coats", "Sweaters", "Hoodies", "Kurtis"],
    Role.BOTTOM: ["Bottomwear", "Bottoms", "Jeans", "Trousers", "Pants", "Shorts",
                  "Track Pants", "Joggers", "Leggings", "Skirts"],
    Role.FOOTWEAR: ["Footwear", "Shoes", "Sneakers", "Boots", "Sandals", "Flats",
                    "Heels"],
    Role.ACCESSORY: ["Accessories", "Watches", "Belts", "Wallets", "Bags", "Handbags",
                     "Jewellery", "Earrings", "Bangles", "Necklaces", "Sunglasses",
                     "Caps"],
}

ROLE_PLANS: Dict[Role, List[Role]] = {
    Role.TOP: [Role.BOTTOM, Role.FOOTWEAR, Role.ACCESSORY],
    Role.BOTTOM: [Role.TOP, Role.FOOTWEAR, Role.ACCESSORY],
    Role.FOOTWEAR: [Role.TOP, Role.BOTTOM, Role.ACCESSORY],
    Role.ACCESSORY: [Role.TOP, Role.BOTTOM, Role.FOOTWEAR],
}


# =============================================================================
# Non-outfit bases
# =============================================================================

NON_OUTFIT_CATEGORIES = frozenset({
    "personal care", "cosmetics", "beauty", "makeup", "skin care", "skincare",
    "hair care", "fragrance", "fragrances", "home", "electronics",
})


def is_non_outfit_category(*values: Optional[str]) -> bool:
    return any(normalize_text(v) in NON_OUTFIT_CATEGORIES for v in values if v)


# =============================================================================
# Style vibes
# =============================================================================

# Ordering influence only; earlier categories weigh more
STYLE_VIBE_CATEGORY_PREFS: Dict[str, List[str]] = {
    "office_casual": ["Shirts", "Trousers", "Pants", "Watches", "Shoes"],
    "office_formal": ["Shirts", "Trousers", "Shoes", "Watches", "Belts"],
    "casual": ["T-Shirts", "Tops", "Jeans", "Shorts", "Sneakers"],
    "street_casual": ["T-Shirts", "Hoodies", "Jeans", "Joggers", "Sneakers", "Caps"],
    "simple_elegant": ["Tops", "Kurtis", "Trousers", "Flats", "Watches", "Earrings"],
    "party_bold": ["Dresses", "Tops", "Skirts", "Heels", "Earrings", "Handbags"],
    "festive": ["Dresses", "Kurtis", "Earrings", "Bangles", "Necklaces", "Handbags",
                "Heels"],
}

STYLE_VIBE_CATEGORY_EXCLUSIONS: Dict[str, List[str]] = {
    "office_casual": ["Shorts", "Sneakers", "Flip Flops", "Sandals"],
    "office_formal": ["Shorts", "Sneakers", "Flip Flops", "Sandals", "T-Shirts"],
    "simple_elegant": ["Flip Flops"],
    "casual": [],
    "street_casual": [],
    "party_bold": ["Flip Flops"],
    "festive": ["Shorts", "Jeans", "Sneakers"],
}

BASE_CATEGORY_EXCLUSIONS: Dict[str, List[str]] = {
    "shirts": ["Shorts"],
    "trousers": ["Shorts", "Sneakers"],
    "pants": ["Shorts"],
}

STYLE_VIBE_KEYWORDS: Dict[str, List[str]] = {
    "office_casual": ["formal", "office", "oxford", "chino", "smart", "classic",
                      "slim"],
    "office_formal": ["formal", "office", "oxford", "tailored", "suit", "classic",
                      "leather"],
    "casual": ["casual", "denim", "cotton", "basic", "everyday", "relaxed"],
    "street_casual": ["street", "graphic", "oversized", "hoodie", "jogger", "cargo",
                      "sneaker", "casual"],
    "simple_elegant": ["elegant", "classic", "minimal", "solid", "silk", "linen"],
    "party_bold": ["party", "bold", "sequin", "embellished", "statement", "satin",
                   "glitter"],
    "festive": ["festive", "ethnic", "embroidered", "traditional", "zari", "silk"],
}

_VIBE_ALIASES: Dict[str, str] = {
    "office": "office_formal",
    "formal": "office_formal",
    "office_&_formal": "office_formal",
    "smart_casual": "office_casual",
    "street": "street_casual",
    "streetwear": "street_casual",
    "street_&_casual": "street_casual",
    "elegant": "simple_elegant",
    "simple_&_elegant": "simple_elegant",
    "party": "party_bold",
    "bold": "party_bold",
    "party_&_bold": "party_bold",
    "ethnic": "festive",
}


def normalize_vibe(vibe: Optional[str]) -> Optional[str]:
    """Map a UI label or free-text mood to a vibe table key (None if unknown/empty)."""
    key = normalize_text(vibe)
    if not key:
        return None
    key = "_".join(key.replace("-", " ").split())
    key = _VIBE_ALIASES.get(key, key)
    known = STYLE_VIBE_CATEGORY_PREFS.keys() | STYLE_VIBE_KEYWORDS.keys()
    return key if key in known else None


def _excluded(category: str, exclusions: List[str]) -> bool:
    c = normalize_text(category)
    return any(normalize_text(e) == c or normalize_text(e) in c for e in exclusions)


def strict_categories(
    categories: Tuple[str, ...],
    vibe: Optional[str] = None,
    base_category: Optional[str] = None,
) -> Tuple[str, ...]:
    """
    Accepted categories after vibe and base-category exclusions.

    If every category would be removed the original list is kept.
    """
    exclusions: List[str] = []
    if vibe:
        exclusions.extend(STYLE_VIBE_CATEGORY_EXCLUSIONS.get(vibe, []))
    if base_category:
        exclusions.extend(BASE_CATEGORY_EXCLUSIONS.get(normalize_text(base_category), []))
    if not exclusions:
        return categories
    kept = tuple(c for c in categories if not _excluded(c, exclusions))
    return kept or categories


# =============================================================================
# Accessory priority (ranked accessory slots)
# =============================================================================

# gender -> keyword groups, most wanted first. A keyword matches when it is
# contained in the name, category, sub_category or master_category, so
# "bag" also hits handbags; handbags therefore sit above bags.
ACCESSORY_PRIORITY: Dict[str, List[List[str]]] = {
    "Women": [
        ["earrings", "earring", "ear ring"],
        ["bangles", "bangle", "bracelets", "bracelet", "jewelry", "jewellery", "jewels"],
        ["watches", "watch", "timepiece"],
        ["necklaces", "necklace", "pendant", "chain"],
        ["handbags", "handbag", "clutch", "purse", "tote"],
        ["backpacks", "backpack", "bags", "bag", "rucksack"],
    ],
    "Men": [
        ["watches", "watch", "timepiece"],
        ["belts", "belt", "wallets", "wallet"],
        ["caps", "cap", "hats", "hat", "baseball cap"],
        ["sunglasses", "sunglass", "shades"],
        ["backpacks", "backpack", "bags", "bag", "rucksack", "messenger bag"],
    ],
    "Kids": [
        ["watches", "watch"],
        ["caps", "cap", "hats", "hat"],
        ["bags", "bag", "backpacks", "backpack"],
    ],
}


def accessory_priority(gender: Optional[str], *fields: Optional[str]) -> Optional[int]:
    """
    Index of the first ACCESSORY_PRIORITY group matching any of fields.

    None when the gender has no table or nothing matches.
    """
    key = normalize_text(gender)
    groups = next((g for name, g in ACCESSORY_PRIORITY.items() if name.lower() == key), None)
    if not groups:
        return None
    values = [normalize_text(f) for f in fields if f]
    for index, keywords in enumerate(groups):
        if any(k in v for k in keywords for v in values):
            return index
    return None
