"""
Role classification: category / sub-category / name -> Role.

Rules are checked in a fixed order (footwear, top, bottom, accessory) and
the first match wins, so "Dress Shoes" is footwear and "Sweatshirts" is a
top. Name text is consulted only when the category fields say nothing.
Dresses are Other: they cover top and bottom at once.
"""

from typing import Optional, Tuple

from core.utils import normalize_text
from outfits.models import CatalogItem, Role


# (role, exact category values, substring keywords)
_ROLE_RULES: Tuple[Tuple[Role, frozenset, Tuple[str, ...]], ...] = (
    (
        Role.FOOTWEAR,
        frozenset({"shoes", "footwear", "sneakers"}),
        ("shoe", "sneaker", "boot", "sandal", "heels", "flats", "loafer",
         "slipper", "flip flop", "moccasin"),
    ),
    (
        Role.TOP,
        frozenset({"shirts", "tops", "topwear", "kurtis", "kurtas"}),
        ("shirt", "top", "tee", "polo", "blouse", "jacket", "coat", "sweater",
         "hoodie", "sweatshirt", "blazer", "kurti", "kurta", "cardigan", "tunic"),
    ),
    (
        Role.BOTTOM,
        frozenset({"jeans", "bottoms", "bottomwear"}),
        ("jean", "pant", "trouser", "legging", "jogger", "short", "skirt",
         "chino", "bottom"),
    ),
    (
        Role.ACCESSORY,
        frozenset({"watch", "watches", "belt", "belts", "accessories", "jewellery",
                   "jewelry"}),
        ("watch", "belt", "bag", "wallet", "hat", "cap", "accessor", "earring",
         "bangle", "necklace", "bracelet", "jewel", "sunglass", "scarf"),
    ),
)


def _match(texts: Tuple[str, ...]) -> Role:
    for role, exact, keywords in _ROLE_RULES:
        for text in texts:
            if not text:
                continue
            if text in exact or any(k in text for k in keywords):
                return role
    return Role.OTHER


def classify_role(
    category: Optional[str],
    sub_category: Optional[str] = None,
    name: Optional[str] = None,
) -> Role:
    """Classify free-text category fields into a Role. Never raises."""
    role = _match((normalize_text(category), normalize_text(sub_category)))
    if role is Role.OTHER:
        role = _match((normalize_text(name),))
    return role


def classify_item_role(item: CatalogItem) -> Role:
    role = classify_role(item.category, item.sub_category, item.name)
    if role is Role.OTHER and item.master_category:
        role = classify_role(item.master_category)
    return role
