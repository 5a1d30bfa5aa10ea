"""
Core Utility Functions.

String normalisation shared by the classifiers, rule tables and
catalog adapters.
"""

import re
from typing import Any, Iterable, Optional, Set


def normalize_text(value: Any) -> str:
    """Lowercase and trim a possibly-missing value."""
    if value is None:
        return ""
    return str(value).strip().lower()


def normalize_string_set(items: Optional[Iterable[Any]]) -> Set[str]:
    """
    Normalize a collection of strings to a lowercase set.

    Empty and None entries are dropped.
    """
    if not items:
        return set()
    return {normalize_text(item) for item in items if normalize_text(item)}


# =============================================================================
# Gender Normalisation
# =============================================================================

_GENDER_ALIASES = {
    "men": "Men", "man": "Men", "male": "Men", "m": "Men",
    "boy": "Men", "boys": "Men", "mens": "Men", "men's": "Men",
    "women": "Women", "woman": "Women", "female": "Women", "f": "Women",
    "w": "Women", "girl": "Women", "girls": "Women", "lady": "Women",
    "ladies": "Women", "womens": "Women", "women's": "Women",
    "kids": "Kids", "kid": "Kids", "child": "Kids", "children": "Kids",
    "unisex": "Unisex",
}


def normalize_gender(gender: Optional[str]) -> Optional[str]:
    """
    Normalize a free-text gender tag to Men / Women / Kids / Unisex.

    Returns None when the value is missing or unrecognised.
    """
    key = normalize_text(gender)
    if not key:
        return None
    return _GENDER_ALIASES.get(key) or _GENDER_ALIASES.get(re.sub(r"[^a-z']", "", key))
