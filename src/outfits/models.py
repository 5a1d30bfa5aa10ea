"""
Data model for outfit composition.

CatalogItem is a read-only projection of a catalog row; everything else
is built fresh per request. ExclusionState is the only mutable value and
is owned by the caller between requests.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, Iterator, List, Optional, Set, Tuple

from core.utils import normalize_text


# =============================================================================
# Enums
# =============================================================================

class Role(str, Enum):
    """Coarse garment function."""
    TOP = "Top"
    BOTTOM = "Bottom"
    FOOTWEAR = "Footwear"
    ACCESSORY = "Accessory"
    OTHER = "Other"


class ColorBucket(str, Enum):
    """Color-harmony bucket of a color descriptor."""
    NEUTRAL = "Neutral"
    WARM = "Warm"
    COOL = "Cool"
    UNCLASSIFIED = "Unclassified"


class SelectionMode(str, Enum):
    """Caller-chosen selection policy."""
    RANKED = "ranked"     # deterministic "recommended" look
    SAMPLED = "sampled"   # random "shuffle" / "surprise me"


class OutfitStatus(str, Enum):
    OK = "ok"
    PARTIAL = "partial"       # some slots unfilled
    EMPTY = "empty"           # plan existed, every slot unfilled
    NO_PLAN = "no_plan"       # no rule for gender/category
    BLOCKED = "blocked"       # base is a non-outfit product (cosmetics, ...)


# =============================================================================
# Catalog Item
# =============================================================================

@dataclass(frozen=True)
class CatalogItem:
    """Read-only catalog product as seen by the engine."""

    product_id: str
    name: str = ""
    slug: Optional[str] = None
    brand: Optional[str] = None
    gender: Optional[str] = None
    category: Optional[str] = None
    sub_category: Optional[str] = None
    master_category: Optional[str] = None
    color_name: Optional[str] = None
    color_hex: Optional[str] = None
    price: Optional[float] = None
    rating: Optional[float] = None
    is_published: Optional[bool] = None
    stock: Optional[int] = None
    image_url: Optional[str] = None
    variants: List[Any] = field(default_factory=list)
    style_tags: List[str] = field(default_factory=list)

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "CatalogItem":
        """Build an item from a catalog row (Supabase or JSON snapshot)."""
        images = row.get("images") or []
        if isinstance(images, str):
            images = [images]
        first_image = images[0] if images else row.get("image_url")
        if isinstance(first_image, dict):
            first_image = first_image.get("url")

        color = row.get("dominant_color") or {}
        price = row.get("price")
        rating = row.get("rating")
        stock = row.get("stock")

        return cls(
            product_id=str(row.get("id") or row.get("product_id") or ""),
            name=row.get("name") or "",
            slug=row.get("slug"),
            brand=row.get("brand"),
            gender=row.get("gender"),
            category=row.get("category"),
            sub_category=row.get("sub_category") or row.get("subCategory"),
            master_category=row.get("master_category") or row.get("masterCategory"),
            color_name=row.get("dominant_color_name") or color.get("name"),
            color_hex=row.get("dominant_color_hex") or color.get("hex"),
            price=float(price) if price is not None else None,
            rating=float(rating) if rating is not None else None,
            is_published=row.get("is_published", row.get("isPublished")),
            stock=int(stock) if stock is not None else None,
            image_url=first_image,
            variants=list(row.get("variants") or []),
            style_tags=[str(t) for t in (row.get("style_tags") or []) if t],
        )

    @property
    def classified_category(self) -> str:
        """Normalized category used for per-outfit category memory."""
        return normalize_text(self.sub_category or self.category)

    @property
    def color_label(self) -> str:
        """Color name, falling back to the hex value."""
        return self.color_name or self.color_hex or ""

    def category_fields(self) -> Tuple[str, str, str]:
        return (
            normalize_text(self.category),
            normalize_text(self.sub_category),
            normalize_text(self.master_category),
        )

    def to_api_dict(self) -> Dict[str, Any]:
        """Projection returned to the storefront (renders without a second lookup)."""
        return {
            "product_id": self.product_id,
            "name": self.name,
            "slug": self.slug,
            "brand": self.brand,
            "gender": self.gender,
            "category": self.category,
            "sub_category": self.sub_category,
            "price": self.price,
            "rating": self.rating,
            "image_url": self.image_url,
            "color": self.color_name,
            "color_hex": self.color_hex,
            "variants": list(self.variants),
        }


# =============================================================================
# Slots and Plans
# =============================================================================

@dataclass(frozen=True)
class Slot:
    """A role to fill plus the catalog categories that satisfy it."""

    role: Role
    categories: Tuple[str, ...]

    @property
    def accepted(self) -> Set[str]:
        return {normalize_text(c) for c in self.categories}

    def matched_category(self, item: CatalogItem) -> Optional[str]:
        """
        Return the accepted category the item satisfies, or None.

        Sub-category is checked before category and master-category, so
        "Apparel > Bottomwear > Jeans" reports "Jeans".
        """
        category, sub_category, master_category = item.category_fields()
        for value in (sub_category, category, master_category):
            if not value:
                continue
            for accepted in self.categories:
                if normalize_text(accepted) == value:
                    return accepted
        return None


@dataclass(frozen=True)
class OutfitPlan:
    """Ordered slots for one (gender, base) pair. Empty is a valid plan."""

    slots: Tuple[Slot, ...] = ()
    key: Optional[str] = None

    def __iter__(self) -> Iterator[Slot]:
        return iter(self.slots)

    def __len__(self) -> int:
        return len(self.slots)

    def __bool__(self) -> bool:
        return bool(self.slots)


EMPTY_PLAN = OutfitPlan()


# =============================================================================
# Scoring / Exclusion
# =============================================================================

@dataclass(frozen=True)
class ScoredCandidate:
    item: CatalogItem
    color_score: float
    style_weight: int

    @property
    def sort_key(self) -> Tuple[float, int, float, float, str]:
        """colorScore desc, styleWeight desc, price asc, rating desc, id asc."""
        price = self.item.price if self.item.price is not None else float("inf")
        rating = self.item.rating if self.item.rating is not None else 0.0
        return (-self.color_score, -self.style_weight, price, -rating, self.item.product_id)


@dataclass
class ExclusionState:
    """
    Product ids and categories that must not reappear.

    used_product_ids grows across "shuffle" calls (the caller persists and
    resubmits it); used_categories is outfit-scoped and seeded with the
    base product's category at the start of each call.
    """

    used_product_ids: Set[str] = field(default_factory=set)
    used_categories: Set[str] = field(default_factory=set)

    @classmethod
    def from_ids(cls, ids: Optional[Iterable[str]] = None) -> "ExclusionState":
        return cls(used_product_ids={str(i) for i in (ids or []) if i})

    def excludes(self, item: CatalogItem) -> bool:
        return (
            item.product_id in self.used_product_ids
            or item.classified_category in self.used_categories
        )

    def add(self, item: CatalogItem) -> None:
        self.used_product_ids.add(item.product_id)
        if item.classified_category:
            self.used_categories.add(item.classified_category)

    def add_category(self, category: Optional[str]) -> None:
        key = normalize_text(category)
        if key:
            self.used_categories.add(key)


# =============================================================================
# Request / Result
# =============================================================================

@dataclass(frozen=True)
class OutfitRequest:
    """
    One compose call.

    vibe weights and narrows slot categories; mood drives the strict-stage
    keyword filter and defaults to vibe.
    """

    base_product_id: Optional[str]
    gender: Optional[str] = None
    base_category: Optional[str] = None
    vibe: Optional[str] = None
    mood: Optional[str] = None
    excluded_ids: Tuple[str, ...] = ()
    policy: SelectionMode = SelectionMode.RANKED


@dataclass(frozen=True)
class OutfitItem:
    role: Role
    suggested_category: str
    color_hint: str
    color_hex_hint: str
    reason: str
    product: Optional[CatalogItem] = None

    def to_api_dict(self) -> Dict[str, Any]:
        return {
            "role": self.role.value,
            "suggested_category": self.suggested_category,
            "color_hint": self.color_hint,
            "color_hex_hint": self.color_hex_hint,
            "reason": self.reason,
            "product": self.product.to_api_dict() if self.product else None,
        }


@dataclass(frozen=True)
class OutfitResult:
    title: str
    message: str
    status: OutfitStatus
    policy: SelectionMode
    items: Tuple[OutfitItem, ...] = ()
    base: Optional[CatalogItem] = None

    @property
    def product_ids(self) -> List[str]:
        """Ids of filled items, in order. Persist these for the next shuffle."""
        return [i.product.product_id for i in self.items if i.product is not None]

    def to_api_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "message": self.message,
            "status": self.status.value,
            "policy": self.policy.value,
            "base": self.base.to_api_dict() if self.base else None,
            "items": [i.to_api_dict() for i in self.items],
            "product_ids": self.product_ids,
        }
