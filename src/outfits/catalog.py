"""
Catalog Query Interface.

The engine reads the catalog only through CatalogQuery:

    get_item(product_id)          -> CatalogItem or None
    query(filter)                 -> List[CatalogItem]
    sample(filter, size, rng)     -> List[CatalogItem]

SupabaseCatalog talks to the products table with the PostgREST query
builder; InMemoryCatalog serves fixed snapshots (tests, the report script
run against a JSON dump).
"""

import json
import random
from dataclasses import dataclass, replace
from typing import Any, Dict, Iterable, List, Optional, Protocol, Tuple

from supabase import Client

from config.constants import CATALOG_SELECT
from core.logging import get_logger
from core.utils import normalize_string_set
from outfits.models import CatalogItem

logger = get_logger(__name__)

# PostgREST URLs get long fast; larger exclusion sets are filtered in Python
_MAX_SERVER_SIDE_EXCLUSIONS = 200


@dataclass(frozen=True)
class CatalogFilter:
    """
    Filter for one catalog call.

    categories matches case-insensitively against category OR sub_category
    OR master_category. exclude_categories drops items whose classified
    category (sub_category, else category) is listed.
    """

    categories: Tuple[str, ...] = ()
    gender: Optional[str] = None
    exclude_ids: frozenset = frozenset()
    exclude_categories: frozenset = frozenset()
    published_only: bool = True
    in_stock_only: bool = True
    limit: Optional[int] = None


def matches_filter(item: CatalogItem, flt: CatalogFilter) -> bool:
    """Client-side evaluation of a CatalogFilter. Missing flags pass."""
    if item.product_id in flt.exclude_ids:
        return False
    if flt.published_only and item.is_published is False:
        return False
    if flt.in_stock_only and item.stock is not None and item.stock <= 0:
        return False
    if flt.gender and item.gender and item.gender.lower() != flt.gender.lower():
        return False
    if flt.categories:
        accepted = normalize_string_set(flt.categories)
        if not accepted.intersection(item.category_fields()):
            return False
    if flt.exclude_categories:
        if item.classified_category in normalize_string_set(flt.exclude_categories):
            return False
    return True


class CatalogQuery(Protocol):
    def get_item(self, product_id: str) -> Optional[CatalogItem]:
        ...

    def query(self, flt: CatalogFilter) -> List[CatalogItem]:
        ...

    def sample(self, flt: CatalogFilter, size: int, rng: random.Random) -> List[CatalogItem]:
        ...


# =============================================================================
# In-memory snapshot
# =============================================================================

class InMemoryCatalog:
    """Catalog over a fixed list of items. Query order is by product id."""

    def __init__(self, items: Iterable[CatalogItem]):
        self._items: Dict[str, CatalogItem] = {}
        for item in items:
            self._items[item.product_id] = item

    @classmethod
    def from_rows(cls, rows: Iterable[Dict[str, Any]]) -> "InMemoryCatalog":
        return cls(CatalogItem.from_row(r) for r in rows)

    @classmethod
    def from_json(cls, path: str) -> "InMemoryCatalog":
        """Load a JSON array of catalog rows, or an object with a "products" key."""
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if isinstance(data, dict):
            data = data.get("products", [])
        return cls.from_rows(data)

    def __len__(self) -> int:
        return len(self._items)

    def get_item(self, product_id: str) -> Optional[CatalogItem]:
        return self._items.get(str(product_id))

    def query(self, flt: CatalogFilter) -> List[CatalogItem]:
        rows = [i for _, i in sorted(self._items.items()) if matches_filter(i, flt)]
        return rows[:flt.limit] if flt.limit is not None else rows

    def sample(self, flt: CatalogFilter, size: int, rng: random.Random) -> List[CatalogItem]:
        pool = self.query(replace(flt, limit=None))
        return rng.sample(pool, min(size, len(pool)))


# =============================================================================
# Supabase
# =============================================================================

def _ilike_clauses(categories: Iterable[str]) -> str:
    clauses = []
    for category in categories:
        # No wildcards: ilike without % is a case-insensitive equality
        value = category.replace("%", "").replace("_", "").replace('"', "")
        for column in ("category", "sub_category", "master_category"):
            clauses.append(f'{column}.ilike."{value}"')
    return ",".join(clauses)


class SupabaseCatalog:
    """
    Read-only catalog backed by a Supabase (PostgREST) table.

    Reads page through the id-ordered match set with range(). Id exclusions
    that fit in a URL go to the server; larger id sets and category
    exclusions are checked per page, and paging continues until enough rows
    survive, so a cap never applies before the exclusions do.
    """

    def __init__(
        self,
        client: Client,
        table: str = "products",
        sample_pool_size: int = 200,
        page_size: int = 1000,
    ):
        self.client = client
        self.table = table
        self.sample_pool_size = sample_pool_size
        self.page_size = page_size

    def get_item(self, product_id: str) -> Optional[CatalogItem]:
        result = self.client.table(self.table).select(
            CATALOG_SELECT
        ).eq("id", product_id).limit(1).execute()
        if not result.data:
            return None
        return CatalogItem.from_row(result.data[0])

    def _apply_filter(self, query, flt: CatalogFilter):
        if flt.published_only:
            query = query.eq("is_published", True)
        if flt.in_stock_only:
            query = query.gt("stock", 0)
        if flt.gender:
            query = query.eq("gender", flt.gender)
        if flt.exclude_ids and len(flt.exclude_ids) <= _MAX_SERVER_SIDE_EXCLUSIONS:
            query = query.not_.in_("id", sorted(flt.exclude_ids))
        if flt.categories:
            query = query.or_(_ilike_clauses(flt.categories))
        return query

    def _count(self, flt: CatalogFilter) -> int:
        query = self.client.table(self.table).select("id", count="exact")
        result = self._apply_filter(query, flt).limit(1).execute()
        return result.count or 0

    def _scan(
        self,
        flt: CatalogFilter,
        want: Optional[int] = None,
        start: int = 0,
        stop: Optional[int] = None,
    ) -> List[CatalogItem]:
        """
        Filtered items from row start up to row stop (exclusive), page by page.

        Stops early once want items passed the client-side filter.
        """
        items: List[CatalogItem] = []
        offset = start
        while stop is None or offset < stop:
            end = offset + self.page_size - 1
            if stop is not None:
                end = min(end, stop - 1)
            query = self._apply_filter(
                self.client.table(self.table).select(CATALOG_SELECT), flt,
            )
            rows = query.order("id").range(offset, end).execute().data or []
            for row in rows:
                item = CatalogItem.from_row(row)
                if matches_filter(item, flt):
                    items.append(item)
            if want is not None and len(items) >= want:
                return items[:want]
            if len(rows) < end - offset + 1:
                break
            offset = end + 1
        return items

    def query(self, flt: CatalogFilter) -> List[CatalogItem]:
        return self._scan(flt, want=flt.limit)

    def sample(self, flt: CatalogFilter, size: int, rng: random.Random) -> List[CatalogItem]:
        """
        Uniform draw from a window of matching rows at a random offset.

        The window holds max(size, sample_pool_size) rows. When more rows
        match, its start is drawn uniformly; a window running past the last
        row continues from the first.
        """
        window = max(size, self.sample_pool_size)
        total = self._count(flt)
        offset = rng.randrange(total - window + 1) if total > window else 0

        pool = self._scan(flt, want=window, start=offset)
        if len(pool) < window and offset:
            pool += self._scan(flt, want=window - len(pool), stop=offset)
        logger.debug(
            "Catalog sample pool",
            table=self.table, total=total, offset=offset, pool=len(pool), size=size,
        )
        return rng.sample(pool, min(size, len(pool)))
