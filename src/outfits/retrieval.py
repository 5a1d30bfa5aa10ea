"""
Candidate Retrieval.

The only I/O step of the pipeline. fetch() turns one slot plus the
running exclusions into a CatalogFilter, runs it against the catalog on a
worker thread bounded by the request Deadline, and post-filters the rows:

  - base product, excluded ids and excluded categories never come back
  - published / in-stock / gender / accepted categories
  - role exclusivity: a candidate's role differs from the base role,
    except for accessory slots or when the base role is Other
  - optional mood keyword filter (strict cascade stage)

Any catalog exception or deadline overrun is raised as RetrievalError.
"""

import random
import re
import time
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Any, Callable, Iterable, List, Optional, Tuple

from core.logging import get_logger
from core.utils import normalize_text
from outfits.catalog import CatalogFilter, CatalogQuery
from outfits.exceptions import RetrievalError
from outfits.models import CatalogItem, Role, Slot
from outfits.roles import classify_item_role
from outfits.rules import STYLE_VIBE_KEYWORDS, normalize_vibe, strict_categories

logger = get_logger(__name__)


# =============================================================================
# Deadline
# =============================================================================

class Deadline:
    """Request-scoped time budget shared by every catalog call of one compose()."""

    def __init__(self, seconds: Optional[float], clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._expires_at = None if seconds is None else clock() + seconds

    @classmethod
    def unbounded(cls) -> "Deadline":
        return cls(None)

    def remaining(self) -> Optional[float]:
        """Seconds left, or None when unbounded. Never negative."""
        if self._expires_at is None:
            return None
        return max(0.0, self._expires_at - self._clock())

    @property
    def expired(self) -> bool:
        remaining = self.remaining()
        return remaining is not None and remaining <= 0


# =============================================================================
# Mood filter
# =============================================================================

def mood_keywords(mood: Optional[str]) -> Tuple[str, ...]:
    """Keywords for a vibe key, or the words of a free-text mood."""
    key = normalize_vibe(mood)
    if key and key in STYLE_VIBE_KEYWORDS:
        return tuple(STYLE_VIBE_KEYWORDS[key])
    words = re.findall(r"[a-z]+", normalize_text(mood))
    return tuple(w for w in words if len(w) >= 3)


def matches_mood(item: CatalogItem, keywords: Iterable[str]) -> bool:
    keywords = list(keywords)
    if not keywords:
        return True
    haystack = " ".join(
        [item.name, item.category or "", item.sub_category or ""] + list(item.style_tags)
    ).lower()
    return any(k in haystack for k in keywords)


def role_allowed(item: CatalogItem, slot_role: Role, base_role: Role) -> bool:
    if slot_role is Role.ACCESSORY or base_role is Role.OTHER:
        return True
    return classify_item_role(item) is not base_role


# =============================================================================
# Retriever
# =============================================================================

class CandidateRetriever:
    """
    Runs slot queries against a CatalogQuery within a request deadline.

    Each catalog call gets its own single-worker executor, so concurrent
    requests never queue behind each other. On timeout the executor is shut
    down without waiting; the abandoned call finishes on its own thread.
    """

    def __init__(self, catalog: CatalogQuery, pool_size: int = 200):
        self.catalog = catalog
        self.pool_size = pool_size

    def _call(self, fn: Callable[[], Any], deadline: Deadline) -> Any:
        if deadline.expired:
            raise RetrievalError("Request time budget exhausted before catalog call")
        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="outfit-retrieval")
        try:
            future = executor.submit(fn)
            return future.result(timeout=deadline.remaining())
        except FutureTimeoutError as e:
            raise RetrievalError("Catalog query timed out") from e
        except Exception as e:
            raise RetrievalError(f"Catalog query failed: {e}") from e
        finally:
            executor.shutdown(wait=False)

    def catalog_has_rows(self, deadline: Optional[Deadline] = None) -> bool:
        """True when a one-row read of published, in-stock items returns anything."""
        deadline = deadline or Deadline.unbounded()
        return bool(self._call(lambda: self.catalog.query(CatalogFilter(limit=1)), deadline))

    def get_item(self, product_id: str, deadline: Optional[Deadline] = None) -> Optional[CatalogItem]:
        """Base product lookup under the same deadline as slot queries."""
        deadline = deadline or Deadline.unbounded()
        return self._call(lambda: self.catalog.get_item(product_id), deadline)

    def fetch(
        self,
        slot: Slot,
        *,
        gender: Optional[str],
        base_product_id: str,
        excluded_ids: Iterable[str] = (),
        excluded_categories: Iterable[str] = (),
        limit: Optional[int] = None,
        mood: Optional[str] = None,
        vibe: Optional[str] = None,
        base_category: Optional[str] = None,
        base_role: Role = Role.OTHER,
        sample: bool = False,
        rng: Optional[random.Random] = None,
        deadline: Optional[Deadline] = None,
    ) -> List[CatalogItem]:
        """
        Candidates for one slot. Order is not meaningful.

        vibe and base_category narrow the accepted categories (never to
        nothing); mood adds the keyword filter. Omit all three for a
        relaxed fetch.

        A query fetch returns every match unless limit is given. A sample
        fetch draws limit (default pool_size) rows from the catalog.
        """
        deadline = deadline or Deadline.unbounded()
        categories = strict_categories(slot.categories, normalize_vibe(vibe), base_category)

        flt = CatalogFilter(
            categories=categories,
            gender=gender,
            exclude_ids=frozenset(excluded_ids) | {base_product_id},
            exclude_categories=frozenset(normalize_text(c) for c in excluded_categories if c),
            limit=None if sample else limit,
        )

        if sample:
            rng = rng or random.Random()
            size = limit or self.pool_size
            rows = self._call(lambda: self.catalog.sample(flt, size, rng), deadline)
        else:
            rows = self._call(lambda: self.catalog.query(flt), deadline)

        keywords = mood_keywords(mood) if mood else ()
        candidates = [
            item for item in rows
            if item.product_id != base_product_id
            and item.product_id not in flt.exclude_ids
            and role_allowed(item, slot.role, base_role)
            and matches_mood(item, keywords)
        ]
        logger.debug(
            "Slot candidates retrieved",
            role=slot.role.value,
            categories=list(categories),
            fetched=len(rows),
            kept=len(candidates),
        )
        return candidates
